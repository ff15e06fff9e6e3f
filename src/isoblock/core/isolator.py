import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path

from isoblock.core.analyzer import CodeAnalyzer
from isoblock.core.config import Config
from isoblock.core.copier import CopyReport, CopyResult, CopyTask, SandboxedCopier, SandboxError
from isoblock.core.sanitizer import DropHook, PathSanitizer

logger = logging.getLogger(__name__)


class SetupError(Exception):
    pass


@dataclass
class IsolationReport:
    dependencies: list[str]
    copy_report: CopyReport = field(default_factory=CopyReport)

    @property
    def copied(self) -> list[CopyResult]:
        return self.copy_report.copied

    @property
    def failed(self) -> list[CopyResult]:
        return self.copy_report.failed


class Isolator:
    """Runs one isolation: empty the sandbox, ask for dependencies, copy them."""

    def __init__(
        self,
        config: Config | None = None,
        analyzer: CodeAnalyzer | None = None,
        copier: SandboxedCopier | None = None,
    ) -> None:
        self.config = config or Config()
        self.analyzer = analyzer or CodeAnalyzer(self.config)
        self.copier = copier or SandboxedCopier(self.config.sandbox_root)
        self.project_root = self.config.project_root_path
        self.code_block_path: Path | None = None

    def load_code_block(self, path: Path | None = None) -> str:
        """Read the code block text.

        Raises:
            SetupError: If the file does not exist.
        """
        path = Path(path or self.config.code_block_file)
        if not path.is_file():
            raise SetupError(f"{path} file not found.")
        self.code_block_path = path
        return path.read_text(encoding="utf-8")

    def resolve_main_file(self, name: str) -> Path:
        path = self.project_root / name
        if not path.is_file():
            raise SetupError(f"Main file {name} does not exist.")
        return path

    async def discover(
        self, code_block: str, main_file: str, on_drop: DropHook | None = None
    ) -> list[str]:
        """Analyze and filter dependencies without touching the sandbox."""
        self.resolve_main_file(main_file)
        return await self._collect(code_block, on_drop)

    async def run(
        self,
        code_block: str,
        main_file: str,
        on_result: Callable[[CopyResult], None] | None = None,
        on_drop: DropHook | None = None,
    ) -> IsolationReport:
        """Isolate *code_block* and *main_file* into the sandbox.

        Raises:
            SetupError: If the sandbox cannot be emptied or the main file is missing.
            AnalyzerError: If the dependency analysis fails.
        """
        try:
            self.copier.reset(protected=self._protected_paths())
        except SandboxError as e:
            raise SetupError(str(e)) from e

        self.resolve_main_file(main_file)
        dependencies = await self._collect(code_block, on_drop)

        tasks = [CopyTask.from_project(self.project_root, dep) for dep in dependencies]
        tasks.append(CopyTask.from_project(self.project_root, main_file))

        logger.info(f"Copying {len(tasks)} file(s) into {self.copier.sandbox_root}")
        report = self.copier.copy_all(tasks, on_result=on_result)
        if report.failed:
            logger.warning(f"{len(report.failed)} of {len(tasks)} copies failed")
        return IsolationReport(dependencies=dependencies, copy_report=report)

    def _protected_paths(self) -> list[Path]:
        """Paths the sandbox reset must never delete."""
        paths = [self.project_root, Path.cwd(), Path(self.config.code_block_file)]
        if self.code_block_path is not None:
            paths.append(self.code_block_path)
        return paths

    async def _collect(self, code_block: str, on_drop: DropHook | None) -> list[str]:
        response = await self.analyzer.analyze(code_block)
        sanitizer = PathSanitizer(
            self.project_root,
            extensions=self.config.allowed_extensions,
            on_drop=on_drop,
        )
        return sanitizer.collect(response)
