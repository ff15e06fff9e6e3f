import logging
import os
import shutil
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from pathlib import Path

from isoblock.utils.paths import flat_name, is_contained, normalize

logger = logging.getLogger(__name__)


class CopyIOError(Exception):
    """A single copy task failed; the batch carries on."""

    def __init__(self, source: Path, destination: Path, cause: OSError) -> None:
        self.source = source
        self.destination = destination
        self.cause = cause
        super().__init__(f"Failed to copy {source} to {destination}: {cause}")


class SandboxError(Exception):
    pass


@dataclass(frozen=True)
class CopyTask:
    source: Path
    destination: str

    @classmethod
    def from_project(cls, project_root: Path, relative: str) -> "CopyTask":
        """Build a task for *relative*, resolved against *project_root*.

        The destination is the source's path relative to the project root,
        which may start with ``..`` when the source lives outside it.
        """
        root = normalize(project_root)
        source = normalize(root / relative)
        return cls(source=source, destination=os.path.relpath(source, root))


@dataclass
class CopyResult:
    task: CopyTask
    destination: Path
    error: CopyIOError | None = None

    @property
    def success(self) -> bool:
        return self.error is None

    @property
    def message(self) -> str:
        if self.error is not None:
            return str(self.error)
        return f"Copied {self.task.source} to {self.destination}"


@dataclass
class CopyReport:
    results: list[CopyResult] = field(default_factory=list)

    @property
    def copied(self) -> list[CopyResult]:
        return [r for r in self.results if r.success]

    @property
    def failed(self) -> list[CopyResult]:
        return [r for r in self.results if not r.success]

    @property
    def success(self) -> bool:
        return not self.failed


class SandboxedCopier:
    """Copies files into a sandbox tree without ever writing outside of it."""

    def __init__(self, sandbox_root: Path) -> None:
        self.sandbox_root = normalize(sandbox_root)

    def plan(self, relative_destination: str, source: Path) -> Path:
        """Compute where *source* lands inside the sandbox.

        The relative destination is joined onto the sandbox root. If the
        result escapes the root it is flattened to its final segment, and
        re-checked until it is contained.
        """
        relative = relative_destination
        destination = normalize(self.sandbox_root / relative)

        while not is_contained(self.sandbox_root, destination):
            flattened = flat_name(relative, source)
            logger.warning(f"Destination {relative!r} escapes sandbox, flattening to {flattened!r}")
            relative = flattened
            destination = normalize(self.sandbox_root / relative)

        return destination

    def copy(self, task: CopyTask) -> CopyResult:
        destination = self.plan(task.destination, task.source)
        try:
            destination.parent.mkdir(parents=True, exist_ok=True)
            shutil.copyfile(task.source, destination)
        except OSError as e:
            error = CopyIOError(task.source, destination, e)
            logger.error(str(error))
            return CopyResult(task=task, destination=destination, error=error)

        logger.debug(f"Copied {task.source} to {destination}")
        return CopyResult(task=task, destination=destination)

    def copy_all(
        self,
        tasks: Iterable[CopyTask],
        on_result: Callable[[CopyResult], None] | None = None,
    ) -> CopyReport:
        report = CopyReport()
        written: dict[Path, Path] = {}
        for task in tasks:
            result = self.copy(task)
            report.results.append(result)
            if result.success:
                previous = written.get(result.destination)
                if previous is not None and previous != task.source:
                    logger.warning(
                        f"{result.destination} from {previous} was overwritten by {task.source}"
                    )
                written[result.destination] = task.source
            if on_result is not None:
                on_result(result)
        return report

    def reset(self, protected: Iterable[Path] = ()) -> None:
        """Delete everything under the sandbox root, creating it if absent.

        Args:
            protected: Files and directories that must never be wiped, e.g.
                the project root. The sandbox may live inside them but must
                not be one of them or contain them.

        Raises:
            SandboxError: If the sandbox root is unsafe to empty or cannot be
                emptied.
        """
        root = self.sandbox_root
        if root == Path(root.anchor):
            raise SandboxError(f"Refusing to empty filesystem root: {root}")
        for path in protected:
            if is_contained(root, path):
                raise SandboxError(f"Refusing to empty {root}: it contains {normalize(path)}")

        if root.exists() and not root.is_dir():
            raise SandboxError(f"Sandbox path is not a directory: {root}")

        try:
            root.mkdir(parents=True, exist_ok=True)
            for child in root.iterdir():
                if child.is_dir() and not child.is_symlink():
                    shutil.rmtree(child)
                else:
                    child.unlink()
        except OSError as e:
            raise SandboxError(f"Could not empty sandbox {root}: {e}") from e

        logger.info(f"Emptied sandbox {root}")
