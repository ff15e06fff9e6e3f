"""Shared fixtures for isoblock tests."""

from pathlib import Path
from unittest.mock import AsyncMock

import pytest

from isoblock.core.analyzer import CodeAnalyzer
from isoblock.core.config import Config

SAMPLE_CODE_BLOCK = """\
<link rel="stylesheet" href="./assets/css/style.css">
<script src="./assets/js/main.js"></script>
<script src="../scripts/util.js"></script>
<img src="assets/images/logo.png">
"""

SAMPLE_RESPONSE = """\
./assets/css/style.css
./assets/js/main.js
../scripts/util.js
assets/images/logo.png
./assets/js/missing.js
./notes/readme.txt
"""


@pytest.fixture
def workspace(tmp_path: Path) -> Path:
    """A project tree with a sibling directory outside the project root.

    tmp_path/
        project/index.html, assets/css/style.css, assets/js/main.js,
                assets/images/logo.png, notes/readme.txt
        scripts/util.js
    """
    project = tmp_path / "project"
    (project / "assets" / "css").mkdir(parents=True)
    (project / "assets" / "js").mkdir()
    (project / "assets" / "images").mkdir()
    (project / "notes").mkdir()
    (tmp_path / "scripts").mkdir()

    (project / "index.html").write_text("<html></html>\n")
    (project / "assets" / "css" / "style.css").write_text("body { margin: 0; }\n")
    (project / "assets" / "js" / "main.js").write_text("console.log('main');\n")
    (project / "assets" / "images" / "logo.png").write_bytes(b"\x89PNG\r\n\x1a\n")
    (project / "notes" / "readme.txt").write_text("not an asset\n")
    (tmp_path / "scripts" / "util.js").write_text("export const util = 1;\n")
    (tmp_path / "codeblock.txt").write_text(SAMPLE_CODE_BLOCK)
    return tmp_path


@pytest.fixture
def project_root(workspace: Path) -> Path:
    return workspace / "project"


@pytest.fixture
def sandbox(workspace: Path) -> Path:
    return workspace / "isolated_code_block"


@pytest.fixture
def config(project_root: Path, sandbox: Path, workspace: Path) -> Config:
    return Config(
        _env_file=None,  # type: ignore[call-arg]
        llm_api_key="test-key",
        project_root=project_root,
        sandbox_dir=sandbox,
        code_block_file=workspace / "codeblock.txt",
    )


@pytest.fixture
def fake_analyzer(config: Config) -> CodeAnalyzer:
    """CodeAnalyzer whose analyze() returns SAMPLE_RESPONSE without a network call."""
    analyzer = CodeAnalyzer(config=config)
    analyzer.analyze = AsyncMock(return_value=SAMPLE_RESPONSE)  # type: ignore[method-assign]
    return analyzer
