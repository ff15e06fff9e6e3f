from pathlib import Path

import pytest
from pydantic import ValidationError

from isoblock.core.config import DEFAULT_EXTENSIONS, Config


def test_config_default_values(monkeypatch: pytest.MonkeyPatch) -> None:
    """Test that config loads with default values."""
    monkeypatch.delenv("OPENAI_API_KEY", raising=False)
    config = Config(_env_file=None)  # type: ignore[call-arg]
    assert config.llm_provider == "openai"
    assert config.llm_model == "gpt-4o"
    assert config.project_root == Path("..")
    assert config.sandbox_dir == Path("isolated_code_block")
    assert config.code_block_file == Path("codeblock.txt")
    assert tuple(config.allowed_extensions) == DEFAULT_EXTENSIONS
    assert config.log_level == "INFO"


def test_config_loads_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("LLM_MODEL", "gpt-4o-mini")
    monkeypatch.setenv("SANDBOX_DIR", "/tmp/out")
    monkeypatch.setenv("LOG_LEVEL", "DEBUG")

    config = Config(_env_file=None)  # type: ignore[call-arg]
    assert config.llm_model == "gpt-4o-mini"
    assert config.sandbox_dir == Path("/tmp/out")
    assert config.log_level == "DEBUG"


def test_config_falls_back_to_provider_key(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("LLM_API_KEY", raising=False)
    monkeypatch.setenv("OPENAI_API_KEY", "sk-from-env")
    config = Config(_env_file=None)  # type: ignore[call-arg]
    assert config.llm_api_key == "sk-from-env"


def test_config_with_env_file(tmp_path: Path) -> None:
    env_file = tmp_path / ".env"
    env_file.write_text("LLM_PROVIDER=anthropic\nPROJECT_ROOT=/srv/site\n")

    config = Config(_env_file=env_file)  # type: ignore[call-arg]
    assert config.llm_provider == "anthropic"
    assert config.project_root == Path("/srv/site")


def test_config_resolved_paths(tmp_path: Path) -> None:
    config = Config(
        _env_file=None,  # type: ignore[call-arg]
        project_root=tmp_path / "site" / "..",
        sandbox_dir=tmp_path / "out" / ".",
    )
    assert config.project_root_path == tmp_path
    assert config.sandbox_root == tmp_path / "out"


def test_config_rejects_bad_extensions() -> None:
    with pytest.raises(ValidationError):
        Config(_env_file=None, allowed_extensions=["css"])  # type: ignore[call-arg]


def test_config_creates_log_dir(tmp_path: Path) -> None:
    log_file = tmp_path / "logs" / "isoblock.log"
    Config(_env_file=None, log_file=log_file)  # type: ignore[call-arg]
    assert log_file.parent.is_dir()
