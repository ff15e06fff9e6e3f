import os
from pathlib import Path
from typing import Literal

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from isoblock.utils.paths import normalize

# Provider-specific env var names that litellm also recognises
_PROVIDER_ENV_KEYS: dict[str, str] = {
    "openai": "OPENAI_API_KEY",
    "anthropic": "ANTHROPIC_API_KEY",
    "azure": "AZURE_API_KEY",
    "groq": "GROQ_API_KEY",
    "mistral": "MISTRAL_API_KEY",
}

DEFAULT_EXTENSIONS: tuple[str, ...] = (".css", ".js", ".html", ".jpg", ".jpeg", ".png", ".svg")


def find_dotenv(start: Path | None = None) -> Path | None:
    """Walk up from *start* (default: cwd) looking for a .env file.

    Returns the first `.env` path found, or ``None``.
    """
    current = (start or Path.cwd()).resolve()
    for parent in [current, *current.parents]:
        candidate = parent / ".env"
        if candidate.is_file():
            return candidate
    return None


def _read_dotenv_key(key: str, env_path: Path | None = None) -> str:
    """Read a single key from .env without loading everything into os.environ."""
    if env_path is None:
        env_path = find_dotenv()
    if env_path is None or not env_path.exists():
        return ""
    for line in env_path.read_text(encoding="utf-8").splitlines():
        line = line.strip()
        if not line or line.startswith("#") or "=" not in line:
            continue
        k, _, v = line.partition("=")
        if k.strip() == key:
            return v.strip().strip("'\"")
    return ""


class Config(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=find_dotenv() or ".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    llm_provider: str = Field(
        default="openai",
        description="LLM provider (openai, anthropic, azure, etc.)",
    )
    llm_model: str = Field(
        default="gpt-4o",
        description="Model used to analyze code blocks",
    )
    llm_api_key: str = Field(
        default="",
        description="API key for LLM provider",
    )

    @model_validator(mode="after")
    def _resolve_api_key(self) -> "Config":
        """Fall back to provider-specific env vars (e.g. OPENAI_API_KEY) if LLM_API_KEY is empty."""
        if self.llm_api_key:
            return self
        env_var = _PROVIDER_ENV_KEYS.get(self.llm_provider, "")
        if env_var:
            value = os.environ.get(env_var, "") or _read_dotenv_key(env_var, find_dotenv())
            if value:
                self.llm_api_key = value
        return self

    llm_temperature: float = Field(
        default=0.0,
        ge=0.0,
        le=2.0,
        description="Temperature for LLM responses (0.0-2.0)",
    )
    llm_max_tokens: int = Field(
        default=1024,
        gt=0,
        description="Maximum tokens for LLM responses",
    )
    llm_timeout: float = Field(
        default=60.0,
        gt=0,
        description="Timeout in seconds for a single analyzer call",
    )

    project_root: Path = Field(
        default=Path(".."),
        description="Directory that dependency paths and the main file are resolved against",
    )
    sandbox_dir: Path = Field(
        default=Path("isolated_code_block"),
        description="Output directory; emptied at the start of every run",
    )
    code_block_file: Path = Field(
        default=Path("codeblock.txt"),
        description="File holding the code block to analyze",
    )
    allowed_extensions: list[str] = Field(
        default_factory=lambda: list(DEFAULT_EXTENSIONS),
        description="Dependency file extensions accepted from the analyzer",
    )

    @field_validator("allowed_extensions")
    @classmethod
    def _check_extensions(cls, value: list[str]) -> list[str]:
        bad = [ext for ext in value if not ext.startswith(".") or len(ext) < 2]
        if bad:
            raise ValueError(f"Extensions must look like '.ext': {', '.join(bad)}")
        return value

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO",
        description="Logging level",
    )
    log_file: Path | None = Field(
        default=None,
        description="Optional log file path",
    )

    @property
    def sandbox_root(self) -> Path:
        """Absolute, normalized sandbox directory."""
        return normalize(self.sandbox_dir)

    @property
    def project_root_path(self) -> Path:
        """Absolute, normalized project root."""
        return normalize(self.project_root)

    def model_post_init(self, __context: object) -> None:
        if self.log_file:
            self.log_file.parent.mkdir(parents=True, exist_ok=True)
