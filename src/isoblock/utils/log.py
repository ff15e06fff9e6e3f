"""Logging setup for the command line entry point."""

import logging
from pathlib import Path

from rich.console import Console
from rich.logging import RichHandler

_FILE_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(level: str = "INFO", log_file: Path | None = None) -> None:
    """Route log records to stderr through rich, and optionally to *log_file*."""
    handlers: list[logging.Handler] = [
        RichHandler(console=Console(stderr=True), show_path=False, markup=False)
    ]
    if log_file is not None:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setFormatter(logging.Formatter(_FILE_FORMAT))
        handlers.append(file_handler)

    logging.basicConfig(level=level, format="%(message)s", handlers=handlers, force=True)
    # litellm is chatty at INFO
    logging.getLogger("LiteLLM").setLevel(max(logging.getLevelName(level), logging.WARNING))
