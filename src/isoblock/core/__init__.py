"""Core isolation pipeline: sanitize, analyze, copy."""

from isoblock.core.analyzer import AnalyzerError, CodeAnalyzer
from isoblock.core.config import Config
from isoblock.core.copier import (
    CopyIOError,
    CopyReport,
    CopyResult,
    CopyTask,
    SandboxedCopier,
    SandboxError,
)
from isoblock.core.isolator import IsolationReport, Isolator, SetupError
from isoblock.core.sanitizer import PathSanitizer, is_valid_candidate, sanitize

__all__ = [
    "Config",
    "CodeAnalyzer",
    "AnalyzerError",
    "PathSanitizer",
    "sanitize",
    "is_valid_candidate",
    "SandboxedCopier",
    "CopyTask",
    "CopyResult",
    "CopyReport",
    "CopyIOError",
    "SandboxError",
    "Isolator",
    "IsolationReport",
    "SetupError",
]
