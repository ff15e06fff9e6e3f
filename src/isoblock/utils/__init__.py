"""Utility functions and helpers."""

from isoblock.utils.llm import LLMClient, LLMError, LLMRateLimitError
from isoblock.utils.paths import flat_name, is_contained, normalize

__all__ = [
    "LLMClient",
    "LLMError",
    "LLMRateLimitError",
    "normalize",
    "is_contained",
    "flat_name",
]
