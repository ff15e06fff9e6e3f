import logging
import re
from collections.abc import Callable, Iterable
from pathlib import Path

from isoblock.core.config import DEFAULT_EXTENSIONS
from isoblock.utils.paths import normalize

logger = logging.getLogger(__name__)

ALLOWED_EXTENSIONS = DEFAULT_EXTENSIONS

_ILLEGAL_CHARS = re.compile(r'[<>:"|?*`]')
_SIMPLE_SEGMENT = re.compile(r"[\w\-/\\]+(\.\w+)?", re.ASCII)

DropHook = Callable[[str, str], None]


def sanitize(raw: str) -> str:
    """Strip characters that are illegal in paths, then surrounding whitespace."""
    return _ILLEGAL_CHARS.sub("", raw).strip()


def is_valid_candidate(p: str, extensions: Iterable[str] = ALLOWED_EXTENSIONS) -> bool:
    """Check that *p* looks like a relative asset path with an allowed extension.

    This is a string check only; the filesystem is not consulted.
    """
    if not p:
        return False
    looks_relative = (
        p.startswith("./") or p.startswith("../") or _SIMPLE_SEGMENT.fullmatch(p) is not None
    )
    return looks_relative and p.endswith(tuple(extensions))


class PathSanitizer:
    """Turns an analyzer response into the list of dependency paths worth copying.

    Lines that fail sanitization, shape, extension or existence checks are
    dropped without raising. Pass ``on_drop`` to observe them.
    """

    def __init__(
        self,
        project_root: Path,
        extensions: Iterable[str] = ALLOWED_EXTENSIONS,
        on_drop: DropHook | None = None,
    ) -> None:
        self.project_root = Path(project_root)
        self.extensions = tuple(extensions)
        self.on_drop = on_drop

    def collect(self, response_text: str) -> list[str]:
        accepted: list[str] = []
        seen: set[Path] = set()

        for line in response_text.splitlines():
            candidate = sanitize(line)
            if not candidate:
                continue
            if not is_valid_candidate(candidate, self.extensions):
                self._drop(candidate, "invalid")
                continue
            if not self._exists(candidate):
                self._drop(candidate, "missing")
                continue
            key = normalize(self.project_root / candidate)
            if key in seen:
                self._drop(candidate, "duplicate")
                continue
            seen.add(key)
            accepted.append(candidate)

        logger.info(f"Accepted {len(accepted)} dependency path(s)")
        return accepted

    def _exists(self, candidate: str) -> bool:
        try:
            return (self.project_root / candidate).is_file()
        except OSError:
            return False

    def _drop(self, candidate: str, reason: str) -> None:
        logger.debug(f"Dropped candidate {candidate!r}: {reason}")
        if self.on_drop is not None:
            self.on_drop(candidate, reason)
