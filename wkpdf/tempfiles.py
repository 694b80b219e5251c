"""Temp files that are removed at interpreter exit if nobody removed them first."""

from __future__ import annotations

import atexit
import logging
import threading
from pathlib import Path

logger = logging.getLogger(__name__)


def remove_quietly(path: Path) -> None:
    """Best-effort unlink; a file that is already gone is fine."""
    try:
        path.unlink(missing_ok=True)
    except OSError as e:
        logger.debug("Could not remove %s: %s", path, e)


class TempFileRegistry:
    """Tracks temp files so a single atexit hook can sweep leftovers."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._paths: set[Path] = set()

    def track(self, path: Path) -> Path:
        with self._lock:
            self._paths.add(path)
        return path

    def release(self, path: Path) -> None:
        """Delete *path* now and stop tracking it."""
        with self._lock:
            self._paths.discard(path)
        remove_quietly(path)

    def __contains__(self, path: object) -> bool:
        with self._lock:
            return path in self._paths

    def cleanup(self) -> None:
        with self._lock:
            paths, self._paths = self._paths, set()
        for path in paths:
            remove_quietly(path)


registry = TempFileRegistry()
atexit.register(registry.cleanup)
