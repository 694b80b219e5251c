"""Locate the bundled wkhtmltopdf build and extract it to an executable temp file.

The extracted file is cached for the lifetime of the locator. If something
(a tmp cleaner, usually) deletes it, the next lookup extracts it again.
"""

from __future__ import annotations

import logging
import os
import shutil
import stat
import tempfile
import threading
from pathlib import Path
from typing import BinaryIO, Callable

from wkpdf.errors import BinaryResolutionError
from wkpdf.platforms import (
    BINARY_PREFIX,
    Platform,
    detect_platform,
    open_packaged_resource,
    resource_name,
)
from wkpdf.tempfiles import TempFileRegistry, registry as default_registry

logger = logging.getLogger(__name__)

DEFAULT_CHUNK_SIZE = 1024

ResourceOpener = Callable[[str], BinaryIO]


class BinaryLocator:
    """Process-scoped cache cell for the extracted executable path."""

    def __init__(
        self,
        open_resource: ResourceOpener = open_packaged_resource,
        platform_detector: Callable[[], Platform] = detect_platform,
        *,
        prefix: str = BINARY_PREFIX,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
        temp_dir: str | Path | None = None,
        temp_files: TempFileRegistry = default_registry,
    ):
        if chunk_size <= 0:
            raise ValueError("chunk_size must be positive")
        self._open_resource = open_resource
        self._detect_platform = platform_detector
        self._prefix = prefix
        self._chunk_size = chunk_size
        self._temp_dir = str(temp_dir) if temp_dir is not None else None
        self._temp_files = temp_files
        self._lock = threading.Lock()
        self._path: Path | None = None
        self.extractions = 0

    @property
    def resource_name(self) -> str:
        return resource_name(self._detect_platform(), self._prefix)

    @property
    def cached_path(self) -> Path | None:
        return self._path

    def get_path(self) -> Path:
        """Return the extracted executable, extracting it first if needed."""
        path = self._path
        if path is not None and path.exists():
            return path
        with self._lock:
            if self._path is None or not self._path.exists():
                if self._path is not None:
                    logger.warning("Extracted binary %s disappeared; extracting again", self._path)
                self._path = self._extract()
            return self._path

    def _extract(self) -> Path:
        name = self.resource_name
        fd, tmp_name = tempfile.mkstemp(prefix=self._prefix, suffix=".bin", dir=self._temp_dir)
        path = Path(tmp_name)
        try:
            with os.fdopen(fd, "wb") as dst:
                with self._open_resource(name) as src:
                    shutil.copyfileobj(src, dst, self._chunk_size)
            os.chmod(path, stat.S_IRWXU)
        except OSError as e:
            self._temp_files.release(path)
            raise BinaryResolutionError(f"Could not extract {name}: {e}") from e
        except BaseException:
            self._temp_files.release(path)
            raise

        self._temp_files.track(path)
        self.extractions += 1
        logger.info("Extracted %s to %s", name, path)
        return path

    def close(self) -> None:
        """Delete the extracted executable and forget it."""
        with self._lock:
            if self._path is not None:
                self._temp_files.release(self._path)
                self._path = None
