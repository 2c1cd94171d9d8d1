"""Label-scoped scratch files for a single conversion."""

from __future__ import annotations

import contextlib
import logging
import os
import tempfile
from collections import defaultdict
from pathlib import Path
from typing import Iterator

_LOGGER = logging.getLogger("pdfrenderx")


class TempFileManager:
    """Allocates uniquely named scratch files and releases them per label.

    Files are created with :func:`tempfile.mkstemp`, so names never collide
    with files allocated by other managers or processes sharing the same
    directory. Labels are private to the manager instance.
    """

    def __init__(self, directory: str | os.PathLike[str] | None = None) -> None:
        self._directory = Path(directory) if directory is not None else None
        self._files: dict[str, list[Path]] = defaultdict(list)

    @property
    def directory(self) -> Path:
        return self._directory if self._directory is not None else Path(tempfile.gettempdir())

    def allocate(self, suffix: str, label: str) -> Path:
        """Create an empty file ending in *suffix* and track it under *label*."""

        if self._directory is not None:
            self._directory.mkdir(parents=True, exist_ok=True)
        fd, name = tempfile.mkstemp(suffix=suffix, prefix="pdfrenderx-", dir=self._directory)
        os.close(fd)
        path = Path(name)
        self._files[label].append(path)
        _LOGGER.debug("Allocated temp file %s under label '%s'", path, label)
        return path

    def files(self, label: str) -> tuple[Path, ...]:
        return tuple(self._files.get(label, ()))

    def release_all(self, label: str) -> None:
        """Delete every file allocated under *label*.

        Safe to call repeatedly or for labels that were never used.
        """

        for path in self._files.pop(label, []):
            try:
                path.unlink()
            except FileNotFoundError:
                continue
            _LOGGER.debug("Released temp file %s (label '%s')", path, label)

    @contextlib.contextmanager
    def scoped(self, label: str) -> Iterator["TempFileManager"]:
        """Release *label* when the block exits, whatever the outcome."""

        try:
            yield self
        finally:
            self.release_all(label)


__all__ = ["TempFileManager"]
