"""Runtime configuration for :mod:`pdfrenderx`."""

from __future__ import annotations

import dataclasses
import os
import tempfile
from functools import lru_cache
from pathlib import Path

WKHTMLTOPDF = "wkhtmltopdf"
EXIFTOOL = "exiftool"
QPDF = "qpdf"

TOOLS = (WKHTMLTOPDF, EXIFTOOL, QPDF)

ENV_PREFIX = "PDFRENDERX_"


@dataclasses.dataclass(frozen=True)
class Settings:
    """Executables and scratch directory used by a conversion.

    Executables default to their bare names and are resolved through
    ``PATH`` when launched.
    """

    wkhtmltopdf: str = WKHTMLTOPDF
    exiftool: str = EXIFTOOL
    qpdf: str = QPDF
    temp_dir: Path = dataclasses.field(default_factory=lambda: Path(tempfile.gettempdir()))

    def executable(self, tool: str) -> str:
        """Return the configured executable for the logical *tool* name."""

        if tool not in TOOLS:
            raise ValueError(f"Unknown tool: {tool}")
        return getattr(self, tool)

    @classmethod
    def from_env(cls) -> "Settings":
        """Build settings, taking overrides from ``PDFRENDERX_*`` variables."""

        overrides: dict[str, object] = {}
        for tool in TOOLS:
            value = os.environ.get(f"{ENV_PREFIX}{tool.upper()}")
            if value:
                overrides[tool] = value
        temp_dir = os.environ.get(f"{ENV_PREFIX}TEMP_DIR")
        if temp_dir:
            overrides["temp_dir"] = Path(temp_dir).expanduser()
        return cls(**overrides)  # type: ignore[arg-type]


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return a cached :class:`Settings` built from the environment.

    Call ``get_settings.cache_clear()`` in tests to reset.
    """

    return Settings.from_env()


__all__ = ["Settings", "get_settings", "TOOLS", "WKHTMLTOPDF", "EXIFTOOL", "QPDF"]
