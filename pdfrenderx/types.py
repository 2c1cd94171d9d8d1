"""
Type definitions and dataclasses for pdfrenderx.

This module defines the input variants accepted by the converter, the
permission enums understood by qpdf and the result object returned by the
non-raising entry points.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Generic, TypeVar, Union

from .exceptions import ConversionError

T = TypeVar("T")


@dataclass(frozen=True)
class FromFile:
    """HTML read from an existing file on disk."""

    path: Path | str


@dataclass(frozen=True)
class FromHtml:
    """HTML given inline as a string."""

    content: str


Input = Union[FromFile, FromHtml, Path, str]


class ModifyPermission(str, Enum):
    """Allowed level of modification for an encrypted PDF."""

    ALL = "all"
    ANNOTATE = "annotate"
    FORM = "form"
    ASSEMBLY = "assembly"
    NONE = "none"


class PrintPermission(str, Enum):
    """Allowed level of printing for an encrypted PDF."""

    FULL = "full"
    LOW = "low"
    NONE = "none"


class Orientation(str, Enum):
    PORTRAIT = "portrait"
    LANDSCAPE = "landscape"


@dataclass
class ConversionResult(Generic[T]):
    """
    Result of a conversion.

    Attributes:
        success: Whether the conversion succeeded
        value: Final PDF path (``to_file``) or its bytes (``to_binary``)
        error: Error kind if the conversion failed
    """
    success: bool
    value: T | None = None
    error: str | None = None

    @classmethod
    def ok(cls, value: T) -> "ConversionResult[T]":
        return cls(success=True, value=value)

    @classmethod
    def failed(cls, error: str) -> "ConversionResult[T]":
        return cls(success=False, error=error)

    def unwrap(self) -> T:
        """Return the value or raise :class:`ConversionError` with the error kind."""
        if not self.success:
            raise ConversionError(str(self.error))
        return self.value  # type: ignore[return-value]

    def __bool__(self) -> bool:
        return self.success

    def __str__(self) -> str:
        if self.success:
            return f"ConversionResult(success=True, value={self.value!r:.60})"
        return f"ConversionResult(success=False, error='{self.error}')"
