"""Validation helpers for :mod:`pdfrenderx` output and environment."""

from __future__ import annotations

import dataclasses
import logging
import os
from pathlib import Path

from pypdf import PdfReader
from pypdf.errors import DependencyError, PdfReadError

from .config import TOOLS, Settings
from .exceptions import InvalidPDFError
from .utils import resolve_path, which

_LOGGER = logging.getLogger("pdfrenderx")

PDF_MAGIC = b"%PDF-"


@dataclasses.dataclass
class PDFInfo:
    """
    Summary of a produced PDF.

    Attributes:
        file_size: File size in bytes
        num_pages: Number of pages, ``None`` if the document could not be decrypted
        is_encrypted: Whether the PDF is encrypted
        title: PDF title metadata
        author: PDF author metadata
        subject: PDF subject metadata
        keywords: PDF keywords metadata
    """
    file_size: int
    num_pages: int | None
    is_encrypted: bool = False
    title: str | None = None
    author: str | None = None
    subject: str | None = None
    keywords: str | None = None


def has_pdf_signature(path: str | os.PathLike[str]) -> bool:
    """Return ``True`` when the file at *path* starts with ``%PDF-``."""

    with Path(path).open("rb") as handle:
        return handle.read(len(PDF_MAGIC)) == PDF_MAGIC


def _open(pdf_path: Path, password: str | None) -> tuple[PdfReader, bool]:
    """Parse *pdf_path*; the flag tells whether its content is readable."""

    try:
        reader = PdfReader(str(pdf_path))
    except (PdfReadError, ValueError, OSError) as exc:
        raise InvalidPDFError(f"Failed to parse PDF: {exc}") from exc

    if not reader.is_encrypted:
        return reader, True
    try:
        return reader, bool(reader.decrypt(password or ""))
    except DependencyError as exc:
        _LOGGER.debug("Cannot decrypt %s: %s", pdf_path, exc)
        return reader, False


def validate_pdf(path: str | os.PathLike[str], *, password: str | None = None) -> None:
    """Validate the PDF at *path*.

    Checks the ``%PDF-`` signature, parses the document with :mod:`pypdf`
    and, when the content is readable, makes sure it has at least one page.
    """

    pdf_path = resolve_path(path)
    _LOGGER.debug("Validating PDF at %s", pdf_path)

    if not pdf_path.is_file():
        raise InvalidPDFError(f"File not found: {pdf_path}")
    if not has_pdf_signature(pdf_path):
        raise InvalidPDFError(f"Missing PDF signature: {pdf_path}")

    reader, unlocked = _open(pdf_path, password)
    if not unlocked:
        return
    try:
        if len(reader.pages) == 0:
            raise InvalidPDFError("PDF contains no pages")
    except PdfReadError as exc:
        raise InvalidPDFError(f"Failed to parse PDF: {exc}") from exc


def get_pdf_info(path: str | os.PathLike[str], *, password: str | None = None) -> PDFInfo:
    """Return :class:`PDFInfo` for the PDF located at *path*."""

    pdf_path = resolve_path(path)
    if not pdf_path.is_file():
        raise InvalidPDFError(f"File not found: {pdf_path}")

    reader, unlocked = _open(pdf_path, password)
    info = PDFInfo(file_size=pdf_path.stat().st_size, num_pages=None, is_encrypted=reader.is_encrypted)
    if not unlocked:
        return info

    info.num_pages = len(reader.pages)
    metadata = reader.metadata
    if metadata:
        info.title = metadata.get("/Title")
        info.author = metadata.get("/Author")
        info.subject = metadata.get("/Subject")
        info.keywords = metadata.get("/Keywords")
    return info


def detect_tools(settings: Settings) -> dict[str, str | None]:
    """Map each tool name to the resolved executable, or ``None`` if missing."""

    return {tool: which((settings.executable(tool),)) for tool in TOOLS}


__all__ = ["PDFInfo", "PDF_MAGIC", "has_pdf_signature", "validate_pdf", "get_pdf_info", "detect_tools"]
