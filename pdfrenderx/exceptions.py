"""
Custom exceptions for pdfrenderx.

Every exception carries a flat ``kind`` string that identifies the failure
(``invalid_wkhtmltopdf``, ``invalid_pdf``, ``enoent`` and so on). The
result-returning API reports this string, the raising API uses it as the
exception message.
"""

from __future__ import annotations

import errno


IO_ERROR = "io_error"
INVALID_PDF = "invalid_pdf"
ENCODING_ERROR = "encoding_error"


def tool_error_kind(command: str) -> str:
    """Return the error kind reported when *command* fails."""

    return f"invalid_{command}"


def os_error_kind(exc: OSError) -> str:
    """Map *exc* to the lower-case POSIX name of its errno (``enoent``)."""

    if exc.errno is not None and exc.errno in errno.errorcode:
        return errno.errorcode[exc.errno].lower()
    return IO_ERROR


class PDFRenderXError(Exception):
    """Base exception for all pdfrenderx errors."""

    kind = "pdfrenderx_error"

    def __init__(self, message: str = "") -> None:
        super().__init__(message or self.default_message)
        self.message = message or self.default_message

    @property
    def default_message(self) -> str:
        return "An unknown pdfrenderx error occurred."


class ToolInvocationError(PDFRenderXError):
    """Raised when an external tool exits non-zero or cannot be launched."""

    def __init__(
        self,
        command: str,
        returncode: int | None = None,
        output: str = "",
        message: str = "",
    ) -> None:
        self.command = command
        self.returncode = returncode
        self.output = output
        self.kind = tool_error_kind(command)
        super().__init__(message)

    @property
    def default_message(self) -> str:
        if self.returncode is None:
            return f"Failed to launch {self.command}."
        return f"{self.command} exited with code {self.returncode}."


class InvalidPDFError(PDFRenderXError):
    """Raised when the produced file is not a readable PDF."""

    kind = INVALID_PDF

    @property
    def default_message(self) -> str:
        return "Invalid or corrupted PDF file."


class ConversionError(PDFRenderXError):
    """Raised by the ``*_or_raise`` entry points; the message is the error kind."""

    def __init__(self, kind: str) -> None:
        self.kind = kind
        super().__init__(kind)
