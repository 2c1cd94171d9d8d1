"""
pdfrenderx - Turn HTML into PDF with wkhtmltopdf, exiftool and qpdf.

Quick Start:
    >>> from pdfrenderx import FromFile, to_file, to_binary_or_raise
    >>> result = to_file("<h1>Hello</h1>", title="Greeting")
    >>> result.value
    PosixPath('/tmp/pdfrenderx-....pdf')
    >>> data = to_binary_or_raise(FromFile("page.html"), password="secret")

Inputs:
    - FromFile: read HTML from a file (a ``pathlib.Path`` works too)
    - FromHtml: inline HTML (a plain ``str`` works too)

Entry points:
    - to_file / to_binary: return a ConversionResult, never raise for
      conversion failures
    - to_file_or_raise / to_binary_or_raise: return the value or raise
      ConversionError carrying the error kind

For CLI usage, use the 'pdfrenderx' command after installation.
"""

from pdfrenderx.config import Settings, get_settings
from pdfrenderx.converter import (
    Converter,
    to_binary,
    to_binary_or_raise,
    to_file,
    to_file_or_raise,
)
from pdfrenderx.exceptions import (
    ConversionError,
    InvalidPDFError,
    PDFRenderXError,
    ToolInvocationError,
)
from pdfrenderx.options import metadata_args, render_args, security_args
from pdfrenderx.runner import CommandResult, run_tool
from pdfrenderx.tempfiles import TempFileManager
from pdfrenderx.types import (
    ConversionResult,
    FromFile,
    FromHtml,
    ModifyPermission,
    Orientation,
    PrintPermission,
)
from pdfrenderx.validators import PDFInfo, get_pdf_info, validate_pdf

__version__ = "0.1.0"
__license__ = "MIT"

__all__ = [
    # Conversion
    "Converter",
    "to_file",
    "to_binary",
    "to_file_or_raise",
    "to_binary_or_raise",
    # Data types
    "FromFile",
    "FromHtml",
    "ConversionResult",
    "ModifyPermission",
    "PrintPermission",
    "Orientation",
    "PDFInfo",
    # Building blocks
    "Settings",
    "get_settings",
    "TempFileManager",
    "CommandResult",
    "run_tool",
    "render_args",
    "metadata_args",
    "security_args",
    "validate_pdf",
    "get_pdf_info",
    # Exceptions
    "PDFRenderXError",
    "ToolInvocationError",
    "InvalidPDFError",
    "ConversionError",
    # Version info
    "__version__",
]
