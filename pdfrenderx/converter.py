"""HTML to PDF conversion pipeline.

A conversion runs three external tools one after another on a scratch copy
of the document:

1. ``wkhtmltopdf`` renders the HTML into an intermediate PDF.
2. ``exiftool`` wipes every metadata tag, then writes the requested ones.
3. ``qpdf`` linearizes the document, encrypting it when security options are
   given, and writes the final artifact.

The first failing step ends the conversion. Intermediate files (label
``pdf``) are removed on every path. The final file (label ``pdf_result``) is
only allocated when no ``output`` option is given; a successful
:meth:`Converter.to_file` leaves it in place for the caller while
:meth:`Converter.to_binary` reads it and removes it.
"""

from __future__ import annotations

import errno
import logging
import os
from pathlib import Path
from typing import Any, Iterable, Mapping, Tuple, Union

from .config import EXIFTOOL, QPDF, WKHTMLTOPDF, Settings, get_settings
from .exceptions import ENCODING_ERROR, PDFRenderXError, os_error_kind
from .options import METADATA_CLEAR_ARGS, metadata_args, render_args, security_args
from .runner import run_tool
from .tempfiles import TempFileManager
from .types import ConversionResult, FromFile, FromHtml, Input
from .validators import validate_pdf

_LOGGER = logging.getLogger("pdfrenderx")

PDF_LABEL = "pdf"
RESULT_LABEL = "pdf_result"

OptionsArg = Union[Mapping[str, Any], Iterable[Tuple[str, Any]], None]


def _merge_options(options: OptionsArg, overrides: Mapping[str, Any]) -> dict[str, Any]:
    merged = dict(options or {})
    merged.update(overrides)
    return merged


def _existing_file(path: Path | str) -> Path:
    source = Path(path)
    if not source.is_file():
        raise FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), str(source))
    if not os.access(source, os.R_OK):
        raise PermissionError(errno.EACCES, os.strerror(errno.EACCES), str(source))
    return source


class Converter:
    """Runs conversions with one set of :class:`~pdfrenderx.config.Settings`.

    Every call gets its own :class:`TempFileManager`, so concurrent calls on
    the same converter never release each other's files.
    """

    def __init__(self, settings: Settings | None = None) -> None:
        self.settings = settings if settings is not None else get_settings()

    # Public API

    def to_file(
        self,
        data: Input,
        options: OptionsArg = None,
        *,
        validate: bool = False,
        **kwargs: Any,
    ) -> ConversionResult[Path]:
        """Convert *data* and return the path of the final PDF.

        Options may be given as a mapping, as keyword arguments, or both
        (keyword arguments win). Supported options:

        * ``author``, ``keywords``, ``subject``, ``title``: document metadata.
        * ``dpi``, ``margin``, ``orientation``, ``page_height``,
          ``page_size``, ``page_width``: rendering.
        * ``password``, ``edit_password``, ``modify`` (default ``annotate``),
          ``print`` (default ``full``): encryption. Without any of them the
          PDF is not encrypted.
        * ``output``: destination path. Without it a temporary file is
          created and returned; it is not removed afterwards.

        Unknown options are ignored. Failures are reported through the
        result's ``error`` kind instead of being raised.
        """

        opts = _merge_options(options, kwargs)
        temp = self._new_temp()
        result = self._run(data, opts, temp, validate)
        if not result.success:
            temp.release_all(RESULT_LABEL)
        return result

    def to_binary(
        self,
        data: Input,
        options: OptionsArg = None,
        *,
        validate: bool = False,
        **kwargs: Any,
    ) -> ConversionResult[bytes]:
        """Convert *data* and return the PDF bytes.

        Takes the same options as :meth:`to_file` except ``output``, which is
        ignored. No file is left behind, whether the conversion succeeds or
        not.
        """

        opts = _merge_options(options, kwargs)
        opts.pop("output", None)
        temp = self._new_temp()
        with temp.scoped(RESULT_LABEL):
            result = self._run(data, opts, temp, validate)
            if not result.success:
                return ConversionResult.failed(str(result.error))
            try:
                content = Path(result.value).read_bytes()  # type: ignore[arg-type]
            except OSError as exc:
                return ConversionResult.failed(os_error_kind(exc))
        return ConversionResult.ok(content)

    def to_file_or_raise(self, data: Input, options: OptionsArg = None, **kwargs: Any) -> Path:
        """Like :meth:`to_file` but raise :class:`ConversionError` on failure."""

        return self.to_file(data, options, **kwargs).unwrap()

    def to_binary_or_raise(self, data: Input, options: OptionsArg = None, **kwargs: Any) -> bytes:
        """Like :meth:`to_binary` but raise :class:`ConversionError` on failure."""

        return self.to_binary(data, options, **kwargs).unwrap()

    # Pipeline

    def _new_temp(self) -> TempFileManager:
        return TempFileManager(self.settings.temp_dir)

    def _run(
        self,
        data: Input,
        options: dict[str, Any],
        temp: TempFileManager,
        validate: bool,
    ) -> ConversionResult[Path]:
        try:
            with temp.scoped(PDF_LABEL):
                path = self._convert(data, options, temp, validate)
        except PDFRenderXError as exc:
            _LOGGER.debug("Conversion failed: %s", exc)
            return ConversionResult.failed(exc.kind)
        except OSError as exc:
            _LOGGER.debug("Conversion failed with I/O error: %s", exc)
            return ConversionResult.failed(os_error_kind(exc))
        except UnicodeError as exc:
            _LOGGER.debug("Conversion failed, HTML is not encodable: %s", exc)
            return ConversionResult.failed(ENCODING_ERROR)
        _LOGGER.info("Converted HTML into %s", path)
        return ConversionResult.ok(path)

    def _convert(
        self,
        data: Input,
        options: dict[str, Any],
        temp: TempFileManager,
        validate: bool,
    ) -> Path:
        source = self._normalize(data, temp)

        rendered = temp.allocate(".pdf", PDF_LABEL)
        self._tool(WKHTMLTOPDF, [*render_args(options), str(source), str(rendered)])

        self._tool(EXIFTOOL, [*METADATA_CLEAR_ARGS, str(rendered)])
        self._tool(EXIFTOOL, [*metadata_args(options), str(rendered)])

        destination = self._destination(options, temp)
        self._tool(QPDF, [*security_args(options), str(rendered), str(destination)])

        if validate:
            validate_pdf(destination, password=options.get("password"))
        return destination

    def _normalize(self, data: Input, temp: TempFileManager) -> Path:
        if isinstance(data, FromFile):
            return _existing_file(data.path)
        if isinstance(data, Path):
            return _existing_file(data)
        if isinstance(data, FromHtml):
            html = data.content
        elif isinstance(data, str):
            html = data
        else:
            raise TypeError(f"Unsupported input type: {type(data).__name__}")

        source = temp.allocate(".html", PDF_LABEL)
        source.write_text(html, encoding="utf-8")
        return source

    def _destination(self, options: Mapping[str, Any], temp: TempFileManager) -> Path:
        output = options.get("output")
        if output is None:
            return temp.allocate(".pdf", RESULT_LABEL)
        return Path(output)

    def _tool(self, command: str, args: list[str]) -> None:
        run_tool(command, args, executable=self.settings.executable(command)).check()


def to_file(
    data: Input,
    options: OptionsArg = None,
    *,
    settings: Settings | None = None,
    validate: bool = False,
    **kwargs: Any,
) -> ConversionResult[Path]:
    """Convert *data* into a PDF file. See :meth:`Converter.to_file`."""

    return Converter(settings).to_file(data, options, validate=validate, **kwargs)


def to_binary(
    data: Input,
    options: OptionsArg = None,
    *,
    settings: Settings | None = None,
    validate: bool = False,
    **kwargs: Any,
) -> ConversionResult[bytes]:
    """Convert *data* into PDF bytes. See :meth:`Converter.to_binary`."""

    return Converter(settings).to_binary(data, options, validate=validate, **kwargs)


def to_file_or_raise(
    data: Input,
    options: OptionsArg = None,
    *,
    settings: Settings | None = None,
    **kwargs: Any,
) -> Path:
    """Convert *data* into a PDF file, raising :class:`ConversionError` on failure."""

    return Converter(settings).to_file_or_raise(data, options, **kwargs)


def to_binary_or_raise(
    data: Input,
    options: OptionsArg = None,
    *,
    settings: Settings | None = None,
    **kwargs: Any,
) -> bytes:
    """Convert *data* into PDF bytes, raising :class:`ConversionError` on failure."""

    return Converter(settings).to_binary_or_raise(data, options, **kwargs)


__all__ = [
    "Converter",
    "PDF_LABEL",
    "RESULT_LABEL",
    "to_file",
    "to_binary",
    "to_file_or_raise",
    "to_binary_or_raise",
]
