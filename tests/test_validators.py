from __future__ import annotations

from pathlib import Path

import pytest
from pypdf import PdfWriter

from pdfrenderx.config import Settings
from pdfrenderx.exceptions import InvalidPDFError
from pdfrenderx.validators import detect_tools, get_pdf_info, has_pdf_signature, validate_pdf


def test_validate_pdf_accepts_sample(sample_pdf: Path) -> None:
    validate_pdf(sample_pdf)


def test_validate_pdf_rejects_missing_file(tmp_path: Path) -> None:
    with pytest.raises(InvalidPDFError, match="not found"):
        validate_pdf(tmp_path / "missing.pdf")


def test_validate_pdf_rejects_non_pdf(tmp_path: Path) -> None:
    bogus = tmp_path / "not.pdf"
    bogus.write_text("not a pdf")

    assert not has_pdf_signature(bogus)
    with pytest.raises(InvalidPDFError):
        validate_pdf(bogus)


def test_validate_pdf_rejects_empty_document(tmp_path: Path) -> None:
    path = tmp_path / "empty.pdf"
    with path.open("wb") as stream:
        PdfWriter().write(stream)

    with pytest.raises(InvalidPDFError, match="no pages"):
        validate_pdf(path)


def test_get_pdf_info_reads_metadata(tmp_path: Path) -> None:
    path = tmp_path / "meta.pdf"
    writer = PdfWriter()
    writer.add_blank_page(width=200, height=200)
    writer.add_blank_page(width=200, height=200)
    writer.add_metadata({"/Title": "Report", "/Author": "Jane", "/Keywords": "a b"})
    with path.open("wb") as stream:
        writer.write(stream)

    info = get_pdf_info(path)

    assert info.num_pages == 2
    assert info.file_size == path.stat().st_size
    assert not info.is_encrypted
    assert info.title == "Report"
    assert info.author == "Jane"
    assert info.keywords == "a b"


def test_detect_tools_reports_missing_executables() -> None:
    settings = Settings(
        wkhtmltopdf="no-such-wkhtmltopdf",
        exiftool="no-such-exiftool",
        qpdf="no-such-qpdf",
    )
    assert detect_tools(settings) == {"wkhtmltopdf": None, "exiftool": None, "qpdf": None}
