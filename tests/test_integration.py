"""
End-to-end conversions against the real wkhtmltopdf, exiftool and qpdf.

Skipped unless all three tools are installed.
"""

from __future__ import annotations

import shutil
from pathlib import Path

import pytest
from pypdf import PdfReader

from pdfrenderx import FromFile, Settings, get_pdf_info, to_binary, to_file

pytestmark = pytest.mark.skipif(
    not all(shutil.which(tool) for tool in ("wkhtmltopdf", "exiftool", "qpdf")),
    reason="wkhtmltopdf, exiftool and qpdf are required",
)

HTML = "<html><head><title>t</title></head><body><h1>Integration</h1></body></html>"


def test_to_file_output_is_pdf(settings: Settings) -> None:
    result = to_file(HTML, settings=settings, validate=True)

    assert result.success, result.error
    assert result.value.read_bytes().startswith(b"%PDF-")


def test_metadata_is_written(settings: Settings, tmp_path: Path) -> None:
    output = tmp_path / "meta.pdf"

    result = to_file(HTML, settings=settings, output=str(output), title="Report", author="Jane")

    assert result.success, result.error
    info = get_pdf_info(output)
    assert info.title == "Report"
    assert info.author == "Jane"


def test_file_and_inline_inputs_render_the_same_pages(settings: Settings, tmp_path: Path) -> None:
    source = tmp_path / "page.html"
    source.write_text(HTML, encoding="utf-8")

    from_file = to_file(FromFile(source), settings=settings, output=str(tmp_path / "a.pdf"))
    inline = to_file(HTML, settings=settings, output=str(tmp_path / "b.pdf"))

    assert from_file.success and inline.success
    assert len(PdfReader(str(from_file.value)).pages) == len(PdfReader(str(inline.value)).pages)


def test_encrypted_binary(settings: Settings, scratch_dir: Path) -> None:
    result = to_binary(HTML, settings=settings, password="secret", print="none")

    assert result.success, result.error
    assert result.value.startswith(b"%PDF-")
    assert list(scratch_dir.iterdir()) == []
