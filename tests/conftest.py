from __future__ import annotations

import hashlib
import shutil
from dataclasses import dataclass, field
from pathlib import Path
from types import SimpleNamespace
import sys

import pytest
from pypdf import PdfWriter

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from pdfrenderx.config import Settings, get_settings  # noqa: E402
from pdfrenderx.tempfiles import TempFileManager  # noqa: E402


@pytest.fixture()
def sample_pdf(tmp_path: Path) -> Path:
    pdf_path = tmp_path / "sample.pdf"
    writer = PdfWriter()
    writer.add_blank_page(width=612, height=792)
    writer.add_metadata({"/Producer": "pdfrenderx-tests", "/Title": "Sample"})
    with pdf_path.open("wb") as stream:
        writer.write(stream)
    return pdf_path


@pytest.fixture()
def scratch_dir(tmp_path: Path) -> Path:
    path = tmp_path / "scratch"
    path.mkdir()
    return path


@pytest.fixture()
def temp_manager(scratch_dir: Path) -> TempFileManager:
    return TempFileManager(scratch_dir)


@pytest.fixture()
def settings(scratch_dir: Path) -> Settings:
    return Settings(temp_dir=scratch_dir)


@pytest.fixture(autouse=True)
def _reset_settings_cache():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@dataclass
class FakeTools:
    """Stands in for wkhtmltopdf, exiftool and qpdf.

    The renderer writes a small PDF tagged with a hash of the HTML it read,
    exiftool leaves the file alone and qpdf copies source to destination.
    Tools listed in ``fail`` exit with status 1.
    """

    template: bytes
    calls: list[list[str]] = field(default_factory=list)
    rendered_html: list[str] = field(default_factory=list)
    fail: set[str] = field(default_factory=set)

    def commands(self, tool: str) -> list[list[str]]:
        return [argv for argv in self.calls if Path(argv[0]).name == tool]

    def __call__(self, argv, **kwargs) -> SimpleNamespace:
        argv = list(argv)
        self.calls.append(argv)
        tool = Path(argv[0]).name
        if tool in self.fail:
            return SimpleNamespace(returncode=1, stdout=f"{tool}: simulated failure\n")

        if tool == "wkhtmltopdf":
            html = Path(argv[-2]).read_text(encoding="utf-8")
            self.rendered_html.append(html)
            digest = hashlib.sha256(html.encode("utf-8")).hexdigest()
            Path(argv[-1]).write_bytes(self.template + f"% html {digest}\n".encode("ascii"))
        elif tool == "qpdf":
            shutil.copyfile(argv[-2], argv[-1])
        return SimpleNamespace(returncode=0, stdout="")


@pytest.fixture()
def fake_tools(sample_pdf: Path, monkeypatch: pytest.MonkeyPatch) -> FakeTools:
    tools = FakeTools(template=sample_pdf.read_bytes())
    monkeypatch.setattr("pdfrenderx.runner.subprocess.run", tools)
    return tools


@pytest.fixture()
def html_file(tmp_path: Path) -> Path:
    path = tmp_path / "page.html"
    path.write_text("<html><body><h1>Hello</h1></body></html>", encoding="utf-8")
    return path
