import io
from collections.abc import Callable
from pathlib import Path

import httpx
import pytest
from reportlab.lib.pagesizes import letter
from reportlab.pdfgen import canvas

from slipstage.staging.layout import StagingLayout
from slipstage.staging.ledger import ArtifactLedger
from tests.fakes import FakeRasterTool, jpeg_bytes


@pytest.fixture()
def make_jpeg() -> Callable[[Path, int, int], Path]:
    def _make(path: Path, width: int, height: int) -> Path:
        path.write_bytes(jpeg_bytes(width, height))
        return path

    return _make


@pytest.fixture()
def layout(tmp_path: Path) -> StagingLayout:
    staging = StagingLayout(tmp_path / "temp")
    staging.ensure()
    return staging


@pytest.fixture()
def ledger(layout: StagingLayout) -> ArtifactLedger:
    return ArtifactLedger(layout)


@pytest.fixture()
def raster_tool() -> FakeRasterTool:
    return FakeRasterTool()


@pytest.fixture()
def served_files() -> dict[str, bytes]:
    """URL -> body served by ``http_client``; unknown URLs answer 404."""
    return {}


@pytest.fixture()
def http_client(served_files: dict[str, bytes]) -> httpx.Client:
    def handler(request: httpx.Request) -> httpx.Response:
        body = served_files.get(str(request.url))
        if body is None:
            return httpx.Response(404)
        return httpx.Response(200, content=body)

    return httpx.Client(transport=httpx.MockTransport(handler))


@pytest.fixture()
def multi_page_pdf_bytes() -> bytes:
    """Generate a three-page PDF with known text on each page."""
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=letter)
    for page in range(1, 4):
        c.drawString(72, 720, f"Payment slip page {page}")
        c.showPage()
    c.save()
    return buf.getvalue()


@pytest.fixture()
def sample_pdf_bytes() -> bytes:
    """Generate a minimal single-page PDF."""
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=letter)
    c.drawString(72, 720, "Transfer 1,500.00 THB")
    c.save()
    return buf.getvalue()
