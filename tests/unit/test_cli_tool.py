import subprocess
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from slipstage.raster.cli_tool import GraphicsMagickTool, ImageMagickTool
from slipstage.raster.exceptions import (
    PageCountUndetermined,
    RasterToolExitError,
    RasterToolSpawnError,
    RasterToolTimeout,
)


def _completed(
    returncode: int = 0, stdout: str = "", stderr: str = ""
) -> subprocess.CompletedProcess[str]:
    return subprocess.CompletedProcess(
        args=[], returncode=returncode, stdout=stdout, stderr=stderr
    )


class TestCountPages:
    @patch("slipstage.raster.cli_tool.subprocess.run")
    def test_decodes_page_count(self, mock_run: MagicMock, tmp_path: Path) -> None:
        mock_run.return_value = _completed(stdout="333")
        source = tmp_path / "slip.pdf"

        result = GraphicsMagickTool().count_pages(source)

        assert result.page_count == 3
        assert result.resolved_path == source.resolve()
        cmd = mock_run.call_args.args[0]
        assert cmd == ["gm", "identify", "-format", "%n", str(source.resolve())]

    @patch("slipstage.raster.cli_tool.subprocess.run")
    def test_passes_timeout(self, mock_run: MagicMock, tmp_path: Path) -> None:
        mock_run.return_value = _completed(stdout="1")

        GraphicsMagickTool(timeout_seconds=7).count_pages(tmp_path / "a.pdf")

        assert mock_run.call_args.kwargs["timeout"] == 7

    @patch("slipstage.raster.cli_tool.subprocess.run")
    def test_nonzero_exit_carries_code_and_stderr(
        self, mock_run: MagicMock, tmp_path: Path
    ) -> None:
        mock_run.return_value = _completed(returncode=1, stderr="gm identify: unable to open")

        with pytest.raises(RasterToolExitError) as exc_info:
            GraphicsMagickTool().count_pages(tmp_path / "a.pdf")

        assert exc_info.value.returncode == 1
        assert "unable to open" in exc_info.value.stderr

    @patch("slipstage.raster.cli_tool.subprocess.run")
    def test_hint_for_undecodable_input(self, mock_run: MagicMock, tmp_path: Path) -> None:
        mock_run.return_value = _completed(
            returncode=1,
            stderr="gm identify: No decode delegate for this image format (NoDecodeDelegateForThisImageFormat)",
        )

        with pytest.raises(RasterToolExitError) as exc_info:
            GraphicsMagickTool().count_pages(tmp_path / "a.pdf")

        assert exc_info.value.hint is not None
        assert "Ghostscript" in exc_info.value.hint

    @patch("slipstage.raster.cli_tool.subprocess.run")
    def test_hint_for_silent_failure(self, mock_run: MagicMock, tmp_path: Path) -> None:
        mock_run.return_value = _completed(returncode=1)

        with pytest.raises(RasterToolExitError) as exc_info:
            GraphicsMagickTool().count_pages(tmp_path / "a.pdf")

        assert "corrupted" in str(exc_info.value.hint)

    @patch("slipstage.raster.cli_tool.subprocess.run")
    def test_empty_stdout_is_undetermined(self, mock_run: MagicMock, tmp_path: Path) -> None:
        mock_run.return_value = _completed(stdout="")

        with pytest.raises(PageCountUndetermined):
            GraphicsMagickTool().count_pages(tmp_path / "a.pdf")

    @patch("slipstage.raster.cli_tool.subprocess.run")
    def test_garbled_stdout_is_undetermined(self, mock_run: MagicMock, tmp_path: Path) -> None:
        mock_run.return_value = _completed(stdout="1234")

        with pytest.raises(PageCountUndetermined, match="1234"):
            GraphicsMagickTool().count_pages(tmp_path / "a.pdf")

    @patch("slipstage.raster.cli_tool.subprocess.run", side_effect=FileNotFoundError("gm"))
    def test_missing_binary_raises_spawn_error(self, _run: MagicMock, tmp_path: Path) -> None:
        with pytest.raises(RasterToolSpawnError) as exc_info:
            GraphicsMagickTool().count_pages(tmp_path / "a.pdf")

        assert "PATH" in str(exc_info.value.hint)

    @patch(
        "slipstage.raster.cli_tool.subprocess.run",
        side_effect=subprocess.TimeoutExpired(cmd="gm", timeout=5),
    )
    def test_timeout_raises(self, _run: MagicMock, tmp_path: Path) -> None:
        with pytest.raises(RasterToolTimeout):
            GraphicsMagickTool(timeout_seconds=5).count_pages(tmp_path / "a.pdf")


class TestConvertPage:
    @patch("slipstage.raster.cli_tool.subprocess.run")
    def test_builds_frame_addressed_command(self, mock_run: MagicMock, tmp_path: Path) -> None:
        mock_run.return_value = _completed()
        source = tmp_path / "slip.pdf"
        output = tmp_path / "slip_p2.jpg"

        result = GraphicsMagickTool().convert_page(source, 2, output, 300)

        assert result == output
        assert mock_run.call_args.args[0] == [
            "gm",
            "convert",
            "-density",
            "300",
            f"{source}[2]",
            str(output),
        ]

    @patch("slipstage.raster.cli_tool.subprocess.run")
    def test_failure_reports_page_and_source_spec(
        self, mock_run: MagicMock, tmp_path: Path
    ) -> None:
        mock_run.return_value = _completed(returncode=2, stderr="bad frame")
        source = tmp_path / "slip.pdf"

        with pytest.raises(RasterToolExitError) as exc_info:
            GraphicsMagickTool().convert_page(source, 1, tmp_path / "out.jpg", 300)

        error = exc_info.value
        assert error.returncode == 2
        assert error.page_index == 1
        assert error.page_number == 2
        assert error.source_spec == f"{source}[1]"
        assert "bad frame" in error.stderr
        assert "page 2" in str(error)

    @patch("slipstage.raster.cli_tool.subprocess.run")
    def test_imagemagick_uses_magick_program(self, mock_run: MagicMock, tmp_path: Path) -> None:
        mock_run.return_value = _completed()

        ImageMagickTool().convert_page(tmp_path / "a.pdf", 0, tmp_path / "a.jpg", 150)

        assert mock_run.call_args.args[0][:2] == ["magick", "convert"]

    @patch("slipstage.raster.cli_tool.subprocess.run")
    def test_truncates_long_stderr(self, mock_run: MagicMock, tmp_path: Path) -> None:
        mock_run.return_value = _completed(returncode=1, stderr="x" * 10000)

        with pytest.raises(RasterToolExitError) as exc_info:
            GraphicsMagickTool().convert_page(tmp_path / "a.pdf", 0, tmp_path / "a.jpg", 300)

        assert len(exc_info.value.stderr) == 4000
