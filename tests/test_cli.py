"""Tests for the slip OCR command-line interface."""

import csv
import json
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from slip_ocr.cli import _find_images, _write_csv, extract_single, main, process_folder
from slip_ocr.errors import ImageDecodeError, PipelineError
from slip_ocr.extraction.institution import Institution
from slip_ocr.pipeline import PipelineOutcome, SlipResult

_RESULT = SlipResult(
    amount="150000",
    date="09/25/2024",
    institution=Institution.MONEYGRAM,
    raw_text="MoneyGram\nAmount 150,000 LAK",
)
_FAILURE = PipelineError("normalize", ImageDecodeError("Unsupported or corrupt image data"))


class TestFindImages:
    """Tests for image discovery."""

    def test_find_supported_files(self, tmp_path: Path) -> None:
        for name in ("a.png", "b.jpg", "c.jpeg", "d.webp", "notes.txt", "doc.pdf"):
            (tmp_path / name).touch()
        files = _find_images(tmp_path)
        assert [f.name for f in files] == ["a.png", "b.jpg", "c.jpeg", "d.webp"]

    def test_find_uppercase_extensions(self, tmp_path: Path) -> None:
        (tmp_path / "SLIP.PNG").touch()
        assert len(_find_images(tmp_path)) == 1

    def test_empty_directory(self, tmp_path: Path) -> None:
        assert _find_images(tmp_path) == []


class TestWriteCsv:
    """Tests for CSV writing."""

    def test_fixed_columns(self, tmp_path: Path) -> None:
        output = tmp_path / "out" / "results.csv"
        _write_csv([{"filename": "a.png", "status": "failed", "error": "boom"}], output)

        with open(output, newline="", encoding="utf-8") as f:
            reader = csv.DictReader(f)
            rows = list(reader)
        assert reader.fieldnames == [
            "filename",
            "status",
            "institution",
            "amount",
            "date",
            "error",
        ]
        assert rows[0]["error"] == "boom"
        assert rows[0]["amount"] == ""


class TestProcessFolder:
    """Tests for batch processing."""

    @patch("slip_ocr.cli._build_pipeline")
    def test_mixed_outcomes(
        self, mock_build: MagicMock, tmp_path: Path, capsys: pytest.CaptureFixture
    ) -> None:
        (tmp_path / "a.png").write_bytes(b"first")
        (tmp_path / "b.png").write_bytes(b"second")
        pipeline = MagicMock()
        pipeline.try_run.side_effect = [
            PipelineOutcome(result=_RESULT),
            PipelineOutcome(error=_FAILURE),
        ]
        mock_build.return_value = pipeline
        output = tmp_path / "results.csv"

        summary = process_folder(tmp_path, output)

        assert summary == {"total": 2, "successful": 1, "failed": 1}
        with open(output, newline="", encoding="utf-8") as f:
            rows = list(csv.DictReader(f))
        assert rows[0]["filename"] == "a.png"
        assert rows[0]["institution"] == "MONEYGRAM"
        assert rows[0]["amount"] == "150000"
        assert rows[0]["date"] == "09/25/2024"
        assert rows[1]["status"] == "failed"
        assert "corrupt image" in rows[1]["error"]
        assert "Failed:     1" in capsys.readouterr().out

    @patch("slip_ocr.cli._build_pipeline")
    def test_unreadable_file_recorded(
        self, mock_build: MagicMock, tmp_path: Path
    ) -> None:
        (tmp_path / "a.png").write_bytes(b"first")
        (tmp_path / "folder.png").mkdir()
        pipeline = MagicMock()
        pipeline.try_run.return_value = PipelineOutcome(result=_RESULT)
        mock_build.return_value = pipeline
        output = tmp_path / "results.csv"

        summary = process_folder(tmp_path, output)

        assert summary == {"total": 2, "successful": 1, "failed": 1}
        pipeline.try_run.assert_called_once_with(b"first")
        with open(output, newline="", encoding="utf-8") as f:
            rows = list(csv.DictReader(f))
        assert rows[1]["filename"] == "folder.png"
        assert rows[1]["status"] == "failed"
        assert rows[1]["error"]

    def test_empty_folder(self, tmp_path: Path) -> None:
        output = tmp_path / "results.csv"
        assert process_folder(tmp_path, output) == {
            "total": 0,
            "successful": 0,
            "failed": 0,
        }
        assert not output.exists()


class TestExtractSingle:
    """Tests for single-slip extraction."""

    @patch("slip_ocr.cli._build_pipeline")
    def test_returns_fields(self, mock_build: MagicMock, tmp_path: Path) -> None:
        slip = tmp_path / "slip.png"
        slip.write_bytes(b"image")
        mock_build.return_value.run.return_value = _RESULT

        result = extract_single(slip)

        assert result == {"filename": "slip.png", **_RESULT.to_dict()}
        mock_build.return_value.run.assert_called_once_with(b"image")


class TestMain:
    """Tests for argument parsing and dispatch."""

    @patch("slip_ocr.cli.setup_logging")
    @patch("slip_ocr.cli._build_pipeline")
    def test_extract_prints_json(
        self,
        mock_build: MagicMock,
        _mock_logging: MagicMock,
        tmp_path: Path,
        capsys: pytest.CaptureFixture,
    ) -> None:
        slip = tmp_path / "slip.png"
        slip.write_bytes(b"image")
        mock_build.return_value.run.return_value = _RESULT

        main(["extract", str(slip)])

        data = json.loads(capsys.readouterr().out)
        assert data["institution"] == "MONEYGRAM"
        assert data["amount"] == "150000"

    @patch("slip_ocr.cli._build_pipeline")
    def test_extract_writes_output(self, mock_build: MagicMock, tmp_path: Path) -> None:
        slip = tmp_path / "slip.png"
        slip.write_bytes(b"image")
        mock_build.return_value.run.return_value = _RESULT
        output = tmp_path / "out" / "slip.json"

        main(["extract", str(slip), "-o", str(output)])

        assert json.loads(output.read_text(encoding="utf-8"))["date"] == "09/25/2024"

    @patch("slip_ocr.cli._build_pipeline")
    def test_extract_failure_exits(
        self, mock_build: MagicMock, tmp_path: Path, capsys: pytest.CaptureFixture
    ) -> None:
        slip = tmp_path / "slip.png"
        slip.write_bytes(b"garbage")
        mock_build.return_value.run.side_effect = _FAILURE

        with pytest.raises(SystemExit) as info:
            main(["extract", str(slip)])

        assert info.value.code == 1
        assert "OCR processing failed" in capsys.readouterr().err

    def test_extract_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(SystemExit) as info:
            main(["extract", str(tmp_path / "missing.png")])
        assert info.value.code == 1

    def test_batch_requires_directory(self, tmp_path: Path) -> None:
        with pytest.raises(SystemExit) as info:
            main(["batch", str(tmp_path / "nope")])
        assert info.value.code == 1

    def test_no_command_prints_help(self, capsys: pytest.CaptureFixture) -> None:
        with pytest.raises(SystemExit) as info:
            main([])
        assert info.value.code == 0
        assert "usage" in capsys.readouterr().out.lower()
