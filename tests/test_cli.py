"""Tests for the scan orchestrator, the directory walk and the CSV report."""
import csv
import json

import pytest

import main
from sniffer.executable import ExtensionFallbackQuery
from sniffer.model import ScanRow
from sniffer.report import HEADER, write_csv
from sniffer.walk import iter_files


def _read_report(path):
    with path.open(encoding="utf-8", newline="") as f:
        return list(csv.DictReader(f))


class TestIterFiles:
    def test_single_file(self, write_file):
        p = write_file("a.bin", b"x")
        assert list(iter_files(p)) == [p]

    def test_recursive_and_sorted(self, write_file, tmp_path):
        b = write_file("sub/b.bin", b"x")
        a = write_file("a.bin", b"x")
        assert list(iter_files(tmp_path)) == [a, b]

    def test_skips_directories(self, tmp_path):
        (tmp_path / "empty").mkdir()
        assert list(iter_files(tmp_path)) == []


class TestWriteCsv:
    def test_header_and_rows(self, tmp_path):
        out = tmp_path / "out" / "report.csv"
        row = ScanRow(
            path="x.pdf", size_bytes=10, current_ext=".pdf", detected_ext=".pdf",
            description="Adobe Portable Document file", is_match=True, error="",
        )
        assert write_csv(out, [row]) == 1
        with out.open(encoding="utf-8", newline="") as f:
            lines = list(csv.reader(f))
        assert lines[0] == HEADER
        assert lines[1] == ["x.pdf", "10", ".pdf", ".pdf", "Adobe Portable Document file", "true", ""]


class TestProcessFile:
    def test_match(self, write_file):
        row = main.process_file(write_file("img.PNG", b"\x89PNG\r\n\x1a\n"), ExtensionFallbackQuery())
        assert (row.current_ext, row.detected_ext, row.is_match) == (".png", ".png", True)

    def test_mismatch(self, write_file):
        row = main.process_file(write_file("doc.txt", b"%PDF-1.3\n"), ExtensionFallbackQuery())
        assert row.detected_ext == ".pdf"
        assert not row.is_match
        assert row.description == "Adobe Portable Document file (version 1.3)"

    def test_jpeg_spelling_matches(self, write_file):
        row = main.process_file(write_file("photo.JPEG", b"\xFF\xD8\xFF\xE0\x00\x10JFIF"), ExtensionFallbackQuery())
        assert (row.current_ext, row.detected_ext, row.is_match) == (".jpeg", ".jpg", True)

    def test_unknown_is_not_a_match(self, write_file):
        row = main.process_file(write_file("notes", b"hello"), ExtensionFallbackQuery())
        assert (row.detected_ext, row.is_match, row.error) == ("", False, "")

    def test_read_error_recorded(self, tmp_path):
        row = main.process_file(tmp_path / "missing.bin", ExtensionFallbackQuery())
        assert row.error.startswith("FileNotFoundError")


class TestLoadConfig:
    def test_none(self):
        assert main.load_config(None) == {}

    def test_valid(self, write_file):
        assert main.load_config(write_file("p.json", '{"report": "r.csv"}')) == {"report": "r.csv"}

    def test_invalid_json_warns(self, write_file, capsys):
        assert main.load_config(write_file("p.json", "{not json")) == {}
        assert "[WARN]" in capsys.readouterr().err


class TestMain:
    def test_all_match(self, write_file, tmp_path):
        write_file("in/a.png", b"\x89PNG\r\n\x1a\n")
        write_file("in/b.gif", b"GIF89a")
        report = tmp_path / "report.csv"
        assert main.main(["--input", str(tmp_path / "in"), "--report", str(report)]) == 0
        rows = _read_report(report)
        assert [r["detected_ext"] for r in rows] == [".png", ".gif"]

    def test_mismatch_exit_code(self, write_file, tmp_path):
        write_file("in/a.jpg", b"\x89PNG\r\n\x1a\n")
        report = tmp_path / "report.csv"
        assert main.main(["--input", str(tmp_path / "in"), "--report", str(report)]) == 2
        assert _read_report(report)[0]["is_match"] == "false"

    def test_unknown_does_not_fail(self, write_file, tmp_path):
        write_file("in/a.txt", "plain words\n")
        assert main.main(["--input", str(tmp_path / "in"), "--report", str(tmp_path / "r.csv")]) == 0

    def test_config_supplies_input(self, write_file, tmp_path, capsys):
        write_file("in/a.png", b"\x89PNG\r\n\x1a\n")
        report = tmp_path / "from_config.csv"
        cfg = write_file("params.json", json.dumps({"input": str(tmp_path / "in"), "report": str(report)}))
        assert main.main(["--config", str(cfg)]) == 0
        assert report.exists()
        assert "[INFO] Done. Total: 1" in capsys.readouterr().out

    def test_flags_override_config(self, write_file, tmp_path):
        write_file("in/a.png", b"\x89PNG\r\n\x1a\n")
        cfg = write_file("params.json", json.dumps({"input": str(tmp_path / "in"), "report": str(tmp_path / "cfg.csv")}))
        flag_report = tmp_path / "flag.csv"
        main.main(["--config", str(cfg), "--report", str(flag_report)])
        assert flag_report.exists()
        assert not (tmp_path / "cfg.csv").exists()

    def test_missing_input(self, tmp_path, capsys):
        with pytest.raises(SystemExit) as exc:
            main.main(["--input", str(tmp_path / "nope"), "--config", str(tmp_path / "none.json")])
        assert exc.value.code == 2
        assert "[ERR] Input not found" in capsys.readouterr().err

    def test_input_required(self, tmp_path):
        with pytest.raises(SystemExit) as exc:
            main.main(["--config", str(tmp_path / "none.json")])
        assert exc.value.code == 2
