"""Tests for the line-based text fallback."""
import pytest

from sniffer.errors import UnsupportedInputError
from sniffer.model import ClassificationResult
from sniffer.textsniff import JSON_RESULT, sniff_text


class TestSniffText:
    def test_requires_path(self):
        with pytest.raises(UnsupportedInputError):
            sniff_text(None)

    def test_html_on_first_line(self, write_file):
        p = write_file("page.txt", "<HTML><body>hi</body></html>\n")
        assert sniff_text(p) == ClassificationResult(".htm", "Hypertext Markup Language")

    def test_xml_declaration_later(self, write_file):
        p = write_file("a.txt", "\n\n  <?xml version='1.0'?>\n<root/>\n")
        assert sniff_text(p).extension == ".xml"

    def test_mail_header(self, write_file):
        p = write_file("mail.txt", "Subject: hello\nMIME-Version: 1.0\nContent-Type: text/plain\n\nbody\n")
        assert sniff_text(p).extension == ".eml"

    def test_first_marker_line_wins(self, write_file):
        p = write_file("a.txt", "<html>\n<?xml version='1.0'?>\n")
        assert sniff_text(p).extension == ".htm"

    def test_json_object(self, write_file):
        assert sniff_text(write_file("a.txt", '{"a":1}')) == JSON_RESULT

    def test_json_array_over_lines(self, write_file):
        assert sniff_text(write_file("a.txt", "  [\n  1,\n  2\n]\n\n")) == JSON_RESULT

    def test_mismatched_brackets(self, write_file):
        assert sniff_text(write_file("a.txt", '{"a": [1, 2]')) is None

    def test_plain_text(self, write_file):
        assert sniff_text(write_file("a.txt", "just some notes\nnothing else\n")) is None

    def test_empty_file(self, write_file):
        assert sniff_text(write_file("a.txt", b"")) is None

    def test_undecodable_bytes(self, write_file):
        p = write_file("a.txt", b"\xff\xfe\xfa garbage <html> \x80\n")
        assert sniff_text(p).extension == ".htm"

    def test_utf8_mark_before_json(self, write_file):
        assert sniff_text(write_file("a.txt", b'\xEF\xBB\xBF{"a":1}')) == JSON_RESULT

    def test_utf16_file(self, write_file):
        p = write_file("a.txt", '{"a": 1}'.encode("utf-16"))
        assert sniff_text(p, encoding="utf-16") == JSON_RESULT

    def test_missing_file(self, tmp_path):
        with pytest.raises(OSError):
            sniff_text(tmp_path / "missing.txt")
