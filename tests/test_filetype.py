"""Tests for the public classification entry point."""
import pytest

from sniffer.errors import InvalidArgumentError
from sniffer.filetype import classify, classify_bytes, classify_file, read_window
from sniffer.model import UNKNOWN, ClassificationResult


class TestArguments:
    def test_requires_path_or_data(self):
        with pytest.raises(InvalidArgumentError):
            classify()

    def test_invalid_argument_is_value_error(self):
        with pytest.raises(ValueError):
            classify(path=None, data=None)

    def test_missing_file_raises(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            classify(path=tmp_path / "nope.bin")

    def test_empty_buffer_is_unknown(self):
        assert classify(data=b"") == UNKNOWN

    def test_unknown_sentinel(self):
        assert UNKNOWN == ClassificationResult("", "Unknown file type")
        assert UNKNOWN.is_unknown
        assert not ClassificationResult(".png", "x").is_unknown


class TestBufferInput:
    def test_jpeg(self):
        assert classify_bytes(b"\xFF\xD8\xFF\xE1\x00\x18Exif") == ClassificationResult(".jpg", "JPEG/Exif file")

    def test_short_buffer_never_matches(self):
        # Three of the four bytes of a JPEG/JFIF signature.
        assert classify_bytes(b"\xFF\xD8\xFF").is_unknown

    def test_text_without_file_is_unknown(self):
        assert classify_bytes(b"<html><body></body></html>").is_unknown

    def test_bytearray_accepted(self):
        assert classify(data=bytearray(b"GIF87a\x01\x00")).extension == ".gif"

    def test_result_is_independent_of_table(self):
        a = classify_bytes(b"%PDF-1.7\n")
        b = classify_bytes(b"%PDF-1.7\n")
        assert a == b
        assert a.extension == ".pdf"


class TestFileInput:
    def test_reads_only_window(self, write_file):
        p = write_file("photo.dat", b"\x89PNG\r\n\x1a\n" + b"\x00" * 10000)
        assert read_window(p) == (b"\x89PNG\r\n\x1a\n" + b"\x00" * 120)
        assert classify_file(p).extension == ".png"

    def test_offset_four_signature(self, write_file):
        p = write_file("clip", b"\x00\x00\x00\x1Cftypisom\x00\x00\x02\x00")
        assert classify_file(p) == ClassificationResult(".mp4", "ISO Base Media file (MPEG-4) v1")

    def test_extension_is_ignored(self, write_file):
        p = write_file("report.pdf", b"GIF89a\x10\x00\x10\x00")
        assert classify_file(p).extension == ".gif"

    def test_html_fallback(self, write_file):
        p = write_file("page.bin", "<html>\n<head><title>x</title></head>\n</html>\n")
        assert classify_file(p).extension == ".htm"

    def test_json_fallback(self, write_file):
        p = write_file("data.bin", '{"a":1}')
        assert classify_file(p) == ClassificationResult(".json", "JavaScript Object Notation")

    def test_xml_without_declaration_signature(self, write_file):
        p = write_file("feed.bin", "<?xml version='1.0' encoding='iso-8859-1'?>\n<rss/>\n")
        assert classify_file(p) == ClassificationResult(".xml", "Extensible Markup Language")

    def test_plain_text_is_unknown(self, write_file):
        assert classify_file(write_file("notes.txt", "nothing to see\n")) == UNKNOWN

    def test_empty_file_is_unknown(self, write_file):
        assert classify_file(write_file("empty", b"")) == UNKNOWN

    def test_utf16_json_file(self, write_file):
        p = write_file("data.bin", '[1, 2, 3]'.encode("utf-16-le"))
        p.write_bytes(b"\xFF\xFE" + p.read_bytes())
        assert classify_file(p).extension == ".json"

    def test_utf16_html_file(self, write_file):
        p = write_file("page.bin", b"\xFF\xFE" + "<html>\n</html>\n".encode("utf-16-le"))
        assert classify_file(p).extension == ".htm"

    def test_data_with_path(self, write_file, fixed_query):
        # Bytes in memory, original name known: the name feeds the executable fallback.
        p = write_file("attachment.com", b"")
        result = classify(path=p, data=b"MZ\x00\x00", executable_query=fixed_query(None))
        assert result == ClassificationResult(".com", "")
