# sniffer/disambiguate.py

from __future__ import annotations
import logging
from pathlib import Path
from typing import Optional, Tuple

from .executable import SUBTYPE_DESCRIPTIONS, ExecutableQuery, PathLike, default_executable_query
from .matcher import index_of
from .model import (
    COMPOUND_DOCUMENT,
    EXECUTABLE,
    RIFF_CONTAINER,
    ZIP_CONTAINER,
    ClassificationResult,
    SignatureEntry,
)

logger = logging.getLogger(__name__)

# --- marker tables --------------------------------------------------------------

# Part names inside a zip. Order matters: the first one present wins.
_ZIP_MARKERS = (
    (b"word/_rels/", ".docx", "Microsoft Word open XML document format"),
    (b"xl/_rels/workbook", ".xlsx", "Microsoft Excel open XML document format"),
    (b"ppt/slides/_rels", ".pptx", "Microsoft PowerPoint open XML document format"),
    (b"CHNKWKS", ".wks", "Microsoft Works"),
    (b"Document.iwa", ".iwa", "iWork Archive"),
    (b"mimetypeapplication/vnd.oasis.opendocument.text", ".odt", "OpenDocument text document"),
    (b"mimetypeapplication/vnd.oasis.opendocument.spreadsheet", ".ods", "OpenDocument spreadsheet"),
    (b"mimetypeapplication/vnd.oasis.opendocument.presentation", ".odp", "OpenDocument presentation"),
    (b"mimetypeapplication/epub+zip", ".epub", "EPUB electronic publication"),
)
_ZIP_GENERIC = ClassificationResult(".zip", "Zip compressed archive")

# Directory entry names inside an OLE2 compound file, stored as NUL-terminated
# UTF-16LE. Outlook items come first: they embed attachments of the other kinds.
# (name, is_prefix, extension, description)
_COMPOUND_MARKERS = (
    ("__substg1.0_", True, ".msg", "Microsoft Outlook item"),
    ("WordDocument", False, ".doc", "Microsoft Word document"),
    ("PowerPoint Document", False, ".ppt", "Microsoft PowerPoint presentation"),
    ("Workbook", False, ".xls", "Microsoft Excel workbook"),
    ("Book", False, ".xls", "Microsoft Excel 5.0/95 workbook"),
)
_COMPOUND_GENERIC = ClassificationResult(".ole", "Microsoft OLE2 compound document")

# RIFF form types, checked in this order against the upper-cased window.
_RIFF_MARKERS = (
    ("WAVE", ".wav", "Waveform Audio File"),
    ("AVI", ".avi", "Audio Video Interleave video"),
    ("WEBP", ".webp", "WebP image"),
    ("ACON", ".acon", "Windows animated cursor"),
    ("AMV", ".amv", "MTV Video"),
    ("BND", ".bnd", "RIFF Bundle File"),
    ("CDR", ".cdr", "Coreldraw"),
    ("PAL", ".pal", "RIFF Palette File"),
    ("RDIB", ".rdib", "RIFF DIB raster image"),
    ("RMID", ".rmid", "RIFF MIDI music file"),
    ("RMMP", ".rmmp", "RIFF Multimedia Movie"),
    ("SHW4", ".shw4", "CorelSHOW / Corel Presentations file"),
)
_RIFF_UNKNOWN = ClassificationResult("", "Unknown RIFF container type")

# (mark, python codec). Longest marks first so UTF-32 LE is not read as UTF-16 LE.
# A codec of None means Python has no decoder; the bytes pass through as latin-1.
_BYTE_ORDER_MARKS: Tuple[Tuple[bytes, Optional[str]], ...] = (
    (b"\xDD\x73\x66\x73", None),          # UTF-EBCDIC
    (b"\xFF\xFE\x00\x00", "utf-32-le"),
    (b"\x00\x00\xFE\xFF", "utf-32-be"),
    (b"\x84\x31\x95\x33", "gb18030"),
    (b"\xEF\xBB\xBF", "utf-8"),
    (b"\x2B\x2F\x76", "utf-7"),
    (b"\x0E\xFE\xFF", None),              # SCSU
    (b"\xFB\xEE\x28", None),              # BOCU-1
    (b"\xF7\x64\x4C", None),              # UTF-1
    (b"\xFE\xFF", "utf-16-be"),
    (b"\xFF\xFE", "utf-16-le"),
)


# --- helpers --------------------------------------------------------------------


def _read_all(path: Optional[PathLike], fallback: bytes) -> bytes:
    """Read the whole file, or use `fallback` when there is no file behind the data."""
    if path is None:
        return fallback
    with open(path, "rb") as f:
        return f.read()


# --- checks ---------------------------------------------------------------------


def check_zip_container(path: Optional[PathLike], data: bytes = b"") -> ClassificationResult:
    """Tell Office Open XML, Works, iWork, ODF and EPUB apart from a plain zip.

    The full file is scanned because part names can sit anywhere in the
    central directory.
    """
    content = _read_all(path, data)
    for marker, ext, description in _ZIP_MARKERS:
        if marker in content:
            return ClassificationResult(ext, description)
    return _ZIP_GENERIC


def check_compound_document(path: Optional[PathLike], data: bytes = b"") -> ClassificationResult:
    content = _read_all(path, data)
    for name, is_prefix, ext, description in _COMPOUND_MARKERS:
        marker = name.encode("utf-16-le")
        if not is_prefix:
            marker += b"\x00\x00"
        if marker in content:
            return ClassificationResult(ext, description)
    return _COMPOUND_GENERIC


def check_executable(path: Optional[PathLike], query: Optional[ExecutableQuery] = None) -> ClassificationResult:
    """Describe an MZ file using the host's executable lookup.

    Without a path or a working lookup, the original extension is reported
    with an empty description.
    """
    fallback = ClassificationResult(Path(path).suffix if path else "", "")
    if path is None:
        return fallback

    query = query or default_executable_query()
    try:
        subtype = query.query_subtype(path)
    except OSError as exc:
        logger.debug("Executable lookup failed for %s: %s", path, exc)
        return fallback

    description = SUBTYPE_DESCRIPTIONS.get(subtype) if subtype is not None else None
    if description is None:
        return fallback
    return ClassificationResult(".exe", description)


def check_riff_container(window: bytes) -> ClassificationResult:
    text = window.decode("ascii", errors="replace").upper()
    for marker, ext, description in _RIFF_MARKERS:
        if marker in text:
            return ClassificationResult(ext, description)
    return _RIFF_UNKNOWN


def detect_byte_order_mark(data: bytes) -> Optional[Tuple[bytes, Optional[str]]]:
    """Return (mark, codec) for a known byte order mark at the start of `data`."""
    for mark, codec in _BYTE_ORDER_MARKS:
        if index_of(data, mark) == 0:
            return mark, codec
    return None


def transcode(data: bytes, codec: Optional[str]) -> bytes:
    """Turn encoded text into one byte per character; unmappable characters become '?'."""
    if codec is None:
        return data
    return data.decode(codec, errors="replace").encode("ascii", errors="replace")


def strip_byte_order_mark(data: bytes) -> Optional[bytes]:
    """Drop a leading byte order mark and transcode the rest.

    Returns None when `data` does not start with a known mark.
    """
    found = detect_byte_order_mark(data)
    if found is None:
        return None
    mark, codec = found
    return transcode(data[len(mark):], codec)


# --- dispatch -------------------------------------------------------------------


def disambiguate(
    entry: SignatureEntry,
    window: bytes,
    path: Optional[PathLike] = None,
    executable_query: Optional[ExecutableQuery] = None,
    content: Optional[bytes] = None,
) -> ClassificationResult:
    """Resolve a tagged table entry into a concrete result.

    Args:
        entry (SignatureEntry): The entry the matcher returned.
        window (bytes): Leading bytes the entry matched against.
        path (PathLike | None): File behind the data, if any.
        executable_query (ExecutableQuery | None): Lookup for MZ files.
        content (bytes | None): Everything the caller holds in memory. Used
            instead of re-reading the file when there is no path.

    Returns:
        ClassificationResult: The concrete type.
    """
    tag = entry.tag
    if content is None:
        content = window

    if tag == ZIP_CONTAINER:
        result = check_zip_container(path, content)
    elif tag == COMPOUND_DOCUMENT:
        result = check_compound_document(path, content)
    elif tag == EXECUTABLE:
        result = check_executable(path, executable_query)
    elif tag == RIFF_CONTAINER:
        result = check_riff_container(window)
    else:
        raise ValueError(f"no disambiguation step for tag {tag!r}")

    logger.debug("Disambiguated %s as %r", tag, result.extension)
    return result
