# sniffer/filetype.py

from __future__ import annotations
import logging
from pathlib import Path
from typing import Optional, Tuple

from .disambiguate import detect_byte_order_mark, disambiguate, strip_byte_order_mark
from .errors import InvalidArgumentError
from .executable import ExecutableQuery, PathLike
from .matcher import match
from .model import BYTE_ORDER_MARK, UNKNOWN, ClassificationResult
from .signatures import SIGNATURES, WINDOW_SIZE
from .textsniff import sniff_text

logger = logging.getLogger(__name__)

# One pass on the raw bytes, one more after a byte order mark was stripped.
_MAX_PASSES = 2


# --- readers --------------------------------------------------------------------


def read_window(path: PathLike, size: int = WINDOW_SIZE) -> bytes:
    """Read the leading bytes of a file."""
    with open(path, "rb") as f:
        return f.read(size)


# --- signature passes -----------------------------------------------------------


def _match_signatures(
    data: bytes,
    path: Optional[PathLike],
    executable_query: Optional[ExecutableQuery],
) -> Tuple[Optional[ClassificationResult], Optional[str]]:
    """Run the table against `data`, stripping a byte order mark at most once.

    Returns the result (or None) and the text codec implied by a stripped
    byte order mark, so the text fallback can read the file the same way.
    """
    window = data[:WINDOW_SIZE]
    content = data
    text_codec: Optional[str] = None

    for attempt in range(_MAX_PASSES):
        entry = match(window, SIGNATURES)

        if entry is not None and entry.tag != BYTE_ORDER_MARK:
            if not entry.tag:
                return entry.to_result(), text_codec
            return disambiguate(entry, window, path, executable_query, content), text_codec

        if attempt + 1 == _MAX_PASSES:
            break
        found = detect_byte_order_mark(window)
        if found is None:
            break
        mark, codec = found
        logger.debug("Stripping byte order mark %r (%s) and retrying", mark, codec or "pass-through")
        # The window is a prefix of the content, so both start with the mark.
        window = strip_byte_order_mark(window)
        content = strip_byte_order_mark(content)
        text_codec = codec or "latin-1"

    return None, text_codec


# --- public API -----------------------------------------------------------------


def classify(
    path: Optional[PathLike] = None,
    data: Optional[bytes] = None,
    executable_query: Optional[ExecutableQuery] = None,
) -> ClassificationResult:
    """Detect the type of a file or an in-memory buffer from its content.

    Args:
        path (PathLike | None): File to inspect. When `data` is also given the
            path is only used by steps that need the file itself (executable
            lookup, full zip scan, text fallback).
        data (bytes | None): Content to inspect. May be empty.
        executable_query (ExecutableQuery | None): Lookup for MZ files;
            defaults to the host's native one when available.

    Returns:
        ClassificationResult: Never None; UNKNOWN when nothing fits.

    Raises:
        InvalidArgumentError: When neither `path` nor `data` is given.
        OSError: When the file cannot be read.
    """
    if path is None and data is None:
        raise InvalidArgumentError("either a path or a data buffer is required")

    if data is None:
        data = read_window(path)

    result, text_codec = _match_signatures(bytes(data), path, executable_query)
    if result is not None:
        return result

    # The line scan needs the file itself; byte-only input stops here.
    if path is not None:
        result = sniff_text(path, encoding=_text_encoding(text_codec))
        if result is not None:
            return result

    logger.debug("No signature for %s", path if path is not None else "<buffer>")
    return UNKNOWN


def _text_encoding(codec: Optional[str]) -> str:
    # Decoders that swallow their own byte order mark.
    if codec is None or codec == "utf-8":
        return "utf-8-sig"
    if codec.startswith("utf-16"):
        return "utf-16"
    if codec.startswith("utf-32"):
        return "utf-32"
    return codec


def classify_file(path: PathLike, executable_query: Optional[ExecutableQuery] = None) -> ClassificationResult:
    """Detect the type of a file on disk."""
    return classify(path=Path(path), executable_query=executable_query)


def classify_bytes(data: bytes) -> ClassificationResult:
    """Detect the type of an in-memory buffer, e.g. a decoded attachment."""
    return classify(data=data)
