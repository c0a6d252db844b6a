# sniffer/textsniff.py

from __future__ import annotations
import logging
from typing import List, Optional

from .errors import UnsupportedInputError
from .executable import PathLike
from .model import ClassificationResult

logger = logging.getLogger(__name__)

# Checked against every lower-cased line; the first hit ends the scan.
_LINE_MARKERS = (
    ("<?xml", ".xml", "Extensible Markup Language"),
    ("mime-version: 1.0", ".eml", "E-mail markup language file"),
    ("<html", ".htm", "Hypertext Markup Language"),
)

JSON_RESULT = ClassificationResult(".json", "JavaScript Object Notation")


def _looks_like_json(text: str) -> bool:
    s = text.lstrip("\ufeff").strip()
    return (s.startswith("{") and s.endswith("}")) or (s.startswith("[") and s.endswith("]"))


def sniff_text(path: Optional[PathLike], encoding: str = "utf-8-sig") -> Optional[ClassificationResult]:
    """Classify a text file from the markers in its lines.

    Args:
        path (PathLike | None): File to read. Byte-only input is not supported.
        encoding (str): Text encoding; undecodable bytes are replaced.

    Returns:
        ClassificationResult | None: The detected type, or None when the
        content carries no known marker.

    Raises:
        UnsupportedInputError: When `path` is None.
    """
    if path is None:
        raise UnsupportedInputError("text inspection needs a file path")

    lines: List[str] = []
    with open(path, "r", encoding=encoding, errors="replace") as f:
        for raw in f:
            line = raw.lower()
            lines.append(line)
            for marker, ext, description in _LINE_MARKERS:
                if marker in line:
                    logger.debug("Found %r in %s", marker, path)
                    return ClassificationResult(ext, description)

    if _looks_like_json("".join(lines)):
        return JSON_RESULT
    return None
