# sniffer/matcher.py

from __future__ import annotations
import logging
from typing import Iterable, Optional

from .model import SignatureEntry
from .signatures import SIGNATURES

logger = logging.getLogger(__name__)


def match(buffer: bytes, table: Iterable[SignatureEntry] = SIGNATURES) -> Optional[SignatureEntry]:
    """Return the first table entry whose pattern sits at its offset in `buffer`.

    Args:
        buffer (bytes): Leading bytes of the candidate data. May be empty.
        table (Iterable[SignatureEntry]): Entries in priority order.

    Returns:
        SignatureEntry | None: The winning entry, or None when nothing matches.
    """
    for entry in table:
        if entry.matches(buffer):
            logger.debug("Matched %r at offset %d (%s)", entry.pattern, entry.offset, entry.description)
            return entry
    return None


def index_of(buffer: bytes, pattern: bytes, start: int = 0) -> int:
    """Return the index of the first `pattern` at or after `start`, or -1."""
    if not pattern:
        raise ValueError("pattern must not be empty")
    if start < 0:
        raise ValueError(f"start must be non-negative, got {start}")
    return buffer.find(pattern, start)
