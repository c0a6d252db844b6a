# sniffer/model.py

from __future__ import annotations
from dataclasses import dataclass

# Disambiguation tags. An entry carrying one of these needs a second look
# before it can be reported.
EXECUTABLE = "executable"
COMPOUND_DOCUMENT = "compound-document"
ZIP_CONTAINER = "zip-container"
BYTE_ORDER_MARK = "byte-order-mark"
RIFF_CONTAINER = "riff-container"

TAGS = frozenset({EXECUTABLE, COMPOUND_DOCUMENT, ZIP_CONTAINER, BYTE_ORDER_MARK, RIFF_CONTAINER})


@dataclass(frozen=True)
class ClassificationResult:
    """Represents the outcome of a classification."""
    extension: str    # with leading dot, may be empty
    description: str

    @property
    def is_unknown(self) -> bool:
        return self == UNKNOWN


UNKNOWN = ClassificationResult(extension="", description="Unknown file type")


@dataclass(frozen=True)
class SignatureEntry:
    """One row of the signature table.

    `pattern` must be found at `offset` for the entry to match. Tagged entries
    leave `extension` empty; the disambiguation step decides the final type.
    """
    offset: int
    pattern: bytes
    extension: str
    description: str
    tag: str = ""

    def __post_init__(self) -> None:
        if self.offset < 0:
            raise ValueError(f"offset must be non-negative, got {self.offset}")
        if not self.pattern:
            raise ValueError("pattern must not be empty")
        if self.tag and self.tag not in TAGS:
            raise ValueError(f"unknown disambiguation tag: {self.tag!r}")

    @property
    def end(self) -> int:
        return self.offset + len(self.pattern)

    def matches(self, buffer: bytes) -> bool:
        """Return True when `pattern` sits at `offset` inside `buffer`."""
        if len(buffer) - self.offset < len(self.pattern):
            return False
        return buffer[self.offset:self.end] == self.pattern

    def to_result(self) -> ClassificationResult:
        return ClassificationResult(extension=self.extension, description=self.description)


@dataclass
class ScanRow:
    """Represents a row in the scan report CSV."""
    path: str
    size_bytes: int
    current_ext: str
    detected_ext: str
    description: str
    is_match: bool
    error: str
