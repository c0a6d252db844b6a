# sniffer/errors.py

from __future__ import annotations


class SnifferError(Exception):
    """Base class for classification errors."""


class InvalidArgumentError(SnifferError, ValueError):
    """Neither a path nor a buffer was given."""


class UnsupportedInputError(SnifferError):
    """The requested inspection needs a file on disk but only bytes were given."""
