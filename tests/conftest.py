from pathlib import Path

import pytest


@pytest.fixture
def write_file(tmp_path):
    """Return a helper that writes bytes (or text) under tmp_path."""
    def _write(name: str, content) -> Path:
        p = tmp_path / name
        p.parent.mkdir(parents=True, exist_ok=True)
        if isinstance(content, str):
            p.write_text(content, encoding="utf-8")
        else:
            p.write_bytes(content)
        return p
    return _write


class FixedQuery:
    """Executable lookup that always answers the same subtype."""

    def __init__(self, subtype):
        self.subtype = subtype
        self.calls = []

    def query_subtype(self, path):
        self.calls.append(path)
        return self.subtype


class FailingQuery:
    def query_subtype(self, path):
        raise OSError("lookup failed")


@pytest.fixture
def fixed_query():
    return FixedQuery


@pytest.fixture
def failing_query():
    return FailingQuery()
