# sniffer/walk.py

from __future__ import annotations
from pathlib import Path
from typing import Iterator


def iter_files(root: Path) -> Iterator[Path]:
    """Iterate over the files to classify, recursively if `root` is a directory.

    Directory entries are visited in sorted order so repeated scans produce
    the same report. Symlinks are skipped to avoid walking out of the tree.

    Args:
        root (Path): File or directory to scan.

    Yields:
        Path: Paths to each regular file found.
    """
    if root.is_file():
        yield root
        return

    for p in sorted(root.rglob("*")):
        if p.is_symlink():
            continue
        if p.is_file():
            yield p
