# sniffer/report.py

from __future__ import annotations
import csv
from pathlib import Path
from typing import Iterable

from .model import ScanRow

HEADER = ["path", "size_bytes", "current_ext", "detected_ext", "description", "is_match", "error"]


def write_csv(out_path: Path, rows: Iterable[ScanRow]) -> int:
    """Write classification results to a CSV file.

    Args:
        out_path (Path): Destination CSV file path.
        rows (Iterable[ScanRow]): One row per inspected file.

    Returns:
        int: Number of data rows written.
    """
    out_path.parent.mkdir(parents=True, exist_ok=True)
    count = 0
    with out_path.open("w", encoding="utf-8", newline="") as f:
        writer = csv.writer(f)
        writer.writerow(HEADER)
        for r in rows:
            writer.writerow([
                r.path,
                r.size_bytes,
                r.current_ext,
                r.detected_ext,
                r.description,
                str(r.is_match).lower(),
                r.error,
            ])
            count += 1
    return count
