# main.py

"""
Orchestrator: read params (JSON + CLI), walk files, classify them by content, write CSV.
"""
from __future__ import annotations
import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from sniffer.executable import ExecutableQuery, default_executable_query
from sniffer.filetype import classify
from sniffer.model import ScanRow
from sniffer.report import write_csv
from sniffer.walk import iter_files

# Extension spellings that name the same type.
_EXT_ALIASES = {".jpeg": ".jpg", ".jpe": ".jpg", ".tiff": ".tif", ".html": ".htm"}


def load_config(path: Path | None) -> Dict[str, Any]:
    """Load configuration from a JSON file.

    Args:
        path (Path | None): Path to the JSON configuration file.

    Returns:
        Dict[str, Any]: Configuration dictionary. Empty if no file is provided or read fails.
    """
    if not path:
        return {}
    try:
        with path.open("r", encoding="utf-8") as f:
            return json.load(f)
    except (OSError, ValueError) as exc:
        print(f"[WARN] Failed to read config {path}: {exc}", file=sys.stderr)
        return {}


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse CLI arguments."""
    p = argparse.ArgumentParser(
        description="Identify file types from magic bytes and report files whose extension disagrees with their content."
    )
    p.add_argument("--input", type=str, help="Input file or directory (recursive).")
    p.add_argument("--report", type=str, help="Path to CSV report (default: report.csv).")
    p.add_argument("--config", type=str, help="Optional JSON config (flags override).")
    p.add_argument("--verbose", action="store_true", help="Log every classification decision.")
    return p.parse_args(argv)


def _get_effective_config(args: argparse.Namespace) -> Tuple[Dict[str, Any], Path]:
    """Load CLI + JSON configuration, giving precedence to CLI flags."""
    script_dir = Path(__file__).parent
    default_config_path = script_dir / "params.json"
    config_path = Path(args.config) if args.config else default_config_path
    cfg = load_config(config_path if config_path.exists() else None)
    return cfg, config_path


def _resolve_paths(args: argparse.Namespace, cfg: Dict[str, Any], config_path: Path) -> Tuple[Path, Path]:
    """Resolve and validate input and output paths."""
    input_path = Path(args.input or cfg.get("input", ""))
    if not args.input and not cfg.get("input"):
        print(f"[ERR] --input is required (or set 'input' in {config_path.name}).", file=sys.stderr)
        raise SystemExit(2)
    if not input_path.exists():
        print(f"[ERR] Input not found: {input_path}", file=sys.stderr)
        raise SystemExit(2)

    report_path = Path(args.report or cfg.get("report", "report.csv"))
    return input_path, report_path


def _configure_logging(verbose: bool) -> None:
    """Send library log records to stderr, at DEBUG level when verbose."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


def _normalize_ext(ext: str) -> str:
    """Lower-case an extension and fold known aliases (jpeg -> jpg)."""
    ext = ext.lower()
    return _EXT_ALIASES.get(ext, ext)


def process_file(fp: Path, query: ExecutableQuery) -> ScanRow:
    """Classify a single file and build its report row.

    Read errors are recorded in the row instead of stopping the scan.
    """
    current_ext = fp.suffix.lower()
    try:
        det = classify(path=fp, executable_query=query)
        detected_ext = det.extension.lower()
        return ScanRow(
            path=str(fp),
            size_bytes=fp.stat().st_size,
            current_ext=current_ext,
            detected_ext=detected_ext,
            description=det.description,
            is_match=bool(detected_ext) and _normalize_ext(detected_ext) == _normalize_ext(current_ext),
            error="",
        )
    except OSError as exc:
        return ScanRow(
            path=str(fp),
            size_bytes=0,
            current_ext=current_ext,
            detected_ext="",
            description="",
            is_match=False,
            error=f"{type(exc).__name__}: {exc}",
        )


def _print_summary(report_path: Path, total: int, mismatches: int, unknown: int, errors: int) -> None:
    """Print summary information to stdout."""
    print(f"[INFO] Done. Total: {total} | Mismatches: {mismatches} | Unknown: {unknown} | Errors: {errors}")
    print(f"[INFO] Report: {report_path.resolve()}")


def main(argv: Optional[List[str]] = None) -> int:
    """Main orchestration function.

    Returns:
        int: Exit code.
    """
    args = parse_args(argv)
    cfg, config_path = _get_effective_config(args)
    _configure_logging(bool(args.verbose or cfg.get("verbose", False)))
    input_path, report_path = _resolve_paths(args, cfg, config_path)

    query = default_executable_query()
    rows: List[ScanRow] = []

    print(f"[INFO] Scanning: {input_path}")
    for fp in iter_files(input_path):
        rows.append(process_file(fp, query))

    write_csv(report_path, rows)

    errors = sum(1 for r in rows if r.error)
    unknown = sum(1 for r in rows if not r.error and not r.detected_ext)
    mismatches = sum(1 for r in rows if not r.error and r.detected_ext and not r.is_match)
    _print_summary(report_path, len(rows), mismatches, unknown, errors)

    if errors:
        return 3
    if mismatches:
        return 2
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
