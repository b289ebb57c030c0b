import logging
import re
from datetime import date, datetime
from pathlib import Path
from typing import Optional

import pandas as pd

logger = logging.getLogger(__name__)

REPORT_DATE_RE = re.compile(r"(\d{4}-\d{2}-\d{2})$")


def get_date_suffix_for_filename() -> str:
    """Returns the current date as a YYYY-MM-DD string for filenames."""
    return datetime.now().strftime("%Y-%m-%d")


def parse_report_date(path: Path, prefix: str) -> Optional[date]:
    """Extracts the YYYY-MM-DD date that follows the prefix in a report filename."""
    stem = path.stem
    if not stem.startswith(prefix):
        return None
    match = REPORT_DATE_RE.search(stem[len(prefix):])
    if not match:
        return None
    try:
        return datetime.strptime(match.group(1), "%Y-%m-%d").date()
    except ValueError:
        return None


def find_latest_report(input_dir: Path, prefix: str) -> Optional[tuple[Path, date]]:
    """
    Finds the most recent '<prefix><YYYY-MM-DD>.csv' report in input_dir.
    Files whose name carries no date fall back to their modification date.
    Returns (path, report_date) or None when nothing matches.
    """
    if not input_dir.exists():
        return None

    candidates = []
    for path in input_dir.glob(f"{prefix}*.csv"):
        report_date = parse_report_date(path, prefix)
        if report_date is None:
            report_date = datetime.fromtimestamp(path.stat().st_mtime).date()
        candidates.append((report_date, path.name, path))

    if not candidates:
        return None

    report_date, _, path = max(candidates)
    return path, report_date


def load_csv(file_path: Path, skiprows: int = 0) -> pd.DataFrame:
    """
    CSV loader with an encoding fallback.
    1. UTF-8 with BOM support ('utf-8-sig').
    2. Latin-1, which can read any byte.
    Every cell is read as text; type conversion belongs to the record loader.
    A missing file raises FileNotFoundError.
    """
    if not file_path.exists():
        raise FileNotFoundError(f"Report not found at {file_path}")

    try:
        return pd.read_csv(
            file_path,
            encoding="utf-8-sig",
            skiprows=skiprows,
            dtype=str,
            keep_default_na=False,
        )
    except UnicodeDecodeError:
        logger.info(
            f"INFO: UTF-8 decoding failed for {file_path.name}. Retrying with 'latin-1'."
        )
        return pd.read_csv(
            file_path,
            encoding="latin-1",
            skiprows=skiprows,
            dtype=str,
            keep_default_na=False,
        )
