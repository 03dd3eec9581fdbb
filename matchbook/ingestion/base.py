"""
Shared utilities for all record loaders.

Rows arrive either as JSON objects (camelCase keys, as stored by the app)
or as flat CSV exports (snake_case columns). These helpers hide the
difference.
"""

import logging
from datetime import datetime
from typing import Mapping

import pandas as pd

log = logging.getLogger(__name__)

TRUE_STRINGS = {"1", "1.0", "true", "yes", "y"}
FALSE_STRINGS = {"0", "0.0", "false", "no", "n"}


def _is_missing(val) -> bool:
    if val is None:
        return True
    if isinstance(val, float) and pd.isna(val):
        return True
    return isinstance(val, str) and val.strip() == ""


def find_column(df: pd.DataFrame, candidates: list[str]) -> str | None:
    """Find first matching column name from candidates."""
    for c in candidates:
        if c in df.columns:
            return c
    return None


def get_value(row: Mapping, candidates: list[str]):
    """Get value from the first candidate key that holds a non-missing value.

    Works for dicts and pandas rows alike.
    """
    for c in candidates:
        if c in row and not _is_missing(row[c]):
            return row[c]
    return None


def safe_int(val, default: int | None = None) -> int | None:
    """Convert value to int, returning default on failure."""
    if _is_missing(val):
        return default
    try:
        return int(float(val))
    except (ValueError, TypeError):
        return default


def safe_float(val, default: float | None = None) -> float | None:
    """Convert value to float, returning default on failure."""
    if _is_missing(val):
        return default
    try:
        return float(val)
    except (ValueError, TypeError):
        return default


def safe_bool(val, default: bool | None = None) -> bool | None:
    if _is_missing(val):
        return default
    if isinstance(val, bool):
        return val
    s = str(val).strip().lower()
    if s in TRUE_STRINGS:
        return True
    if s in FALSE_STRINGS:
        return False
    log.debug(f"Unrecognized boolean value {val!r}, using default")
    return default


def safe_str(val, default: str | None = None) -> str | None:
    if _is_missing(val):
        return default
    return str(val).strip()


def parse_timestamp(val) -> datetime:
    """ISO 8601 string (or anything pandas understands) → UTC datetime.

    Values without an offset are taken as UTC.
    """
    if _is_missing(val):
        raise ValueError("created_at is missing")
    ts = pd.Timestamp(val)
    ts = ts.tz_localize("UTC") if ts.tzinfo is None else ts.tz_convert("UTC")
    return ts.to_pydatetime()


def split_tags(val) -> list[str]:
    """'pusher|moonballer', 'pusher, moonballer' or a list → ['pusher', 'moonballer']."""
    if _is_missing(val):
        return []
    if isinstance(val, (list, tuple)):
        return [str(v).strip() for v in val if str(v).strip()]
    return [t.strip() for t in str(val).replace("|", ",").split(",") if t.strip()]
