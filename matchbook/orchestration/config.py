"""Config loading with validation."""

import yaml
from pathlib import Path

REQUIRED_KEYS = ("paths", "ingestion", "report")


def _check_windows(windows: dict) -> None:
    """Each analytics window is a positive match count, or null for all."""
    for name, n in windows.items():
        if n is None:
            continue
        if isinstance(n, bool) or not isinstance(n, int) or n <= 0:
            raise ValueError(f"report.windows.{name} must be a positive int or null, got {n!r}")


def load_config(path: str = "configs/default.yaml") -> dict:
    p = Path(path)
    if not p.exists():
        raise FileNotFoundError(f"Config not found: {path}")
    with open(p) as f:
        cfg = yaml.safe_load(f) or {}

    for key in REQUIRED_KEYS:
        if key not in cfg:
            raise ValueError(f"Missing config key: {key}")
    if "matches" not in (cfg["paths"] or {}):
        raise ValueError("Missing config key: paths.matches")
    _check_windows((cfg["report"] or {}).get("windows") or {})
    return cfg
