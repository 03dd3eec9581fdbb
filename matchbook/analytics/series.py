"""Chronological chart series (oldest first) for trend plots."""

import logging

import numpy as np
import pandas as pd

from matchbook.core.schema import ChartPoint, Match, round_half_up
from matchbook.analytics.aggregate import oldest_first

log = logging.getLogger(__name__)

ROLLING_WINDOW = 5


def date_label(match: Match) -> str:
    """Short date, e.g. 'Mar 5'."""
    return f"{match.created_at:%b} {match.created_at.day}"


def win_rate_series(matches: list[Match], window: int = ROLLING_WINDOW) -> list[ChartPoint]:
    """Rolling win % over the trailing `window` matches ending at each match."""
    ordered = oldest_first(matches)
    if not ordered:
        return []
    wins = pd.Series(np.array([1.0 if m.is_win else 0.0 for m in ordered]))
    rolling = wins.rolling(window, min_periods=1).mean() * 100
    log.debug(f"Rolling win rate over {len(ordered)} matches, window {window}")
    return [
        ChartPoint(label=date_label(m), value=int(round_half_up(rate)))
        for m, rate in zip(ordered, rolling)
    ]


def _field_series(matches: list[Match], attr: str) -> list[ChartPoint]:
    return [
        ChartPoint(label=date_label(m), value=getattr(m.reflection, attr))
        for m in oldest_first(matches)
        if m.reflection is not None and getattr(m.reflection, attr) is not None
    ]


def mental_series(matches: list[Match]) -> list[ChartPoint]:
    return _field_series(matches, "composite")


def execution_series(matches: list[Match]) -> list[ChartPoint]:
    return _field_series(matches, "execution_score")
