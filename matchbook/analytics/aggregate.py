"""
Aggregate statistics over a list of matches.

Counts (win rate, record, surface/style buckets) are order-independent.
Anything that needs "most recent" sorts by created_at itself rather than
trusting caller order.
"""

import logging

import numpy as np

from matchbook.core.schema import (
    Match, MatchResult, PlayStyle, Record, ScoutingNotes, Streak, Surface,
    SurfaceStat, round_half_up,
)

log = logging.getLogger(__name__)


# ── Ordering ───────────────────────────────────────────────────────────

def newest_first(matches: list[Match]) -> list[Match]:
    """Sort by created_at descending. Ties keep caller order."""
    return sorted(matches, key=lambda m: m.created_at, reverse=True)


def oldest_first(matches: list[Match]) -> list[Match]:
    return sorted(matches, key=lambda m: m.created_at)


def most_recent(matches: list[Match], n: int | None) -> list[Match]:
    """The n newest matches, newest first. n=None means all."""
    ordered = newest_first(matches)
    return ordered if n is None else ordered[:n]


# ── Core stats ─────────────────────────────────────────────────────────

def percent(part: int, total: int) -> int:
    """Integer percentage, halves rounded up. 0 when total is 0."""
    if total == 0:
        return 0
    return int(round_half_up(part / total * 100))


def win_rate(matches: list[Match]) -> int:
    return percent(sum(1 for m in matches if m.is_win), len(matches))


def record(matches: list[Match]) -> Record:
    """Wins and losses. Unfinished matches count toward neither."""
    return Record(
        wins=sum(1 for m in matches if m.is_win),
        losses=sum(1 for m in matches if m.is_loss),
    )


def current_streak_detail(matches: list[Match]) -> Streak:
    """Length of the run of the newest match's result, unsigned."""
    if not matches:
        return Streak(result=None, count=0)
    ordered = newest_first(matches)
    first = ordered[0].result
    n = 0
    for m in ordered:
        if m.result != first:
            break
        n += 1
    return Streak(result=first, count=n)


def current_streak(matches: list[Match]) -> int:
    """+n for a run of wins, -n for losses, 0 when empty or the newest
    match is unfinished (see current_streak_detail for that run)."""
    streak = current_streak_detail(matches)
    if streak.result == MatchResult.WIN:
        return streak.count
    if streak.result == MatchResult.LOSS:
        return -streak.count
    return 0


def _bucket_rates(buckets: dict) -> dict:
    return {
        k: SurfaceStat(wins=w, total=t, rate=percent(w, t))
        for k, (w, t) in buckets.items()
    }


def surface_win_rates(matches: list[Match]) -> dict[Surface, SurfaceStat]:
    """Per-surface wins/total/rate. Surfaces with no matches are omitted."""
    buckets: dict[Surface, list[int]] = {}
    for m in matches:
        b = buckets.setdefault(m.surface, [0, 0])
        b[0] += int(m.is_win)
        b[1] += 1
    return _bucket_rates(buckets)


def style_win_rates(matches: list[Match]) -> dict[PlayStyle, SurfaceStat]:
    """Per opponent play-style tag. A multi-tag match counts toward each tag."""
    buckets: dict[PlayStyle, list[int]] = {}
    for m in matches:
        for style in m.all_opponent_styles:
            b = buckets.setdefault(style, [0, 0])
            b[0] += int(m.is_win)
            b[1] += 1
    return _bucket_rates(buckets)


# ── Averages ───────────────────────────────────────────────────────────

def _reflection_average(matches: list[Match], attr: str) -> float | None:
    vals = [
        getattr(m.reflection, attr) for m in matches
        if m.reflection is not None and getattr(m.reflection, attr) is not None
    ]
    if not vals:
        return None
    return round_half_up(float(np.mean(vals)), 1)


def mental_average(matches: list[Match]) -> float | None:
    """Mean composite mental score, one decimal. None without data (0 is a real score)."""
    return _reflection_average(matches, "composite")


def execution_average(matches: list[Match]) -> float | None:
    return _reflection_average(matches, "execution_score")


# ── Head-to-head ───────────────────────────────────────────────────────

def matches_against(matches: list[Match], name: str) -> list[Match]:
    """Matches where `name` was on the other side of the net (either slot)."""
    return [m for m in matches if name in (m.opponent_name, m.opponent2_name)]


def opponent_breakdown(matches: list[Match], name: str) -> dict:
    """Record, rates and latest scouting against one opponent."""
    vs = matches_against(matches, name)
    latest: ScoutingNotes | None = None
    if vs:
        newest = newest_first(vs)[0]
        latest = newest.scouting if newest.opponent_name == name else newest.scouting2
    log.debug(f"Opponent breakdown for {name!r}: {len(vs)} matches")
    return {
        "opponent": name,
        "matches": len(vs),
        "record": record(vs),
        "win_rate": win_rate(vs),
        "mental_average": mental_average(vs),
        "execution_average": execution_average(vs),
        "surface_win_rates": surface_win_rates(vs),
        "latest_scouting": latest,
    }
