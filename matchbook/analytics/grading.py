"""
Letter grades for derived performance metrics.

Grades are withheld (None) below each metric's minimum sample size rather
than computed from too few matches.
"""

import logging
from collections import Counter

from matchbook.core.schema import Grade, GradeCard, Match, Surface
from matchbook.analytics.aggregate import (
    execution_average, mental_average, most_recent, percent,
    surface_win_rates, win_rate,
)

log = logging.getLogger(__name__)

GRADE_THRESHOLDS: list[tuple[float, Grade]] = [
    (80, "A"),
    (60, "B"),
    (40, "C"),
    (20, "D"),
]

PROFILE_WINDOW = 10
MOMENTUM_WINDOW = 5
MIN_CONSISTENCY_SAMPLES = 3
MIN_CLUTCH_SAMPLES = 2
MIN_MOMENTUM_SAMPLES = 3
CONSISTENT_EXECUTION = 7
MIN_LOSSES_FOR_PATTERN = 3


def grade(value: float, max_value: float = 10) -> Grade:
    """Map value/max_value to A-F. Total: always returns a letter."""
    if max_value <= 0:
        return "F"
    pct = value * 100 / max_value
    for cutoff, letter in GRADE_THRESHOLDS:
        if pct >= cutoff:
            return letter
    return "F"


def _fmt(value: float) -> str:
    return f"{value:g}"


def consistency_card(recent: list[Match]) -> GradeCard:
    with_exec = [
        m for m in recent
        if m.reflection is not None and m.reflection.execution_score is not None
    ]
    if len(with_exec) < MIN_CONSISTENCY_SAMPLES:
        return GradeCard("Consistency", None, "Need 3+ matches with reflection")
    good = sum(1 for m in with_exec if m.reflection.execution_score >= CONSISTENT_EXECUTION)
    return GradeCard(
        "Consistency",
        grade(percent(good, len(with_exec)), 100),
        f"{good}/{len(with_exec)} matches exec ≥ {CONSISTENT_EXECUTION}",
    )


def clutch_card(recent: list[Match]) -> GradeCard:
    three_set = [m for m in recent if m.is_three_set]
    if len(three_set) < MIN_CLUTCH_SAMPLES:
        return GradeCard("Clutch", None, "Need 2+ 3-set matches")
    wins = sum(1 for m in three_set if m.is_win)
    return GradeCard(
        "Clutch",
        grade(win_rate(three_set), 100),
        f"{wins}W of {len(three_set)} 3-set matches",
    )


def mental_card(recent: list[Match]) -> GradeCard:
    avg = mental_average(recent)
    if avg is None:
        return GradeCard("Mental", None, "No mental data yet")
    return GradeCard("Mental", grade(avg), f"{_fmt(avg)}/10 avg")


def execution_card(recent: list[Match]) -> GradeCard:
    avg = execution_average(recent)
    if avg is None:
        return GradeCard("Execution", None, "No execution data yet")
    return GradeCard("Execution", grade(avg), f"{_fmt(avg)}/10 avg")


def momentum_card(last5: list[Match]) -> GradeCard:
    if len(last5) < MIN_MOMENTUM_SAMPLES:
        return GradeCard("Momentum", None, "Need 3+ matches")
    wins = sum(1 for m in last5 if m.is_win)
    return GradeCard(
        "Momentum",
        grade(win_rate(last5), 100),
        f"{wins}W of last {len(last5)}",
    )


def performance_grades(matches: list[Match]) -> dict[str, GradeCard]:
    """Consistency, clutch, mental, execution and momentum grades.

    The first four read the last 10 matches, momentum the last 5.
    """
    last10 = most_recent(matches, PROFILE_WINDOW)
    last5 = most_recent(matches, MOMENTUM_WINDOW)
    cards = [
        consistency_card(last10),
        clutch_card(last10),
        mental_card(last10),
        execution_card(last10),
        momentum_card(last5),
    ]
    withheld = [c.label for c in cards if c.grade is None]
    if withheld:
        log.debug(f"Grades withheld (insufficient data): {', '.join(withheld)}")
    return {c.label.lower(): c for c in cards}


# ── Identity snapshot ──────────────────────────────────────────────────

def best_surface(matches: list[Match], min_matches: int = 2) -> tuple[Surface, int] | None:
    """Highest-rate surface with at least min_matches. First seen wins ties."""
    best: tuple[Surface, int] | None = None
    for surface, stat in surface_win_rates(matches).items():
        if stat.total >= min_matches and stat.rate > (best[1] if best else 0):
            best = (surface, stat.rate)
    return best


def loss_pattern(matches: list[Match]) -> str | None:
    losses = [m for m in matches if m.is_loss]
    if len(losses) < MIN_LOSSES_FOR_PATTERN:
        return None
    after_first = sum(1 for m in losses if m.won_first_set)
    in_three = sum(1 for m in losses if m.is_three_set)
    if after_first / len(losses) >= 0.5:
        return "Often loses after winning the first set"
    if in_three / len(losses) >= 0.5:
        return "Often drops close 3-set matches"
    return "Tends to lose in straight sets"


def identity_snapshot(matches: list[Match]) -> dict:
    """Most-faced opponent style, best surface and dominant loss pattern.

    Doubles matches count the styles of both opponents, as in style_win_rates.
    """
    style_counts = Counter(s for m in matches for s in m.all_opponent_styles)
    top = style_counts.most_common(1)
    surface = best_surface(matches)
    return {
        "top_opponent_style": top[0][0] if top else None,
        "best_surface": surface[0] if surface else None,
        "best_surface_rate": surface[1] if surface else None,
        "loss_pattern": loss_pattern(matches),
    }
