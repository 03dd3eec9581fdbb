"""
Strength/weakness insights from cohort comparisons.

Each rule splits the matches on one metric and reports only when both
cohorts are large enough and the win-rate gap is wide. Rules are
independent; output order follows the rule order below.
"""

import logging
from typing import Callable

from matchbook.core.schema import Insight, InsightType, Match
from matchbook.analytics.aggregate import percent, win_rate
from matchbook.analytics.grading import best_surface

log = logging.getLogger(__name__)

MIN_MATCHES = 3
MIN_WITH_METRIC = 4
MIN_COHORT = 2
MIN_GAP = 20
HIGH_SCORE = 7
LOW_ENERGY = 6
LOW_ENERGY_LOSS_RATE = 60
BEST_SURFACE_RATE = 60
MIN_THREE_SET = 3
THREE_SET_WEAK = 40
THREE_SET_STRONG = 65


def _with(matches: list[Match], attr: str) -> list[Match]:
    return [
        m for m in matches
        if m.reflection is not None and getattr(m.reflection, attr) is not None
    ]


def _split(
    matches: list[Match], attr: str, threshold: float,
) -> tuple[int, int] | None:
    """Win rates of the >= threshold and < threshold cohorts, or None when
    either side is too small to compare."""
    pool = _with(matches, attr)
    if len(pool) < MIN_WITH_METRIC:
        return None
    high = [m for m in pool if getattr(m.reflection, attr) >= threshold]
    low = [m for m in pool if getattr(m.reflection, attr) < threshold]
    if len(high) < MIN_COHORT or len(low) < MIN_COHORT:
        return None
    return win_rate(high), win_rate(low)


def _mental(matches: list[Match]) -> list[Insight]:
    rates = _split(matches, "composite", HIGH_SCORE)
    if rates is None:
        return []
    hi, lo = rates
    if hi - lo >= MIN_GAP:
        return [Insight(
            InsightType.STRENGTH,
            f"You win {hi}% of matches when your Mental Score ≥ {HIGH_SCORE} (vs {lo}% below).",
        )]
    return []


def _execution(matches: list[Match]) -> list[Insight]:
    rates = _split(matches, "execution_score", HIGH_SCORE)
    if rates is None:
        return []
    hi, lo = rates
    if hi - lo >= MIN_GAP:
        return [Insight(
            InsightType.STRENGTH,
            f"Execution score ≥ {HIGH_SCORE} correlates with {hi}% win rate (vs {lo}% below).",
        )]
    if lo - hi >= MIN_GAP:
        return [Insight(
            InsightType.WEAKNESS,
            f"Execution score below {HIGH_SCORE} correlates with {100 - lo}% loss rate.",
        )]
    return []


def _energy(matches: list[Match]) -> list[Insight]:
    pool = _with(matches, "energy")
    if len(pool) < MIN_WITH_METRIC:
        return []
    low = [m for m in pool if m.reflection.energy < LOW_ENERGY]
    if len(low) < MIN_COHORT:
        return []
    lose_rate = percent(sum(1 for m in low if m.is_loss), len(low))
    if lose_rate >= LOW_ENERGY_LOSS_RATE:
        return [Insight(
            InsightType.WEAKNESS,
            f"Energy below {LOW_ENERGY} correlates with {lose_rate}% loss rate.",
        )]
    return []


def _surface(matches: list[Match]) -> list[Insight]:
    best = best_surface(matches)
    if best is None or best[1] < BEST_SURFACE_RATE:
        return []
    surface, rate = best
    return [Insight(
        InsightType.STRENGTH,
        f"Your best surface is {surface.value.capitalize()} ({rate}% win rate).",
    )]


def _three_set(matches: list[Match]) -> list[Insight]:
    three_set = [m for m in matches if m.is_three_set]
    if len(three_set) < MIN_THREE_SET:
        return []
    rate = win_rate(three_set)
    if rate < THREE_SET_WEAK:
        return [Insight(InsightType.WEAKNESS, f"You lose {100 - rate}% of 3-set matches.")]
    if rate >= THREE_SET_STRONG:
        return [Insight(
            InsightType.STRENGTH,
            f"You win {rate}% of 3-set battles. Strong in long matches.",
        )]
    return []


RULES: list[Callable[[list[Match]], list[Insight]]] = [
    _mental,
    _execution,
    _energy,
    _surface,
    _three_set,
]


def generate_insights(matches: list[Match]) -> list[Insight]:
    """All qualifying insights. Empty below 3 matches regardless of content."""
    if len(matches) < MIN_MATCHES:
        return []
    insights = [i for rule in RULES for i in rule(matches)]
    log.debug(f"Generated {len(insights)} insights from {len(matches)} matches")
    return insights


def _first_of(matches: list[Match], kind: InsightType) -> str | None:
    return next((i.text for i in generate_insights(matches) if i.type == kind), None)


def biggest_strength(matches: list[Match]) -> str | None:
    return _first_of(matches, InsightType.STRENGTH)


def biggest_weakness(matches: list[Match]) -> str | None:
    return _first_of(matches, InsightType.WEAKNESS)
