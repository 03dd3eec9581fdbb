"""
Qualifying-match collectors.

Every collector receives matches sorted oldest first and returns the
qualifying ones in that same order, so list[i] is the match that brought
the count to i + 1.
"""

from matchbook.core.schema import Match
from matchbook.achievements.registry import collector

HIGH_EMOTIONAL_CONTROL = 8
GRIT_MENTAL_MAX = 5
HIGH_EXECUTION = 8


@collector("win_streak")
def win_streak_milestones(history: list[Match]) -> list[Match]:
    """Matches at which the longest-ever win streak first reached 1, 2, 3, ...

    len(result) is the longest streak observed; result[4] is the win that
    first completed a 5-match streak.
    """
    milestones: list[Match] = []
    cur = 0
    for m in history:
        if m.is_win:
            cur += 1
            if cur > len(milestones):
                milestones.append(m)
        else:
            cur = 0
    return milestones


@collector("comebacks")
def comebacks(history: list[Match]) -> list[Match]:
    return [m for m in history if m.is_win and m.lost_first_set]


@collector("clutch_wins")
def clutch_wins(history: list[Match]) -> list[Match]:
    """Wins that went three sets or had a completed tiebreak."""
    return [
        m for m in history
        if m.is_win and (m.is_three_set or m.has_completed_tiebreak)
    ]


@collector("high_emotional_control")
def high_emotional_control(history: list[Match]) -> list[Match]:
    return [
        m for m in history
        if m.reflection is not None
        and m.reflection.emotional_control is not None
        and m.reflection.emotional_control >= HIGH_EMOTIONAL_CONTROL
    ]


@collector("grit_wins")
def grit_wins(history: list[Match]) -> list[Match]:
    """Wins on a low mental score. No composite means no grit win."""
    return [
        m for m in history
        if m.is_win
        and m.reflection is not None
        and m.reflection.composite is not None
        and m.reflection.composite <= GRIT_MENTAL_MAX
    ]


@collector("high_execution")
def high_execution(history: list[Match]) -> list[Match]:
    return [
        m for m in history
        if m.reflection is not None
        and m.reflection.execution_score is not None
        and m.reflection.execution_score >= HIGH_EXECUTION
    ]


@collector("stuck_to_plan")
def stuck_to_plan(history: list[Match]) -> list[Match]:
    return [
        m for m in history
        if m.reflection is not None and m.reflection.stuck_to_plan is True
    ]
