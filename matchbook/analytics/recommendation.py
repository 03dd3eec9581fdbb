"""Single "recommended focus" line from the last five matches."""

from matchbook.core.schema import Match
from matchbook.analytics.aggregate import (
    execution_average, mental_average, most_recent, win_rate,
)

RECENT_WINDOW = 5

NO_DATA = "Start logging matches to unlock personalized recommendations."
MENTAL_ROUTINE = "Prioritize your pre-match mental routine. Mental scores are trending low."
SIMPLIFY_PLANS = "Simplify your game plans for the next 3 matches. Focus on 1–2 key tactics only."
HIGH_PERCENTAGE = "Focus on high-percentage patterns. Keep it simple and trust your instincts."
MAINTAIN = "You're on a roll. Maintain consistency and keep trusting your game plan."
PROCESS = "Stay process-oriented. Log reflections after each match to unlock deeper insights."


def recommended_focus(matches: list[Match]) -> str:
    """First matching rule wins: mental < 6, execution < 6, win rate <= 40,
    win rate >= 80, else the process fallback."""
    if not matches:
        return NO_DATA
    recent = most_recent(matches, RECENT_WINDOW)

    mental = mental_average(recent)
    execution = execution_average(recent)
    rate = win_rate(recent)

    if mental is not None and mental < 6:
        return MENTAL_ROUTINE
    if execution is not None and execution < 6:
        return SIMPLIFY_PLANS
    if rate <= 40:
        return HIGH_PERCENTAGE
    if rate >= 80:
        return MAINTAIN
    return PROCESS
