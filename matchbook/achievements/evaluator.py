"""
Achievement evaluation.

Achievements are a pure projection of the full match history: recomputed
on every call, never stored. State is "ever achieved", so a later loss
does not re-lock a streak achievement.
"""

import logging
from dataclasses import dataclass

from matchbook.core.schema import Achievement, AchievementCategory, Match
from matchbook.achievements.registry import get_collector
from matchbook.analytics.aggregate import oldest_first, percent

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class AchievementDefinition:
    id: str
    title: str
    description: str
    category: AchievementCategory
    source: str          # collector name
    target: int
    unit: str = ""       # caption suffix for counted achievements
    locked_text: str | None = None  # set for one-shot achievements

    @property
    def is_binary(self) -> bool:
        return self.locked_text is not None


DEFINITIONS: list[AchievementDefinition] = [
    AchievementDefinition(
        "streak_5", "On a Roll", "Win 5 matches in a row.",
        AchievementCategory.PERFORMANCE, "win_streak", 5, unit="win streak",
    ),
    AchievementDefinition(
        "streak_10", "Unstoppable", "Win 10 matches in a row.",
        AchievementCategory.PERFORMANCE, "win_streak", 10, unit="win streak",
    ),
    AchievementDefinition(
        "comeback", "Comeback King", "Win a match after dropping the first set.",
        AchievementCategory.PERFORMANCE, "comebacks", 1, locked_text="Not yet",
    ),
    AchievementDefinition(
        "clutch_3", "Clutch Player",
        "Win 3 clutch matches (decided by tiebreak or 3rd set).",
        AchievementCategory.PERFORMANCE, "clutch_wins", 3, unit="clutch wins",
    ),
    AchievementDefinition(
        "mental_control_5", "Ice in the Veins",
        "Log 5 matches with Emotional Control ≥ 8.",
        AchievementCategory.MENTAL, "high_emotional_control", 5, unit="matches",
    ),
    AchievementDefinition(
        "grit_win", "Mind Over Matter", "Win a match with a Mental Score ≤ 5.",
        AchievementCategory.MENTAL, "grit_wins", 1, locked_text="Win with Mental ≤ 5",
    ),
    AchievementDefinition(
        "execution_3", "Precision Player",
        "Log 3 matches with Execution Score ≥ 8.",
        AchievementCategory.CONSISTENCY, "high_execution", 3, unit="matches",
    ),
    AchievementDefinition(
        "plan_5", "Disciplined Tactician",
        "Stick to your game plan in 5 different matches.",
        AchievementCategory.CONSISTENCY, "stuck_to_plan", 5, unit="matches",
    ),
]


def evaluate(defn: AchievementDefinition, qualifying: list[Match]) -> Achievement:
    """Project one definition onto its chronologically ordered qualifying matches."""
    count = len(qualifying)
    capped = min(count, defn.target)
    unlocked = count >= defn.target

    if defn.is_binary:
        caption = "Unlocked!" if unlocked else defn.locked_text
    else:
        caption = f"{capped} / {defn.target} {defn.unit}"

    return Achievement(
        id=defn.id,
        title=defn.title,
        description=defn.description,
        category=defn.category,
        unlocked=unlocked,
        unlocked_at=qualifying[defn.target - 1].created_at if unlocked else None,
        progress=percent(capped, defn.target),
        progress_text=caption,
    )


def compute_achievements(matches: list[Match]) -> list[Achievement]:
    """All achievements in definition order."""
    history = oldest_first(matches)
    collected: dict[str, list[Match]] = {}
    for defn in DEFINITIONS:
        if defn.source not in collected:
            collected[defn.source] = get_collector(defn.source)(history)

    achievements = [evaluate(d, collected[d.source]) for d in DEFINITIONS]
    n_unlocked = sum(1 for a in achievements if a.unlocked)
    log.debug(f"Achievements: {n_unlocked}/{len(achievements)} unlocked over {len(matches)} matches")
    return achievements
