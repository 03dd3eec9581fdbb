"""
Matchbook domain objects.

Every logged match normalizes into these types before any analytics run.
Every module in the project depends on this file; this file depends on
nothing else.

Validation rules are enforced at construction time via __post_init__.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Literal


# ── Enums ──────────────────────────────────────────────────────────────

class Surface(Enum):
    HARD = "hard"
    CLAY = "clay"
    GRASS = "grass"


class MatchType(Enum):
    SINGLES = "singles"
    DOUBLES = "doubles"


class PlayStyle(Enum):
    PUSHER = "pusher"
    BIG_HITTER = "big-hitter"
    SERVE_VOLLEY = "serve-volley"
    COUNTER_PUNCHER = "counter-puncher"
    ALL_COURT = "all-court"
    MOONBALLER = "moonballer"


class MatchResult(Enum):
    WIN = "win"
    LOSS = "loss"
    UNFINISHED = "unfinished"


class InsightType(Enum):
    STRENGTH = "strength"
    WEAKNESS = "weakness"


class AchievementCategory(Enum):
    PERFORMANCE = "performance"
    MENTAL = "mental"
    CONSISTENCY = "consistency"


Grade = Literal["A", "B", "C", "D", "F"]

N_SETS = 3
SCORE_MIN = 0
SCORE_MAX = 10


def _check_score(name: str, value: float | None) -> None:
    if value is not None and not (SCORE_MIN <= value <= SCORE_MAX):
        raise ValueError(f"{name} must be in [{SCORE_MIN}, {SCORE_MAX}], got {value}")


def _check_games(name: str, value: int | None) -> None:
    if value is not None and value < 0:
        raise ValueError(f"{name} must be >= 0, got {value}")


# ── Score ──────────────────────────────────────────────────────────────

@dataclass
class TiebreakScore:
    """Points won by each side in a set's tiebreak."""
    player: int | None = None
    opponent: int | None = None

    def __post_init__(self):
        _check_games("tiebreak player", self.player)
        _check_games("tiebreak opponent", self.opponent)

    @property
    def is_completed(self) -> bool:
        return self.player is not None and self.opponent is not None


@dataclass
class SetScore:
    """Games won by each side in one set slot."""
    player: int | None = None
    opponent: int | None = None
    tiebreak: TiebreakScore | None = None

    def __post_init__(self):
        _check_games("player games", self.player)
        _check_games("opponent games", self.opponent)

    @property
    def is_played(self) -> bool:
        return self.player is not None and self.opponent is not None

    @property
    def has_completed_tiebreak(self) -> bool:
        return self.tiebreak is not None and self.tiebreak.is_completed


@dataclass
class MatchScore:
    """Always three set slots; unplayed slots are empty SetScores."""
    sets: list[SetScore] = field(default_factory=list)

    def __post_init__(self):
        if len(self.sets) > N_SETS:
            raise ValueError(f"a match has at most {N_SETS} sets, got {len(self.sets)}")
        self.sets = list(self.sets) + [SetScore() for _ in range(N_SETS - len(self.sets))]

    @property
    def played_sets(self) -> list[SetScore]:
        return [s for s in self.sets if s.is_played]


def derive_result(score: MatchScore) -> MatchResult:
    """Win/loss/unfinished from set-by-set games.

    Only played sets count. A 1-1 split (abandoned after two sets) is a
    LOSS: the player needs strictly more sets than the opponent to win.
    """
    player_sets = 0
    opponent_sets = 0
    for s in score.played_sets:
        if s.player > s.opponent:
            player_sets += 1
        elif s.opponent > s.player:
            opponent_sets += 1

    if player_sets == 0 and opponent_sets == 0:
        return MatchResult.UNFINISHED
    return MatchResult.WIN if player_sets > opponent_sets else MatchResult.LOSS


# ── Scouting, plan, reflection ─────────────────────────────────────────

@dataclass
class ScoutingNotes:
    weapon: str = ""       # their best shot
    hole: str = ""         # their weakness
    key_to_win: str = ""   # one-sentence strategy for next time


@dataclass
class PlanData:
    """Optional pre-match plan."""
    strategy: str | None = None
    target_weakness: str | None = None
    focus_word: str | None = None
    confidence: float | None = None

    def __post_init__(self):
        _check_score("plan confidence", self.confidence)


@dataclass
class ReflectionData:
    """Optional post-match reflection. All scores are 0-10."""
    energy: float | None = None
    focus: float | None = None
    emotional_control: float | None = None
    confidence: float | None = None
    composite: float | None = None
    execution_score: float | None = None
    stuck_to_plan: bool | None = None
    notes: str | None = None

    def __post_init__(self):
        for name in ("energy", "focus", "emotional_control", "confidence",
                     "composite", "execution_score"):
            _check_score(name, getattr(self, name))


def compute_composite(
    energy: float | None = None,
    focus: float | None = None,
    emotional_control: float | None = None,
    confidence: float | None = None,
) -> float | None:
    """Mental composite: mean of whichever component scores are present,
    rounded half-up to one decimal. None when no component is present."""
    vals = [v for v in (energy, focus, emotional_control, confidence) if v is not None]
    if not vals:
        return None
    return round_half_up(sum(vals) / len(vals), 1)


def round_half_up(value: float, ndigits: int = 0) -> float:
    """Round with halves away from zero for non-negative inputs (12.5 -> 13)."""
    scale = 10 ** ndigits
    return math.floor(value * scale + 0.5) / scale


# ── Match ──────────────────────────────────────────────────────────────

@dataclass
class Match:
    """One logged match. Read-only to every analytics function."""
    match_id: str
    created_at: datetime
    opponent_name: str
    surface: Surface
    score: MatchScore
    match_type: MatchType = MatchType.SINGLES
    result: MatchResult | None = None
    opponent_style: list[PlayStyle] = field(default_factory=list)
    scouting: ScoutingNotes = field(default_factory=ScoutingNotes)
    plan: PlanData | None = None
    reflection: ReflectionData | None = None
    notes: str | None = None

    # Doubles: second opponent
    opponent2_name: str | None = None
    opponent_style2: list[PlayStyle] = field(default_factory=list)
    scouting2: ScoutingNotes | None = None

    def __post_init__(self):
        if not self.match_id:
            raise ValueError("match_id cannot be empty")
        if not self.opponent_name:
            raise ValueError("opponent_name cannot be empty")
        if self.match_type == MatchType.DOUBLES and not self.opponent2_name:
            raise ValueError("doubles match needs opponent2_name")
        # result is a cache of derive_result(score)
        if self.result is None:
            self.result = derive_result(self.score)

    @property
    def is_win(self) -> bool:
        return self.result == MatchResult.WIN

    @property
    def is_loss(self) -> bool:
        return self.result == MatchResult.LOSS

    @property
    def played_sets(self) -> list[SetScore]:
        return self.score.played_sets

    @property
    def sets_played(self) -> int:
        return len(self.played_sets)

    @property
    def is_three_set(self) -> bool:
        return self.sets_played == N_SETS

    @property
    def lost_first_set(self) -> bool:
        s1 = self.score.sets[0]
        return s1.is_played and s1.player < s1.opponent

    @property
    def won_first_set(self) -> bool:
        s1 = self.score.sets[0]
        return s1.is_played and s1.player > s1.opponent

    @property
    def has_completed_tiebreak(self) -> bool:
        return any(s.has_completed_tiebreak for s in self.played_sets)

    @property
    def opponent_label(self) -> str:
        if self.match_type == MatchType.DOUBLES and self.opponent2_name:
            return f"{self.opponent_name} & {self.opponent2_name}"
        return self.opponent_name

    @property
    def all_opponent_styles(self) -> list[PlayStyle]:
        return list(dict.fromkeys(self.opponent_style + self.opponent_style2))


# ── Derived records ────────────────────────────────────────────────────

@dataclass
class Record:
    wins: int = 0
    losses: int = 0


@dataclass
class Streak:
    """Run length of the most recent result, unsigned."""
    result: MatchResult | None
    count: int = 0


@dataclass
class SurfaceStat:
    """Bucketed win rate (used for surfaces and opponent styles)."""
    wins: int
    total: int
    rate: int


@dataclass
class ChartPoint:
    label: str
    value: float


@dataclass
class Insight:
    type: InsightType
    text: str


@dataclass
class GradeCard:
    """A letter grade withheld (grade=None) below its sample-size threshold."""
    label: str
    grade: Grade | None
    note: str


@dataclass
class Achievement:
    id: str
    title: str
    description: str
    category: AchievementCategory
    unlocked: bool
    progress: int
    progress_text: str
    unlocked_at: datetime | None = None

    def __post_init__(self):
        if not (0 <= self.progress <= 100):
            raise ValueError(f"progress must be in [0, 100], got {self.progress}")
