"""Shared match factory for the test suite."""

from datetime import datetime, timedelta, timezone

import pytest

from matchbook.core.schema import (
    Match, MatchScore, MatchType, PlanData, ReflectionData, ScoutingNotes,
    SetScore, Surface, TiebreakScore,
)

BASE_DATE = datetime(2024, 3, 1, 18, 0, tzinfo=timezone.utc)

WIN_SETS = [(6, 4), (6, 3)]
LOSS_SETS = [(4, 6), (3, 6)]


def build_match(
    day: int = 0,
    sets=None,
    surface: Surface = Surface.HARD,
    opponent: str = "Alex",
    match_id: str = None,
    reflection: dict = None,
    plan: dict = None,
    key_to_win: str = "",
    styles=None,
    tiebreaks: dict = None,
    **kwargs,
) -> Match:
    """Match on BASE_DATE + day. sets is a list of (player, opponent) games;
    tiebreaks maps set index -> (player, opponent) points."""
    set_scores = []
    for i, (p, o) in enumerate(sets if sets is not None else WIN_SETS):
        tb = None
        if tiebreaks and i in tiebreaks:
            tb = TiebreakScore(*tiebreaks[i])
        set_scores.append(SetScore(player=p, opponent=o, tiebreak=tb))
    return Match(
        match_id=match_id or f"m{day}",
        created_at=BASE_DATE + timedelta(days=day),
        opponent_name=opponent,
        surface=surface,
        score=MatchScore(sets=set_scores),
        opponent_style=list(styles or []),
        scouting=ScoutingNotes(key_to_win=key_to_win),
        plan=PlanData(**plan) if plan is not None else None,
        reflection=ReflectionData(**reflection) if reflection is not None else None,
        **kwargs,
    )


@pytest.fixture
def make_match():
    return build_match


@pytest.fixture
def doubles_match():
    return build_match(
        day=3,
        opponent="Sam",
        match_type=MatchType.DOUBLES,
        opponent2_name="Jo",
    )
