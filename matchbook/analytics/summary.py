"""
Narrative summary for a single match.

Produces 2-3 short paragraphs: outcome, tactics (when any plan, reflection
or scouting data exists) and exactly one recommendation or takeaway.
"""

from matchbook.core.schema import Match, MatchResult, Surface

SURFACE_LABEL = {
    Surface.HARD: "hard court",
    Surface.CLAY: "clay",
    Surface.GRASS: "grass",
}

SIMPLIFY = (
    "Recommendation: Simplify your approach. Pick 1–2 core patterns and commit "
    "to them completely. Clarity under pressure beats complexity."
)
MENTAL_ROUTINE = (
    "Recommendation: Focus on your pre-match mental routine. A short centering "
    "ritual (breathing, a focus word, physical activation) can raise your mental floor."
)
RECOVERY = (
    "Recommendation: Recovery was a limiting factor today. Prioritise sleep, "
    "hydration, and physical preparation before your next match."
)
EMOTIONAL_ANCHOR = (
    "Recommendation: Work on emotional anchoring between points. A single reset "
    "word or physical cue can keep you tactically sharp after errors."
)
REPLICATE = (
    "Takeaway: Excellent execution today. This is the standard. Replicate the "
    "same game plan focus next match."
)
BUILD_ON_IT = "Takeaway: Build on this result. Log your reflection to track what's driving the wins."
USE_AS_DATA = (
    "Takeaway: Use this match as data. Identify one specific breakdown and "
    "address it in your next session."
)


def _fmt(score: float) -> str:
    """9.0 -> '9', 7.5 -> '7.5'."""
    return f"{score:g}"


def _outcome(match: Match) -> str:
    surface = SURFACE_LABEL[match.surface]
    opponent = match.opponent_label
    three = match.is_three_set

    if match.result == MatchResult.WIN:
        return (
            f"{'Hard-fought' if three else 'Solid'} victory over {opponent} on {surface}. "
            + ("Battling through three sets shows real resilience."
               if three else "A clean result to build on.")
        )
    if match.result == MatchResult.UNFINISHED:
        return (
            f"Match against {opponent} on {surface} was left unfinished. "
            "Log the final score when you can to keep your record accurate."
        )
    return (
        f"Went down to {opponent} on {surface}"
        f"{' in a closely-contested three-setter' if three else ''}. "
        "Every match is data. The key is what you take forward."
    )


def _tactical(match: Match) -> str | None:
    refl = match.reflection
    execution = refl.execution_score if refl else None
    mental = refl.composite if refl else None
    stuck = refl.stuck_to_plan if refl else None
    plan = match.plan.strategy if match.plan else None
    key = match.scouting.key_to_win if match.scouting else ""

    clauses = []
    if plan:
        clauses.append(f'the game plan centred on "{plan}"')
    if execution is not None:
        if execution >= 8:
            band = "excellent"
        elif execution >= 6:
            band = "solid"
        elif execution <= 4:
            band = "inconsistent"
        else:
            band = "mixed"
        clauses.append(f"execution was {band} ({_fmt(execution)}/10)")
    if stuck is False:
        clauses.append("the game plan wasn't fully followed at key moments")
    if mental is not None:
        if mental >= 8:
            clauses.append(f"mental composure was excellent ({_fmt(mental)}/10)")
        elif mental <= 5:
            clauses.append(f"mental performance was a challenge ({_fmt(mental)}/10)")

    if clauses:
        text = f"Tactically, {'; '.join(clauses)}."
        if key:
            text += f" Key reminder: {key}"
        return text
    if key:
        return f"Key reminder for the rematch: {key}"
    return None


def _takeaway(match: Match) -> str:
    refl = match.reflection
    execution = refl.execution_score if refl else None
    mental = refl.composite if refl else None
    energy = refl.energy if refl else None
    emotional = refl.emotional_control if refl else None
    win = match.is_win

    if not win and execution is not None and execution < 6:
        return SIMPLIFY
    if mental is not None and mental < 6:
        return MENTAL_ROUTINE
    if energy is not None and energy < 6:
        return RECOVERY
    if emotional is not None and emotional < 6:
        return EMOTIONAL_ANCHOR
    if win and execution is not None and execution >= 8:
        return REPLICATE
    if win:
        return BUILD_ON_IT
    return USE_AS_DATA


def generate_match_summary(match: Match) -> list[str]:
    """Ordered narrative paragraphs for one match."""
    paragraphs = [_outcome(match)]
    tactical = _tactical(match)
    if tactical:
        paragraphs.append(tactical)
    paragraphs.append(_takeaway(match))
    return paragraphs
