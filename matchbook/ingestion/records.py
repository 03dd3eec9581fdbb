"""
Match record loader.

Parses rows exported from the match store into validated Match objects.
Two layouts are accepted:

  JSON: a list of {"id", "created_at", "data": {...}} rows, where data holds
        the camelCase match payload (score.sets[i].player, reflection.composite,
        scouting.keyToWin, ...). Flat objects without "data" also work.
  CSV:  one row per match with snake_case columns
        (set1_player, set1_tb_player, execution_score, key_to_win, ...).

The stored "result" is a cache of derive_result(score). With
rederive_results=True (default) it is recomputed and any disagreement is
logged.
"""

import json
import logging
from pathlib import Path
from typing import Mapping

import pandas as pd

from matchbook.core.schema import (
    Match, MatchResult, MatchScore, MatchType, PlanData, PlayStyle,
    ReflectionData, ScoutingNotes, SetScore, Surface, TiebreakScore,
    compute_composite, derive_result, N_SETS,
)
from matchbook.core.interfaces import BaseLoader
from matchbook.ingestion.base import (
    find_column, get_value, parse_timestamp, safe_bool, safe_float, safe_int,
    safe_str, split_tags,
)
from matchbook.ingestion.validator import DataValidator

log = logging.getLogger(__name__)

SURFACE_MAP = {s.value: s for s in Surface}
MATCH_TYPE_MAP = {t.value: t for t in MatchType}
STYLE_MAP = {s.value: s for s in PlayStyle}
RESULT_MAP = {r.value: r for r in MatchResult}


def parse_styles(val) -> list[PlayStyle]:
    styles = []
    for tag in split_tags(val):
        style = STYLE_MAP.get(tag.lower())
        if style is None:
            log.warning(f"Unknown play style tag '{tag}', ignoring")
            continue
        styles.append(style)
    return styles


def parse_surface(val) -> Surface:
    s = safe_str(val, "")
    surface = SURFACE_MAP.get(s.lower())
    if surface is None:
        raise ValueError(f"unknown surface '{val}'")
    return surface


def _build_reflection(
    energy, focus, emotional_control, confidence, composite,
    execution_score, stuck_to_plan, notes,
) -> ReflectionData | None:
    values = (energy, focus, emotional_control, confidence, composite,
              execution_score, stuck_to_plan, notes)
    if all(v is None for v in values):
        return None
    if composite is None:
        # Same composite the app writes at save time
        composite = compute_composite(energy, focus, emotional_control, confidence)
    return ReflectionData(
        energy=energy,
        focus=focus,
        emotional_control=emotional_control,
        confidence=confidence,
        composite=composite,
        execution_score=execution_score,
        stuck_to_plan=stuck_to_plan,
        notes=notes,
    )


def _build_plan(strategy, target_weakness, focus_word, confidence) -> PlanData | None:
    if all(v is None for v in (strategy, target_weakness, focus_word, confidence)):
        return None
    return PlanData(
        strategy=strategy,
        target_weakness=target_weakness,
        focus_word=focus_word,
        confidence=confidence,
    )


# ── JSON rows (app payload) ────────────────────────────────────────────

def _json_set(raw: Mapping | None) -> SetScore:
    if not raw:
        return SetScore()
    tb_raw = raw.get("tiebreak")
    tiebreak = None
    if tb_raw:
        tiebreak = TiebreakScore(
            player=safe_int(tb_raw.get("player")),
            opponent=safe_int(tb_raw.get("opponent")),
        )
    return SetScore(
        player=safe_int(raw.get("player")),
        opponent=safe_int(raw.get("opponent")),
        tiebreak=tiebreak,
    )


def _json_scouting(raw: Mapping | None) -> ScoutingNotes | None:
    if raw is None:
        return None
    return ScoutingNotes(
        weapon=safe_str(raw.get("weapon"), ""),
        hole=safe_str(raw.get("hole"), ""),
        key_to_win=safe_str(raw.get("keyToWin"), ""),
    )


def parse_json_row(row: Mapping) -> tuple[Match, MatchResult | None]:
    """One stored row → (Match, stored result or None)."""
    data = row.get("data") or row
    sets = (data.get("score") or {}).get("sets") or []
    plan = data.get("plan") or {}
    refl = data.get("reflection") or {}

    match = Match(
        match_id=str(get_value(row, ["id", "match_id"]) or ""),
        created_at=parse_timestamp(get_value(row, ["created_at", "createdAt"])
                                   or data.get("createdAt")),
        opponent_name=safe_str(data.get("opponentName"), ""),
        surface=parse_surface(data.get("surface")),
        match_type=MATCH_TYPE_MAP.get(safe_str(data.get("matchType"), "singles"),
                                      MatchType.SINGLES),
        score=MatchScore(sets=[_json_set(s) for s in sets[:N_SETS]]),
        opponent_style=parse_styles(data.get("opponentStyle")),
        scouting=_json_scouting(data.get("scouting")) or ScoutingNotes(),
        plan=_build_plan(
            safe_str(plan.get("strategy")),
            safe_str(plan.get("targetWeakness")),
            safe_str(plan.get("focusWord")),
            safe_float(plan.get("confidence")),
        ),
        reflection=_build_reflection(
            safe_float(refl.get("energy")),
            safe_float(refl.get("focus")),
            safe_float(refl.get("emotionalControl")),
            safe_float(refl.get("confidence")),
            safe_float(refl.get("composite")),
            safe_float(refl.get("executionScore")),
            safe_bool(refl.get("stuckToPlan")),
            safe_str(refl.get("notes")),
        ),
        notes=safe_str(data.get("notes")),
        opponent2_name=safe_str(data.get("opponent2Name")),
        opponent_style2=parse_styles(data.get("opponentStyle2")),
        scouting2=_json_scouting(data.get("scouting2")),
    )
    stored = RESULT_MAP.get(safe_str(data.get("result"), ""))
    return match, stored


# ── CSV rows (flat export) ─────────────────────────────────────────────

def _csv_set(row: pd.Series, n: int) -> SetScore:
    tb_player = safe_int(get_value(row, [f"set{n}_tb_player"]))
    tb_opponent = safe_int(get_value(row, [f"set{n}_tb_opponent"]))
    tiebreak = None
    if tb_player is not None or tb_opponent is not None:
        tiebreak = TiebreakScore(player=tb_player, opponent=tb_opponent)
    return SetScore(
        player=safe_int(get_value(row, [f"set{n}_player"])),
        opponent=safe_int(get_value(row, [f"set{n}_opponent"])),
        tiebreak=tiebreak,
    )


def _csv_scouting(row: pd.Series, suffix: str = "") -> ScoutingNotes | None:
    weapon = safe_str(get_value(row, [f"weapon{suffix}"]))
    hole = safe_str(get_value(row, [f"hole{suffix}"]))
    key = safe_str(get_value(row, [f"key_to_win{suffix}"]))
    if weapon is None and hole is None and key is None:
        return None
    return ScoutingNotes(weapon=weapon or "", hole=hole or "", key_to_win=key or "")


def parse_csv_row(row: pd.Series, created_col: str = "created_at") -> tuple[Match, MatchResult | None]:
    match = Match(
        match_id=safe_str(get_value(row, ["id", "match_id"]), ""),
        created_at=parse_timestamp(get_value(row, [created_col])),
        opponent_name=safe_str(get_value(row, ["opponent_name", "opponent"]), ""),
        surface=parse_surface(get_value(row, ["surface"])),
        match_type=MATCH_TYPE_MAP.get(
            safe_str(get_value(row, ["match_type"]), "singles"), MatchType.SINGLES,
        ),
        score=MatchScore(sets=[_csv_set(row, n) for n in range(1, N_SETS + 1)]),
        opponent_style=parse_styles(get_value(row, ["opponent_style"])),
        scouting=_csv_scouting(row) or ScoutingNotes(),
        plan=_build_plan(
            safe_str(get_value(row, ["plan_strategy"])),
            safe_str(get_value(row, ["plan_target_weakness"])),
            safe_str(get_value(row, ["plan_focus_word"])),
            safe_float(get_value(row, ["plan_confidence"])),
        ),
        reflection=_build_reflection(
            safe_float(get_value(row, ["energy"])),
            safe_float(get_value(row, ["focus"])),
            safe_float(get_value(row, ["emotional_control"])),
            safe_float(get_value(row, ["confidence"])),
            safe_float(get_value(row, ["composite"])),
            safe_float(get_value(row, ["execution_score"])),
            safe_bool(get_value(row, ["stuck_to_plan"])),
            safe_str(get_value(row, ["reflection_notes"])),
        ),
        notes=safe_str(get_value(row, ["notes"])),
        opponent2_name=safe_str(get_value(row, ["opponent2_name"])),
        opponent_style2=parse_styles(get_value(row, ["opponent_style2"])),
        scouting2=_csv_scouting(row, "2"),
    )
    stored = RESULT_MAP.get(safe_str(get_value(row, ["result"]), ""))
    return match, stored


# ── Loader ─────────────────────────────────────────────────────────────

class MatchRecordLoader(BaseLoader):
    """Loads exported match rows from a .json or .csv file."""

    def __init__(self, path: str, rederive_results: bool = True):
        self.path = Path(path)
        self.rederive_results = rederive_results
        self.n_skipped = 0
        self.n_rederived = 0

    def load(self) -> list[Match]:
        if not self.path.exists():
            raise FileNotFoundError(f"Match export not found: {self.path}")

        if self.path.suffix.lower() == ".csv":
            parsed = self._load_csv()
        elif self.path.suffix.lower() == ".json":
            parsed = self._load_json()
        else:
            raise ValueError(f"Unsupported match export format: {self.path.suffix}")

        matches = [self._reconcile(m, stored) for m, stored in parsed]
        log.info(
            f"Loaded {len(matches)} matches from {self.path} "
            f"(skipped {self.n_skipped}, re-derived {self.n_rederived} results)"
        )
        return matches

    def validate(self, matches: list[Match]) -> list[str]:
        report = DataValidator().validate(matches)
        return report["errors"] + report["warnings"]

    def _load_json(self) -> list[tuple[Match, MatchResult | None]]:
        with open(self.path) as f:
            rows = json.load(f)
        if isinstance(rows, dict):
            rows = rows.get("matches", [])

        parsed = []
        for i, row in enumerate(rows):
            try:
                parsed.append(parse_json_row(row))
            except (ValueError, TypeError, AttributeError) as e:
                self.n_skipped += 1
                log.warning(f"Skipping row {i} ({row.get('id', '?') if isinstance(row, dict) else '?'}): {e}")
        return parsed

    def _load_csv(self) -> list[tuple[Match, MatchResult | None]]:
        df = pd.read_csv(self.path, low_memory=False)
        created_col = find_column(df, ["created_at", "createdAt", "date"])
        if created_col is None:
            log.error(f"Cannot find created_at column in {self.path}")
            return []

        parsed = []
        for i, row in df.iterrows():
            try:
                parsed.append(parse_csv_row(row, created_col))
            except (ValueError, TypeError) as e:
                self.n_skipped += 1
                log.warning(f"Skipping row {i}: {e}")
        return parsed

    def _reconcile(self, match: Match, stored: MatchResult | None) -> Match:
        """Apply the stored result cache, or re-derive it from the score."""
        derived = derive_result(match.score)
        if stored is not None and stored != derived:
            log.warning(
                f"{match.match_id}: stored result '{stored.value}' disagrees "
                f"with score-derived '{derived.value}'"
            )
            if self.rederive_results:
                self.n_rederived += 1
            else:
                match.result = stored
        return match
