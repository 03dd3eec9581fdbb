"""
Post-load data quality validation.

Runs integrity checks on loaded Match data before analytics run.
Never raises: returns a summary and logs what it found.
"""

import logging
from collections import Counter

from matchbook.core.schema import Match, MatchResult, MatchType, derive_result

log = logging.getLogger(__name__)


class DataValidator:
    """Validates a collection of Match objects for quality issues."""

    def validate(self, matches: list[Match]) -> dict:
        """Run all checks. Returns summary dict + logs warnings."""
        issues = []
        stats = Counter()
        seen_ids = set()

        for m in matches:
            stats["matches"] += 1
            stats[m.result.value] += 1

            if m.match_id in seen_ids:
                issues.append(("error", f"{m.match_id}: duplicate match id"))
            seen_ids.add(m.match_id)

            # Cached result must match the score
            derived = derive_result(m.score)
            if m.result != derived:
                issues.append((
                    "warn",
                    f"{m.match_id}: result is '{m.result.value}' but score "
                    f"derives '{derived.value}'"
                ))

            # Split sets with no decider resolve to a loss
            if m.sets_played == 2 and m.result == MatchResult.LOSS:
                s1, s2 = m.played_sets
                if (s1.player > s1.opponent) != (s2.player > s2.opponent):
                    stats["split_set_losses"] += 1

            for i, s in enumerate(m.played_sets, start=1):
                if s.player == s.opponent:
                    issues.append(("warn", f"{m.match_id}: set {i} is level at {s.player}-{s.opponent}"))
                if s.tiebreak is not None and s.tiebreak.is_completed and abs(s.player - s.opponent) != 1:
                    issues.append(("warn", f"{m.match_id}: set {i} has a tiebreak but ended {s.player}-{s.opponent}"))

            if m.match_type == MatchType.DOUBLES and m.scouting2 is None:
                stats["doubles_without_scouting2"] += 1

            if m.reflection is not None:
                stats["with_reflection"] += 1
                if m.reflection.composite is None:
                    stats["reflection_without_composite"] += 1
            if m.plan is not None:
                stats["with_plan"] += 1

        errors = [msg for level, msg in issues if level == "error"]
        warns = [msg for level, msg in issues if level == "warn"]

        if errors:
            log.error(f"Data validation: {len(errors)} errors")
            for e in errors[:10]:
                log.error(f"  {e}")
        if warns:
            log.warning(f"Data validation: {len(warns)} warnings")
            for w in warns[:10]:
                log.warning(f"  {w}")

        return {
            "stats": dict(stats),
            "errors": errors,
            "warnings": warns,
            "is_clean": len(errors) == 0,
        }
