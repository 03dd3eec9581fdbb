"""Tests for post-load data quality checks."""

from matchbook.core.schema import MatchResult
from matchbook.ingestion.validator import DataValidator


class TestDataValidator:
    def test_clean(self, make_match):
        result = DataValidator().validate([make_match(day=0), make_match(day=1)])
        assert result["is_clean"]
        assert result["errors"] == []
        assert result["warnings"] == []
        assert result["stats"]["matches"] == 2
        assert result["stats"]["win"] == 2

    def test_empty(self):
        result = DataValidator().validate([])
        assert result["is_clean"]
        assert result["stats"] == {}

    def test_duplicate_id(self, make_match):
        matches = [make_match(day=0), make_match(day=1, match_id="m0")]
        result = DataValidator().validate(matches)
        assert not result["is_clean"]
        assert result["errors"] == ["m0: duplicate match id"]

    def test_result_mismatch_is_warning(self, make_match):
        m = make_match(sets=[(4, 6), (3, 6)], result=MatchResult.WIN)
        result = DataValidator().validate([m])
        assert result["is_clean"]
        assert result["warnings"] == ["m0: result is 'win' but score derives 'loss'"]

    def test_level_set(self, make_match):
        result = DataValidator().validate([make_match(sets=[(6, 6)])])
        assert result["warnings"] == ["m0: set 1 is level at 6-6"]
        assert result["stats"]["unfinished"] == 1

    def test_tiebreak_on_non_tiebreak_set(self, make_match):
        m = make_match(sets=[(6, 4), (6, 3)], tiebreaks={0: (7, 5)})
        result = DataValidator().validate([m])
        assert result["warnings"] == ["m0: set 1 has a tiebreak but ended 6-4"]

    def test_split_set_loss_counted(self, make_match):
        result = DataValidator().validate([make_match(sets=[(6, 4), (3, 6)])])
        assert result["stats"]["split_set_losses"] == 1
        assert result["stats"]["loss"] == 1

    def test_coverage_stats(self, make_match, doubles_match):
        matches = [
            make_match(day=0, reflection={"energy": 5}),
            make_match(day=1, reflection={"composite": 7}, plan={"strategy": "Serve wide"}),
            doubles_match,
        ]
        stats = DataValidator().validate(matches)["stats"]
        assert stats["with_reflection"] == 2
        assert stats["reflection_without_composite"] == 1
        assert stats["with_plan"] == 1
        assert stats["doubles_without_scouting2"] == 1
