"""Tests for the insight generator."""

from matchbook.core.schema import InsightType, Surface
from matchbook.analytics.insights import (
    biggest_strength, biggest_weakness, generate_insights,
)

WIN = [(6, 4), (6, 3)]
LOSS = [(4, 6), (3, 6)]
THREE_WIN = [(4, 6), (6, 3), (6, 4)]
THREE_LOSS = [(6, 4), (3, 6), (4, 6)]


def _texts(insights):
    return [i.text for i in insights]


class TestGating:
    def test_fewer_than_three_matches(self, make_match):
        matches = [
            make_match(day=0, surface=Surface.CLAY),
            make_match(day=1, surface=Surface.CLAY),
        ]
        assert generate_insights(matches) == []

    def test_no_data_no_insights(self, make_match):
        matches = [make_match(day=0), make_match(day=1, sets=LOSS), make_match(day=2, sets=LOSS)]
        assert generate_insights(matches) == []


class TestMentalRule:
    def test_strength_when_gap_wide(self, make_match):
        matches = [
            make_match(day=0, surface=Surface.GRASS, reflection={"composite": 8}),
            make_match(day=1, surface=Surface.GRASS, reflection={"composite": 7}),
            make_match(day=2, surface=Surface.CLAY, sets=LOSS, reflection={"composite": 5}),
            make_match(day=3, surface=Surface.HARD, sets=LOSS, reflection={"composite": 4}),
        ]
        insights = generate_insights(matches)
        assert insights[0].type == InsightType.STRENGTH
        assert insights[0].text == "You win 100% of matches when your Mental Score ≥ 7 (vs 0% below)."

    def test_needs_four_with_metric(self, make_match):
        matches = [
            make_match(day=0, reflection={"composite": 8}),
            make_match(day=1, reflection={"composite": 8}),
            make_match(day=2, sets=LOSS, reflection={"composite": 4}),
        ]
        assert not any("Mental Score" in t for t in _texts(generate_insights(matches)))

    def test_needs_two_per_cohort(self, make_match):
        matches = [
            make_match(day=0, reflection={"composite": 8}),
            make_match(day=1, reflection={"composite": 8}),
            make_match(day=2, reflection={"composite": 9}),
            make_match(day=3, sets=LOSS, reflection={"composite": 4}),
        ]
        assert not any("Mental Score" in t for t in _texts(generate_insights(matches)))


class TestExecutionRule:
    def test_weakness_when_low_cohort_better(self, make_match):
        matches = [
            make_match(day=0, sets=LOSS, reflection={"execution_score": 8}),
            make_match(day=1, sets=LOSS, reflection={"execution_score": 9}),
            make_match(day=2, reflection={"execution_score": 5}),
            make_match(day=3, sets=LOSS, reflection={"execution_score": 4}),
        ]
        weak = [i for i in generate_insights(matches) if i.type == InsightType.WEAKNESS]
        assert weak[0].text == "Execution score below 7 correlates with 50% loss rate."

    def test_strength(self, make_match):
        matches = [
            make_match(day=0, reflection={"execution_score": 8}),
            make_match(day=1, reflection={"execution_score": 7}),
            make_match(day=2, sets=LOSS, reflection={"execution_score": 5}),
            make_match(day=3, sets=LOSS, reflection={"execution_score": 4}),
        ]
        assert "Execution score ≥ 7 correlates with 100% win rate (vs 0% below)." in _texts(
            generate_insights(matches)
        )


class TestEnergyRule:
    def test_low_energy_weakness(self, make_match):
        matches = [
            make_match(day=0, sets=LOSS, reflection={"energy": 4}),
            make_match(day=1, sets=LOSS, reflection={"energy": 5}),
            make_match(day=2, reflection={"energy": 8}),
            make_match(day=3, reflection={"energy": 9}),
        ]
        assert biggest_weakness(matches) == "Energy below 6 correlates with 100% loss rate."

    def test_below_loss_threshold(self, make_match):
        matches = [
            make_match(day=0, sets=LOSS, reflection={"energy": 4}),
            make_match(day=1, reflection={"energy": 5}),
            make_match(day=2, reflection={"energy": 8}),
            make_match(day=3, reflection={"energy": 9}),
        ]
        assert biggest_weakness(matches) is None


class TestSurfaceRule:
    def test_best_surface(self, make_match):
        matches = [
            make_match(day=0, surface=Surface.CLAY),
            make_match(day=1, surface=Surface.CLAY),
            make_match(day=2, surface=Surface.HARD, sets=LOSS),
        ]
        assert generate_insights(matches)[0].text == "Your best surface is Clay (100% win rate)."

    def test_single_match_surface_ignored(self, make_match):
        matches = [
            make_match(day=0, surface=Surface.GRASS),
            make_match(day=1, surface=Surface.HARD, sets=LOSS),
            make_match(day=2, surface=Surface.CLAY, sets=LOSS),
        ]
        assert biggest_strength(matches) is None


class TestThreeSetRule:
    def test_weakness(self, make_match):
        matches = [make_match(day=i, sets=THREE_LOSS) for i in range(3)]
        assert biggest_weakness(matches) == "You lose 100% of 3-set matches."

    def test_strength(self, make_match):
        matches = [
            make_match(day=0, sets=THREE_WIN, surface=Surface.HARD),
            make_match(day=1, sets=THREE_WIN, surface=Surface.CLAY),
            make_match(day=2, sets=THREE_WIN, surface=Surface.GRASS),
        ]
        assert "You win 100% of 3-set battles. Strong in long matches." in _texts(
            generate_insights(matches)
        )

    def test_middling_rate_silent(self, make_match):
        matches = [
            make_match(day=0, sets=THREE_WIN, surface=Surface.HARD),
            make_match(day=1, sets=THREE_LOSS, surface=Surface.CLAY),
            make_match(day=2, sets=THREE_WIN, surface=Surface.GRASS),
            make_match(day=3, sets=THREE_LOSS, surface=Surface.GRASS),
        ]
        assert generate_insights(matches) == []


class TestOrdering:
    def test_rule_order(self, make_match):
        matches = [
            make_match(day=0, surface=Surface.CLAY, reflection={"composite": 8, "energy": 8}),
            make_match(day=1, surface=Surface.CLAY, reflection={"composite": 9, "energy": 8}),
            make_match(day=2, sets=LOSS, reflection={"composite": 4, "energy": 3}),
            make_match(day=3, sets=LOSS, reflection={"composite": 5, "energy": 4}),
        ]
        kinds = [i.type for i in generate_insights(matches)]
        texts = _texts(generate_insights(matches))
        assert texts[0].startswith("You win 100% of matches when your Mental Score")
        assert texts[1].startswith("Energy below 6")
        assert texts[2].startswith("Your best surface is Clay")
        assert kinds == [InsightType.STRENGTH, InsightType.WEAKNESS, InsightType.STRENGTH]
