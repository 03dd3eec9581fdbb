"""
Analytics pipeline.

Orchestrates the full flow: load exported matches -> validate ->
derive statistics, grades, insights, series and achievements -> report.
"""

import logging

from matchbook.core.schema import Match
from matchbook.analytics.aggregate import (
    current_streak, execution_average, mental_average, most_recent,
    opponent_breakdown, record, style_win_rates, surface_win_rates, win_rate,
)
from matchbook.analytics.grading import identity_snapshot, performance_grades
from matchbook.analytics.insights import (
    biggest_strength, biggest_weakness, generate_insights,
)
from matchbook.analytics.recommendation import recommended_focus
from matchbook.analytics.series import execution_series, mental_series, win_rate_series
from matchbook.analytics.summary import generate_match_summary
from matchbook.achievements import compute_achievements
from matchbook.evaluation.report import generate_report
from matchbook.ingestion.records import MatchRecordLoader
from matchbook.ingestion.validator import DataValidator
from matchbook.orchestration.config import load_config

log = logging.getLogger(__name__)

DEFAULT_WINDOWS = {"last_5": 5, "last_10": 10, "all": None}


def window_stats(matches: list[Match]) -> dict:
    """Everything the analytics view shows for one slice of matches."""
    return {
        "record": record(matches),
        "win_rate": win_rate(matches),
        "mental_average": mental_average(matches),
        "execution_average": execution_average(matches),
        "surface_win_rates": surface_win_rates(matches),
        "style_win_rates": style_win_rates(matches),
        "insights": generate_insights(matches),
        "series": {
            "win_rate": win_rate_series(matches),
            "mental": mental_series(matches),
            "execution": execution_series(matches),
        },
    }


def build_analytics(matches: list[Match], windows: dict | None = None) -> dict:
    """Derive the full analytics snapshot from a list of matches."""
    windows = {**(windows or DEFAULT_WINDOWS)}
    windows.setdefault("all", None)

    return {
        "n_matches": len(matches),
        "current_streak": current_streak(matches),
        "recommended_focus": recommended_focus(matches),
        "biggest_strength": biggest_strength(matches),
        "biggest_weakness": biggest_weakness(matches),
        "windows": {
            name: window_stats(most_recent(matches, n))
            for name, n in windows.items()
        },
        "grades": performance_grades(matches),
        "identity": identity_snapshot(matches),
        "achievements": compute_achievements(matches),
    }


def load_matches(config: dict, path: str | None = None) -> list[Match]:
    loader = MatchRecordLoader(
        path or config["paths"]["matches"],
        rederive_results=config["ingestion"].get("rederive_results", True),
    )
    return loader.load()


def run_report(config_path: str = "configs/default.yaml", matches_path: str | None = None) -> dict:
    """Run the complete report pipeline.

    1. Load matches from the export
    2. Validate data quality
    3. Build the analytics snapshot
    4. Write the report

    Returns the analytics dict.
    """
    config = load_config(config_path)
    rep = config["report"]

    log.info("Step 1: Loading matches...")
    matches = load_matches(config, matches_path)
    if not matches:
        log.error("No matches loaded. Export matches from the app first.")
        return {"error": "No data available"}

    log.info("Step 2: Validating...")
    validation = DataValidator().validate(matches)

    log.info("Step 3: Building analytics...")
    analytics = build_analytics(matches, rep.get("windows"))
    analytics["validation"] = validation

    log.info("Step 4: Writing report...")
    report_path = generate_report(
        analytics,
        output_dir=config["paths"].get("reports", "reports"),
        include_plots=rep.get("include_plots", True),
    )
    log.info(f"Full report: {report_path}")
    return analytics


def run_summary(match_id: str, config_path: str = "configs/default.yaml",
                matches_path: str | None = None) -> list[str]:
    """Narrative summary paragraphs for one stored match."""
    config = load_config(config_path)
    matches = load_matches(config, matches_path)
    for m in matches:
        if m.match_id == match_id:
            return generate_match_summary(m)
    raise KeyError(f"Match not found: {match_id}")


def run_audit(config_path: str = "configs/default.yaml", matches_path: str | None = None) -> dict:
    config = load_config(config_path)
    matches = load_matches(config, matches_path)
    result = DataValidator().validate(matches)
    log.info(f"Audit: {result['stats']}")
    return result


def run_opponent(name: str, config_path: str = "configs/default.yaml",
                 matches_path: str | None = None) -> dict:
    """Head-to-head breakdown against one opponent."""
    config = load_config(config_path)
    matches = load_matches(config, matches_path)
    return opponent_breakdown(matches, name)
