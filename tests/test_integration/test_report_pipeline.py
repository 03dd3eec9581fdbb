"""End-to-end tests: export file -> analytics -> report files."""

import json
from pathlib import Path

import pytest
import yaml

from matchbook.core.schema import Surface
from matchbook.evaluation.report import format_text_report, generate_report, make_serializable
from matchbook.orchestration.config import load_config
from matchbook.orchestration.pipeline import (
    build_analytics, run_audit, run_opponent, run_report, run_summary,
)

LOSS = [(4, 6), (3, 6)]
DEFAULT_CONFIG = Path(__file__).resolve().parents[2] / "configs" / "default.yaml"


def _history(make_match):
    matches = []
    for i in range(12):
        sets = LOSS if i % 4 == 3 else None
        surface = Surface.CLAY if i % 2 else Surface.HARD
        matches.append(make_match(
            day=i, sets=sets, surface=surface,
            opponent="Kim" if i % 3 == 0 else "Alex",
            reflection={"composite": 8 if sets is None else 4,
                        "execution_score": 7 if sets is None else 5},
        ))
    return matches


def _json_rows(n=6):
    rows = []
    for i in range(n):
        won = i % 3 != 2
        sets = [{"player": 6, "opponent": 3}, {"player": 6, "opponent": 4}]
        if not won:
            sets = [{"player": 3, "opponent": 6}, {"player": 4, "opponent": 6}]
        rows.append({
            "id": f"r{i}",
            "created_at": f"2024-04-{i + 1:02d}T17:30:00Z",
            "data": {
                "opponentName": "Kim" if i % 2 else "Alex",
                "surface": "clay" if i % 2 else "hard",
                "score": {"sets": sets},
                "scouting": {"keyToWin": f"Plan {i}"},
                "reflection": {"energy": 7, "focus": 7, "emotionalControl": 8,
                               "confidence": 6, "executionScore": 8 if won else 5},
                "result": "win" if won else "loss",
            },
        })
    return rows


@pytest.fixture
def workspace(tmp_path):
    """Writes an export and a config pointing at it."""
    matches_path = tmp_path / "matches.json"
    matches_path.write_text(json.dumps(_json_rows()))
    config = {
        "paths": {"matches": str(matches_path), "reports": str(tmp_path / "reports")},
        "ingestion": {"rederive_results": True},
        "report": {"windows": {"last_5": 5, "all": None}, "include_plots": False},
    }
    config_path = tmp_path / "config.yaml"
    config_path.write_text(yaml.safe_dump(config))
    return tmp_path, str(config_path)


class TestBuildAnalytics:
    def test_keys(self, make_match):
        analytics = build_analytics(_history(make_match))
        assert set(analytics) == {
            "n_matches", "current_streak", "recommended_focus", "biggest_strength",
            "biggest_weakness", "windows", "grades", "identity", "achievements",
        }
        assert set(analytics["windows"]) == {"last_5", "last_10", "all"}
        assert analytics["n_matches"] == 12

    def test_windows_slice_most_recent(self, make_match):
        analytics = build_analytics(_history(make_match))
        w = analytics["windows"]
        assert w["all"]["record"].wins == 9
        assert w["all"]["record"].losses == 3
        # days 7..11: days 7 and 11 are losses
        assert w["last_5"]["record"].wins == 3
        assert len(w["last_5"]["series"]["win_rate"]) == 5

    def test_all_window_always_present(self, make_match):
        analytics = build_analytics(_history(make_match), windows={"last_3": 3})
        assert set(analytics["windows"]) == {"last_3", "all"}

    def test_empty_history(self):
        analytics = build_analytics([])
        assert analytics["current_streak"] == 0
        assert analytics["windows"]["all"]["win_rate"] == 0
        assert analytics["windows"]["all"]["insights"] == []
        assert len(analytics["achievements"]) == 8


class TestReport:
    def test_generate_report_files(self, make_match, tmp_path):
        analytics = build_analytics(_history(make_match))
        json_path = generate_report(analytics, output_dir=str(tmp_path), include_plots=False)

        data = json.loads(open(json_path).read())
        assert data["n_matches"] == 12
        assert data["windows"]["all"]["record"] == {"wins": 9, "losses": 3}
        assert "hard" in data["windows"]["all"]["surface_win_rates"]
        assert data["achievements"][0]["category"] == "performance"
        assert "generated_at" in data

        txt = list(tmp_path.glob("matchbook_report_*.txt"))
        assert len(txt) == 1
        assert "Recommended focus" in txt[0].read_text()

    def test_text_report_sections(self, make_match):
        text = format_text_report(build_analytics(_history(make_match)))
        for section in ("Windows", "Surfaces", "Performance Grades", "Insights", "Achievements"):
            assert section in text

    def test_make_serializable_enum_keys(self):
        assert make_serializable({Surface.CLAY: [Surface.HARD]}) == {"clay": ["hard"]}


class TestRunners:
    def test_run_report(self, workspace):
        tmp_path, config_path = workspace
        analytics = run_report(config_path)
        assert analytics["n_matches"] == 6
        assert analytics["validation"]["is_clean"]
        assert set(analytics["windows"]) == {"last_5", "all"}
        assert len(list((tmp_path / "reports").glob("*.json"))) == 1

    def test_run_report_no_matches(self, workspace):
        tmp_path, config_path = workspace
        empty = tmp_path / "empty.json"
        empty.write_text("[]")
        assert run_report(config_path, str(empty)) == {"error": "No data available"}

    def test_run_summary(self, workspace):
        _, config_path = workspace
        paragraphs = run_summary("r2", config_path)
        assert paragraphs[0].startswith("Went down to Alex on hard court")
        assert "Key reminder: Plan 2" in paragraphs[1]

    def test_run_summary_unknown_id(self, workspace):
        _, config_path = workspace
        with pytest.raises(KeyError):
            run_summary("missing", config_path)

    def test_run_opponent(self, workspace):
        _, config_path = workspace
        h2h = run_opponent("Kim", config_path)
        # r1, r3, r5: r5 is a loss
        assert h2h["matches"] == 3
        assert h2h["record"].wins == 2
        assert h2h["latest_scouting"].key_to_win == "Plan 5"

    def test_run_audit(self, workspace):
        _, config_path = workspace
        result = run_audit(config_path)
        assert result["stats"]["matches"] == 6
        assert result["is_clean"]


class TestConfig:
    def test_default_config_loads(self):
        cfg = load_config(str(DEFAULT_CONFIG))
        assert cfg["ingestion"]["rederive_results"] is True
        assert cfg["report"]["windows"]["all"] is None

    def test_missing_key(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text(yaml.safe_dump({"paths": {}, "ingestion": {}}))
        with pytest.raises(ValueError, match="report"):
            load_config(str(path))

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_config(str(tmp_path / "none.yaml"))

    def test_missing_matches_path(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text(yaml.safe_dump({"paths": {"reports": "r"}, "ingestion": {}, "report": {}}))
        with pytest.raises(ValueError, match="paths.matches"):
            load_config(str(path))

    def test_bad_window(self, tmp_path):
        path = tmp_path / "bad.yaml"
        cfg = {"paths": {"matches": "m.json"}, "ingestion": {}, "report": {"windows": {"last_0": 0}}}
        path.write_text(yaml.safe_dump(cfg))
        with pytest.raises(ValueError, match="last_0"):
            load_config(str(path))
