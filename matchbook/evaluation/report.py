"""
Report generation for a player's analytics snapshot.

Writes a JSON report with every derived value, a readable text summary,
and (optionally) trend plots.
"""

import dataclasses
import json
import logging
from datetime import datetime
from enum import Enum
from pathlib import Path

import numpy as np

log = logging.getLogger(__name__)


def generate_report(
    analytics: dict,
    output_dir: str = "reports",
    include_plots: bool = True,
) -> str:
    """Generate the analytics report files.

    Returns path to the generated JSON report.
    """
    out = Path(output_dir)
    out.mkdir(parents=True, exist_ok=True)
    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")

    json_path = out / f"matchbook_report_{timestamp}.json"
    report_data = make_serializable(analytics)
    report_data["generated_at"] = datetime.now().isoformat()
    with open(json_path, "w") as f:
        json.dump(report_data, f, indent=2, ensure_ascii=False)

    txt_path = out / f"matchbook_report_{timestamp}.txt"
    with open(txt_path, "w") as f:
        f.write(format_text_report(analytics))

    if include_plots:
        try:
            _generate_plots(analytics, out, timestamp)
        except ImportError:
            log.warning("matplotlib not available, skipping plots")

    log.info(f"Report saved to {json_path}")
    return str(json_path)


def _pct(value) -> str:
    return "n/a" if value is None else f"{value}"


def format_text_report(analytics: dict) -> str:
    """Format analytics as readable text report."""
    overall = analytics["windows"]["all"]
    rec = overall["record"]
    streak = analytics["current_streak"]
    streak_txt = f"+{streak}W" if streak > 0 else (f"{-streak}L" if streak < 0 else "none")

    lines = [
        "=" * 70,
        "MATCHBOOK: Player Analytics Report",
        "=" * 70,
        "",
        f"Matches logged: {analytics['n_matches']}",
        f"Record: {rec.wins}W - {rec.losses}L  ({overall['win_rate']}% win rate)",
        f"Current streak: {streak_txt}",
        f"Recommended focus: {analytics['recommended_focus']}",
        "",
        "-" * 40,
        "Windows",
        "-" * 40,
        f"{'Window':<10} {'W-L':>8} {'Win%':>6} {'Mental':>8} {'Exec':>8}",
    ]
    for name, w in analytics["windows"].items():
        wl = f"{w['record'].wins}-{w['record'].losses}"
        lines.append(
            f"{name:<10} {wl:>8} {w['win_rate']:>6} "
            f"{_pct(w['mental_average']):>8} {_pct(w['execution_average']):>8}"
        )

    lines += ["", "-" * 40, "Surfaces", "-" * 40]
    for surface, stat in overall["surface_win_rates"].items():
        lines.append(f"  {surface.value:<8} {stat.wins}/{stat.total}  {stat.rate}%")

    lines += ["", "-" * 40, "Performance Grades", "-" * 40]
    for card in analytics["grades"].values():
        lines.append(f"  {card.label:<12} {card.grade or '-':>2}  {card.note}")

    lines += ["", "-" * 40, "Insights", "-" * 40]
    if not overall["insights"]:
        lines.append("  Not enough data yet.")
    for insight in overall["insights"]:
        lines.append(f"  [{insight.type.value}] {insight.text}")

    lines += ["", "-" * 40, "Achievements", "-" * 40]
    for a in analytics["achievements"]:
        mark = "x" if a.unlocked else " "
        lines.append(f"  [{mark}] {a.title:<24} {a.progress:>3}%  {a.progress_text}")

    lines += ["", "=" * 70]
    return "\n".join(lines)


def _generate_plots(analytics: dict, output_dir: Path, timestamp: str):
    """Win-rate, mental and execution trend plots."""
    import matplotlib
    matplotlib.use("Agg")
    import matplotlib.pyplot as plt

    series = analytics["windows"]["all"]["series"]
    fig, axes = plt.subplots(1, 3, figsize=(18, 5))
    for ax, (key, title, ymax) in zip(axes, [
        ("win_rate", "Rolling Win Rate (5 matches)", 100),
        ("mental", "Mental Score", 10),
        ("execution", "Execution Score", 10),
    ]):
        points = series[key]
        if points:
            x = np.arange(len(points))
            ax.plot(x, [p.value for p in points], "o-")
            ax.set_xticks(x)
            ax.set_xticklabels([p.label for p in points], rotation=45, ha="right")
        ax.set_ylim(0, ymax)
        ax.set_title(title)
        ax.grid(True, alpha=0.3)

    plt.tight_layout()
    plot_path = output_dir / f"matchbook_trends_{timestamp}.png"
    plt.savefig(plot_path, dpi=150)
    plt.close()
    log.info(f"Plots saved to {plot_path}")


def make_serializable(obj):
    """Convert dataclasses, enums, datetimes and numpy types to JSON natives."""
    if dataclasses.is_dataclass(obj) and not isinstance(obj, type):
        return {f.name: make_serializable(getattr(obj, f.name)) for f in dataclasses.fields(obj)}
    elif isinstance(obj, dict):
        return {make_serializable(k): make_serializable(v) for k, v in obj.items()}
    elif isinstance(obj, (list, tuple)):
        return [make_serializable(v) for v in obj]
    elif isinstance(obj, Enum):
        return obj.value
    elif isinstance(obj, datetime):
        return obj.isoformat()
    elif isinstance(obj, np.ndarray):
        return obj.tolist()
    elif isinstance(obj, (np.integer,)):
        return int(obj)
    elif isinstance(obj, (np.floating,)):
        return float(obj)
    elif isinstance(obj, (np.bool_,)):
        return bool(obj)
    return obj
