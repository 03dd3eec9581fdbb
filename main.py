#!/usr/bin/env python3
"""
Matchbook CLI.

Usage:
    python main.py report --matches data/matches.json
    python main.py summary --match-id 42
    python main.py opponent --name "Alex"
    python main.py audit
"""

import sys
import logging
import argparse

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
log = logging.getLogger("matchbook")


def cmd_report(args):
    from matchbook.orchestration.pipeline import run_report
    result = run_report(args.config, args.matches)
    if "error" in result:
        sys.exit(1)
    log.info(f"Recommended focus: {result['recommended_focus']}")


def cmd_summary(args):
    from matchbook.orchestration.pipeline import run_summary
    try:
        paragraphs = run_summary(args.match_id, args.config, args.matches)
    except KeyError as e:
        log.error(str(e))
        sys.exit(1)
    print("\n\n".join(paragraphs))


def cmd_opponent(args):
    from matchbook.orchestration.pipeline import run_opponent
    h2h = run_opponent(args.name, args.config, args.matches)
    if h2h["matches"] == 0:
        log.warning(f"No matches against {args.name}")
        sys.exit(1)
    rec = h2h["record"]
    print(f"{args.name}: {rec.wins}W - {rec.losses}L ({h2h['win_rate']}% win rate)")
    scouting = h2h["latest_scouting"]
    if scouting is not None and scouting.key_to_win:
        print(f"Key to win: {scouting.key_to_win}")


def cmd_audit(args):
    from matchbook.orchestration.pipeline import run_audit
    result = run_audit(args.config, args.matches)
    if not result["is_clean"]:
        log.warning(f"Audit found {len(result['errors'])} errors.")
        sys.exit(1)
    log.info("Audit clean.")


def main():
    p = argparse.ArgumentParser(description="Matchbook analytics CLI")
    p.add_argument("--config", default="configs/default.yaml")
    p.add_argument("--matches", default=None, help="Override paths.matches from the config")
    p.add_argument("-v", "--verbose", action="store_true")
    sub = p.add_subparsers(dest="command")

    sub.add_parser("report")

    sm = sub.add_parser("summary")
    sm.add_argument("--match-id", required=True)

    op = sub.add_parser("opponent")
    op.add_argument("--name", required=True)

    sub.add_parser("audit")

    args = p.parse_args()
    if args.verbose:
        logging.getLogger().setLevel(logging.DEBUG)

    if args.command == "report":
        cmd_report(args)
    elif args.command == "summary":
        cmd_summary(args)
    elif args.command == "opponent":
        cmd_opponent(args)
    elif args.command == "audit":
        cmd_audit(args)
    else:
        p.print_help()


if __name__ == "__main__":
    main()
