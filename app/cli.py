"""
Road priority CLI.

Ranks roads from a JSON file without the web front end:

    python -m app.cli rank roads.json --details --csv ranking.csv

The input holds the stored record shapes:
    {"criteria": [{"key", "type", "weight", ...}],
     "alternatives": [{"id", "name", "criteria_values": {...}}]}
"""

import argparse
import dataclasses
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

from core.adapters import load_alternatives, load_criteria
from core.config import CategoryThresholds, Settings, get_settings
from core.formatting import rank_medal
from services.report import distances_frame, ideals_frame, ranking_frame, to_csv_bytes
from services.topsis_service import TopsisService

logger = logging.getLogger(__name__)


def _read_input(path: str) -> dict:
    payload = json.loads(Path(path).read_text(encoding="utf-8"))
    if not isinstance(payload, dict):
        raise ValueError("input must be a JSON object with 'criteria' and 'alternatives'")
    for name in ("criteria", "alternatives"):
        records = payload.get(name) or []
        if not isinstance(records, list) or not all(isinstance(r, dict) for r in records):
            raise ValueError(f"'{name}' must be a list of JSON objects")
    return payload


def _apply_overrides(settings: Settings, args: argparse.Namespace) -> Settings:
    if args.high is None and args.medium is None:
        return settings
    thresholds = CategoryThresholds(
        high=settings.thresholds.high if args.high is None else args.high,
        medium=settings.thresholds.medium if args.medium is None else args.medium,
    )
    return dataclasses.replace(settings, thresholds=thresholds)


def _cmd_rank(args: argparse.Namespace, settings: Settings) -> int:
    payload = _read_input(args.input)
    criteria = load_criteria(payload.get("criteria") or [])
    alternatives = load_alternatives(payload.get("alternatives") or [])

    run = TopsisService(_apply_overrides(settings, args)).run(alternatives, criteria)

    for msg in run.issues:
        print(f"warning: {msg}", file=sys.stderr)

    table = ranking_frame(run.results)
    if table.empty:
        print("No alternatives to rank.")
    else:
        shown = table.drop(columns=["score"])
        shown.insert(0, "medal", [rank_medal(r) for r in table["rank"]])
        print(shown.to_string(index=False))

    if args.details and run.results:
        alt_ids = [a.id for a in run.alternatives]
        crit_keys = [c.key for c in run.criteria]
        print()
        print("Ideal solutions")
        print(ideals_frame(run.details, crit_keys).to_string(index=False))
        print()
        print("Distances")
        print(distances_frame(run.details, alt_ids).to_string(index=False))

    if args.csv:
        Path(args.csv).write_bytes(to_csv_bytes(table))
        logger.info("wrote ranking to %s", args.csv)

    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="road-topsis", description="TOPSIS road priority ranking")
    sub = parser.add_subparsers(dest="command", required=True)

    rank = sub.add_parser("rank", help="Rank alternatives from a JSON file")
    rank.add_argument("input", help="Path to JSON input")
    rank.add_argument("--details", action="store_true", help="Also print ideals and distances")
    rank.add_argument("--csv", help="Write the ranking table to this CSV path")
    rank.add_argument("--high", type=float, default=None, help="High priority threshold (default 0.7)")
    rank.add_argument("--medium", type=float, default=None, help="Medium priority threshold (default 0.5)")
    rank.set_defaults(func=_cmd_rank)
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    try:
        settings = get_settings()
        logging.basicConfig(
            level=getattr(logging, settings.log_level, logging.INFO),
            format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        )
        return args.func(args, settings)
    except (ValueError, OSError) as e:
        # json.JSONDecodeError is a ValueError
        print(f"error: {e}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    raise SystemExit(main())
