"""Compute a monthly review from a JSON dataset or CSV exports."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from datetime import datetime
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from review_engine.adapters import csv_adapter, json_adapter
from review_engine.adapters.records import ReviewDataset
from review_engine.config import load_settings
from review_engine.export import build_export_payload, export_filename, to_jsonable
from review_engine.log import setup_logging
from review_engine.monthly_review import compute_month_comparison, compute_monthly_review, previous_month

logger = logging.getLogger("run_review")


def _month(value: str) -> int:
    month = int(value)
    if not 1 <= month <= 12:
        raise argparse.ArgumentTypeError("month must be between 1 and 12")
    return month


def _load_dataset(args: argparse.Namespace) -> ReviewDataset:
    if args.data:
        path = Path(args.data)
        if path.suffix.lower() != ".json":
            raise ValueError("Unsupported input format, expected .json for --data")
        return json_adapter.parse(str(path))

    return ReviewDataset(
        tasks=csv_adapter.parse_tasks(args.tasks) if args.tasks else [],
        events=csv_adapter.parse_events(args.events) if args.events else [],
        goals=csv_adapter.parse_goals(args.goals) if args.goals else [],
    )


def main() -> None:
    parser = argparse.ArgumentParser(description="Run the monthly review engine")
    parser.add_argument("--data", help="Path to a JSON file with tasks, events and goals")
    parser.add_argument("--tasks", help="Path to a tasks CSV export")
    parser.add_argument("--events", help="Path to an events CSV export")
    parser.add_argument("--goals", help="Path to a goals CSV export")
    parser.add_argument("--month", required=True, type=_month, help="Month number, 1-12")
    parser.add_argument("--year", required=True, type=int)
    parser.add_argument("--owner", default=None, help="Owner name shown in the export")
    parser.add_argument("--previous", action="store_true", help="Include comparison with the previous month")
    args = parser.parse_args()

    if not (args.data or args.tasks or args.events or args.goals):
        parser.error("provide --data or at least one of --tasks/--events/--goals")

    settings = load_settings()
    setup_logging(settings)

    dataset = _load_dataset(args)
    month = args.month - 1
    logger.info(
        "Loaded %d tasks, %d events, %d goals", len(dataset.tasks), len(dataset.events), len(dataset.goals)
    )

    review = compute_monthly_review(dataset.tasks, dataset.events, dataset.goals, month, args.year)
    payload = build_export_payload(review, month, args.year, generated_at=datetime.now(), owner_name=args.owner)

    if args.previous:
        prev_month, prev_year = previous_month(month, args.year)
        previous = compute_monthly_review(dataset.tasks, dataset.events, dataset.goals, prev_month, prev_year)
        payload["comparison"] = to_jsonable(compute_month_comparison(review.stats, previous.stats))

    print(json.dumps(payload, indent=2, ensure_ascii=False))

    outputs_dir = Path(settings.output_dir)
    outputs_dir.mkdir(parents=True, exist_ok=True)
    out_path = outputs_dir / export_filename(month, args.year)
    out_path.write_text(json.dumps(payload, indent=2, ensure_ascii=False), encoding="utf-8")
    logger.info("Saved monthly review to %s", out_path)


if __name__ == "__main__":
    main()
