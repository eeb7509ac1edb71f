"""Demo script for review-engine."""

import sys
from datetime import date
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from review_engine.adapters.json_adapter import parse
from review_engine.health import compute_health_score
from review_engine.digest import health_inputs_for_day
from review_engine.monthly_review import compute_monthly_review


def main() -> None:
    dataset = parse("examples/sample_dataset.json")
    review = compute_monthly_review(dataset.tasks, dataset.events, dataset.goals, month=2, year=2025)
    print("Month:", review.month_label)
    print("Stats:", review.stats)
    for insight in review.insights:
        print("Insight:", insight.icon, insight.title, "-", insight.description)

    health = compute_health_score(**health_inputs_for_day(dataset.tasks, dataset.events, date(2025, 3, 12)))
    print("Health:", health.score, health.status.value, health.insights)


if __name__ == "__main__":
    main()
