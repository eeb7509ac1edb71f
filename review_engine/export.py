"""JSON export payload for a monthly review."""

from __future__ import annotations

import dataclasses
from datetime import date, datetime
from enum import Enum

from review_engine.schema import MonthlyReviewResult
from review_engine.texts import DEFAULT_OWNER, EXPORT_TITLE, MONTHS_HEBREW


def to_jsonable(value):
    """Recursively convert dataclasses, enums and dates into JSON-ready values."""

    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return {f.name: to_jsonable(getattr(value, f.name)) for f in dataclasses.fields(value)}
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, dict):
        return {str(k): to_jsonable(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_jsonable(v) for v in value]
    return value


def export_filename(month: int, year: int) -> str:
    return f"monthly-review-{year}-{month + 1:02d}.json"


def build_export_payload(
    review: MonthlyReviewResult,
    month: int,
    year: int,
    generated_at: datetime,
    owner_name: str | None = None,
) -> dict:
    """Shape a review into the downloadable export document."""

    stats = review.stats
    return {
        "title": EXPORT_TITLE.format(month=MONTHS_HEBREW[month], year=year),
        "generated_at": generated_at.isoformat(),
        "owner_name": owner_name or DEFAULT_OWNER,
        "month": MONTHS_HEBREW[month],
        "year": year,
        "stats": {
            "tasks_completed": stats.tasks_completed,
            "tasks_created": stats.tasks_created,
            "task_completion_rate": stats.task_completion_rate,
            "events_count": stats.events_attended,
            "goals_achieved": stats.goals_achieved,
            "goals_total": stats.goals_total,
            "average_daily_load": stats.average_daily_load,
            "total_events_hours": stats.total_events_hours,
        },
        "insights": [
            {"icon": insight.icon, "title": insight.title, "description": insight.description}
            for insight in review.insights
        ],
        "weekly_breakdown": to_jsonable(review.weekly_breakdown),
        "priority_distribution": to_jsonable(review.priority_distribution),
        "top_categories": to_jsonable(review.top_categories),
    }
