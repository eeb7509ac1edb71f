"""Row-to-record normalization shared by the file adapters.

Rows may use the snake_case column names of the database export or the
camelCase keys of the web API. Missing ids and unparseable governing dates
are rejected; every other malformed field is normalized to a default.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Optional

from review_engine.schema import (
    EventRecord,
    GoalItem,
    GoalItemStatus,
    GoalRecord,
    TaskRecord,
    normalize_goal_status,
    normalize_priority,
    normalize_status,
)

logger = logging.getLogger(__name__)

_TRUE_VALUES = {"1", "true", "yes", "y", "t"}


@dataclass
class ReviewDataset:
    """Records for one user, as loaded from a file."""

    tasks: list[TaskRecord] = field(default_factory=list)
    events: list[EventRecord] = field(default_factory=list)
    goals: list[GoalRecord] = field(default_factory=list)


def _get(row: dict, *keys: str):
    for key in keys:
        value = row.get(key)
        if value not in (None, ""):
            return value
    return None


def parse_timestamp(value) -> Optional[datetime]:
    """Parse an ISO timestamp or date into a naive local datetime."""

    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    else:
        text = str(value).strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        parsed = datetime.fromisoformat(text)
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone().replace(tzinfo=None)
    return parsed


def parse_day(value) -> Optional[date]:
    parsed = parse_timestamp(value)
    return parsed.date() if parsed is not None else None


def _required_id(row: dict, label: str) -> str:
    raw = _get(row, "id")
    if raw is None:
        raise ValueError(f"{label}: missing required field 'id'")
    return str(raw).strip()


def _governing(parser, value, label: str, name: str):
    try:
        return parser(value)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"{label}: malformed {name}") from exc


def _optional(parser, value, label: str, name: str):
    try:
        return parser(value)
    except (TypeError, ValueError):
        logger.debug("%s: ignoring malformed %s %r", label, name, value)
        return None


def _flag(value) -> bool:
    if isinstance(value, bool):
        return value
    if value is None:
        return False
    return str(value).strip().lower() in _TRUE_VALUES


def _text(value) -> Optional[str]:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def task_from_row(row: dict, label: str) -> TaskRecord:
    task_id = _required_id(row, label)
    raw_priority = _get(row, "priority")
    priority = normalize_priority(raw_priority)
    if raw_priority is not None and priority is None:
        logger.debug("%s: unknown priority %r dropped", label, raw_priority)

    return TaskRecord(
        id=task_id,
        title=_text(_get(row, "title")) or "",
        status=normalize_status(_get(row, "status")),
        priority=priority,
        due_date=_optional(parse_day, _get(row, "due_date", "dueDate"), label, "due_date"),
        created_at=_governing(parse_timestamp, _get(row, "created_at", "createdAt"), label, "created_at"),
        updated_at=_optional(parse_timestamp, _get(row, "updated_at", "updatedAt"), label, "updated_at"),
        archived=_flag(_get(row, "archived")),
        company_id=_text(_get(row, "company_id", "companyId")),
    )


def event_from_row(row: dict, label: str) -> EventRecord:
    return EventRecord(
        id=_required_id(row, label),
        title=_text(_get(row, "title")) or "",
        date=_governing(parse_day, _get(row, "date"), label, "date"),
        category=_text(_get(row, "category")),
        start_time=_text(_get(row, "start_time", "startTime")),
        end_time=_text(_get(row, "end_time", "endTime")),
        company_id=_text(_get(row, "company_id", "companyId")),
    )


def _goal_item(item: dict) -> GoalItem:
    status = item.get("status")
    if status is None and "completed" in item:
        status = GoalItemStatus.DONE if _flag(item.get("completed")) else GoalItemStatus.NOT_DONE
    return GoalItem(
        title=_text(item.get("title")) or _text(item.get("text")) or "",
        status=normalize_goal_status(status),
    )


def goal_from_row(row: dict, label: str) -> GoalRecord:
    goal_id = _required_id(row, label)
    items = row.get("items") or []
    if isinstance(items, str):
        try:
            items = json.loads(items)
        except json.JSONDecodeError as exc:
            raise ValueError(f"{label}: items must be a JSON array") from exc
    if not isinstance(items, list):
        raise ValueError(f"{label}: items must be a list")

    return GoalRecord(
        id=goal_id,
        date=_governing(parse_day, _get(row, "date"), label, "date"),
        items=[_goal_item(item) for item in items if isinstance(item, dict)],
    )
