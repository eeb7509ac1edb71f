"""Per-creator health inputs and the agency daily digest."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date, timedelta
from typing import Optional

import numpy as np

from review_engine.health import calculate_daily_load, calculate_streak_pressure, compute_health_score
from review_engine.schema import EventRecord, HealthStatus, TaskRecord, TaskStatus, as_date, normalize_status

logger = logging.getLogger(__name__)

BACKLOG_DAYS = 3
LOOKAHEAD_DAYS = 7
TREND_SLOPE = 1.0


@dataclass
class CreatorActivity:
    """Raw records loaded for one creator of an agency."""

    creator_id: str
    name: str
    tasks: list[TaskRecord] = field(default_factory=list)
    events: list[EventRecord] = field(default_factory=list)


@dataclass(frozen=True)
class CreatorHealth:
    creator_id: str
    creator_name: str
    score: int
    status: HealthStatus
    insights: list[str]


@dataclass(frozen=True)
class AgencyDigest:
    agency_id: str
    agency_name: str
    date: date
    total_creators: int
    overloaded_creators: list[CreatorHealth]
    busy_creators: list[CreatorHealth]
    weekly_trend: str


def open_tasks(tasks: list[TaskRecord]) -> list[TaskRecord]:
    return [t for t in tasks if not t.archived and normalize_status(t.status) is not TaskStatus.DONE]


def week_bounds(today: date) -> tuple[date, date]:
    """Sunday-to-Saturday week containing ``today``."""

    start = today - timedelta(days=today.isoweekday() % 7)
    return start, start + timedelta(days=6)


def upcoming_loads(tasks: list[TaskRecord], events: list[EventRecord], today: date, days: int = LOOKAHEAD_DAYS) -> list[int]:
    """Events plus open tasks due, for each of the next ``days`` days starting today."""

    pending = open_tasks(tasks)
    loads = []
    for offset in range(days):
        day = today + timedelta(days=offset)
        events_count = sum(1 for e in events if as_date(e.date) == day)
        due_count = sum(1 for t in pending if as_date(t.due_date) == day)
        loads.append(calculate_daily_load(events_count, due_count))
    return loads


def health_inputs_for_day(tasks: list[TaskRecord], events: list[EventRecord], today: date) -> dict:
    """Derive ``compute_health_score`` keyword arguments from raw records."""

    pending = open_tasks(tasks)
    week_start, week_end = week_bounds(today)
    backlog_end = today + timedelta(days=BACKLOG_DAYS)

    overdue = 0
    backlog = 0
    for task in pending:
        due = as_date(task.due_date)
        if due is None:
            continue
        if due < today:
            overdue += 1
        elif due <= backlog_end:
            backlog += 1

    event_days = [as_date(e.date) for e in events]
    return {
        "open_tasks_count": len(pending),
        "overdue_tasks_count": overdue,
        "events_today_count": sum(1 for d in event_days if d == today),
        "events_week_count": sum(1 for d in event_days if d is not None and week_start <= d <= week_end),
        "backlog_pressure": backlog,
        "streak_pressure": calculate_streak_pressure(upcoming_loads(tasks, events, today)),
    }


def creator_health(creator: CreatorActivity, today: date) -> CreatorHealth:
    result = compute_health_score(**health_inputs_for_day(creator.tasks, creator.events, today))
    return CreatorHealth(
        creator_id=creator.creator_id,
        creator_name=creator.name,
        score=result.score,
        status=result.status,
        insights=result.insights,
    )


def weekly_trend(score_history: Optional[list[float]]) -> str:
    """Classify a series of daily average scores; rising load means declining."""

    if not score_history or len(score_history) < 2:
        return "stable"
    y = np.asarray(score_history, dtype=float)
    x = np.arange(len(y), dtype=float)
    slope = float(np.polyfit(x, y, 1)[0])
    if slope >= TREND_SLOPE:
        return "declining"
    if slope <= -TREND_SLOPE:
        return "improving"
    return "stable"


def build_agency_digest(
    agency_id: str,
    agency_name: str,
    creators: list[CreatorActivity],
    today: date,
    score_history: Optional[list[float]] = None,
) -> AgencyDigest:
    """Score every creator and group the overloaded and busy ones."""

    health = [creator_health(creator, today) for creator in creators]
    logger.debug("Agency %s digest for %s: %d creators scored", agency_id, today.isoformat(), len(health))
    return AgencyDigest(
        agency_id=agency_id,
        agency_name=agency_name,
        date=today,
        total_creators=len(health),
        overloaded_creators=[h for h in health if h.status is HealthStatus.OVERLOADED],
        busy_creators=[h for h in health if h.status is HealthStatus.BUSY],
        weekly_trend=weekly_trend(score_history),
    )
