"""Deterministic daily insight strips for creators and agencies."""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from datetime import date
from typing import Optional

from review_engine.digest import CreatorActivity, creator_health, open_tasks, upcoming_loads
from review_engine.health import is_heavy_day
from review_engine.metrics import percent
from review_engine.schema import (
    EventRecord,
    HealthStatus,
    InsightSeverity,
    TaskRecord,
    TaskStatus,
    as_date,
    normalize_status,
)
from review_engine.texts import AND_MORE, DAILY_INSIGHTS

MAX_DAILY_INSIGHTS = 3
LONG_OVERDUE_DAYS = 3
CONCENTRATION_INFO = 40
CONCENTRATION_WARNING = 60


@dataclass(frozen=True)
class DailyInsight:
    key: str
    severity: InsightSeverity
    icon: str
    title: str
    message: str
    priority: int


def _make(key: str, template: str, severity: InsightSeverity, priority: int, **values) -> DailyInsight:
    icon, title, message = DAILY_INSIGHTS[template]
    return DailyInsight(
        key=key,
        severity=severity,
        icon=icon,
        title=title,
        message=message.format(**values),
        priority=priority,
    )


def _top(insights: list[DailyInsight]) -> list[DailyInsight]:
    return sorted(insights, key=lambda insight: insight.priority)[:MAX_DAILY_INSIGHTS]


def _heavy_streak(loads: list[int]) -> int:
    streak = 0
    for load in loads:
        if not is_heavy_day(load):
            break
        streak += 1
    return streak


def company_concentration(
    tasks: list[TaskRecord], events: list[EventRecord], companies: list[dict]
) -> list[dict]:
    """Share of tasks and events per company, busiest first."""

    counts = Counter(e.company_id for e in events if e.company_id)
    counts.update(t.company_id for t in tasks if t.company_id)
    total = sum(counts.values())
    rows = [
        {
            "id": company["id"],
            "name": company["name"],
            "count": counts.get(company["id"], 0),
            "percentage": percent(counts.get(company["id"], 0), total),
        }
        for company in companies
    ]
    return sorted(rows, key=lambda row: row["count"], reverse=True)


def compute_insights(
    tasks: list[TaskRecord],
    events: list[EventRecord],
    today: date,
    companies: Optional[list[dict]] = None,
) -> list[DailyInsight]:
    """Return up to three creator insights ordered by importance."""

    insights: list[DailyInsight] = []

    overdue = [t for t in open_tasks(tasks) if as_date(t.due_date) is not None and as_date(t.due_date) < today]
    long_overdue = [t for t in overdue if (today - as_date(t.due_date)).days >= LONG_OVERDUE_DAYS]
    if long_overdue:
        insights.append(_make("overdue_tasks", "overdue_tasks_long", InsightSeverity.RISK, 1, count=len(long_overdue)))
    elif overdue:
        insights.append(_make("overdue_tasks", "overdue_tasks", InsightSeverity.WARNING, 3, count=len(overdue)))

    streak = _heavy_streak(upcoming_loads(tasks, events, today))
    if streak >= 3:
        insights.append(_make("heavy_days_streak", "heavy_days_streak", InsightSeverity.WARNING, 2, count=streak))

    if companies:
        ranked = company_concentration(tasks, events, companies)
        top = ranked[0]
        if top["percentage"] >= CONCENTRATION_INFO:
            heavy = top["percentage"] >= CONCENTRATION_WARNING
            insights.append(
                _make(
                    "company_concentration",
                    "company_concentration",
                    InsightSeverity.WARNING if heavy else InsightSeverity.INFO,
                    2 if heavy else 5,
                    name=top["name"],
                    percent=top["percentage"],
                )
            )

    this_month = [
        t for t in tasks if t.created_at is not None and (t.created_at.year, t.created_at.month) == (today.year, today.month)
    ]
    done = sum(1 for t in this_month if normalize_status(t.status) is TaskStatus.DONE)
    rate = percent(done, len(this_month)) if this_month else 100
    if rate < 50 and len(this_month) >= 5:
        insights.append(_make("completion_rate_low", "completion_rate_low", InsightSeverity.WARNING, 3, rate=rate))

    week_events = [e for e in events if as_date(e.date) is not None and 0 <= (as_date(e.date) - today).days < 7]
    if not week_events:
        insights.append(_make("no_events_week", "no_events_week", InsightSeverity.INFO, 6))

    return _top(insights)


def compute_agency_insights(creators: list[CreatorActivity], today: date) -> list[DailyInsight]:
    """Return up to three agency insights across all creators."""

    insights: list[DailyInsight] = []

    health = [creator_health(creator, today) for creator in creators]
    at_risk = [h for h in health if h.status is HealthStatus.OVERLOADED]
    if at_risk:
        names = ", ".join(h.creator_name for h in at_risk[:2])
        more = AND_MORE.format(count=len(at_risk) - 2) if len(at_risk) > 2 else ""
        insights.append(_make("creator_at_risk", "creator_at_risk", InsightSeverity.RISK, 1, names=names, more=more))

    all_tasks = [task for creator in creators for task in creator.tasks]
    done = sum(1 for t in all_tasks if normalize_status(t.status) is TaskStatus.DONE)
    rate = percent(done, len(all_tasks)) if all_tasks else 100
    if rate >= 80:
        insights.append(_make("agency_performance_up", "agency_performance_up", InsightSeverity.INFO, 4, rate=rate))
    elif rate < 50:
        insights.append(_make("completion_rate_low", "agency_completion_low", InsightSeverity.WARNING, 2, rate=rate))

    return _top(insights)
