"""Creator health score.

A 0-100 load score built from open and overdue tasks, today's and this
week's events, backlog pressure (tasks due within three days) and streak
pressure (consecutive heavy days ahead). Scores up to 35 are calm, up to 70
busy, anything above is overloaded.
"""

from __future__ import annotations

from dataclasses import dataclass

from review_engine.metrics import round_half_up
from review_engine.schema import HealthStatus
from review_engine.texts import HEALTH_INSIGHTS, HEALTH_STATUS_LABELS

WEIGHTS = {
    "open_tasks": 0.8,
    "overdue_tasks": 5.0,
    "events_today": 3.0,
    "events_week": 0.5,
    "backlog_pressure": 3.0,
    "streak_pressure": 8.0,
}

CALM_THRESHOLD = 35
BUSY_THRESHOLD = 70
HEAVY_DAY_THRESHOLD = 5
MAX_STREAK = 5
MAX_HEALTH_INSIGHTS = 3


@dataclass(frozen=True)
class HealthDetails:
    open_tasks: float
    overdue_tasks: float
    events_today: float
    events_week: float
    backlog_pressure: float
    streak_pressure: float


@dataclass(frozen=True)
class HealthResult:
    score: int
    status: HealthStatus
    status_label: str
    insights: list[str]
    details: HealthDetails


def _status_for(score: int) -> HealthStatus:
    if score <= CALM_THRESHOLD:
        return HealthStatus.CALM
    if score <= BUSY_THRESHOLD:
        return HealthStatus.BUSY
    return HealthStatus.OVERLOADED


def _fmt(value):
    return int(value) if float(value).is_integer() else value


def _health_insights(details: HealthDetails) -> list[str]:
    # (weighted contribution, rule order, message) for each rule that fires
    triggered = []
    checks = (
        ("overdue", "overdue_tasks", details.overdue_tasks, details.overdue_tasks > 0),
        ("backlog", "backlog_pressure", details.backlog_pressure, details.backlog_pressure > 3),
        ("events_today", "events_today", details.events_today, details.events_today > 4),
        ("streak", "streak_pressure", details.streak_pressure, details.streak_pressure >= 3),
        ("open_tasks", "open_tasks", details.open_tasks, details.open_tasks > 15),
    )
    for order, (key, weight_key, count, fired) in enumerate(checks):
        if fired:
            contribution = count * WEIGHTS[weight_key]
            triggered.append((-contribution, order, HEALTH_INSIGHTS[key].format(count=_fmt(count))))

    if triggered:
        return [message for _, _, message in sorted(triggered)[:MAX_HEALTH_INSIGHTS]]

    if details.open_tasks < 5 and details.overdue_tasks == 0:
        return [HEALTH_INSIGHTS["all_clear"]]
    if details.events_today == 0:
        return [HEALTH_INSIGHTS["deep_work"]]
    return []


def compute_health_score(
    open_tasks_count: float,
    overdue_tasks_count: float,
    events_today_count: float,
    events_week_count: float,
    backlog_pressure: float,
    streak_pressure: float,
) -> HealthResult:
    """Compute the clamped health score, its status and up to three insights."""

    details = HealthDetails(
        open_tasks=open_tasks_count,
        overdue_tasks=overdue_tasks_count,
        events_today=events_today_count,
        events_week=events_week_count,
        backlog_pressure=backlog_pressure,
        streak_pressure=streak_pressure,
    )

    raw = (
        open_tasks_count * WEIGHTS["open_tasks"]
        + overdue_tasks_count * WEIGHTS["overdue_tasks"]
        + events_today_count * WEIGHTS["events_today"]
        + events_week_count * WEIGHTS["events_week"]
        + backlog_pressure * WEIGHTS["backlog_pressure"]
        + streak_pressure * WEIGHTS["streak_pressure"]
    )
    score = int(min(100, max(0, round_half_up(raw))))
    status = _status_for(score)

    return HealthResult(
        score=score,
        status=status,
        status_label=HEALTH_STATUS_LABELS[status.value],
        insights=_health_insights(details),
        details=details,
    )


def calculate_daily_load(events_count: int, due_tasks_count: int) -> int:
    return events_count + due_tasks_count


def is_heavy_day(load: float) -> bool:
    return load >= HEAVY_DAY_THRESHOLD


def calculate_streak_pressure(daily_loads: list[float]) -> int:
    """Count leading heavy days, capped at five."""

    streak = 0
    for load in daily_loads:
        if not is_heavy_day(load):
            break
        streak += 1
    return min(MAX_STREAK, streak)
