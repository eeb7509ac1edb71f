"""Monthly review computation.

Deterministic statistics and rule-based insights for one calendar month of
tasks, events and daily goals. Every function here is pure: records outside
the month are filtered out, malformed optional fields count as zero, and
nothing reads the clock.
"""

from __future__ import annotations

import logging
from collections import Counter
from typing import Iterable, Optional

from review_engine.metrics import event_hours, percent, round_half_up
from review_engine.review_rules import RuleContext, generate_insights
from review_engine.schema import (
    CategoryCount,
    DayLoad,
    EventRecord,
    GoalRecord,
    MonthDelta,
    MonthlyReviewResult,
    MonthlyStats,
    PriorityCount,
    ReviewWindow,
    TaskPriority,
    TaskRecord,
    TaskStatus,
    WeekBucket,
    as_date,
    normalize_priority,
    normalize_status,
)
from review_engine.texts import COMPARISON_LABELS, DEFAULT_CATEGORY, MONTHS_HEBREW

logger = logging.getLogger(__name__)

TOP_CATEGORIES = 5
WEEKS_PER_MONTH = 5


def _daily_loads(window: ReviewWindow, month_tasks: list[TaskRecord], month_events: list[EventRecord]) -> dict:
    loads = {day: 0 for day in window.days()}
    for event in month_events:
        loads[as_date(event.date)] += 1
    for task in month_tasks:
        due = as_date(task.due_date)
        if due in loads:
            loads[due] += 1
    return loads


def _extremes(loads: dict) -> tuple[Optional[DayLoad], Optional[DayLoad]]:
    busiest: Optional[DayLoad] = None
    calmest: Optional[DayLoad] = None
    for day in sorted(loads):
        load = loads[day]
        if busiest is None or load > busiest.load:
            busiest = DayLoad(day, load)
        if calmest is None or load < calmest.load:
            calmest = DayLoad(day, load)
    return busiest, calmest


def _top_categories(month_events: list[EventRecord]) -> list[CategoryCount]:
    counts = Counter(event.category or DEFAULT_CATEGORY for event in month_events)
    # Counter keeps insertion order, and sorted() is stable, so ties stay first-seen.
    ranked = sorted(counts.items(), key=lambda item: item[1], reverse=True)
    return [CategoryCount(category, count) for category, count in ranked[:TOP_CATEGORIES]]


def _weekly_breakdown(
    window: ReviewWindow, completed_tasks: list[TaskRecord], month_events: list[EventRecord]
) -> list[WeekBucket]:
    buckets = []
    for week in range(1, WEEKS_PER_MONTH + 1):
        start = (week - 1) * 7 + 1
        end = min(week * 7, window.days_in_month)

        tasks_done = 0
        for task in completed_tasks:
            updated = task.updated_at
            if updated is None:
                continue
            if updated.month == window.month + 1 and updated.year == window.year and start <= updated.day <= end:
                tasks_done += 1

        # Events are already window-filtered, so only the day of month is checked.
        events_count = sum(1 for event in month_events if start <= as_date(event.date).day <= end)
        buckets.append(WeekBucket(week=week, tasks_completed=tasks_done, events_count=events_count))
    return buckets


def _priority_distribution(month_tasks: list[TaskRecord]) -> list[PriorityCount]:
    counts = Counter(normalize_priority(task.priority) for task in month_tasks)
    return [PriorityCount(priority, counts.get(priority, 0)) for priority in TaskPriority]


def compute_monthly_review(
    tasks: Iterable[TaskRecord],
    events: Iterable[EventRecord],
    goals: Iterable[GoalRecord],
    month: int,
    year: int,
) -> MonthlyReviewResult:
    """Compute stats, insights and chart breakdowns for ``month`` (0-11) of ``year``."""

    window = ReviewWindow(month=month, year=year)
    tasks = list(tasks)
    events = list(events)
    goals = list(goals)

    month_tasks = [task for task in tasks if window.contains(task.created_at)]
    completed_tasks = [task for task in month_tasks if normalize_status(task.status) is TaskStatus.DONE]
    month_events = [event for event in events if window.contains(event.date)]
    month_goals = [goal for goal in goals if window.contains(goal.date)]
    achieved_goals = [goal for goal in month_goals if goal.achieved]

    logger.debug(
        "Review %s-%02d: %d/%d tasks, %d/%d events, %d/%d goals in window",
        year,
        month + 1,
        len(month_tasks),
        len(tasks),
        len(month_events),
        len(events),
        len(month_goals),
        len(goals),
    )

    loads = _daily_loads(window, month_tasks, month_events)
    busiest, calmest = _extremes(loads)
    total_load = sum(loads.values())
    days = window.days_in_month
    hours = sum(event_hours(event) for event in month_events)

    stats = MonthlyStats(
        tasks_completed=len(completed_tasks),
        tasks_created=len(month_tasks),
        task_completion_rate=percent(len(completed_tasks), len(month_tasks)),
        events_attended=len(month_events),
        goals_achieved=len(achieved_goals),
        goals_total=len(month_goals),
        goal_completion_rate=percent(len(achieved_goals), len(month_goals)),
        busiest_day=busiest,
        calmest_day=calmest,
        average_daily_load=round_half_up(total_load / days, 1) if days else 0.0,
        total_events_hours=round_half_up(hours, 1),
    )

    insights = generate_insights(RuleContext(stats=stats, month_tasks=month_tasks, completed_tasks=completed_tasks))

    return MonthlyReviewResult(
        stats=stats,
        insights=insights,
        top_categories=_top_categories(month_events),
        weekly_breakdown=_weekly_breakdown(window, completed_tasks, month_events),
        priority_distribution=_priority_distribution(month_tasks),
        month_label=f"{MONTHS_HEBREW[month]} {year}",
    )


def previous_month(month: int, year: int) -> tuple[int, int]:
    if month == 0:
        return 11, year - 1
    return month - 1, year


def compute_month_comparison(current: MonthlyStats, previous: MonthlyStats) -> list[MonthDelta]:
    """Compare two months of stats; events count as neutral, so always positive."""

    task_diff = current.tasks_completed - previous.tasks_completed
    event_diff = current.events_attended - previous.events_attended
    rate_diff = current.task_completion_rate - previous.task_completion_rate
    return [
        MonthDelta(COMPARISON_LABELS["tasks_completed"], task_diff, task_diff >= 0),
        MonthDelta(COMPARISON_LABELS["events"], event_diff, True),
        MonthDelta(COMPARISON_LABELS["completion_rate"], rate_diff, rate_diff >= 0),
    ]
