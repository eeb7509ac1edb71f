"""Ordered rule set that turns monthly stats into insights."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional

from review_engine.metrics import percent
from review_engine.schema import (
    InsightType,
    MonthlyInsight,
    MonthlyStats,
    TaskPriority,
    TaskRecord,
    normalize_priority,
)
from review_engine.texts import MONTHLY_INSIGHTS, WEEKDAYS_HEBREW

MAX_INSIGHTS = 5
MID_MONTH = 15


@dataclass(frozen=True)
class RuleContext:
    stats: MonthlyStats
    month_tasks: list[TaskRecord]
    completed_tasks: list[TaskRecord]


def _fmt(value: float):
    return int(value) if float(value).is_integer() else value


def _insight(kind: InsightType, rule_id: str, **values) -> MonthlyInsight:
    icon, title, template = MONTHLY_INSIGHTS[rule_id]
    return MonthlyInsight(type=kind, icon=icon, title=title, description=template.format(**values))


def completion_rule(ctx: RuleContext) -> Optional[MonthlyInsight]:
    rate = ctx.stats.task_completion_rate
    if rate >= 80:
        return _insight(InsightType.POSITIVE, "completion_high", rate=rate)
    if rate >= 50:
        return _insight(InsightType.NEUTRAL, "completion_mid", rate=rate)
    if ctx.stats.tasks_created > 0:
        return _insight(InsightType.NEGATIVE, "completion_low", rate=rate)
    return None


def goals_rule(ctx: RuleContext) -> Optional[MonthlyInsight]:
    stats = ctx.stats
    if stats.goals_total <= 0:
        return None
    if stats.goal_completion_rate >= 75:
        return _insight(InsightType.POSITIVE, "goals_high", achieved=stats.goals_achieved, total=stats.goals_total)
    if stats.goal_completion_rate >= 50:
        return _insight(InsightType.NEUTRAL, "goals_mid", achieved=stats.goals_achieved, total=stats.goals_total)
    return None


def busiest_day_rule(ctx: RuleContext) -> Optional[MonthlyInsight]:
    busiest = ctx.stats.busiest_day
    if busiest is None or busiest.load < 5:
        return None
    return _insight(
        InsightType.NEUTRAL,
        "busiest_day",
        day=busiest.date.day,
        weekday=WEEKDAYS_HEBREW[busiest.date.weekday()],
        load=busiest.load,
    )


def event_hours_rule(ctx: RuleContext) -> Optional[MonthlyInsight]:
    if ctx.stats.total_events_hours > 20:
        return _insight(InsightType.NEUTRAL, "event_hours", hours=_fmt(ctx.stats.total_events_hours))
    return None


def daily_load_rule(ctx: RuleContext) -> Optional[MonthlyInsight]:
    load = ctx.stats.average_daily_load
    if load > 5:
        return _insight(InsightType.NEGATIVE, "load_high", load=_fmt(load))
    if load <= 3 and ctx.stats.tasks_created > 0:
        return _insight(InsightType.POSITIVE, "load_balanced", load=_fmt(load))
    return None


def high_priority_rule(ctx: RuleContext) -> Optional[MonthlyInsight]:
    total = len(ctx.month_tasks)
    high = sum(1 for task in ctx.month_tasks if normalize_priority(task.priority) is TaskPriority.HIGH)
    if high > total * 0.4 and total > 5:
        return _insight(InsightType.NEGATIVE, "high_priority", percent=percent(high, total))
    return None


def momentum_rule(ctx: RuleContext) -> Optional[MonthlyInsight]:
    completed = ctx.completed_tasks
    if len(completed) <= 5:
        return None
    first_half = sum(1 for t in completed if t.updated_at is not None and t.updated_at.day <= MID_MONTH)
    second_half = sum(1 for t in completed if t.updated_at is not None and t.updated_at.day > MID_MONTH)
    if second_half > first_half * 1.5:
        return _insight(InsightType.POSITIVE, "momentum_up")
    if first_half > second_half * 1.5:
        return _insight(InsightType.NEUTRAL, "momentum_down")
    return None


RULES: tuple[Callable[[RuleContext], Optional[MonthlyInsight]], ...] = (
    completion_rule,
    goals_rule,
    busiest_day_rule,
    event_hours_rule,
    daily_load_rule,
    high_priority_rule,
    momentum_rule,
)


def generate_insights(ctx: RuleContext) -> list[MonthlyInsight]:
    """Evaluate rules in declaration order, keeping at most five results."""

    insights: list[MonthlyInsight] = []
    for rule in RULES:
        if len(insights) >= MAX_INSIGHTS:
            break
        insight = rule(ctx)
        if insight is not None:
            insights.append(insight)
    return insights
