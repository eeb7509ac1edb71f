"""Agency-level aggregation of creator monthly reviews."""

from __future__ import annotations

from dataclasses import dataclass

from review_engine.metrics import round_half_up
from review_engine.schema import MonthlyReviewResult

TOP_PERFORMERS = 3


@dataclass(frozen=True)
class CreatorMonthlySummary:
    creator_id: str
    creator_name: str
    tasks_completed: int
    tasks_created: int
    task_completion_rate: int
    events_count: int
    goals_achieved: int
    goals_total: int


@dataclass(frozen=True)
class AgencyMonthlySummary:
    total_tasks_completed: int
    total_events_count: int
    total_goals_achieved: int
    average_completion_rate: int
    top_performers: list[CreatorMonthlySummary]
    creator_stats: list[CreatorMonthlySummary]


def summarize_creator(creator_id: str, creator_name: str, review: MonthlyReviewResult) -> CreatorMonthlySummary:
    stats = review.stats
    return CreatorMonthlySummary(
        creator_id=creator_id,
        creator_name=creator_name,
        tasks_completed=stats.tasks_completed,
        tasks_created=stats.tasks_created,
        task_completion_rate=stats.task_completion_rate,
        events_count=stats.events_attended,
        goals_achieved=stats.goals_achieved,
        goals_total=stats.goals_total,
    )


def summarize_agency_month(creator_reviews: list[tuple[str, str, MonthlyReviewResult]]) -> AgencyMonthlySummary:
    """Aggregate ``(creator_id, name, review)`` triples into agency totals."""

    creators = [summarize_creator(cid, name, review) for cid, name, review in creator_reviews]
    average = (
        int(round_half_up(sum(c.task_completion_rate for c in creators) / len(creators))) if creators else 0
    )
    return AgencyMonthlySummary(
        total_tasks_completed=sum(c.tasks_completed for c in creators),
        total_events_count=sum(c.events_count for c in creators),
        total_goals_achieved=sum(c.goals_achieved for c in creators),
        average_completion_rate=average,
        top_performers=sorted(creators, key=lambda c: c.task_completion_rate, reverse=True)[:TOP_PERFORMERS],
        creator_stats=sorted(creators, key=lambda c: c.tasks_completed, reverse=True),
    )
