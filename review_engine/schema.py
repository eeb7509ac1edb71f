"""Core data schema for review records and computed results."""

from __future__ import annotations

import calendar
from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from typing import Optional


class TaskStatus(str, Enum):
    TODO = "TODO"
    DOING = "DOING"
    DONE = "DONE"


class TaskPriority(str, Enum):
    HIGH = "HIGH"
    MEDIUM = "MEDIUM"
    LOW = "LOW"


class GoalItemStatus(str, Enum):
    DONE = "DONE"
    PARTIAL = "PARTIAL"
    NOT_DONE = "NOT_DONE"


class HealthStatus(str, Enum):
    CALM = "calm"
    BUSY = "busy"
    OVERLOADED = "overloaded"


class InsightType(str, Enum):
    POSITIVE = "positive"
    NEGATIVE = "negative"
    NEUTRAL = "neutral"


class InsightSeverity(str, Enum):
    INFO = "info"
    WARNING = "warning"
    RISK = "risk"


_STATUS_ALIASES = {
    "TODO": TaskStatus.TODO,
    "NOT_STARTED": TaskStatus.TODO,
    "DOING": TaskStatus.DOING,
    "IN_PROGRESS": TaskStatus.DOING,
    "DONE": TaskStatus.DONE,
}


def _upper(value) -> str:
    if isinstance(value, Enum):
        value = value.value
    if value is None:
        return ""
    return str(value).strip().upper()


def normalize_status(value) -> TaskStatus:
    """Map a raw status to TaskStatus; anything unknown counts as TODO."""

    return _STATUS_ALIASES.get(_upper(value), TaskStatus.TODO)


def normalize_priority(value) -> Optional[TaskPriority]:
    """Map a raw priority to TaskPriority, or None when unrecognized."""

    key = _upper(value)
    if key in TaskPriority.__members__:
        return TaskPriority[key]
    return None


def normalize_goal_status(value) -> GoalItemStatus:
    key = _upper(value)
    if key in GoalItemStatus.__members__:
        return GoalItemStatus[key]
    return GoalItemStatus.NOT_DONE


@dataclass
class TaskRecord:
    """Task snapshot supplied by the storage layer."""

    id: str
    title: str
    status: TaskStatus = TaskStatus.TODO
    priority: Optional[TaskPriority] = None
    due_date: Optional[date] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    archived: bool = False
    company_id: Optional[str] = None


@dataclass
class EventRecord:
    """Calendar event snapshot. Times are ``HH:MM`` strings."""

    id: str
    title: str
    date: Optional[date]
    category: Optional[str] = None
    start_time: Optional[str] = None
    end_time: Optional[str] = None
    company_id: Optional[str] = None


@dataclass
class GoalItem:
    title: str
    status: GoalItemStatus = GoalItemStatus.NOT_DONE


@dataclass
class GoalRecord:
    """One day of goals; achieved only when every item is done."""

    id: str
    date: Optional[date]
    items: list[GoalItem] = field(default_factory=list)

    @property
    def achieved(self) -> bool:
        if not self.items:
            return False
        return all(normalize_goal_status(item.status) is GoalItemStatus.DONE for item in self.items)


@dataclass(frozen=True)
class ReviewWindow:
    """Calendar month boundary; ``month`` is 0-11."""

    month: int
    year: int

    @property
    def days_in_month(self) -> int:
        return calendar.monthrange(self.year, self.month + 1)[1]

    @property
    def first_day(self) -> date:
        return date(self.year, self.month + 1, 1)

    @property
    def last_day(self) -> date:
        return date(self.year, self.month + 1, self.days_in_month)

    def contains(self, value) -> bool:
        day = as_date(value)
        if day is None:
            return False
        return self.first_day <= day <= self.last_day

    def days(self) -> list[date]:
        return [date(self.year, self.month + 1, d) for d in range(1, self.days_in_month + 1)]


def as_date(value) -> Optional[date]:
    """Reduce a date or datetime to its calendar day."""

    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return None


@dataclass(frozen=True)
class DayLoad:
    date: date
    load: int


@dataclass(frozen=True)
class MonthlyStats:
    tasks_completed: int
    tasks_created: int
    task_completion_rate: int
    events_attended: int
    goals_achieved: int
    goals_total: int
    goal_completion_rate: int
    busiest_day: Optional[DayLoad]
    calmest_day: Optional[DayLoad]
    average_daily_load: float
    total_events_hours: float


@dataclass(frozen=True)
class MonthlyInsight:
    type: InsightType
    icon: str
    title: str
    description: str


@dataclass(frozen=True)
class CategoryCount:
    category: str
    count: int


@dataclass(frozen=True)
class WeekBucket:
    week: int
    tasks_completed: int
    events_count: int


@dataclass(frozen=True)
class PriorityCount:
    priority: TaskPriority
    count: int


@dataclass(frozen=True)
class MonthlyReviewResult:
    stats: MonthlyStats
    insights: list[MonthlyInsight]
    top_categories: list[CategoryCount]
    weekly_breakdown: list[WeekBucket]
    priority_distribution: list[PriorityCount]
    month_label: str


@dataclass(frozen=True)
class MonthDelta:
    label: str
    change: int
    is_positive: bool
