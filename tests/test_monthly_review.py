from datetime import date, datetime

from review_engine.export import to_jsonable
from review_engine.monthly_review import compute_month_comparison, compute_monthly_review, previous_month
from review_engine.schema import (
    DayLoad,
    EventRecord,
    GoalItem,
    GoalItemStatus,
    GoalRecord,
    InsightType,
    TaskPriority,
    TaskRecord,
    TaskStatus,
)
from review_engine.texts import DEFAULT_CATEGORY, MONTHLY_INSIGHTS

MARCH = 2
YEAR = 2025


def task(n, status=TaskStatus.TODO, priority=TaskPriority.MEDIUM, created=date(2025, 3, 5), **kwargs):
    return TaskRecord(
        id=f"t{n}",
        title=f"Task {n}",
        status=status,
        priority=priority,
        created_at=datetime(created.year, created.month, created.day, 9, 0),
        **kwargs,
    )


def event(n, day, **kwargs):
    return EventRecord(id=f"e{n}", title=f"Event {n}", date=day, **kwargs)


def review(tasks=(), events=(), goals=()):
    return compute_monthly_review(list(tasks), list(events), list(goals), MARCH, YEAR)


def title_of(rule_id):
    return MONTHLY_INSIGHTS[rule_id][1]


def test_completion_rate_scenario():
    tasks = [task(i, status=TaskStatus.DONE) for i in range(8)] + [task(i, status=TaskStatus.TODO) for i in range(8, 10)]
    result = review(tasks)
    assert result.stats.tasks_created == 10
    assert result.stats.tasks_completed == 8
    assert result.stats.task_completion_rate == 80
    assert result.insights[0].type == InsightType.POSITIVE
    assert result.insights[0].title == title_of("completion_high")


def test_empty_month_defaults():
    result = review()
    stats = result.stats
    assert stats.task_completion_rate == 0
    assert stats.goal_completion_rate == 0
    assert stats.events_attended == 0
    assert stats.total_events_hours == 0
    assert stats.average_daily_load == 0
    assert stats.busiest_day == DayLoad(date(2025, 3, 1), 0)
    assert stats.calmest_day == DayLoad(date(2025, 3, 1), 0)
    assert result.insights == []
    assert [bucket.week for bucket in result.weekly_breakdown] == [1, 2, 3, 4, 5]
    assert all(b.tasks_completed == 0 and b.events_count == 0 for b in result.weekly_breakdown)
    assert result.top_categories == []
    assert [p.count for p in result.priority_distribution] == [0, 0, 0]


def test_single_event_hours():
    result = review(events=[event(1, date(2025, 3, 10), start_time="09:00", end_time="11:30")])
    assert result.stats.total_events_hours == 2.5
    assert result.stats.events_attended == 1


def test_malformed_or_negative_durations_contribute_nothing():
    events = [
        event(1, date(2025, 3, 3), start_time="abc", end_time="10:00"),
        event(2, date(2025, 3, 3), start_time="12:00", end_time="11:00"),
        event(3, date(2025, 3, 3), start_time="09:00"),
        event(4, date(2025, 3, 3), start_time="09:00:00", end_time="10:15:00"),
    ]
    result = review(events=events)
    assert result.stats.total_events_hours == 1.3
    assert result.stats.events_attended == 4


def test_goal_day_needs_every_item_done():
    goals = [
        GoalRecord(
            id="g1",
            date=date(2025, 3, 5),
            items=[
                GoalItem("a", GoalItemStatus.DONE),
                GoalItem("b", GoalItemStatus.DONE),
                GoalItem("c", GoalItemStatus.PARTIAL),
            ],
        ),
        GoalRecord(id="g2", date=date(2025, 3, 6), items=[]),
        GoalRecord(id="g3", date=date(2025, 3, 7), items=[GoalItem("d", GoalItemStatus.DONE)]),
        GoalRecord(id="g4", date=date(2025, 4, 1), items=[GoalItem("e", GoalItemStatus.DONE)]),
    ]
    stats = review(goals=goals).stats
    assert stats.goals_total == 3
    assert stats.goals_achieved == 1
    assert stats.goal_completion_rate == 33


def test_high_priority_overload():
    tasks = [task(i, priority=TaskPriority.HIGH) for i in range(9)] + [task(i, priority=TaskPriority.LOW) for i in range(9, 20)]
    result = review(tasks)
    overload = [i for i in result.insights if i.title == title_of("high_priority")]
    assert len(overload) == 1
    assert overload[0].type == InsightType.NEGATIVE
    assert "45%" in overload[0].description


def test_filtering_uses_created_at_not_due_date():
    tasks = [
        task(1, created=date(2025, 2, 28), due_date=date(2025, 3, 10)),
        task(2, created=date(2025, 3, 31), due_date=date(2025, 4, 2)),
        TaskRecord(id="t3", title="no created", status=TaskStatus.DONE),
    ]
    result = review(tasks)
    assert result.stats.tasks_created == 1
    assert result.stats.busiest_day.load == 0


def test_busiest_and_calmest_days_tie_break_on_first_day():
    tasks = [task(1, due_date=date(2025, 3, 4))]
    events = [
        event(1, date(2025, 3, 4)),
        event(2, date(2025, 3, 12)),
        event(3, date(2025, 3, 12)),
    ]
    stats = review(tasks, events).stats
    assert stats.busiest_day == DayLoad(date(2025, 3, 4), 2)
    assert stats.calmest_day == DayLoad(date(2025, 3, 1), 0)
    assert stats.busiest_day.load >= stats.calmest_day.load
    assert stats.average_daily_load == 0.1


def test_busiest_day_insight_names_weekday():
    events = [event(i, date(2025, 3, 12)) for i in range(5)]
    result = review(events=events)
    busiest = [i for i in result.insights if i.title == title_of("busiest_day")]
    assert len(busiest) == 1
    assert busiest[0].type == InsightType.NEUTRAL
    assert busiest[0].description.startswith("12 (יום רביעי)")


def test_event_hours_insight_over_twenty():
    events = [event(i, date(2025, 3, 3 + i), start_time="08:00", end_time="16:00") for i in range(3)]
    result = review(events=events)
    assert result.stats.total_events_hours == 24
    assert any(i.title == title_of("event_hours") and "24" in i.description for i in result.insights)


def test_momentum_rule_compares_month_halves():
    late = [
        task(i, status=TaskStatus.DONE, updated_at=datetime(2025, 3, 20 + i, 10, 0)) for i in range(6)
    ]
    result = review(late)
    assert any(i.title == title_of("momentum_up") and i.type == InsightType.POSITIVE for i in result.insights)

    early = [task(i, status=TaskStatus.DONE, updated_at=datetime(2025, 3, 2 + i, 10, 0)) for i in range(6)]
    result = review(early)
    assert any(i.title == title_of("momentum_down") and i.type == InsightType.NEUTRAL for i in result.insights)

    few = late[:5]
    result = review(few)
    assert not any(i.title in (title_of("momentum_up"), title_of("momentum_down")) for i in result.insights)


def test_insights_capped_at_five_in_rule_order():
    tasks = [
        task(i, status=TaskStatus.DONE, priority=TaskPriority.HIGH, updated_at=datetime(2025, 3, 20, 9, 0))
        for i in range(6)
    ]
    events = [event(i, date(2025, 3, 12), start_time="08:00", end_time="13:00") for i in range(5)]
    goals = [GoalRecord(id="g1", date=date(2025, 3, 12), items=[GoalItem("a", GoalItemStatus.DONE)])]
    result = review(tasks, events, goals)
    assert [i.title for i in result.insights] == [
        title_of("completion_high"),
        title_of("goals_high"),
        title_of("busiest_day"),
        title_of("event_hours"),
        title_of("load_balanced"),
    ]


def test_low_completion_is_negative():
    tasks = [task(0, status=TaskStatus.DONE)] + [task(i) for i in range(1, 8)]
    result = review(tasks)
    assert result.stats.task_completion_rate == 13
    assert result.insights[0].type == InsightType.NEGATIVE


def test_top_categories_sorted_with_first_seen_ties():
    cats = ["b", "a", "a", "b", "c", None, "", "d", "e"]
    events = [event(i, date(2025, 3, 1 + i), category=cat) for i, cat in enumerate(cats)]
    result = review(events=events)
    assert [(c.category, c.count) for c in result.top_categories] == [
        ("b", 2),
        ("a", 2),
        (DEFAULT_CATEGORY, 2),
        ("c", 1),
        ("d", 1),
    ]


def test_weekly_breakdown_buckets():
    tasks = [
        task(1, status=TaskStatus.DONE, updated_at=datetime(2025, 3, 8, 12, 0)),
        task(2, status=TaskStatus.DONE, updated_at=datetime(2025, 3, 30, 12, 0)),
        task(3, status=TaskStatus.DONE, updated_at=datetime(2025, 4, 3, 12, 0)),
        task(4, status=TaskStatus.DONE),
    ]
    events = [event(1, date(2025, 3, 1)), event(2, date(2025, 3, 29)), event(3, date(2025, 4, 3))]
    result = review(tasks, events)
    weeks = {b.week: (b.tasks_completed, b.events_count) for b in result.weekly_breakdown}
    assert weeks == {1: (0, 1), 2: (1, 0), 3: (0, 0), 4: (0, 0), 5: (1, 1)}
    # Buckets key on updated_at while the monthly total keys on created_at.
    assert sum(b.tasks_completed for b in result.weekly_breakdown) <= result.stats.tasks_completed


def test_events_from_other_months_never_reach_week_buckets():
    events = [event(1, date(2025, 4, 3)), event(2, date(2025, 2, 3))]
    result = review(events=events)
    assert all(b.events_count == 0 for b in result.weekly_breakdown)


def test_short_month_fifth_week_is_empty():
    result = compute_monthly_review([], [EventRecord("e1", "x", date(2025, 2, 28))], [], 1, 2025)
    assert result.weekly_breakdown[3].events_count == 1
    assert result.weekly_breakdown[4].events_count == 0


def test_priority_distribution_normalizes_and_drops_unknown():
    tasks = [
        task(1, priority=TaskPriority.HIGH),
        task(2, priority="high"),
        task(3, priority="Low"),
        task(4, priority="urgent"),
        task(5, priority=None),
    ]
    result = review(tasks)
    assert [(p.priority, p.count) for p in result.priority_distribution] == [
        (TaskPriority.HIGH, 2),
        (TaskPriority.MEDIUM, 0),
        (TaskPriority.LOW, 1),
    ]
    assert sum(p.count for p in result.priority_distribution) <= result.stats.tasks_created


def test_unrecognized_status_counts_as_open():
    result = review([task(1, status="ARCHIVED?"), task(2, status="done")])
    assert result.stats.tasks_completed == 1


def test_month_label_and_idempotence():
    tasks = [task(i, status=TaskStatus.DONE, updated_at=datetime(2025, 3, 9, 9, 0)) for i in range(3)]
    events = [event(1, date(2025, 3, 9), category="shoot", start_time="10:00", end_time="12:00")]
    first = review(tasks, events)
    second = review(tasks, events)
    assert first == second
    assert to_jsonable(first) == to_jsonable(second)
    assert first.month_label == "מרץ 2025"


def test_previous_month_wraps_year():
    assert previous_month(0, 2025) == (11, 2024)
    assert previous_month(5, 2025) == (4, 2025)


def test_month_comparison():
    current = review([task(i, status=TaskStatus.DONE) for i in range(3)], [event(1, date(2025, 3, 2))]).stats
    previous = review([task(i, status=TaskStatus.DONE) for i in range(5)], [event(1, date(2025, 3, 2)), event(2, date(2025, 3, 3))]).stats
    deltas = compute_month_comparison(current, previous)
    assert [(d.change, d.is_positive) for d in deltas] == [(-2, False), (-1, True), (0, True)]


def test_mid_completion_is_neutral():
    tasks = [task(i, status=TaskStatus.DONE) for i in range(6)] + [task(i) for i in range(6, 10)]
    result = review(tasks)
    assert result.stats.task_completion_rate == 60
    assert result.insights[0].type == InsightType.NEUTRAL
    assert result.insights[0].title == title_of("completion_mid")


def goal_day(n, done):
    status = GoalItemStatus.DONE if done else GoalItemStatus.NOT_DONE
    return GoalRecord(id=f"g{n}", date=date(2025, 3, 1 + n), items=[GoalItem("a", status)])


def test_half_goals_achieved_is_neutral():
    goals = [goal_day(0, True), goal_day(1, True), goal_day(2, False), goal_day(3, False)]
    result = review(goals=goals)
    assert result.stats.goal_completion_rate == 50
    assert [(i.type, i.title) for i in result.insights] == [(InsightType.NEUTRAL, title_of("goals_mid"))]


def test_goal_rate_below_half_gives_no_insight():
    goals = [goal_day(0, True), goal_day(1, False), goal_day(2, False), goal_day(3, False)]
    result = review(goals=goals)
    assert result.stats.goal_completion_rate == 25
    assert result.insights == []


def test_high_average_load_is_negative():
    events = [event(day * 10 + i, date(2025, 3, day)) for day in range(1, 32) for i in range(6)]
    result = review(events=events)
    assert len(events) == 186
    assert result.stats.average_daily_load == 6.0
    load = [i for i in result.insights if i.title == title_of("load_high")]
    assert len(load) == 1
    assert load[0].type == InsightType.NEGATIVE


def test_busiest_day_below_five_gives_no_insight():
    result = review(events=[event(i, date(2025, 3, 12)) for i in range(4)])
    assert result.stats.busiest_day == DayLoad(date(2025, 3, 12), 4)
    assert result.insights == []


def test_completed_tasks_without_updated_at_sit_out_momentum():
    # Neither half counts them, so six undated completions give no trend.
    tasks = [task(i, status=TaskStatus.DONE) for i in range(6)]
    result = review(tasks)
    assert result.stats.tasks_completed == 6
    assert not any(i.title in (title_of("momentum_up"), title_of("momentum_down")) for i in result.insights)
    assert all(b.tasks_completed == 0 for b in result.weekly_breakdown)


def test_clock_hours_past_midnight_are_not_rejected():
    result = review(events=[event(1, date(2025, 3, 10), start_time="23:00", end_time="25:30")])
    assert result.stats.total_events_hours == 2.5


def test_lowercase_priority_counts_toward_overload():
    tasks = [task(i, priority="high") for i in range(9)] + [task(i, priority="LOW") for i in range(9, 20)]
    result = review(tasks)
    assert any(i.title == title_of("high_priority") for i in result.insights)
