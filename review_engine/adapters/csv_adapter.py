"""CSV adapters for task, event and goal exports."""

from __future__ import annotations

import csv
from typing import Callable, TypeVar

from review_engine.adapters.records import event_from_row, goal_from_row, task_from_row
from review_engine.schema import EventRecord, GoalRecord, TaskRecord

T = TypeVar("T")


def _parse_rows(file_path: str, build: Callable[[dict, str], T]) -> list[T]:
    with open(file_path, newline="", encoding="utf-8") as handle:
        reader = csv.DictReader(handle)
        if not reader.fieldnames:
            return []

        records: list[T] = []
        for row_number, row in enumerate(reader, start=2):
            records.append(build(row, f"Row {row_number}"))
        return records


def parse_tasks(file_path: str) -> list[TaskRecord]:
    """Parse a tasks CSV export."""

    return _parse_rows(file_path, task_from_row)


def parse_events(file_path: str) -> list[EventRecord]:
    """Parse a calendar events CSV export."""

    return _parse_rows(file_path, event_from_row)


def parse_goals(file_path: str) -> list[GoalRecord]:
    """Parse a daily goals CSV export; ``items`` holds a JSON array."""

    return _parse_rows(file_path, goal_from_row)
