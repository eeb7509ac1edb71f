"""JSON adapter for review datasets."""

from __future__ import annotations

import json

from review_engine.adapters.records import ReviewDataset, event_from_row, goal_from_row, task_from_row

_SECTIONS = ("tasks", "events", "goals")


def _section(payload: dict, name: str) -> list:
    items = payload.get(name) or []
    if not isinstance(items, list):
        raise ValueError(f"'{name}' must be a list of objects")
    for index, item in enumerate(items, start=1):
        if not isinstance(item, dict):
            raise ValueError(f"{name} item {index}: expected an object")
    return items


def parse_payload(payload: dict) -> ReviewDataset:
    """Normalize an already-decoded ``{"tasks", "events", "goals"}`` object."""

    if not isinstance(payload, dict):
        raise ValueError("JSON payload must be an object with tasks, events and goals")
    if not any(name in payload for name in _SECTIONS):
        raise ValueError("JSON payload has none of the tasks, events or goals sections")

    return ReviewDataset(
        tasks=[task_from_row(item, f"Task {i}") for i, item in enumerate(_section(payload, "tasks"), start=1)],
        events=[event_from_row(item, f"Event {i}") for i, item in enumerate(_section(payload, "events"), start=1)],
        goals=[goal_from_row(item, f"Goal {i}") for i, item in enumerate(_section(payload, "goals"), start=1)],
    )


def parse(file_path: str) -> ReviewDataset:
    """Parse a JSON file into a review dataset."""

    with open(file_path, encoding="utf-8") as handle:
        payload = json.load(handle)
    return parse_payload(payload)
