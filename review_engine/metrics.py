"""Rate, rounding and duration helpers shared by the review modules."""

from __future__ import annotations

import math
from typing import Optional

from review_engine.schema import EventRecord


def round_half_up(value: float, digits: int = 0) -> float:
    """Round halves towards +inf, so 2.5 -> 3 and 0.25 -> 0.3 at one digit."""

    factor = 10 ** digits
    return math.floor(value * factor + 0.5) / factor


def percent(part: int, whole: int) -> int:
    """Integer percentage of ``part`` in ``whole``; 0 when ``whole`` is 0."""

    if whole <= 0:
        return 0
    return int(round_half_up(part / whole * 100))


def parse_clock(value: Optional[str]) -> Optional[int]:
    """Minutes for ``HH:MM`` (or ``HH:MM:SS``), else None. Hours are not range-checked."""

    if not value:
        return None
    parts = str(value).strip().split(":")
    if len(parts) < 2:
        return None
    try:
        hours = int(parts[0])
        minutes = int(parts[1])
    except ValueError:
        return None
    return hours * 60 + minutes


def event_hours(event: EventRecord) -> float:
    """Duration of an event in hours; 0.0 when times are missing or invalid."""

    start = parse_clock(event.start_time)
    end = parse_clock(event.end_time)
    if start is None or end is None:
        return 0.0
    hours = (end - start) / 60.0
    return hours if hours > 0 else 0.0
