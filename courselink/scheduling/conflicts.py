"""Overlap detection between defence sessions scheduled on the same date."""

from dataclasses import dataclass
from datetime import date, time
from typing import Iterable


@dataclass(frozen=True)
class ScheduleEntry:
    defence_date: date
    start_time: time
    end_time: time
    id: int | None = None


def intervals_overlap(start_a: time, end_a: time, start_b: time, end_b: time) -> bool:
    # Half-open intervals: touching boundaries do not overlap.
    return start_a < end_b and end_a > start_b


def find_conflicts(candidate, existing: Iterable, exclude_id: int | None = None) -> list:
    """Return the entries in ``existing`` that overlap ``candidate``.

    Both sides only need ``defence_date``, ``start_time`` and ``end_time``
    attributes, so ORM rows and ``ScheduleEntry`` values mix freely. An
    entry whose ``id`` equals ``exclude_id`` is skipped, which lets an
    update ignore the session being edited.
    """
    conflicts = []
    for other in existing:
        if exclude_id is not None and getattr(other, 'id', None) == exclude_id:
            continue
        if other.defence_date != candidate.defence_date:
            continue
        if intervals_overlap(candidate.start_time, candidate.end_time, other.start_time, other.end_time):
            conflicts.append(other)
    return conflicts


def has_conflict(candidate, existing: Iterable, exclude_id: int | None = None) -> bool:
    return bool(find_conflicts(candidate, existing, exclude_id=exclude_id))
