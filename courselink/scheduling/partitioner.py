"""Split a defence session window into contiguous, equal booking slots.

Arithmetic is done on integer microseconds since midnight, the finest
unit ``datetime.time`` carries, so slot boundaries never drift. The
per-slot duration is ``window // count`` truncated down to a whole
multiple of ``resolution_microseconds``; any remainder is left unused
at the end of the window rather than folded into the last slot.

The service passes ``SLOT_RESOLUTION_MICROSECONDS`` from the environment,
which defaults to one second: 30 minutes split 7 ways gives 257 s slots.
Set it to ``1`` for sub-second slots (257.142857 s), the finest split a
``time`` column can hold.
"""

from dataclasses import dataclass
from datetime import date, time, timedelta

MICROSECONDS_PER_SECOND = 1_000_000
DEFAULT_RESOLUTION_MICROSECONDS = MICROSECONDS_PER_SECOND


@dataclass(frozen=True)
class SessionWindow:
    """The ``[start_time, end_time)`` interval of a defence session."""

    start_time: time
    end_time: time
    defence_date: date | None = None
    description: str | None = None
    task_category_id: int | None = None

    def __post_init__(self) -> None:
        if self.start_time >= self.end_time:
            raise ValueError('Start time must be before end time')

    @classmethod
    def from_session(cls, session) -> 'SessionWindow':
        return cls(
            start_time=session.start_time,
            end_time=session.end_time,
            defence_date=session.defence_date,
            description=session.description,
            task_category_id=session.task_category_id,
        )

    @property
    def duration(self) -> timedelta:
        return timedelta(microseconds=to_microseconds(self.end_time) - to_microseconds(self.start_time))


@dataclass(frozen=True)
class SlotInterval:
    start_time: time
    end_time: time


def to_microseconds(value: time) -> int:
    return ((value.hour * 60 + value.minute) * 60 + value.second) * MICROSECONDS_PER_SECOND + value.microsecond


def from_microseconds(total: int) -> time:
    seconds, microsecond = divmod(total, MICROSECONDS_PER_SECOND)
    minutes, second = divmod(seconds, 60)
    hour, minute = divmod(minutes, 60)
    return time(hour, minute, second, microsecond)


def slot_duration_microseconds(
    window: SessionWindow,
    count: int,
    resolution_microseconds: int = DEFAULT_RESOLUTION_MICROSECONDS,
) -> int:
    if count < 1:
        raise ValueError('Booking slots count must be greater than 0')
    if resolution_microseconds < 1:
        raise ValueError('Slot resolution must be a positive number of microseconds')

    window_microseconds = to_microseconds(window.end_time) - to_microseconds(window.start_time)
    duration = window_microseconds // count
    return duration - duration % resolution_microseconds


def partition_window(
    window: SessionWindow,
    count: int,
    resolution_microseconds: int = DEFAULT_RESOLUTION_MICROSECONDS,
) -> list[SlotInterval]:
    """Return ``count`` back-to-back slots starting at ``window.start_time``.

    Raises ``ValueError`` when ``count`` is not positive or the window is
    too short to give every slot a non-zero duration.
    """
    duration = slot_duration_microseconds(window, count, resolution_microseconds)
    if duration == 0:
        raise ValueError(f'Session window {window.duration} is too short for {count} booking slots')

    window_start = to_microseconds(window.start_time)
    return [
        SlotInterval(
            start_time=from_microseconds(window_start + index * duration),
            end_time=from_microseconds(window_start + (index + 1) * duration),
        )
        for index in range(count)
    ]
