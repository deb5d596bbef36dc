from datetime import date, time

from courselink.scheduling.conflicts import ScheduleEntry, find_conflicts, has_conflict, intervals_overlap

DAY = date(2026, 6, 1)

SESSION_A = ScheduleEntry(DAY, time(10, 0), time(10, 30), id=1)
SESSION_B = ScheduleEntry(DAY, time(10, 15), time(10, 45), id=2)
SESSION_C = ScheduleEntry(DAY, time(10, 30), time(11, 0), id=3)


def test_overlapping_sessions_on_same_date_conflict() -> None:
    assert has_conflict(SESSION_A, [SESSION_B])
    assert has_conflict(SESSION_B, [SESSION_A])


def test_touching_sessions_do_not_conflict() -> None:
    assert not has_conflict(SESSION_A, [SESSION_C])
    assert not has_conflict(SESSION_C, [SESSION_A])


def test_sessions_on_different_dates_never_conflict() -> None:
    other_day = ScheduleEntry(date(2026, 6, 2), time(10, 0), time(10, 30))

    assert not has_conflict(SESSION_A, [other_day])


def test_contained_session_conflicts() -> None:
    inner = ScheduleEntry(DAY, time(10, 5), time(10, 10))

    assert has_conflict(inner, [SESSION_A])
    assert has_conflict(SESSION_A, [inner])


def test_find_conflicts_skips_excluded_id() -> None:
    moved_a = ScheduleEntry(DAY, time(10, 10), time(10, 40), id=1)

    assert find_conflicts(moved_a, [SESSION_A, SESSION_B, SESSION_C], exclude_id=1) == [SESSION_B, SESSION_C]


def test_has_conflict_with_no_existing_sessions() -> None:
    assert not has_conflict(SESSION_A, [])


def test_intervals_overlap_is_half_open() -> None:
    assert intervals_overlap(time(9, 0), time(10, 0), time(9, 59), time(11, 0))
    assert not intervals_overlap(time(9, 0), time(10, 0), time(10, 0), time(11, 0))
