import logging
from datetime import date, time

from sqlalchemy.orm import Session

from courselink.core.exceptions import ConflictException, InvalidArgumentException, NotFoundException
from courselink.database import transaction
from courselink.models.booking_slot import BookingSlot
from courselink.models.defence_session import DefenceSession
from courselink.models.task_category import TaskCategory
from courselink.scheduling.conflicts import ScheduleEntry, find_conflicts
from courselink.services.booking_slot_service import booking_slots_exist

logger = logging.getLogger(__name__)


def _not_found(defence_session_id: int) -> NotFoundException:
    return NotFoundException(
        f"Defence session with ID {defence_session_id} doesn't exist!",
        code='DEFENCE_SESSION_NOT_FOUND',
        details={'defence_session_id': defence_session_id},
    )


def validate_time_order(start_time: time, end_time: time) -> None:
    if start_time >= end_time:
        logger.warning('Start time %s is not before end time %s', start_time, end_time)
        raise InvalidArgumentException(
            'Start time must be before end time!',
            code='DEFENCE_SESSION_TIME_ORDER',
            details={'start_time': start_time.isoformat(), 'end_time': end_time.isoformat()},
        )


def _ensure_task_category_exists(task_category_id: int, db: Session) -> None:
    if db.query(TaskCategory.id).filter(TaskCategory.id == task_category_id).first() is None:
        logger.warning('Task category with ID %s not found', task_category_id)
        raise NotFoundException(
            f"Task category with ID {task_category_id} doesn't exist!",
            code='TASK_CATEGORY_NOT_FOUND',
            details={'task_category_id': task_category_id},
        )


def _ensure_no_overlap(candidate: ScheduleEntry, db: Session) -> None:
    same_day_sessions = db.query(DefenceSession).filter(
        DefenceSession.defence_date == candidate.defence_date,
    ).all()

    conflicts = find_conflicts(candidate, same_day_sessions, exclude_id=candidate.id)
    if conflicts:
        conflicting_ids = [session.id for session in conflicts]
        logger.warning(
            'Defence session on %s between %s-%s overlaps sessions %s',
            candidate.defence_date,
            candidate.start_time,
            candidate.end_time,
            conflicting_ids,
        )
        raise ConflictException(
            'Defence session overlaps an existing defence session on the same date!',
            code='DEFENCE_SESSION_OVERLAP',
            details={
                'defence_date': candidate.defence_date.isoformat(),
                'conflicting_defence_session_ids': conflicting_ids,
            },
        )


def create_defence_session(
    *,
    description: str,
    defence_date: date,
    start_time: time,
    end_time: time,
    task_category_id: int,
    db: Session,
) -> DefenceSession:
    logger.info('Creating defence session on %s between %s-%s', defence_date, start_time, end_time)

    validate_time_order(start_time, end_time)

    with transaction(db):
        _ensure_task_category_exists(task_category_id, db)
        _ensure_no_overlap(ScheduleEntry(defence_date, start_time, end_time), db)

        defence_session = DefenceSession(
            description=description,
            defence_date=defence_date,
            start_time=start_time,
            end_time=end_time,
            task_category_id=task_category_id,
        )
        db.add(defence_session)

    db.refresh(defence_session)
    logger.info('Created defence session with ID: %s', defence_session.id)
    return defence_session


def update_defence_session(
    defence_session_id: int,
    *,
    description: str,
    defence_date: date,
    start_time: time,
    end_time: time,
    task_category_id: int,
    db: Session,
) -> DefenceSession:
    """Replace the fields of an existing session.

    Once booking slots exist the date and time window are frozen, since the
    slots must stay inside the session window; delete the slots first to
    reschedule.
    """
    logger.info('Updating defence session with ID: %s', defence_session_id)

    with transaction(db):
        defence_session = db.query(DefenceSession).filter(DefenceSession.id == defence_session_id).first()
        if defence_session is None:
            logger.warning('Defence session with ID %s not found', defence_session_id)
            raise _not_found(defence_session_id)

        validate_time_order(start_time, end_time)
        _ensure_task_category_exists(task_category_id, db)

        reschedules = (
            defence_session.defence_date != defence_date
            or defence_session.start_time != start_time
            or defence_session.end_time != end_time
        )
        if reschedules and booking_slots_exist(defence_session_id, db):
            logger.warning('Defence session with ID %s already has booking slots', defence_session_id)
            raise ConflictException(
                f'Defence session with ID {defence_session_id} already has booking slots; remove them before rescheduling!',
                code='DEFENCE_SESSION_HAS_BOOKING_SLOTS',
                details={'defence_session_id': defence_session_id},
            )

        _ensure_no_overlap(ScheduleEntry(defence_date, start_time, end_time, id=defence_session_id), db)

        defence_session.description = description
        defence_session.defence_date = defence_date
        defence_session.start_time = start_time
        defence_session.end_time = end_time
        defence_session.task_category_id = task_category_id

    db.refresh(defence_session)
    logger.info('Updated defence session with ID: %s', defence_session_id)
    return defence_session


def list_defence_sessions(db: Session) -> list[DefenceSession]:
    logger.info('Fetching all defence sessions')

    defence_sessions = db.query(DefenceSession).order_by(
        DefenceSession.defence_date.asc(),
        DefenceSession.start_time.asc(),
    ).all()

    logger.info('Fetched %s defence sessions', len(defence_sessions))
    return defence_sessions


def get_defence_session(defence_session_id: int, db: Session) -> DefenceSession:
    logger.info('Fetching defence session with ID: %s', defence_session_id)

    defence_session = db.query(DefenceSession).filter(DefenceSession.id == defence_session_id).first()
    if defence_session is None:
        logger.warning('Defence session with ID %s not found', defence_session_id)
        raise _not_found(defence_session_id)

    return defence_session


def remove_defence_session(defence_session_id: int, db: Session) -> None:
    """Delete a session together with its booking slots."""
    logger.info('Removing defence session with ID: %s', defence_session_id)

    with transaction(db):
        defence_session = db.query(DefenceSession).filter(DefenceSession.id == defence_session_id).first()
        if defence_session is None:
            logger.warning('Defence session with ID %s not found', defence_session_id)
            raise _not_found(defence_session_id)

        removed_slots = (
            db.query(BookingSlot)
            .filter(BookingSlot.defence_session_id == defence_session_id)
            .delete(synchronize_session=False)
        )
        db.delete(defence_session)

    logger.info('Removed defence session with ID %s and %s booking slots', defence_session_id, removed_slots)
