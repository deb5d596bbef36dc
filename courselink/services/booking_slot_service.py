"""
Booking slot orchestration.

Generates the slots of a defence session, books a slot for a student,
and lists or bulk-deletes the slots of a session. Every operation is
fail-fast and runs in a single transaction; nothing is committed when a
rule is violated.
"""

import logging

from sqlalchemy import exists
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from sqlalchemy.orm.exc import StaleDataError

from courselink.core import config
from courselink.core.exceptions import ConflictException, InvalidArgumentException, NotFoundException
from courselink.database import transaction
from courselink.models.booking_slot import BookingSlot
from courselink.models.defence_session import DefenceSession
from courselink.models.user import User
from courselink.scheduling.allocator import allocate_slot
from courselink.scheduling.partitioner import SessionWindow, partition_window

logger = logging.getLogger(__name__)


def booking_slots_exist(defence_session_id: int, db: Session) -> bool:
    return db.query(exists().where(BookingSlot.defence_session_id == defence_session_id)).scalar()


def _slots_already_exist(defence_session_id: int) -> ConflictException:
    return ConflictException(
        f'Booking slots for defence session with ID {defence_session_id} already exist!',
        code='BOOKING_SLOTS_ALREADY_EXIST',
        details={'defence_session_id': defence_session_id},
    )


def generate_booking_slots(defence_session_id: int, booking_slots_count: int, db: Session) -> list[BookingSlot]:
    """Split the session window into ``booking_slots_count`` free slots and persist them.

    Slots are generated once per session. The session row is locked while
    the existence check and the insert run, and the unique
    ``(defence_session_id, start_time)`` constraint rejects a concurrent
    second batch, which is reported as a conflict.
    """
    logger.info('Generating booking slots for defence session with ID %s', defence_session_id)

    if booking_slots_count <= 0:
        logger.warning('Rejected booking slots count %s for defence session with ID %s', booking_slots_count, defence_session_id)
        raise InvalidArgumentException(
            'Booking slots count must be greater than 0!',
            code='BOOKING_SLOTS_COUNT_INVALID',
            details={'defence_session_id': defence_session_id, 'booking_slots_count': booking_slots_count},
        )
    if booking_slots_count > config.MAX_BOOKING_SLOTS_COUNT:
        logger.warning('Rejected booking slots count %s for defence session with ID %s', booking_slots_count, defence_session_id)
        raise InvalidArgumentException(
            f'Booking slots count must not exceed {config.MAX_BOOKING_SLOTS_COUNT}!',
            code='BOOKING_SLOTS_COUNT_INVALID',
            details={
                'defence_session_id': defence_session_id,
                'booking_slots_count': booking_slots_count,
                'max_booking_slots_count': config.MAX_BOOKING_SLOTS_COUNT,
            },
        )

    try:
        with transaction(db):
            defence_session = (
                db.query(DefenceSession)
                .filter(DefenceSession.id == defence_session_id)
                .with_for_update()
                .first()
            )
            if defence_session is None:
                logger.warning('Defence session with ID %s not found', defence_session_id)
                raise NotFoundException(
                    f"Defence session with ID {defence_session_id} doesn't exist!",
                    code='DEFENCE_SESSION_NOT_FOUND',
                    details={'defence_session_id': defence_session_id},
                )

            if booking_slots_exist(defence_session_id, db):
                logger.warning('Booking slots for defence session with ID %s already exist', defence_session_id)
                raise _slots_already_exist(defence_session_id)

            window = SessionWindow.from_session(defence_session)
            logger.info('Start time: %s, End time: %s', window.start_time, window.end_time)
            try:
                intervals = partition_window(window, booking_slots_count, config.SLOT_RESOLUTION_MICROSECONDS)
            except ValueError as exc:
                logger.warning('Cannot partition defence session with ID %s: %s', defence_session_id, exc)
                raise InvalidArgumentException(
                    str(exc),
                    code='BOOKING_SLOTS_COUNT_INVALID',
                    details={'defence_session_id': defence_session_id, 'booking_slots_count': booking_slots_count},
                ) from exc

            booking_slots = [
                BookingSlot(
                    defence_session_id=defence_session.id,
                    start_time=interval.start_time,
                    end_time=interval.end_time,
                    is_booked=False,
                    user_id=None,
                )
                for interval in intervals
            ]
            db.add_all(booking_slots)
    except IntegrityError as exc:
        logger.warning('Concurrent booking slot generation for defence session with ID %s lost', defence_session_id)
        raise _slots_already_exist(defence_session_id) from exc

    logger.info('Generated %s booking slots.', len(booking_slots))
    return booking_slots


def choose_booking_slot(user_id: int, booking_slot_id: int, db: Session) -> BookingSlot:
    """Book ``booking_slot_id`` for ``user_id``.

    The user is looked up before the slot, so when both ids are unknown the
    caller sees the user error. The slot row is read ``FOR UPDATE`` and the
    write is version-checked; a request that loses a race ends in a
    conflict instead of overwriting the winner.
    """
    logger.info('User with ID %s choosing booking slot with ID %s', user_id, booking_slot_id)

    try:
        with transaction(db):
            user = db.query(User).filter(User.id == user_id).first()
            if user is None:
                logger.warning('User with ID %s not found', user_id)
                raise NotFoundException(
                    f"User with ID {user_id} doesn't exist!",
                    code='USER_NOT_FOUND',
                    details={'user_id': user_id},
                )

            booking_slot = (
                db.query(BookingSlot)
                .filter(BookingSlot.id == booking_slot_id)
                .with_for_update()
                .populate_existing()
                .first()
            )
            if booking_slot is None:
                logger.warning('Booking slot with ID %s not found', booking_slot_id)
                raise NotFoundException(
                    f"Booking slot with ID {booking_slot_id} doesn't exist!",
                    code='BOOKING_SLOT_NOT_FOUND',
                    details={'booking_slot_id': booking_slot_id},
                )

            allocate_slot(booking_slot, user)
    except StaleDataError as exc:
        logger.warning('Booking slot with ID %s was booked concurrently', booking_slot_id)
        raise ConflictException(
            f'Booking slot with ID {booking_slot_id} is already booked!',
            code='BOOKING_SLOT_ALREADY_BOOKED',
            details={'booking_slot_id': booking_slot_id},
        ) from exc

    logger.info('User with ID %s successfully booked booking slot with ID %s', user_id, booking_slot_id)
    return booking_slot


def remove_booking_slots_by_defence_session(defence_session_id: int, db: Session) -> None:
    logger.info('Removing booking slots with defence session ID: %s', defence_session_id)

    with transaction(db):
        if not booking_slots_exist(defence_session_id, db):
            logger.warning('Booking slots with defence session ID %s not found', defence_session_id)
            raise NotFoundException(
                f"Booking slots for defence session with ID {defence_session_id} don't exist!",
                code='BOOKING_SLOTS_NOT_FOUND',
                details={'defence_session_id': defence_session_id},
            )

        removed = (
            db.query(BookingSlot)
            .filter(BookingSlot.defence_session_id == defence_session_id)
            .delete(synchronize_session=False)
        )

    logger.info('Removed %s booking slots with defence session ID: %s', removed, defence_session_id)


def list_booking_slots_by_defence_session(defence_session_id: int, db: Session) -> list[BookingSlot]:
    """Return the session's slots in time order.

    An empty result is reported as not found rather than as an empty list.
    """
    logger.info('Fetching booking slots with defence session ID: %s', defence_session_id)

    booking_slots = (
        db.query(BookingSlot)
        .filter(BookingSlot.defence_session_id == defence_session_id)
        .order_by(BookingSlot.start_time.asc(), BookingSlot.id.asc())
        .all()
    )

    if not booking_slots:
        logger.warning('Booking slots with defence session ID %s not found', defence_session_id)
        raise NotFoundException(
            f"Booking slots for defence session with ID {defence_session_id} don't exist!",
            code='BOOKING_SLOTS_NOT_FOUND',
            details={'defence_session_id': defence_session_id},
        )

    logger.info('Found %s booking slots with defence session ID: %s', len(booking_slots), defence_session_id)
    return booking_slots
