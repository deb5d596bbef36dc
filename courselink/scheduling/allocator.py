"""Free -> booked transition for a single booking slot."""

import logging

from courselink.core.exceptions import ConflictException, ForbiddenException
from courselink.models.user import STUDENT_ROLES, Role

logger = logging.getLogger(__name__)


def is_student_role(role) -> bool:
    try:
        return Role(role) in STUDENT_ROLES
    except ValueError:
        return False


def allocate_slot(slot, user):
    """Assign ``user`` to ``slot`` in memory and return the slot.

    The role gate runs before the booked check, so a non-student always
    gets Forbidden whatever the slot state, and the slot is left untouched
    on any failure.
    """
    if not is_student_role(user.role):
        logger.warning('User with ID %s is not a student', user.id)
        raise ForbiddenException(
            f'User with ID {user.id} is not a student!',
            code='USER_NOT_STUDENT',
            details={'user_id': user.id, 'role': user.role},
        )

    if slot.is_booked:
        logger.warning('Booking slot with ID %s is already booked', slot.id)
        raise ConflictException(
            f'Booking slot with ID {slot.id} is already booked!',
            code='BOOKING_SLOT_ALREADY_BOOKED',
            details={'booking_slot_id': slot.id},
        )

    slot.user_id = user.id
    slot.is_booked = True
    return slot
