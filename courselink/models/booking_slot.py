"""Booking slot model definitions."""

from sqlalchemy import Boolean, CheckConstraint, Column, ForeignKey, Integer, Time, UniqueConstraint
from courselink.database import Base


class BookingSlot(Base):
    """One individually bookable sub-interval of a defence session.

    Slots reference their session by key only; removing them is an
    explicit bulk delete by ``defence_session_id``. ``version`` backs
    optimistic locking so a stale writer cannot overwrite a booking.
    """
    __tablename__ = "booking_slots"

    id = Column(Integer, primary_key=True)
    defence_session_id = Column(Integer, ForeignKey("defence_sessions.id"), nullable=False, index=True)
    start_time = Column(Time, nullable=False)
    end_time = Column(Time, nullable=False)
    is_booked = Column(Boolean, nullable=False, default=False)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=True)
    version = Column(Integer, nullable=False)

    __table_args__ = (
        # Slot 0 always starts at the session start, so this also stops two
        # generation runs for the same session from both committing.
        UniqueConstraint('defence_session_id', 'start_time', name='uq_booking_slot_session_start'),
        CheckConstraint('start_time < end_time', name='ck_booking_slot_interval'),
    )
    __mapper_args__ = {'version_id_col': version}
