from datetime import time

from fastapi import APIRouter, Depends, Query, status
from pydantic import BaseModel
from sqlalchemy.orm import Session

from courselink.auth.dependencies import get_current_user
from courselink.database import get_db
from courselink.routes.common import ensure_database_ready, http_errors
from courselink.services import booking_slot_service

router = APIRouter(tags=['booking-slots'], dependencies=[Depends(get_current_user)])


class BookingSlotResponse(BaseModel):
    id: int
    defence_session_id: int
    start_time: time
    end_time: time
    is_booked: bool
    user_id: int | None = None

    class Config:
        from_attributes = True


@router.post('/generate', response_model=list[BookingSlotResponse], status_code=status.HTTP_201_CREATED)
def generate_booking_slots(
    defence_session_id: int = Query(...),
    booking_slots_count: int = Query(...),
    db: Session = Depends(get_db),
):
    ensure_database_ready()

    with http_errors(db):
        booking_slots = booking_slot_service.generate_booking_slots(defence_session_id, booking_slots_count, db)
        return [BookingSlotResponse.model_validate(booking_slot) for booking_slot in booking_slots]


@router.put('/choose', response_model=BookingSlotResponse)
def choose_booking_slot(
    user_id: int = Query(...),
    booking_slot_id: int = Query(...),
    db: Session = Depends(get_db),
):
    ensure_database_ready()

    with http_errors(db):
        booking_slot = booking_slot_service.choose_booking_slot(user_id, booking_slot_id, db)
        return BookingSlotResponse.model_validate(booking_slot)


@router.delete('', status_code=status.HTTP_204_NO_CONTENT)
def remove_booking_slots(
    defence_session_id: int = Query(...),
    db: Session = Depends(get_db),
):
    ensure_database_ready()

    with http_errors(db):
        booking_slot_service.remove_booking_slots_by_defence_session(defence_session_id, db)


@router.get('', response_model=list[BookingSlotResponse])
def list_booking_slots(
    defence_session_id: int = Query(...),
    db: Session = Depends(get_db),
):
    ensure_database_ready()

    with http_errors(db):
        booking_slots = booking_slot_service.list_booking_slots_by_defence_session(defence_session_id, db)
        return [BookingSlotResponse.model_validate(booking_slot) for booking_slot in booking_slots]
