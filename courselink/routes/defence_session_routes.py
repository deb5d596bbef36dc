from datetime import date, time

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, field_validator
from sqlalchemy.orm import Session

from courselink.auth.dependencies import get_current_user
from courselink.database import get_db
from courselink.routes.common import ensure_database_ready, http_errors
from courselink.services import defence_session_service

router = APIRouter(tags=['defence-sessions'], dependencies=[Depends(get_current_user)])

MAX_DESCRIPTION_LENGTH = 500


class DefenceSessionRequest(BaseModel):
    description: str
    defence_date: date
    start_time: time
    end_time: time
    task_category_id: int

    @field_validator('description')
    @classmethod
    def validate_description(cls, value: str) -> str:
        normalized = value.strip()
        if not normalized:
            raise ValueError('Defence session should contain a description.')
        if len(normalized) > MAX_DESCRIPTION_LENGTH:
            raise ValueError(f'Description must be {MAX_DESCRIPTION_LENGTH} characters or fewer.')
        return normalized


class DefenceSessionResponse(BaseModel):
    id: int
    description: str
    defence_date: date
    start_time: time
    end_time: time
    task_category_id: int

    class Config:
        from_attributes = True


@router.post('', response_model=DefenceSessionResponse, status_code=status.HTTP_201_CREATED)
def create_defence_session(data: DefenceSessionRequest, db: Session = Depends(get_db)):
    ensure_database_ready()

    with http_errors(db):
        defence_session = defence_session_service.create_defence_session(**data.model_dump(), db=db)
        return DefenceSessionResponse.model_validate(defence_session)


@router.put('/{defence_session_id}', response_model=DefenceSessionResponse)
def update_defence_session(defence_session_id: int, data: DefenceSessionRequest, db: Session = Depends(get_db)):
    ensure_database_ready()

    with http_errors(db):
        defence_session = defence_session_service.update_defence_session(
            defence_session_id,
            **data.model_dump(),
            db=db,
        )
        return DefenceSessionResponse.model_validate(defence_session)


@router.get('', response_model=list[DefenceSessionResponse])
def list_defence_sessions(db: Session = Depends(get_db)):
    ensure_database_ready()

    with http_errors(db):
        return [
            DefenceSessionResponse.model_validate(defence_session)
            for defence_session in defence_session_service.list_defence_sessions(db)
        ]


@router.get('/{defence_session_id}', response_model=DefenceSessionResponse)
def get_defence_session(defence_session_id: int, db: Session = Depends(get_db)):
    ensure_database_ready()

    with http_errors(db):
        return DefenceSessionResponse.model_validate(defence_session_service.get_defence_session(defence_session_id, db))


@router.delete('/{defence_session_id}', status_code=status.HTTP_204_NO_CONTENT)
def remove_defence_session(defence_session_id: int, db: Session = Depends(get_db)):
    ensure_database_ready()

    with http_errors(db):
        defence_session_service.remove_defence_session(defence_session_id, db)
