from datetime import date, time

import pytest
from fastapi import HTTPException
from pydantic import ValidationError

from courselink.routes.defence_session_routes import (
    DefenceSessionRequest,
    create_defence_session,
    get_defence_session,
    list_defence_sessions,
    remove_defence_session,
    update_defence_session,
)


@pytest.fixture(autouse=True)
def database_ready(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr('courselink.routes.defence_session_routes.ensure_database_ready', lambda: None)


def _request(task_category_id: int, start_time: time, end_time: time, **overrides) -> DefenceSessionRequest:
    fields = {
        'description': 'Networks defence',
        'defence_date': date(2026, 6, 3),
        'start_time': start_time,
        'end_time': end_time,
        'task_category_id': task_category_id,
    }
    fields.update(overrides)
    return DefenceSessionRequest(**fields)


def test_defence_session_request_strips_description() -> None:
    request = _request(1, time(9, 0), time(10, 0), description='  Networks defence  ')

    assert request.description == 'Networks defence'


def test_defence_session_request_rejects_blank_description() -> None:
    with pytest.raises(ValidationError):
        _request(1, time(9, 0), time(10, 0), description='   ')


def test_create_and_get_defence_session(db, task_category) -> None:
    created = create_defence_session(_request(task_category.id, time(9, 0), time(10, 0)), db=db)

    fetched = get_defence_session(defence_session_id=created.id, db=db)

    assert fetched == created
    assert fetched.task_category_id == task_category.id


def test_create_defence_session_rejects_reversed_times(db, task_category) -> None:
    with pytest.raises(HTTPException) as exception_info:
        create_defence_session(_request(task_category.id, time(10, 0), time(9, 0)), db=db)

    assert exception_info.value.status_code == 422
    assert exception_info.value.detail['code'] == 'DEFENCE_SESSION_TIME_ORDER'


def test_create_defence_session_rejects_overlap(db, task_category) -> None:
    create_defence_session(_request(task_category.id, time(10, 0), time(10, 30)), db=db)

    with pytest.raises(HTTPException) as exception_info:
        create_defence_session(_request(task_category.id, time(10, 15), time(10, 45)), db=db)

    assert exception_info.value.status_code == 409


def test_update_defence_session_returns_not_found(db, task_category) -> None:
    with pytest.raises(HTTPException) as exception_info:
        update_defence_session(999, _request(task_category.id, time(9, 0), time(10, 0)), db=db)

    assert exception_info.value.status_code == 404


def test_list_and_remove_defence_sessions(db, defence_session) -> None:
    assert [session.id for session in list_defence_sessions(db=db)] == [defence_session.id]

    remove_defence_session(defence_session_id=defence_session.id, db=db)

    assert list_defence_sessions(db=db) == []
    with pytest.raises(HTTPException) as exception_info:
        get_defence_session(defence_session_id=defence_session.id, db=db)
    assert exception_info.value.status_code == 404
