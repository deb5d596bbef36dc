import os
from datetime import date, time

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

os.environ.setdefault('DATABASE_URL', 'sqlite:///./test.db')

from courselink.database import Base  # noqa: E402
from courselink.models.booking_slot import BookingSlot  # noqa: E402
from courselink.models.defence_session import DefenceSession  # noqa: E402
from courselink.models.task_category import TaskCategory  # noqa: E402
from courselink.models.user import Role, User  # noqa: E402

SESSION_DATE = date(2026, 6, 1)


def build_session_factory(url: str):
    engine = create_engine(url)
    Base.metadata.create_all(bind=engine)
    return engine, sessionmaker(autocommit=False, autoflush=False, bind=engine)


def add_user(db, email: str, role: Role) -> User:
    user = User(email=email, hashed_password='', firstname='Test', lastname='User', role=role.value)
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


@pytest.fixture
def db():
    engine, testing_session_local = build_session_factory('sqlite:///:memory:')
    session = testing_session_local()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture
def task_category(db) -> TaskCategory:
    category = TaskCategory(name='Coursework 1')
    db.add(category)
    db.commit()
    db.refresh(category)
    return category


@pytest.fixture
def defence_session(db, task_category) -> DefenceSession:
    session = DefenceSession(
        description='Algorithms coursework defence',
        defence_date=SESSION_DATE,
        start_time=time(13, 0),
        end_time=time(13, 30),
        task_category_id=task_category.id,
    )
    db.add(session)
    db.commit()
    db.refresh(session)
    return session


@pytest.fixture
def student(db) -> User:
    return add_user(db, 'student@example.edu', Role.STUDENT)


@pytest.fixture
def other_student(db) -> User:
    return add_user(db, 'other.student@example.edu', Role.ADMIN_STUDENT)


@pytest.fixture
def teacher(db) -> User:
    return add_user(db, 'teacher@example.edu', Role.TEACHER)


@pytest.fixture
def free_slot(db, defence_session) -> BookingSlot:
    slot = BookingSlot(
        defence_session_id=defence_session.id,
        start_time=time(13, 0),
        end_time=time(13, 10),
        is_booked=False,
    )
    db.add(slot)
    db.commit()
    db.refresh(slot)
    return slot
