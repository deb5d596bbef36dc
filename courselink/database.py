import os
from contextlib import contextmanager
from dotenv import load_dotenv
from threading import Lock

from sqlalchemy import create_engine, inspect, text
from sqlalchemy.orm import declarative_base, sessionmaker


load_dotenv()
DATABASE_URL = os.getenv("DATABASE_URL")

engine = create_engine(DATABASE_URL)

SessionLocal = sessionmaker(
    autocommit=False,
    autoflush=False,
    bind=engine,
)

Base = declarative_base()

_schema_lock = Lock()
_booking_schema_checked = False


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@contextmanager
def transaction(db):
    """Commit on success, roll back and re-raise on any failure."""
    try:
        yield db
        db.commit()
    except Exception:
        db.rollback()
        raise


def ensure_booking_schema() -> None:
    global _booking_schema_checked

    if _booking_schema_checked:
        return

    with _schema_lock:
        if _booking_schema_checked:
            return

        inspector = inspect(engine)
        table_names = inspector.get_table_names()

        with engine.begin() as connection:
            if 'booking_slots' in table_names:
                existing_columns = {column['name'] for column in inspector.get_columns('booking_slots')}
                if 'version' not in existing_columns:
                    connection.execute(
                        text('ALTER TABLE booking_slots ADD COLUMN version INTEGER NOT NULL DEFAULT 1')
                    )
                connection.execute(
                    text(
                        'CREATE INDEX IF NOT EXISTS idx_booking_slots_session_start '
                        'ON booking_slots(defence_session_id, start_time)'
                    )
                )

            if 'defence_sessions' in table_names:
                connection.execute(
                    text(
                        'CREATE INDEX IF NOT EXISTS idx_defence_sessions_schedule '
                        'ON defence_sessions(defence_date, start_time, end_time)'
                    )
                )

        _booking_schema_checked = True
