"""Defence session model definitions."""

from sqlalchemy import CheckConstraint, Column, Date, ForeignKey, Integer, String, Time
from courselink.database import Base


class DefenceSession(Base):
    """A block of time on one date during which coursework defences happen."""
    __tablename__ = "defence_sessions"

    id = Column(Integer, primary_key=True)
    description = Column(String, nullable=False)
    defence_date = Column(Date, nullable=False)
    start_time = Column(Time, nullable=False)
    end_time = Column(Time, nullable=False)
    task_category_id = Column(Integer, ForeignKey("task_categories.id"), nullable=False)

    __table_args__ = (
        CheckConstraint('start_time < end_time', name='ck_defence_session_interval'),
    )
