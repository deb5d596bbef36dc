"""Task category model definitions."""

from sqlalchemy import Column, Integer, String
from courselink.database import Base


class TaskCategory(Base):
    """Groups defence sessions by coursework task."""
    __tablename__ = "task_categories"

    id = Column(Integer, primary_key=True)
    name = Column(String, unique=True, nullable=False)
