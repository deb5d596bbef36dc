"""User model definitions."""

import enum

from sqlalchemy import Column, Integer, String
from courselink.database import Base


class Role(str, enum.Enum):
    USER = "USER"
    STUDENT = "STUDENT"
    ADMIN_STUDENT = "ADMIN_STUDENT"
    TEACHER = "TEACHER"
    ADMIN = "ADMIN"


STUDENT_ROLES = frozenset({Role.STUDENT, Role.ADMIN_STUDENT})


class User(Base):
    """Represents an application user."""
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String, unique=True, index=True, nullable=False)
    hashed_password = Column(String)
    firstname = Column(String)
    lastname = Column(String)
    role = Column(String, nullable=False, default=Role.USER.value)
