"""User model definitions."""

from sqlalchemy import Column, DateTime, Integer, String, func
from reporting.database import Base

ROLE_STUDENT = "student"
ROLE_LECTURER = "lecturer"
ROLE_PRL = "prl"
ROLE_PL = "pl"
ROLES = (ROLE_STUDENT, ROLE_LECTURER, ROLE_PRL, ROLE_PL)


class User(Base):
    """Represents a registered user. Students log in by student number, staff by email."""
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), nullable=False)
    email = Column(String(255), unique=True, index=True, nullable=True)
    student_id = Column(String(20), unique=True, index=True, nullable=True)
    password = Column(String(255), nullable=False)  # bcrypt hash
    role = Column(String(20), nullable=False)  # student/lecturer/prl/pl
    created_at = Column(DateTime, server_default=func.now())
