"""Course model definitions."""

from sqlalchemy import Column, DateTime, Integer, String, func
from reporting.database import Base


class Course(Base):
    """Represents a scheduled course offering for a class."""
    __tablename__ = "courses"

    id = Column(Integer, primary_key=True)
    faculty_name = Column(String(100))
    class_name = Column(String(100))
    course_name = Column(String(150))
    course_code = Column(String(30))
    venue = Column(String(100))
    scheduled_time = Column(String(50))
    total_registered = Column(Integer, default=0)
    created_at = Column(DateTime, server_default=func.now())
