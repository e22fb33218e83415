"""Program administration model definitions."""

from sqlalchemy import Column, DateTime, Integer, String, Text, func
from reporting.database import Base


class PlCourse(Base):
    """Course assigned to a program and the PRL responsible for it."""
    __tablename__ = "pl_courses"

    id = Column(Integer, primary_key=True)
    program_name = Column(String(150))
    course_code = Column(String(30))
    course_name = Column(String(150))
    prl_responsible = Column(String(100))
    created_at = Column(DateTime, server_default=func.now())


class PlClass(Base):
    __tablename__ = "pl_classes"

    id = Column(Integer, primary_key=True)
    prl_id = Column(Integer)
    class_details = Column(Text)
    oversight_notes = Column(Text)
    created_at = Column(DateTime, server_default=func.now())
