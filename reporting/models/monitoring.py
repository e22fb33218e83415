"""Monitoring note model definitions."""

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, Text, func
from sqlalchemy.orm import relationship
from reporting.database import Base


class LecturerMonitoring(Base):
    __tablename__ = "lecturer_monitoring"

    id = Column(Integer, primary_key=True)
    course_id = Column(Integer, ForeignKey("courses.id"))
    monitoring_notes = Column(Text)
    student_performance_notes = Column(Text)
    discipline_issues = Column(Text)
    created_at = Column(DateTime, server_default=func.now())

    course = relationship("Course")


class StudentMonitoring(Base):
    __tablename__ = "student_monitoring"

    id = Column(Integer, primary_key=True)
    student_id = Column(Integer, ForeignKey("users.id"))
    course_id = Column(Integer, ForeignKey("courses.id"))
    attendance_status = Column(String(30))
    participation_notes = Column(Text)
    issues_observed = Column(Text)
    created_at = Column(DateTime, server_default=func.now())

    student = relationship("User")
    course = relationship("Course")


class PlMonitoring(Base):
    """Program-wide quality notes recorded by a principal lecturer."""
    __tablename__ = "pl_monitoring"

    id = Column(Integer, primary_key=True)
    program_quality_notes = Column(Text)
    prl_performance_notes = Column(Text)
    overall_program_health = Column(String(50))
    created_at = Column(DateTime, server_default=func.now())
