"""Rating model definitions. All scores are on a 1-5 scale."""

from sqlalchemy import Column, DateTime, ForeignKey, Integer, Text, func
from sqlalchemy.orm import relationship
from reporting.database import Base


class LecturerRating(Base):
    __tablename__ = "lecturer_rating"

    id = Column(Integer, primary_key=True)
    course_id = Column(Integer, ForeignKey("courses.id"))
    student_rating = Column(Integer)
    course_structure_rating = Column(Integer)
    overall_rating = Column(Integer)
    comments = Column(Text)
    created_at = Column(DateTime, server_default=func.now())

    course = relationship("Course")


class StudentRating(Base):
    __tablename__ = "student_ratings"

    id = Column(Integer, primary_key=True)
    student_id = Column(Integer, ForeignKey("users.id"))
    course_id = Column(Integer, ForeignKey("courses.id"))
    lecturer_rating = Column(Integer)
    course_rating = Column(Integer)
    comments = Column(Text)
    created_at = Column(DateTime, server_default=func.now())

    student = relationship("User")
    course = relationship("Course")


class PlRating(Base):
    __tablename__ = "pl_rating"

    id = Column(Integer, primary_key=True)
    prl_id = Column(Integer)
    program_rating = Column(Integer)
    prl_performance_rating = Column(Integer)
    comments = Column(Text)
    created_at = Column(DateTime, server_default=func.now())
