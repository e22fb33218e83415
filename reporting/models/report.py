"""Report model definitions.

Reports form a chain: a lecturer files a ``Report`` for a course, a PRL
reviews it in a ``PrlReport`` and a PL finalizes that review in a ``PlReport``.
"""

from sqlalchemy import Column, Date, DateTime, ForeignKey, Integer, String, Text, func
from sqlalchemy.orm import relationship
from reporting.database import Base


class Report(Base):
    """Weekly lecturer report for a course."""
    __tablename__ = "reports"

    id = Column(Integer, primary_key=True)
    course_id = Column(Integer, ForeignKey("courses.id"))
    lecturer_name = Column(String(100))
    week_of_reporting = Column(String(50))
    date_of_lecture = Column(Date)
    topic_taught = Column(Text)
    learning_outcomes = Column(Text)
    lecturer_recommendations = Column(Text)
    actual_present = Column(Integer)
    created_at = Column(DateTime, server_default=func.now())

    course = relationship("Course")


class PrlReport(Base):
    """Program leader review of a lecturer report."""
    __tablename__ = "prl_reports"

    id = Column(Integer, primary_key=True)
    lecturer_report_id = Column(Integer, ForeignKey("reports.id"))
    prl_name = Column(String(100))
    summary = Column(Text)
    recommendations = Column(Text)
    rating = Column(Integer, nullable=True)
    created_at = Column(DateTime, server_default=func.now())

    lecturer_report = relationship("Report")


class PlReport(Base):
    """Principal lecturer sign-off on a PRL report."""
    __tablename__ = "pl_reports"

    id = Column(Integer, primary_key=True)
    prl_report_id = Column(Integer, ForeignKey("prl_reports.id"))
    pl_name = Column(String(100))
    program_summary = Column(Text)
    overall_assessment = Column(Text)
    rating = Column(Integer, nullable=True)
    created_at = Column(DateTime, server_default=func.now())

    prl_report = relationship("PrlReport")
