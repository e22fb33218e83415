from fastapi import APIRouter, Depends
from sqlalchemy import func
from sqlalchemy.orm import Session

from reporting.auth.dependencies import get_current_identity
from reporting.database import get_db
from reporting.models.course import Course
from reporting.models.report import PrlReport, Report
from reporting.models.user import User
from reporting.routes.common import storage_errors

router = APIRouter(tags=['dashboard'])


def count_rows(db: Session, model) -> int:
    return db.query(func.count(model.id)).scalar() or 0


@router.get('/dashboard/stats')
def dashboard_stats(db: Session = Depends(get_db)):
    with storage_errors(db, 'DB error'):
        return {
            'courses': count_rows(db, Course),
            'reports': count_rows(db, Report),
            'prl_reports': count_rows(db, PrlReport),
            'users': count_rows(db, User),
        }


@router.get('/analytics/reports-by-faculty')
def reports_by_faculty(db: Session = Depends(get_db)):
    report_count = func.count(Report.id).label('report_count')
    with storage_errors(db, 'DB error'):
        rows = (
            db.query(Course.faculty_name, report_count)
            .outerjoin(Report, Report.course_id == Course.id)
            .group_by(Course.faculty_name)
            .order_by(report_count.desc())
            .all()
        )
    return [{'faculty_name': faculty_name, 'report_count': count} for faculty_name, count in rows]


@router.get('/users', dependencies=[Depends(get_current_identity)])
def list_users(db: Session = Depends(get_db)):
    with storage_errors(db, 'DB error'):
        users = db.query(User).order_by(User.created_at.desc(), User.id.desc()).all()
    return [
        {
            'id': user.id,
            'name': user.name,
            'email': user.email,
            'student_id': user.student_id,
            'role': user.role,
            'created_at': user.created_at,
        }
        for user in users
    ]
