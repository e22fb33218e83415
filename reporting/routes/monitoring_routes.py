from fastapi import APIRouter, Depends
from pydantic import BaseModel
from sqlalchemy.orm import Session, joinedload

from reporting.auth.dependencies import get_current_identity
from reporting.database import get_db
from reporting.models.monitoring import LecturerMonitoring, PlMonitoring, StudentMonitoring
from reporting.routes.common import save_record, serialize, storage_errors

router = APIRouter(tags=['monitoring'])


class CreateLecturerMonitoringRequest(BaseModel):
    course_id: int
    monitoring_notes: str | None = None
    student_performance_notes: str | None = None
    discipline_issues: str | None = None


class CreateStudentMonitoringRequest(BaseModel):
    student_id: int
    course_id: int
    attendance_status: str | None = None
    participation_notes: str | None = None
    issues_observed: str | None = None


class CreatePlMonitoringRequest(BaseModel):
    program_quality_notes: str | None = None
    prl_performance_notes: str | None = None
    overall_program_health: str | None = None


@router.post('/lecturer_monitoring')
def create_lecturer_monitoring(payload: CreateLecturerMonitoringRequest, db: Session = Depends(get_db)):
    entry = save_record(db, LecturerMonitoring(**payload.model_dump()), 'Failed to save monitoring data')
    return {'id': entry.id, 'message': 'Monitoring data saved successfully'}


@router.get('/lecturer_monitoring')
def list_lecturer_monitoring(db: Session = Depends(get_db)):
    with storage_errors(db, 'Failed to fetch monitoring data'):
        entries = (
            db.query(LecturerMonitoring)
            .options(joinedload(LecturerMonitoring.course))
            .order_by(LecturerMonitoring.created_at.desc(), LecturerMonitoring.id.desc())
            .all()
        )
    return [
        serialize(
            entry,
            course_name=entry.course.course_name if entry.course else None,
            course_code=entry.course.course_code if entry.course else None,
        )
        for entry in entries
    ]


@router.post('/student_monitoring')
def create_student_monitoring(payload: CreateStudentMonitoringRequest, db: Session = Depends(get_db)):
    entry = save_record(db, StudentMonitoring(**payload.model_dump()), 'DB error')
    return {'id': entry.id}


@router.get('/student_monitoring')
def list_student_monitoring(db: Session = Depends(get_db)):
    with storage_errors(db, 'DB error'):
        entries = (
            db.query(StudentMonitoring)
            .options(joinedload(StudentMonitoring.student), joinedload(StudentMonitoring.course))
            .order_by(StudentMonitoring.created_at.desc(), StudentMonitoring.id.desc())
            .all()
        )
    return [
        serialize(
            entry,
            student_name=entry.student.name if entry.student else None,
            course_name=entry.course.course_name if entry.course else None,
        )
        for entry in entries
    ]


@router.post('/pl_monitoring', dependencies=[Depends(get_current_identity)])
def create_pl_monitoring(payload: CreatePlMonitoringRequest, db: Session = Depends(get_db)):
    entry = save_record(db, PlMonitoring(**payload.model_dump()), 'Failed to save program monitoring data')
    return {'id': entry.id, 'message': 'Program monitoring data saved successfully'}
