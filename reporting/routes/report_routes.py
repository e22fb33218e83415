from datetime import date

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field
from sqlalchemy.orm import Session, joinedload

from reporting.auth.dependencies import get_current_identity
from reporting.core.errors import NotFoundError
from reporting.database import get_db
from reporting.models.report import PlReport, PrlReport, Report
from reporting.routes.common import OptionalInt, OptionalRating, save_record, serialize, storage_errors

router = APIRouter(tags=['reports'])


class CreateReportRequest(BaseModel):
    course_id: int
    lecturer_name: str = Field(min_length=1)
    week_of_reporting: str = Field(min_length=1)
    date_of_lecture: date
    topic_taught: str = Field(min_length=1)
    learning_outcomes: str | None = None
    lecturer_recommendations: str | None = None
    actual_present: OptionalInt = None


class CreatePrlReportRequest(BaseModel):
    lecturer_report_id: int
    prl_name: str = Field(min_length=1)
    summary: str = Field(min_length=1)
    recommendations: str | None = None
    rating: OptionalRating = None


class CreatePlReportRequest(BaseModel):
    prl_report_id: int
    pl_name: str = Field(min_length=1)
    program_summary: str = Field(min_length=1)
    overall_assessment: str | None = None
    rating: OptionalRating = None


def serialize_report(report: Report) -> dict:
    course = report.course
    return serialize(
        report,
        course_name=course.course_name if course else None,
        course_code=course.course_code if course else None,
        faculty_name=course.faculty_name if course else None,
        class_name=course.class_name if course else None,
    )


def serialize_prl_report(prl_report: PrlReport) -> dict:
    report = prl_report.lecturer_report
    course = report.course if report else None
    return serialize(
        prl_report,
        lecturer_name=report.lecturer_name if report else None,
        week_of_reporting=report.week_of_reporting if report else None,
        course_name=course.course_name if course else None,
    )


def serialize_pl_report(pl_report: PlReport) -> dict:
    prl_report = pl_report.prl_report
    report = prl_report.lecturer_report if prl_report else None
    course = report.course if report else None
    return serialize(
        pl_report,
        prl_name=prl_report.prl_name if prl_report else None,
        lecturer_name=report.lecturer_name if report else None,
        course_name=course.course_name if course else None,
    )


def _reports_query(db: Session):
    return db.query(Report).options(joinedload(Report.course))


def _prl_reports_query(db: Session):
    return db.query(PrlReport).options(
        joinedload(PrlReport.lecturer_report).joinedload(Report.course)
    )


@router.post('/reports')
def create_report(payload: CreateReportRequest, db: Session = Depends(get_db)):
    report = save_record(db, Report(**payload.model_dump()), 'DB error')
    return {'id': report.id}


@router.get('/reports')
def list_reports(db: Session = Depends(get_db)):
    with storage_errors(db, 'DB error'):
        reports = _reports_query(db).order_by(Report.created_at.desc(), Report.id.desc()).all()
    return [serialize_report(report) for report in reports]


@router.get('/reports/{report_id}')
def get_report(report_id: int, db: Session = Depends(get_db)):
    with storage_errors(db, 'DB error'):
        report = _reports_query(db).filter(Report.id == report_id).first()
    if report is None:
        raise NotFoundError('Report not found')
    return serialize_report(report)


@router.post('/prl_reports')
def create_prl_report(payload: CreatePrlReportRequest, db: Session = Depends(get_db)):
    prl_report = save_record(db, PrlReport(**payload.model_dump()), 'Failed to submit PRL report')
    return {'id': prl_report.id, 'message': 'PRL report submitted successfully'}


@router.get('/prl_reports')
def list_prl_reports(db: Session = Depends(get_db)):
    with storage_errors(db, 'DB error'):
        prl_reports = (
            _prl_reports_query(db)
            .order_by(PrlReport.created_at.desc(), PrlReport.id.desc())
            .all()
        )
    return [serialize_prl_report(prl_report) for prl_report in prl_reports]


@router.get('/prl_reports/{prl_report_id}')
def get_prl_report(prl_report_id: int, db: Session = Depends(get_db)):
    with storage_errors(db, 'DB error'):
        prl_report = _prl_reports_query(db).filter(PrlReport.id == prl_report_id).first()
    if prl_report is None:
        raise NotFoundError('PRL report not found')
    return serialize_prl_report(prl_report)


@router.post('/pl_reports', dependencies=[Depends(get_current_identity)])
def create_pl_report(payload: CreatePlReportRequest, db: Session = Depends(get_db)):
    pl_report = save_record(db, PlReport(**payload.model_dump()), 'Failed to finalize program report')
    return {'id': pl_report.id, 'message': 'Program report finalized successfully'}


@router.get('/pl_reports', dependencies=[Depends(get_current_identity)])
def list_pl_reports(db: Session = Depends(get_db)):
    with storage_errors(db, 'Failed to fetch PL reports'):
        pl_reports = (
            db.query(PlReport)
            .options(
                joinedload(PlReport.prl_report)
                .joinedload(PrlReport.lecturer_report)
                .joinedload(Report.course)
            )
            .order_by(PlReport.created_at.desc(), PlReport.id.desc())
            .all()
        )
    return [serialize_pl_report(pl_report) for pl_report in pl_reports]
