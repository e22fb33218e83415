"""Excel workbook assembly for the export endpoints.

Each builder queries the joined report data it needs and lays it out as one
or more worksheets. Builders return an ``openpyxl.Workbook``; the routes
serialize it with ``workbook_to_bytes``.
"""

import io
from datetime import date, datetime

from openpyxl import Workbook
from openpyxl.styles import Font, PatternFill
from openpyxl.utils import get_column_letter
from sqlalchemy import func
from sqlalchemy.orm import Session, joinedload

from reporting.database import model_to_dict
from reporting.models.course import Course
from reporting.models.monitoring import StudentMonitoring
from reporting.models.rating import StudentRating
from reporting.models.report import PlReport, PrlReport, Report

XLSX_MEDIA_TYPE = 'application/vnd.openxmlformats-officedocument.spreadsheetml.sheet'

HEADER_FONT = Font(bold=True)
HEADER_FILL = PatternFill(fill_type='solid', start_color='FFE6E6FA', end_color='FFE6E6FA')
MAX_COLUMN_WIDTH = 50
EMPTY_CELL_WIDTH = 10
EMPTY_WORKBOOK_SHEET = 'No Data'

PRL_REPORT_COLUMNS = [
    ('Report ID', 'id'),
    ('PRL Name', 'prl_name'),
    ('Lecturer Name', 'lecturer_name'),
    ('Course Name', 'course_name'),
    ('Course Code', 'course_code'),
    ('Faculty Name', 'faculty_name'),
    ('Week of Reporting', 'week_of_reporting'),
    ('Lecture Date', 'date_of_lecture'),
    ('Topic Taught', 'topic_taught'),
    ('Learning Outcomes', 'learning_outcomes'),
    ('Summary', 'summary'),
    ('Recommendations', 'recommendations'),
    ('Lecturer Recommendations', 'lecturer_recommendations'),
    ('Rating', 'rating'),
    ('Actual Present', 'actual_present'),
    ('Created Date', 'created_at'),
]

PL_REPORT_COLUMNS = [
    ('Report ID', 'id'),
    ('Program Leader Name', 'pl_name'),
    ('PRL Name', 'prl_name'),
    ('Lecturer Name', 'lecturer_name'),
    ('Course Name', 'course_name'),
    ('Program Summary', 'program_summary'),
    ('Overall Assessment', 'overall_assessment'),
    ('Rating', 'rating'),
    ('Created Date', 'created_at'),
]

COURSE_COLUMNS = [
    ('Course ID', 'id'),
    ('Faculty Name', 'faculty_name'),
    ('Class Name', 'class_name'),
    ('Course Name', 'course_name'),
    ('Course Code', 'course_code'),
    ('Venue', 'venue'),
    ('Scheduled Time', 'scheduled_time'),
    ('Total Registered', 'total_registered'),
    ('Created Date', 'created_at'),
]


def new_workbook() -> Workbook:
    workbook = Workbook()
    workbook.remove(workbook.active)
    return workbook


def _cell_value(value):
    if isinstance(value, datetime) and value.tzinfo is not None:
        return value.replace(tzinfo=None)
    return value


def _display_length(value) -> int:
    if value is None or value == '':
        return EMPTY_CELL_WIDTH
    return len(str(value))


def autofit_columns(worksheet) -> None:
    for column_cells in worksheet.columns:
        longest = max(_display_length(cell.value) for cell in column_cells)
        letter = get_column_letter(column_cells[0].column)
        worksheet.column_dimensions[letter].width = min(longest + 2, MAX_COLUMN_WIDTH)


def build_sheet(workbook: Workbook, title: str, columns: list[tuple[str, str]], rows: list[dict]):
    """Append a worksheet with a styled header row and one row per record."""
    worksheet = workbook.create_sheet(title=title)
    worksheet.append([header for header, _ in columns])
    for cell in worksheet[1]:
        cell.font = HEADER_FONT
        cell.fill = HEADER_FILL

    for row in rows:
        worksheet.append([_cell_value(row.get(key)) for _, key in columns])

    autofit_columns(worksheet)
    return worksheet


def workbook_to_bytes(workbook: Workbook) -> bytes:
    if not workbook.sheetnames:
        workbook.create_sheet(title=EMPTY_WORKBOOK_SHEET)
    buffer = io.BytesIO()
    workbook.save(buffer)
    return buffer.getvalue()


def export_filename(prefix: str, today: date | None = None) -> str:
    return f'{prefix}-{(today or date.today()).isoformat()}.xlsx'


def _course_fields(course: Course | None) -> dict:
    return {
        'course_name': course.course_name if course else None,
        'course_code': course.course_code if course else None,
        'faculty_name': course.faculty_name if course else None,
        'class_name': course.class_name if course else None,
    }


def prl_report_rows(db: Session) -> list[dict]:
    prl_reports = (
        db.query(PrlReport)
        .options(joinedload(PrlReport.lecturer_report).joinedload(Report.course))
        .order_by(PrlReport.created_at.desc(), PrlReport.id.desc())
        .all()
    )
    rows = []
    for prl_report in prl_reports:
        report = prl_report.lecturer_report
        row = model_to_dict(prl_report)
        row.update(_course_fields(report.course if report else None))
        for key in (
            'lecturer_name',
            'week_of_reporting',
            'date_of_lecture',
            'topic_taught',
            'learning_outcomes',
            'lecturer_recommendations',
            'actual_present',
        ):
            row[key] = getattr(report, key) if report else None
        rows.append(row)
    return rows


def pl_report_rows(db: Session) -> list[dict]:
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
    rows = []
    for pl_report in pl_reports:
        prl_report = pl_report.prl_report
        report = prl_report.lecturer_report if prl_report else None
        course = report.course if report else None
        row = model_to_dict(pl_report)
        row['prl_name'] = prl_report.prl_name if prl_report else None
        row['lecturer_name'] = report.lecturer_name if report else None
        row['course_name'] = course.course_name if course else None
        rows.append(row)
    return rows


def course_rows(db: Session) -> list[dict]:
    courses = db.query(Course).order_by(Course.created_at.desc(), Course.id.desc()).all()
    return [model_to_dict(course) for course in courses]


def _count(db: Session, model) -> int:
    return db.query(func.count(model.id)).scalar() or 0


def _average(db: Session, column) -> float:
    value = db.query(func.avg(column)).filter(column.isnot(None)).scalar()
    return round(float(value or 0), 2)


def build_prl_reports_workbook(db: Session) -> Workbook:
    workbook = new_workbook()
    build_sheet(workbook, 'PRL Reports', PRL_REPORT_COLUMNS, prl_report_rows(db))
    return workbook


def build_program_reports_workbook(db: Session) -> Workbook:
    workbook = new_workbook()

    pl_rows = pl_report_rows(db)
    if pl_rows:
        build_sheet(workbook, 'Program Leader Reports', PL_REPORT_COLUMNS, pl_rows)

    build_sheet(workbook, 'Courses', COURSE_COLUMNS, course_rows(db))

    summary = [
        {'category': 'Total Courses', 'count': _count(db, Course)},
        {'category': 'Total Lecturer Reports', 'count': _count(db, Report)},
        {'category': 'Total PRL Reports', 'count': _count(db, PrlReport)},
        {'category': 'Total PL Reports', 'count': len(pl_rows)},
    ]
    build_sheet(workbook, 'Summary', [('Category', 'category'), ('Count', 'count')], summary)
    return workbook


def _all_data_sheets(db: Session) -> list[tuple[str, list[dict]]]:
    reports = (
        db.query(Report)
        .options(joinedload(Report.course))
        .order_by(Report.created_at.desc(), Report.id.desc())
        .all()
    )
    report_rows = []
    for report in reports:
        row = model_to_dict(report)
        row['course_name'] = report.course.course_name if report.course else None
        row['course_code'] = report.course.course_code if report.course else None
        report_rows.append(row)

    prl_rows = []
    for row in prl_report_rows(db):
        prl_rows.append({
            **{key: row[key] for key in ('id', 'lecturer_report_id', 'prl_name', 'summary',
                                         'recommendations', 'rating', 'created_at')},
            'lecturer_name': row['lecturer_name'],
            'course_name': row['course_name'],
        })

    def table_rows(model):
        records = db.query(model).order_by(model.created_at.desc(), model.id.desc()).all()
        return [model_to_dict(record) for record in records]

    return [
        ('Courses', course_rows(db)),
        ('Lecturer Reports', report_rows),
        ('PRL Reports', prl_rows),
        ('Student Monitoring', table_rows(StudentMonitoring)),
        ('Student Ratings', table_rows(StudentRating)),
        ('PL Reports', table_rows(PlReport)),
    ]


def build_all_data_workbook(db: Session) -> Workbook:
    """One sheet per non-empty table, headers derived from column names."""
    workbook = new_workbook()
    for title, rows in _all_data_sheets(db):
        if not rows:
            continue
        columns = [(key.replace('_', ' ').upper(), key) for key in rows[0]]
        build_sheet(workbook, title, columns, rows)
    return workbook


def summary_metrics(db: Session, now: datetime | None = None) -> list[dict]:
    generated_on = now or datetime.now()
    return [
        {'metric': 'TOTAL COURSES', 'value': _count(db, Course)},
        {'metric': 'TOTAL LECTURER REPORTS', 'value': _count(db, Report)},
        {'metric': 'TOTAL PRL REPORTS', 'value': _count(db, PrlReport)},
        {'metric': 'TOTAL PL REPORTS', 'value': _count(db, PlReport)},
        {'metric': 'TOTAL STUDENT MONITORING RECORDS', 'value': _count(db, StudentMonitoring)},
        {'metric': 'TOTAL STUDENT RATINGS', 'value': _count(db, StudentRating)},
        {'metric': 'AVERAGE PRL RATING', 'value': _average(db, PrlReport.rating)},
        {'metric': 'AVERAGE PL RATING', 'value': _average(db, PlReport.rating)},
        {'metric': 'AVERAGE STUDENT LECTURER RATING', 'value': _average(db, StudentRating.lecturer_rating)},
        {'metric': 'AVERAGE STUDENT COURSE RATING', 'value': _average(db, StudentRating.course_rating)},
        {'metric': 'REPORT GENERATED ON', 'value': generated_on.strftime('%Y-%m-%d %H:%M:%S')},
    ]


def build_summary_workbook(db: Session, now: datetime | None = None) -> Workbook:
    workbook = new_workbook()
    build_sheet(
        workbook,
        'Summary Report',
        [('METRIC', 'metric'), ('VALUE', 'value')],
        summary_metrics(db, now),
    )
    return workbook
