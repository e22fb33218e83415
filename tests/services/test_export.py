import io
from datetime import date, datetime

from openpyxl import Workbook, load_workbook

from reporting.models.course import Course
from reporting.models.rating import StudentRating
from reporting.models.report import PlReport, PrlReport, Report
from reporting.services import export


def _seed_review_chain(db) -> None:
    course = Course(faculty_name='FICT', class_name='BSCSM Y2', course_name='Web Apps', course_code='BIWA2110')
    db.add(course)
    db.flush()
    report = Report(
        course_id=course.id,
        lecturer_name='Mr Thabo',
        week_of_reporting='Week 6',
        date_of_lecture=date(2026, 3, 2),
        topic_taught='REST APIs',
        actual_present=40,
    )
    db.add(report)
    db.flush()
    prl_report = PrlReport(lecturer_report_id=report.id, prl_name='Ms Lineo', summary='On track', rating=4)
    db.add(prl_report)
    db.flush()
    db.add(PlReport(prl_report_id=prl_report.id, pl_name='Dr Palesa', program_summary='Stable', rating=5))
    db.commit()


def test_build_sheet_styles_header_and_caps_width() -> None:
    workbook = export.new_workbook()
    rows = [{'name': 'x' * 80, 'note': None}]

    worksheet = export.build_sheet(workbook, 'Notes', [('Name', 'name'), ('Note', 'note')], rows)

    assert workbook.sheetnames == ['Notes']
    assert [cell.value for cell in worksheet[1]] == ['Name', 'Note']
    assert worksheet['A1'].font.bold
    assert worksheet['A1'].fill.start_color.rgb == 'FFE6E6FA'
    assert worksheet.column_dimensions['A'].width == 50
    assert worksheet.column_dimensions['B'].width == 12


def test_workbook_to_bytes_never_emits_an_empty_workbook() -> None:
    content = export.workbook_to_bytes(export.new_workbook())

    assert load_workbook(io.BytesIO(content)).sheetnames == ['No Data']


def test_export_filename_is_dated() -> None:
    assert export.export_filename('prl-reports', date(2026, 10, 19)) == 'prl-reports-2026-10-19.xlsx'


def test_prl_reports_workbook_flattens_lecturer_report(db) -> None:
    _seed_review_chain(db)

    worksheet = export.build_prl_reports_workbook(db)['PRL Reports']

    headers = [cell.value for cell in worksheet[1]]
    values = dict(zip(headers, [cell.value for cell in worksheet[2]]))
    assert values['PRL Name'] == 'Ms Lineo'
    assert values['Lecturer Name'] == 'Mr Thabo'
    assert values['Course Code'] == 'BIWA2110'
    assert values['Topic Taught'] == 'REST APIs'
    assert values['Rating'] == 4


def test_program_reports_workbook_skips_empty_pl_sheet(db) -> None:
    workbook = export.build_program_reports_workbook(db)

    assert workbook.sheetnames == ['Courses', 'Summary']


def test_program_reports_workbook_summarises_counts(db) -> None:
    _seed_review_chain(db)

    workbook = export.build_program_reports_workbook(db)

    assert workbook.sheetnames == ['Program Leader Reports', 'Courses', 'Summary']
    summary = {row[0]: row[1] for row in workbook['Summary'].iter_rows(min_row=2, values_only=True)}
    assert summary == {
        'Total Courses': 1,
        'Total Lecturer Reports': 1,
        'Total PRL Reports': 1,
        'Total PL Reports': 1,
    }


def test_all_data_workbook_only_includes_populated_tables(db) -> None:
    _seed_review_chain(db)

    workbook = export.build_all_data_workbook(db)

    assert workbook.sheetnames == ['Courses', 'Lecturer Reports', 'PRL Reports', 'PL Reports']
    assert 'COURSE NAME' in [cell.value for cell in workbook['Courses'][1]]


def test_summary_metrics_round_averages(db) -> None:
    db.add_all([
        StudentRating(student_id=1, course_id=1, lecturer_rating=4, course_rating=5),
        StudentRating(student_id=2, course_id=1, lecturer_rating=5, course_rating=4),
        StudentRating(student_id=3, course_id=1, lecturer_rating=5, course_rating=4),
    ])
    db.commit()

    metrics = {
        item['metric']: item['value']
        for item in export.summary_metrics(db, now=datetime(2026, 10, 19, 12, 0))
    }

    assert metrics['TOTAL STUDENT RATINGS'] == 3
    assert metrics['AVERAGE STUDENT LECTURER RATING'] == 4.67
    assert metrics['AVERAGE STUDENT COURSE RATING'] == 4.33
    assert metrics['AVERAGE PRL RATING'] == 0
    assert metrics['REPORT GENERATED ON'] == '2026-10-19 12:00:00'


def test_export_route_requires_token(client) -> None:
    response = client.get('/api/export/summary')

    assert response.status_code == 401


def test_export_route_streams_xlsx_attachment(client, auth_headers) -> None:
    response = client.get('/api/export/summary', headers=auth_headers)

    assert response.status_code == 200
    assert response.headers['content-type'] == export.XLSX_MEDIA_TYPE
    assert response.headers['content-disposition'].startswith('attachment; filename=luct-summary-')
    workbook = load_workbook(io.BytesIO(response.content))
    assert isinstance(workbook, Workbook)
    assert workbook.sheetnames == ['Summary Report']
