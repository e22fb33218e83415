import io
import logging

from fastapi import APIRouter, Depends
from fastapi.responses import StreamingResponse
from sqlalchemy.orm import Session

from reporting.auth.dependencies import get_current_identity
from reporting.auth.jwt_handler import Identity
from reporting.database import get_db
from reporting.routes.common import storage_errors
from reporting.services import export

router = APIRouter(prefix='/export', tags=['export'])

logger = logging.getLogger(__name__)


def workbook_response(workbook, prefix: str) -> StreamingResponse:
    content = export.workbook_to_bytes(workbook)
    headers = {'Content-Disposition': f'attachment; filename={export.export_filename(prefix)}'}
    return StreamingResponse(io.BytesIO(content), media_type=export.XLSX_MEDIA_TYPE, headers=headers)


@router.get('/prl-reports')
def export_prl_reports(
    db: Session = Depends(get_db),
    identity: Identity = Depends(get_current_identity),
):
    logger.info('PRL report export requested by user %s', identity.id)
    with storage_errors(db, 'Failed to export PRL reports data'):
        workbook = export.build_prl_reports_workbook(db)
    return workbook_response(workbook, 'prl-reports')


@router.get('/program-reports')
def export_program_reports(
    db: Session = Depends(get_db),
    identity: Identity = Depends(get_current_identity),
):
    logger.info('Program report export requested by user %s', identity.id)
    with storage_errors(db, 'Failed to export program reports data'):
        workbook = export.build_program_reports_workbook(db)
    return workbook_response(workbook, 'program-reports')


@router.get('/all-data')
def export_all_data(
    db: Session = Depends(get_db),
    identity: Identity = Depends(get_current_identity),
):
    logger.info('Full data export requested by user %s', identity.id)
    with storage_errors(db, 'Failed to export all system data'):
        workbook = export.build_all_data_workbook(db)
    return workbook_response(workbook, 'luct-all-data')


@router.get('/summary')
def export_summary(
    db: Session = Depends(get_db),
    identity: Identity = Depends(get_current_identity),
):
    logger.info('Summary export requested by user %s', identity.id)
    with storage_errors(db, 'Failed to export summary data'):
        workbook = export.build_summary_workbook(db)
    return workbook_response(workbook, 'luct-summary')
