from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field
from sqlalchemy.orm import Session

from reporting.auth.dependencies import get_current_identity
from reporting.database import get_db
from reporting.models.program import PlClass, PlCourse
from reporting.routes.common import save_record

router = APIRouter(tags=['program'], dependencies=[Depends(get_current_identity)])


class CreatePlCourseRequest(BaseModel):
    program_name: str = Field(min_length=1)
    course_code: str = Field(min_length=1)
    course_name: str = Field(min_length=1)
    prl_responsible: str | None = None


class CreatePlClassRequest(BaseModel):
    prl_id: int
    class_details: str | None = None
    oversight_notes: str | None = None


@router.post('/pl_courses')
def create_pl_course(payload: CreatePlCourseRequest, db: Session = Depends(get_db)):
    course = save_record(db, PlCourse(**payload.model_dump()), 'Failed to update program courses')
    return {'id': course.id, 'message': 'Program courses updated successfully'}


@router.post('/pl_classes')
def create_pl_class(payload: CreatePlClassRequest, db: Session = Depends(get_db)):
    pl_class = save_record(db, PlClass(**payload.model_dump()), 'Failed to save class oversight data')
    return {'id': pl_class.id, 'message': 'Class oversight data saved successfully'}
