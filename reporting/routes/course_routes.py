from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field
from sqlalchemy.orm import Session

from reporting.core.errors import NotFoundError
from reporting.database import get_db
from reporting.models.course import Course
from reporting.routes.common import OptionalInt, save_record, serialize, storage_errors

router = APIRouter(tags=['courses'])


class CreateCourseRequest(BaseModel):
    faculty_name: str = Field(min_length=1)
    class_name: str = Field(min_length=1)
    course_name: str = Field(min_length=1)
    course_code: str = Field(min_length=1)
    venue: str | None = None
    scheduled_time: str | None = None
    total_registered: OptionalInt = None


@router.post('/courses')
def create_course(payload: CreateCourseRequest, db: Session = Depends(get_db)):
    course = Course(**payload.model_dump())
    course.total_registered = payload.total_registered or 0
    save_record(db, course, 'DB error')
    return {'id': course.id}


@router.get('/courses')
def list_courses(db: Session = Depends(get_db)):
    with storage_errors(db, 'DB error'):
        courses = db.query(Course).order_by(Course.id.desc()).all()
    return [serialize(course) for course in courses]


@router.get('/courses/{course_id}')
def get_course(course_id: int, db: Session = Depends(get_db)):
    with storage_errors(db, 'DB error'):
        course = db.query(Course).filter(Course.id == course_id).first()
    if course is None:
        raise NotFoundError('Course not found')
    return serialize(course)
