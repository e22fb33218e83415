from fastapi import APIRouter, Depends
from pydantic import BaseModel
from sqlalchemy.orm import Session, joinedload

from reporting.auth.dependencies import get_current_identity
from reporting.database import get_db
from reporting.models.rating import LecturerRating, PlRating, StudentRating
from reporting.routes.common import Rating, save_record, serialize, storage_errors

router = APIRouter(tags=['ratings'])


class CreateLecturerRatingRequest(BaseModel):
    course_id: int
    student_rating: Rating
    course_structure_rating: Rating
    overall_rating: Rating
    comments: str | None = None


class CreateStudentRatingRequest(BaseModel):
    student_id: int
    course_id: int
    lecturer_rating: Rating
    course_rating: Rating
    comments: str | None = None


class CreatePlRatingRequest(BaseModel):
    prl_id: int
    program_rating: Rating
    prl_performance_rating: Rating
    comments: str | None = None


@router.post('/lecturer_rating')
def create_lecturer_rating(payload: CreateLecturerRatingRequest, db: Session = Depends(get_db)):
    rating = save_record(db, LecturerRating(**payload.model_dump()), 'Failed to submit rating')
    return {'id': rating.id, 'message': 'Rating submitted successfully'}


@router.get('/lecturer_rating')
def list_lecturer_ratings(db: Session = Depends(get_db)):
    with storage_errors(db, 'Failed to fetch rating data'):
        ratings = (
            db.query(LecturerRating)
            .options(joinedload(LecturerRating.course))
            .order_by(LecturerRating.created_at.desc(), LecturerRating.id.desc())
            .all()
        )
    return [
        serialize(
            rating,
            course_name=rating.course.course_name if rating.course else None,
            course_code=rating.course.course_code if rating.course else None,
        )
        for rating in ratings
    ]


@router.post('/student_ratings')
def create_student_rating(payload: CreateStudentRatingRequest, db: Session = Depends(get_db)):
    rating = save_record(db, StudentRating(**payload.model_dump()), 'DB error')
    return {'id': rating.id}


@router.get('/student_ratings')
def list_student_ratings(db: Session = Depends(get_db)):
    with storage_errors(db, 'DB error'):
        ratings = (
            db.query(StudentRating)
            .options(joinedload(StudentRating.student), joinedload(StudentRating.course))
            .order_by(StudentRating.created_at.desc(), StudentRating.id.desc())
            .all()
        )
    return [
        serialize(
            rating,
            student_name=rating.student.name if rating.student else None,
            course_name=rating.course.course_name if rating.course else None,
        )
        for rating in ratings
    ]


@router.post('/pl_rating', dependencies=[Depends(get_current_identity)])
def create_pl_rating(payload: CreatePlRatingRequest, db: Session = Depends(get_db)):
    rating = save_record(db, PlRating(**payload.model_dump()), 'Failed to submit rating')
    return {'id': rating.id, 'message': 'Rating submitted successfully'}
