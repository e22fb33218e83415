import logging
from contextlib import contextmanager
from typing import Annotated, Optional

from pydantic import BeforeValidator, Field
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from reporting.core.errors import StorageError
from reporting.database import model_to_dict

logger = logging.getLogger(__name__)


def blank_to_none(value):
    # HTML forms post untouched optional inputs as empty strings.
    if isinstance(value, str) and not value.strip():
        return None
    return value


Rating = Annotated[int, Field(ge=1, le=5)]
OptionalRating = Annotated[Optional[Rating], BeforeValidator(blank_to_none)]
OptionalInt = Annotated[Optional[int], BeforeValidator(blank_to_none)]


@contextmanager
def storage_errors(db: Session, message: str):
    """Turn database failures into a logged ``StorageError`` carrying ``message``."""
    try:
        yield
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception(message)
        raise StorageError(message) from exc


def save_record(db: Session, instance, message: str):
    with storage_errors(db, message):
        db.add(instance)
        db.commit()
        db.refresh(instance)
    return instance


def serialize(instance, **extra) -> dict:
    data = model_to_dict(instance)
    data.update(extra)
    return data
