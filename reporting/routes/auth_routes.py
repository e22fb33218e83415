from fastapi import APIRouter, Depends, status
from pydantic import AliasChoices, BaseModel, Field, field_validator
from sqlalchemy.orm import Session

from reporting.auth.dependencies import get_authenticator, get_current_identity
from reporting.auth.jwt_handler import Identity
from reporting.auth.service import Authenticator, identity_for
from reporting.database import get_db

router = APIRouter(tags=['auth'])


def _strip_or_none(value):
    if value is None:
        return None
    if not isinstance(value, str):
        value = str(value)
    value = value.strip()
    return value or None


class RegisterRequest(BaseModel):
    name: str | None = None
    email: str | None = None
    student_id: str | None = Field(default=None, validation_alias=AliasChoices('student_id', 'studentId'))
    password: str | None = Field(default=None, validation_alias=AliasChoices('password', 'secret'))
    role: str | None = None

    @field_validator('name', 'student_id', 'role', mode='before')
    @classmethod
    def normalize_text(cls, value):
        return _strip_or_none(value)

    @field_validator('email', mode='before')
    @classmethod
    def normalize_email(cls, value):
        value = _strip_or_none(value)
        return value.lower() if value else None

    @field_validator('role')
    @classmethod
    def normalize_role(cls, value: str | None) -> str | None:
        return value.lower() if value else None


class LoginRequest(BaseModel):
    identifier: str | None = None
    password: str | None = Field(default=None, validation_alias=AliasChoices('password', 'secret'))
    role: str | None = None

    @field_validator('identifier', 'role', mode='before')
    @classmethod
    def normalize_text(cls, value):
        return _strip_or_none(value)

    @field_validator('role')
    @classmethod
    def normalize_role(cls, value: str | None) -> str | None:
        return value.lower() if value else None


@router.post('/register', status_code=status.HTTP_201_CREATED)
def register(
    payload: RegisterRequest,
    db: Session = Depends(get_db),
    authenticator: Authenticator = Depends(get_authenticator),
):
    user = authenticator.register(
        db,
        name=payload.name,
        password=payload.password,
        role=payload.role,
        email=payload.email,
        student_id=payload.student_id,
    )
    return {'message': 'User registered successfully', **identity_for(user).to_payload()}


@router.post('/login')
def login(
    payload: LoginRequest,
    db: Session = Depends(get_db),
    authenticator: Authenticator = Depends(get_authenticator),
):
    token, user = authenticator.login(
        db,
        identifier=payload.identifier,
        password=payload.password,
        role=payload.role,
    )
    return {
        'message': 'Login successful',
        'token': token,
        'user': identity_for(user).to_payload(),
    }


@router.get('/user/profile')
def profile(identity: Identity = Depends(get_current_identity)):
    return {'user': identity.to_payload()}
