"""Registration and login.

``Authenticator`` owns the credential rules: who may register with which
identifier, how passwords are stored, and how a successful login turns into a
signed session token. Signing settings are handed in at construction and never
change afterwards.
"""

import logging
import re
from datetime import datetime

from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from reporting.auth import jwt_handler, passwords
from reporting.auth.jwt_handler import Identity
from reporting.core.config import TokenSettings
from reporting.core.errors import (
    AuthenticationError,
    ConflictError,
    StorageError,
    ValidationError,
)
from reporting.models.user import ROLE_STUDENT, ROLES, User

logger = logging.getLogger(__name__)

STUDENT_ID_PATTERN = re.compile(r"[0-9]{9}")
MIN_PASSWORD_LENGTH = 6
MAX_PASSWORD_BYTES = 72  # bcrypt input limit
INVALID_CREDENTIALS = "Invalid credentials"


def identity_for(user: User) -> Identity:
    return Identity(
        id=user.id,
        name=user.name,
        role=user.role,
        email=user.email,
        student_id=user.student_id,
    )


class Authenticator:
    def __init__(self, token_settings: TokenSettings, email_domain: str):
        self._token_settings = token_settings
        self._email_domain = email_domain.lower()

    def register(
        self,
        db: Session,
        *,
        name: str | None,
        password: str | None,
        role: str | None,
        email: str | None = None,
        student_id: str | None = None,
    ) -> User:
        if email:
            email = email.strip().lower()
        logger.info("Registration attempt: role=%s email=%s student_id=%s", role, email, student_id)
        self._validate_registration(name, password, role, email, student_id)
        self._ensure_not_registered(db, role, email, student_id)

        if role == ROLE_STUDENT:
            email = None
        else:
            student_id = None

        user = User(
            name=name,
            email=email,
            student_id=student_id,
            password=passwords.hash_password(password),
            role=role,
        )
        try:
            db.add(user)
            db.commit()
            db.refresh(user)
        except IntegrityError as exc:
            # Lost a race with a concurrent registration of the same identifier.
            db.rollback()
            logger.info("Registration conflict on insert: role=%s", role)
            raise ConflictError(
                "Student ID already registered" if role == ROLE_STUDENT else "Email already registered"
            ) from exc
        except SQLAlchemyError as exc:
            db.rollback()
            logger.exception("Failed to store new user")
            raise StorageError("Internal server error during registration") from exc

        logger.info("User registered: id=%s role=%s", user.id, user.role)
        return user

    def _validate_registration(self, name, password, role, email, student_id) -> None:
        if role not in ROLES:
            raise ValidationError(f"Role must be one of: {', '.join(ROLES)}")

        if role == ROLE_STUDENT:
            if not student_id:
                raise ValidationError("Student ID is required for student registration")
            if not STUDENT_ID_PATTERN.fullmatch(student_id):
                raise ValidationError("Student ID must be 9 digits (e.g., 901019102)")
        else:
            if not email:
                raise ValidationError("Email is required for lecturer/PRL/PL registration")
            if not email.lower().endswith(self._email_domain):
                raise ValidationError(
                    f"Email must be a valid LUCT email address (e.g., example{self._email_domain})"
                )

        if not name or not password:
            raise ValidationError("Name and password are required")

        if len(password) < MIN_PASSWORD_LENGTH:
            raise ValidationError(f"Password must be at least {MIN_PASSWORD_LENGTH} characters long")

        if len(password.encode("utf-8")) > MAX_PASSWORD_BYTES:
            raise ValidationError(f"Password must be at most {MAX_PASSWORD_BYTES} bytes long")

    def _ensure_not_registered(self, db: Session, role, email, student_id) -> None:
        # The other identifier is checked too when supplied, so an email typed
        # under the wrong role still counts as a duplicate.
        conditions = []
        if student_id:
            conditions.append(User.student_id == student_id)
        if email:
            conditions.append(User.email == email)

        try:
            existing = db.query(User).filter(or_(*conditions)).all()
        except SQLAlchemyError as exc:
            logger.exception("Failed to look up existing users")
            raise StorageError("Internal server error during registration") from exc

        for user in existing:
            if role == ROLE_STUDENT and student_id and user.student_id == student_id:
                raise ConflictError("Student ID already registered")
            if email and user.email == email:
                raise ConflictError("Email already registered")
            if student_id and user.student_id == student_id:
                raise ConflictError("Student ID already registered")

    def login(
        self,
        db: Session,
        *,
        identifier: str | None,
        password: str | None,
        role: str | None,
        now: datetime | None = None,
    ) -> tuple[str, User]:
        if not identifier or not password or not role:
            raise ValidationError("Identifier, password, and role are required")

        if role != ROLE_STUDENT:
            identifier = identifier.lower()

        logger.info("Login attempt: identifier=%s role=%s", identifier, role)
        lookup = User.student_id if role == ROLE_STUDENT else User.email
        try:
            user = db.query(User).filter(lookup == identifier, User.role == role).first()
        except SQLAlchemyError as exc:
            logger.exception("Failed to look up user for login")
            raise StorageError("Internal server error during login") from exc

        if user is None or not passwords.verify_password(password, user.password):
            logger.info("Login rejected: identifier=%s role=%s", identifier, role)
            raise AuthenticationError(INVALID_CREDENTIALS)

        return self.issue_token(user, now=now), user

    def issue_token(self, user: User, now: datetime | None = None) -> str:
        return jwt_handler.create_access_token(identity_for(user), self._token_settings, now=now)

    def verify_token(self, token: str, now: datetime | None = None) -> Identity:
        return jwt_handler.decode_access_token(token, self._token_settings, now=now)
