from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

import jwt

from reporting.core.config import TokenSettings
from reporting.core.errors import AuthorizationError

REQUIRED_CLAIMS = ["id", "role", "iat", "exp"]


@dataclass(frozen=True)
class Identity:
    """Public identity carried inside a session token."""
    id: int
    name: str
    role: str
    email: str | None = None
    student_id: str | None = None

    def to_payload(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "role": self.role,
            "email": self.email,
            "studentId": self.student_id,
        }


def create_access_token(identity: Identity, settings: TokenSettings, now: datetime | None = None) -> str:
    issued_at = now or datetime.now(timezone.utc)
    expire = issued_at + timedelta(minutes=settings.expires_minutes)
    payload = identity.to_payload()
    payload.update({"iat": int(issued_at.timestamp()), "exp": int(expire.timestamp())})
    return jwt.encode(payload, settings.secret_key, algorithm=settings.algorithm)


def decode_access_token(token: str, settings: TokenSettings, now: datetime | None = None) -> Identity:
    try:
        # Expiry is checked below against ``now`` so callers can pin the clock.
        payload = jwt.decode(
            token,
            settings.secret_key,
            algorithms=[settings.algorithm],
            options={"verify_exp": False, "verify_iat": False, "require": REQUIRED_CLAIMS},
        )
    except jwt.PyJWTError as exc:
        raise AuthorizationError("Invalid or expired token") from exc

    current = now or datetime.now(timezone.utc)
    if payload["exp"] <= current.timestamp():
        raise AuthorizationError("Invalid or expired token")

    return Identity(
        id=payload["id"],
        name=payload.get("name"),
        role=payload["role"],
        email=payload.get("email"),
        student_id=payload.get("studentId"),
    )
