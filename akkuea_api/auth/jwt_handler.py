from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

import jwt

from akkuea_api.core.config import Settings
from akkuea_api.models.user import Role


@dataclass(frozen=True)
class Identity:
    user_id: int
    email: str
    role: Role


class TokenError(Exception):
    """Raised when a bearer token cannot be turned into an identity."""


def create_access_token(identity: Identity, settings: Settings, expires_minutes: int | None = None) -> str:
    expire_minutes = expires_minutes if expires_minutes is not None else settings.jwt_expires_minutes
    issued_at = datetime.now(timezone.utc)
    payload = {
        "sub": str(identity.user_id),
        "email": identity.email,
        "role": identity.role.value,
        "iat": issued_at,
        "exp": issued_at + timedelta(minutes=expire_minutes),
    }
    return jwt.encode(payload, settings.jwt_secret_key, algorithm=settings.jwt_algorithm)


def decode_access_token(token: str, settings: Settings) -> Identity:
    try:
        payload = jwt.decode(
            token,
            settings.jwt_secret_key,
            algorithms=[settings.jwt_algorithm],
            options={"require": ["exp", "sub"]},
        )
    except jwt.ExpiredSignatureError as exc:
        raise TokenError("Token has expired") from exc
    except jwt.MissingRequiredClaimError as exc:
        raise TokenError("Invalid token claims") from exc
    except jwt.InvalidTokenError as exc:
        raise TokenError("Invalid token") from exc

    try:
        return Identity(
            user_id=int(payload["sub"]),
            email=str(payload["email"]),
            role=Role(payload["role"]),
        )
    except (KeyError, TypeError, ValueError) as exc:
        raise TokenError("Invalid token claims") from exc
