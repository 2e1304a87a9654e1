import logging

from fastapi import Depends, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from akkuea_api.auth import jwt_handler
from akkuea_api.auth.jwt_handler import Identity
from akkuea_api.core.config import Settings
from akkuea_api.core.errors import ApiError
from akkuea_api.models.user import Role

logger = logging.getLogger(__name__)

bearer_scheme = HTTPBearer(auto_error=False)


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def _unauthorized(message: str) -> ApiError:
    return ApiError(status.HTTP_401_UNAUTHORIZED, "unauthorized", message)


def authenticate(
    request: Request,
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    settings: Settings = Depends(get_settings),
) -> Identity:
    # HTTPBearer yields None both for a missing header and for a non-bearer one
    if credentials is None:
        if not request.headers.get("Authorization"):
            raise _unauthorized("Authorization header is required")
        raise _unauthorized("Authorization header must be in the format 'Bearer <token>'")

    token = credentials.credentials.strip()
    if not token:
        raise _unauthorized("Authorization header must be in the format 'Bearer <token>'")

    try:
        identity = jwt_handler.decode_access_token(token, settings)
    except jwt_handler.TokenError as exc:
        logger.info("Rejected bearer token on %s: %s", request.url.path, exc)
        raise _unauthorized(str(exc)) from exc

    request.state.identity = identity
    return identity


def get_request_identity(request: Request) -> Identity | None:
    return getattr(request.state, "identity", None)


def get_current_identity(identity: Identity | None = Depends(get_request_identity)) -> Identity:
    if identity is None:
        raise _unauthorized("Authentication required")
    return identity


def require_roles(*roles: Role):
    allowed = ", ".join(role.value for role in roles)

    def check_role(identity: Identity = Depends(get_current_identity)) -> Identity:
        if identity.role not in roles:
            raise ApiError(
                status.HTTP_403_FORBIDDEN,
                "forbidden",
                f"Access denied. Required role: {allowed}, your role: {identity.role.value}",
            )
        return identity

    return check_role
