import logging
from datetime import datetime, timezone

from fastapi import APIRouter, Depends, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from akkuea_api.auth import jwt_handler
from akkuea_api.auth.dependencies import authenticate, get_current_identity, get_settings
from akkuea_api.auth.jwt_handler import Identity
from akkuea_api.auth.passwords import get_dummy_password_hash, verify_password
from akkuea_api.core.config import Settings
from akkuea_api.core.errors import ApiError, success_response
from akkuea_api.database import get_db
from akkuea_api.models.user import User
from akkuea_api.routes.user_routes import database_error, insert_user
from akkuea_api.schemas.user import AuthResponse, CreateUserRequest, LoginRequest, UserResponse

router = APIRouter(prefix='/auth', tags=['auth'])
protected_router = APIRouter(tags=['auth'], dependencies=[Depends(authenticate)])

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS_MESSAGE = 'Invalid email or password'


def issue_token(user: User, settings: Settings) -> str:
    identity = Identity(user_id=user.id, email=user.email, role=user.role)
    return jwt_handler.create_access_token(identity, settings)


@router.post('/register', status_code=status.HTTP_201_CREATED)
def register(
    data: CreateUserRequest,
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    user = insert_user(data, db, failure_code='registration_failed')
    logger.info('Registered user %s with role %s', user.id, user.role.value)

    return success_response(
        AuthResponse(user=UserResponse.model_validate(user), token=issue_token(user, settings)),
        'User registered successfully',
        status_code=status.HTTP_201_CREATED,
    )


@router.post('/login')
def login(
    data: LoginRequest,
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    try:
        user = db.query(User).filter(User.email == data.email).first()
    except SQLAlchemyError as exc:
        logger.exception('Failed to load user during login')
        raise database_error('Failed to retrieve user') from exc

    hashed_password = user.hashed_password if user is not None else get_dummy_password_hash()
    password_matches = verify_password(data.password, hashed_password)
    if user is None or not password_matches:
        raise ApiError(status.HTTP_401_UNAUTHORIZED, 'unauthorized', INVALID_CREDENTIALS_MESSAGE)

    return success_response(
        AuthResponse(user=UserResponse.model_validate(user), token=issue_token(user, settings)),
        'Login successful',
    )


@protected_router.get('/auth/me')
def me(
    identity: Identity = Depends(get_current_identity),
    db: Session = Depends(get_db),
):
    try:
        user = db.get(User, identity.user_id)
    except SQLAlchemyError as exc:
        logger.exception('Failed to load current user %s', identity.user_id)
        raise database_error('Failed to retrieve user') from exc

    if user is None:
        raise ApiError(status.HTTP_404_NOT_FOUND, 'user_not_found', 'User not found')

    return success_response(UserResponse.model_validate(user), 'User information retrieved successfully')


@protected_router.get('/protected')
def protected(identity: Identity = Depends(get_current_identity)):
    return success_response(
        {
            'user_id': identity.user_id,
            'email': identity.email,
            'role': identity.role.value,
            'timestamp': int(datetime.now(timezone.utc).timestamp()),
        },
        'Access granted to protected route',
    )
