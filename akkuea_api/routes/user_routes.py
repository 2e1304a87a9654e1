import logging

from fastapi import APIRouter, Depends, status
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from akkuea_api.auth.dependencies import authenticate
from akkuea_api.auth.passwords import hash_password
from akkuea_api.core.errors import ApiError, success_response
from akkuea_api.database import get_db
from akkuea_api.models.user import Role, User
from akkuea_api.schemas.user import CreateUserRequest, UserResponse

router = APIRouter(tags=['users'], dependencies=[Depends(authenticate)])

logger = logging.getLogger(__name__)

DUPLICATE_EMAIL_MESSAGE = 'User with this email already exists'
INVALID_ROLE_MESSAGE = 'Invalid role. Allowed roles: ' + ', '.join(role.value for role in Role)

# primary keys are signed 64-bit integers in storage
MAX_RECORD_ID = 2**63 - 1


def database_error(message: str) -> ApiError:
    return ApiError(status.HTTP_500_INTERNAL_SERVER_ERROR, 'database_error', message)


def parse_record_id(raw_id: str, label: str) -> int:
    normalized = raw_id.strip()
    if not normalized:
        raise ApiError(status.HTTP_400_BAD_REQUEST, 'invalid_input', f'{label} ID is required')
    # isdigit alone accepts non-ASCII digits such as '²'
    if not (normalized.isascii() and normalized.isdigit()) or len(normalized) > len(str(MAX_RECORD_ID)):
        raise ApiError(status.HTTP_400_BAD_REQUEST, 'invalid_input', f'{label} ID must be a valid number')

    record_id = int(normalized)
    if record_id > MAX_RECORD_ID:
        raise ApiError(status.HTTP_400_BAD_REQUEST, 'invalid_input', f'{label} ID must be a valid number')
    return record_id


def parse_role(raw_role: str, failure_code: str) -> Role:
    try:
        return Role(raw_role)
    except ValueError as exc:
        raise ApiError(status.HTTP_400_BAD_REQUEST, failure_code, INVALID_ROLE_MESSAGE) from exc


def insert_user(data: CreateUserRequest, db: Session, failure_code: str) -> User:
    role = parse_role(data.role, failure_code)

    try:
        existing_user = db.query(User).filter(User.email == data.email).first()
        if existing_user:
            raise ApiError(status.HTTP_400_BAD_REQUEST, failure_code, DUPLICATE_EMAIL_MESSAGE)

        user = User(
            name=data.name,
            email=data.email,
            hashed_password=hash_password(data.password),
            role=role,
        )
        db.add(user)
        db.commit()
        db.refresh(user)
        return user
    except IntegrityError as exc:
        # lost the race against a concurrent insert of the same email
        db.rollback()
        raise ApiError(status.HTTP_400_BAD_REQUEST, failure_code, DUPLICATE_EMAIL_MESSAGE) from exc
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception('Failed to create user')
        raise database_error('Failed to create user') from exc


@router.get('/users')
def list_users(db: Session = Depends(get_db)):
    try:
        users = db.query(User).order_by(User.id.asc()).all()
    except SQLAlchemyError as exc:
        logger.exception('Failed to list users')
        raise database_error('Failed to retrieve users') from exc

    return success_response(
        [UserResponse.model_validate(user) for user in users],
        'Users retrieved successfully',
    )


@router.get('/users/{user_id}')
def get_user(user_id: str, db: Session = Depends(get_db)):
    parsed_id = parse_record_id(user_id, 'User')

    try:
        user = db.get(User, parsed_id)
    except SQLAlchemyError as exc:
        logger.exception('Failed to load user %s', parsed_id)
        raise database_error('Failed to retrieve user') from exc

    if user is None:
        raise ApiError(status.HTTP_404_NOT_FOUND, 'user_not_found', 'User not found')

    return success_response(UserResponse.model_validate(user), 'User retrieved successfully')


@router.post('/users', status_code=status.HTTP_201_CREATED)
def create_user(data: CreateUserRequest, db: Session = Depends(get_db)):
    user = insert_user(data, db, failure_code='user_creation_failed')
    logger.info('Created user %s with role %s', user.id, user.role.value)
    return success_response(
        UserResponse.model_validate(user),
        'User created successfully',
        status_code=status.HTTP_201_CREATED,
    )
