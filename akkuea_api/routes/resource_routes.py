import logging
from dataclasses import asdict

from fastapi import APIRouter, Depends, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from akkuea_api.auth.dependencies import authenticate, get_request_identity
from akkuea_api.auth.jwt_handler import Identity
from akkuea_api.core.errors import ApiError, success_response
from akkuea_api.database import get_db
from akkuea_api.models.resource import Resource
from akkuea_api.routes.user_routes import database_error, parse_record_id
from akkuea_api.schemas.resource import (
    ResourceFields,
    ResourceResponse,
    UpdateResourceRequest,
    apply_patch,
)

router = APIRouter(tags=['resources'], dependencies=[Depends(authenticate)])

logger = logging.getLogger(__name__)


def load_resource(resource_id: int, db: Session) -> Resource:
    try:
        resource = db.get(Resource, resource_id)
    except SQLAlchemyError as exc:
        logger.exception('Failed to load resource %s', resource_id)
        raise database_error('Failed to retrieve resource') from exc

    if resource is None:
        raise ApiError(status.HTTP_404_NOT_FOUND, 'resource_not_found', 'Resource not found')
    return resource


def ensure_owner(resource: Resource, identity: Identity | None) -> Identity:
    if identity is None:
        raise ApiError(status.HTTP_401_UNAUTHORIZED, 'unauthorized', 'Authentication required')

    # ownership mismatch is reported as unauthorized, not forbidden
    if resource.creator_id != identity.user_id:
        raise ApiError(
            status.HTTP_401_UNAUTHORIZED,
            'unauthorized',
            'You are not allowed to update this resource',
        )
    return identity


@router.get('/resources/{resource_id}')
def get_resource(resource_id: str, db: Session = Depends(get_db)):
    resource = load_resource(parse_record_id(resource_id, 'Resource'), db)
    return success_response(ResourceResponse.model_validate(resource), 'Resource retrieved successfully')


@router.patch('/resources/{resource_id}')
@router.put('/resources/{resource_id}')
def update_resource(
    resource_id: str,
    data: UpdateResourceRequest,
    identity: Identity | None = Depends(get_request_identity),
    db: Session = Depends(get_db),
):
    parsed_id = parse_record_id(resource_id, 'Resource')

    patch = data.to_patch()
    if patch.is_empty():
        raise ApiError(
            status.HTTP_400_BAD_REQUEST,
            'invalid_input',
            'At least one field must be provided for update',
        )

    resource = load_resource(parsed_id, db)
    ensure_owner(resource, identity)

    updated_fields = apply_patch(ResourceFields.from_record(resource), patch)

    try:
        for name, value in asdict(updated_fields).items():
            setattr(resource, name, value)
        db.commit()
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception('Failed to update resource %s', parsed_id)
        raise database_error('Failed to update resource') from exc

    try:
        db.refresh(resource)
    except SQLAlchemyError as exc:
        logger.exception('Failed to reload resource %s', parsed_id)
        raise database_error('Failed to retrieve updated resource') from exc

    return success_response(ResourceResponse.model_validate(resource), 'Resource updated successfully')
