import json

from akkuea_api.core.errors import (
    ApiError,
    describe_validation_errors,
    error_response,
    success_response,
)
from akkuea_api.models.user import Role


def test_error_response_uses_error_envelope() -> None:
    response = error_response(404, 'resource_not_found', 'Resource not found')

    assert response.status_code == 404
    assert json.loads(response.body) == {'error': 'resource_not_found', 'message': 'Resource not found'}


def test_success_response_encodes_data() -> None:
    response = success_response({'role': Role.DESIGNER}, 'ok', status_code=201)

    assert response.status_code == 201
    assert json.loads(response.body) == {'data': {'role': 'Designer'}, 'message': 'ok'}


def test_api_error_keeps_code_and_message() -> None:
    error = ApiError(401, 'unauthorized', 'Invalid token')

    assert str(error) == 'Invalid token'
    assert (error.status_code, error.code, error.message) == (401, 'unauthorized', 'Invalid token')


def test_describe_validation_errors_names_the_field() -> None:
    errors = [{'loc': ('body', 'email'), 'msg': 'value is not a valid email address'}]

    assert describe_validation_errors(errors) == 'email: value is not a valid email address'


def test_describe_validation_errors_without_location() -> None:
    assert describe_validation_errors([{'loc': ('body',), 'msg': 'Field required'}]) == 'Field required'
    assert describe_validation_errors([]) == 'Invalid request data'
