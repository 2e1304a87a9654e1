import pytest
from pydantic import ValidationError

from akkuea_api.models.user import Role
from akkuea_api.schemas.user import CreateUserRequest, LoginRequest, UserResponse


def test_create_user_request_normalizes_name_and_email() -> None:
    request = CreateUserRequest(name='  Ada  ', email='Ada@Test.COM', password='password123', role='Educator')

    assert request.name == 'Ada'
    assert request.email == 'ada@test.com'
    assert request.role == 'Educator'


def test_create_user_request_leaves_role_parsing_to_the_handler() -> None:
    request = CreateUserRequest(name='Ada', email='ada@test.com', password='password123', role='InvalidRole')

    assert request.role == 'InvalidRole'


@pytest.mark.parametrize(
    'overrides',
    [
        {'role': ''},
        {'name': '   '},
        {'password': '12345'},
        {'email': 'not-an-email'},
    ],
)
def test_create_user_request_rejects_malformed_fields(overrides: dict) -> None:
    fields = {'name': 'Ada', 'email': 'ada@test.com', 'password': 'password123', 'role': 'Student', **overrides}

    with pytest.raises(ValidationError):
        CreateUserRequest(**fields)


def test_login_request_normalizes_email() -> None:
    assert LoginRequest(email='USER@Test.com', password='x').email == 'user@test.com'


def test_user_response_has_no_password_field() -> None:
    assert 'hashed_password' not in UserResponse.model_fields
    assert 'password' not in UserResponse.model_fields
    assert UserResponse.model_fields['role'].annotation is Role
