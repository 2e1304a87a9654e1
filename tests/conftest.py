import pytest
from fastapi.testclient import TestClient

from akkuea_api.auth.passwords import hash_password
from akkuea_api.core.config import Settings
from akkuea_api.database import Base, build_engine, build_session_factory, create_schema
from akkuea_api.main import create_app
from akkuea_api.models.resource import Resource
from akkuea_api.models.user import Role, User

TEST_SECRET = 'test-jwt-secret-key'


@pytest.fixture
def settings() -> Settings:
    return Settings(database_url='sqlite://', jwt_secret_key=TEST_SECRET, jwt_expires_minutes=60)


@pytest.fixture
def app(settings):
    return create_app(settings)


@pytest.fixture
def client(app):
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def app_db(client):
    db = client.app.state.session_factory()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def db_session(settings):
    engine = build_engine(settings)
    create_schema(engine)
    db = build_session_factory(engine)()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


def make_user(db, email: str, role: Role = Role.STUDENT, name: str = 'Test User', password: str = 'password123') -> User:
    user = User(name=name, email=email, hashed_password=hash_password(password), role=role)
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def make_resource(db, creator_id: int, title: str = 'Intro to Soroban') -> Resource:
    resource = Resource(
        title=title,
        content='Smart contracts on Stellar.',
        language='en',
        format='article',
        creator_id=creator_id,
    )
    db.add(resource)
    db.commit()
    db.refresh(resource)
    return resource


def bearer(token: str) -> dict:
    return {'Authorization': f'Bearer {token}'}


@pytest.fixture
def register(client):
    def _register(name: str, email: str, password: str = 'password123', role: str = 'Student'):
        return client.post(
            '/auth/register',
            json={'name': name, 'email': email, 'password': password, 'role': role},
        )

    return _register


@pytest.fixture
def register_and_get_token(register):
    def _register_and_get_token(name: str, email: str, password: str = 'password123', role: str = 'Student') -> str:
        response = register(name, email, password, role)
        assert response.status_code == 201, response.text
        return response.json()['data']['token']

    return _register_and_get_token


@pytest.fixture
def auth_headers(register_and_get_token):
    return bearer(register_and_get_token('Current User', 'current@test.com'))


@pytest.fixture
def user_factory():
    return make_user


@pytest.fixture
def resource_factory():
    return make_resource
