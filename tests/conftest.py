import base64

import pytest
from fastapi.testclient import TestClient

from course_api.auth.passwords import hash_password
from course_api.core import config
from course_api.database import Store
from course_api.main import create_app
from course_api.models.course import Course
from course_api.models.user import User


@pytest.fixture(autouse=True)
def fast_hashing(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(config, 'BCRYPT_ROUNDS', 4)


@pytest.fixture
def store(tmp_path):
    test_store = Store(f"sqlite:///{tmp_path / 'test.db'}")
    test_store.connect()
    test_store.create_schema()
    try:
        yield test_store
    finally:
        test_store.disconnect()


@pytest.fixture
def db(store):
    with store.session() as session:
        yield session


@pytest.fixture
def make_user(db):
    def _make_user(
        email_address: str = 'a@x.com',
        password: str = 'password123',
        first_name: str = 'Ada',
        last_name: str = 'Lovelace',
    ) -> User:
        user = User(
            first_name=first_name,
            last_name=last_name,
            email_address=email_address,
            password=hash_password(password),
        )
        db.add(user)
        db.commit()
        db.refresh(user)
        return user

    return _make_user


@pytest.fixture
def make_course(db):
    def _make_course(user_id: int | None, title: str = 'Intro to Python', description: str = 'Basics') -> Course:
        course = Course(title=title, description=description, user_id=user_id)
        db.add(course)
        db.commit()
        db.refresh(course)
        return course

    return _make_course


@pytest.fixture
def client(store):
    return TestClient(create_app(store), raise_server_exceptions=False)


@pytest.fixture
def auth_header():
    def _auth_header(email_address: str, password: str) -> dict[str, str]:
        token = base64.b64encode(f'{email_address}:{password}'.encode()).decode()
        return {'Authorization': f'Basic {token}'}

    return _auth_header
