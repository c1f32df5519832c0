"""
Test configuration and fixtures.
"""
import os
from typing import Callable, Generator

import pytest

# Settings are read once at import time, so configure them before importing the app
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["JWT_SECRET_KEY"] = "flowops-test-secret-key-0123456789abcdef"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ.pop("SYSTEM_ADMIN_PASSWORD", None)

from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from flowops.main import app
from flowops.core.policy import Principal
from flowops.core.security import create_access_token, hash_password
from flowops.db.base import Base
from flowops.db.session import enable_sqlite_foreign_keys, get_db
from flowops.models.user import User

TEST_PASSWORD = "password123"


@pytest.fixture(scope="function")
def db() -> Generator[Session, None, None]:
    """Fresh in-memory database per test."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    enable_sqlite_foreign_keys(engine)
    Base.metadata.create_all(bind=engine)
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        engine.dispose()


@pytest.fixture(scope="function")
def client(db: Session) -> Generator[TestClient, None, None]:
    """Create test client with database session override."""
    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db

    with TestClient(app) as c:
        yield c

    app.dependency_overrides.clear()


@pytest.fixture
def make_user(db: Session) -> Callable[..., User]:
    """Factory for users; active employees of Bison Den unless told otherwise."""
    counter = {"n": 0}

    def _make_user(
        name: str = None,
        role: str = "employee",
        establishment: str = "Bison Den",
        status: str = "active",
        is_system_admin: bool = False,
        password: str = TEST_PASSWORD,
    ) -> User:
        counter["n"] += 1
        username = f"user{counter['n']}"
        user = User(
            name=name or f"User {counter['n']}",
            email=f"{username}@example.com",
            username=username,
            hashed_password=hash_password(password),
            role=role,
            status=status,
            establishment=establishment,
            is_system_admin=is_system_admin,
        )
        db.add(user)
        db.commit()
        db.refresh(user)
        return user

    return _make_user


def headers_for(user: User) -> dict:
    """Bearer headers for ``user``."""
    return {"Authorization": f"Bearer {create_access_token(subject=str(user.id))}"}


@pytest.fixture
def manager(make_user) -> User:
    return make_user(name="Maria Manager", role="manager")


@pytest.fixture
def lead(make_user) -> User:
    return make_user(name="Leo Lead", role="lead")


@pytest.fixture
def employee(make_user) -> User:
    return make_user(name="Eve Employee", role="employee")


@pytest.fixture
def other_manager(make_user) -> User:
    """Manager of a different establishment."""
    return make_user(name="Carl Cafe", role="manager", establishment="Trailblazer Café")


@pytest.fixture
def system_admin(make_user) -> User:
    return make_user(name="System Admin", role="admin", establishment="Global", is_system_admin=True)


@pytest.fixture
def manager_headers(manager: User) -> dict:
    return headers_for(manager)


@pytest.fixture
def employee_headers(employee: User) -> dict:
    return headers_for(employee)


@pytest.fixture
def other_headers(other_manager: User) -> dict:
    return headers_for(other_manager)


@pytest.fixture
def admin_headers(system_admin: User) -> dict:
    return headers_for(system_admin)


def principal_of(user: User) -> Principal:
    return Principal.from_user(user)


@pytest.fixture
def auth() -> Callable[[User], dict]:
    """``auth(user)`` -> bearer headers."""
    return headers_for
