# tests/conftest.py
import os

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

# La configuración se lee al importar app.main
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["SECRET_KEY"] = "test-secret-key"
os.environ["AUTO_CREATE_TABLES"] = "false"

from app.main import app  # noqa: E402
from app.config.database import Base, get_db  # noqa: E402
from app.core.auth.security import create_access_token, get_password_hash  # noqa: E402
from app.shared.database.models import User  # noqa: E402


# =========================================
# Base de datos en memoria, nueva por test
# =========================================
@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    try:
        yield engine
    finally:
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client(session_factory):
    def get_db_override():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = get_db_override
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


# =========================================
# Usuarios y tokens
# =========================================
def _make_user(db, username: str, role: str, is_active: bool = True) -> User:
    user = User(
        username=username,
        email=f"{username}@wms.test",
        password_hash=get_password_hash("secret123"),
        role=role,
        is_active=is_active,
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def _headers_for(user: User) -> dict:
    token = create_access_token({
        "user_id": user.id,
        "username": user.username,
        "role": user.role,
    })
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def make_user(db):
    def _factory(username: str, role: str = "worker", is_active: bool = True) -> User:
        return _make_user(db, username, role, is_active)
    return _factory


@pytest.fixture
def worker_headers(db):
    return _headers_for(_make_user(db, "worker", "worker"))


@pytest.fixture
def admin_headers(db):
    return _headers_for(_make_user(db, "admin", "admin"))


@pytest.fixture
def headers_for():
    return _headers_for
