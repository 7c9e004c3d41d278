"""Shared fixtures: in-memory database, API client and authenticated users."""

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel, Session, create_engine

import journal.models  # noqa: F401
from journal.database import get_session
from journal.main import app
from journal.models.user import User
from journal.services.auth import create_access_token, generate_totp_secret, hash_password

PASSWORD = "correct horse battery staple"


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(engine)
    yield engine
    SQLModel.metadata.drop_all(engine)


@pytest.fixture
def session(engine):
    with Session(engine) as session:
        yield session


@pytest.fixture
def client(engine):
    def _get_session():
        with Session(engine) as session:
            yield session

    app.dependency_overrides[get_session] = _get_session
    # No context manager: the lifespan would create the configured on-disk database
    yield TestClient(app)
    app.dependency_overrides.clear()


def make_user(session: Session, username: str, is_active: bool = True) -> User:
    user = User(
        username=username,
        hashed_password=hash_password(PASSWORD),
        totp_secret=generate_totp_secret(),
        is_active=is_active,
    )
    session.add(user)
    session.commit()
    session.refresh(user)
    return user


def bearer(user: User) -> dict[str, str]:
    return {"Authorization": f"Bearer {create_access_token(user.username)}"}


@pytest.fixture
def alice(session) -> User:
    return make_user(session, "alice")


@pytest.fixture
def bob(session) -> User:
    return make_user(session, "bob")


@pytest.fixture
def alice_headers(alice) -> dict[str, str]:
    return bearer(alice)
