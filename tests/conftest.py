"""Shared fixtures: an in-memory store per test and a client wired to it."""

import os

os.environ["ENVIRONMENT"] = "test"
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["SECRET_KEY"] = "test-secret-key-long-enough-for-hs256-signing"
os.environ["BCRYPT_ROUNDS"] = "4"

from typing import Callable, Dict, Generator

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from justvibe.db.base import Base
from justvibe.db.models import Identity, UserProfile
from justvibe.db.session import build_engine, get_db
from justvibe.main import app
from justvibe.services.identity_provider import identity_provider
from justvibe.services.storage import LocalBlobStore, get_blob_store


@pytest.fixture
def engine():
    # StaticPool keeps every session on the same in-memory database
    engine = build_engine("sqlite://", poolclass=StaticPool)
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def session_factory(engine) -> sessionmaker:
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory) -> Generator[Session, None, None]:
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def blob_store(tmp_path) -> LocalBlobStore:
    return LocalBlobStore(str(tmp_path / "uploads"), "/uploads")


@pytest.fixture
def client(session_factory, blob_store) -> Generator[TestClient, None, None]:
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_blob_store] = lambda: blob_store
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def make_user(db) -> Callable[..., Identity]:
    """Create an identity with a profile directly in the store."""

    def _make(username: str = "alice", email: str = None, password: str = "password1") -> Identity:
        identity = identity_provider.create_user(db, email or f"{username}@x.com", password)
        db.add(UserProfile(id=identity.id, username=username))
        db.commit()
        return identity

    return _make


@pytest.fixture
def register(client) -> Callable[..., Dict[str, str]]:
    """Register and sign in through the API, returning auth headers."""

    def _register(username: str = "alice", email: str = None, password: str = "password1") -> Dict[str, str]:
        email = email or f"{username}@x.com"
        response = client.post(
            "/users/insert",
            json={"username": username, "email": email, "password": password},
        )
        assert response.text == "200::Registration successful!"
        response = client.post("/users/signin", json={"email": email, "password": password})
        code, token = response.text.split("::", 1)
        assert code == "200"
        return {"Authorization": token}

    return _register


@pytest.fixture
def auth_headers(register) -> Dict[str, str]:
    return register()
