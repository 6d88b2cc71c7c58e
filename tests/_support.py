"""Shared helpers: isolated SQLite in-memory databases and an app client bound to one."""

from collections.abc import Generator

from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from questlog.core.database import get_db
from questlog.main import app
from questlog.models import Base


def make_session_factory() -> sessionmaker:
    """
    Fresh in-memory database with every table created.

    StaticPool keeps a single connection so TestClient's worker threads all
    see the same in-memory schema.
    """
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


def make_client() -> TestClient:
    """TestClient whose get_db dependency is backed by a private in-memory database."""
    factory = make_session_factory()

    def _override_get_db() -> Generator[Session, None, None]:
        db = factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = _override_get_db
    return TestClient(app)


def clear_overrides() -> None:
    app.dependency_overrides.clear()


def register_and_login(client: TestClient, username: str, password: str = "s3cret-pass") -> dict:
    """Register a user, log in, and return the login JSON body."""
    resp = client.post(
        "/api/auth/register",
        json={"username": username, "email": f"{username}@example.com", "password": password},
    )
    assert resp.status_code == 201, resp.text
    resp = client.post("/api/auth/login", json={"username": username, "password": password})
    assert resp.status_code == 200, resp.text
    return resp.json()


def bearer(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}
