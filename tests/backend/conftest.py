from collections.abc import Callable, Iterator

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session, sessionmaker

from backend.app.main import create_app
from devconnector.db import get_db


@pytest.fixture
def test_app_client(test_db) -> Iterator[tuple[TestClient, sessionmaker]]:
    db_url, TestingSessionLocal, engine = test_db

    app = create_app()

    def override_get_db() -> Iterator[Session]:
        db = TestingSessionLocal()
        try:
            yield db
            db.commit()  # Auto-commit on success like production
        except Exception:
            db.rollback()
            raise
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db

    with TestClient(app) as client:
        yield client, TestingSessionLocal


def register_user(
    client: TestClient,
    email: str = "a@x.com",
    password: str = "secret1",
    name: str = "User A",
) -> str:
    """Register through the API and return the issued token."""
    resp = client.post("/api/v1/users", json={"name": name, "email": email, "password": password})
    assert resp.status_code == 200, resp.text
    return resp.json()["token"]


def bearer(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def authorized_client(
    test_app_client,
) -> Iterator[tuple[TestClient, dict[str, str], sessionmaker]]:
    """A client plus auth headers for a freshly registered user."""
    client, TestingSessionLocal = test_app_client
    token = register_user(client)
    yield client, bearer(token), TestingSessionLocal


@pytest.fixture
def make_user(test_app_client) -> Callable[..., dict[str, str]]:
    """Factory registering additional users; returns their auth headers."""
    client, _ = test_app_client

    def _make(email: str, password: str = "secret1", name: str = "Other") -> dict[str, str]:
        return bearer(register_user(client, email=email, password=password, name=name))

    return _make
