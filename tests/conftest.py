"""
Pytest fixtures for DevConnector tests.

Every test gets a fresh in-memory SQLite database. Environment defaults
are set before any ``devconnector`` import so the cached settings pick
them up.
"""

import os

os.environ.setdefault("ENV", "test")
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("JWT_SECRET_KEY", "test-secret-key-that-is-at-least-32-characters")
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("CREATE_TABLES_ON_STARTUP", "true")

import pytest  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from devconnector.config import get_settings  # noqa: E402
from devconnector.db import Base, enable_sqlite_foreign_keys  # noqa: E402
from devconnector.models import User  # noqa: E402
from devconnector.security import gravatar_url, hash_password  # noqa: E402


@pytest.fixture(scope="function")
def test_db():
    """Create a fresh in-memory database for each test."""
    db_url = "sqlite://"
    engine = create_engine(
        db_url,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    enable_sqlite_foreign_keys(engine)

    Base.metadata.create_all(bind=engine)

    TestingSessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False)

    yield db_url, TestingSessionLocal, engine

    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def test_session(test_db):
    """Get a test session from the test database."""
    _, TestingSessionLocal, _ = test_db
    session = TestingSessionLocal()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


@pytest.fixture
def settings():
    return get_settings()


@pytest.fixture
def sample_profile():
    """Upsert payload in the shape the profile form submits."""
    return {
        "status": "Developer",
        "skills": "python, fastapi, sql",
        "company": "Acme",
        "location": "Berlin",
        "bio": "Backend developer",
        "githubusername": "octocat",
        "twitter": "https://twitter.com/octocat",
    }


@pytest.fixture
def sample_experience():
    return {"title": "Eng", "company": "Acme", "from": "2020-01-01", "location": "Remote"}


@pytest.fixture
def sample_education():
    return {
        "school": "State University",
        "degree": "BSc",
        "fieldofstudy": "Computer Science",
        "from": "2012-09-01",
        "to": "2016-06-30",
    }


@pytest.fixture
def user_factory(test_session):
    """Insert users with a real bcrypt hash."""

    def _create(email="tester@example.com", password="secret1", name="Tester"):
        user = User(
            name=name,
            email=email,
            password=hash_password(password, rounds=4),
            avatar=gravatar_url(email),
        )
        test_session.add(user)
        test_session.flush()
        return user

    return _create
