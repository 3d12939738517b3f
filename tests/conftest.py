"""
Pytest configuration and fixtures for testing.

This file provides reusable test fixtures for:
- Database setup/teardown
- FastAPI test client
- Seeded companies, jobs and users with their tokens
"""

import os

# Cheap hashing and readable logs for the test run; read when settings load
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("JSON_LOGS", "false")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.core.database import Base, get_db, run_query
from app.core.security import create_user_token
from app.crud import company as company_crud
from app.crud import job as job_crud
from app.crud import user as user_crud
from app.models import Company, Job, User  # noqa: F401 - register tables
from main import app


# Use in-memory SQLite for testing (fast, isolated)
SQLALCHEMY_TEST_DATABASE_URL = "sqlite:///:memory:"

engine = create_engine(
    SQLALCHEMY_TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@event.listens_for(engine, "connect")
def _enable_foreign_keys(dbapi_connection, connection_record):
    """SQLite only enforces REFERENCES (and ON DELETE CASCADE) when asked to."""
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


@pytest.fixture
def db_session():
    """
    Create a fresh database session for each test.
    Tables are dropped after the test completes.
    """
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def seeded_db(db_session):
    """
    Companies c1..c3 and jobs J1..J3.

    J3 offers zero equity and no salary, so it drops out of the
    hasEquity and minSalary filters.
    """
    for n in (1, 2, 3):
        company_crud.create(
            db_session,
            handle=f"c{n}",
            name=f"C{n}",
            description=f"Desc{n}",
            num_employees=n,
            logo_url=f"http://c{n}.img",
        )

    job_crud.create(db_session, title="J1", salary=100, equity="0.01", company_handle="c1")
    job_crud.create(db_session, title="J2", salary=200, equity="0.02", company_handle="c2")
    job_crud.create(db_session, title="J3", salary=None, equity="0", company_handle="c1")

    return db_session


@pytest.fixture
def job_ids(seeded_db):
    """Ids of the seeded jobs keyed by title."""
    rows = run_query(seeded_db, "SELECT id, title FROM jobs")
    return {row["title"]: row["id"] for row in rows}


@pytest.fixture
def users(seeded_db):
    """A regular user u1 and an admin."""
    u1 = user_crud.register(
        seeded_db,
        username="u1",
        password="password1",
        first_name="U1F",
        last_name="U1L",
        email="user1@example.com",
    )
    admin = user_crud.register(
        seeded_db,
        username="admin",
        password="password2",
        first_name="AdminF",
        last_name="AdminL",
        email="admin@example.com",
        is_admin=True,
    )
    return {"u1": u1, "admin": admin}


@pytest.fixture
def u1_headers(users):
    return {"Authorization": f"Bearer {create_user_token(users['u1'])}"}


@pytest.fixture
def admin_headers(users):
    return {"Authorization": f"Bearer {create_user_token(users['admin'])}"}


@pytest.fixture
def client(db_session):
    """
    FastAPI test client with overridden database dependency.
    """
    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()
