import os
import re
import sys

# Add the current directory to Python path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

os.environ.setdefault("LOG_JSON", "false")
os.environ.setdefault("LOG_LEVEL", "WARNING")

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

import student_registry.db.base  # noqa: F401
from student_registry.db.base_class import Base
from student_registry.models.student import Student

SAMPLE_NAMES = [
    "Alice Lima",
    "Bruno Alves",
    "Clara Dias",
    "Diego Nogueira",
    "Eduarda Pires",
    "Felipe Costa",
    "Gabriela Rocha",
    "Heitor Souza",
    "Isabela Martins",
    "Joao Pereira",
]


# Create an in-memory SQLite database for testing
@pytest.fixture(scope="session")
def engine():
    """Create an in-memory SQLite database for testing."""
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="session")
def TestingSessionLocal(engine):
    """Create a session factory for the test database."""
    return sessionmaker(bind=engine, autoflush=False, autocommit=False)


# Override the database dependency to use our test database
@pytest.fixture
def override_get_db(TestingSessionLocal):
    """Override the database dependency to use our test database."""
    def _override_get_db():
        session = TestingSessionLocal()
        try:
            yield session
        finally:
            session.close()
    return _override_get_db


@pytest.fixture
def db_session(TestingSessionLocal):
    """Create a database session for each test; empties the table afterwards."""
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.rollback()
        session.query(Student).delete()
        session.commit()
        session.close()


@pytest.fixture
def fresh_session(TestingSessionLocal):
    """A second session, to check what was really committed."""
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client(override_get_db):
    """Create a test client for the web and API routes."""
    from fastapi.testclient import TestClient
    from student_registry.db import get_db
    from student_registry.main import app

    app.dependency_overrides[get_db] = override_get_db

    with TestClient(app) as client:
        yield client

    app.dependency_overrides.clear()


@pytest.fixture
def csrf_token(client):
    """Fetch a form page so the session holds an anti-forgery token, and return it."""
    response = client.get("/students/create")
    match = re.search(r'name="csrf_token" value="([^"]+)"', response.text)
    assert match, "csrf token not rendered"
    return match.group(1)


def make_student(student_id: int) -> Student:
    return Student(
        id=student_id,
        name=SAMPLE_NAMES[(student_id - 1) % len(SAMPLE_NAMES)],
        email=f"student{student_id}@gmail.com",
        mobile=str(9000000000 + student_id),
    )


@pytest.fixture
def add_students(db_session):
    """Insert students with the given ids and return them."""
    def _add(*ids: int) -> list[Student]:
        rows = [make_student(i) for i in ids]
        db_session.add_all(rows)
        db_session.commit()
        return rows
    return _add
