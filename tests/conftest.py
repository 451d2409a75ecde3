"""Shared fixtures and utilities for tests."""

import os

# Settings and the engine are built at import time, so the environment has
# to be in place before any application module is imported.
os.environ["APP_ENV"] = "test"
os.environ["DATABASE_URL"] = "sqlite+aiosqlite://"
os.environ.setdefault("JWT_SECRET_KEY", "test-jwt-secret-key-min-32-chars-long-for-security")
os.environ.setdefault("JWT_ALGORITHM", "HS256")
os.environ.setdefault("CELERY_BROKER_URL", "memory://")
os.environ.setdefault("CELERY_RESULT_BACKEND", "cache+memory://")
os.environ.setdefault("JSON_LOGS", "false")
os.environ["POST_PROCESSING_ENABLED"] = "false"
os.environ.pop("NUMBER_OF_QUESTIONS_IN_INTERVIEW", None)

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from api.main import app
from core.security import create_access_token
from database.engine import Base, get_db
from database.models.interviews import Interview
from database.models.jobs import Job
from database.models.questions import Question, QuestionSkill

TEST_USER_ID = 42


@pytest.fixture
async def engine():
    """In-memory SQLite engine shared by every session in a test."""
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def db_session(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
async def client(session_factory):
    """HTTP client bound to the app with the test database."""

    async def override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


@pytest.fixture
def user_id():
    return TEST_USER_ID


@pytest.fixture
def auth_headers(user_id):
    token = create_access_token(user_id, email="candidate@example.com")
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
async def question_bank(db_session):
    """Five bank questions with skill tags."""
    specs = [
        ("Explain a JOIN.", "technical", "databases", ["sql"]),
        ("Tune a slow query.", "technical", "databases", ["sql", "postgres"]),
        ("Describe a conflict you resolved.", "behavioral", "teamwork", ["communication"]),
        ("Design a REST API.", "technical", "backend", ["python", "api"]),
        ("Write a window function.", "technical", "databases", ["sql"]),
    ]
    questions = []
    for text, qtype, category, skills in specs:
        question = Question(
            question=text,
            type=qtype,
            category=category,
            skills=[QuestionSkill(skill=s) for s in skills],
        )
        db_session.add(question)
        questions.append(question)
    await db_session.commit()
    return questions


@pytest.fixture
def make_job(db_session):
    """Factory persisting a job with optional job-specific questions."""

    async def _make_job(skills=None, job_questions=None, title="Backend Engineer"):
        job = Job(
            title=title,
            skills_required=skills or [],
            questions=[Question(type=t, question=q) for t, q in (job_questions or [])],
        )
        db_session.add(job)
        await db_session.commit()
        return job

    return _make_job


@pytest.fixture
def fetch_interview(session_factory):
    """Read an interview through a fresh session."""

    async def _fetch(user_id, job_id):
        async with session_factory() as session:
            result = await session.execute(
                select(Interview).where(Interview.user_id == user_id, Interview.job_id == job_id)
            )
            return result.scalar_one_or_none()

    return _fetch


@pytest.fixture
def count_interview_rows(session_factory):

    async def _count():
        async with session_factory() as session:
            result = await session.execute(select(Interview))
            return len(result.scalars().all())

    return _count
