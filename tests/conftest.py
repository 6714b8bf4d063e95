"""Pytest configuration and shared fixtures."""

import os
from datetime import date
from types import SimpleNamespace
from typing import AsyncGenerator
from unittest.mock import AsyncMock, patch

# Settings are read at import time, so the environment must be ready first
os.environ.setdefault("API_TITLE", "Thesis Registry Test")
os.environ.setdefault("API_VERSION", "0.1.0-test")
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("DEBUG", "False")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("RUN_MIGRATIONS", "False")

import pytest  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.ext.asyncio import (  # noqa: E402
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
)

from thesis_registry import models  # noqa: E402,F401
from thesis_registry.application import create_app  # noqa: E402
from thesis_registry.config import Settings, get_settings  # noqa: E402
from thesis_registry.models.thesis import ThesisType  # noqa: E402
from thesis_registry.services.institute_service import InstituteService  # noqa: E402
from thesis_registry.services.person_service import PersonService  # noqa: E402
from thesis_registry.services.subject_topic_service import (  # noqa: E402
    SubjectTopicService,
)
from thesis_registry.services.university_service import (  # noqa: E402
    UniversityService,
)
from thesis_registry.utils.db import Base, build_engine, get_db_session  # noqa: E402


@pytest.fixture
def settings() -> Settings:
    """Settings instance built from the test environment."""
    return get_settings()


@pytest.fixture
async def engine(tmp_path) -> AsyncGenerator[AsyncEngine, None]:
    """On-disk SQLite engine with a fresh schema for each test."""
    test_engine = build_engine(f"sqlite+aiosqlite:///{tmp_path / 'registry.db'}")
    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield test_engine
    await test_engine.dispose()


@pytest.fixture
async def db_session(engine: AsyncEngine) -> AsyncGenerator[AsyncSession, None]:
    """Database session for one test."""
    session_factory = async_sessionmaker(
        engine, class_=AsyncSession, expire_on_commit=False
    )
    async with session_factory() as session:
        yield session
        await session.rollback()


@pytest.fixture
def app(db_session: AsyncSession):
    """FastAPI application wired to the test session."""
    with (
        patch("thesis_registry.application.init_db", new_callable=AsyncMock),
        patch("thesis_registry.application.close_db", new_callable=AsyncMock),
    ):
        application = create_app()

        async def override_get_db_session():
            yield db_session

        application.dependency_overrides[get_db_session] = override_get_db_session
        yield application
        application.dependency_overrides.clear()


@pytest.fixture
async def api_client(app) -> AsyncGenerator[AsyncClient, None]:
    """Async HTTP client talking to the app in-process."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.fixture
async def registry(db_session: AsyncSession) -> SimpleNamespace:
    """Reference data most thesis tests need.

    One university with one institute, three people and three subject topics.
    """
    university = await UniversityService(db_session).create(
        name="Ankara University", country="Turkey", city="Ankara"
    )
    institute = await InstituteService(db_session).create(
        name="Graduate School of Natural Sciences", university_id=university.id
    )
    people_service = PersonService(db_session)
    author = await people_service.create(
        first_name="Ayse", last_name="Yilmaz", email="ayse@example.com"
    )
    supervisor = await people_service.create(
        first_name="Mehmet", last_name="Demir", email="mehmet@example.com"
    )
    co_supervisor = await people_service.create(
        first_name="Elif", last_name="Kaya", email="elif@example.com"
    )
    topic_service = SubjectTopicService(db_session)
    topics = [
        await topic_service.create(topic_name=name)
        for name in ("Computer Engineering", "Mathematics", "Physics")
    ]
    # Plain ids survive the rollbacks some tests provoke
    return SimpleNamespace(
        university_id=university.id,
        institute_id=institute.id,
        author_id=author.id,
        supervisor_id=supervisor.id,
        co_supervisor_id=co_supervisor.id,
        topic_ids=[topic.id for topic in topics],
    )


@pytest.fixture
def thesis_fields(registry: SimpleNamespace) -> dict:
    """Scalar fields of a valid thesis pointing at the registry fixture."""
    return {
        "title": "Graph Neural Networks for Citation Analysis",
        "abstract": "We study citation graphs with message passing networks.",
        "author_id": registry.author_id,
        "year": 2022,
        "type": ThesisType.MASTER,
        "university_id": registry.university_id,
        "institute_id": registry.institute_id,
        "num_pages": 120,
        "language": "English",
        "submission_date": date(2022, 6, 15),
    }
