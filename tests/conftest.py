"""
Pytest fixtures for research portal tests.

Every test gets a fresh in-memory SQLite database. The `portal` fixture
seeds a small department:

    users     alice, bob (students), fiona, george (faculty), ada (admin)
    projects  traffic  members=alice        advisors=fiona
              solar    members=bob          advisors=george   reviewer=fiona
              campus   members=alice, bob   advisors=fiona, george
    papers    attention  authors=alice  advisors=fiona   PUBLISH
              inverter   authors=bob    advisors=george  PENDING
              grid       authors=bob    advisors=george  REJECT
    achievements  award (home page), hackathon (hidden)
"""

import os
import uuid
from datetime import datetime, timedelta
from types import SimpleNamespace
from typing import AsyncGenerator, Callable, Dict

os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["SECRET_KEY"] = "test-secret-key-for-testing-only-0123456789"

from research_portal.config import get_settings
get_settings.cache_clear()

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker
from sqlalchemy.pool import StaticPool

from research_portal.database import get_db
from research_portal.kernel.identity.jwt import JWTManager
from research_portal.kernel.models import (
    Achievement,
    Base,
    Paper,
    PaperStatus,
    Project,
    ProjectStatus,
    ReviewerStatus,
    User,
    UserRole,
)

BASE_TIME = datetime(2024, 1, 1, 9, 0, 0)


def at(minutes: int) -> datetime:
    """Deterministic timestamp, `minutes` after BASE_TIME."""
    return BASE_TIME + timedelta(minutes=minutes)


@pytest_asyncio.fixture
async def db_engine():
    """Fresh in-memory database; StaticPool keeps the single connection alive."""
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        echo=False,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest.fixture
def session_maker(db_engine) -> async_sessionmaker:
    return async_sessionmaker(
        db_engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


@pytest_asyncio.fixture
async def db_session(session_maker) -> AsyncGenerator[AsyncSession, None]:
    async with session_maker() as session:
        yield session


def make_user(name: str, role: UserRole, minutes: int, **kwargs) -> User:
    first = name.split()[0].lower()
    return User(
        id=uuid.uuid4(),
        name=name,
        email=f"{first}@portal.example.edu",
        user_type=role.value,
        created_at=at(minutes),
        updated_at=at(minutes),
        **kwargs,
    )


def make_project(title: str, members, advisors, minutes: int, **kwargs) -> Project:
    kwargs.setdefault("description", f"{title} description")
    kwargs.setdefault("status", ProjectStatus.UPLOAD.value)
    kwargs.setdefault("reviewer_status", ReviewerStatus.PENDING.value)
    return Project(
        id=uuid.uuid4(),
        title=title,
        project_tags=[],
        members=list(members),
        faculty_advisors=list(advisors),
        start_date=at(minutes),
        created_at=at(minutes),
        updated_at=at(minutes),
        **kwargs,
    )


def make_paper(title: str, authors, advisors, minutes: int, **kwargs) -> Paper:
    kwargs.setdefault("abstract", f"Abstract of {title}")
    kwargs.setdefault("keywords", [])
    kwargs.setdefault("status", PaperStatus.PENDING.value)
    kwargs.setdefault("reviewer_status", ReviewerStatus.PENDING.value)
    return Paper(
        id=uuid.uuid4(),
        title=title,
        file_path=f"papers/{title.lower().replace(' ', '-')}.pdf",
        authors=list(authors),
        faculty_advisors=list(advisors),
        submission_date=at(minutes),
        created_at=at(minutes),
        updated_at=at(minutes),
        **kwargs,
    )


@pytest_asyncio.fixture
async def portal(db_session: AsyncSession) -> SimpleNamespace:
    """Seed the department described in the module docstring."""
    alice = make_user("Alice Rahman", UserRole.STUDENT, 0, department="CSE", is_verified=True)
    bob = make_user("Bob Chen", UserRole.STUDENT, 1, department="EEE", is_verified=False)
    fiona = make_user("Fiona Das", UserRole.FACULTY, 2, department="CSE", is_verified=True)
    george = make_user("George Idris", UserRole.FACULTY, 3, department="EEE", is_verified=True)
    ada = make_user("Ada Lovelace", UserRole.ADMIN, 4, is_verified=True)

    traffic = make_project(
        "Graph Networks for Traffic",
        members=[alice],
        advisors=[fiona],
        minutes=10,
        project_type="RESEARCH",
        status=ProjectStatus.ONGOING.value,
    )
    solar = make_project(
        "Solar Microgrid Controller",
        members=[bob],
        advisors=[george],
        minutes=11,
        project_type="DEVELOPMENT",
        reviewer=fiona,
        reviewer_status=ReviewerStatus.ACCEPTED.value,
    )
    campus = make_project(
        "Campus Energy Dashboard",
        members=[alice, bob],
        advisors=[fiona, george],
        minutes=12,
        project_type="DESIGN",
        status=ProjectStatus.COMPLETED.value,
        reviewer_status=ReviewerStatus.NEEDS_UPDATES.value,
    )

    attention = make_paper(
        "Attention in Traffic Forecasting",
        authors=[alice],
        advisors=[fiona],
        minutes=20,
        keywords=["deep learning", "traffic"],
        status=PaperStatus.PUBLISH.value,
        reviewer_status=ReviewerStatus.ACCEPTED.value,
    )
    inverter = make_paper(
        "Inverter Efficiency Study",
        authors=[bob],
        advisors=[george],
        minutes=21,
        keywords=["power electronics"],
    )
    grid = make_paper(
        "Grid Stability under Load",
        authors=[bob],
        advisors=[george],
        minutes=22,
        status=PaperStatus.REJECT.value,
        reviewer_status=ReviewerStatus.REJECTED.value,
    )

    award = Achievement(
        id=uuid.uuid4(),
        title="Best Paper Award",
        description="Awarded at the regional symposium",
        category="AWARD",
        home_page_visibility=True,
        created_at=at(30),
        updated_at=at(30),
    )
    hackathon = Achievement(
        id=uuid.uuid4(),
        title="Hackathon Winners",
        description="First place in the national hackathon",
        category="COMPETITION",
        home_page_visibility=False,
        created_at=at(31),
        updated_at=at(31),
    )

    db_session.add_all([
        alice, bob, fiona, george, ada,
        traffic, solar, campus,
        attention, inverter, grid,
        award, hackathon,
    ])
    await db_session.commit()

    return SimpleNamespace(
        alice=alice,
        bob=bob,
        fiona=fiona,
        george=george,
        ada=ada,
        traffic=traffic,
        solar=solar,
        campus=campus,
        attention=attention,
        inverter=inverter,
        grid=grid,
        award=award,
        hackathon=hackathon,
    )


@pytest.fixture
def jwt_manager() -> JWTManager:
    """JWT manager using the test secret."""
    return JWTManager(
        secret_key="test-secret-key-for-testing-only-0123456789",
        algorithm="HS256",
        access_token_expire_minutes=30,
    )


@pytest.fixture
def auth_headers(jwt_manager: JWTManager) -> Callable[[User], Dict[str, str]]:
    """Build Authorization headers for a seeded user."""

    def _headers(user: User) -> Dict[str, str]:
        token, _, _ = jwt_manager.create_access_token(
            user_id=user.id,
            role=str(UserRole(user.user_type).value),
            email=user.email,
        )
        return {"Authorization": f"Bearer {token}"}

    return _headers


@pytest_asyncio.fixture
async def client(session_maker) -> AsyncGenerator[AsyncClient, None]:
    """Async client whose requests use the test database."""

    async def override_get_db() -> AsyncGenerator[AsyncSession, None]:
        async with session_maker() as session:
            yield session

    from research_portal.main import app

    app.dependency_overrides[get_db] = override_get_db
    try:
        async with AsyncClient(
            transport=ASGITransport(app=app),
            base_url="http://test",
        ) as ac:
            yield ac
    finally:
        app.dependency_overrides.pop(get_db, None)
