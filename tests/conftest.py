"""Shared test fixtures and configuration for festival-finder test suite."""

import datetime
from typing import AsyncGenerator

import pytest
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine

from festival_finder.models import Base, Event, Musician, Teacher
from festival_finder.search.engine import SearchEngine


@pytest.fixture
async def async_db_engine():
    """Create an in-memory SQLite database engine for testing.

    Returns:
        AsyncEngine: SQLAlchemy async engine connected to in-memory database.
    """
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        echo=False,
        pool_pre_ping=True,
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest.fixture
async def async_db_session(
    async_db_engine,
) -> AsyncGenerator[AsyncSession, None]:
    """Create an async database session for testing.

    Args:
        async_db_engine: The async database engine fixture.

    Yields:
        AsyncSession: SQLAlchemy async session for database operations.
    """
    async with AsyncSession(async_db_engine, expire_on_commit=False) as session:
        yield session
        await session.commit()


@pytest.fixture
def sample_teachers() -> list[Teacher]:
    """Create sample Teacher objects for testing."""
    return [
        Teacher(
            id=1,
            name="Damon Stone",
            bio="Blues teacher based in Chicago",
            image_url="/uploads/teachers/damon.jpg",
        ),
        Teacher(id=2, name="Joanna Lucero", bio="Teaches fusion and blues"),
        Teacher(id=3, name="Mike Legett", bio="Solo jazz specialist"),
    ]


@pytest.fixture
def sample_musicians() -> list[Musician]:
    """Create sample Musician objects for testing."""
    return [
        Musician(
            id=1,
            name="Blue Moon Trio",
            slug="blue-moon-trio",
            bio="Chicago blues band",
            instruments=["piano", "bass", "drums"],
            verified=True,
        ),
        Musician(id=2, name="Dana Swing", slug="dana-swing", bio="Jazz vocalist"),
    ]


@pytest.fixture
def sample_events(sample_teachers, sample_musicians) -> list[Event]:
    """Create a varied set of events for relevance, filter and paging tests.

    Three headline events ("Mountain Blues", "Stone Jazz", "Desert Swing"),
    seven Berlin events and a few others. "Mountain" appears only in the
    first event's name and in one other event's description.
    """
    damon, joanna, mike = sample_teachers
    trio, dana = sample_musicians
    events = [
        Event(
            id=1,
            name="Mountain Blues",
            description="A weekend of blues in the Alps",
            from_date=datetime.date(2025, 3, 14),
            to_date=datetime.date(2025, 3, 16),
            city="Innsbruck",
            country="Austria",
            style="Blues",
            image_url="/uploads/2025/mountain.jpg",
            teachers=[damon],
            musicians=[trio],
        ),
        Event(
            id=2,
            name="Stone Jazz",
            description="Solo jazz intensive",
            from_date=datetime.date(2025, 5, 2),
            to_date=datetime.date(2025, 5, 4),
            city="London",
            country="United Kingdom",
            style="Solo Jazz",
            teachers=[mike],
        ),
        Event(
            id=3,
            name="Desert Swing",
            description="Lindy Hop under the stars",
            from_date=datetime.date(2025, 1, 10),
            city="Phoenix",
            country="USA",
            style="Lindy Hop",
            image_url="https://cdn.example.com/desert.png",
            musicians=[dana],
        ),
        Event(
            id=4,
            name="Valley Stomp",
            description="Dancing down from the mountain to the valley",
            from_date=datetime.date(2025, 7, 1),
            city="Grenoble",
            country="France",
            style="Balboa",
        ),
    ]
    for day in range(7):
        events.append(
            Event(
                id=10 + day,
                name=f"Berlin Social {day + 1}",
                description="Weekly social dance",
                from_date=datetime.date(2025, 2, 1 + day * 3),
                city="Berlin",
                country="Germany",
                style="Fusion",
                teachers=[joanna] if day == 0 else [],
            )
        )
    return events


@pytest.fixture
async def seeded_engine(async_db_engine, async_db_session, sample_events):
    """An in-memory database populated with sample_events."""
    async_db_session.add_all(sample_events)
    await async_db_session.commit()
    return async_db_engine


@pytest.fixture
async def search_engine(seeded_engine) -> SearchEngine:
    """A SearchEngine reading the seeded database."""
    return SearchEngine(engine=seeded_engine, query_timeout=5)
