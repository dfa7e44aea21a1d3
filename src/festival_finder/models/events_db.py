"""SQLAlchemy ORM models for the festival database.

Events are written by an external ingestion process; this package only reads
them. Teachers and musicians are linked to events through association tables.
Uses SQLAlchemy 2.0 syntax and runs against PostgreSQL in production.
"""

import datetime
from decimal import Decimal

from sqlalchemy import (
    JSON,
    Boolean,
    Column,
    Date,
    DateTime,
    ForeignKey,
    Integer,
    Numeric,
    String,
    Table,
    Text,
    func,
)
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship


class Base(DeclarativeBase):
    """Base class for SQLAlchemy declarative models."""

    pass


event_teachers = Table(
    "event_teachers",
    Base.metadata,
    Column("event_id", ForeignKey("events.id", ondelete="CASCADE"), primary_key=True),
    Column(
        "teacher_id", ForeignKey("teachers.id", ondelete="CASCADE"), primary_key=True
    ),
)

event_musicians = Table(
    "event_musicians",
    Base.metadata,
    Column("event_id", ForeignKey("events.id", ondelete="CASCADE"), primary_key=True),
    Column(
        "musician_id", ForeignKey("musicians.id", ondelete="CASCADE"), primary_key=True
    ),
)


class Teacher(Base):
    """A dance teacher appearing at festivals."""

    __tablename__ = "teachers"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    name: Mapped[str] = mapped_column(String(255), index=True, nullable=False)
    bio: Mapped[str | None] = mapped_column(Text, nullable=True)
    website: Mapped[str | None] = mapped_column(String(500), nullable=True)
    image_url: Mapped[str | None] = mapped_column(String(500), nullable=True)

    events: Mapped[list["Event"]] = relationship(
        secondary=event_teachers, back_populates="teachers"
    )


class Musician(Base):
    """A musician or band playing at festivals."""

    __tablename__ = "musicians"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    name: Mapped[str] = mapped_column(String(255), index=True, nullable=False)
    slug: Mapped[str | None] = mapped_column(String(255), unique=True, nullable=True)
    bio: Mapped[str | None] = mapped_column(Text, nullable=True)
    instruments: Mapped[list[str] | None] = mapped_column(JSON, nullable=True)
    """Instrument names, e.g. ["piano", "vocals"]."""

    verified: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    website: Mapped[str | None] = mapped_column(String(500), nullable=True)
    image_url: Mapped[str | None] = mapped_column(String(500), nullable=True)

    events: Mapped[list["Event"]] = relationship(
        secondary=event_musicians, back_populates="musicians"
    )


class Event(Base):
    """A dance festival or event."""

    __tablename__ = "events"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    """Primary key identifier."""

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    """Display name (e.g., 'Mountain Blues Weekend')."""

    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    """Free-text description, if available."""

    from_date: Mapped[datetime.date] = mapped_column(Date, index=True, nullable=False)
    """First day of the event."""

    to_date: Mapped[datetime.date | None] = mapped_column(Date, nullable=True)
    """Last day of the event. Expected to be on or after from_date."""

    city: Mapped[str | None] = mapped_column(String(255), nullable=True)
    country: Mapped[str | None] = mapped_column(String(255), nullable=True)
    website: Mapped[str | None] = mapped_column(String(500), nullable=True)

    style: Mapped[str | None] = mapped_column(String(100), nullable=True)
    """Dance style tag (e.g., 'Blues', 'Lindy Hop')."""

    image_url: Mapped[str | None] = mapped_column(String(500), nullable=True)
    """Absolute URL or storage path such as '/uploads/2024/poster.jpg'."""

    ai_quality_score: Mapped[Decimal | None] = mapped_column(
        Numeric(5, 2), nullable=True
    )
    """Data quality score assigned during ingestion."""

    ai_completeness_score: Mapped[Decimal | None] = mapped_column(
        Numeric(5, 2), nullable=True
    )
    """Completeness score assigned during ingestion."""

    extraction_method: Mapped[str | None] = mapped_column(String(100), nullable=True)
    """How the event was ingested (e.g., 'manual', 'scraper')."""

    created_at: Mapped[datetime.datetime | None] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=True
    )
    updated_at: Mapped[datetime.datetime | None] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=True,
    )

    teachers: Mapped[list[Teacher]] = relationship(
        secondary=event_teachers, back_populates="events"
    )
    musicians: Mapped[list[Musician]] = relationship(
        secondary=event_musicians, back_populates="events"
    )
