"""Database initialization utilities."""

from __future__ import annotations

import logging
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import Any, Iterable

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

# Import models to register with Base.metadata
import hoa_scout.infrastructure.persistence.sqlalchemy.models  # noqa: F401
from hoa_scout.domain.hoa.entities import HOAProfile
from hoa_scout.domain.hoa.value_objects import PublicRecords
from hoa_scout.infrastructure.persistence.sqlalchemy.models.base import Base
from hoa_scout.infrastructure.persistence.sqlalchemy.repositories import (
    HOAProfileRepositorySQLAlchemy,
)

logger = logging.getLogger(__name__)


def create_engine_for_url(database_url: str) -> AsyncEngine:
    """Create an async engine, making sure SQLite data directories exist."""
    if database_url.startswith("sqlite") and ":memory:" not in database_url:
        db_path = database_url.split("///")[-1]
        Path(db_path).parent.mkdir(parents=True, exist_ok=True)

    return create_async_engine(
        database_url,
        echo=False,
        pool_pre_ping=True,  # Verify connections before use
    )


def create_session_maker(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )


async def create_tables(engine: AsyncEngine) -> None:
    """
    Create all database tables (idempotent).

    Uses SQLAlchemy's create_all() which only creates missing tables.
    Existing tables and their data are never modified or deleted.
    """
    logger.info("Ensuring all database tables exist...")

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    logger.info("Database schema is up to date (missing tables created if needed)")


async def drop_tables(engine: AsyncEngine) -> None:
    """
    Drop all database tables (USE WITH CAUTION!).

    This is primarily for testing and development reset scenarios.
    """
    logger.warning("Dropping all database tables...")

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    logger.info("Database tables dropped successfully")


def _decimal_or_none(value: Any) -> Decimal | None:
    if value is None or value == "":
        return None
    try:
        return Decimal(str(value))
    except InvalidOperation:
        return None


def profile_from_seed(data: dict[str, Any]) -> HOAProfile:
    """Build an HOAProfile from a seed record (``hoa_profiles`` column names)."""
    total_units = data.get("total_units")
    return HOAProfile(
        id=data.get("id"),
        hoa_name=data["hoa_name"],
        address=data.get("address"),
        city=data.get("city"),
        state=data.get("state"),
        zip_code=data.get("zip_code"),
        management_company=data.get("management_company"),
        monthly_fee=_decimal_or_none(data.get("monthly_fee")),
        total_units=int(total_units) if total_units not in (None, "") else None,
        public_records=PublicRecords.from_dict(data.get("public_records")),
    )


async def seed_profiles(
    session: AsyncSession,
    records: Iterable[dict[str, Any]],
) -> int:
    """Insert or update seed records and commit. Returns the number stored."""
    repository = HOAProfileRepositorySQLAlchemy(session)
    count = 0
    for record in records:
        await repository.save(profile_from_seed(record))
        count += 1
    await session.commit()
    logger.info("Seeded %d HOA profiles", count)
    return count
