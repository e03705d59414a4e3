"""Shared fixtures for integration tests.

Each test gets its own SQLite file. ``NullPool`` opens a fresh aiosqlite
connection per session, so the same engine works from the pytest event loop
and from the loop that ``TestClient`` runs the app on.
"""

import asyncio

import pytest
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool

from hoa_scout.infrastructure.persistence.sqlalchemy.init_db import (
    create_tables,
    seed_profiles,
)

SAMPLE_PROFILES = [
    {
        "id": "hoa-palm",
        "hoa_name": "Palm Grove HOA",
        "address": "1 Palm Way",
        "city": "Miami",
        "state": "FL",
        "zip_code": "33101",
        "management_company": "Castle Group",
        "monthly_fee": "250",
        "total_units": 120,
    },
    {
        "id": "hoa-oak",
        "hoa_name": "Oak Hollow Homeowners Association",
        "city": "Tampa",
        "state": "FL",
        "zip_code": "33601",
        "monthly_fee": "450",
    },
    {
        "id": "hoa-bay",
        "hoa_name": "Bayview 100% Owners",
        "city": "miami",
        "state": "FL",
        "zip_code": "33139",
    },
    {
        "id": "hoa-coral",
        "hoa_name": "Coral_Reef Estates",
        "city": "Naples",
        "state": "FL",
        "zip_code": "34102",
        "public_records": {
            "enrichedAt": "2020-01-01T00:00:00Z",
            "lawsuits": [{"case": "2019-CA-42"}],
        },
    },
    {
        "id": "hoa-nowhere",
        "hoa_name": "Unplaced HOA",
    },
]


async def _setup_database(engine) -> None:
    await create_tables(engine)
    session_maker = async_sessionmaker(engine, expire_on_commit=False)
    async with session_maker() as session:
        await seed_profiles(session, SAMPLE_PROFILES)


@pytest.fixture
def db_engine(tmp_path):
    """SQLite engine with the schema created and sample profiles seeded."""
    engine = create_async_engine(
        f"sqlite+aiosqlite:///{tmp_path / 'hoa_scout.db'}",
        echo=False,
        poolclass=NullPool,
    )
    # Set up in a dedicated loop; tests may run on a different one.
    asyncio.run(_setup_database(engine))
    yield engine
    asyncio.run(engine.dispose())


@pytest.fixture
def db_session_maker(db_engine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(
        db_engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )
