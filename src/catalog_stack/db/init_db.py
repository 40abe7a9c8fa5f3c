"""
catalog_stack.db.init_db

Schema-ensure helper run once at service startup.

Responsibilities:
- Create the `produtos` table if it does not exist.
- Insert the seed rows into an empty table when seeding is enabled.
- Keep the PostgreSQL id sequence ahead of the seeded ids.
"""

from __future__ import annotations

from sqlalchemy import func, select, text
from sqlalchemy.ext.asyncio import AsyncEngine

from catalog_stack.db import models  # noqa: F401  # register tables on Base.metadata
from catalog_stack.db.base import Base
from catalog_stack.db.models import RESYNC_PRODUCT_ID_SEQUENCE, SEED_PRODUCTS, Product


async def init_db(engine: AsyncEngine, *, seed: bool = True) -> None:
    """
    Ensure the schema exists. No retry: if the database is unreachable the
    caller fails fast and startup aborts.
    """

    # Use a transactional DDL block when supported by the backend.
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
        if not seed:
            return
        count = (await conn.execute(select(func.count()).select_from(Product))).scalar_one()
        if count == 0:
            await conn.execute(Product.__table__.insert(), [dict(row) for row in SEED_PRODUCTS])
            if conn.dialect.name == "postgresql":
                await conn.execute(text(RESYNC_PRODUCT_ID_SEQUENCE))


# --- Module Notes -----------------------------------------------------------
# Production deployments may manage the schema with Alembic instead (see alembic/);
# create_all is a no-op for tables that already exist.
