"""One-time script: create chat tables (and the users table in dev databases)."""
from __future__ import annotations

import asyncio
import logging

from office_chat.infrastructure.db.base import Base
from office_chat.infrastructure.db.session import engine

# registers every model on Base.metadata
import office_chat.infrastructure.db.models  # noqa: F401

logger = logging.getLogger(__name__)


async def create_schema() -> None:
    try:
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("Created tables: %s", ", ".join(sorted(Base.metadata.tables)))
    finally:
        await engine.dispose()


def main() -> None:
    logging.basicConfig(level=logging.INFO)
    asyncio.run(create_schema())


if __name__ == "__main__":
    main()
