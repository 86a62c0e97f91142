"""
Make every venue publicly visible: verify and reactivate all hotels, then
activate all venues.

    python -m app.scripts.fix_venues
"""

import asyncio
import sys

from loguru import logger

from app.db import close_db, init_db
from app.log import configure_logging
from app.services.maintenance import fix_venues


async def main() -> None:
    await init_db()
    try:
        result = await fix_venues()
        logger.info("Updated {} hotels", result.hotels_updated)
        logger.info("Updated {} venues", result.venues_updated)
    finally:
        await close_db()


if __name__ == "__main__":
    configure_logging()
    try:
        asyncio.run(main())
    except Exception:
        logger.exception("fix_venues failed")
        sys.exit(1)
