"""
Report which venues the public marketplace currently shows, and why the
others are hidden.

    python -m app.scripts.check_venues
"""

import asyncio
import sys

from loguru import logger

from app.db import close_db, init_db
from app.log import configure_logging
from app.services.maintenance import VenueReport, check_venues


def describe(report: VenueReport) -> str:
    reasons = []
    if not report.is_active:
        reasons.append("venue inactive")
    if not report.hotel_is_verified:
        reasons.append("hotel unverified")
    if report.hotel_is_deactivated:
        reasons.append("hotel deactivated")
    state = "visible" if report.is_visible else f"hidden ({', '.join(reasons)})"
    return f"{report.venue_name} @ {report.hotel_name}: {state}"


async def main() -> None:
    await init_db()
    try:
        reports = await check_venues()
        for report in reports:
            logger.info(describe(report))
        visible = sum(1 for r in reports if r.is_visible)
        logger.info("{} of {} venues are publicly visible", visible, len(reports))
    finally:
        await close_db()


if __name__ == "__main__":
    configure_logging()
    try:
        asyncio.run(main())
    except Exception:
        logger.exception("check_venues failed")
        sys.exit(1)
