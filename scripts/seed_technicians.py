#!/usr/bin/env python3
"""
Seed Technicians
================

Creates the store tables (local databases only) and inserts technicians
from a JSON file, skipping names that already exist.

Usage:
    DATABASE_URL=sqlite+aiosqlite:///nebula.db python scripts/seed_technicians.py technicians.json

technicians.json:
    [{"name": "Dana Ruiz", "specialty": "plumbing", "phone": "555-0101"}]
"""

import asyncio
import json
import sys
from pathlib import Path

from sqlalchemy import select

from nebula_api.infrastructure.database import (
    init_database, close_database, create_tables, get_session_context
)
from nebula_api.shared.infrastructure.logging import setup_logging, get_logger
from nebula_api.tickets.infrastructure import TechnicianModel

logger = get_logger(__name__)


async def seed(path: Path) -> int:
    rows = json.loads(path.read_text())

    init_database()
    try:
        await create_tables()
        async with get_session_context() as session:
            result = await session.execute(select(TechnicianModel.name))
            existing = set(result.scalars().all())

            added = 0
            for row in rows:
                if row["name"] in existing:
                    continue
                session.add(TechnicianModel(
                    name=row["name"],
                    email=row.get("email"),
                    phone=row.get("phone"),
                    specialty=row.get("specialty"),
                ))
                added += 1
    finally:
        await close_database()

    logger.info("Technicians seeded", extra={"added": added, "source": str(path)})
    return added


if __name__ == "__main__":
    if len(sys.argv) != 2:
        print(__doc__)
        sys.exit(1)
    setup_logging()
    asyncio.run(seed(Path(sys.argv[1])))
