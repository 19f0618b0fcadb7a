"""
MongoDB Index Creation Script

Creates the unique indexes the services rely on to reject duplicate halls and
teams, and the lookup indexes used when hydrating teams, halls and coaches.
Run it once after deployment and whenever the index list changes.

Usage:
    python scripts/create_indexes.py [--db-name NAME]
"""

import argparse
import asyncio
import sys
from pathlib import Path

# Add parent directory to Python path to allow importing from root
sys.path.insert(0, str(Path(__file__).parent.parent))

import certifi  # noqa: E402
from motor.motor_asyncio import AsyncIOMotorClient  # noqa: E402
from pymongo.errors import OperationFailure  # noqa: E402

from config import settings  # noqa: E402
from logging_config import logger  # noqa: E402

INDEXES = {
    "halls": [
        ([("name", 1)], {"unique": True, "name": "hall_name_unique_idx"}),
    ],
    "coaches": [
        ([("surname", 1), ("name", 1)], {"name": "coach_name_idx"}),
    ],
    "teams": [
        (
            [("gender", 1), ("category", 1), ("teamNumber", 1)],
            {"unique": True, "name": "team_identity_unique_idx"},
        ),
    ],
    "training_sessions": [
        ([("teamId", 1)], {"name": "team_idx"}),
        ([("hallId", 1)], {"name": "hall_idx"}),
        ([("timeSlot.dayOfWeek", 1), ("timeSlot.startTime", 1)], {"name": "time_slot_idx"}),
    ],
    "role_coaches": [
        ([("teamId", 1)], {"name": "team_idx"}),
        ([("coachId", 1)], {"name": "coach_idx"}),
    ],
}


async def create_index_safe(collection, keys, **kwargs) -> bool:
    """Create one index; returns False when it already exists"""
    index_name = kwargs.get("name", "unnamed")
    try:
        await collection.create_index(keys, **kwargs)
        logger.info(f"  ✓ Created index: {index_name}")
        return True
    except OperationFailure as e:
        if "already exists" in str(e) or "IndexOptionsConflict" in str(e):
            logger.info(f"  ↷ Index already exists: {index_name}")
            return False
        logger.error(f"  ✗ Failed to create index {index_name}: {str(e)}")
        raise


async def create_indexes(db) -> int:
    """Create every index in INDEXES, returns the number of newly created ones"""
    created = 0
    for collection_name, indexes in INDEXES.items():
        logger.info(f"Creating {collection_name} collection indexes...")
        for keys, options in indexes:
            if await create_index_safe(db[collection_name], keys, background=True, **options):
                created += 1
    logger.info(f"Index creation completed successfully ({created} created)")
    return created


async def main(db_name: str) -> None:
    client = AsyncIOMotorClient(settings.DB_URL, tlsCAFile=certifi.where())
    db = client[db_name]
    logger.info(f"Starting index creation for database: {db_name}...")
    try:
        await create_indexes(db)

        # List all indexes for verification
        logger.info("Verifying created indexes:")
        for collection_name in INDEXES:
            indexes = await db[collection_name].index_information()
            for idx_name, idx_info in indexes.items():
                logger.info(f"  - {collection_name}.{idx_name}: {idx_info.get('key', [])}")
    finally:
        client.close()


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Create MongoDB indexes.")
    parser.add_argument("--db-name", default=settings.DB_NAME, help="Database to index (defaults to DB_NAME)")
    args = parser.parse_args()
    asyncio.run(main(args.db_name))
