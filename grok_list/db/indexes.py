"""
grok_list/db/indexes.py

Purpose: Database index management

- Lookup indexes for name-based user lookup and per-user list queries
- Idempotent, safe to run on every startup
"""

from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo import ASCENDING

from grok_list.core.logging import get_logger
from grok_list.db.collections import EntityKind, collection_name
from grok_list.db.mongo import get_database

logger = get_logger(__name__)

INDEXES = {
    EntityKind.USER: [
        ([("name", ASCENDING)], "user_name_idx"),
        ([("email", ASCENDING)], "user_email_idx"),
    ],
    EntityKind.STORE: [
        ([("name", ASCENDING)], "store_name_idx"),
    ],
    EntityKind.LIST: [
        ([("userId", ASCENDING)], "list_user_idx"),
    ],
}


async def create_indexes(database: AsyncIOMotorDatabase = None):
    """
    Creates all database indexes.
    This function is idempotent - safe to run multiple times.
    """
    if database is None:
        database = await get_database()

    try:
        logger.info("Creating database indexes...")

        for kind, indexes in INDEXES.items():
            collection = database[collection_name(kind)]
            for keys, name in indexes:
                await collection.create_index(keys, name=name)
                logger.debug(f"Created index {name} on {collection.name}")

        logger.info("All database indexes created")

    except Exception as e:
        logger.error(f"Failed to create indexes: {str(e)}", exc_info=True)
        raise


if __name__ == "__main__":
    """
    Run this script directly to create indexes manually.
    """
    import asyncio
    from grok_list.db.mongo import connect_to_mongo, close_mongo_connection

    async def main():
        await connect_to_mongo()
        await create_indexes()
        await close_mongo_connection()

    asyncio.run(main())
