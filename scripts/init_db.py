"""
Database initialization script

Run once to create collections and indexes:
    python scripts/init_db.py
"""

import asyncio
import sys
from pathlib import Path
from dotenv import load_dotenv

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

# Load environment variables
load_dotenv()

from grok_list.core.logging import setup_logging, get_logger
from grok_list.db.collections import EntityKind, collection_name
from grok_list.db.indexes import create_indexes
from grok_list.db.mongo import connect_to_mongo, close_mongo_connection, get_database

setup_logging()
logger = get_logger("scripts.init_db")


async def main():
    """Create indexes and report what each collection holds."""
    await connect_to_mongo()

    try:
        database = await get_database()
        await create_indexes(database)

        for kind in EntityKind:
            collection = database[collection_name(kind)]
            indexes = await collection.index_information()
            count = await collection.count_documents({})
            logger.info(
                f"{collection.name}: {count} documents, indexes={sorted(indexes.keys())}"
            )

        logger.info("Database initialization complete")

    finally:
        await close_mongo_connection()


if __name__ == "__main__":
    asyncio.run(main())
