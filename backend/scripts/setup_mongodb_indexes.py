"""Setup MongoDB indexes for the session collections.

Collections:
- fasting_sessions: Fasting session documents
- exercise_sessions: Exercise session documents

Each collection gets:
- user_id (partial unique, status == "active"): one active session per user
- user_id + start_time (desc): paginated history
- user_id + status + end_time (desc): analytics over completed sessions

Usage:
    python scripts/setup_mongodb_indexes.py

Environment Variables:
    MONGODB_URI: MongoDB connection string (required)
    MONGODB_DATABASE: Database name (default: fastlog)
"""

from __future__ import annotations

import asyncio
import logging
import sys
from pathlib import Path
from typing import Any, Dict

from dotenv import load_dotenv
from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase

from domain.session.core.value_objects.session_kind import SessionKind
from infrastructure.config import get_mongodb_database, get_mongodb_uri
from infrastructure.persistence.mongodb.session_repository import MongoSessionRepository

# Load environment variables from .env file
env_path = Path(__file__).parent.parent / ".env"
if env_path.exists():
    load_dotenv(env_path)
    logging.debug(f"Loaded environment from: {env_path}")


logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


async def list_existing_indexes(db: AsyncIOMotorDatabase[Dict[str, Any]]) -> None:
    """Log the indexes of every session collection."""
    logger.info("=" * 60)
    logger.info("Existing Indexes Summary")
    logger.info("=" * 60)

    for kind in SessionKind:
        indexes = await db[kind.collection_name].list_indexes().to_list(length=None)
        logger.info(f"{kind.collection_name}:")
        for idx in indexes:
            name = idx.get("name", "unknown")
            keys_str = ", ".join(f"{k}:{v}" for k, v in idx.get("key", {}).items())
            unique = " (unique)" if idx.get("unique", False) else ""
            partial = idx.get("partialFilterExpression")
            partial_str = f" partial={partial}" if partial else ""
            logger.info(f"  - {name}: [{keys_str}]{unique}{partial_str}")


async def setup_all_indexes() -> None:
    """Create indexes for all session collections."""
    uri = get_mongodb_uri()
    if not uri:
        logger.error("MONGODB_URI not configured!")
        logger.error("Set MONGODB_URI environment variable with connection string.")
        sys.exit(1)

    database_name = get_mongodb_database()
    logger.info(f"Connecting to MongoDB: {database_name}")

    client: AsyncIOMotorClient[Dict[str, Any]] = AsyncIOMotorClient(uri, tz_aware=True)

    try:
        await client.admin.command("ping")
        logger.info("Connected to MongoDB successfully")

        for kind in SessionKind:
            await MongoSessionRepository(kind, client=client).ensure_indexes()

        logger.info("All indexes created successfully")
        await list_existing_indexes(client[database_name])
    except Exception as e:
        logger.error(f"Error setting up indexes: {e}")
        sys.exit(1)
    finally:
        client.close()
        logger.info("MongoDB connection closed")


def main() -> None:
    """Main entry point."""
    logger.info("MongoDB Index Setup for FastLog Backend")
    try:
        asyncio.run(setup_all_indexes())
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        sys.exit(130)


if __name__ == "__main__":
    main()
