#!/usr/bin/env python3

import sys
from typing import Optional
from pydantic import ValidationError
from pymongo.errors import PyMongoError
from chatbot_db.config import Config
from chatbot_db.database.mongodb_client import MongoDBClientManager
from chatbot_db.database.initializer import (
    ExistingPolicy,
    InitializationError,
    initialize_database,
)
import logging

logger = logging.getLogger(__name__)

COMPLETION_MESSAGE = "MongoDB initialization complete!"


def setup_mongodb(settings: Optional[Config] = None):
    """
    Create the knowledge collection and its indexes.

    This script runs once when the database container is first
    initialized. Re-runs leave an initialized database unchanged unless
    MONGODB_FAIL_ON_EXISTING is set.
    """
    logging.basicConfig(level=logging.INFO)

    try:
        settings = settings or Config()
        logging.getLogger().setLevel(settings.app.log_level.upper())
        settings.validate()
    except (ValidationError, ValueError) as e:
        logger.error(f"Error setting up MongoDB: invalid configuration: {e}")
        sys.exit(1)

    on_existing = (
        ExistingPolicy.FAIL if settings.mongodb.fail_on_existing
        else ExistingPolicy.TOLERATE
    )
    db_manager = MongoDBClientManager(settings.mongodb)

    try:
        logger.info("Setting up MongoDB...")

        # Test connection
        logger.info("Testing MongoDB connection...")
        db_manager.ping()
        logger.info("✓ MongoDB connection successful")

        db = db_manager.get_database()

        logger.info("Creating collection and indexes...")
        report = initialize_database(
            db,
            collection_name=settings.mongodb.knowledge_collection,
            on_existing=on_existing
        )
        for result in report.steps:
            logger.info(f"✓ {result.step} {result.target}: {result.status.value}")

        # Vector search is not created here
        logger.info("Note: for full vector search, use MongoDB Atlas with $vectorSearch")

    except (InitializationError, PyMongoError) as e:
        logger.error(f"Error setting up MongoDB: {e}")
        sys.exit(1)
    finally:
        db_manager.close()

    print(COMPLETION_MESSAGE)
    return report


if __name__ == "__main__":
    setup_mongodb()
