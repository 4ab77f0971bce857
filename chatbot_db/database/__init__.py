"""
Database module for MongoDB connection and knowledge collection bootstrap.
"""

from chatbot_db.database.mongodb_client import MongoDBClientManager, select_database
from chatbot_db.database.schemas import KNOWLEDGE_COLLECTION, MongoDBSchemas
from chatbot_db.database.initializer import (
    ExistingPolicy,
    InitializationError,
    InitializationReport,
    StepResult,
    StepStatus,
    initialize_database,
)

__all__ = [
    "MongoDBClientManager",
    "select_database",
    "KNOWLEDGE_COLLECTION",
    "MongoDBSchemas",
    "ExistingPolicy",
    "InitializationError",
    "InitializationReport",
    "StepResult",
    "StepStatus",
    "initialize_database",
]
