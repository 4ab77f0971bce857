# ============================================================================
# FILE: chatbot_db/config.py
# DESCRIPTION: Central configuration for the database bootstrap
# ============================================================================

from typing import Optional
from pydantic_settings import BaseSettings
from pydantic import AliasChoices, Field, field_validator


DEFAULT_DATABASE_NAME = "mental_chatbot"


class MongoDBConfig(BaseSettings):
    """
    MongoDB connection and collection configuration.

    The target database follows the official mongo image convention:
    MONGO_INITDB_DATABASE names it, and an unset or empty value falls
    back to ``mental_chatbot``. The backend's MONGODB_DATABASE is
    accepted as well so both sides can share one .env file.
    """
    # MongoDB connection URI
    uri: str = Field(
        default="mongodb://localhost:27017/",
        description="MongoDB connection string"
    )

    # Database name
    database: str = Field(
        default=DEFAULT_DATABASE_NAME,
        validation_alias=AliasChoices("MONGO_INITDB_DATABASE", "MONGODB_DATABASE"),
        description="MongoDB database name"
    )

    # Collection names
    knowledge_collection: str = Field(
        default="knowledge",
        description="Collection for knowledge base documents"
    )

    # Connection behaviour
    server_selection_timeout_ms: int = Field(
        default=5000,
        description="Server selection timeout passed to MongoClient"
    )

    connect_retries: int = Field(
        default=5,
        ge=1,
        description="Connection attempts before giving up"
    )

    connect_retry_delay: float = Field(
        default=5.0,
        ge=0.0,
        description="Seconds to wait between connection attempts"
    )

    # Re-run behaviour
    fail_on_existing: bool = Field(
        default=False,
        description="Fail instead of skipping when the collection or an index already exists"
    )

    @field_validator("database", mode="before")
    @classmethod
    def default_when_empty(cls, value: Optional[str]) -> str:
        # Anything else, whitespace included, is left for the server to judge
        if value is None or value == "":
            return DEFAULT_DATABASE_NAME
        return value

    class Config:
        env_prefix = "MONGODB_"
        populate_by_name = True


class AppConfig(BaseSettings):
    """
    Application-level configuration.
    """
    log_level: str = Field(
        default="INFO",
        description="Logging level"
    )

    app_name: str = Field(
        default="Mental Chatbot DB Init",
        description="Application name"
    )

    class Config:
        env_prefix = "APP_"


class Config:
    """
    Aggregates all config sections. Resolved once at startup and handed
    to the client manager and the initializer.

    Usage:
        from chatbot_db.config import Config

        settings = Config()
        print(settings.mongodb.database)
    """

    def __init__(self):
        # Load environment variables from .env file
        from dotenv import load_dotenv
        load_dotenv()

        self.mongodb = MongoDBConfig()
        self.app = AppConfig()

    def validate(self) -> bool:
        """
        Validate that all required configuration is present.

        Raises:
            ValueError: If required configuration is missing
        """
        if not self.mongodb.uri:
            raise ValueError("MONGODB_URI is required")

        return True
