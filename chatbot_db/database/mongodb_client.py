from pymongo import MongoClient
from pymongo.database import Database
from pymongo.errors import ConnectionFailure, PyMongoError
from chatbot_db.config import MongoDBConfig
from typing import Optional
import logging
import time

logger = logging.getLogger(__name__)


def select_database(client: MongoClient, settings: MongoDBConfig) -> Database:
    """
    Select the target database by its configured name.

    The name is not checked here; pymongo and the server reject
    illegal names themselves.
    """
    return client[settings.database]


class MongoDBClientManager:
    """
    Manages the MongoDB connection used by the bootstrap.

    Provides:
    - A verified client (ping with bounded retry)
    - Database and collection access
    """

    def __init__(self, settings: MongoDBConfig):
        self.settings = settings
        self._client: Optional[MongoClient] = None
        self._db: Optional[Database] = None

    def _connect(self) -> MongoClient:
        client = MongoClient(
            self.settings.uri,
            serverSelectionTimeoutMS=self.settings.server_selection_timeout_ms
        )
        try:
            client.admin.command("ping")
        except PyMongoError:
            client.close()
            raise
        return client

    def get_client(self) -> MongoClient:
        """
        Get or create MongoDB client.

        The database container may still be starting, so failed pings
        are retried ``connect_retries`` times with ``connect_retry_delay``
        seconds in between before the last error is raised.
        """
        if self._client is None:
            max_retries = self.settings.connect_retries
            for attempt in range(1, max_retries + 1):
                try:
                    self._client = self._connect()
                    break
                except ConnectionFailure as e:
                    if attempt == max_retries:
                        logger.error(
                            f"Failed to connect to MongoDB after {max_retries} attempts: {e}")
                        raise
                    logger.warning(
                        f"Failed to connect to MongoDB (attempt {attempt}/{max_retries}): {e}. "
                        f"Retrying in {self.settings.connect_retry_delay}s...")
                    time.sleep(self.settings.connect_retry_delay)
            logger.info("MongoDB client connected")
        return self._client

    def ping(self) -> bool:
        """Check connection health"""
        self.get_client().admin.command("ping")
        return True

    def get_database(self) -> Database:
        """Get the target database"""
        if self._db is None:
            self._db = select_database(self.get_client(), self.settings)
            logger.info(f"Connected to database: {self.settings.database}")
        return self._db

    def close(self):
        """Close the MongoDB connection"""
        if self._client:
            self._client.close()
            self._client = None
            self._db = None
            logger.info("MongoDB connection closed")
