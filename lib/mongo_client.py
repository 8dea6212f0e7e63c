# =============================================================================
# lib/mongo_client.py - MongoDB Client Wrapper
# =============================================================================
# This module builds the pymongo client and database handle used by the
# AppContext, and declares the indexes every collection relies on:
# - users.email (unique)
# - bootcamps.name (unique), bootcamps.location (2dsphere)
# - reviews.(bootcamp, user) (unique) - one review per user per bootcamp
# - bootcamp_owners.user (unique) - one published bootcamp per non-admin
#
# Usage:
#   from lib.mongo_client import MongoClientFactory
#   client, db = MongoClientFactory.connect(settings.MONGO_URI, settings.MONGO_DB_NAME)
#   MongoClientFactory.ensure_indexes(db)
# =============================================================================

from __future__ import annotations

import logging
from typing import Any

from pymongo import ASCENDING, GEOSPHERE, MongoClient
from pymongo.database import Database
from pymongo.errors import OperationFailure, PyMongoError

logger = logging.getLogger(__name__)


# Collection names
USERS = "users"
BOOTCAMPS = "bootcamps"
COURSES = "courses"
REVIEWS = "reviews"
BOOTCAMP_OWNERS = "bootcamp_owners"


class MongoClientError(Exception):
    """
    Error while connecting to or preparing the database.

    Carries a suggestion so startup failures say how to fix them.
    """

    def __init__(
        self,
        message: str,
        code: str = "MONGO_ERROR",
        suggestion: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.code = code
        self.message = message
        self.suggestion = suggestion
        self.details = details or {}

    def __str__(self) -> str:
        result = f"[{self.code}] {self.message}"
        if self.suggestion:
            result += f" Suggestion: {self.suggestion}"
        return result


class MongoClientFactory:
    """
    Builds MongoDB handles.

    The client is owned by whoever calls connect() (normally the app
    lifespan), never stored globally.
    """

    @staticmethod
    def connect(mongo_uri: str, db_name: str) -> tuple[MongoClient, Database]:
        """
        Create a client and return it with the named database.

        pymongo connects lazily, so this does not block on the server.

        Raises:
            MongoClientError: If the URI is malformed
        """
        try:
            client: MongoClient = MongoClient(mongo_uri, tz_aware=True)
        except (PyMongoError, ValueError) as e:
            raise MongoClientError(
                message=f"Failed to create MongoDB client: {e}",
                code="CLIENT_INIT_FAILED",
                suggestion="Check MONGO_URI in your .env file",
            )

        logger.info(f"MongoDB client created for database '{db_name}'")
        return client, client[db_name]

    @staticmethod
    def ensure_indexes(db: Database) -> None:
        """
        Create the indexes the services depend on.

        Idempotent; safe to call on every startup.
        """
        try:
            db[USERS].create_index([("email", ASCENDING)], unique=True)
            db[BOOTCAMPS].create_index([("name", ASCENDING)], unique=True)
            db[BOOTCAMPS].create_index([("slug", ASCENDING)], unique=True)
            db[COURSES].create_index([("bootcamp", ASCENDING)])
            db[REVIEWS].create_index(
                [("bootcamp", ASCENDING), ("user", ASCENDING)],
                unique=True,
            )
            db[BOOTCAMP_OWNERS].create_index([("user", ASCENDING)], unique=True)
        except OperationFailure as e:
            raise MongoClientError(
                message=f"Failed to create indexes: {e}",
                code="INDEX_CREATION_FAILED",
                suggestion="Remove duplicate documents that violate a unique index",
            )

        # In-memory test databases do not support geo indexes
        try:
            db[BOOTCAMPS].create_index([("location", GEOSPHERE)])
        except (OperationFailure, NotImplementedError) as e:
            logger.warning(f"Could not create 2dsphere index on bootcamps.location: {e}")

        logger.debug("MongoDB indexes ensured")

    @staticmethod
    def ping(db: Database) -> bool:
        """Return True when the server answers a ping."""
        try:
            db.command("ping")
            return True
        except PyMongoError as e:
            logger.warning(f"MongoDB ping failed: {e}")
            return False
