"""MongoDB client lifecycle management.

One ``AsyncMongoClient`` is shared by the whole process. The driver owns
connection pooling, server selection and per-operation concurrency; this
module only creates the client lazily, hands out the configured database,
checks connectivity and closes the client on shutdown.

The module uses a singleton through _ClientManager so no global statements
are needed.
"""

import threading
from typing import Any

from loguru import logger
from pymongo import AsyncMongoClient
from pymongo.asynchronous.database import AsyncDatabase
from pymongo.errors import PyMongoError

from src.core.config import get_settings

type Document = dict[str, Any]


def create_mongo_client(mongodb_url: str | None = None) -> AsyncMongoClient[Document]:
    """Create an async MongoDB client from settings.

    Args:
        mongodb_url: Optional connection string. Falls back to the configured one.

    Returns:
        AsyncMongoClient[Document]: Client with timezone-aware datetimes.
    """
    db_config = get_settings().database_config

    client: AsyncMongoClient[Document] = AsyncMongoClient(
        mongodb_url or db_config.mongodb_url,
        tz_aware=True,
        maxPoolSize=db_config.max_pool_size,
        serverSelectionTimeoutMS=db_config.server_selection_timeout_ms,
    )

    logger.info(
        "Created MongoDB client - database: {}, max_pool_size: {}",
        db_config.database_name,
        db_config.max_pool_size,
    )
    return client


class _ClientManager:
    """Holds the process-wide client, created on first use."""

    def __init__(self) -> None:
        self._client: AsyncMongoClient[Document] | None = None
        self._lock = threading.Lock()

    def get_client(self) -> AsyncMongoClient[Document]:
        if self._client is None:
            with self._lock:
                if self._client is None:
                    self._client = create_mongo_client()
        return self._client

    async def close(self) -> None:
        if self._client is not None:
            await self._client.close()
            logger.info("MongoDB client closed")
            self._client = None

    def reset(self) -> None:
        """Forget the client without closing it. Used by tests."""
        self._client = None


_client_manager = _ClientManager()


def get_client() -> AsyncMongoClient[Document]:
    """Get or create the global MongoDB client."""
    return _client_manager.get_client()


def get_database() -> AsyncDatabase[Document]:
    """Return the configured content database.

    Also serves as the FastAPI dependency that repositories are built on,
    so tests can override it with an in-memory double.
    """
    return get_client()[get_settings().database_config.database_name]


async def close_database() -> None:
    """Close the client and its connection pool at shutdown."""
    await _client_manager.close()


async def check_database_connection() -> tuple[bool, str | None]:
    """Ping the document store.

    Returns:
        tuple[bool, str | None]: Whether the ping succeeded, and the error
            message when it did not.
    """
    try:
        await get_client().admin.command("ping")
    except PyMongoError as e:
        return False, str(e)
    else:
        return True, None
