"""Document store access with MongoDB and the repository pattern.

Core components:
- **base**: DocumentModel with store-assigned identifiers and camelCase keys
- **client**: Process-wide async MongoDB client and health check
- **repository**: Generic repository instantiated once per entity
- **dependencies**: FastAPI dependency injection helpers

Connection pooling and per-operation concurrency are left to the PyMongo
driver.
"""

from src.infrastructure.database.base import DocumentModel
from src.infrastructure.database.client import (
    check_database_connection,
    close_database,
    get_client,
    get_database,
)
from src.infrastructure.database.dependencies import Database
from src.infrastructure.database.repository import DocumentRepository

__all__ = [
    "Database",
    "DocumentModel",
    "DocumentRepository",
    "check_database_connection",
    "close_database",
    "get_client",
    "get_database",
]
