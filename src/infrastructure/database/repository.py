"""Generic repository over one MongoDB collection.

``DocumentRepository`` is implemented once and instantiated per entity
type. It converts between stored documents and ``DocumentModel`` instances
and turns every driver failure into ``DocumentStoreError``; nothing is
retried here.
"""

from collections.abc import Awaitable
from typing import Any

import pydantic
from loguru import logger
from pymongo.asynchronous.collection import AsyncCollection
from pymongo.asynchronous.database import AsyncDatabase
from pymongo.errors import PyMongoError

from src.core.exceptions import DocumentStoreError
from src.core.observability import document_span
from src.infrastructure.database.base import (
    MONGO_ID_FIELD,
    DocumentModel,
    to_object_id,
)
from src.infrastructure.database.client import Document


class DocumentRepository[T: DocumentModel]:
    """Collection access for one entity type.

    Args:
        database: The database holding the entity's collection.
        model_class: The DocumentModel subclass this repository manages.

    Example:
        projects = DocumentRepository(database, Project)
        completed = await projects.find_by_field("status", ProjectStatus.COMPLETED)
    """

    def __init__(
        self, database: AsyncDatabase[Document], model_class: type[T]
    ) -> None:
        self.model_class = model_class
        self.collection_name = model_class.__collection__
        self.collection: AsyncCollection[Document] = database[self.collection_name]
        logger.debug(
            "Initialized repository for {} on collection {}",
            model_class.__name__,
            self.collection_name,
        )

    async def _run[R](self, operation: str, awaitable: Awaitable[R]) -> R:
        """Await a driver call inside a span, wrapping driver errors."""
        try:
            with document_span(self.collection_name, operation):
                return await awaitable
        except PyMongoError as e:
            logger.error(
                "Document store {} failed on {}: {}",
                operation,
                self.collection_name,
                type(e).__name__,
            )
            raise DocumentStoreError(
                f"Document store operation '{operation}' failed",
                context={"collection": self.collection_name, "operation": operation},
                cause=e,
            ) from e

    def _to_model(self, document: Document, operation: str) -> T:
        """Build a model from a stored document.

        A document that no longer fits the model is a store fault, not a
        client error, and is reported as ``DocumentStoreError``.
        """
        try:
            return self.model_class.from_document(document)
        except pydantic.ValidationError as e:
            logger.error(
                "Stored {} document {} does not match the model: {} error(s)",
                self.collection_name,
                document.get(MONGO_ID_FIELD),
                e.error_count(),
            )
            raise DocumentStoreError(
                f"Stored {self.collection_name} document is malformed",
                context={
                    "collection": self.collection_name,
                    "operation": operation,
                    "document_id": str(document.get(MONGO_ID_FIELD)),
                },
                cause=e,
            ) from e

    async def _find(self, query: dict[str, Any], operation: str) -> list[T]:
        documents = await self._run(
            operation, self.collection.find(query).to_list(length=None)
        )
        return [self._to_model(document, operation) for document in documents]

    async def find_all(self) -> list[T]:
        """Return every document in the collection, in store order."""
        logger.debug("Fetching all {}", self.model_class.__name__)

        instances = await self._find({}, "find_all")

        logger.debug(
            "Retrieved {} {} instances", len(instances), self.model_class.__name__
        )
        return instances

    async def find_by_id(self, entity_id: str) -> T | None:
        """Return the document with exactly this identifier, if present.

        Args:
            entity_id: A 24-character ObjectId hex string, or any other string
                identifier stored verbatim.

        Returns:
            T | None: The instance if found, None otherwise.
        """
        logger.debug("Fetching {} by ID: {}", self.model_class.__name__, entity_id)

        document = await self._run(
            "find_by_id",
            self.collection.find_one({MONGO_ID_FIELD: to_object_id(entity_id)}),
        )

        if document is None:
            logger.debug(
                "{} instance not found with ID: {}",
                self.model_class.__name__,
                entity_id,
            )
            return None

        return self._to_model(document, "find_by_id")

    async def find_by_field(self, field_name: str, value: object) -> list[T]:
        """Return all documents whose field equals ``value`` exactly.

        For array fields the store matches documents whose array contains
        ``value``.

        Args:
            field_name: Model attribute name or stored key.
            value: The value to match.

        Returns:
            list[T]: Matching instances, in store order.

        Raises:
            KeyError: If the model has no such field.
        """
        key = self.model_class.field_key(field_name)
        if key == MONGO_ID_FIELD and isinstance(value, str):
            value = to_object_id(value)

        logger.debug(
            "Filtering {} where {} == {}", self.model_class.__name__, key, value
        )

        instances = await self._find({key: value}, "find_by_field")

        logger.debug(
            "Filtered {} - found {} instances",
            self.model_class.__name__,
            len(instances),
        )
        return instances

    async def save(self, instance: T) -> T:
        """Persist an instance and return its stored form.

        Instances without an ``id`` are inserted and receive the identifier
        the store generates. Instances with one replace the stored document,
        creating it if missing.
        """
        document = instance.to_document()

        if instance.id is None:
            result = await self._run("insert", self.collection.insert_one(document))
            saved = instance.model_copy(update={"id": str(result.inserted_id)})
            logger.info(
                "Created {} instance with ID: {}", self.model_class.__name__, saved.id
            )
            return saved

        await self._run(
            "replace",
            self.collection.replace_one(
                {MONGO_ID_FIELD: document[MONGO_ID_FIELD]}, document, upsert=True
            ),
        )
        logger.info(
            "Saved {} instance with ID: {}", self.model_class.__name__, instance.id
        )
        return instance

    async def count(self) -> int:
        """Count all documents in the collection."""
        return await self._run("count", self.collection.count_documents({}))
