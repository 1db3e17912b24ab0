"""Base model for documents persisted in MongoDB collections.

Key components:
- **DocumentModel**: Pydantic base with an optional, store-assigned ``id``
- **Field aliases**: camelCase keys on the wire and in the store
- **Collection binding**: each concrete model names its collection

The identifier is owned by the store. A model is built without one and
receives it from the repository on first save; ``_id`` in the stored
document surfaces as ``id`` everywhere else.
"""

from typing import Any, ClassVar, Self

from bson import ObjectId
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

MONGO_ID_FIELD = "_id"


class DocumentModel(BaseModel):
    """Base for all collection-backed entities.

    Subclasses set ``__collection__`` to the name of their collection.

    Example:
        class Service(DocumentModel):
            __collection__ = "services"

            title: str
    """

    __collection__: ClassVar[str]

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        serialize_by_alias=True,
        extra="ignore",
    )

    id: str | None = Field(
        default=None,
        description="Store-assigned identifier (absent until first save)",
        examples=["665f1c2ab3e4a1d2c3b4a5f6"],
    )

    @classmethod
    def field_key(cls, field_name: str) -> str:
        """Translate a Python attribute name to its stored document key.

        Args:
            field_name: Attribute name (``image_url``) or stored key (``imageUrl``).

        Returns:
            str: The key used in the stored document.

        Raises:
            KeyError: If the model has no such field.
        """
        if field_name == "id":
            return MONGO_ID_FIELD
        if field_name in cls.model_fields:
            return cls.model_fields[field_name].alias or field_name
        for name, info in cls.model_fields.items():
            if info.alias == field_name:
                return info.alias or name
        raise KeyError(f"{cls.__name__} has no field '{field_name}'")

    @classmethod
    def from_document(cls, document: dict[str, Any]) -> Self:
        """Build a model from a raw stored document."""
        data = dict(document)
        if MONGO_ID_FIELD in data:
            data["id"] = str(data.pop(MONGO_ID_FIELD))
        return cls.model_validate(data)

    def to_document(self) -> dict[str, Any]:
        """Dump the model as a storable document.

        The ``id`` is emitted as ``_id`` (an ObjectId when it parses as one)
        and omitted entirely when unassigned.
        """
        document = self.model_dump(by_alias=True, exclude={"id"})
        if self.id is not None:
            document[MONGO_ID_FIELD] = to_object_id(self.id)
        return document

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__}(id={self.id})>"


def to_object_id(value: str) -> ObjectId | str:
    """Return ``value`` as an ObjectId when it is a valid hex id, else unchanged."""
    if ObjectId.is_valid(value):
        return ObjectId(value)
    return value
