"""
grok_list/models/base.py

Purpose: Shared base for documents stored in MongoDB

- Encodes an entity to a BSON-ready dict under its stored field names
- Decodes a raw document back into the entity
- Maps internal field names to stored names (user_id -> userId)
"""

from typing import Any, Dict, Optional, Type, TypeVar

from bson import ObjectId
from pydantic import BaseModel, Field, ValidationError

from grok_list.core.exceptions import DeserializationError, SerializationError

M = TypeVar("M", bound="MongoModel")


class MongoModel(BaseModel):
    """
    Immutable entity persisted as one MongoDB document.

    The identifier is absent until MongoDB assigns one on insert.
    """

    id: Optional[ObjectId] = Field(default=None, alias="_id")

    class Config:
        frozen = True
        populate_by_name = True
        arbitrary_types_allowed = True

    def to_document(self) -> Dict[str, Any]:
        """
        Serializes the entity using stored field names.

        Raises:
            SerializationError: If the entity cannot be dumped
        """
        try:
            document = self.model_dump(by_alias=True)
        except (ValueError, TypeError) as e:
            raise SerializationError(
                f"Could not serialize {type(self).__name__}: {e}"
            ) from e

        if document.get("_id") is None:
            document.pop("_id", None)
        return document

    @classmethod
    def from_document(cls: Type[M], raw: Dict[str, Any]) -> M:
        """
        Builds the entity from a raw MongoDB document.

        Raises:
            DeserializationError: If the document does not match the model
        """
        try:
            return cls.model_validate(raw)
        except (ValidationError, TypeError) as e:
            raise DeserializationError(
                f"Could not deserialize {cls.__name__} from {raw.get('_id') if isinstance(raw, dict) else raw!r}",
                details=str(e),
            ) from e

    @classmethod
    def wire_field(cls, name: str) -> str:
        """Returns the stored name of a field; stored names pass through."""
        field = cls.model_fields.get(name)
        if field is not None and field.alias:
            return field.alias
        return name
