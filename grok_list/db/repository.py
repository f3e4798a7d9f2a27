"""
grok_list/db/repository.py

Purpose: Generic MongoDB document repository

- Typed insert / fetch / replace / delete for any MongoModel
- One instance per entity type, bound to that entity's collection
- Re-reads every written document so callers see what MongoDB stored
- Wraps driver and codec failures into the repository error taxonomy
"""

from dataclasses import dataclass
from typing import Any, AsyncIterator, Dict, Generic, Optional, Type, TypeVar

from bson import ObjectId
from bson.errors import InvalidBSON, InvalidDocument
from motor.motor_asyncio import AsyncIOMotorCollection, AsyncIOMotorDatabase
from pymongo.errors import PyMongoError

from grok_list.core.exceptions import (
    DeserializationError,
    IdentifierKindMismatch,
    SerializationError,
    StoreError,
)
from grok_list.core.logging import get_logger, LogContext
from grok_list.db.collections import EntityKind, collection_name
from grok_list.models.base import MongoModel

logger = get_logger(__name__)

T = TypeVar("T", bound=MongoModel)


@dataclass(frozen=True)
class FetchResult(Generic[T]):
    """
    One position of a multi-document fetch: either a decoded value or the
    error that stopped this record from decoding.
    """

    value: Optional[T] = None
    error: Optional[DeserializationError] = None

    @property
    def ok(self) -> bool:
        return self.error is None


class DocumentRepository(Generic[T]):
    """
    CRUD engine for one entity type and its collection.

    Usage:
        lists = DocumentRepository(database, ShoppingList, EntityKind.LIST)
        stored = await lists.insert(shopping_list)

    Nothing here retries or recovers: every failure is raised to the caller
    as a RepositoryError subclass.
    """

    def __init__(self, database: AsyncIOMotorDatabase, model: Type[T], kind: EntityKind):
        self.model = model
        self.kind = kind
        self.collection_name = collection_name(kind)
        self._collection: AsyncIOMotorCollection = database[self.collection_name]

    async def insert(self, document: T) -> Optional[T]:
        """
        Writes a new document and returns it as re-read from MongoDB.

        Args:
            document: Entity to persist (its id, if any, is kept)

        Returns:
            The stored entity with its assigned id, or None if the re-read
            found nothing

        Raises:
            SerializationError: If the entity cannot be encoded
            IdentifierKindMismatch: If MongoDB returns a non-ObjectId id
            StoreError: On driver failure
        """
        raw = document.to_document()

        try:
            result = await self._collection.insert_one(raw)
        except InvalidDocument as e:
            raise SerializationError(
                f"Could not encode {self.model.__name__} for {self.collection_name}: {e}"
            ) from e
        except PyMongoError as e:
            raise StoreError(f"Insert into {self.collection_name} failed: {e}") from e

        inserted_id = result.inserted_id
        if not isinstance(inserted_id, ObjectId):
            raise IdentifierKindMismatch(inserted_id)

        with LogContext(collection=self.collection_name, document_id=inserted_id):
            logger.debug("Document inserted")

        return await self.fetch_by_id(inserted_id)

    async def fetch_by_id(self, document_id: ObjectId) -> Optional[T]:
        """
        Looks up a document by id. Absence is None, not an error.

        Raises:
            DeserializationError: If the stored document does not decode
            StoreError: On driver failure
        """
        return await self._find_one({"_id": document_id})

    async def fetch_by_field(self, field_name: str, value: Any) -> Optional[T]:
        """
        Returns the first document whose field equals value.

        Args:
            field_name: Model field name or its stored name
            value: Value to match
        """
        return await self._find_one({self.model.wire_field(field_name): value})

    async def fetch_many(self, query: Dict[str, Any]) -> AsyncIterator[FetchResult[T]]:
        """
        Lazily yields every document matching the query.

        Each record decodes independently: a record that fails to decode is
        yielded as a FetchResult carrying the error and iteration continues.
        The sequence is single-pass.

        Raises:
            StoreError: If the cursor fails mid-iteration
        """
        cursor = self._collection.find(query)
        try:
            async for raw in cursor:
                try:
                    yield FetchResult(value=self.model.from_document(raw))
                except DeserializationError as e:
                    logger.warning(
                        f"Undecodable document in {self.collection_name}: {e.message}"
                    )
                    yield FetchResult(error=e)
        except InvalidBSON as e:
            raise DeserializationError(
                f"Corrupt document in {self.collection_name}: {e}"
            ) from e
        except PyMongoError as e:
            raise StoreError(f"Query on {self.collection_name} failed: {e}") from e

    async def replace_by_id(self, document_id: ObjectId, document: T) -> Optional[T]:
        """
        Overwrites the whole document at document_id, then re-reads it.

        The previous document is not required to exist; replacing a missing
        id writes nothing and the re-read returns None.
        """
        raw = document.to_document()
        raw.pop("_id", None)

        try:
            result = await self._collection.replace_one({"_id": document_id}, raw)
        except InvalidDocument as e:
            raise SerializationError(
                f"Could not encode {self.model.__name__} for {self.collection_name}: {e}"
            ) from e
        except PyMongoError as e:
            raise StoreError(f"Replace in {self.collection_name} failed: {e}") from e

        with LogContext(collection=self.collection_name, document_id=document_id):
            logger.debug(f"Document replaced (matched={result.matched_count})")

        return await self.fetch_by_id(document_id)

    async def delete_by_id(self, document_id: ObjectId) -> int:
        """
        Deletes at most one document.

        Returns:
            1 if a document was deleted, 0 if none matched
        """
        try:
            result = await self._collection.delete_one({"_id": document_id})
        except PyMongoError as e:
            raise StoreError(f"Delete from {self.collection_name} failed: {e}") from e

        with LogContext(collection=self.collection_name, document_id=document_id):
            logger.debug(f"Deleted {result.deleted_count} document(s)")

        return result.deleted_count

    async def _find_one(self, query: Dict[str, Any]) -> Optional[T]:
        try:
            raw = await self._collection.find_one(query)
        except InvalidBSON as e:
            raise DeserializationError(
                f"Corrupt document in {self.collection_name}: {e}"
            ) from e
        except PyMongoError as e:
            raise StoreError(f"Lookup in {self.collection_name} failed: {e}") from e

        if raw is None:
            return None
        return self.model.from_document(raw)
