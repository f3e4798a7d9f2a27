from typing import Optional, Any


class GrokListError(Exception):
    """
    Base exception for the grok_list application.
    """
    def __init__(self, message: str, code: str = "INTERNAL_ERROR", status_code: int = 500, details: Optional[Any] = None):
        self.message = message
        self.code = code
        self.status_code = status_code
        self.details = details
        super().__init__(self.message)


class RepositoryError(GrokListError):
    """
    Base for every failure raised by the document repository and the
    operations built on it.
    """
    def __init__(self, message: str = "Repository error", code: str = "REPOSITORY_ERROR", details: Optional[Any] = None):
        super().__init__(message, code=code, status_code=500, details=details)


class IdentifierKindMismatch(RepositoryError):
    """
    Raised when MongoDB hands back an inserted id that is not an ObjectId.
    """
    def __init__(self, received: Any = None):
        super().__init__(
            f"Expected an ObjectId for the inserted id, got {type(received).__name__}",
            code="IDENTIFIER_KIND_MISMATCH",
            details={"received": repr(received)},
        )


class StoreError(RepositoryError):
    """
    Raised when the driver fails (connectivity, write or read errors).
    """
    def __init__(self, message: str = "MongoDB operation failed", details: Optional[Any] = None):
        super().__init__(message, code="STORE_ERROR", details=details)


class SerializationError(RepositoryError):
    """
    Raised when an entity cannot be converted into a BSON document.
    """
    def __init__(self, message: str = "Could not serialize to BSON", details: Optional[Any] = None):
        super().__init__(message, code="SERIALIZATION_ERROR", details=details)


class DeserializationError(RepositoryError):
    """
    Raised when a stored document cannot be converted back into an entity.
    """
    def __init__(self, message: str = "Could not deserialize from BSON", details: Optional[Any] = None):
        super().__init__(message, code="DESERIALIZATION_ERROR", details=details)


class ObjectNotFound(RepositoryError):
    """
    Raised by composite operations when a document they rely on is missing.
    Plain fetches return None instead.
    """
    def __init__(self, object_id: Any, collection: str):
        self.object_id = object_id
        self.collection = collection
        super().__init__(
            f"No document with id {object_id} in {collection}",
            code="OBJECT_NOT_FOUND",
            details={"id": str(object_id), "collection": collection},
        )
