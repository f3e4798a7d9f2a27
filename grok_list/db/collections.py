"""
grok_list/db/collections.py

Purpose: Entity kind to collection name routing

- One entry per entity kind, checked for completeness on import
- Keeps collection name strings out of call sites
"""

from enum import Enum
from typing import Dict


class EntityKind(str, Enum):
    """Kinds of documents the service persists."""

    USER = "user"
    STORE = "store"
    LIST = "list"


_COLLECTION_NAMES: Dict[EntityKind, str] = {
    EntityKind.USER: "users",
    EntityKind.STORE: "stores",
    EntityKind.LIST: "lists",
}

_missing = [kind.name for kind in EntityKind if kind not in _COLLECTION_NAMES]
if _missing:
    raise RuntimeError(f"No collection name configured for: {', '.join(_missing)}")


def collection_name(kind: EntityKind) -> str:
    """
    Returns the physical collection name for an entity kind.

    Args:
        kind: Entity kind

    Returns:
        Collection name (e.g. "lists")
    """
    return _COLLECTION_NAMES[kind]
