"""
grok_list/services/grocery_service.py

Purpose: Typed operations on users, stores and shopping lists

- One DocumentRepository per entity type
- Add / get / delete per entity, name lookup for users
- Per-user list listing
- Appending an item to an existing list (read-modify-write)
"""

from typing import AsyncIterator, Optional

from bson import ObjectId
from motor.motor_asyncio import AsyncIOMotorDatabase

from grok_list.core.exceptions import ObjectNotFound, StoreError
from grok_list.core.logging import get_logger, LogContext
from grok_list.db.collections import EntityKind
from grok_list.db.mongo import get_database
from grok_list.db.repository import DocumentRepository, FetchResult
from grok_list.models.shopping_list import ListItem, ShoppingList
from grok_list.models.store import Store
from grok_list.models.user import User

logger = get_logger(__name__)


class GroceryService:
    """
    Entity-specific operations over the generic repository.

    Errors from the repository are passed through unchanged.
    """

    def __init__(self, database: AsyncIOMotorDatabase):
        self.users: DocumentRepository[User] = DocumentRepository(database, User, EntityKind.USER)
        self.stores: DocumentRepository[Store] = DocumentRepository(database, Store, EntityKind.STORE)
        self.lists: DocumentRepository[ShoppingList] = DocumentRepository(database, ShoppingList, EntityKind.LIST)

    # Users

    async def add_user(self, user: User) -> Optional[User]:
        created = await self.users.insert(user)
        if created is not None:
            with LogContext(user_id=created.id):
                logger.info("User created")
        return created

    async def get_user_by_id(self, user_id: ObjectId) -> Optional[User]:
        return await self.users.fetch_by_id(user_id)

    async def get_user_by_name(self, name: str) -> Optional[User]:
        return await self.users.fetch_by_field("name", name)

    # Stores

    async def add_store(self, store: Store) -> Optional[Store]:
        return await self.stores.insert(store)

    async def get_store_by_id(self, store_id: ObjectId) -> Optional[Store]:
        return await self.stores.fetch_by_id(store_id)

    async def delete_store_by_id(self, store_id: ObjectId) -> int:
        return await self.stores.delete_by_id(store_id)

    # Lists

    async def add_list(self, shopping_list: ShoppingList) -> Optional[ShoppingList]:
        return await self.lists.insert(shopping_list)

    async def get_list_by_id(self, list_id: ObjectId) -> Optional[ShoppingList]:
        return await self.lists.fetch_by_id(list_id)

    async def delete_list_by_id(self, list_id: ObjectId) -> int:
        return await self.lists.delete_by_id(list_id)

    def get_lists_by_user(self, user_id: ObjectId) -> AsyncIterator[FetchResult[ShoppingList]]:
        """
        Lazily yields every list owned by user_id.

        A list that fails to decode shows up as a FetchResult with its error;
        the remaining lists are still yielded.
        """
        return self.lists.fetch_many({ShoppingList.wire_field("user_id"): user_id})

    async def add_list_item(self, list_id: ObjectId, item: ListItem) -> Optional[ShoppingList]:
        """
        Appends an item to the end of an existing list.

        Reads the list, appends in memory and replaces the whole document.
        There is no concurrency guard: two concurrent appends to the same
        list can read the same state, and the later replace drops the other
        item.

        Raises:
            ObjectNotFound: If no list has this id
        """
        with LogContext(collection=self.lists.collection_name, document_id=list_id):
            current = await self.lists.fetch_by_id(list_id)
            if current is None:
                logger.warning("Cannot add item, list not found")
                raise ObjectNotFound(list_id, self.lists.collection_name)

            updated = await self.lists.replace_by_id(list_id, current.with_item(item))
            logger.info(f"Item '{item.name}' added to list")
            return updated


async def get_grocery_service() -> GroceryService:
    """
    FastAPI dependency bound to the shared database.

    Raises:
        StoreError: If MongoDB is not connected
    """
    try:
        database = await get_database()
    except RuntimeError as e:
        raise StoreError("MongoDB is not connected") from e
    return GroceryService(database)
