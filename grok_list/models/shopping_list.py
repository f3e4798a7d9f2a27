"""
grok_list/models/shopping_list.py

Purpose: Shopping list document model

- List name and owning user id (stored as "userId")
- Items embedded by value, kept in insertion order
- Item categories stored lower-cased, amounts free-form
"""

from typing import List, Optional

from bson import ObjectId
from pydantic import BaseModel, Field, field_validator

from grok_list.models.base import MongoModel


class ListItem(BaseModel):
    """
    One entry of a shopping list. Embedded in the list document, so it has
    no identifier of its own.
    """

    name: str = Field(..., min_length=1)
    category: Optional[str] = None
    amount: Optional[str] = None

    class Config:
        frozen = True

    @field_validator("category")
    @classmethod
    def lowercase_category(cls, v):
        return v.lower() if v is not None else v

    @classmethod
    def builder(cls, name: str) -> "ListItemBuilder":
        return ListItemBuilder(name)


class ListItemBuilder:
    """
    Usage:
        item = ListItem.builder("salmon").category("Meat").amount("2lb").build()
    """

    def __init__(self, name: str):
        self._name = name
        self._category: Optional[str] = None
        self._amount: Optional[str] = None

    def category(self, category: str) -> "ListItemBuilder":
        self._category = category.lower()
        return self

    def amount(self, amount: str) -> "ListItemBuilder":
        self._amount = amount
        return self

    def build(self) -> ListItem:
        return ListItem(name=self._name, category=self._category, amount=self._amount)


class ShoppingList(MongoModel):
    """
    A user's shopping list, stored in the lists collection.

    The owner is referenced only by id; there is no live link to the user
    document.
    """

    name: str
    user_id: ObjectId = Field(..., alias="userId")
    items: List[ListItem] = Field(default_factory=list)

    @classmethod
    def builder(cls, name: str, user_id: ObjectId) -> "ShoppingListBuilder":
        return ShoppingListBuilder(name, user_id)

    def with_item(self, item: ListItem) -> "ShoppingList":
        """Returns a copy with the item appended after the existing ones."""
        return self.model_copy(update={"items": [*self.items, item]})


class ShoppingListBuilder:
    """
    Usage:
        shopping_list = (
            ShoppingList.builder("weekly", user.id)
            .add_item(salmon)
            .add_item(broccoli)
            .build()
        )
    """

    def __init__(self, name: str, user_id: ObjectId):
        self._name = name
        self._user_id = user_id
        self._items: List[ListItem] = []

    def add_item(self, item: ListItem) -> "ShoppingListBuilder":
        self._items.append(item)
        return self

    def build(self) -> ShoppingList:
        return ShoppingList(name=self._name, user_id=self._user_id, items=list(self._items))
