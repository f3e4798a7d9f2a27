"""
grok_list/models/store.py

Purpose: Store document model

- Store name
- Ordered categories, always stored lower-cased
"""

from typing import List

from pydantic import Field, field_validator

from grok_list.models.base import MongoModel


class Store(MongoModel):
    name: str = Field(..., min_length=1)
    categories: List[str] = Field(default_factory=list)

    @field_validator("categories")
    @classmethod
    def lowercase_categories(cls, v):
        return [category.lower() for category in v]

    @classmethod
    def builder(cls, name: str) -> "StoreBuilder":
        return StoreBuilder(name)


class StoreBuilder:
    """
    Collects optional store fields before materializing a Store.

    Usage:
        store = Store.builder("corner shop").add_category("Meat").build()
    """

    def __init__(self, name: str):
        self._name = name
        self._categories: List[str] = []

    def add_category(self, category: str) -> "StoreBuilder":
        self._categories.append(category.lower())
        return self

    def build(self) -> Store:
        return Store(name=self._name, categories=list(self._categories))
