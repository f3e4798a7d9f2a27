"""
Tests for GroceryService.

Covers:
- Per-entity add / get / delete
- Listing a user's lists
- Appending items to an existing list
- The end-to-end user -> list -> append scenario
"""

import asyncio
import logging
from unittest.mock import AsyncMock

import pytest
from bson import ObjectId
from pymongo.errors import AutoReconnect

from grok_list.core.exceptions import ObjectNotFound, StoreError
from grok_list.models.shopping_list import ListItem, ShoppingList
from grok_list.models.store import Store
from grok_list.models.user import User


def _item(name, category=None, amount=None):
    builder = ListItem.builder(name)
    if category is not None:
        builder.category(category)
    if amount is not None:
        builder.amount(amount)
    return builder.build()


@pytest.mark.asyncio
async def test_add_and_get_user_by_name(service):
    created = await service.add_user(User.new("foo", "foo@bar.com"))

    found = await service.get_user_by_name("foo")

    assert found == created
    assert await service.get_user_by_id(created.id) == created
    assert await service.get_user_by_name("nobody") is None


@pytest.mark.asyncio
async def test_store_lifecycle(service):
    created = await service.add_store(
        Store.builder("corner shop").add_category("Meat").add_category("meat").build()
    )

    fetched = await service.get_store_by_id(created.id)
    assert fetched.categories == ["meat", "meat"]

    assert await service.delete_store_by_id(created.id) == 1
    assert await service.get_store_by_id(created.id) is None
    assert await service.delete_store_by_id(created.id) == 0


@pytest.mark.asyncio
async def test_list_lifecycle(service):
    created = await service.add_list(
        ShoppingList.builder("weekly", ObjectId()).add_item(_item("salmon")).build()
    )

    assert await service.get_list_by_id(created.id) == created
    assert await service.delete_list_by_id(created.id) == 1
    assert await service.get_list_by_id(created.id) is None


@pytest.mark.asyncio
async def test_get_lists_by_user_returns_only_owned_lists(service):
    owner = await service.add_user(User.new("foo", "foo@bar.com"))
    other = await service.add_user(User.new("bar", "bar@bar.com"))

    owned_ids = set()
    for name in ("weekly", "party", "camping"):
        created = await service.add_list(ShoppingList.builder(name, owner.id).build())
        owned_ids.add(created.id)
    for name in ("other weekly", "other party"):
        await service.add_list(ShoppingList.builder(name, other.id).build())

    results = [result async for result in service.get_lists_by_user(owner.id)]

    assert all(result.ok for result in results)
    assert {result.value.id for result in results} == owned_ids
    assert all(result.value.user_id == owner.id for result in results)


@pytest.mark.asyncio
async def test_get_lists_by_user_without_lists(service):
    results = [result async for result in service.get_lists_by_user(ObjectId())]

    assert results == []


@pytest.mark.asyncio
async def test_add_list_item_appends_last(service):
    first, second = _item("A"), _item("B")
    created = await service.add_list(
        ShoppingList.builder("weekly", ObjectId()).add_item(first).add_item(second).build()
    )

    updated = await service.add_list_item(created.id, _item("C"))

    assert updated.id == created.id
    assert [item.name for item in updated.items] == ["A", "B", "C"]
    fetched = await service.get_list_by_id(created.id)
    assert fetched == updated


@pytest.mark.asyncio
async def test_add_list_item_missing_list_raises_not_found(service):
    missing_id = ObjectId()

    with pytest.raises(ObjectNotFound) as exc_info:
        await service.add_list_item(missing_id, _item("salmon"))

    assert exc_info.value.object_id == missing_id
    assert exc_info.value.collection == "lists"


@pytest.mark.asyncio
async def test_add_list_item_does_not_hide_store_errors(service):
    service.lists._collection = AsyncMock()
    service.lists._collection.find_one.side_effect = AutoReconnect("connection reset")

    with pytest.raises(StoreError):
        await service.add_list_item(ObjectId(), _item("salmon"))


@pytest.mark.asyncio
async def test_concurrent_style_appends_last_write_wins(service):
    """Two appends built from the same read: the second replace drops the first item."""
    created = await service.add_list(ShoppingList.builder("weekly", ObjectId()).build())
    stale = await service.get_list_by_id(created.id)

    await service.add_list_item(created.id, _item("first"))
    await service.lists.replace_by_id(created.id, stale.with_item(_item("second")))

    fetched = await service.get_list_by_id(created.id)
    assert [item.name for item in fetched.items] == ["second"]


@pytest.mark.asyncio
async def test_end_to_end_user_list_and_append(service):
    user = await service.add_user(User.new("foo", "foo@bar.com"))

    assert user.id is not None
    assert str(user.id) != ""
    assert user.name == "foo"
    assert user.email == "foo@bar.com"

    salmon = _item("salmon", "Meat", "2lb")
    created = await service.add_list(
        ShoppingList.builder("groceries", user.id).add_item(salmon).build()
    )
    fetched = await service.get_list_by_id(created.id)
    assert fetched.items[0].category == "meat"

    await service.add_list_item(created.id, _item("brocc", "veg", "1"))

    fetched = await service.get_list_by_id(created.id)
    assert fetched.items == [
        ListItem(name="salmon", category="meat", amount="2lb"),
        ListItem(name="brocc", category="veg", amount="1"),
    ]


@pytest.mark.asyncio
async def test_overlapping_appends_keep_log_context_apart(service, fake_db, caplog):
    """Appends interleaved on the event loop log under their own list id only."""
    collection = fake_db["lists"]
    find_one, replace_one = collection.find_one, collection.replace_one

    async def yielding_find_one(query):
        await asyncio.sleep(0)
        return await find_one(query)

    async def yielding_replace_one(query, replacement):
        await asyncio.sleep(0)
        return await replace_one(query, replacement)

    first = await service.add_list(ShoppingList.builder("weekly", ObjectId()).build())
    second = await service.add_list(ShoppingList.builder("party", ObjectId()).build())
    collection.find_one = yielding_find_one
    collection.replace_one = yielding_replace_one
    factory = logging.getLogRecordFactory()

    with caplog.at_level(logging.INFO, logger="grok_list"):
        await asyncio.gather(
            service.add_list_item(first.id, _item("salmon")),
            service.add_list_item(second.id, _item("balloons")),
        )

    added = {r.getMessage(): r.document_id for r in caplog.records if "added to list" in r.getMessage()}
    assert added == {
        "Item 'salmon' added to list": first.id,
        "Item 'balloons' added to list": second.id,
    }
    assert logging.getLogRecordFactory() is factory
    later = factory("grok_list.tests", logging.INFO, __file__, 1, "unrelated", (), None)
    assert not hasattr(later, "document_id")
    assert not hasattr(later, "collection")
