from grok_list.db.collections import EntityKind, collection_name


def test_every_kind_has_a_collection():
    names = {kind: collection_name(kind) for kind in EntityKind}

    assert names == {
        EntityKind.USER: "users",
        EntityKind.STORE: "stores",
        EntityKind.LIST: "lists",
    }


def test_collection_names_are_distinct():
    names = [collection_name(kind) for kind in EntityKind]

    assert len(set(names)) == len(names)
