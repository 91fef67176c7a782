from conftest import make_product
from pharmacy_admin.admin.collection import ProductCollection


def ids(collection):
    return [p.id for p in collection]


def test_replace_all_keeps_order_and_drops_duplicate_ids():
    collection = ProductCollection([make_product("a"), make_product("b"), make_product("a", stock=99)])

    assert ids(collection) == ["a", "b"]
    assert collection.get("a").stock_quantity == 10


def test_upsert_updates_in_place_or_appends():
    collection = ProductCollection([make_product("a"), make_product("b"), make_product("c")])

    appended = collection.upsert(make_product("b", stock=1))
    assert appended is False
    assert ids(collection) == ["a", "b", "c"]
    assert collection.get("b").stock_quantity == 1

    appended = collection.upsert(make_product("d"))
    assert appended is True
    assert ids(collection) == ["a", "b", "c", "d"]


def test_replace_keeps_position_when_server_returns_new_id():
    collection = ProductCollection([make_product("a"), make_product("b"), make_product("c")])

    collection.replace("b", make_product("b2"))

    assert ids(collection) == ["a", "b2", "c"]


def test_remove_reports_whether_anything_was_removed():
    collection = ProductCollection([make_product("a"), make_product("b")])

    assert collection.remove("a") is True
    assert collection.remove("a") is False
    assert ids(collection) == ["b"]
    assert "a" not in collection and "b" in collection
    assert len(collection) == 1
