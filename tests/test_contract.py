import pytest

from storekeeper.data.contract import (
    BASE_CONTENT_URI,
    CONTENT_AUTHORITY,
    CONTENT_ITEM_TYPE,
    CONTENT_LIST_TYPE,
    CONTENT_URI,
    CollectionUri,
    ItemUri,
    SQLITE_MAX_INTEGER,
    inventory_table,
    parse_id,
    parse_uri,
    with_appended_id,
)


def test_content_uri_is_built_from_authority_and_path():
    assert BASE_CONTENT_URI == f"content://{CONTENT_AUTHORITY}"
    assert CONTENT_URI == f"content://{CONTENT_AUTHORITY}/inventory"


def test_type_strings_name_authority_and_collection():
    assert CONTENT_LIST_TYPE.endswith(f"/{CONTENT_AUTHORITY}/inventory")
    assert CONTENT_ITEM_TYPE.endswith(f"/{CONTENT_AUTHORITY}/inventory")
    assert CONTENT_LIST_TYPE != CONTENT_ITEM_TYPE


def test_parse_collection_uri():
    assert parse_uri(CONTENT_URI) == CollectionUri()
    assert parse_uri(CONTENT_URI + "/") == CollectionUri()
    assert parse_uri(CONTENT_URI + "?limit=3") == CollectionUri()


def test_parse_item_uri():
    resolved = parse_uri(CONTENT_URI + "/42")
    assert resolved == ItemUri(42)
    assert resolved.item_id == 42
    assert resolved.uri == CONTENT_URI + "/42"


@pytest.mark.parametrize("uri", [
    None,
    17,
    "",
    "content://other.authority/inventory",
    "http://com.example.storekeeper/inventory",
    CONTENT_URI + "s",
    BASE_CONTENT_URI,
    CONTENT_URI + "/abc",
    CONTENT_URI + "/-1",
    CONTENT_URI + "/1.5",
    CONTENT_URI + "/1/2",
    CONTENT_URI + "/9223372036854775808",
])
def test_unmatched_uris_resolve_to_none(uri):
    assert parse_uri(uri) is None


def test_with_appended_id_and_parse_id():
    uri = with_appended_id(CONTENT_URI, 7)
    assert uri == CONTENT_URI + "/7"
    assert with_appended_id(CONTENT_URI + "/", 7) == uri
    assert parse_id(uri) == 7
    assert parse_id(CONTENT_URI) == -1


def test_collection_uri_property():
    assert CollectionUri().uri == CONTENT_URI


def test_table_columns_and_constraints():
    columns = {c.name: c for c in inventory_table.columns}
    assert list(columns) == [
        "_id", "name", "price", "quantity", "image",
        "supplier_name", "supplier_email", "supplier_phone",
    ]
    assert columns["_id"].primary_key
    assert columns["image"].nullable
    for name in ("name", "price", "quantity", "supplier_name", "supplier_email", "supplier_phone"):
        assert columns[name].nullable is False


def test_item_ids_stop_at_the_sqlite_integer_limit():
    largest = CONTENT_URI + f"/{SQLITE_MAX_INTEGER}"
    assert parse_uri(largest) == ItemUri(SQLITE_MAX_INTEGER)
    assert parse_id(largest) == SQLITE_MAX_INTEGER
    assert parse_id(CONTENT_URI + f"/{SQLITE_MAX_INTEGER + 1}") == -1
