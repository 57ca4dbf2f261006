"""Names and identifiers shared by everything that talks to the inventory store."""
from dataclasses import dataclass
from typing import Optional, Union
from urllib.parse import urlsplit

from sqlalchemy import Column, Integer, LargeBinary, MetaData, Table, Text, text

# Name for the whole store, used as the authority of every content URI
CONTENT_AUTHORITY = "com.example.storekeeper"
CONTENT_SCHEME = "content"
BASE_CONTENT_URI = f"{CONTENT_SCHEME}://{CONTENT_AUTHORITY}"

PATH_INVENTORY = "inventory"
CONTENT_URI = f"{BASE_CONTENT_URI}/{PATH_INVENTORY}"

CONTENT_LIST_TYPE = f"vnd.storekeeper.cursor.dir/{CONTENT_AUTHORITY}/{PATH_INVENTORY}"
CONTENT_ITEM_TYPE = f"vnd.storekeeper.cursor.item/{CONTENT_AUTHORITY}/{PATH_INVENTORY}"

TABLE_NAME = "inventory"

# Largest value a SQLite INTEGER column can hold
SQLITE_MAX_INTEGER = 2 ** 63 - 1

COLUMN_ID = "_id"
COLUMN_NAME = "name"
COLUMN_PRICE = "price"
COLUMN_QUANTITY = "quantity"
COLUMN_IMAGE = "image"
COLUMN_SUPPLIER_NAME = "supplier_name"
COLUMN_SUPPLIER_EMAIL = "supplier_email"
COLUMN_SUPPLIER_PHONE = "supplier_phone"

# Writable columns, in validation order
VALUE_COLUMNS = (
    COLUMN_NAME,
    COLUMN_PRICE,
    COLUMN_QUANTITY,
    COLUMN_IMAGE,
    COLUMN_SUPPLIER_NAME,
    COLUMN_SUPPLIER_EMAIL,
    COLUMN_SUPPLIER_PHONE,
)
ALL_COLUMNS = (COLUMN_ID,) + VALUE_COLUMNS

REQUIRED_TEXT_COLUMNS = (
    COLUMN_NAME,
    COLUMN_PRICE,
    COLUMN_SUPPLIER_NAME,
    COLUMN_SUPPLIER_EMAIL,
    COLUMN_SUPPLIER_PHONE,
)

metadata = MetaData()

inventory_table = Table(
    TABLE_NAME,
    metadata,
    Column(COLUMN_ID, Integer, primary_key=True),
    Column(COLUMN_NAME, Text, nullable=False),
    Column(COLUMN_PRICE, Text, nullable=False),
    Column(COLUMN_QUANTITY, Integer, nullable=False, server_default=text("0")),
    Column(COLUMN_IMAGE, LargeBinary, nullable=True),
    Column(COLUMN_SUPPLIER_NAME, Text, nullable=False),
    Column(COLUMN_SUPPLIER_EMAIL, Text, nullable=False),
    Column(COLUMN_SUPPLIER_PHONE, Text, nullable=False),
    sqlite_autoincrement=True,
)


@dataclass(frozen=True)
class CollectionUri:
    """Addresses every row of the inventory table."""

    @property
    def uri(self) -> str:
        return CONTENT_URI


@dataclass(frozen=True)
class ItemUri:
    """Addresses exactly one row by its id."""

    item_id: int

    @property
    def uri(self) -> str:
        return with_appended_id(CONTENT_URI, self.item_id)


ResolvedUri = Union[CollectionUri, ItemUri]


def path_segments(uri: str) -> list:
    """Return the non-empty path segments of ``uri``."""
    return [segment for segment in urlsplit(uri).path.split("/") if segment]


def parse_uri(uri) -> Optional[ResolvedUri]:
    """Classify ``uri`` as a collection or item identifier.

    Returns ``None`` for anything that is not one of the two inventory shapes.
    """
    if not isinstance(uri, str):
        return None
    parts = urlsplit(uri.strip())
    if parts.scheme != CONTENT_SCHEME or parts.netloc != CONTENT_AUTHORITY:
        return None
    segments = path_segments(uri.strip())
    if segments == [PATH_INVENTORY]:
        return CollectionUri()
    if len(segments) == 2 and segments[0] == PATH_INVENTORY:
        item_id = segments[1]
        if item_id.isascii() and item_id.isdigit() and int(item_id) <= SQLITE_MAX_INTEGER:
            return ItemUri(int(item_id))
    return None


def with_appended_id(uri: str, item_id: int) -> str:
    return f"{uri.rstrip('/')}/{int(item_id)}"


def parse_id(uri: str) -> int:
    """Extract the numeric id after the final path separator, or -1."""
    segments = path_segments(uri)
    if not segments:
        return -1
    last = segments[-1]
    if not (last.isascii() and last.isdigit()) or int(last) > SQLITE_MAX_INTEGER:
        return -1
    return int(last)
