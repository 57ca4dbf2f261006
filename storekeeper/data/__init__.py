from .contract import (
    CONTENT_AUTHORITY,
    CONTENT_ITEM_TYPE,
    CONTENT_LIST_TYPE,
    CONTENT_URI,
    CollectionUri,
    ItemUri,
    parse_id,
    parse_uri,
    with_appended_id,
)
from .db_helper import DATABASE_VERSION, InventoryDbHelper
from .exceptions import (
    InvalidArgument,
    InvalidIdentifier,
    InventoryError,
    StorageFault,
    UnsupportedOperation,
)
from .notifications import ChangeEvent, ChangeNotifier, Subscription
from .provider import InventoryProvider, QueryResult

__all__ = [
    'CONTENT_AUTHORITY',
    'CONTENT_ITEM_TYPE',
    'CONTENT_LIST_TYPE',
    'CONTENT_URI',
    'CollectionUri',
    'ItemUri',
    'parse_id',
    'parse_uri',
    'with_appended_id',
    'DATABASE_VERSION',
    'InventoryDbHelper',
    'InvalidArgument',
    'InvalidIdentifier',
    'InventoryError',
    'StorageFault',
    'UnsupportedOperation',
    'ChangeEvent',
    'ChangeNotifier',
    'Subscription',
    'InventoryProvider',
    'QueryResult',
]
