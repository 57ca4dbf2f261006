"""
Inventory provider.

Single entry point for reading and writing inventory rows. Every request is
addressed by a content URI: the collection URI selects rows with the caller's
selection, an item URI selects exactly the row with that id. Writes are
validated before the store is touched and observers are notified once the
write has committed.
"""
import logging
import re
import threading
from contextlib import nullcontext
from typing import Any, Mapping, Optional, Sequence

from sqlalchemy import delete, insert, select, text, update

from .contract import (
    ALL_COLUMNS,
    COLUMN_ID,
    CONTENT_ITEM_TYPE,
    CONTENT_LIST_TYPE,
    CollectionUri,
    ItemUri,
    inventory_table,
    parse_uri,
    with_appended_id,
)
from .db_helper import InventoryDbHelper, transactional
from .exceptions import InvalidArgument, InvalidIdentifier, StorageFault, UnsupportedOperation
from .notifications import ChangeNotifier, Observer, Subscription
from .validation import validate_values

logger = logging.getLogger(__name__)

# Quoted literals are matched first so a "?" inside them is left alone
_PLACEHOLDER = re.compile(r"'(?:[^']|'')*'|\"(?:[^\"]|\"\")*\"|\?")


class QueryResult(list):
    """Rows returned by a query, tied to the URI they were read through."""

    def __init__(self, rows, notification_uri: str, notifier: ChangeNotifier):
        super().__init__(rows)
        self.notification_uri = notification_uri
        self._notifier = notifier

    def watch(self, observer: Observer, notify_for_descendants: bool = True) -> Subscription:
        """Subscribe ``observer`` to later changes under the queried URI."""
        return self._notifier.subscribe(self.notification_uri, observer, notify_for_descendants)


def bind_selection(selection: Optional[str], selection_args: Optional[Sequence[Any]]):
    """Turn a ``?``-placeholder selection into a bound SQL clause."""
    args = list(selection_args or ())
    if not selection:
        if args:
            raise InvalidArgument("selection_args", "Selection arguments given without a selection")
        return None

    names = []

    def _name_placeholder(match):
        token = match.group(0)
        if token != "?":
            return token
        names.append(f"arg{len(names)}")
        return f":{names[-1]}"

    sql = _PLACEHOLDER.sub(_name_placeholder, selection)
    if len(names) != len(args):
        raise InvalidArgument(
            "selection_args",
            f"Selection has {len(names)} placeholders but {len(args)} arguments were given",
        )
    clause = text(sql)
    if names:
        clause = clause.bindparams(**dict(zip(names, args)))
    return clause


class InventoryProvider:
    def __init__(self, helper: InventoryDbHelper, notifier: Optional[ChangeNotifier] = None):
        self.helper = helper
        self.notifier = notifier if notifier is not None else ChangeNotifier()
        self._write_lock = threading.Lock()

    def _database(self):
        return self.helper.open()

    def _read_lock(self):
        # An in-memory store has a single connection, so a read must not
        # start while a write transaction is open on it
        if self.helper.shares_connection:
            return self._write_lock
        return nullcontext()

    def _resolve(self, uri):
        resolved = parse_uri(uri)
        if resolved is None:
            raise InvalidIdentifier(uri)
        return resolved

    def _where(self, resolved, selection, selection_args):
        if isinstance(resolved, ItemUri):
            # The id in the URI wins over anything the caller passed
            return inventory_table.c[COLUMN_ID] == resolved.item_id
        return bind_selection(selection, selection_args)

    def get_type(self, uri) -> str:
        resolved = self._resolve(uri)
        if isinstance(resolved, ItemUri):
            return CONTENT_ITEM_TYPE
        return CONTENT_LIST_TYPE

    def query(
        self,
        uri,
        projection: Optional[Sequence[str]] = None,
        selection: Optional[str] = None,
        selection_args: Optional[Sequence[Any]] = None,
        sort_order: Optional[str] = None,
    ) -> QueryResult:
        resolved = self._resolve(uri)
        if projection:
            for column in projection:
                if column not in ALL_COLUMNS:
                    raise InvalidArgument(column, f"Unknown column {column!r}")
            stmt = select(*[inventory_table.c[column] for column in projection])
        else:
            stmt = select(inventory_table)

        where = self._where(resolved, selection, selection_args)
        if where is not None:
            stmt = stmt.where(where)
        if sort_order:
            stmt = stmt.order_by(text(sort_order))

        engine = self._database()
        with self._read_lock():
            with transactional(engine, f"Failed to query {uri}") as conn:
                rows = [dict(row._mapping) for row in conn.execute(stmt)]
        logger.debug("query %s returned %d rows", uri, len(rows))
        return QueryResult(rows, resolved.uri, self.notifier)

    def insert(self, uri, values: Mapping[str, Any]) -> Optional[str]:
        """Insert one item and return its URI, or ``None`` if the store refused it."""
        resolved = self._resolve(uri)
        if not isinstance(resolved, CollectionUri):
            raise UnsupportedOperation("insertion", uri)

        cleaned = validate_values(values)
        engine = self._database()
        try:
            with self._write_lock:
                with transactional(engine, f"Failed to insert row for {uri}") as conn:
                    result = conn.execute(insert(inventory_table).values(**cleaned))
                    new_id = result.inserted_primary_key[0]
        except StorageFault:
            return None
        if new_id is None:
            logger.error("Failed to insert row for %s", uri)
            return None

        self.notifier.notify_change(resolved.uri)
        return with_appended_id(resolved.uri, new_id)

    def update(
        self,
        uri,
        values: Mapping[str, Any],
        selection: Optional[str] = None,
        selection_args: Optional[Sequence[Any]] = None,
    ) -> int:
        """Patch the matched rows with ``values`` and return how many changed."""
        resolved = self._resolve(uri)
        cleaned = validate_values(values, partial=True)
        if not cleaned:
            return 0

        stmt = update(inventory_table).values(**cleaned)
        where = self._where(resolved, selection, selection_args)
        if where is not None:
            stmt = stmt.where(where)

        with self._write_lock:
            with transactional(self._database(), f"Failed to update {uri}") as conn:
                rows_updated = conn.execute(stmt).rowcount
        if rows_updated:
            self.notifier.notify_change(resolved.uri)
        return rows_updated

    def delete(
        self,
        uri,
        selection: Optional[str] = None,
        selection_args: Optional[Sequence[Any]] = None,
    ) -> int:
        resolved = self._resolve(uri)
        stmt = delete(inventory_table)
        where = self._where(resolved, selection, selection_args)
        if where is not None:
            stmt = stmt.where(where)

        with self._write_lock:
            with transactional(self._database(), f"Failed to delete {uri}") as conn:
                rows_deleted = conn.execute(stmt).rowcount
        if rows_deleted:
            self.notifier.notify_change(resolved.uri)
        return rows_deleted

    def subscribe(self, uri, observer: Observer, notify_for_descendants: bool = True) -> Subscription:
        return self.notifier.subscribe(uri, observer, notify_for_descendants)

    def notify_change(self, uri) -> int:
        return self.notifier.notify_change(uri)
