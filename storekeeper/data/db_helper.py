"""
Database helper for the inventory store.

Owns the SQLite file: creates it and the inventory table on first use and
keeps the stored schema version (``PRAGMA user_version``) in step with
``DATABASE_VERSION``.
"""
import logging
import threading
from contextlib import contextmanager
from pathlib import Path
from typing import Callable, List, Optional

from sqlalchemy import create_engine
from sqlalchemy.engine import Connection, Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.pool import StaticPool

from .contract import inventory_table
from .exceptions import StorageFault

logger = logging.getLogger(__name__)

DATABASE_NAME = "store.db"
DATABASE_VERSION = 1

MEMORY_PATH = ":memory:"


@contextmanager
def transactional(engine, message="DB transaction failed"):
    """Yield a connection inside a transaction that commits on success."""
    try:
        with engine.begin() as conn:
            yield conn
    except SQLAlchemyError as e:
        logger.error(f"{message}: %s", e, exc_info=True)
        raise StorageFault(message) from e


class InventoryDbHelper:
    def __init__(self, path: str = DATABASE_NAME, echo: bool = False):
        self.path = str(path)
        self.echo = echo
        self._engine: Optional[Engine] = None
        self._lock = threading.Lock()
        self._open_callbacks: List[Callable[[Engine], None]] = []

    @property
    def is_open(self) -> bool:
        return self._engine is not None

    @property
    def shares_connection(self) -> bool:
        """True when every caller goes through the same sqlite3 connection."""
        return self.path == MEMORY_PATH

    def open(self) -> Engine:
        """Return the engine, creating the database on the first call."""
        if self._engine is not None:
            return self._engine
        with self._lock:
            if self._engine is None:
                engine = self._create_engine()
                try:
                    self._prepare(engine)
                except SQLAlchemyError as e:
                    engine.dispose()
                    logger.error("Failed to open inventory database %s: %s", self.path, e, exc_info=True)
                    raise StorageFault(f"Cannot open inventory database {self.path}") from e
                except StorageFault:
                    engine.dispose()
                    raise
                for callback in self._open_callbacks:
                    callback(engine)
                self._engine = engine
        return self._engine

    def on_open(self, callback: Callable[[Engine], None]) -> None:
        """Run ``callback(engine)`` once the engine exists."""
        with self._lock:
            self._open_callbacks.append(callback)
            engine = self._engine
        if engine is not None:
            callback(engine)

    def version(self) -> int:
        engine = self.open()
        try:
            with engine.connect() as conn:
                return conn.exec_driver_sql("PRAGMA user_version").scalar()
        except SQLAlchemyError as e:
            raise StorageFault("Cannot read schema version") from e

    def close(self) -> None:
        with self._lock:
            if self._engine is not None:
                self._engine.dispose()
                self._engine = None

    def _create_engine(self) -> Engine:
        if self.path == MEMORY_PATH:
            # One shared connection, otherwise every checkout sees a new empty database
            return create_engine(
                "sqlite://",
                echo=self.echo,
                poolclass=StaticPool,
                connect_args={"check_same_thread": False},
            )
        Path(self.path).parent.mkdir(parents=True, exist_ok=True)
        return create_engine(
            f"sqlite:///{self.path}",
            echo=self.echo,
            connect_args={"check_same_thread": False},
        )

    def _prepare(self, engine: Engine) -> None:
        with engine.begin() as conn:
            current = conn.exec_driver_sql("PRAGMA user_version").scalar()
            if current == DATABASE_VERSION:
                return
            if current == 0:
                self.on_create(conn)
            elif current < DATABASE_VERSION:
                self.on_upgrade(conn, current, DATABASE_VERSION)
            else:
                self.on_downgrade(conn, current, DATABASE_VERSION)
            conn.exec_driver_sql(f"PRAGMA user_version = {int(DATABASE_VERSION)}")

    def on_create(self, conn: Connection) -> None:
        """Called when the database is created for the first time."""
        inventory_table.create(conn, checkfirst=True)
        logger.info("Created inventory table in %s", self.path)

    def on_upgrade(self, conn: Connection, old_version: int, new_version: int) -> None:
        """Called when the stored schema is older than ``DATABASE_VERSION``.

        Only one schema version exists so there is nothing to do. Later
        versions must migrate additively (``ALTER TABLE ... ADD COLUMN``)
        rather than dropping and recreating the table.
        """
        logger.info("Upgrading inventory database from %s to %s", old_version, new_version)

    def on_downgrade(self, conn: Connection, old_version: int, new_version: int) -> None:
        raise StorageFault(
            f"Can't downgrade inventory database from version {old_version} to {new_version}"
        )
