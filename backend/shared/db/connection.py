"""Shared connection pool with open-once semantics and schema management."""

from __future__ import annotations

import threading
from typing import TYPE_CHECKING

import structlog
from sqlalchemy import create_engine, event, text
from sqlalchemy.engine import make_url
from sqlalchemy.exc import SQLAlchemyError

from shared.dal.errors import DatabaseConnectionError, DataError
from shared.db.schema import game_categories, games

if TYPE_CHECKING:
    from typing import Any

    from sqlalchemy.engine import URL, Engine

logger = structlog.get_logger()


def _enable_sqlite_foreign_keys(dbapi_connection: Any, _connection_record: Any) -> None:  # noqa: ANN401
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


class Database:
    """Owns the SQLAlchemy engine (and its connection pool) for one process.

    The engine is created lazily on the first get_engine() call. Exactly one
    open attempt is made per instance: concurrent first callers wait for it,
    later callers get the same engine. A failed attempt is cached and every
    later call raises DatabaseConnectionError chained from the same cause,
    without reconnecting.
    """

    def __init__(self, url: str | URL, *, pool_size: int = 5, max_overflow: int = 10) -> None:
        self._url = make_url(url)
        self._pool_size = pool_size
        self._max_overflow = max_overflow
        self._lock = threading.Lock()
        self._attempted = False
        self._engine: Engine | None = None
        self._error: DatabaseConnectionError | None = None

    @property
    def url(self) -> URL:
        return self._url

    def get_engine(self) -> Engine:
        """Return the shared engine, opening and verifying it on first use."""
        with self._lock:
            if not self._attempted:
                self._attempted = True
                try:
                    self._engine = self._open()
                except DatabaseConnectionError as exc:
                    self._error = exc

        if self._error is not None:
            raise DatabaseConnectionError("error creating database connection") from self._error
        if self._engine is None:  # pragma: no cover
            raise DatabaseConnectionError("failed to create or retrieve database connection")
        return self._engine

    def create_schema(self) -> None:
        """Create the category table, then the game table, skipping any that already exist."""
        engine = self.get_engine()
        try:
            game_categories.create(engine, checkfirst=True)
        except SQLAlchemyError as exc:
            raise DataError("error creating categories table") from exc
        try:
            games.create(engine, checkfirst=True)
        except SQLAlchemyError as exc:
            raise DataError("error creating games table") from exc

    def close(self) -> None:
        """Dispose of the connection pool."""
        if self._engine is not None:
            self._engine.dispose()
            logger.info("database connection pool closed")

    def _engine_options(self) -> dict[str, Any]:
        if self._url.get_backend_name() == "sqlite":
            # SQLite picks its own pool class; sizing options do not apply
            return {}
        return {"pool_size": self._pool_size, "max_overflow": self._max_overflow, "pool_pre_ping": True}

    def _open(self) -> Engine:
        logger.info("connecting to database", url=self._url.render_as_string(hide_password=True))

        try:
            engine = create_engine(self._url, **self._engine_options())
        except (SQLAlchemyError, ImportError) as exc:
            logger.error("unable to open database connection", error=str(exc))
            raise DatabaseConnectionError("unable to open database connection") from exc

        if engine.dialect.name == "sqlite":
            event.listen(engine, "connect", _enable_sqlite_foreign_keys)

        try:
            with engine.connect() as conn:
                conn.execute(text("SELECT 1"))
        except SQLAlchemyError as exc:
            engine.dispose()
            logger.error("unable to connect to database", error=str(exc))
            raise DatabaseConnectionError("unable to connect to database") from exc

        logger.info("successfully connected to the database")
        return engine
