"""
Database handle, unit of work, and base model.

This module is the foundation for all database operations.
Every model inherits from Base. Every operation runs inside
a unit of work opened from a Database handle.

The Database is constructed explicitly and passed to whatever
needs it. There is no module-level engine.
"""

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from datetime import datetime, timezone

from fastapi import Request
from sqlalchemy import create_engine, event, text
from sqlalchemy.engine import make_url
from sqlalchemy.exc import InterfaceError, OperationalError
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker

from account_ledger.errors import StoreUnavailable

logger = logging.getLogger(__name__)


def utcnow() -> datetime:
    """Current UTC time as a naive datetime, the way the tables store it."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


# --- Base Model Class ---
class Base(DeclarativeBase):
    pass


def _use_immediate_transactions(engine) -> None:
    """
    Make SQLite write transactions take the write lock when they begin.

    SQLite has no SELECT ... FOR UPDATE. BEGIN IMMEDIATE is the
    closest equivalent: a second writer waits on the busy timeout
    until the first commits, instead of reading a balance that is
    about to change. Connections marked ledger_read_only get a deferred
    BEGIN and never wait on a writer.
    """

    @event.listens_for(engine, "connect")
    def _on_connect(dbapi_connection, connection_record):
        # Stop pysqlite from issuing its own BEGIN
        dbapi_connection.isolation_level = None
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    @event.listens_for(engine, "begin")
    def _on_begin(conn):
        if conn.get_execution_options().get("ledger_read_only"):
            conn.exec_driver_sql("BEGIN")
        else:
            conn.exec_driver_sql("BEGIN IMMEDIATE")


class Database:
    """
    Store handle: one engine and the session factories bound to it.

    lock_timeout_ms bounds how long a unit of work may wait for
    a row lock held by another unit of work. When it expires the
    unit of work is rolled back and StoreUnavailable is raised.
    """

    def __init__(self, url: str, lock_timeout_ms: int | None = None, **engine_kwargs):
        self.url = make_url(url)
        self.lock_timeout_ms = lock_timeout_ms

        connect_args = dict(engine_kwargs.pop("connect_args", {}))
        if self.is_sqlite:
            connect_args.setdefault("check_same_thread", False)
            if lock_timeout_ms is not None:
                connect_args.setdefault("timeout", lock_timeout_ms / 1000)

        # pool_pre_ping=True tests connections before using them,
        # which handles a database restart or a stale connection.
        self.engine = create_engine(
            self.url,
            pool_pre_ping=True,
            connect_args=connect_args,
            **engine_kwargs,
        )
        if self.is_sqlite:
            _use_immediate_transactions(self.engine)

        # autoflush=False: SQL is only sent on an explicit flush or commit.
        # expire_on_commit=False: rows returned from a unit of work stay
        # readable after the session is closed.
        self.session_factory = sessionmaker(
            bind=self.engine,
            autoflush=False,
            expire_on_commit=False,
        )
        # Shares the pool with self.engine; only the BEGIN differs on SQLite
        self.read_session_factory = sessionmaker(
            bind=self.engine.execution_options(ledger_read_only=True),
            autoflush=False,
            expire_on_commit=False,
        )

    @property
    def dialect_name(self) -> str:
        return self.engine.dialect.name

    @property
    def is_sqlite(self) -> bool:
        return self.url.get_backend_name() == "sqlite"

    @contextmanager
    def unit_of_work(self, write: bool = True) -> Iterator[Session]:
        """
        Run a block as one all-or-nothing database transaction.

        Commits when the block exits normally. Any exception rolls
        back everything the block wrote before it propagates.
        Connection and lock-timeout failures surface as
        StoreUnavailable.

        Pass write=False for blocks that only read. On SQLite they
        then run alongside a writer instead of queueing behind it.
        """
        factory = self.session_factory if write else self.read_session_factory
        session = factory()
        try:
            with session.begin():
                if self.lock_timeout_ms is not None and not self.is_sqlite:
                    session.execute(
                        text(f"SET LOCAL lock_timeout = {int(self.lock_timeout_ms)}")
                    )
                yield session
        except (OperationalError, InterfaceError) as exc:
            logger.error("Unit of work aborted: %s", exc.orig or exc)
            raise StoreUnavailable(str(exc.orig or exc)) from exc
        finally:
            session.close()

    def create_all(self) -> None:
        """Create any missing tables. Migrations do this in production."""
        Base.metadata.create_all(bind=self.engine)

    def drop_all(self) -> None:
        Base.metadata.drop_all(bind=self.engine)

    def dispose(self) -> None:
        self.engine.dispose()


# --- Dependency for FastAPI ---
def get_database(request: Request) -> Database:
    """Return the Database the application was built with."""
    return request.app.state.database
