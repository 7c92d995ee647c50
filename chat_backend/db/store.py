"""Database store: engine lifecycle and sessions."""
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Any, Dict, Iterator, Optional

from sqlalchemy import event, text
from sqlalchemy.engine import Engine
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel, create_engine

import chat_backend.models  # noqa: F401  registers tables on SQLModel.metadata
from chat_backend.errors import StoreUnavailableError
from chat_backend.utils.logger import get_logger

store_logger = get_logger("chat_backend.store")


def _is_sqlite(url: str) -> bool:
    return url.startswith("sqlite")


def _is_memory_sqlite(url: str) -> bool:
    return url in ("sqlite://", "sqlite:///:memory:") or ":memory:" in url


class ChatStore:
    """
    Owns the database engine for one application instance.

    connect() is called once at startup. A failed connect is logged and is
    final for the process: the store stays unhealthy and every request that
    needs it fails with StoreUnavailableError.
    """

    def __init__(self, database_url: str, echo: bool = False):
        self.database_url = database_url
        self.echo = echo
        self.engine: Optional[Engine] = None
        self.last_error: Optional[str] = None
        self.connected_at: Optional[datetime] = None

    @property
    def healthy(self) -> bool:
        return self.engine is not None

    def _create_engine(self) -> Engine:
        kwargs: Dict[str, Any] = {"echo": self.echo}
        if _is_sqlite(self.database_url):
            kwargs["connect_args"] = {"check_same_thread": False}
            if _is_memory_sqlite(self.database_url):
                # One shared connection, otherwise every session sees an empty database
                kwargs["poolclass"] = StaticPool
        else:
            kwargs["pool_pre_ping"] = True

        engine = create_engine(self.database_url, **kwargs)

        if _is_sqlite(self.database_url):
            @event.listens_for(engine, "connect")
            def set_sqlite_pragma(dbapi_connection, connection_record):
                cursor = dbapi_connection.cursor()
                cursor.execute("PRAGMA foreign_keys=ON")
                cursor.close()

        return engine

    def connect(self) -> bool:
        """Create the engine and tables. Returns False (and logs) on failure."""
        if self.engine is not None:
            return True
        engine = None
        try:
            engine = self._create_engine()
            with engine.connect() as conn:
                conn.execute(text("SELECT 1"))
            SQLModel.metadata.create_all(engine)
        except Exception as e:
            if engine is not None:
                engine.dispose()
            self.last_error = str(e)
            store_logger.error("Store connection failed", error=str(e))
            return False

        self.engine = engine
        self.last_error = None
        self.connected_at = datetime.now(timezone.utc)
        store_logger.info("Connected to store", dialect=engine.dialect.name)
        return True

    def disconnect(self) -> None:
        if self.engine is None:
            return
        self.engine.dispose()
        self.engine = None
        self.connected_at = None
        store_logger.info("Disconnected from store")

    def health(self) -> Dict[str, Any]:
        return {
            "connected": self.healthy,
            "connected_at": self.connected_at.isoformat() if self.connected_at else None,
            "last_error": self.last_error,
        }

    @contextmanager
    def session(self) -> Iterator[Session]:
        if self.engine is None:
            raise StoreUnavailableError()
        with Session(self.engine) as session:
            yield session
