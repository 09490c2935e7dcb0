import logging
from contextlib import contextmanager
from typing import Iterator

from sqlalchemy import create_engine, event, text
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from trade_journal.models.base import Base

logger = logging.getLogger(__name__)


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


class Database:
    """
    Explicitly constructed database handle.

    Owns one SQLAlchemy engine and its session factory. The API stores an
    instance on ``app.state.database`` and every request acquires its own
    session from it; nothing here is a process-wide global.
    """

    def __init__(self, url: str, echo: bool = False):
        self.url = url

        engine_args = {"echo": echo}
        if url.startswith("sqlite"):
            # For SQLite, ensure check_same_thread is False for non-serial access (e.g. web apps)
            engine_args["connect_args"] = {"check_same_thread": False}
            if ":memory:" in url or url in ("sqlite://", "sqlite+pysqlite://"):
                # Every connection must see the same in-memory database
                engine_args["poolclass"] = StaticPool
        elif url.startswith("postgresql"):
            engine_args["pool_pre_ping"] = True

        self.engine: Engine = create_engine(url, **engine_args)
        if url.startswith("sqlite"):
            # SQLite leaves foreign keys (and ON DELETE CASCADE) off unless asked
            event.listen(self.engine, "connect", _enable_sqlite_foreign_keys)
        self.SessionLocal = sessionmaker(
            autocommit=False, autoflush=False, bind=self.engine
        )

    def __repr__(self):
        return f"<Database(url='{self.engine.url!r}')>"

    @contextmanager
    def session(self) -> Iterator[Session]:
        """Yield a session, rolling back on error and always closing it."""
        db = self.SessionLocal()
        try:
            yield db
        except Exception:
            db.rollback()
            raise
        finally:
            db.close()

    def create_all(self) -> None:
        logger.info("Creating tables on %r", self.engine.url)
        Base.metadata.create_all(bind=self.engine)

    def drop_all(self) -> None:
        logger.info("Dropping tables on %r", self.engine.url)
        Base.metadata.drop_all(bind=self.engine)

    def ping(self) -> None:
        """Run ``SELECT 1``; raises whatever the driver raises when unreachable."""
        with self.engine.connect() as connection:
            connection.execute(text("SELECT 1"))

    def dispose(self) -> None:
        self.engine.dispose()
