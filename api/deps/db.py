from typing import Iterator

from fastapi import Request
from sqlalchemy.orm import Session

from trade_journal.db.session import Database


def get_database(request: Request) -> Database:
    """The database handle the application was built with."""
    return request.app.state.database


def get_db(request: Request) -> Iterator[Session]:
    """
    Dependency injector for FastAPI to get a database session.
    Ensures the session is closed after the request.
    """
    with get_database(request).session() as db:
        yield db
