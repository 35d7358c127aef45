"""Database session dependency."""

from collections.abc import Generator

from fastapi import Request
from sqlalchemy.orm import Session

from app.db.session import Database


def get_database(request: Request) -> Database:
    """Return the database handle attached to the running application."""
    return request.app.state.database


def get_session(request: Request) -> Generator[Session, None, None]:
    """FastAPI dependency that yields a managed SQLAlchemy session."""
    yield from get_database(request).session()
