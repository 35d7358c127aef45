"""Engine and session factory configuration."""

from collections.abc import Generator
import logging

from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from app.db.base import Base

# Register models on Base.metadata before create_all runs
from app.db import models  # noqa: F401

logger = logging.getLogger(__name__)

CONNECTION_ERROR_MESSAGE = "Ocurrió un error en la conexión"


def build_engine(database_url: str) -> Engine:
    """Create the engine for ``database_url``.

    Server databases get a pooled engine that tests connections before use
    and recycles them after 30 minutes. In-memory SQLite shares a single
    connection so every session sees the same tables.
    """
    if database_url.startswith("sqlite"):
        kwargs = {"connect_args": {"check_same_thread": False}}
        if ":memory:" in database_url or database_url.rstrip("/") == "sqlite:":
            kwargs["poolclass"] = StaticPool
        return create_engine(database_url, echo=False, **kwargs)

    return create_engine(
        database_url,
        echo=False,
        pool_pre_ping=True,  # Test connections before using
        pool_recycle=1800,  # Recycle connections after 30 minutes
        pool_size=5,
        max_overflow=10,
        connect_args={"connect_timeout": 10},
    )


class Database:
    """Process-scoped handle owning the engine and session factory.

    Built once by the application factory and reached by request handlers
    through the ``get_session`` dependency only.
    """

    def __init__(self, database_url: str, engine: Engine | None = None):
        self.url = database_url
        self.engine = engine if engine is not None else build_engine(database_url)
        self._session_factory = sessionmaker(
            bind=self.engine, autoflush=False, autocommit=False
        )

    def connect(self) -> bool:
        """Check connectivity and create missing tables.

        Failures are logged and reported through the return value; the
        caller keeps running either way.
        """
        try:
            with self.engine.connect() as conn:
                conn.execute(text("SELECT 1"))
            Base.metadata.create_all(bind=self.engine)
        except SQLAlchemyError as e:
            logger.error(f"{CONNECTION_ERROR_MESSAGE}: {e}")
            return False
        logger.info("Database connection established")
        return True

    def ping(self) -> None:
        """Run a trivial query, raising SQLAlchemyError when unreachable."""
        with self.engine.connect() as conn:
            conn.execute(text("SELECT 1")).fetchone()

    def session(self) -> Generator[Session, None, None]:
        """Yield a transactional session for one request."""
        db = self._session_factory()
        try:
            yield db
            db.commit()
        except Exception:
            db.rollback()
            raise
        finally:
            db.close()

    def dispose(self) -> None:
        self.engine.dispose()
