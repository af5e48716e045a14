# capital_marketplace/core/database.py
"""Database engine and session management"""
from contextlib import contextmanager
from typing import Generator, Optional

from fastapi import Request
from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.pool import StaticPool

from capital_marketplace.core.logger import get_logger
from capital_marketplace.models import Base

logger = get_logger(__name__)


class Database:
    """
    Owns one engine and its session factory.

    Constructed explicitly and handed to the app (and to scripts/tests)
    instead of living as a module-level singleton.
    """

    def __init__(self, url: str, echo: bool = False, engine: Optional[Engine] = None):
        self.url = url
        self.engine = engine or self._create_engine(url, echo)
        self.SessionLocal = sessionmaker(
            autocommit=False,
            autoflush=False,
            expire_on_commit=False,
            bind=self.engine,
        )

    @staticmethod
    def _create_engine(url: str, echo: bool) -> Engine:
        if url.startswith("sqlite"):
            kwargs = {"connect_args": {"check_same_thread": False}}
            # In-memory databases must share one connection to survive across sessions
            if url in ("sqlite://", "sqlite:///:memory:"):
                kwargs["poolclass"] = StaticPool
            return create_engine(url, echo=echo, **kwargs)
        return create_engine(url, echo=echo, pool_pre_ping=True)

    def create_all(self) -> None:
        """Create all tables in database"""
        Base.metadata.create_all(bind=self.engine)
        logger.info("Database tables initialized")

    def drop_all(self) -> None:
        """Drop all tables (testing only)."""
        Base.metadata.drop_all(bind=self.engine)
        logger.info("All tables dropped")

    @contextmanager
    def session(self) -> Generator[Session, None, None]:
        """Context manager for scripts and other synchronous code"""
        db = self.SessionLocal()
        try:
            yield db
        except Exception:
            db.rollback()
            raise
        finally:
            db.close()

    def health_check(self) -> bool:
        """Return True if a trivial query succeeds."""
        try:
            with self.engine.connect() as conn:
                conn.execute(text("SELECT 1"))
            return True
        except Exception as e:
            logger.error(f"Database health check failed: {e}")
            return False

    def dispose(self) -> None:
        self.engine.dispose()


def get_database(request: Request) -> Database:
    """FastAPI dependency returning the Database attached to the app."""
    return request.app.state.database


def get_db(request: Request) -> Generator[Session, None, None]:
    """FastAPI dependency for database sessions."""
    db = get_database(request).SessionLocal()
    try:
        yield db
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()
