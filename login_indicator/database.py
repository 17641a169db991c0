"""
Login Indicator - Database Engine.

============================================================
PURPOSE
============================================================
Connection plumbing for reading the course log table.

- SQLAlchemy engine and session factory
- Database URL from environment (.env supported)
- Session scope with rollback on failure

The indicator core never touches the database; only the
log repository does, through a session from here.

============================================================
"""

import os
import logging
from contextlib import contextmanager
from typing import Generator, Optional

from dotenv import load_dotenv
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, declarative_base, sessionmaker

from .exceptions import RepositoryError

# Load environment variables
load_dotenv()

logger = logging.getLogger(__name__)


DATABASE_URL_ENV = "LOGIN_INDICATOR_DATABASE_URL"
DEFAULT_DATABASE_URL = "sqlite:///login_indicator.db"


# =============================================================
# DECLARATIVE BASE
# =============================================================

Base = declarative_base()


# =============================================================
# DATABASE ENGINE
# =============================================================


def get_database_url() -> str:
    """Get database URL from environment."""
    url = os.getenv(DATABASE_URL_ENV)
    if not url:
        url = DEFAULT_DATABASE_URL
        logger.warning(f"{DATABASE_URL_ENV} not set, using default: {url}")
    return url


def create_database_engine(url: Optional[str] = None, echo: bool = False) -> Engine:
    """
    Create a SQLAlchemy engine.

    Args:
        url: Database URL. Read from environment if not provided.
        echo: Log SQL statements

    Returns:
        SQLAlchemy Engine
    """
    database_url = url or get_database_url()
    logger.info(f"Creating database engine for: {database_url.split('@')[-1]}")
    return create_engine(database_url, echo=echo, future=True)


def get_session_factory(engine: Engine) -> sessionmaker:
    """Build a session factory bound to an engine."""
    return sessionmaker(
        bind=engine,
        autoflush=False,
        expire_on_commit=False,
    )


def create_all_tables(engine: Engine) -> None:
    """Create the log table if it does not exist."""
    # Registers LogEntry on Base.metadata
    from . import models  # noqa: F401

    Base.metadata.create_all(engine)


# =============================================================
# SESSION MANAGEMENT
# =============================================================


@contextmanager
def session_scope(factory: sessionmaker) -> Generator[Session, None, None]:
    """
    Context manager for explicit transaction boundaries.

    Commits only if no exception occurs. Rolls back on
    database errors and re-raises them as RepositoryError.

    Usage:
        with session_scope(factory) as session:
            events = LoginEventRepository(session).fetch_login_events(...)
    """
    session = factory()
    try:
        yield session
        session.commit()
    except SQLAlchemyError as e:
        logger.error(f"Database error, rolling back: {e}")
        session.rollback()
        raise RepositoryError(f"Database operation failed: {e}") from e
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()
