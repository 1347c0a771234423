"""Database connection and session management."""

from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass, field

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from src.utils.config import get_settings

# Managed Postgres (Neon) only accepts TLS connections
SSL_MODE = "require"


def normalise_database_url(url: str) -> str:
    """Normalise a libpq-style connection string for SQLAlchemy.

    Hosted providers hand out ``postgres://`` URLs, which SQLAlchemy no longer
    accepts as a dialect name.

    :param url: The raw connection string.
    :returns: The connection string with a ``postgresql://`` scheme.
    """
    if url.startswith("postgres://"):
        return "postgresql://" + url.removeprefix("postgres://")
    return url


def get_database_url() -> str:
    """Get the PostgreSQL database URL from configuration.

    :returns: The database connection URL.
    :raises ValueError: If NEON_DATABASE_URL is not set.
    """
    url = get_settings().neon_database_url
    if not url:
        raise ValueError(
            "Database URL not configured. Set NEON_DATABASE_URL environment variable."
        )
    return normalise_database_url(url)


def create_db_engine(*, echo: bool = False) -> Engine:
    """Create a SQLAlchemy engine for the database.

    :param echo: If True, log all SQL statements.
    :returns: A configured SQLAlchemy engine.
    """
    return create_engine(
        get_database_url(),
        echo=echo,
        pool_pre_ping=True,
        connect_args={"sslmode": SSL_MODE},
    )


@dataclass
class _DatabaseState:
    """Container for database connection state."""

    engine: Engine | None = field(default=None)
    session_factory: sessionmaker[Session] | None = field(default=None)


_state = _DatabaseState()


def get_engine() -> Engine:
    """Get or create the database engine singleton.

    :returns: The database engine.
    """
    if _state.engine is None:
        _state.engine = create_db_engine()
    return _state.engine


def get_session_factory() -> sessionmaker[Session]:
    """Get or create the session factory singleton.

    :returns: A sessionmaker bound to the database engine.
    """
    if _state.session_factory is None:
        _state.session_factory = sessionmaker(bind=get_engine(), expire_on_commit=False)
    return _state.session_factory


def dispose_engine() -> None:
    """Dispose of the engine pool and forget the cached singletons."""
    if _state.engine is not None:
        _state.engine.dispose()
    _state.engine = None
    _state.session_factory = None


@contextmanager
def get_session() -> Iterator[Session]:
    """Create a new database session with automatic cleanup.

    Commits on successful completion, rolls back on exception.

    :yields: A database session.
    """
    session = get_session_factory()()
    try:
        yield session
        session.commit()

    except Exception:
        session.rollback()
        raise

    finally:
        session.close()
