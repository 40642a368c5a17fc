"""Database engine and session management."""

from collections.abc import Generator

from fastapi import Request
from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool


def build_engine(database_url: str, echo: bool = False) -> Engine:
    """Create an engine; SQLite URLs get thread-safe settings for the worker pool."""
    if database_url.startswith("sqlite"):
        kwargs: dict = {"connect_args": {"check_same_thread": False}}
        # In-memory databases live per connection; share one connection.
        if database_url in ("sqlite://", "sqlite:///:memory:"):
            kwargs["poolclass"] = StaticPool
        return create_engine(database_url, echo=echo, **kwargs)
    return create_engine(database_url, pool_pre_ping=True, echo=echo)


def build_session_factory(database_url: str, echo: bool = False) -> sessionmaker[Session]:
    return sessionmaker(
        autocommit=False,
        autoflush=False,
        bind=build_engine(database_url, echo=echo),
    )


def get_db(request: Request) -> Generator[Session, None, None]:
    """Dependency that yields a DB session from the app's factory and closes it when done."""
    db = request.app.state.session_factory()
    try:
        yield db
    finally:
        db.close()


def check_db_connected(db: Session) -> bool:
    """Run a trivial query to verify the database is reachable."""
    try:
        db.execute(text("SELECT 1"))
        return True
    except Exception:
        return False
