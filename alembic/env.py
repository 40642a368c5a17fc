"""Alembic environment: uses app config for DATABASE_URL and Base.metadata for autogenerate."""

from logging.config import fileConfig

from alembic import context
from sqlalchemy.engine import Connection

from amnii.core.config import get_settings
from amnii.core.database import build_engine

# Import all models so that Base.metadata contains every table.
from amnii.models import Base, User  # noqa: F401

config = context.config
# Load logging from alembic.ini only if it defines [formatters], [handlers], [loggers].
# Skip when those sections are missing (fileConfig would raise KeyError).
if config.config_file_name is not None:
    try:
        fileConfig(config.config_file_name)
    except KeyError:
        pass

target_metadata = Base.metadata


def get_url() -> str:
    """Return the database URL from application settings."""
    return get_settings().DATABASE_URL


def run_migrations_offline() -> None:
    """Run migrations in 'offline' mode (generate SQL only)."""
    context.configure(
        url=get_url(),
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )
    with context.begin_transaction():
        context.run_migrations()


def do_run_migrations(connection: Connection) -> None:
    context.configure(
        connection=connection,
        target_metadata=target_metadata,
        render_as_batch=connection.dialect.name == "sqlite",
    )
    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    """Run migrations in 'online' mode (connect to DB and run)."""
    connectable = build_engine(get_url())
    with connectable.connect() as connection:
        do_run_migrations(connection)
    connectable.dispose()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
