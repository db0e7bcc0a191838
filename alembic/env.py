"""
Alembic Environment Configuration

Runs the catalog schema migrations against the database named by the
application settings (DATABASE_URL), not by alembic.ini.

COMMANDS:
- alembic upgrade head                           # Create/upgrade the schema
- alembic revision --autogenerate -m "message"  # Create migration
- alembic downgrade -1                           # Rollback one migration
"""

from logging.config import fileConfig

from sqlalchemy import engine_from_config, pool

from alembic import context

from library_api.config import get_settings
from library_api.database import Base

# Registers every table on Base.metadata for autogenerate
import library_api.models  # noqa: F401

settings = get_settings()

config = context.config
config.set_main_option("sqlalchemy.url", settings.database_url)

if config.config_file_name is not None:
    fileConfig(config.config_file_name)

target_metadata = Base.metadata


def run_migrations_offline() -> None:
    """
    Emit the migration SQL without connecting.

    Usage:
        alembic upgrade head --sql > migration.sql
    """
    context.configure(
        url=config.get_main_option("sqlalchemy.url"),
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
        compare_type=True,
    )

    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    """Apply migrations over a live connection."""
    connectable = engine_from_config(
        config.get_section(config.config_ini_section, {}),
        prefix="sqlalchemy.",
        poolclass=pool.NullPool,
    )

    with connectable.connect() as connection:
        context.configure(
            connection=connection,
            target_metadata=target_metadata,
            compare_type=True,
            # SQLite cannot ALTER constraints in place
            render_as_batch=connection.dialect.name == "sqlite",
        )

        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
