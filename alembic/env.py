"""Alembic environment configuration."""

import sys
from logging.config import fileConfig
from pathlib import Path

from sqlalchemy import engine_from_config, pool

from alembic import context

# Add the parent directory to Python path so we can import app
sys.path.insert(0, str(Path(__file__).parent.parent))

from app.config import settings  # noqa: E402
from app.db.base import Base  # noqa: E402

# Import all models to ensure they are registered
from app.models import application, job, organization, user  # noqa: E402,F401

# Alembic Config object
config = context.config

# Interpret the config file for Python logging
if config.config_file_name is not None:
    fileConfig(config.config_file_name)

# Target metadata
target_metadata = Base.metadata


def sync_database_url(database_url: str) -> str:
    """Convert the asyncpg URL to a psycopg2 URL for synchronous migrations."""
    if database_url.startswith("postgresql+asyncpg://"):
        database_url = database_url.replace("postgresql+asyncpg://", "postgresql://")
        # asyncpg uses 'ssl=false/true/require', psycopg2 uses 'sslmode=disable/require'
        for separator in ("?", "&"):
            database_url = database_url.replace(f"{separator}ssl=false", f"{separator}sslmode=disable")
            database_url = database_url.replace(f"{separator}ssl=true", f"{separator}sslmode=require")
            database_url = database_url.replace(f"{separator}ssl=require", f"{separator}sslmode=require")
    return database_url


config.set_main_option("sqlalchemy.url", sync_database_url(str(settings.DATABASE_URL)))


def run_migrations_offline() -> None:
    """Run migrations in 'offline' mode."""
    url = config.get_main_option("sqlalchemy.url")
    context.configure(
        url=url,
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )

    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    """Run migrations in 'online' mode."""
    connectable = engine_from_config(
        config.get_section(config.config_ini_section, {}),
        prefix="sqlalchemy.",
        poolclass=pool.NullPool,
    )

    with connectable.connect() as connection:
        context.configure(connection=connection, target_metadata=target_metadata)

        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
