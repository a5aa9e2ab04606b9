"""Alembic environment for the Shutter Stage schema."""
from __future__ import annotations

import logging
import os
import sys
from pathlib import Path

from alembic import context
from sqlalchemy import engine_from_config, pool

# src/ holds the application package when run from a plain checkout.
SRC_ROOT = Path(__file__).resolve().parents[1] / "src"
if str(SRC_ROOT) not in sys.path:
    sys.path.insert(0, str(SRC_ROOT))

from shutter_stage.core.settings import settings  # noqa: E402
from shutter_stage.db.session import Base  # noqa: E402

logger = logging.getLogger("alembic.env")

config = context.config
target_metadata = Base.metadata


def _database_url() -> str:
    """Pick the migration target: ALEMBIC_URL, then the config, then settings."""
    override = os.getenv("ALEMBIC_URL")
    if override:
        return override
    return config.get_main_option("sqlalchemy.url") or settings.database_url_sync


def _configure_options() -> dict[str, object]:
    return {
        "target_metadata": target_metadata,
        "compare_type": True,
        # SQLite cannot ALTER most constraints in place.
        "render_as_batch": _database_url().startswith("sqlite"),
    }


def run_migrations_offline() -> None:
    """Emit SQL for the configured URL without connecting."""
    context.configure(
        url=_database_url(),
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
        **_configure_options(),
    )

    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    """Apply migrations over a fresh connection."""
    section = config.get_section(config.config_ini_section, {})
    section["sqlalchemy.url"] = _database_url()
    connectable = engine_from_config(
        section,
        prefix="sqlalchemy.",
        poolclass=pool.NullPool,
        echo=settings.sql_debug,
    )

    with connectable.connect() as connection:
        context.configure(connection=connection, **_configure_options())
        logger.info("Migrating %s database", connection.dialect.name)
        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
