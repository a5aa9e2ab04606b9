# tests/test_migrations.py
"""The Alembic history builds the same tables the ORM declares."""

from alembic import command
from sqlalchemy import create_engine, inspect

from shutter_stage.db.session import Base
from shutter_stage.scripts.migrate import build_config


def test_upgrade_and_downgrade(tmp_path):
    url = f"sqlite:///{tmp_path / 'migrated.db'}"
    cfg = build_config()
    cfg.set_main_option("sqlalchemy.url", url)

    command.upgrade(cfg, "head")
    engine = create_engine(url)
    try:
        tables = set(inspect(engine).get_table_names())
        assert set(Base.metadata.tables) <= tables
        indexes = {index["name"] for index in inspect(engine).get_indexes("audit_log")}
        assert "ix_audit_log_resource" in indexes

        command.downgrade(cfg, "base")
        assert set(inspect(engine).get_table_names()) <= {"alembic_version"}
    finally:
        engine.dispose()


def test_create_and_drop_tables_helpers():
    from shutter_stage.db import create_tables, drop_tables
    from shutter_stage.db.session import engine

    create_tables()
    try:
        assert "audit_log" in inspect(engine).get_table_names()
    finally:
        drop_tables()
    assert inspect(engine).get_table_names() == []
