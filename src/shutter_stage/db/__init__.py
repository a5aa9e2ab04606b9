# src/shutter_stage/db/__init__.py
"""Store layer: declarative base, engine, sessions and schema helpers."""

from .session import Base, SessionLocal, create_tables, drop_tables, get_db

__all__ = ["Base", "SessionLocal", "create_tables", "drop_tables", "get_db"]
