# src/shutter_stage/init_db.py
"""Create all tables directly from the ORM metadata (development helper)."""

from shutter_stage.db import create_tables

if __name__ == "__main__":
    create_tables()
    print("Database initialized.")
