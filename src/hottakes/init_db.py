# src/hottakes/init_db.py
"""Create all tables for local development without running migrations."""

from hottakes.db.session import create_tables


def init_db() -> None:
    """Initialize the database by creating all tables."""
    create_tables()


if __name__ == "__main__":
    init_db()
    print("Database initialized.")
