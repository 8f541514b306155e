"""Test fixtures: sample schema DDL."""

from __future__ import annotations

from pathlib import Path

_FIXTURES_DIR = Path(__file__).parent


def load_ddl() -> str:
    """Return the sample SQLite DDL script."""
    return (_FIXTURES_DIR / "ddl_sqlite.sql").read_text()
