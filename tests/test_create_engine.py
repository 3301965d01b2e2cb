"""Tests for DATABASE_URL handling."""

import pytest

from gamegrid.create_engine import create_engine_from_url, normalize_database_url


@pytest.mark.parametrize(
    "url, expected",
    [
        ("postgres://u:p@db.example.com/grid?sslmode=require", "postgresql+asyncpg://u:p@db.example.com/grid?ssl=require"),
        ("postgresql://u:p@localhost:5432/grid", "postgresql+asyncpg://u:p@localhost:5432/grid"),
        ("sqlite:///grid.sqlite3", "sqlite+aiosqlite:///grid.sqlite3"),
        ("sqlite+aiosqlite:///grid.sqlite3", "sqlite+aiosqlite:///grid.sqlite3"),
    ],
)
def test_normalize_database_url(url, expected):
    assert normalize_database_url(url) == expected


@pytest.mark.parametrize("url", [None, ""])
def test_no_url_means_memory_only(url):
    assert create_engine_from_url(url) is None


def test_sqlite_url_builds_engine(tmp_path):
    engine = create_engine_from_url(f"sqlite:///{tmp_path / 'grid.sqlite3'}")
    assert engine.dialect.name == "sqlite"


@pytest.mark.parametrize("url", ["mysql://u:p@localhost/grid", "mssql+pyodbc://u:p@dsn"])
def test_unsupported_dialect_rejected_at_startup(url):
    with pytest.raises(ValueError, match="Unsupported DATABASE_URL dialect"):
        create_engine_from_url(url)
