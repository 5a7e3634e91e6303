from pathlib import Path

import pytest

from src.adapters.sqlite.migrator import SQLiteMigrator
from src.adapters.sqlite.repos import SQLiteUserRepo

PROJECT_ROOT = Path(__file__).parent.parent

TEST_SECRET = "integration-test-secret-0123456789abcdef"


@pytest.fixture
def migrations_dir() -> str:
    return str(PROJECT_ROOT / "migrations")


@pytest.fixture
def db_path(tmp_path, migrations_dir) -> str:
    """A migrated, empty SQLite database."""
    path = str(tmp_path / "tradelog.db")
    SQLiteMigrator(path, migrations_dir).run_migrations()
    return path


@pytest.fixture
def user_repo(db_path) -> SQLiteUserRepo:
    return SQLiteUserRepo(db_path)
