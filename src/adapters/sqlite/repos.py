import sqlite3
from datetime import UTC, datetime
from typing import Any

from src.domain.entities import User
from src.domain.errors import DuplicateIdentityError


# Helper to convert sqlite rows to dicts
def dict_factory(cursor: sqlite3.Cursor, row: Any) -> dict[str, Any]:
    d = {}
    for idx, col in enumerate(cursor.description):
        d[col[0]] = row[idx]
    return d


class SQLiteUserRepo:
    """User store. Uniqueness of email and username is enforced by the schema."""

    def __init__(self, db_path: str):
        self.db_path = db_path

    def _get_conn(self) -> sqlite3.Connection:
        conn = sqlite3.connect(self.db_path)
        conn.row_factory = dict_factory
        conn.execute("PRAGMA foreign_keys = ON;")
        return conn

    def insert(self, email: str, username: str, password_hash: str) -> User:
        now = datetime.now(UTC)
        conn = self._get_conn()
        try:
            cursor = conn.execute(
                """
                INSERT INTO users (email, username, password_hash, created_at, updated_at)
                VALUES (?, ?, ?, ?, ?)
            """,
                (email, username, password_hash, now.isoformat(), now.isoformat()),
            )
            conn.commit()
        except sqlite3.IntegrityError as e:
            conn.rollback()
            # e.g. "UNIQUE constraint failed: users.username"
            field = "username" if "users.username" in str(e) else "email"
            raise DuplicateIdentityError(field) from e
        finally:
            conn.close()

        assert cursor.lastrowid is not None
        return User(
            id=cursor.lastrowid,
            email=email,
            username=username,
            password_hash=password_hash,
            created_at=now,
            updated_at=now,
        )

    def find_by_identifier(self, identifier: str) -> User | None:
        conn = self._get_conn()
        try:
            row = conn.execute(
                "SELECT * FROM users WHERE email = ? OR username = ? ORDER BY id LIMIT 1",
                (identifier, identifier),
            ).fetchone()
            return self._map_row_to_user(row) if row else None
        finally:
            conn.close()

    def get_by_id(self, user_id: int) -> User | None:
        conn = self._get_conn()
        try:
            row = conn.execute("SELECT * FROM users WHERE id = ?", (user_id,)).fetchone()
            return self._map_row_to_user(row) if row else None
        finally:
            conn.close()

    def update_password_hash(self, user_id: int, password_hash: str) -> None:
        conn = self._get_conn()
        try:
            conn.execute(
                "UPDATE users SET password_hash = ?, updated_at = ? WHERE id = ?",
                (password_hash, datetime.now(UTC).isoformat(), user_id),
            )
            conn.commit()
        finally:
            conn.close()

    def _map_row_to_user(self, row: dict[str, Any]) -> User:
        return User(
            id=row["id"],
            email=row["email"],
            username=row["username"],
            password_hash=row["password_hash"],
            created_at=datetime.fromisoformat(row["created_at"]),
            updated_at=datetime.fromisoformat(row["updated_at"]),
        )
