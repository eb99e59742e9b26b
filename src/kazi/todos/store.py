"""SQLite storage backend for todos."""

from __future__ import annotations

import logging
import sqlite3
from collections.abc import Iterator
from contextlib import contextmanager
from datetime import datetime, timezone
from pathlib import Path

from kazi.todos.schema import Todo

logger = logging.getLogger(__name__)


class StorageError(Exception):
    """Raised when the todo database cannot be read or written."""


def _casefold(value: str | None) -> str | None:
    return value.casefold() if value is not None else None


def _row_to_todo(row: sqlite3.Row) -> Todo:
    return Todo(
        id=row["id"],
        todo=row["todo"],
        created_at=datetime.fromisoformat(row["created_at"]),
        updated_at=datetime.fromisoformat(row["updated_at"]),
    )


class TodoStore:
    """SQLite-based storage for the todo table."""

    def __init__(self, db_path: str | Path):
        """Initialize storage with database path.

        Args:
            db_path: Path to SQLite database file
        """
        self.db_path = Path(db_path)
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        self._initialize_db()

    @contextmanager
    def _connect(self) -> Iterator[sqlite3.Connection]:
        """Open a connection, committing on success and mapping driver errors."""
        try:
            conn = sqlite3.connect(self.db_path)
        except sqlite3.Error as e:
            raise StorageError(f"Cannot open todo database {self.db_path}: {e}") from e

        conn.row_factory = sqlite3.Row
        # Unicode-aware case folding; SQLite's own LIKE/lower() only fold ASCII
        conn.create_function("casefold", 1, _casefold, deterministic=True)
        try:
            yield conn
            conn.commit()
        except sqlite3.Error as e:
            conn.rollback()
            raise StorageError(str(e)) from e
        finally:
            conn.close()

    def _initialize_db(self) -> None:
        """Create the todo table if it doesn't exist."""
        with self._connect() as conn:
            conn.execute("""
                CREATE TABLE IF NOT EXISTS todos (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    todo TEXT NOT NULL,
                    created_at TIMESTAMP NOT NULL,
                    updated_at TIMESTAMP NOT NULL
                )
            """)

    def create(self, text: str) -> int:
        """Insert a todo.

        Args:
            text: Todo text

        Returns:
            Primary key assigned by the database
        """
        now = datetime.now(timezone.utc).isoformat()
        with self._connect() as conn:
            cursor = conn.execute(
                "INSERT INTO todos (todo, created_at, updated_at) VALUES (?, ?, ?)",
                (text, now, now),
            )
            todo_id = cursor.lastrowid

        if todo_id is None:
            raise StorageError("Insert did not return a todo id")
        logger.debug("Created todo %d", todo_id)
        return todo_id

    def list(self) -> list[Todo]:
        """Return every todo in insertion order."""
        with self._connect() as conn:
            rows = conn.execute("SELECT * FROM todos ORDER BY id ASC").fetchall()
        return [_row_to_todo(row) for row in rows]

    def get(self, todo_id: int) -> Todo | None:
        """Get a todo by ID.

        Args:
            todo_id: Todo identifier

        Returns:
            Todo or None if not found
        """
        with self._connect() as conn:
            row = conn.execute("SELECT * FROM todos WHERE id = ?", (todo_id,)).fetchone()
        return _row_to_todo(row) if row else None

    def delete(self, todo_id: int) -> int | None:
        """Delete a todo.

        Args:
            todo_id: Todo identifier

        Returns:
            The deleted id, or None if no row matched
        """
        with self._connect() as conn:
            cursor = conn.execute("DELETE FROM todos WHERE id = ?", (todo_id,))

        if cursor.rowcount == 0:
            logger.debug("Delete found no todo with id %s", todo_id)
            return None
        return todo_id

    def search(self, query: str) -> list[Todo]:
        """Find todos whose text contains ``query``, ignoring case.

        Both sides are Unicode case-folded, and the query is matched as plain
        text, so ``%`` and ``_`` carry no wildcard meaning.

        Args:
            query: Substring to look for

        Returns:
            Matching todos in insertion order
        """
        with self._connect() as conn:
            rows = conn.execute(
                "SELECT * FROM todos WHERE instr(casefold(todo), ?) > 0 ORDER BY id ASC",
                (query.casefold(),),
            ).fetchall()
        return [_row_to_todo(row) for row in rows]

    def update(self, todo_id: int, text: str) -> int | None:
        """Replace a todo's text and refresh its update timestamp.

        Args:
            todo_id: Todo identifier
            text: New todo text

        Returns:
            The updated id, or None if no row matched
        """
        now = datetime.now(timezone.utc).isoformat()
        with self._connect() as conn:
            cursor = conn.execute(
                "UPDATE todos SET todo = ?, updated_at = ? WHERE id = ?",
                (text, now, todo_id),
            )

        if cursor.rowcount == 0:
            logger.debug("Update found no todo with id %s", todo_id)
            return None
        return todo_id

    def count(self) -> int:
        """Get the number of todos."""
        with self._connect() as conn:
            result = conn.execute("SELECT COUNT(*) FROM todos").fetchone()
        return int(result[0])
