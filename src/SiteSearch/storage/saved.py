"""Saved (named) advanced searches."""

from __future__ import annotations

import json
import sqlite3
from datetime import datetime, timezone
from typing import TYPE_CHECKING, Any

from SiteSearch.core.models import SavedSearch
from SiteSearch.core.query import SearchConstraints
from SiteSearch.utils.log import log

if TYPE_CHECKING:
    from SiteSearch.storage.db import DatabaseManager

_COLUMNS = "id, user_id, name, constraints, created_at, updated_at"


class SavedSearchStore:
    """SQLite-backed store of named search constraints.

    Every operation is scoped by user id; a user never sees or changes
    another user's saved searches.
    """

    def __init__(self, db_manager: DatabaseManager):
        log.debug("Initializing SavedSearchStore")
        self.conn = db_manager.get_connection()

    def create(self, user_id: str, name: str, constraints: SearchConstraints) -> SavedSearch:
        """Save constraints under a name.

        Raises:
            ValueError: If the name is blank or already used by this user.
        """
        name = _check_name(name)
        try:
            cursor = self.conn.execute(
                "INSERT INTO saved_searches (user_id, name, constraints) VALUES (?, ?, ?)",
                (user_id, name, _dump(constraints)),
            )
        except sqlite3.IntegrityError as error:
            raise ValueError(f"Saved search already exists: {name}") from error
        self.conn.commit()
        log.debug("Saved search created: user=%s name=%s", user_id, name)
        saved = self._get_by_id(int(cursor.lastrowid), user_id)
        assert saved is not None
        return saved

    def list_for_user(self, user_id: str) -> list[SavedSearch]:
        """Return a user's saved searches, newest first."""
        rows = self.conn.execute(
            f"SELECT {_COLUMNS} FROM saved_searches WHERE user_id = ? ORDER BY created_at DESC, id DESC",
            (user_id,),
        ).fetchall()
        return [_to_saved(row) for row in rows]

    def get_by_name(self, user_id: str, name: str) -> SavedSearch | None:
        row = self.conn.execute(
            f"SELECT {_COLUMNS} FROM saved_searches WHERE user_id = ? AND name = ?",
            (user_id, name.strip()),
        ).fetchone()
        return _to_saved(row) if row else None

    def update(
        self,
        saved_id: int,
        user_id: str,
        *,
        name: str | None = None,
        constraints: SearchConstraints | None = None,
    ) -> SavedSearch | None:
        """Rename a saved search and/or replace its constraints.

        Returns:
            The updated saved search, or None when it does not exist for the user.

        Raises:
            ValueError: If the new name is blank or already taken.
        """
        assignments = ["updated_at = CAST(strftime('%s','now') AS INTEGER)"]
        args: list[Any] = []
        if name is not None:
            assignments.append("name = ?")
            args.append(_check_name(name))
        if constraints is not None:
            assignments.append("constraints = ?")
            args.append(_dump(constraints))
        args.extend([saved_id, user_id])
        try:
            cursor = self.conn.execute(
                f"UPDATE saved_searches SET {', '.join(assignments)} WHERE id = ? AND user_id = ?",
                args,
            )
        except sqlite3.IntegrityError as error:
            raise ValueError(f"Saved search already exists: {name}") from error
        self.conn.commit()
        if cursor.rowcount == 0:
            return None
        return self._get_by_id(saved_id, user_id)

    def delete(self, saved_id: int, user_id: str) -> bool:
        """Delete a saved search. Returns False when nothing was deleted."""
        cursor = self.conn.execute(
            "DELETE FROM saved_searches WHERE id = ? AND user_id = ?",
            (saved_id, user_id),
        )
        self.conn.commit()
        return cursor.rowcount > 0

    def _get_by_id(self, saved_id: int, user_id: str) -> SavedSearch | None:
        row = self.conn.execute(
            f"SELECT {_COLUMNS} FROM saved_searches WHERE id = ? AND user_id = ?",
            (saved_id, user_id),
        ).fetchone()
        return _to_saved(row) if row else None


def _check_name(name: str) -> str:
    value = name.strip() if isinstance(name, str) else ""
    if not value:
        raise ValueError("Saved search name must not be empty")
    return value


def _dump(constraints: SearchConstraints) -> str:
    return json.dumps(constraints.to_mapping(), ensure_ascii=False, sort_keys=True)


def _to_saved(row: tuple) -> SavedSearch:
    return SavedSearch(
        id=row[0],
        user_id=row[1],
        name=row[2],
        constraints=json.loads(row[3]),
        created_at=_from_epoch(row[4]),
        updated_at=_from_epoch(row[5]),
    )


def _from_epoch(value: int | None) -> datetime | None:
    if value is None:
        return None
    return datetime.fromtimestamp(value, tz=timezone.utc)
