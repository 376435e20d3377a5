"""Per-user search history storage."""

from __future__ import annotations

import json
import sqlite3
from datetime import datetime, timezone
from typing import TYPE_CHECKING, Mapping, Sequence

from SiteSearch.core.models import SearchRecord, SearchResult
from SiteSearch.core.query import CompiledQuery
from SiteSearch.utils.log import log

if TYPE_CHECKING:
    from SiteSearch.storage.db import DatabaseManager


class SearchHistoryStore:
    """SQLite-backed store of executed searches and their results."""

    def __init__(self, db_manager: DatabaseManager):
        """Initialize history store.

        Args:
            db_manager: Database manager owning the connection.
        """
        log.debug("Initializing SearchHistoryStore")
        self.conn = db_manager.get_connection()

    def record(
        self,
        *,
        user_id: str,
        domain: str,
        keyword: str,
        compiled: CompiledQuery,
        params: Mapping[str, str],
        results: Sequence[SearchResult],
    ) -> int:
        """Store one search and its normalized results.

        Args:
            user_id: Owner of the search.
            domain: Domain the search was restricted to.
            keyword: Keyword (basic) or description (advanced) stored per result.
            compiled: Compiled query that was sent upstream.
            params: Auxiliary request parameters.
            results: Normalized results in provider order.

        Returns:
            Row id of the new ``search_history`` entry.
        """
        cursor = self.conn.execute(
            """
            INSERT INTO search_history (
                user_id, domain, query, description, operators, params, result_count
            ) VALUES (?, ?, ?, ?, ?, ?, ?)
            """,
            (
                user_id,
                domain,
                compiled.query,
                compiled.description,
                json.dumps(list(compiled.operators), ensure_ascii=False),
                json.dumps(dict(params), ensure_ascii=False, sort_keys=True),
                len(results),
            ),
        )
        history_id = int(cursor.lastrowid)
        self.conn.executemany(
            """
            INSERT INTO search_results (
                search_history_id, domain, keyword, title, url, snippet
            ) VALUES (?, ?, ?, ?, ?, ?)
            """,
            [(history_id, domain, keyword, r.title, r.url, r.snippet) for r in results],
        )
        self.conn.commit()
        log.debug("Recorded search id=%d user=%s results=%d", history_id, user_id, len(results))
        return history_id

    def list_for_user(self, user_id: str, *, limit: int | None = None) -> list[SearchRecord]:
        """Return a user's searches, newest first, with their results.

        Args:
            user_id: Owner of the searches.
            limit: Optional maximum number of searches.
        """
        sql = """
            SELECT id, user_id, domain, query, description, operators, params,
                   result_count, created_at
            FROM search_history
            WHERE user_id = ?
            ORDER BY created_at DESC, id DESC
        """
        args: list[object] = [user_id]
        if limit is not None:
            sql += " LIMIT ?"
            args.append(limit)

        rows = self.conn.execute(sql, args).fetchall()
        return [self._to_record(row, self.get_results(row[0])) for row in rows]

    def get(self, history_id: int, user_id: str) -> SearchRecord | None:
        """Return one search owned by `user_id`, or None."""
        row = self.conn.execute(
            """
            SELECT id, user_id, domain, query, description, operators, params,
                   result_count, created_at
            FROM search_history
            WHERE id = ? AND user_id = ?
            """,
            (history_id, user_id),
        ).fetchone()
        if row is None:
            return None
        return self._to_record(row, self.get_results(row[0]))

    def get_results(self, history_id: int) -> list[SearchResult]:
        """Return the stored results of one search in their original order."""
        cursor = self.conn.execute(
            """
            SELECT title, url, snippet
            FROM search_results
            WHERE search_history_id = ?
            ORDER BY id
            """,
            (history_id,),
        )
        return [
            SearchResult(title=row[0], url=row[1], snippet=row[2], position=idx)
            for idx, row in enumerate(cursor, start=1)
        ]

    @staticmethod
    def _to_record(row: sqlite3.Row | tuple, results: Sequence[SearchResult]) -> SearchRecord:
        return SearchRecord(
            id=row[0],
            user_id=row[1],
            domain=row[2],
            query=row[3],
            description=row[4],
            operators=tuple(json.loads(row[5])),
            params=json.loads(row[6]),
            result_count=row[7],
            created_at=datetime.fromtimestamp(row[8], tz=timezone.utc) if row[8] is not None else None,
            results=tuple(results),
        )
