"""SQLite FTS5 storage and search for parsed catalog items."""

import json
import re
import sqlite3
from collections.abc import Generator
from contextlib import contextmanager
from pathlib import Path

from fmhy_catalog.models import Item, Link, LinkType, Metadata, ParsedDocument, SearchResult


class CatalogDatabase:
    """Manages the SQLite FTS5 database for catalog item search."""

    def __init__(self, db_path: Path) -> None:
        """Initialise database with the given path.

        Args:
            db_path: Path to the SQLite database file.
        """
        self.db_path = db_path
        self._initialise_schema()

    @staticmethod
    def _sanitise_query(query: str) -> str:
        """Sanitise user query for FTS5 MATCH clause.

        Queries made of anything other than FTS5 bareword characters, or
        containing boolean operators, are wrapped in quotes so they are
        matched as a literal phrase.

        Args:
            query: Raw user query string.

        Returns:
            Sanitised query string safe for FTS5 MATCH.
        """
        fts5_bareword = re.compile(r"^[\w\s]+$", re.UNICODE)
        fts5_operators = re.compile(r"\b(AND|OR|NOT|NEAR)\b", re.IGNORECASE)

        if not fts5_bareword.match(query) or fts5_operators.search(query):
            query = query.replace('"', '""')
            return f'"{query}"'

        return query

    @contextmanager
    def _get_connection(self) -> Generator[sqlite3.Connection, None, None]:
        """Context manager for database connections.

        Yields:
            SQLite connection with Row factory enabled.
        """
        conn = sqlite3.connect(self.db_path)
        conn.row_factory = sqlite3.Row
        try:
            yield conn
        finally:
            conn.close()

    def _initialise_schema(self) -> None:
        """Create database schema if it doesn't exist."""
        with self._get_connection() as conn:
            conn.executescript("""
                CREATE TABLE IF NOT EXISTS documents (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    filename TEXT UNIQUE NOT NULL,
                    title TEXT NOT NULL,
                    total_items INTEGER NOT NULL,
                    starred_items INTEGER NOT NULL,
                    index_items INTEGER NOT NULL,
                    cross_references INTEGER NOT NULL,
                    created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
                    updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
                );

                CREATE TABLE IF NOT EXISTS items (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    filename TEXT NOT NULL,
                    position INTEGER NOT NULL,
                    section TEXT NOT NULL,
                    subsection TEXT,
                    name TEXT NOT NULL,
                    description TEXT NOT NULL,
                    links TEXT NOT NULL,
                    is_starred INTEGER NOT NULL,
                    is_index INTEGER NOT NULL,
                    is_cross_reference INTEGER NOT NULL,
                    raw_content TEXT NOT NULL
                );

                CREATE VIRTUAL TABLE IF NOT EXISTS items_fts USING fts5(
                    name,
                    description,
                    content='items',
                    content_rowid='id',
                    tokenize='porter unicode61'
                );

                CREATE TRIGGER IF NOT EXISTS items_ai AFTER INSERT ON items BEGIN
                    INSERT INTO items_fts(rowid, name, description)
                    VALUES (new.id, new.name, new.description);
                END;

                CREATE TRIGGER IF NOT EXISTS items_ad AFTER DELETE ON items BEGIN
                    INSERT INTO items_fts(items_fts, rowid, name, description)
                    VALUES ('delete', old.id, old.name, old.description);
                END;

                CREATE TRIGGER IF NOT EXISTS items_au AFTER UPDATE ON items BEGIN
                    INSERT INTO items_fts(items_fts, rowid, name, description)
                    VALUES ('delete', old.id, old.name, old.description);
                    INSERT INTO items_fts(rowid, name, description)
                    VALUES (new.id, new.name, new.description);
                END;

                CREATE INDEX IF NOT EXISTS idx_items_filename ON items(filename, position);
            """)
            conn.commit()

    def upsert_document(self, document: ParsedDocument) -> None:
        """Insert or replace a document and all of its items.

        Args:
            document: Parsed document to store.
        """
        metadata = document.metadata
        rows = []
        for section in document.sections:
            groups: list[tuple[str | None, tuple[Item, ...]]] = [(None, section.items)]
            groups.extend((sub.title, sub.items) for sub in section.subsections)
            for subsection_title, items in groups:
                for item in items:
                    rows.append(
                        (
                            document.filename,
                            len(rows),
                            section.title,
                            subsection_title,
                            item.name,
                            item.description,
                            json.dumps([link.to_dict() for link in item.links], ensure_ascii=False),
                            item.is_starred,
                            item.is_index,
                            item.is_cross_reference,
                            item.raw_content,
                        )
                    )

        with self._get_connection() as conn:
            conn.execute(
                """
                INSERT INTO documents (
                    filename, title, total_items, starred_items, index_items, cross_references
                )
                VALUES (?, ?, ?, ?, ?, ?)
                ON CONFLICT(filename) DO UPDATE SET
                    title = excluded.title,
                    total_items = excluded.total_items,
                    starred_items = excluded.starred_items,
                    index_items = excluded.index_items,
                    cross_references = excluded.cross_references,
                    updated_at = CURRENT_TIMESTAMP
                """,
                (
                    document.filename,
                    document.title,
                    metadata.total_items,
                    metadata.starred_items,
                    metadata.index_items,
                    metadata.cross_references,
                ),
            )
            conn.execute("DELETE FROM items WHERE filename = ?", (document.filename,))
            conn.executemany(
                """
                INSERT INTO items (
                    filename, position, section, subsection, name, description, links,
                    is_starred, is_index, is_cross_reference, raw_content
                )
                VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
                """,
                rows,
            )
            conn.commit()

    def search(
        self,
        query: str,
        document: str | None = None,
        starred_only: bool = False,
        limit: int = 10,
    ) -> list[SearchResult]:
        """Search items using FTS5.

        Args:
            query: Search query string.
            document: Optional filename filter.
            starred_only: Only return starred items.
            limit: Maximum number of results.

        Returns:
            List of SearchResult instances ordered by relevance.
        """
        # A query without any word characters tokenizes to nothing
        if not re.search(r"\w", query):
            return []

        sanitised_query = self._sanitise_query(query)

        with self._get_connection() as conn:
            sql = """
                SELECT
                    i.filename,
                    i.section,
                    i.subsection,
                    i.name,
                    i.description,
                    i.is_starred,
                    snippet(items_fts, 1, '<mark>', '</mark>', '...', 32) as snippet,
                    bm25(items_fts, 5.0, 1.0) as score
                FROM items_fts
                JOIN items i ON items_fts.rowid = i.id
                WHERE items_fts MATCH ?
            """
            params: list[str | int] = [sanitised_query]

            if document:
                sql += " AND i.filename = ?"
                params.append(document)

            if starred_only:
                sql += " AND i.is_starred = 1"

            sql += " ORDER BY score LIMIT ?"
            params.append(limit)

            cursor = conn.execute(sql, params)
            results = []
            for row in cursor.fetchall():
                results.append(
                    SearchResult(
                        filename=row["filename"],
                        section=row["section"],
                        subsection=row["subsection"],
                        name=row["name"],
                        description=row["description"],
                        snippet=row["snippet"],
                        score=abs(row["score"]),  # BM25 returns negative scores
                        is_starred=bool(row["is_starred"]),
                    )
                )
            return results

    def get_items(self, filename: str) -> list[Item]:
        """Retrieve the stored items of a document in source order.

        Args:
            filename: Document filename.

        Returns:
            List of Item instances, empty if the document is unknown.
        """
        with self._get_connection() as conn:
            cursor = conn.execute(
                "SELECT * FROM items WHERE filename = ? ORDER BY position",
                (filename,),
            )
            return [
                Item(
                    name=row["name"],
                    description=row["description"],
                    links=tuple(
                        Link(url=link["url"], text=link["text"], type=LinkType(link["type"]))
                        for link in json.loads(row["links"])
                    ),
                    is_starred=bool(row["is_starred"]),
                    is_index=bool(row["is_index"]),
                    is_cross_reference=bool(row["is_cross_reference"]),
                    raw_content=row["raw_content"],
                )
                for row in cursor.fetchall()
            ]

    def get_metadata(self, filename: str) -> Metadata | None:
        """Retrieve the stored counts of a document.

        Args:
            filename: Document filename.

        Returns:
            Metadata instance or None if not found.
        """
        with self._get_connection() as conn:
            cursor = conn.execute(
                "SELECT * FROM documents WHERE filename = ?",
                (filename,),
            )
            row = cursor.fetchone()
            if row:
                return Metadata(
                    total_items=row["total_items"],
                    starred_items=row["starred_items"],
                    index_items=row["index_items"],
                    cross_references=row["cross_references"],
                )
            return None

    def clear(self) -> None:
        """Clear all documents and items from the database."""
        with self._get_connection() as conn:
            conn.execute("DELETE FROM items")
            conn.execute("DELETE FROM documents")
            conn.commit()

    def get_document_count(self) -> int:
        """Return the total number of indexed documents.

        Returns:
            Count of documents in the database.
        """
        with self._get_connection() as conn:
            cursor = conn.execute("SELECT COUNT(*) FROM documents")
            result = cursor.fetchone()
            return int(result[0]) if result else 0

    def get_item_count(self) -> int:
        """Return the total number of indexed items.

        Returns:
            Count of items in the database.
        """
        with self._get_connection() as conn:
            cursor = conn.execute("SELECT COUNT(*) FROM items")
            result = cursor.fetchone()
            return int(result[0]) if result else 0
