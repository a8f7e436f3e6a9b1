"""
Document Store

Minimal document-database interface used by the importer: point lookup by
field equality, insert, and whole-field update. Documents are plain dicts;
every returned document carries its id under the "id" key.

Backends:
    MemoryDocumentStore - in-process dicts (tests, scratch runs)
    SQLiteDocumentStore - JSON documents in a SQLite file
"""

import json
import logging
import sqlite3
import uuid
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Dict, Generator, List, Optional

logger = logging.getLogger(__name__)

DEFAULT_DB_PATH = "data/catalog.db"


class DocumentStore:
    """Interface shared by all backends."""

    def find_one(self, collection: str, field: str, value: Any) -> Optional[Dict[str, Any]]:
        """First document whose field equals value, or None."""
        matches = self.find_all(collection, field, value, limit=1)
        return matches[0] if matches else None

    def find_all(
        self, collection: str, field: str, value: Any, limit: Optional[int] = None
    ) -> List[Dict[str, Any]]:
        raise NotImplementedError

    def list_all(self, collection: str) -> List[Dict[str, Any]]:
        raise NotImplementedError

    def insert(self, collection: str, data: Dict[str, Any]) -> str:
        """Insert a document and return its new id."""
        raise NotImplementedError

    def update(self, collection: str, doc_id: str, fields: Dict[str, Any]) -> None:
        """Overwrite the given top-level fields of an existing document."""
        raise NotImplementedError


class MemoryDocumentStore(DocumentStore):
    """Dict-backed store. Insertion order is preserved per collection."""

    def __init__(self):
        self.collections: Dict[str, Dict[str, Dict[str, Any]]] = {}

    def _collection(self, name: str) -> Dict[str, Dict[str, Any]]:
        return self.collections.setdefault(name, {})

    def find_all(self, collection, field, value, limit=None):
        matches = []
        for doc_id, data in self._collection(collection).items():
            if data.get(field) == value:
                matches.append({**data, "id": doc_id})
                if limit and len(matches) >= limit:
                    break
        return matches

    def list_all(self, collection):
        return [{**data, "id": doc_id} for doc_id, data in self._collection(collection).items()]

    def insert(self, collection, data):
        doc_id = uuid.uuid4().hex
        self._collection(collection)[doc_id] = dict(data)
        return doc_id

    def update(self, collection, doc_id, fields):
        docs = self._collection(collection)
        if doc_id not in docs:
            raise KeyError(f"No document {doc_id} in {collection}")
        docs[doc_id].update(fields)

    def count(self, collection: str) -> int:
        return len(self._collection(collection))


class SQLiteDocumentStore(DocumentStore):
    """
    Stores each document as a JSON blob in a single SQLite table.

    Field lookups use json_extract, so only top-level scalar fields can be
    matched.
    """

    def __init__(self, db_path: str = DEFAULT_DB_PATH):
        self.db_path = db_path
        self.init_db()

    @contextmanager
    def get_connection(self) -> Generator[sqlite3.Connection, None, None]:
        """Context manager for database connections."""
        # Ensure directory exists
        Path(self.db_path).parent.mkdir(parents=True, exist_ok=True)

        conn = sqlite3.connect(self.db_path)
        conn.row_factory = sqlite3.Row
        try:
            yield conn
        finally:
            conn.close()

    def init_db(self) -> None:
        """Initialize the database schema."""
        with self.get_connection() as conn:
            conn.execute("""
                CREATE TABLE IF NOT EXISTS documents (
                    seq INTEGER PRIMARY KEY AUTOINCREMENT,
                    collection TEXT NOT NULL,
                    doc_id TEXT NOT NULL,
                    data TEXT NOT NULL,
                    UNIQUE(collection, doc_id)
                )
            """)
            conn.execute(
                "CREATE INDEX IF NOT EXISTS idx_documents_collection ON documents(collection)"
            )
            conn.commit()

    @staticmethod
    def _row_to_doc(row: sqlite3.Row) -> Dict[str, Any]:
        data = json.loads(row["data"])
        data["id"] = row["doc_id"]
        return data

    def find_all(self, collection, field, value, limit=None):
        sql = (
            "SELECT doc_id, data FROM documents "
            "WHERE collection = ? AND json_extract(data, ?) = ? ORDER BY seq"
        )
        params: List[Any] = [collection, f'$."{field}"', value]
        if limit:
            sql += " LIMIT ?"
            params.append(limit)

        with self.get_connection() as conn:
            rows = conn.execute(sql, params).fetchall()
        return [self._row_to_doc(r) for r in rows]

    def list_all(self, collection):
        with self.get_connection() as conn:
            rows = conn.execute(
                "SELECT doc_id, data FROM documents WHERE collection = ? ORDER BY seq",
                (collection,),
            ).fetchall()
        return [self._row_to_doc(r) for r in rows]

    def insert(self, collection, data):
        doc_id = uuid.uuid4().hex
        with self.get_connection() as conn:
            conn.execute(
                "INSERT INTO documents (collection, doc_id, data) VALUES (?, ?, ?)",
                (collection, doc_id, json.dumps(data, ensure_ascii=False)),
            )
            conn.commit()
        logger.debug("Inserted %s/%s", collection, doc_id)
        return doc_id

    def update(self, collection, doc_id, fields):
        with self.get_connection() as conn:
            row = conn.execute(
                "SELECT data FROM documents WHERE collection = ? AND doc_id = ?",
                (collection, doc_id),
            ).fetchone()
            if row is None:
                raise KeyError(f"No document {doc_id} in {collection}")

            data = json.loads(row["data"])
            data.update(fields)
            conn.execute(
                "UPDATE documents SET data = ? WHERE collection = ? AND doc_id = ?",
                (json.dumps(data, ensure_ascii=False), collection, doc_id),
            )
            conn.commit()
