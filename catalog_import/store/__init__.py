"""Document store backends."""

from .document_store import (
    DEFAULT_DB_PATH,
    DocumentStore,
    MemoryDocumentStore,
    SQLiteDocumentStore,
)

__all__ = ['DEFAULT_DB_PATH', 'DocumentStore', 'MemoryDocumentStore', 'SQLiteDocumentStore']
