"""
Document storage backends for notecanvas.

Available backends:
- LocalFileStore: vault directory on the local filesystem
- InMemoryFileStore: dict-backed, for embedding hosts and tests
"""

from notecanvas.core.file_store.base import FileStore
from notecanvas.core.file_store.local import LocalFileStore, validate_doc_path
from notecanvas.core.file_store.memory import InMemoryFileStore

__all__ = ["FileStore", "LocalFileStore", "InMemoryFileStore", "validate_doc_path"]
