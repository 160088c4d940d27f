"""In-memory file store, used by embedding hosts and tests."""

from pathlib import PurePosixPath

from notecanvas.core.file_store.base import FileStore
from notecanvas.utils.exceptions import DocumentExistsError, DocumentNotFoundError


class InMemoryFileStore(FileStore):
    """Dict-backed store. Folders are implied by document paths or created explicitly."""

    def __init__(self, documents: dict[str, str] | None = None):
        self.documents: dict[str, str] = dict(documents or {})
        self.folders: set[str] = set()

    async def read(self, doc_id: str) -> str:
        try:
            return self.documents[doc_id]
        except KeyError as e:
            raise DocumentNotFoundError(
                f"Document not found: {doc_id}", context={"doc_id": doc_id}
            ) from e

    async def write(self, doc_id: str, text: str) -> None:
        if doc_id not in self.documents:
            raise DocumentNotFoundError(f"Document not found: {doc_id}", context={"doc_id": doc_id})
        self.documents[doc_id] = text

    async def create(self, path: str, text: str) -> str:
        if path in self.documents:
            raise DocumentExistsError(f"Document already exists: {path}", context={"path": path})
        self.documents[path] = text
        return path

    async def exists(self, path: str) -> bool:
        return path in self.documents

    async def exists_folder(self, path: str) -> bool:
        if not path or path in self.folders:
            return True
        return any(path in (str(p) for p in PurePosixPath(doc).parents) for doc in self.documents)

    async def create_folder(self, path: str) -> None:
        if path:
            self.folders.add(path)
