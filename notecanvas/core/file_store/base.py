"""
Base interface for document storage.

Documents are addressed by vault-relative POSIX paths ("notes/Idea.md",
"boards/Research.canvas") and always read and written whole.
"""

from abc import ABC, abstractmethod


class FileStore(ABC):
    """Abstract base class for document storage implementations."""

    async def initialize(self) -> None:
        """Prepare the backing storage. No-op by default."""
        return None

    @abstractmethod
    async def read(self, doc_id: str) -> str:
        """
        Read a document's full text.

        Args:
            doc_id: Document path

        Returns:
            Document text

        Raises:
            DocumentNotFoundError: If the document does not exist
        """
        pass

    @abstractmethod
    async def write(self, doc_id: str, text: str) -> None:
        """
        Overwrite an existing document.

        Args:
            doc_id: Document path
            text: New full text

        Raises:
            DocumentNotFoundError: If the document does not exist
        """
        pass

    @abstractmethod
    async def create(self, path: str, text: str) -> str:
        """
        Create a new document.

        Args:
            path: Document path
            text: Initial text

        Returns:
            Document id of the created document

        Raises:
            DocumentExistsError: If a document already exists at path
        """
        pass

    @abstractmethod
    async def exists(self, path: str) -> bool:
        """Check whether a document exists at path."""
        pass

    @abstractmethod
    async def exists_folder(self, path: str) -> bool:
        """Check whether a folder exists."""
        pass

    @abstractmethod
    async def create_folder(self, path: str) -> None:
        """Create a folder (and missing parents)."""
        pass
