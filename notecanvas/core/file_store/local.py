"""Filesystem-backed file store rooted at a vault directory."""

import asyncio
from pathlib import Path

from notecanvas.core.file_store.base import FileStore
from notecanvas.utils.exceptions import (
    DocumentAccessError,
    DocumentExistsError,
    DocumentNotFoundError,
    InvalidPathError,
)
from notecanvas.utils.logger import get_logger

logger = get_logger(__name__)

INVALID_PATH_CHARS = {"<", ">", ":", '"', "|", "?", "*"}


def validate_doc_path(path: str) -> tuple[bool, str]:
    """
    Validate a vault-relative path.

    Returns (is_valid, message). Message is empty when valid.
    """
    if not path or len(path) > 512:
        return False, "Path must be 1-512 characters"
    if "\\" in path:
        return False, "Path must use Unix separators (/)"
    if path.startswith("/"):
        return False, "Path must be relative (no leading /)"
    if any(part == ".." for part in path.split("/")):
        return False, "Path must not contain '..'"
    if any(char in INVALID_PATH_CHARS for char in path):
        return False, "Path contains invalid characters"
    return True, ""


class LocalFileStore(FileStore):
    """
    Documents stored as UTF-8 files below a vault root.

    Blocking filesystem calls run in a worker thread so a sync pass only
    suspends at store awaits.
    """

    def __init__(self, root: str | Path, encoding: str = "utf-8"):
        """
        Initialize local store.

        Args:
            root: Vault directory
            encoding: Text encoding for all documents
        """
        self.root = Path(root).resolve()
        self.encoding = encoding

    async def initialize(self) -> None:
        await asyncio.to_thread(self.root.mkdir, parents=True, exist_ok=True)
        logger.info(f"Local file store ready at {self.root}")

    def resolve(self, path: str) -> Path:
        """
        Resolve a vault-relative path to an absolute one.

        Raises:
            InvalidPathError: If the path is malformed or escapes the vault
        """
        is_valid, message = validate_doc_path(path)
        if not is_valid:
            raise InvalidPathError(message, context={"path": path})
        full_path = (self.root / path).resolve()
        if full_path != self.root and self.root not in full_path.parents:
            raise InvalidPathError(f"Path escapes vault root: {path}", context={"path": path})
        return full_path

    async def read(self, doc_id: str) -> str:
        path = self.resolve(doc_id)
        try:
            return await asyncio.to_thread(path.read_text, encoding=self.encoding)
        except (FileNotFoundError, IsADirectoryError) as e:
            raise DocumentNotFoundError(
                f"Document not found: {doc_id}", context={"doc_id": doc_id}
            ) from e
        except UnicodeDecodeError as e:
            raise DocumentAccessError(
                f"Document is not valid {self.encoding} text: {doc_id}",
                context={"doc_id": doc_id, "position": e.start},
            ) from e
        except OSError as e:
            raise DocumentAccessError(
                f"Cannot read document {doc_id}: {e.strerror or e}",
                context={"doc_id": doc_id, "errno": e.errno},
            ) from e

    async def write(self, doc_id: str, text: str) -> None:
        path = self.resolve(doc_id)
        if not await asyncio.to_thread(path.is_file):
            raise DocumentNotFoundError(f"Document not found: {doc_id}", context={"doc_id": doc_id})
        try:
            await asyncio.to_thread(path.write_text, text, encoding=self.encoding)
        except (OSError, UnicodeEncodeError) as e:
            raise DocumentAccessError(
                f"Cannot write document {doc_id}: {e}", context={"doc_id": doc_id}
            ) from e
        logger.debug(f"Wrote {doc_id} ({len(text)} chars)")

    async def create(self, path: str, text: str) -> str:
        full_path = self.resolve(path)

        def _create() -> None:
            full_path.parent.mkdir(parents=True, exist_ok=True)
            with full_path.open("x", encoding=self.encoding) as f:
                f.write(text)

        try:
            await asyncio.to_thread(_create)
        except FileExistsError as e:
            raise DocumentExistsError(
                f"Document already exists: {path}", context={"path": path}
            ) from e
        except (OSError, UnicodeEncodeError) as e:
            raise DocumentAccessError(
                f"Cannot create document {path}: {e}", context={"path": path}
            ) from e

        logger.info(f"Created document {path}")
        return path

    async def exists(self, path: str) -> bool:
        return await asyncio.to_thread(self.resolve(path).is_file)

    async def exists_folder(self, path: str) -> bool:
        if not path:
            return await asyncio.to_thread(self.root.is_dir)
        return await asyncio.to_thread(self.resolve(path).is_dir)

    async def create_folder(self, path: str) -> None:
        target = self.resolve(path) if path else self.root
        await asyncio.to_thread(target.mkdir, parents=True, exist_ok=True)
