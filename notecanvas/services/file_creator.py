"""Creates new notes for extracted sections and quick cards."""

from notecanvas.config import ExtractionConfig
from notecanvas.core.file_store.base import FileStore
from notecanvas.utils.filenames import MARKDOWN_SUFFIX, join_path, parent_folder, sanitize_filename
from notecanvas.utils.logger import get_logger

logger = get_logger(__name__)


class FileCreator:
    """
    Places new markdown notes in the vault.

    Names come from heading text (sanitized, optionally prefixed); clashes
    get a numeric suffix: "Idea.md", "Idea_1.md", "Idea_2.md", ...
    """

    def __init__(self, file_store: FileStore, config: ExtractionConfig | None = None):
        self.file_store = file_store
        self.config = config or ExtractionConfig()

    async def create_file(self, heading_text: str, content: str, source_doc: str) -> str:
        """
        Create a note named after ``heading_text``.

        Args:
            heading_text: Heading the note is extracted from
            content: Initial note text
            source_doc: Document the content comes from (used for folder resolution)

        Returns:
            Path of the created note
        """
        base_name = sanitize_filename(self.config.file_name_prefix + heading_text)
        folder = self.resolve_folder(source_doc)
        await self.ensure_folder(folder)
        path = await self.resolve_unique_file_path(folder, base_name)
        doc_id = await self.file_store.create(path, content)
        logger.info(f"Created note {doc_id} from {source_doc}")
        return doc_id

    async def resolve_unique_file_path(self, folder: str, base_name: str) -> str:
        path = join_path(folder, f"{base_name}{MARKDOWN_SUFFIX}")
        suffix = 0
        while await self.file_store.exists(path):
            suffix += 1
            path = join_path(folder, f"{base_name}_{suffix}{MARKDOWN_SUFFIX}")
        return path

    def resolve_folder(self, source_doc: str) -> str:
        if self.config.extracted_files_folder:
            return self.config.extracted_files_folder.strip("/")
        return parent_folder(source_doc)

    async def ensure_folder(self, folder: str) -> None:
        if not folder:
            return
        if not await self.file_store.exists_folder(folder):
            await self.file_store.create_folder(folder)
            logger.debug(f"Created folder {folder}")
