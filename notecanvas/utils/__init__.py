"""Utility modules for notecanvas."""

from notecanvas.utils.exceptions import (
    ConfigurationError,
    DocumentAccessError,
    DocumentExistsError,
    DocumentNotFoundError,
    FileStoreError,
    InvalidPathError,
    MalformedGraphDocumentError,
    NoteCanvasError,
    ValidationError,
)
from notecanvas.utils.filenames import (
    document_basename,
    is_canvas_path,
    join_path,
    parent_folder,
    sanitize_filename,
)
from notecanvas.utils.id_generator import generate_canvas_id
from notecanvas.utils.logger import get_logger, setup_logging

__all__ = [
    # Logging
    "get_logger",
    "setup_logging",
    # ID Generators
    "generate_canvas_id",
    # File names
    "sanitize_filename",
    "document_basename",
    "parent_folder",
    "join_path",
    "is_canvas_path",
    # Exceptions
    "NoteCanvasError",
    "FileStoreError",
    "DocumentNotFoundError",
    "DocumentExistsError",
    "DocumentAccessError",
    "InvalidPathError",
    "MalformedGraphDocumentError",
    "ValidationError",
    "ConfigurationError",
]
