"""
Custom exception hierarchy for notecanvas.

Provides structured error types for file store access, canvas parsing
and backlink synchronization. All exceptions inherit from NoteCanvasError
for easy catching.
"""


class NoteCanvasError(Exception):
    """
    Base exception for all notecanvas errors.
    All custom exceptions should inherit from this class.
    """

    def __init__(self, message: str, context: dict | None = None):
        """
        Initialize notecanvas error.
        Args:
            message: Error message
            context: Optional context dictionary with additional error details
        """
        super().__init__(message)
        self.message = message
        self.context = context or {}


class FileStoreError(NoteCanvasError):
    """
    Base exception for file store operations.
    Used for errors related to reading and writing documents.
    """

    pass


class DocumentNotFoundError(FileStoreError):
    """
    Document not found errors.
    Raised when a document id does not resolve to a stored document.
    """

    pass


class DocumentExistsError(FileStoreError):
    """
    Document already exists.
    Raised when creating a document at a path that is already taken.
    """

    pass


class DocumentAccessError(FileStoreError):
    """
    Document exists but cannot be read or written.
    Raised on permission failures and bytes that do not decode as text.
    """

    pass


class InvalidPathError(FileStoreError):
    """
    Invalid document path.
    Raised when a path is malformed or escapes the vault root.
    """

    pass


class MalformedGraphDocumentError(NoteCanvasError):
    """
    Canvas document errors.
    Raised when a canvas document is not valid JSON or violates the schema.
    """

    pass


class ValidationError(NoteCanvasError):
    """
    Validation errors.
    Raised when input validation fails or data is invalid.
    """

    pass


class ConfigurationError(NoteCanvasError):
    """
    Configuration errors.
    Raised when configuration is invalid or missing required values.
    """

    pass
