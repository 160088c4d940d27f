"""Helpers for turning heading text into note file names and paths."""

import re
from pathlib import PurePosixPath

FORBIDDEN_CHARS = re.compile(r'[/\\:*?"<>|]')
CONSECUTIVE_SPACES = re.compile(r" {2,}")
DOTS_ONLY = re.compile(r"^\.+$")

MARKDOWN_SUFFIX = ".md"
CANVAS_SUFFIX = ".canvas"


def sanitize_filename(name: str) -> str:
    """Strip characters that are not allowed in file names; fall back to "Untitled"."""
    sanitized = CONSECUTIVE_SPACES.sub(" ", FORBIDDEN_CHARS.sub("", name)).strip()
    if not sanitized or DOTS_ONLY.match(sanitized):
        return "Untitled"
    return sanitized


def document_basename(doc_id: str) -> str:
    """
    Name used inside wiki links for a document.

    "notes/My Note.md" -> "My Note". Non-markdown ids keep their suffix.
    """
    name = PurePosixPath(doc_id).name
    if name.endswith(MARKDOWN_SUFFIX):
        return name[: -len(MARKDOWN_SUFFIX)]
    return name


def parent_folder(doc_id: str) -> str:
    """Folder part of a vault-relative path ("" for the vault root)."""
    parent = str(PurePosixPath(doc_id).parent)
    return "" if parent == "." else parent


def join_path(folder: str, file_name: str) -> str:
    return f"{folder}/{file_name}" if folder else file_name


def is_canvas_path(doc_id: str) -> bool:
    return doc_id.endswith(CANVAS_SUFFIX)
