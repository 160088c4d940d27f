"""
Backlink Writer - textual link mutations on markdown documents.

Handles:
- Replacing an extracted section's body with a [[link]] pointer
- Appending / removing connection bullets under a "## {section}" heading
- Optional front matter mirror of connections

Every mutation is a read-modify-write against the file store. When a
mutation finds nothing to do it returns False without writing.
"""

import re

import frontmatter

from notecanvas.core.file_store.base import FileStore
from notecanvas.core.sections.extractor import SectionExtractor, compute_fence_mask
from notecanvas.models.sync import ConnectionDirection
from notecanvas.utils.logger import get_logger

logger = get_logger(__name__)

BLANK_RUN_PATTERN = re.compile(r"\n{3,}")
BULLET_PREFIXES = ("- ", "* ", "+ ")


def wiki_link(target: str) -> str:
    return f"[[{target}]]"


def _is_section_boundary(line: str) -> bool:
    # Connections live under a level-2 heading; any level 1 or 2 heading ends it
    return line.startswith("# ") or line.startswith("## ")


def _references(line: str, target: str) -> bool:
    return wiki_link(target) in line or f"[[{target}|" in line


class BacklinkWriter:
    """
    Writes wiki-style backlinks into documents held by a FileStore.

    Usage:
        writer = BacklinkWriter(store)
        await writer.replace_section("notes/Long.md", 12, 2, "Extracted Idea")
        await writer.append_to_connections_section("notes/A.md", "B", "Connections")
    """

    def __init__(
        self,
        file_store: FileStore,
        extractor: SectionExtractor | None = None,
        direction_markers: bool = False,
    ):
        """
        Initialize backlink writer.

        Args:
            file_store: Document storage
            extractor: Section extractor used for boundary computation
            direction_markers: Prefix connection bullets with "->" or "<-"
        """
        self.file_store = file_store
        self.extractor = extractor or SectionExtractor()
        self.direction_markers = direction_markers

    def format_bullet(self, target: str, direction: ConnectionDirection | None = None) -> str:
        if self.direction_markers and direction is not None:
            return f"- {direction.value} {wiki_link(target)}"
        return f"- {wiki_link(target)}"

    async def replace_section(
        self, doc_id: str, heading_line: int, heading_level: int, link_target: str
    ) -> bool:
        """
        Replace a section's body with a single [[link_target]] line.

        The heading stays, the link is surrounded by one blank line on each
        side, runs of blank lines collapse to one and trailing whitespace is
        trimmed. Running it again with the same target changes nothing.

        Returns:
            True if the document was written
        """
        content = await self.file_store.read(doc_id)
        section = self.extractor.get_section_range(content, heading_line, heading_level)
        if section is None:
            logger.debug(f"Heading line {heading_line} out of range in {doc_id}")
            return False

        lines = content.split("\n")
        new_lines = [
            *lines[: heading_line + 1],
            "",
            wiki_link(link_target),
            "",
            *lines[section.content_end :],
        ]
        new_content = BLANK_RUN_PATTERN.sub("\n\n", "\n".join(new_lines)).rstrip()

        if new_content == content:
            return False

        await self.file_store.write(doc_id, new_content)
        logger.info(f"Replaced section at line {heading_line} of {doc_id} with [[{link_target}]]")
        return True

    async def append_link(
        self, doc_id: str, heading_line: int, heading_level: int, link_target: str
    ) -> bool:
        """
        Keep a section's body and add a "> See also: [[link_target]]" line
        after it.

        Returns:
            True if the document was written
        """
        content = await self.file_store.read(doc_id)
        section = self.extractor.get_section_range(content, heading_line, heading_level)
        if section is None:
            return False

        lines = content.split("\n")
        body = lines[section.content_start : section.content_end]
        see_also = f"> See also: {wiki_link(link_target)}"
        if any(line.strip() == see_also for line in body):
            return False

        new_lines = [
            *lines[: section.content_end],
            "",
            see_also,
            "",
            *lines[section.content_end :],
        ]
        new_content = BLANK_RUN_PATTERN.sub("\n\n", "\n".join(new_lines)).rstrip()

        await self.file_store.write(doc_id, new_content)
        logger.info(f"Appended see-also link to [[{link_target}]] in {doc_id}")
        return True

    async def append_to_connections_section(
        self,
        doc_id: str,
        link_target: str,
        section_name: str,
        direction: ConnectionDirection | None = None,
    ) -> bool:
        """
        Add a "- [[link_target]]" bullet under "## {section_name}".

        Skipped when the document already references [[link_target]]
        anywhere. A missing section is appended at the end of the document.

        Returns:
            True if the document was written
        """
        content = await self.file_store.read(doc_id)
        if wiki_link(link_target) in content:
            logger.debug(f"{doc_id} already links to [[{link_target}]]")
            return False

        bullet = self.format_bullet(link_target, direction)
        lines = content.split("\n")
        heading_index = self._find_section_heading(lines, section_name)

        if heading_index is None:
            base = content.rstrip()
            block = f"## {section_name}\n\n{bullet}"
            new_content = f"{base}\n\n{block}" if base else block
        else:
            span_end = self._section_span_end(lines, heading_index)
            last_content = heading_index
            for i in range(heading_index + 1, span_end):
                if lines[i].strip():
                    last_content = i

            insert = [bullet] if last_content > heading_index else ["", bullet]
            lines[last_content + 1 : last_content + 1] = insert
            new_content = "\n".join(lines)

        await self.file_store.write(doc_id, new_content)
        logger.info(f"Added connection [[{link_target}]] to {doc_id}")
        return True

    async def remove_from_connections_section(
        self, doc_id: str, link_target: str, section_name: str
    ) -> bool:
        """
        Remove bullets referencing [[link_target]] from "## {section_name}".

        The heading is dropped as well once the section has no content
        left. Text outside the section is never touched.

        Returns:
            True if the document was written
        """
        content = await self.file_store.read(doc_id)
        lines = content.split("\n")
        heading_index = self._find_section_heading(lines, section_name)
        if heading_index is None:
            return False

        span_end = self._section_span_end(lines, heading_index)
        body = lines[heading_index + 1 : span_end]
        kept = [
            line
            for line in body
            if not (line.lstrip().startswith(BULLET_PREFIXES) and _references(line, link_target))
        ]
        if len(kept) == len(body):
            return False

        if any(line.strip() for line in kept):
            new_lines = [*lines[: heading_index + 1], *kept, *lines[span_end:]]
            new_content = "\n".join(new_lines)
        else:
            new_lines = [*lines[:heading_index], *lines[span_end:]]
            new_content = BLANK_RUN_PATTERN.sub("\n\n", "\n".join(new_lines)).rstrip()

        await self.file_store.write(doc_id, new_content)
        logger.info(f"Removed connection [[{link_target}]] from {doc_id}")
        return True

    async def add_frontmatter_connection(
        self, doc_id: str, target: str, direction: ConnectionDirection
    ) -> bool:
        """
        Record [[target]] in the front matter list for ``direction``
        (connections-to / connections-from).

        Returns:
            True if the document was written
        """
        post = frontmatter.loads(await self.file_store.read(doc_id))
        key = direction.frontmatter_key
        current = post.metadata.get(key)
        connections = list(current) if isinstance(current, list) else []

        link = wiki_link(target)
        if link in connections:
            return False

        connections.append(link)
        post.metadata[key] = connections
        await self.file_store.write(doc_id, frontmatter.dumps(post, sort_keys=False))
        logger.debug(f"Front matter {key} of {doc_id} now includes {link}")
        return True

    async def remove_frontmatter_connection(
        self, doc_id: str, target: str, direction: ConnectionDirection
    ) -> bool:
        """
        Drop [[target]] from the front matter list for ``direction``; the key
        is removed when the list becomes empty.

        Returns:
            True if the document was written
        """
        post = frontmatter.loads(await self.file_store.read(doc_id))
        key = direction.frontmatter_key
        current = post.metadata.get(key)
        if not isinstance(current, list):
            return False

        link = wiki_link(target)
        filtered = [entry for entry in current if entry != link]
        if len(filtered) == len(current):
            return False

        if filtered:
            post.metadata[key] = filtered
        else:
            del post.metadata[key]

        new_content = frontmatter.dumps(post, sort_keys=False) if post.metadata else post.content
        await self.file_store.write(doc_id, new_content)
        logger.debug(f"Front matter {key} of {doc_id} no longer includes {link}")
        return True

    def _find_section_heading(self, lines: list[str], section_name: str) -> int | None:
        heading = f"## {section_name}"
        fence_mask = compute_fence_mask(lines)
        for i, line in enumerate(lines):
            if i not in fence_mask and line.rstrip() == heading:
                return i
        return None

    @staticmethod
    def _section_span_end(lines: list[str], heading_index: int) -> int:
        for i in range(heading_index + 1, len(lines)):
            if _is_section_boundary(lines[i]):
                return i
        return len(lines)
