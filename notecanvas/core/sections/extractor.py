"""
Heading-structure section extraction.

This is deliberately not a markdown parser. A document is split on "\\n"
and only two things are recognised:

- headings: 1-6 '#' characters, one space, then non-empty text
- fenced code blocks (``` or ~~~), whose lines never count as headings

A section is the run of lines after a heading up to (not including) the
next heading whose level is less than or equal to the section's level.
Equal levels end a section: "## A" stops at the next "## B".
"""

import re

from notecanvas.models.section import ExtractedSection, Heading, SectionRange

HEADING_PATTERN = re.compile(r"^(#{1,6}) (.*\S.*)$")
FENCE_OPEN_PATTERN = re.compile(r"^ {0,3}(`{3,}|~{3,})")

MAX_HEADING_LEVEL = 6


def parse_heading(line: str) -> tuple[int, str] | None:
    """
    Match a single line against the heading pattern.

    Returns:
        (level, text) or None if the line is not a heading
    """
    match = HEADING_PATTERN.match(line)
    if not match:
        return None
    return len(match.group(1)), match.group(2).strip()


def _closes_fence(line: str, fence_char: str, fence_len: int) -> bool:
    stripped = line.lstrip(" ")
    if len(line) - len(stripped) > 3:
        return False
    run = len(stripped) - len(stripped.lstrip(fence_char))
    if run < fence_len:
        return False
    return stripped[run:].strip() == ""


def compute_fence_mask(lines: list[str]) -> frozenset[int]:
    """
    Indices of every line inside a fenced code block.

    Opening and closing fence lines are included. A fence that is never
    closed runs to the end of the document.
    """
    masked: set[int] = set()
    fence_char: str | None = None
    fence_len = 0

    for i, line in enumerate(lines):
        if fence_char is None:
            match = FENCE_OPEN_PATTERN.match(line)
            if match:
                fence_char = match.group(1)[0]
                fence_len = len(match.group(1))
                masked.add(i)
            continue

        masked.add(i)
        if _closes_fence(line, fence_char, fence_len):
            fence_char = None
            fence_len = 0

    return frozenset(masked)


def find_section_end(
    lines: list[str],
    start: int,
    heading_level: int,
    fence_mask: frozenset[int],
    stop: int | None = None,
) -> int:
    """
    Boundary scan: first non-fenced line in [start, stop) holding a heading
    of level <= heading_level, or ``stop`` (default: line count).
    """
    end = len(lines) if stop is None else stop
    for i in range(start, end):
        if i in fence_mask:
            continue
        heading = parse_heading(lines[i])
        if heading and heading[0] <= heading_level:
            return i
    return end


class SectionExtractor:
    """
    Pure section extraction over in-memory text.

    Every public method splits the text, computes the fence mask once and
    runs a single boundary scan, so calls are independent and reentrant.

    Usage:
        extractor = SectionExtractor()
        body = extractor.extract_content(text, heading_line=0, heading_level=2)
        tree = extractor.extract_section_tree(text, 0, 2)
    """

    def extract_content(self, text: str, heading_line: int, heading_level: int) -> str:
        """
        Body of a section, trimmed, nested sub-headings included.

        Args:
            text: Full document text
            heading_line: Zero-based line of the heading
            heading_level: Level of the heading (1-6)

        Returns:
            Section body, or "" if heading_line is out of range
        """
        return self._extract_range(text, heading_line, heading_level, include_heading=False)

    def extract_content_with_heading(
        self, text: str, heading_line: int, heading_level: int
    ) -> str:
        """Same as extract_content but the slice starts at the heading line."""
        return self._extract_range(text, heading_line, heading_level, include_heading=True)

    def get_section_range(
        self, text: str, heading_line: int, heading_level: int
    ) -> SectionRange | None:
        """
        Half-open line range of a section's body.

        Returns:
            SectionRange, or None if heading_line is outside the document
        """
        lines = text.split("\n")
        if heading_line < 0 or heading_line >= len(lines):
            return None

        fence_mask = compute_fence_mask(lines)
        content_start = heading_line + 1
        content_end = find_section_end(lines, content_start, heading_level, fence_mask)
        return SectionRange(content_start=content_start, content_end=content_end)

    def extract_section_tree(
        self, text: str, heading_line: int, heading_level: int
    ) -> ExtractedSection | None:
        """
        Decompose a section into a tree of nested subsections.

        Lines that belong to a deeper heading go to that child; all other
        lines make up the node's own ``content``. Depth is bounded by the
        six heading levels.

        Returns:
            Root ExtractedSection, or None if heading_line is out of range
        """
        lines = text.split("\n")
        if heading_line < 0 or heading_line >= len(lines):
            return None

        fence_mask = compute_fence_mask(lines)
        end = find_section_end(lines, heading_line + 1, heading_level, fence_mask)
        return self._build_tree(lines, fence_mask, heading_line, heading_level, end)

    def list_headings(self, text: str) -> list[Heading]:
        """All structural headings of a document, fenced lines excluded."""
        lines = text.split("\n")
        fence_mask = compute_fence_mask(lines)
        headings = []
        for i, line in enumerate(lines):
            if i in fence_mask:
                continue
            parsed = parse_heading(line)
            if parsed:
                headings.append(Heading(level=parsed[0], line=i, text=parsed[1]))
        return headings

    def _extract_range(
        self, text: str, heading_line: int, heading_level: int, include_heading: bool
    ) -> str:
        lines = text.split("\n")
        if heading_line < 0 or heading_line >= len(lines):
            return ""

        fence_mask = compute_fence_mask(lines)
        end = find_section_end(lines, heading_line + 1, heading_level, fence_mask)
        start = heading_line if include_heading else heading_line + 1
        return "\n".join(lines[start:end]).strip()

    def _build_tree(
        self,
        lines: list[str],
        fence_mask: frozenset[int],
        heading_line: int,
        heading_level: int,
        end: int,
    ) -> ExtractedSection:
        parsed = parse_heading(lines[heading_line])
        heading_text = parsed[1] if parsed else lines[heading_line].lstrip("#").strip()

        own_lines: list[str] = []
        children: list[ExtractedSection] = []

        cursor = heading_line + 1
        while cursor < end:
            line = lines[cursor]
            child = None if cursor in fence_mask else parse_heading(line)
            if child and heading_level < child[0] <= MAX_HEADING_LEVEL:
                child_end = find_section_end(lines, cursor + 1, child[0], fence_mask, stop=end)
                children.append(self._build_tree(lines, fence_mask, cursor, child[0], child_end))
                cursor = child_end
                continue
            own_lines.append(line)
            cursor += 1

        return ExtractedSection(
            heading_text=heading_text,
            heading_level=heading_level,
            heading_line=heading_line,
            content="\n".join(own_lines).strip(),
            children=children,
        )
