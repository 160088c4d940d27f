"""
Section models for heading-based document decomposition.

Lines are always zero-based indices into ``text.split("\\n")`` and ranges
are half-open ``[start, end)``.
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class Heading(BaseModel):
    """A markdown heading located at a line of a document."""

    level: int = Field(..., ge=1, le=6, description="Number of leading '#' characters")
    line: int = Field(..., ge=0, description="Zero-based line index of the heading")
    text: str = Field(..., description="Heading text without the '#' prefix")


class SectionRange(BaseModel):
    """Half-open line range of a heading's body (heading line excluded)."""

    content_start: int = Field(..., ge=0)
    content_end: int = Field(..., ge=0)

    @property
    def is_empty(self) -> bool:
        return self.content_start >= self.content_end


class ExtractedSection(BaseModel):
    """
    Node of a section tree.

    ``content`` is the section's own text with child sections cut out;
    each child carries its own body. Children always have a deeper
    heading level than their parent.
    """

    heading_text: str
    heading_level: int = Field(..., ge=1, le=6)
    heading_line: int = Field(..., ge=0)
    content: str = ""
    children: list[ExtractedSection] = Field(default_factory=list)

    def walk(self):
        """Yield this section and every descendant, parent first."""
        yield self
        for child in self.children:
            yield from child.walk()


class SectionCandidate(BaseModel):
    """A section proposed for extraction into its own note."""

    heading: Heading
    content: str = Field(default="", description="Section text including the heading line")
    suggested_name: str = Field(..., description="Sanitized file name without suffix")
    available: bool = Field(
        default=True,
        description="False when the heading line no longer exists in the document",
    )


class ExtractionPlan(BaseModel):
    """
    First phase of an extraction: candidates computed from one read of the
    source document. Nothing has been written yet.
    """

    source_doc: str
    candidates: list[SectionCandidate] = Field(default_factory=list)


class ExtractedNote(BaseModel):
    """A note created from a candidate during commit."""

    doc_id: str
    heading: Heading
    node_id: str | None = None


class ExtractionOutcome(BaseModel):
    """Result of committing an extraction plan."""

    source_doc: str
    created: list[ExtractedNote] = Field(default_factory=list)
    skipped: list[Heading] = Field(
        default_factory=list,
        description="Selected headings no longer found at their planned line",
    )
    group_id: str | None = None
    backlinks_written: int = Field(default=0, ge=0)
