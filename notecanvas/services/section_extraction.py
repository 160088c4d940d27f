"""
Section Extraction - turns document sections into standalone notes.

Extraction is split in two phases so a host can show a preview between
them:

1. plan()   read the source once and compute candidates (no writes)
2. commit() create notes for the selected candidates, optionally place
            them on a canvas and replace the original sections with links
"""

from collections.abc import Iterable

from notecanvas.config import ExtractionConfig
from notecanvas.core.file_store.base import FileStore
from notecanvas.core.sections.extractor import SectionExtractor, parse_heading
from notecanvas.models.section import (
    ExtractedNote,
    ExtractionOutcome,
    ExtractionPlan,
    Heading,
    SectionCandidate,
)
from notecanvas.services.backlink_writer import BacklinkWriter
from notecanvas.services.canvas_operator import CanvasOperator
from notecanvas.services.file_creator import FileCreator
from notecanvas.utils.exceptions import ValidationError
from notecanvas.utils.filenames import document_basename, sanitize_filename
from notecanvas.utils.logger import get_logger

logger = get_logger(__name__)


class SectionExtractionService:
    """
    Plans and commits section extractions.

    Usage:
        service = SectionExtractionService(store, canvas_operator=operator)
        plan = await service.plan("notes/Long.md", headings)
        outcome = await service.commit(plan, [0, 2], canvas_id="boards/Main.canvas")
    """

    def __init__(
        self,
        file_store: FileStore,
        config: ExtractionConfig | None = None,
        extractor: SectionExtractor | None = None,
        file_creator: FileCreator | None = None,
        backlink_writer: BacklinkWriter | None = None,
        canvas_operator: CanvasOperator | None = None,
    ):
        """
        Initialize extraction service.

        Args:
            file_store: Document storage
            config: Extraction settings (target folder, prefix, backlinks, grouping)
            extractor: Section extractor
            file_creator: Creates the new notes
            backlink_writer: Replaces extracted sections with links
            canvas_operator: Places created notes on a canvas; optional
        """
        self.file_store = file_store
        self.config = config or ExtractionConfig()
        self.extractor = extractor or SectionExtractor()
        self.file_creator = file_creator or FileCreator(file_store, self.config)
        self.backlink_writer = backlink_writer or BacklinkWriter(file_store, self.extractor)
        self.canvas_operator = canvas_operator

    async def plan(self, source_doc: str, headings: Iterable[Heading]) -> ExtractionPlan:
        """
        Compute one candidate per heading from a single read of source_doc.

        Headings whose line is gone or no longer holds a heading of the
        same level and text are returned with ``available=False``.
        """
        text = await self.file_store.read(source_doc)
        lines = text.split("\n")

        candidates = []
        for heading in headings:
            available = _heading_still_at(lines, heading)
            content = (
                self.extractor.extract_content_with_heading(text, heading.line, heading.level)
                if available
                else ""
            )
            candidates.append(
                SectionCandidate(
                    heading=heading,
                    content=content,
                    suggested_name=sanitize_filename(self.config.file_name_prefix + heading.text),
                    available=available,
                )
            )

        logger.debug(f"Planned {len(candidates)} candidates from {source_doc}")
        return ExtractionPlan(source_doc=source_doc, candidates=candidates)

    async def plan_tree(self, source_doc: str, heading_line: int, heading_level: int) -> ExtractionPlan:
        """Plan a section and every nested subsection, parent first."""
        text = await self.file_store.read(source_doc)
        tree = self.extractor.extract_section_tree(text, heading_line, heading_level)
        if tree is None:
            return ExtractionPlan(source_doc=source_doc)

        headings = [
            Heading(level=section.heading_level, line=section.heading_line, text=section.heading_text)
            for section in tree.walk()
        ]
        return await self.plan(source_doc, headings)

    async def commit(
        self,
        plan: ExtractionPlan,
        selected: Iterable[int],
        canvas_id: str | None = None,
        origin: tuple[float, float] = (0, 0),
    ) -> ExtractionOutcome:
        """
        Create notes for the selected candidates.

        Args:
            plan: Result of plan() / plan_tree()
            selected: Indices into plan.candidates
            canvas_id: Canvas to place the new notes on
            origin: Top-left position of the first placed note

        Returns:
            ExtractionOutcome listing created notes, written backlinks and
            headings skipped because the source changed since planning

        Raises:
            ValidationError: If an index is outside the plan
        """
        indices = sorted(set(selected))
        for index in indices:
            if index < 0 or index >= len(plan.candidates):
                raise ValidationError(
                    f"Selection index {index} outside plan of {len(plan.candidates)} candidates",
                    context={"index": index, "source_doc": plan.source_doc},
                )

        outcome = ExtractionOutcome(source_doc=plan.source_doc)
        chosen = [plan.candidates[i] for i in indices if plan.candidates[i].available]
        if not chosen:
            return outcome

        # The source may have changed since plan(); line numbers are only
        # trusted where the planned heading is still found
        text = await self.file_store.read(plan.source_doc)
        lines = text.split("\n")
        for candidate in chosen:
            heading = candidate.heading
            if not _heading_still_at(lines, heading):
                outcome.skipped.append(heading)
                logger.bind(source_doc=plan.source_doc, line=heading.line).warning(
                    f"Skipping '{heading.text}', heading moved since the plan was made"
                )
                continue

            content = self.extractor.extract_content_with_heading(text, heading.line, heading.level)
            doc_id = await self.file_creator.create_file(heading.text, content, plan.source_doc)
            outcome.created.append(ExtractedNote(doc_id=doc_id, heading=heading))

        if not outcome.created:
            return outcome

        if canvas_id and self.canvas_operator is not None:
            await self._place_on_canvas(canvas_id, origin, outcome)

        if self.config.leave_backlink:
            # Bottom-up so earlier heading lines stay valid after each rewrite
            for note in sorted(outcome.created, key=lambda n: n.heading.line, reverse=True):
                written = await self.backlink_writer.replace_section(
                    plan.source_doc,
                    note.heading.line,
                    note.heading.level,
                    document_basename(note.doc_id),
                )
                if written:
                    outcome.backlinks_written += 1

        logger.bind(source_doc=plan.source_doc, canvas_id=canvas_id).info(
            f"Extracted {len(outcome.created)} notes from {plan.source_doc}"
        )
        return outcome

    async def _place_on_canvas(
        self, canvas_id: str, origin: tuple[float, float], outcome: ExtractionOutcome
    ) -> None:
        nodes = await self.canvas_operator.add_file_nodes(
            canvas_id, [note.doc_id for note in outcome.created], origin
        )
        for note, node in zip(outcome.created, nodes):
            note.node_id = node.id

        if len(nodes) > 1 and self.config.group_multiple:
            group = await self.canvas_operator.add_group(canvas_id, [node.id for node in nodes])
            outcome.group_id = group.id if group else None


def _heading_still_at(lines: list[str], heading: Heading) -> bool:
    """True if lines[heading.line] is a heading of the same level and text."""
    if heading.line < 0 or heading.line >= len(lines):
        return False
    parsed = parse_heading(lines[heading.line])
    return parsed is not None and parsed == (heading.level, heading.text)
