"""
Data models for notecanvas.

Core models:
- Heading, SectionRange, ExtractedSection: heading-based document structure
- SectionCandidate, ExtractionPlan, ExtractionOutcome: two-phase extraction
- CanvasData, CanvasEdge and the node variants: the canvas document
- ConnectionDirection, SyncResult, EdgeSyncFailure: backlink synchronization
"""

from notecanvas.models.canvas import (
    CanvasData,
    CanvasEdge,
    CanvasNode,
    CanvasNodeType,
    FileNode,
    GroupNode,
    LinkNode,
    TextNode,
    dump_canvas,
    parse_canvas,
)
from notecanvas.models.section import (
    ExtractedNote,
    ExtractedSection,
    ExtractionOutcome,
    ExtractionPlan,
    Heading,
    SectionCandidate,
    SectionRange,
)
from notecanvas.models.sync import ConnectionDirection, EdgeSyncFailure, SyncResult

__all__ = [
    # Section models
    "Heading",
    "SectionRange",
    "ExtractedSection",
    "SectionCandidate",
    "ExtractionPlan",
    "ExtractedNote",
    "ExtractionOutcome",
    # Canvas models
    "CanvasData",
    "CanvasEdge",
    "CanvasNode",
    "CanvasNodeType",
    "FileNode",
    "TextNode",
    "LinkNode",
    "GroupNode",
    "parse_canvas",
    "dump_canvas",
    # Sync models
    "ConnectionDirection",
    "EdgeSyncFailure",
    "SyncResult",
]
