"""
Services for notecanvas.

High-level operations over the file store:
- BacklinkWriter: wiki-link mutations on markdown documents
- EdgeSynchronizer: canvas edges -> connection backlinks
- SectionExtractionService: two-phase section to note extraction
- FileCreator: unique note paths for new notes
- CanvasOperator: nodes, edges and groups on canvas documents
- QuickCardCreator: titled empty note placed on a canvas
- SyncRegistry: one serialized EdgeSynchronizer per canvas
"""

from notecanvas.services.backlink_writer import BacklinkWriter
from notecanvas.services.canvas_operator import CanvasOperator
from notecanvas.services.edge_sync import EdgeSynchronizer
from notecanvas.services.file_creator import FileCreator
from notecanvas.services.quick_card import QuickCardCreator
from notecanvas.services.section_extraction import SectionExtractionService
from notecanvas.services.sync_registry import SyncRegistry

__all__ = [
    "BacklinkWriter",
    "CanvasOperator",
    "EdgeSynchronizer",
    "FileCreator",
    "QuickCardCreator",
    "SectionExtractionService",
    "SyncRegistry",
]
