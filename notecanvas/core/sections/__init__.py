"""
Heading-based section extraction.

Provides fence-aware boundary computation and recursive section trees
over plain markdown text.
"""

from notecanvas.core.sections.extractor import (
    SectionExtractor,
    compute_fence_mask,
    find_section_end,
    parse_heading,
)

__all__ = ["SectionExtractor", "compute_fence_mask", "find_section_end", "parse_heading"]
