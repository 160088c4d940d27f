"""
Tests for QuickCardCreator.
"""

import pytest

from notecanvas.models.canvas import parse_canvas
from notecanvas.services import QuickCardCreator

CANVAS = "boards/Main.canvas"


@pytest.fixture
def quick_cards(file_creator, canvas_operator):
    return QuickCardCreator(file_creator, canvas_operator)


@pytest.mark.asyncio
class TestQuickCard:
    """Tests for create_card_at_position."""

    async def test_default_title(self, memory_store, quick_cards, canvas_json):
        """Test an untitled card is created next to the canvas."""
        memory_store.documents[CANVAS] = canvas_json([])

        doc_id, node = await quick_cards.create_card_at_position(CANVAS, (10, 20))

        assert doc_id == "boards/Untitled.md"
        assert memory_store.documents[doc_id] == "# Untitled"
        assert (node.x, node.y) == (10, 20)
        assert parse_canvas(memory_store.documents[CANVAS]).find_node(node.id).file == doc_id

    async def test_titles_do_not_clash(self, memory_store, quick_cards, canvas_json):
        memory_store.documents[CANVAS] = canvas_json([])

        first, _ = await quick_cards.create_card_at_position(CANVAS, (0, 0), "Idea")
        second, _ = await quick_cards.create_card_at_position(CANVAS, (0, 0), "Idea")

        assert (first, second) == ("boards/Idea.md", "boards/Idea_1.md")
        assert len(parse_canvas(memory_store.documents[CANVAS]).nodes) == 2
