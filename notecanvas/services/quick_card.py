"""Quick cards: an empty titled note dropped straight onto a canvas."""

from notecanvas.models.canvas import FileNode
from notecanvas.services.canvas_operator import CanvasOperator
from notecanvas.services.file_creator import FileCreator


class QuickCardCreator:
    def __init__(self, file_creator: FileCreator, canvas_operator: CanvasOperator):
        self.file_creator = file_creator
        self.canvas_operator = canvas_operator

    async def create_card_at_position(
        self,
        canvas_id: str,
        position: tuple[float, float],
        title: str | None = None,
    ) -> tuple[str, FileNode]:
        """
        Create "# {title}" next to the canvas and add it as a node.

        Returns:
            (document id, canvas node)
        """
        title = title or self.file_creator.config.quick_card_default_title
        doc_id = await self.file_creator.create_file(title, f"# {title}", canvas_id)
        node = await self.canvas_operator.add_file_node(canvas_id, doc_id, position)
        return doc_id, node
