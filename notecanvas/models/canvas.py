"""
Canvas document models.

A canvas is a JSON document holding ``nodes`` and ``edges``. Only the
fields the synchronizer needs are modelled; everything else is kept as
pydantic extras so a rewrite of the document leaves it untouched.
"""

import json
from enum import Enum
from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic import ValidationError as PydanticValidationError

from notecanvas.utils.exceptions import MalformedGraphDocumentError


class CanvasNodeType(str, Enum):
    """Node variants a canvas can hold."""

    FILE = "file"
    TEXT = "text"
    LINK = "link"
    GROUP = "group"


class _CanvasNodeBase(BaseModel):
    model_config = ConfigDict(extra="allow", populate_by_name=True)

    id: str
    x: int | float = 0
    y: int | float = 0
    width: int | float = 0
    height: int | float = 0
    color: str | None = None

    @property
    def document_ref(self) -> str | None:
        """Path of the backing document, None for graph-only nodes."""
        return None


class FileNode(_CanvasNodeBase):
    """Node backed by a vault document."""

    type: Literal["file"] = "file"
    file: str | None = None
    subpath: str | None = None

    @property
    def document_ref(self) -> str | None:
        return self.file or None


class TextNode(_CanvasNodeBase):
    """Freeform text card."""

    type: Literal["text"] = "text"
    text: str = ""


class LinkNode(_CanvasNodeBase):
    """Web link card."""

    type: Literal["link"] = "link"
    url: str = ""


class GroupNode(_CanvasNodeBase):
    """Visual group around other nodes."""

    type: Literal["group"] = "group"
    label: str | None = None


CanvasNode = Annotated[
    FileNode | TextNode | LinkNode | GroupNode,
    Field(discriminator="type"),
]


class CanvasEdge(BaseModel):
    """
    Edge between two canvas nodes.

    Sides, arrow ends, color and label are cosmetic; synchronization
    only looks at ``id`` and the unordered endpoint pair.
    """

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    id: str
    from_node: str = Field(..., alias="fromNode")
    to_node: str = Field(..., alias="toNode")
    from_side: str | None = Field(default=None, alias="fromSide")
    to_side: str | None = Field(default=None, alias="toSide")
    to_end: str | None = Field(default=None, alias="toEnd")
    color: str | None = None
    label: str | None = None

    @property
    def pair(self) -> frozenset[str]:
        """Logical connection identity: direction does not matter."""
        return frozenset((self.from_node, self.to_node))


class CanvasData(BaseModel):
    """Parsed canvas document."""

    model_config = ConfigDict(extra="allow")

    nodes: list[CanvasNode] = Field(default_factory=list)
    edges: list[CanvasEdge] = Field(default_factory=list)

    def nodes_by_id(self) -> dict[str, FileNode | TextNode | LinkNode | GroupNode]:
        return {node.id: node for node in self.nodes}

    def find_node(self, node_id: str):
        for node in self.nodes:
            if node.id == node_id:
                return node
        return None


def parse_canvas(raw: str) -> CanvasData:
    """
    Parse canvas JSON.

    Raises:
        MalformedGraphDocumentError: If the text is not JSON or does not
            match the canvas schema
    """
    try:
        payload = json.loads(raw)
    except json.JSONDecodeError as e:
        raise MalformedGraphDocumentError(
            f"Canvas is not valid JSON: {e.msg}",
            context={"line": e.lineno, "column": e.colno},
        ) from e

    if not isinstance(payload, dict):
        raise MalformedGraphDocumentError(
            "Canvas root must be a JSON object",
            context={"type": type(payload).__name__},
        )

    try:
        return CanvasData.model_validate(payload)
    except PydanticValidationError as e:
        raise MalformedGraphDocumentError(
            f"Canvas does not match schema: {e.error_count()} error(s)",
            context={"errors": e.errors(include_url=False)},
        ) from e


def dump_canvas(data: CanvasData) -> str:
    """Serialize a canvas back to tab-indented JSON, extras included."""
    payload = data.model_dump(by_alias=True, exclude_none=True)
    return json.dumps(payload, indent="\t", ensure_ascii=False)
