"""
Shared test fixtures for all test modules.

Everything runs against InMemoryFileStore unless a test needs the
filesystem, in which case it uses pytest's tmp_path.
"""

import json

import pytest

from notecanvas.config import CanvasConfig, ExtractionConfig, SyncConfig
from notecanvas.core.file_store import InMemoryFileStore


@pytest.fixture
def memory_store():
    """Empty in-memory document store."""
    return InMemoryFileStore()


@pytest.fixture
def sync_config():
    return SyncConfig()


@pytest.fixture
def extraction_config():
    return ExtractionConfig()


@pytest.fixture
def canvas_config():
    return CanvasConfig()


@pytest.fixture
def file_node():
    """Build a raw file node dict."""

    def _build(node_id: str, file: str, x: float = 0, y: float = 0) -> dict:
        return {
            "id": node_id,
            "type": "file",
            "file": file,
            "x": x,
            "y": y,
            "width": 400,
            "height": 300,
        }

    return _build


@pytest.fixture
def text_node():
    """Build a raw text node dict (no backing document)."""

    def _build(node_id: str, text: str = "scratch") -> dict:
        return {"id": node_id, "type": "text", "text": text, "x": 0, "y": 0, "width": 200, "height": 100}

    return _build


@pytest.fixture
def edge():
    """Build a raw edge dict."""

    def _build(edge_id: str, from_node: str, to_node: str, **extra) -> dict:
        return {"id": edge_id, "fromNode": from_node, "toNode": to_node, **extra}

    return _build


@pytest.fixture
def canvas_json():
    """Serialize nodes and edges into canvas document text."""

    def _build(nodes: list[dict], edges: list[dict] | None = None) -> str:
        return json.dumps({"nodes": nodes, "edges": edges or []}, indent="\t")

    return _build


@pytest.fixture
def sample_note():
    """A note with nested headings and a fenced code block."""
    return "\n".join(
        [
            "# Project",  # 0
            "",  # 1
            "Intro text.",  # 2
            "",  # 3
            "## Goals",  # 4
            "",  # 5
            "Ship it.",  # 6
            "",  # 7
            "### Stretch",  # 8
            "",  # 9
            "Docs.",  # 10
            "",  # 11
            "```python",  # 12
            "# not a heading",  # 13
            "```",  # 14
            "",  # 15
            "## Risks",  # 16
            "",  # 17
            "Time.",  # 18
        ]
    )
