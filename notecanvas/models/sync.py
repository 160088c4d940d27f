"""Models describing backlink synchronization passes."""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, Field


class ConnectionDirection(str, Enum):
    """Which end of an edge a document sits on."""

    OUTBOUND = "->"  # document is the edge's "from" side
    INBOUND = "<-"  # document is the edge's "to" side

    @property
    def frontmatter_key(self) -> str:
        return "connections-to" if self is ConnectionDirection.OUTBOUND else "connections-from"


class EdgeSyncFailure(BaseModel):
    """One edge whose backlinks could not be written during a pass."""

    edge_id: str
    doc_id: str | None = None
    operation: str = Field(..., description="'add' or 'remove'")
    error_type: str
    message: str


class SyncResult(BaseModel):
    """
    Outcome of one synchronization pass.

    ``aborted`` is set when the canvas could not be read or parsed; the
    snapshot is left untouched in that case.
    """

    canvas_id: str
    aborted: bool = False
    reason: str | None = None
    added_edges: list[str] = Field(default_factory=list)
    removed_edges: list[str] = Field(default_factory=list)
    documents_updated: list[str] = Field(default_factory=list)
    failures: list[EdgeSyncFailure] = Field(default_factory=list)
    finished_at: datetime = Field(default_factory=datetime.now)

    @property
    def ok(self) -> bool:
        return not self.aborted and not self.failures

    def mark_updated(self, doc_id: str) -> None:
        if doc_id not in self.documents_updated:
            self.documents_updated.append(doc_id)
