"""
notecanvas FastAPI Application

A local HTTP host for the notecanvas services. A vault directory holds the
markdown notes and canvas documents; the endpoints expose section
extraction, canvas editing and edge-to-backlink synchronization.
"""

from collections import deque
from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException, Query, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from notecanvas.config import Config
from notecanvas.core.factory import FileStoreFactory
from notecanvas.core.file_store.base import FileStore
from notecanvas.core.sections import SectionExtractor
from notecanvas.models import (
    CanvasEdge,
    EdgeSyncFailure,
    ExtractedSection,
    ExtractionOutcome,
    ExtractionPlan,
    Heading,
    SectionRange,
    SyncResult,
)
from notecanvas.services import (
    CanvasOperator,
    FileCreator,
    QuickCardCreator,
    SectionExtractionService,
    SyncRegistry,
)
from notecanvas.utils.exceptions import (
    DocumentExistsError,
    DocumentNotFoundError,
    InvalidPathError,
    MalformedGraphDocumentError,
    NoteCanvasError,
    ValidationError,
)
from notecanvas.utils.logger import get_logger, setup_logging

# Global service instances
file_store: FileStore | None = None
extractor = SectionExtractor()
sync_registry: SyncRegistry | None = None
extraction_service: SectionExtractionService | None = None
canvas_operator: CanvasOperator | None = None
quick_cards: QuickCardCreator | None = None
notifications: deque[EdgeSyncFailure] = deque(maxlen=100)

logger = get_logger(__name__)


# Pydantic models for API
class SectionRequest(BaseModel):
    """A heading inside a document."""

    doc_id: str = Field(..., description="Vault-relative document path")
    heading_line: int = Field(..., description="Zero-based line of the heading")
    heading_level: int = Field(..., ge=1, le=6)


class SectionContentResponse(BaseModel):
    doc_id: str
    content: str
    with_heading: bool


class PlanRequest(BaseModel):
    """Either explicit headings or a single heading whose whole tree is planned."""

    doc_id: str
    headings: list[Heading] | None = None
    heading_line: int | None = None
    heading_level: int | None = Field(default=None, ge=1, le=6)


class CommitRequest(BaseModel):
    plan: ExtractionPlan
    selected: list[int] = Field(default_factory=list)
    canvas_id: str | None = None
    x: float = 0
    y: float = 0


class CanvasRequest(BaseModel):
    canvas_id: str = Field(..., description="Vault-relative path of a .canvas document")


class EdgeRequest(BaseModel):
    canvas_id: str
    from_node: str
    to_node: str
    color: str | None = None
    label: str | None = None


class QuickCardRequest(BaseModel):
    canvas_id: str
    x: float = 0
    y: float = 0
    title: str | None = None


class QuickCardResponse(BaseModel):
    doc_id: str
    node_id: str


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    vault_backend: str
    section_name: str
    edge_sync_enabled: bool
    tracked_canvases: list[str]


def _notify(failure: EdgeSyncFailure) -> None:
    notifications.append(failure)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan context manager for startup/shutdown."""
    global file_store, sync_registry, extraction_service, canvas_operator, quick_cards

    config = Config.from_env()
    setup_logging(**config.logging.model_dump())

    logger.info("Starting notecanvas server")
    logger.info(
        f"Configuration: vault={config.vault.backend}:{config.vault.root}, "
        f"section={config.sync.section_name!r}, edge_sync={config.sync.enable_edge_sync}"
    )

    file_store = FileStoreFactory.create(config.vault)
    await file_store.initialize()

    canvas_operator = CanvasOperator(file_store, config.canvas)
    file_creator = FileCreator(file_store, config.extraction)
    extraction_service = SectionExtractionService(
        file_store,
        config=config.extraction,
        extractor=extractor,
        file_creator=file_creator,
        canvas_operator=canvas_operator,
    )
    quick_cards = QuickCardCreator(file_creator, canvas_operator)
    sync_registry = SyncRegistry(file_store, config.sync, notifier=_notify)
    app.state.config = config

    yield

    logger.info("Shutting down notecanvas server")
    notifications.clear()


# Create FastAPI app
app = FastAPI(
    title="notecanvas API",
    description="Section extraction and canvas backlink synchronization for markdown vaults",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(NoteCanvasError)
async def notecanvas_error_handler(request: Request, exc: NoteCanvasError):
    """Map domain errors to HTTP status codes."""
    if isinstance(exc, DocumentNotFoundError):
        status_code = 404
    elif isinstance(exc, DocumentExistsError):
        status_code = 409
    elif isinstance(exc, MalformedGraphDocumentError | InvalidPathError | ValidationError):
        status_code = 422
    else:
        status_code = 500
        logger.error(f"Unhandled error on {request.url.path}: {exc}")
    return JSONResponse(
        status_code=status_code,
        content={"detail": exc.message, "error_type": type(exc).__name__},
    )


def _require_ready() -> None:
    if file_store is None or sync_registry is None or extraction_service is None:
        raise HTTPException(status_code=503, detail="Server not initialized")


@app.get("/health", response_model=HealthResponse)
async def health_check(request: Request):
    """Health check endpoint."""
    config: Config | None = getattr(request.app.state, "config", None)
    return HealthResponse(
        status="healthy" if file_store else "initializing",
        vault_backend=config.vault.backend if config else "",
        section_name=config.sync.section_name if config else "",
        edge_sync_enabled=config.sync.enable_edge_sync if config else False,
        tracked_canvases=sync_registry.canvases() if sync_registry else [],
    )


# Section endpoints
@app.get("/documents/headings", response_model=list[Heading])
async def list_headings(doc_id: str = Query(...)):
    """Structural headings of a document (headings inside code fences are ignored)."""
    _require_ready()
    text = await file_store.read(doc_id)
    return extractor.list_headings(text)


@app.post("/sections/range", response_model=SectionRange | None)
async def section_range(request: SectionRequest):
    """Line range of a section body; null when the heading line is out of range."""
    _require_ready()
    text = await file_store.read(request.doc_id)
    return extractor.get_section_range(text, request.heading_line, request.heading_level)


@app.post("/sections/content", response_model=SectionContentResponse)
async def section_content(request: SectionRequest, with_heading: bool = Query(default=False)):
    """Trimmed text of a section, optionally starting at the heading line."""
    _require_ready()
    text = await file_store.read(request.doc_id)
    if with_heading:
        content = extractor.extract_content_with_heading(
            text, request.heading_line, request.heading_level
        )
    else:
        content = extractor.extract_content(text, request.heading_line, request.heading_level)
    return SectionContentResponse(doc_id=request.doc_id, content=content, with_heading=with_heading)


@app.post("/sections/tree", response_model=ExtractedSection)
async def section_tree(request: SectionRequest):
    """Nested subsection tree of a section."""
    _require_ready()
    text = await file_store.read(request.doc_id)
    tree = extractor.extract_section_tree(text, request.heading_line, request.heading_level)
    if tree is None:
        raise HTTPException(status_code=404, detail="Heading line out of range")
    return tree


# Extraction endpoints
@app.post("/extractions/plan", response_model=ExtractionPlan)
async def plan_extraction(request: PlanRequest):
    """
    First phase of an extraction: compute candidate sections without writing.

    Pass ``headings`` to plan specific sections, or ``heading_line`` and
    ``heading_level`` to plan a section together with all its subsections.
    """
    _require_ready()
    if request.headings is not None:
        return await extraction_service.plan(request.doc_id, request.headings)
    if request.heading_line is None or request.heading_level is None:
        raise HTTPException(
            status_code=422, detail="Provide headings or heading_line and heading_level"
        )
    return await extraction_service.plan_tree(
        request.doc_id, request.heading_line, request.heading_level
    )


@app.post("/extractions/commit", response_model=ExtractionOutcome)
async def commit_extraction(request: CommitRequest):
    """Second phase: create notes for the selected candidates."""
    _require_ready()
    return await extraction_service.commit(
        request.plan,
        request.selected,
        canvas_id=request.canvas_id,
        origin=(request.x, request.y),
    )


# Canvas endpoints
@app.post("/canvases/initialize")
async def initialize_canvas(request: CanvasRequest):
    """Seed the edge snapshot of a canvas (call when the canvas is opened)."""
    _require_ready()
    initialized = await sync_registry.initialize(request.canvas_id)
    return {"canvas_id": request.canvas_id, "initialized": initialized}


@app.post("/canvases/sync", response_model=SyncResult)
async def sync_canvas(request: CanvasRequest):
    """Run one synchronization pass after a canvas was modified."""
    _require_ready()
    return await sync_registry.on_modified(request.canvas_id)


@app.post("/canvases/reset")
async def reset_canvas(request: CanvasRequest):
    """Forget the snapshot of a canvas."""
    _require_ready()
    await sync_registry.reset(request.canvas_id)
    return {"canvas_id": request.canvas_id, "reset": True}


@app.post("/canvases/edges", response_model=CanvasEdge)
async def add_edge(request: EdgeRequest):
    """Connect two nodes on a canvas. Backlinks follow on the next sync."""
    _require_ready()
    return await canvas_operator.add_edge(
        request.canvas_id,
        request.from_node,
        request.to_node,
        color=request.color,
        label=request.label,
    )


@app.post("/canvases/cards", response_model=QuickCardResponse)
async def add_quick_card(request: QuickCardRequest):
    """Create an empty titled note and drop it on the canvas."""
    _require_ready()
    doc_id, node = await quick_cards.create_card_at_position(
        request.canvas_id, (request.x, request.y), request.title
    )
    return QuickCardResponse(doc_id=doc_id, node_id=node.id)


@app.get("/notifications", response_model=list[EdgeSyncFailure])
async def list_notifications():
    """Recent per-edge sync failures, newest last."""
    return list(notifications)
