"""
Main FastAPI application.
"""

import os
import uuid
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Callable, List, Optional

from fastapi import (
    BackgroundTasks,
    Depends,
    FastAPI,
    File,
    HTTPException,
    UploadFile,
    WebSocket,
    WebSocketDisconnect,
)
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse, Response

from server.models import (
    BackgroundUpdate,
    ElementFieldUpdate,
    ExportResponse,
    SessionResponse,
    UploadResponse,
)
from server.store import SessionRecord, SessionStatus, SessionStore, get_store
from server.tasks import run_conversion_task
from server.websocket_manager import ConnectionManager
from slideforge.config import ConversionSettings
from slideforge.errors import DocumentReadError, ExportWriteError
from slideforge.pipeline import SlideForgePipeline
from slideforge.readers import PyMuPDFReader

PPTX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.presentationml.presentation"


# Lifespan context manager
@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup
    data_dir = Path(os.getenv("SLIDEFORGE_DATA_DIR", "server"))
    app.state.upload_dir = data_dir / "uploads"
    app.state.output_dir = data_dir / "output"
    app.state.upload_dir.mkdir(parents=True, exist_ok=True)
    app.state.output_dir.mkdir(parents=True, exist_ok=True)
    yield


app = FastAPI(
    title="SlideForge API",
    description="Rebuild flat slide PDFs as editable PPTX",
    version="0.1.0",
    lifespan=lifespan,
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["http://localhost:3000", "http://localhost:3001"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# WebSocket connection manager
manager = ConnectionManager()


def get_pipeline_factory() -> Callable[[ConversionSettings], SlideForgePipeline]:
    """Build pipelines for conversion requests."""
    return lambda settings: SlideForgePipeline(settings=settings)


def _get_record(session_id: str, store: SessionStore) -> SessionRecord:
    record = store.get(session_id)
    if not record:
        raise HTTPException(status_code=404, detail="Session not found")
    return record


def _get_editable_record(session_id: str, store: SessionStore) -> SessionRecord:
    record = _get_record(session_id, store)
    if not record.is_editable:
        raise HTTPException(
            status_code=409, detail=f"Session is {record.status.value}, not ready for review"
        )
    return record


def _to_response(record: SessionRecord) -> SessionResponse:
    return SessionResponse(
        session_id=record.id,
        status=record.status.value,
        filename=record.filename,
        total_pages=record.total_pages,
        processed_count=record.deck.processed_count,
        progress=record.progress,
        current_phase=record.current_phase,
        error_message=record.error_message,
        created_at=record.created_at.isoformat(),
        updated_at=record.updated_at.isoformat(),
        slides=[slide.to_dict() for slide in record.deck.slides] if record.is_editable else [],
    )


# --- API Endpoints ---

@app.get("/")
async def root():
    """Health check endpoint."""
    return {"status": "ok", "message": "SlideForge API is running"}


@app.post("/api/upload", response_model=UploadResponse)
async def upload_pdf(
    file: UploadFile = File(...),
    store: SessionStore = Depends(get_store),
):
    """
    Upload a PDF file and create a new session.

    Returns session_id and file metadata.
    """
    if not file.filename or not file.filename.lower().endswith(".pdf"):
        raise HTTPException(status_code=400, detail="Only PDF files are allowed")

    content = await file.read()

    reader = PyMuPDFReader()
    try:
        handle = reader.open_document(content)
        try:
            page_count = reader.page_count(handle)
        finally:
            reader.close(handle)
    except DocumentReadError as e:
        raise HTTPException(status_code=400, detail=str(e))

    session_id = str(uuid.uuid4())
    upload_path = app.state.upload_dir / f"{session_id}.pdf"
    upload_path.write_bytes(content)

    record = store.add(
        SessionRecord(
            filename=file.filename,
            pdf_path=upload_path,
            total_pages=page_count,
            session_id=session_id,
        )
    )

    return UploadResponse(
        session_id=record.id,
        filename=file.filename,
        total_pages=page_count,
        size_bytes=len(content),
    )


@app.post("/api/sessions/{session_id}/convert")
async def start_conversion(
    session_id: str,
    background_tasks: BackgroundTasks,
    settings: Optional[ConversionSettings] = None,
    store: SessionStore = Depends(get_store),
    pipeline_factory: Callable = Depends(get_pipeline_factory),
):
    """
    Start reconstructing a session's PDF.

    Kicks off a background task and returns immediately.
    """
    record = _get_record(session_id, store)

    if record.status not in [SessionStatus.UPLOADED, SessionStatus.FAILED]:
        raise HTTPException(status_code=409, detail=f"Session is already {record.status.value}")

    try:
        pipeline = pipeline_factory(settings or ConversionSettings.from_env())
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    record.status = SessionStatus.QUEUED
    record.touch()

    background_tasks.add_task(run_conversion_task, record=record, pipeline=pipeline, manager=manager)

    return {"session_id": session_id, "status": "queued"}


@app.get("/api/sessions", response_model=List[SessionResponse])
async def list_sessions(store: SessionStore = Depends(get_store)):
    """List all sessions of this server process."""
    return [_to_response(record) for record in store.list()]


@app.get("/api/sessions/{session_id}", response_model=SessionResponse)
async def get_session(session_id: str, store: SessionStore = Depends(get_store)):
    """Get session status, progress and (once reconstructed) its slides."""
    return _to_response(_get_record(session_id, store))


@app.get("/api/sessions/{session_id}/slides/{slide_index}/image")
async def get_slide_image(
    session_id: str, slide_index: int, store: SessionStore = Depends(get_store)
):
    """The original page raster of one slide."""
    record = _get_editable_record(session_id, store)
    if not 0 <= slide_index < len(record.deck):
        raise HTTPException(status_code=404, detail="Slide not found")
    return Response(content=record.deck.slides[slide_index].original_raster, media_type="image/jpeg")


@app.patch("/api/sessions/{session_id}/slides/{slide_index}/elements/{element_index}")
async def update_element(
    session_id: str,
    slide_index: int,
    element_index: int,
    update: ElementFieldUpdate,
    store: SessionStore = Depends(get_store),
):
    """Replace one field of one element."""
    record = _get_editable_record(session_id, store)
    try:
        slide = record.deck.set_element_field(slide_index, element_index, update.field, update.value)
    except IndexError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    record.touch()
    return slide.to_dict()


@app.delete("/api/sessions/{session_id}/slides/{slide_index}/elements/{element_index}")
async def delete_element(
    session_id: str,
    slide_index: int,
    element_index: int,
    store: SessionStore = Depends(get_store),
):
    """Delete one element; later elements shift down by one index."""
    record = _get_editable_record(session_id, store)
    try:
        slide = record.deck.delete_element(slide_index, element_index)
    except IndexError as e:
        raise HTTPException(status_code=404, detail=str(e))

    record.touch()
    return slide.to_dict()


@app.patch("/api/sessions/{session_id}/slides/{slide_index}")
async def update_slide(
    session_id: str,
    slide_index: int,
    update: BackgroundUpdate,
    store: SessionStore = Depends(get_store),
):
    """Replace a slide's background color."""
    record = _get_editable_record(session_id, store)
    try:
        slide = record.deck.set_background_color(slide_index, update.background_color)
    except IndexError as e:
        raise HTTPException(status_code=404, detail=str(e))

    record.touch()
    return slide.to_dict()


@app.post("/api/sessions/{session_id}/export", response_model=ExportResponse)
def export_session(
    session_id: str,
    settings: Optional[ConversionSettings] = None,
    store: SessionStore = Depends(get_store),
):
    """
    Generate the PPTX for a reviewed session.

    A failed write leaves the session intact, so export can be retried.
    """
    record = _get_editable_record(session_id, store)
    settings = settings or ConversionSettings.from_env()
    output_path = app.state.output_dir / record.id / f"{Path(record.filename).stem}.pptx"

    try:
        pptx_path = SlideForgePipeline.export_session(record.deck, output_path, settings)
    except ExportWriteError as e:
        raise HTTPException(status_code=500, detail=str(e))

    record.pptx_path = pptx_path
    record.progress = 100.0
    record.current_phase = "Exported"
    record.touch()

    return ExportResponse(
        session_id=record.id,
        pptx_path=str(pptx_path),
        download_url=f"/api/sessions/{record.id}/download",
    )


@app.get("/api/sessions/{session_id}/download")
async def download_pptx(session_id: str, store: SessionStore = Depends(get_store)):
    """Download the generated PPTX file."""
    record = _get_record(session_id, store)

    if not record.pptx_path or not Path(record.pptx_path).exists():
        raise HTTPException(status_code=404, detail="PPTX file not found, export first")

    return FileResponse(
        record.pptx_path,
        media_type=PPTX_MEDIA_TYPE,
        filename=f"{Path(record.filename).stem}.pptx",
    )


@app.delete("/api/sessions/{session_id}")
async def delete_session(session_id: str, store: SessionStore = Depends(get_store)):
    """Discard a session and its files."""
    record = _get_record(session_id, store)

    if record.status in [SessionStatus.QUEUED, SessionStatus.PROCESSING]:
        raise HTTPException(status_code=409, detail="Session is still converting")

    store.remove(session_id)
    record.deck.reset()

    if record.pdf_path.exists():
        record.pdf_path.unlink()
    if record.pptx_path and Path(record.pptx_path).exists():
        Path(record.pptx_path).unlink()

    return {"message": "Session deleted"}


# --- WebSocket for real-time progress ---

@app.websocket("/ws/{session_id}")
async def websocket_endpoint(websocket: WebSocket, session_id: str):
    """
    WebSocket endpoint for per-page progress updates.
    """
    await manager.connect(session_id, websocket)

    try:
        while True:
            data = await websocket.receive_text()

            # Echo back for heartbeat
            if data == "ping":
                await websocket.send_text("pong")

    except WebSocketDisconnect:
        manager.disconnect(session_id, websocket)


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
