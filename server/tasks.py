"""
Background task processing for PDF reconstruction.
"""

import traceback

from server.store import SessionRecord, SessionStatus
from server.websocket_manager import ConnectionManager
from slideforge.errors import DocumentReadError
from slideforge.pipeline import SlideForgePipeline
from slideforge.session import DeckSession


def run_conversion_task(
    record: SessionRecord,
    pipeline: SlideForgePipeline,
    manager: ConnectionManager,
):
    """
    Reconstruct every page of a session's PDF.

    Runs in the threadpool; the record moves to PREVIEW when every page has
    a slide, or to FAILED when the PDF cannot be read.
    """
    print(f"\n[TASK] Starting conversion for session_id={record.id}, pdf_path={record.pdf_path}")

    record.status = SessionStatus.PROCESSING
    record.current_phase = "Initializing"
    record.progress = 0.0
    record.error_message = None
    record.deck = DeckSession(source_name=record.filename)
    record.touch()

    def update_progress(progress: float, phase: str):
        record.progress = min(progress, 99.0)
        record.current_phase = phase
        record.touch()
        manager.notify_from_thread(record.id, {
            "status": record.status.value,
            "phase": phase,
            "progress": progress,
            "processed_count": record.deck.processed_count,
        })

    try:
        pipeline.convert(record.pdf_path, progress_callback=update_progress, session=record.deck)

    except DocumentReadError as e:
        print(f"[TASK] ✗ Conversion FAILED: {e}")
        _fail(record, manager, str(e))
        return

    except Exception as e:
        print(f"[TASK] ✗ Conversion FAILED: {e}")
        print(f"[TASK] Traceback:\n{traceback.format_exc()}")
        _fail(record, manager, str(e))
        return

    record.total_pages = len(record.deck)
    record.status = SessionStatus.PREVIEW
    record.current_phase = "Ready for review"
    record.progress = 90.0
    record.touch()

    print(f"[TASK] ✓ Reconstructed {len(record.deck)} slides for session {record.id}")
    manager.notify_from_thread(record.id, {
        "status": record.status.value,
        "phase": record.current_phase,
        "progress": record.progress,
        "processed_count": record.deck.processed_count,
    })


def _fail(record: SessionRecord, manager: ConnectionManager, message: str):
    # No partial output: discard whatever was reconstructed
    record.deck.reset()
    record.status = SessionStatus.FAILED
    record.current_phase = "Failed"
    record.error_message = message
    record.progress = 0.0
    record.touch()
    manager.notify_from_thread(record.id, {
        "status": "failed",
        "phase": "Failed",
        "error": message,
    })
