"""
In-memory session store.

Sessions exist only for the lifetime of the server process; nothing is
persisted across restarts.
"""

import threading
import uuid
from datetime import datetime, timezone
from enum import Enum
from pathlib import Path
from typing import Dict, List, Optional

from slideforge.session import DeckSession


class SessionStatus(str, Enum):
    """Session status enum."""
    UPLOADED = "uploaded"
    QUEUED = "queued"
    PROCESSING = "processing"
    PREVIEW = "preview"
    FAILED = "failed"


class SessionRecord:
    """One uploaded PDF, its conversion state and its DeckSession."""

    def __init__(self, filename: str, pdf_path: Path, total_pages: int = 0, session_id: Optional[str] = None):
        self.id = session_id or str(uuid.uuid4())
        self.filename = filename
        self.pdf_path = Path(pdf_path)
        self.total_pages = total_pages
        self.status = SessionStatus.UPLOADED
        self.progress = 0.0
        self.current_phase: Optional[str] = None
        self.error_message: Optional[str] = None
        self.deck = DeckSession(source_name=filename)
        self.pptx_path: Optional[Path] = None
        self.created_at = datetime.now(timezone.utc)
        self.updated_at = self.created_at

    @property
    def is_editable(self) -> bool:
        return self.status == SessionStatus.PREVIEW

    def touch(self) -> None:
        self.updated_at = datetime.now(timezone.utc)


class SessionStore:
    """Thread-safe registry of SessionRecords keyed by id."""

    def __init__(self):
        self._records: Dict[str, SessionRecord] = {}
        self._lock = threading.Lock()

    def add(self, record: SessionRecord) -> SessionRecord:
        with self._lock:
            self._records[record.id] = record
        return record

    def get(self, session_id: str) -> Optional[SessionRecord]:
        with self._lock:
            return self._records.get(session_id)

    def remove(self, session_id: str) -> Optional[SessionRecord]:
        with self._lock:
            return self._records.pop(session_id, None)

    def list(self) -> List[SessionRecord]:
        with self._lock:
            return sorted(self._records.values(), key=lambda r: r.created_at, reverse=True)


store = SessionStore()


def get_store() -> SessionStore:
    """Get the process-wide session store."""
    return store
