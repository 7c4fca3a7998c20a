"""
WebSocket connection manager for per-page progress updates.
"""

import json
from typing import Any, Dict, List

from anyio import from_thread
from fastapi import WebSocket


class ConnectionManager:
    """Manage WebSocket connections subscribed to a session."""

    def __init__(self):
        # session_id -> list of websockets
        self.active_connections: Dict[str, List[WebSocket]] = {}

    async def connect(self, session_id: str, websocket: WebSocket):
        """Accept a new WebSocket connection."""
        await websocket.accept()
        self.active_connections.setdefault(session_id, []).append(websocket)

    def disconnect(self, session_id: str, websocket: WebSocket):
        """Remove a WebSocket connection."""
        connections = self.active_connections.get(session_id)
        if not connections:
            return

        if websocket in connections:
            connections.remove(websocket)

        # Clean up empty lists
        if not connections:
            del self.active_connections[session_id]

    async def broadcast(self, session_id: str, message: str):
        """Send a message to every connection watching a session."""
        dead_connections = []

        for websocket in list(self.active_connections.get(session_id, [])):
            try:
                await websocket.send_text(message)
            except Exception:
                dead_connections.append(websocket)

        for websocket in dead_connections:
            self.disconnect(session_id, websocket)

    def notify_from_thread(self, session_id: str, payload: Dict[str, Any]):
        """
        Broadcast a JSON payload from a worker thread.

        Only valid in threads started by anyio (FastAPI background tasks and
        threadpool endpoints); failures are reported and ignored.
        """
        if session_id not in self.active_connections:
            return
        try:
            from_thread.run(self.broadcast, session_id, json.dumps(payload))
        except Exception as e:
            print(f"[TASK] WebSocket broadcast failed (non-critical): {e}")
