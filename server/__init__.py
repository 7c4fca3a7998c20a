"""
FastAPI backend server for the SlideForge review workflow.

Provides REST API and WebSocket endpoints for:
- PDF upload and conversion
- Real-time per-page progress updates
- Review edits on reconstructed slides
- PPTX export and download
"""

__version__ = "0.1.0"
