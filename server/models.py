"""
Pydantic models for API requests/responses.
"""

from typing import Any, Dict, List, Optional
from pydantic import BaseModel, Field


class SessionResponse(BaseModel):
    """Status of a conversion session, with its slides once reconstructed."""
    session_id: str
    status: str
    filename: str
    total_pages: int = 0
    processed_count: int = 0
    progress: float = 0.0
    current_phase: Optional[str] = None
    error_message: Optional[str] = None
    created_at: str
    updated_at: str
    slides: List[Dict[str, Any]] = Field(default_factory=list)


class ElementFieldUpdate(BaseModel):
    """Replace one field of one element."""
    field: str = Field(..., description="Element field name, e.g. content, x, bg_color")
    value: Any = Field(default=None, description="New value for the field")

    model_config = {
        "json_schema_extra": {
            "example": {"field": "content", "value": "Quarterly results"}
        }
    }


class BackgroundUpdate(BaseModel):
    """Replace a slide's background color."""
    background_color: str = Field(..., description="Hex color code, e.g. #FFFFFF")


class UploadResponse(BaseModel):
    """Result of a PDF upload."""
    session_id: str
    filename: str
    total_pages: int
    size_bytes: int


class ExportResponse(BaseModel):
    """Result of a PPTX export."""
    session_id: str
    pptx_path: str
    download_url: str
