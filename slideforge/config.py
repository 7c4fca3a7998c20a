"""
Conversion settings.

All tunable constants of the pipeline live here so the CLI, the server and
the tests share one definition.
"""

import os
from typing import Literal, Optional

from pydantic import BaseModel, Field


class ConversionSettings(BaseModel):
    """Settings for one PDF -> PPTX conversion."""

    render_scale: float = Field(default=2.0, gt=0, description="Page render scale factor")
    jpeg_quality: float = Field(
        default=0.8, gt=0, le=1.0, description="JPEG quality for page rasters (0-1)"
    )
    crop_jpeg_quality: float = Field(
        default=0.9, gt=0, le=1.0, description="JPEG quality for cropped image elements (0-1)"
    )
    crop_threshold: float = Field(
        default=95.0,
        ge=0,
        le=100,
        description="Image elements narrower or shorter than this percentage are cropped",
    )
    canvas_width_inches: float = Field(default=10.0, gt=0, description="Output slide width")
    canvas_height_inches: float = Field(default=5.625, gt=0, description="Output slide height")
    oracle: Literal["gemini", "claude"] = Field(default="gemini", description="Layout oracle backend")
    model: Optional[str] = Field(default=None, description="Oracle model name (backend default if unset)")
    temperature: float = Field(default=0.0, ge=0, description="Oracle sampling temperature")
    font_face: str = Field(default="Noto Sans KR", description="Font face for text boxes")

    model_config = {
        "json_schema_extra": {
            "example": {
                "render_scale": 2.0,
                "jpeg_quality": 0.8,
                "crop_threshold": 95.0,
                "canvas_width_inches": 10.0,
                "canvas_height_inches": 5.625,
                "oracle": "gemini",
                "temperature": 0.0,
            }
        },
    }

    @property
    def canvas_size(self):
        """(width, height) of the output canvas in inches."""
        return self.canvas_width_inches, self.canvas_height_inches

    @classmethod
    def from_env(cls, **overrides) -> "ConversionSettings":
        """
        Build settings from SLIDEFORGE_* environment variables.

        Explicit keyword overrides win over the environment; None overrides
        are ignored so argparse defaults can be passed straight through.
        """
        values = {}
        env_map = {
            "render_scale": "SLIDEFORGE_RENDER_SCALE",
            "jpeg_quality": "SLIDEFORGE_JPEG_QUALITY",
            "crop_threshold": "SLIDEFORGE_CROP_THRESHOLD",
            "oracle": "SLIDEFORGE_ORACLE",
            "model": "SLIDEFORGE_MODEL",
        }
        for field_name, env_var in env_map.items():
            raw = os.getenv(env_var)
            if raw:
                values[field_name] = raw

        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls.model_validate(values)
