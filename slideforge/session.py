"""
Document session: the slides of one conversion and the review edits on them.
"""

import json
from pathlib import Path
from typing import Any, List, Optional

from slideforge.models import (
    Slide,
    remove_element,
    replace_background_color,
    replace_element_field,
)


class DeckSession:
    """
    Ordered slides plus a monotonic count of processed pages.

    Edits never mutate a Slide in place: each one swaps in a new slide list
    in which only the touched slide is a new object. A session lives for one
    conversion; ``reset`` discards it.
    """

    def __init__(self, slides: Optional[List[Slide]] = None, source_name: Optional[str] = None):
        self.slides: List[Slide] = list(slides or [])
        self.processed_count = len(self.slides)
        self.source_name = source_name

    def __len__(self) -> int:
        return len(self.slides)

    def add_slide(self, slide: Slide) -> None:
        """Append a freshly reconstructed slide."""
        self.slides = self.slides + [slide]
        self.mark_processed(len(self.slides))

    def mark_processed(self, count: int) -> None:
        """Advance the processed-page counter; it never goes backwards."""
        self.processed_count = max(self.processed_count, count)

    def reset(self) -> None:
        self.slides = []
        self.processed_count = 0

    # --- Review edits ---

    def set_element_field(
        self, slide_index: int, element_index: int, field: str, value: Any
    ) -> Slide:
        """Replace one field of one element and return the updated slide."""
        self.slides = replace_element_field(self.slides, slide_index, element_index, field, value)
        return self.slides[slide_index]

    def delete_element(self, slide_index: int, element_index: int) -> Slide:
        """
        Remove one element and return the updated slide.

        Any element index the caller was holding for this slide is stale
        afterwards.
        """
        self.slides = remove_element(self.slides, slide_index, element_index)
        return self.slides[slide_index]

    def set_background_color(self, slide_index: int, color: str) -> Slide:
        self.slides = replace_background_color(self.slides, slide_index, color)
        return self.slides[slide_index]

    # --- Snapshot ---

    def save(self, output_dir: Path, stem: str = "deck") -> Path:
        """
        Write ``<stem>.session.json`` and one JPEG per slide under ``images/``.

        Returns:
            Path to the session JSON
        """
        output_dir = Path(output_dir)
        images_dir = output_dir / "images"
        images_dir.mkdir(parents=True, exist_ok=True)

        slides_data = []
        for slide in self.slides:
            raster_name = f"page_{slide.index}.jpg"
            (images_dir / raster_name).write_bytes(slide.original_raster)
            slides_data.append({**slide.to_dict(), "raster_ref": f"images/{raster_name}"})

        session_path = output_dir / f"{stem}.session.json"
        with open(session_path, "w", encoding="utf-8") as f:
            json.dump(
                {
                    "source": self.source_name,
                    "processed_count": self.processed_count,
                    "slides": slides_data,
                },
                f,
                indent=2,
                ensure_ascii=False,
            )
        return session_path

    @classmethod
    def load(cls, session_path: Path) -> "DeckSession":
        """Restore a session written by ``save``."""
        session_path = Path(session_path)
        if not session_path.exists():
            raise FileNotFoundError(f"Session not found: {session_path}")

        with open(session_path, "r", encoding="utf-8") as f:
            data = json.load(f)

        slides = []
        for slide_data in data.get("slides", []):
            raster_ref = slide_data.pop("raster_ref")
            raster = (session_path.parent / raster_ref).read_bytes()
            slides.append(Slide.from_dict(slide_data, original_raster=raster))

        session = cls(slides, source_name=data.get("source"))
        session.mark_processed(data.get("processed_count", 0))
        return session
