"""
Base deck writer interface.
"""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import List

from slideforge.export import SlideInstructions


class DeckWriter(ABC):
    """Persist draw instructions as a presentation file."""

    def __init__(self, canvas_width: float = 10.0, canvas_height: float = 5.625):
        self.canvas_width = canvas_width
        self.canvas_height = canvas_height

    @abstractmethod
    def write(self, slides: List[SlideInstructions], output_path: Path) -> Path:
        """
        Write all slides, in order, to ``output_path``.

        Raises:
            ExportWriteError: if the file cannot be written
        """
