"""
Base layout oracle interface.
"""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional

from slideforge.oracle.schema import OracleLayout, OracleRequest, parse_layout_response


class LayoutOracle(ABC):
    """
    Proposes a structured layout for one slide from its raster and text layer.

    ``analyze`` raises ``OracleError`` on any failure; callers decide how to
    recover.
    """

    def __init__(self, debug: bool = False, debug_dir: Optional[Path] = None):
        self.debug = debug
        self.debug_dir = Path(debug_dir) if debug_dir else Path("output/debug")
        self.name = self.__class__.__name__.replace("LayoutOracle", "").lower()

    @abstractmethod
    def complete(self, request: OracleRequest) -> str:
        """Send the request to the backend and return its raw text answer."""

    def analyze(self, request: OracleRequest) -> OracleLayout:
        """Run the oracle for one page and validate its answer."""
        if self.debug:
            self._save_debug(request.page_index, "prompt", request.user_prompt())

        response_text = self.complete(request)

        if self.debug:
            self._save_debug(request.page_index, "response", response_text or "")

        return parse_layout_response(response_text)

    def _save_debug(self, page_index: int, kind: str, text: str) -> None:
        self.debug_dir.mkdir(parents=True, exist_ok=True)
        with open(self.debug_dir / f"{kind}_slide_{page_index}.txt", "w", encoding="utf-8") as f:
            f.write(text)
