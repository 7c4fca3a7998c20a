"""
Reconstruction: turn each processed page into a Slide via the layout oracle.
"""

from typing import Callable, List, Optional, Sequence

from slideforge.models import Slide, TextRun, fallback_slide
from slideforge.oracle.base import LayoutOracle
from slideforge.oracle.schema import OracleRequest
from slideforge.page_processor import ProcessedPage


class SlideReconstructor:
    """
    Fold pages into Slides, one oracle call at a time.

    Every page yields exactly one Slide. When the oracle fails for a page the
    page becomes a fallback slide (its raster as one full-bleed image) and
    the next page is processed as usual.
    """

    def __init__(self, oracle: LayoutOracle):
        self.oracle = oracle

    def reconstruct(self, page_index: int, raster: bytes, text_runs: Sequence[TextRun]) -> Slide:
        """
        Build the Slide for one page.

        Elements keep the oracle's order, which is the paint order.
        """
        request = OracleRequest(page_index=page_index, image=raster, text_runs=list(text_runs))

        try:
            layout = self.oracle.analyze(request)
            elements = [entry.to_element() for entry in layout.elements]
        except Exception as e:
            print(
                f"[Reconstruct] Warning: Layout inference failed for slide {page_index + 1}, "
                f"using full-page image ({type(e).__name__}: {e})"
            )
            return fallback_slide(page_index, raster, text_runs)

        print(f"[Reconstruct] Slide {page_index + 1}: {len(elements)} elements")
        return Slide(
            index=page_index,
            background_color=layout.resolved_background,
            elements=elements,
            original_raster=raster,
            source_text_runs=tuple(text_runs),
        )

    def reconstruct_all(
        self,
        pages: Sequence[ProcessedPage],
        progress_callback: Optional[Callable[[int, int], None]] = None,
    ) -> List[Slide]:
        """
        Reconstruct pages strictly in order.

        Args:
            pages: Output of PageProcessor.process
            progress_callback: Called as (processed, total) after each page

        Returns:
            One Slide per page, in page order
        """
        total = len(pages)
        slides: List[Slide] = []

        for page in pages:
            slides.append(self.reconstruct(page.page_index, page.raster, page.text_runs))
            if progress_callback:
                progress_callback(len(slides), total)

        return slides
