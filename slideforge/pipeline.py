"""
Main orchestration pipeline for SlideForge.

Coordinates page processing, layout inference, and PPTX generation.
"""

from pathlib import Path
from typing import Callable, Optional

from slideforge.config import ConversionSettings
from slideforge.export import ExportTransform
from slideforge.oracle import LayoutOracle, create_oracle
from slideforge.page_processor import PageProcessor
from slideforge.readers import DocumentReader, PyMuPDFReader
from slideforge.reconstruction import SlideReconstructor
from slideforge.renderers import DeckWriter, PptxDeckWriter
from slideforge.session import DeckSession

ProgressCallback = Callable[[float, str], None]


class SlideForgePipeline:
    """
    End-to-end pipeline for rebuilding flat slide PDFs as editable PPTX.

    Pipeline stages:
    1. Page processing: render each page, normalize its text layer
    2. Reconstruction: one layout-oracle call per page, in order
    3. (Optional) Review: edits applied to the DeckSession by the caller
    4. Export: draw instructions (with image crops) -> PPTX
    """

    def __init__(
        self,
        settings: Optional[ConversionSettings] = None,
        reader: Optional[DocumentReader] = None,
        oracle: Optional[LayoutOracle] = None,
        writer: Optional[DeckWriter] = None,
        debug: bool = False,
    ):
        """
        Initialize pipeline.

        Args:
            settings: Conversion settings (defaults to ConversionSettings())
            reader: Document reader (default: PyMuPDF)
            oracle: Layout oracle (default: built from settings.oracle)
            writer: Deck writer (default: python-pptx)
            debug: Save oracle prompts and responses under output/debug
        """
        self.settings = settings or ConversionSettings()
        self.debug = debug

        self.reader = reader or PyMuPDFReader()
        self.oracle = oracle or create_oracle(
            self.settings.oracle,
            model=self.settings.model,
            temperature=self.settings.temperature,
            debug=debug,
        )
        self.writer = writer or PptxDeckWriter(*self.settings.canvas_size)

        self.page_processor = PageProcessor(self.reader, self.settings)
        self.reconstructor = SlideReconstructor(self.oracle)

    def convert(
        self,
        pdf_path: Path,
        progress_callback: Optional[ProgressCallback] = None,
        session: Optional[DeckSession] = None,
    ) -> DeckSession:
        """
        Run page processing and reconstruction.

        Args:
            pdf_path: Path to input PDF file
            progress_callback: Called as (percent, phase)
            session: Session to fill (a new one if omitted); its
                processed_count advances after each page

        Returns:
            DeckSession ready for review and export

        Raises:
            DocumentReadError: if the PDF cannot be read
        """
        pdf_path = Path(pdf_path)
        if not pdf_path.exists():
            raise FileNotFoundError(f"PDF not found: {pdf_path}")

        if session is None:
            session = DeckSession(source_name=pdf_path.name)

        if progress_callback:
            progress_callback(5.0, "Reading PDF")
        print(f"[Stage 1/2] Rendering pages and extracting text")
        pages = self.page_processor.process(pdf_path.read_bytes())

        if progress_callback:
            progress_callback(10.0, f"Analyzing layout: 0/{len(pages)}")
        print(f"\n[Stage 2/2] Layout inference ({len(pages)} slides)")

        def on_page(processed: int, total: int) -> None:
            session.mark_processed(processed)
            if progress_callback:
                progress_callback(
                    10.0 + 80.0 * processed / total, f"Analyzing layout: {processed}/{total}"
                )

        for slide in self.reconstructor.reconstruct_all(pages, progress_callback=on_page):
            session.add_slide(slide)

        return session

    def export(self, session: DeckSession, output_path: Path) -> Path:
        """
        Export a session to PPTX. Can be retried; the session is not modified.

        Raises:
            ExportWriteError: if the file cannot be written
        """
        return self.export_session(session, output_path, self.settings, self.writer)

    @staticmethod
    def export_session(
        session: DeckSession,
        output_path: Path,
        settings: Optional[ConversionSettings] = None,
        writer: Optional[DeckWriter] = None,
    ) -> Path:
        """Export a session without building an oracle (no API key needed)."""
        settings = settings or ConversionSettings()
        writer = writer or PptxDeckWriter(*settings.canvas_size)

        print(f"[Export] Exporting {len(session)} slides")
        instructions = ExportTransform(settings).export(session.slides)
        return writer.write(instructions, Path(output_path))

    def process(
        self,
        pdf_path: Path,
        output_dir: Optional[Path] = None,
        progress_callback: Optional[ProgressCallback] = None,
    ) -> dict:
        """
        Process a PDF through the full pipeline.

        Args:
            pdf_path: Path to input PDF file
            output_dir: Output directory (default: ./output/<pdf_name>)

        Returns:
            Dictionary with paths to generated files:
            {
                "pptx": Path to PPTX file,
                "session": Path to session JSON
            }
        """
        pdf_path = Path(pdf_path)
        if output_dir is None:
            output_dir = Path("output") / pdf_path.stem
        output_dir = Path(output_dir)
        output_dir.mkdir(parents=True, exist_ok=True)

        print(f"\n{'='*60}")
        print(f"SlideForge Pipeline")
        print(f"{'='*60}")
        print(f"Input: {pdf_path}")
        print(f"Output: {output_dir}")
        print(f"Oracle: {self.oracle.name}")
        print(f"{'='*60}\n")

        session = self.convert(pdf_path, progress_callback=progress_callback)

        session_path = session.save(output_dir, pdf_path.stem)
        print(f"[Pipeline] Saved session to {session_path}")

        if progress_callback:
            progress_callback(90.0, "Rendering PPTX")
        pptx_path = self.export(session, output_dir / f"{pdf_path.stem}.pptx")

        print(f"\n{'='*60}")
        print(f"✓ Pipeline Complete")
        print(f"{'='*60}")
        print(f"PPTX: {pptx_path}")
        print(f"Session JSON: {session_path}")
        print(f"{'='*60}\n")

        return {"pptx": pptx_path, "session": session_path}

    @classmethod
    def from_session(
        cls,
        session_path: Path,
        output_path: Optional[Path] = None,
        settings: Optional[ConversionSettings] = None,
        writer: Optional[DeckWriter] = None,
    ) -> Path:
        """
        Re-export a saved session without re-running layout inference.

        Useful after editing the session JSON by hand, or to try different
        export settings.
        """
        session_path = Path(session_path)
        session = DeckSession.load(session_path)

        if output_path is None:
            output_path = session_path.parent / f"{session_path.name.replace('.session.json', '')}.pptx"

        print(f"[Export] Loaded {len(session)} slides from {session_path}")
        return cls.export_session(session, Path(output_path), settings, writer)
