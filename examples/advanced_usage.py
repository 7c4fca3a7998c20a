"""
Advanced usage examples for SlideForge.

Shows how to:
- Use Claude as the layout oracle
- Review and edit slides before export
- Re-export from a saved session
- Convert several PDFs in one run
"""

from pathlib import Path

from dotenv import load_dotenv

from slideforge import SlideForgePipeline
from slideforge.config import ConversionSettings


def example_with_claude():
    """Use Claude instead of Gemini (requires ANTHROPIC_API_KEY)."""
    print("\n[Example 1] Claude layout oracle")

    settings = ConversionSettings(oracle="claude", render_scale=1.5)
    pipeline = SlideForgePipeline(settings=settings)

    result = pipeline.process(
        pdf_path=Path("examples/sample_deck.pdf"),
        output_dir=Path("output/sample_deck_claude"),
    )

    print(f"✓ PPTX: {result['pptx']}")


def example_review_before_export():
    """Fix up the reconstructed slides, then export."""
    print("\n[Example 2] Review edits")

    pipeline = SlideForgePipeline()
    session = pipeline.convert(
        Path("examples/sample_deck.pdf"),
        progress_callback=lambda percent, phase: print(f"  {percent:5.1f}% {phase}"),
    )

    first = session.slides[0]
    for i, element in enumerate(first.elements):
        if element.kind == "text" and element.content.isupper():
            session.set_element_field(0, i, "content", element.content.title())
    session.set_background_color(0, "#FFFFFF")

    pptx_path = pipeline.export(session, Path("output/sample_deck_reviewed/sample_deck.pptx"))
    print(f"✓ PPTX: {pptx_path}")


def example_resume_from_session():
    """Re-export a saved session without calling the oracle again."""
    print("\n[Example 3] Re-export from session")

    # Useful after editing the session JSON by hand, or to try a different
    # crop threshold or canvas size
    pptx_path = SlideForgePipeline.from_session(
        session_path=Path("output/sample_deck/sample_deck.session.json"),
        output_path=Path("output/sample_deck_wide/sample_deck.pptx"),
        settings=ConversionSettings(canvas_width_inches=13.333, canvas_height_inches=7.5),
    )

    print(f"✓ PPTX: {pptx_path}")


def example_batch_processing():
    """Convert multiple PDFs in batch."""
    print("\n[Example 4] Batch processing")

    pipeline = SlideForgePipeline()

    for pdf_path in sorted(Path("examples/batch").glob("*.pdf")):
        print(f"\nProcessing: {pdf_path.name}")
        try:
            result = pipeline.process(
                pdf_path=pdf_path,
                output_dir=Path("output/batch") / pdf_path.stem,
            )
            print(f"  ✓ {result['pptx']}")
        except Exception as e:
            print(f"  ✗ Failed: {e}")


if __name__ == "__main__":
    load_dotenv()

    example_with_claude()
    example_review_before_export()
    example_resume_from_session()
    example_batch_processing()
