"""
Basic usage example for SlideForge.

This example shows how to convert a flat slide PDF to an editable PPTX
using the Python API.
"""

from pathlib import Path

from dotenv import load_dotenv

from slideforge import SlideForgePipeline


def main():
    load_dotenv()  # GEMINI_API_KEY from .env

    # Default settings: Gemini oracle, 2x render scale, 95% crop threshold
    pipeline = SlideForgePipeline()

    pdf_path = Path("examples/sample_deck.pdf")
    output_dir = Path("output/sample_deck")

    result = pipeline.process(pdf_path=pdf_path, output_dir=output_dir)

    print("\n✓ Conversion complete!")
    print(f"  PPTX: {result['pptx']}")
    print(f"  Session: {result['session']}")


if __name__ == "__main__":
    main()
