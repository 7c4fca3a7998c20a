"""
Command-line interface for SlideForge.
"""

import sys
import argparse
from pathlib import Path

from dotenv import load_dotenv

from slideforge import __version__
from slideforge.config import ConversionSettings
from slideforge.errors import SlideForgeError
from slideforge.pipeline import SlideForgePipeline


def main() -> int:
    """Main CLI entry point."""
    load_dotenv()  # Load .env file if present

    parser = argparse.ArgumentParser(
        description="SlideForge: Rebuild flat slide PDFs as editable PPTX",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Basic usage with Gemini
  slideforge input.pdf

  # Use Claude as the layout oracle
  slideforge input.pdf --oracle claude

  # Re-export a saved (and possibly hand-edited) session
  slideforge --from-session output/deck/deck.session.json

  # Specify custom output directory
  slideforge input.pdf --output ./my_output

Environment Variables:
  GEMINI_API_KEY              API key for the Gemini layout oracle
  ANTHROPIC_API_KEY           API key for the Claude layout oracle
  SLIDEFORGE_ORACLE           Default oracle (gemini or claude)
  SLIDEFORGE_MODEL            Oracle model name
  SLIDEFORGE_RENDER_SCALE     Page render scale (default 2.0)
  SLIDEFORGE_CROP_THRESHOLD   Image crop threshold in percent (default 95)
        """,
    )

    parser.add_argument(
        "input",
        nargs="?",
        type=Path,
        help="Input PDF file or session JSON (with --from-session)",
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"SlideForge {__version__}",
    )

    parser.add_argument(
        "--oracle",
        choices=["gemini", "claude"],
        default=None,
        help="Layout oracle backend (default: gemini)",
    )

    parser.add_argument(
        "--model",
        default=None,
        help="Oracle model name (default depends on the backend)",
    )

    parser.add_argument(
        "--render-scale",
        type=float,
        default=None,
        help="Page render scale factor (default: 2.0)",
    )

    parser.add_argument(
        "--crop-threshold",
        type=float,
        default=None,
        help="Crop image elements smaller than this percentage (default: 95)",
    )

    parser.add_argument(
        "--output",
        "-o",
        type=Path,
        help="Output directory (default: ./output/<pdf_name>)",
    )

    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug mode (save prompts and responses)",
    )

    parser.add_argument(
        "--from-session",
        action="store_true",
        help="Export from a saved session JSON instead of a PDF",
    )

    args = parser.parse_args()

    # Validate input
    if not args.input:
        parser.print_help()
        return 1

    if not args.input.exists():
        print(f"Error: Input file not found: {args.input}", file=sys.stderr)
        return 1

    try:
        settings = ConversionSettings.from_env(
            oracle=args.oracle,
            model=args.model,
            render_scale=args.render_scale,
            crop_threshold=args.crop_threshold,
        )

        if args.from_session:
            output_path = None
            if args.output:
                output_path = args.output / args.input.name.replace(".session.json", ".pptx")
            SlideForgePipeline.from_session(
                session_path=args.input,
                output_path=output_path,
                settings=settings,
            )
        else:
            pipeline = SlideForgePipeline(settings=settings, debug=args.debug)
            pipeline.process(
                pdf_path=args.input,
                output_dir=args.output,
            )

        return 0

    except KeyboardInterrupt:
        print("\n\nInterrupted by user", file=sys.stderr)
        return 130

    except (SlideForgeError, ValueError, OSError) as e:
        print(f"\nError: {e}", file=sys.stderr)
        if args.debug:
            import traceback
            traceback.print_exc()
        return 1


if __name__ == "__main__":
    sys.exit(main())
