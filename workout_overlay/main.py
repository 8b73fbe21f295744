#!/usr/bin/env python3
"""
Workout Overlay CLI

Draws workout statistics (duration, calories, heart rate, date and
device) onto a photo, plus a brand watermark for recognized devices.

Usage:
  workout-overlay -i photo.jpg -f activity.fit
  workout-overlay -i photo.jpg -f activity.tcx out/photo_stats.png
  workout-overlay -i photo.jpg -f activity.fit --fonts-dir ./fonts --assets-dir ./img
"""

import argparse
import logging
import sys
from pathlib import Path

from workout_overlay import __version__
from workout_overlay.commands.overlay_pipeline import OverlayPipeline
from workout_overlay.config.overlay_config import FormatConfig, OutputConfig
from workout_overlay.config.resource_config import ResourceLocator
from workout_overlay.errors import OverlayError
from workout_overlay.services.fonts import PillowFontProvider
from workout_overlay.services.watermark import WatermarkAssetStore


# Console colors
RED = '\033[0;31m'
MAGENTA = '\033[0;35m'
CYAN = '\033[0;36m'
YELLOW = '\033[1;33m'
GREEN = '\033[0;32m'
NC = '\033[0m'


def print_banner() -> None:
    """Print CLI banner"""
    print()
    print(f"{MAGENTA}╔════════════════════════════════════════════╗{NC}")
    print(f"{MAGENTA}║       🏃  Workout Overlay CLI  🏃          ║{NC}")
    print(f"{MAGENTA}║        Python + OpenCV + Pillow            ║{NC}")
    print(f"{MAGENTA}╚════════════════════════════════════════════╝{NC}")
    print()


def create_parser() -> argparse.ArgumentParser:
    """Create argument parser"""
    parser = argparse.ArgumentParser(
        prog='workout-overlay',
        description="Overlay workout statistics from a TCX/FIT file onto a photo",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=f"""
Examples:
  # Default output (./{OutputConfig.DEFAULT_OUTPUT_NAME}):
  %(prog)s -i photo.jpg -f activity.fit

  # Explicit output file:
  %(prog)s -i photo.jpg -f activity.tcx out/photo_stats.png

  # Custom font and watermark directories:
  %(prog)s -i photo.jpg -f activity.fit --fonts-dir ./fonts --assets-dir ./img
        """
    )

    parser.add_argument(
        '-i', '--image',
        type=Path,
        required=True,
        help='Input photo (any format OpenCV can read)'
    )

    parser.add_argument(
        '-f', '--file',
        type=Path,
        required=True,
        help='Activity file (.tcx or .fit)'
    )

    parser.add_argument(
        'output',
        type=Path,
        nargs='?',
        default=Path(OutputConfig.DEFAULT_OUTPUT_NAME),
        help=f'Output file or directory (default: {OutputConfig.DEFAULT_OUTPUT_NAME})'
    )

    # =====================================
    # RESOURCES
    # =====================================
    resources_group = parser.add_argument_group('Resources')
    resources_group.add_argument(
        '--fonts-dir',
        type=Path,
        help='Directory containing DejaVuSans.ttf and FontAwesome.ttf'
    )
    resources_group.add_argument(
        '--assets-dir',
        type=Path,
        help='Directory containing the watermark images'
    )

    # =====================================
    # FORMATTING
    # =====================================
    format_group = parser.add_argument_group('Formatting')
    format_group.add_argument(
        '--date-format',
        default=FormatConfig.DATE_FORMAT,
        help='strftime format for the date under the start time (default: %%d/%%m/%%Y)'
    )

    # Global options
    parser.add_argument(
        '-v', '--verbose',
        action='store_true',
        help='Enable verbose logging'
    )

    parser.add_argument(
        '--version',
        action='version',
        version=f'Workout Overlay {__version__}'
    )

    return parser


def cmd_overlay(args: argparse.Namespace) -> int:
    """Execute overlay command"""
    locator = ResourceLocator(assets_dir=args.assets_dir, fonts_dir=args.fonts_dir)

    pipeline = OverlayPipeline(
        fonts=PillowFontProvider.from_locator(locator),
        asset_store=WatermarkAssetStore(locator),
        date_format=args.date_format
    )

    output_path = pipeline.run(args.image, args.file, args.output)

    print()
    print(f"{GREEN}✅ Imagem salva em: {YELLOW}{output_path}{NC}")
    return 0


def main(argv=None) -> int:
    """Main entry point"""
    # Create parser
    parser = create_parser()

    # Parse arguments
    args = parser.parse_args(argv)

    # Set up logging
    log_level = logging.DEBUG if args.verbose else logging.INFO
    logging.basicConfig(
        level=log_level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    print_banner()

    try:
        return cmd_overlay(args)

    except OverlayError as e:
        print(f"{RED}❌ Erro: {e}{NC}")
        return 1
    except KeyboardInterrupt:
        print()
        print(f"{YELLOW}⚠️  Operação cancelada pelo usuário{NC}")
        return 130
    except Exception as e:
        logging.exception("Unexpected error")
        print(f"{MAGENTA}❌ Erro inesperado: {e}{NC}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
