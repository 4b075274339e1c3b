"""Command-line interface entry point for imageless."""

import argparse
import logging
import os
import sys

from dotenv import load_dotenv

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Apply a configured list of operations to an image"
    )
    parser.add_argument(
        "-f", "--file",
        help="File to process"
    )
    parser.add_argument(
        "-o", "--out",
        help="Output file"
    )
    parser.add_argument(
        "-c", "--config",
        default=os.getenv("IMAGELESS_CONFIG", "imageless.toml"),
        help="Path to a JSON or TOML config file (default: $IMAGELESS_CONFIG or imageless.toml)"
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable verbose logging"
    )
    parser.add_argument(
        "--version",
        action="store_true",
        help="Show version and exit"
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    """Entry point for the imageless command."""
    # Load .env before the parser reads its defaults from the environment
    load_dotenv()

    parser = build_parser()
    args = parser.parse_args(argv)

    if args.version:
        from . import __version__
        print(f"imageless version {__version__}")
        return 0

    if not args.file or not args.out:
        parser.error("--file and --out are required")

    # Configure logging
    log_level = logging.DEBUG if args.verbose else logging.INFO
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    from .codec import save
    from .config import Config
    from .errors import ImagelessError
    from .pipeline.processor import ImageProcessor

    try:
        config = Config.load(args.config)
        processor = ImageProcessor.from_config(config)
        image = processor.process_file(args.file)
        save(image, args.out, config.out_format)
    except ImagelessError as e:
        logger.error("%s", e)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
