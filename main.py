#!/usr/bin/env python3
"""Main entry point for slides-writer.

Usage:
    slides-writer auth
    slides-writer write-slide <slide-number> title|content <text>
    slides-writer revoke
    slides-writer              # MCP server on stdio
"""

import argparse
import asyncio
import logging
import signal
import sys
from typing import Any, NoReturn, Optional, Sequence

from auth.google_auth import SlidesGoogleAuth
from common.types.errors import SlidesWriterError
from common.types.slides import TextTarget
from config import SlidesWriterConfig, load_config
from connectors.google.slides_connector import SlidesConnectorTool
from telemetry import get_tracer, init_telemetry
from tools.mcp_server import create_server

logger = logging.getLogger(__name__)

tracer = get_tracer(__name__)


def configure_logging(verbose: bool = False) -> None:
    # stdout carries the MCP stdio transport, so logs go to stderr
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )
    logging.getLogger("googleapiclient.discovery_cache").setLevel(logging.WARNING)


def signal_handler(sig: Any, frame: Any) -> None:
    """Handle shutdown signals gracefully."""
    logger.info("MCP server received shutdown signal")
    sys.exit(0)


def positive_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError:
        number = 0
    if number < 1:
        raise argparse.ArgumentTypeError("Slide number must be a positive integer")
    return number


class SlidesWriterArgumentParser(argparse.ArgumentParser):
    """Argument parser whose usage errors exit with status 1."""

    def error(self, message: str) -> NoReturn:
        self.print_usage(sys.stderr)
        self.exit(1, f"{self.prog}: error: {message}\n")


def build_parser() -> argparse.ArgumentParser:
    parser = SlidesWriterArgumentParser(
        prog="slides-writer", description="Write text into Google Slides shapes"
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command")

    subparsers.add_parser("auth", help="Run the Google OAuth flow and cache the token")
    subparsers.add_parser("revoke", help="Delete the cached Google token")

    write_parser = subparsers.add_parser(
        "write-slide", help="Replace the title or content text of a slide"
    )
    write_parser.add_argument("slide_number", type=positive_int, help="1-based slide number")
    write_parser.add_argument(
        "target", choices=[target.value for target in TextTarget], help="Text box to write"
    )
    write_parser.add_argument("text", help="Text to write")

    return parser


async def run_auth(config: SlidesWriterConfig) -> int:
    logger.info("Starting authentication flow...")
    with tracer.start_as_current_span("auth"):
        try:
            slides_service = await SlidesGoogleAuth(config).obtain_client()
            slides_service.close()
        except SlidesWriterError as e:
            logger.error(f"Authentication failed: {e.message}")
            return 1
        except Exception as e:
            logger.exception(f"Unexpected error during authentication: {e}")
            return 1
    logger.info("Authentication completed successfully!")
    return 0


async def run_revoke(config: SlidesWriterConfig) -> int:
    await SlidesGoogleAuth(config).revoke_authentication()
    return 0


async def run_write_slide(
    config: SlidesWriterConfig, slide_number: int, target: TextTarget, text: str
) -> int:
    logger.info(f"Writing {target.value} text to slide {slide_number}...")
    with tracer.start_as_current_span("write-slide") as span:
        span.set_attribute("slides.slide_number", slide_number)
        try:
            slides_service = await SlidesGoogleAuth(config).obtain_client()
            async with slides_service:
                connector = SlidesConnectorTool(slides_service, config)
                await connector.write_slide(slide_number, target, text)
        except SlidesWriterError as e:
            logger.error(f"Error updating slide: {e.message}")
            return 1
        except Exception as e:
            logger.exception(f"Unexpected error updating slide: {e}")
            return 1
    logger.info("Update successful!")
    return 0


def run_server(config: SlidesWriterConfig) -> int:
    signal.signal(signal.SIGINT, signal_handler)
    signal.signal(signal.SIGTERM, signal_handler)

    logger.info("Starting slides-writer MCP server on stdio...")
    create_server(config).run(transport="stdio")
    return 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(args.verbose)
    init_telemetry()
    try:
        config = load_config()
    except ValueError as e:
        logger.error(f"Invalid configuration: {e}")
        return 1

    if args.command == "auth":
        return asyncio.run(run_auth(config))
    if args.command == "revoke":
        return asyncio.run(run_revoke(config))
    if args.command == "write-slide":
        return asyncio.run(
            run_write_slide(config, args.slide_number, TextTarget(args.target), args.text)
        )
    return run_server(config)


if __name__ == "__main__":
    sys.exit(main())
