#!/usr/bin/env python3
"""
Command-line interface for the short link store.

Usage:
    python shortlinks_cli.py shorten <url> [--custom-code CODE] [--validity MINUTES]
    python shortlinks_cli.py open <short_code>
    python shortlinks_cli.py get <short_code>
    python shortlinks_cli.py stats <short_code>
    python shortlinks_cli.py list
    python shortlinks_cli.py health
"""

import argparse
import asyncio
import json
import sys
import os
from typing import Optional

# Add project root to path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '../..')))

from app import build_store
from config import Config
from shortlinks.errors import ShortLinkError
from shortlinks.common.logging_config import setup_logging


def _print_ok(payload: dict) -> int:
    print(json.dumps({"success": True, **payload}, indent=2))
    return 0


def _print_error(message: str) -> int:
    print(json.dumps({"success": False, "error": message}, indent=2), file=sys.stderr)
    return 1


class ShortLinksCLI:
    """Command-line interface for the short link store."""

    def __init__(self, config: Config, verbose: bool = False):
        self.config = config
        self.logger = setup_logging(level="DEBUG" if verbose else "ERROR")
        self.store = build_store(config, self.logger)

    async def initialize(self):
        await self.store.load()

    async def cleanup(self):
        await self.store.close()

    async def shorten(self, url: str, custom_code: Optional[str], validity: int):
        """Shorten a URL."""
        try:
            record = await self.store.shorten(url, custom_code, validity)
        except ShortLinkError as e:
            return _print_error(str(e))

        return _print_ok({
            **record.to_dict(),
            "short_url": self.store.short_url_for(record.short_code),
            "message": f"Successfully shortened URL to: {record.short_code}",
        })

    async def open(self, short_code: str):
        """Resolve a short code, recording a click."""
        original_url = await self.store.resolve(short_code, referrer="cli")
        if original_url:
            return _print_ok({"short_code": short_code, "original_url": original_url})
        return self._missing(short_code)

    async def get(self, short_code: str):
        """Look up a short code without recording a click."""
        record = self.store.get(short_code)
        if record:
            return _print_ok(record.to_dict())
        return self._missing(short_code)

    async def stats(self, short_code: str):
        """Show statistics for a short code."""
        stats = self.store.stats_for(short_code)
        if stats:
            return _print_ok(stats.to_dict())
        return self._missing(short_code)

    async def list_urls(self):
        """List every stored link."""
        views = self.store.list_all()
        return _print_ok({
            "count": len(views),
            "urls": [view.to_dict() for view in views],
        })

    async def health(self):
        """Check storage health."""
        healthy = await self.store.health_check()
        print(json.dumps({
            "success": healthy,
            "storage": "healthy" if healthy else "unhealthy",
            "total_urls": len(self.store.table),
        }, indent=2))
        return 0 if healthy else 1

    def _missing(self, short_code: str) -> int:
        if self.store.find_expired(short_code):
            return _print_error(f"Short code '{short_code}' has expired")
        return _print_error(f"Short code '{short_code}' not found")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Short link CLI",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Shorten a URL for one day
  %(prog)s shorten https://example.com/long/url --validity 1440

  # Shorten with custom code
  %(prog)s shorten https://example.com/long/url --custom-code mylink

  # Follow a short code (counts as a click)
  %(prog)s open mylink

  # Get statistics
  %(prog)s stats mylink
        """
    )

    parser.add_argument(
        "--backend",
        choices=["file", "redis", "memory"],
        default=os.getenv("STORAGE_BACKEND", "file"),
        help="Storage backend (default: from STORAGE_BACKEND env or file)"
    )

    parser.add_argument(
        "--storage-path",
        default=os.getenv("STORAGE_PATH", "data/shortlinks.json"),
        help="JSON document for the file backend"
    )

    parser.add_argument(
        "--redis-url",
        default=os.getenv("REDIS_URL"),
        help="Redis connection URL for the redis backend"
    )

    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Verbose output"
    )

    subparsers = parser.add_subparsers(dest="command", help="Command to execute")

    shorten_parser = subparsers.add_parser("shorten", help="Shorten a URL")
    shorten_parser.add_argument("url", help="URL to shorten")
    shorten_parser.add_argument("--custom-code", help="Custom short code")
    shorten_parser.add_argument("--validity", type=int, default=30, help="Validity in minutes (1-10080)")

    open_parser = subparsers.add_parser("open", help="Resolve a short code and record a click")
    open_parser.add_argument("short_code")

    get_parser = subparsers.add_parser("get", help="Look up an active short code")
    get_parser.add_argument("short_code")

    stats_parser = subparsers.add_parser("stats", help="Get click statistics")
    stats_parser.add_argument("short_code")

    subparsers.add_parser("list", help="List every short code")
    subparsers.add_parser("health", help="Check storage health")

    return parser


async def main(argv=None):
    """Main entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    config = Config(
        storage_backend=args.backend,
        storage_path=args.storage_path,
        redis_url=args.redis_url,
    )
    cli = ShortLinksCLI(config, verbose=args.verbose)

    try:
        await cli.initialize()

        if args.command == "shorten":
            return await cli.shorten(args.url, args.custom_code, args.validity)
        elif args.command == "open":
            return await cli.open(args.short_code)
        elif args.command == "get":
            return await cli.get(args.short_code)
        elif args.command == "stats":
            return await cli.stats(args.short_code)
        elif args.command == "list":
            return await cli.list_urls()
        elif args.command == "health":
            return await cli.health()
        else:
            parser.print_help()
            return 1
    finally:
        await cli.cleanup()


if __name__ == "__main__":
    exit_code = asyncio.run(main())
    sys.exit(exit_code)
