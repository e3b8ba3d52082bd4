#!/usr/bin/env python3
"""
Command-line interface for link shorter.

Usage:
    link-shorter serve [--db PATH] [--listen HOST:PORT]
    link-shorter add-token --token TOKEN [--seconds N] [--db PATH]
    link-shorter remove-token --token TOKEN [--db PATH]
    link-shorter list-token [--db PATH]
    link-shorter list-shorter [--db PATH]
    link-shorter remove-shorter --path PATH [--db PATH]
"""

import argparse
import asyncio
import sys
from typing import List, Optional, Tuple

from config import load_config
from .common.logging_config import setup_logging
from .database.sqlite import SQLiteShorterDB
from .errors import BadInput, StorageFailure
from .service import ShorterService
from .ttl import describe_expiry
from web_app.server import run_server


class LinkShorterCLI:
    """Administrative commands operating directly on the database file."""

    def __init__(self, db_path: str, verbose: bool = False):
        """Initialize CLI."""
        self.db_path = db_path
        self.logger = setup_logging(level="DEBUG" if verbose else "WARNING")
        self.service: Optional[ShorterService] = None

    def initialize(self) -> None:
        db = SQLiteShorterDB(db_config=self.db_path, logger=self.logger)
        self.service = ShorterService(db=db, logger=self.logger)

    async def cleanup(self) -> None:
        if self.service:
            await self.service.close()

    async def add_token(self, token: str, seconds: Optional[int] = None) -> int:
        await self.service.add_token(token, seconds)
        print("Token added")
        return 0

    async def remove_token(self, token: str) -> int:
        if await self.service.remove_token(token):
            print("Token removed")
        else:
            print("No such token")
        return 0

    async def list_tokens(self) -> int:
        tokens = await self.service.list_tokens()
        print("Token\tTTL")
        for token in tokens:
            print(f"{token.token}\t{describe_expiry(token.ttl)}")
        return 0

    async def list_shorters(self) -> int:
        shorters = await self.service.list_shorters()
        print("Path\tURL\tTTL")
        for shorter in shorters:
            print(f"{shorter.path}\t{shorter.url}\t{describe_expiry(shorter.ttl)}")
        return 0

    async def remove_shorter(self, path: str) -> int:
        if await self.service.remove_shorter(path):
            print("Shorter removed")
        else:
            print("No such shorter")
        return 0


def parse_listen(listen: str) -> Tuple[str, int]:
    """Split ``HOST:PORT`` (IPv6 hosts in brackets)."""
    host, sep, port = listen.rpartition(":")
    if not sep or not host or not port.isdigit():
        raise argparse.ArgumentTypeError(f"expected HOST:PORT, got {listen!r}")
    return host.strip("[]"), int(port)


def build_parser(default_db: str) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="link-shorter",
        description="Link shorter service and token administration",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Run the HTTP service
  %(prog)s serve --listen 0.0.0.0:1566

  # Allow a token for one day
  %(prog)s add-token --token s3cret --seconds 86400

  # Show tokens and their expiry
  %(prog)s list-token
        """
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Verbose output")

    db_parent = argparse.ArgumentParser(add_help=False)
    db_parent.add_argument(
        "-d", "--db",
        default=default_db,
        help=f"SQLite database file (default: from DATABASE_PATH env or {default_db})",
    )

    subparsers = parser.add_subparsers(dest="command", help="Command to execute")

    serve_parser = subparsers.add_parser("serve", parents=[db_parent], help="Run the HTTP service")
    serve_parser.add_argument("-l", "--listen", type=parse_listen, help="Address to bind, HOST:PORT")

    add_parser = subparsers.add_parser("add-token", parents=[db_parent], help="Add or replace a token")
    add_parser.add_argument("-t", "--token", required=True, help="Token value")
    add_parser.add_argument("-s", "--seconds", type=int, help="Lifetime in seconds (never expires if omitted)")

    remove_parser = subparsers.add_parser("remove-token", parents=[db_parent], help="Remove a token")
    remove_parser.add_argument("-t", "--token", required=True, help="Token value")

    subparsers.add_parser("list-token", parents=[db_parent], help="List tokens")

    subparsers.add_parser("list-shorter", parents=[db_parent], help="List shorters")

    remove_shorter_parser = subparsers.add_parser(
        "remove-shorter", parents=[db_parent], help="Remove a shorter"
    )
    remove_shorter_parser.add_argument("-p", "--path", required=True, help="Shorter path")

    return parser


async def run_command(args: argparse.Namespace) -> int:
    cli = LinkShorterCLI(db_path=args.db, verbose=args.verbose)
    try:
        cli.initialize()

        if args.command == "add-token":
            return await cli.add_token(args.token, args.seconds)
        elif args.command == "remove-token":
            return await cli.remove_token(args.token)
        elif args.command == "list-token":
            return await cli.list_tokens()
        elif args.command == "list-shorter":
            return await cli.list_shorters()
        elif args.command == "remove-shorter":
            return await cli.remove_shorter(args.path)
        return 1

    except BadInput as e:
        print(f"Invalid input: {e}", file=sys.stderr)
        return 1
    except StorageFailure as e:
        print(f"Storage error: {e}", file=sys.stderr)
        return 1
    finally:
        await cli.cleanup()


def serve(args: argparse.Namespace, config) -> int:
    overrides = {"database_path": args.db}
    if args.listen:
        overrides["host"], overrides["port"] = args.listen
    config = config.model_copy(update=overrides)

    logger = setup_logging(
        level="DEBUG" if args.verbose else config.log_level,
        log_file=config.log_file,
        json_format=config.log_json,
    )
    run_server(config, logger)
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    config = load_config()
    parser = build_parser(config.database_path)
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    if args.command == "serve":
        return serve(args, config)

    return asyncio.run(run_command(args))


if __name__ == "__main__":
    sys.exit(main())
