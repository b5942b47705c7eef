#!/usr/bin/env python3
"""
PFT CLI - run the personal finance tracker API and manage its database.

Usage:
    python -m cli <command> [subcommand] [options]

Commands:
    serve        Run the HTTP API
    migrate      Database migrations

Examples:
    python -m cli migrate status
    python -m cli migrate apply
    python -m cli serve --port 8080
"""

import sys
import argparse
from cli import migrate, serve
from config import load_config
from services.base import Services
from db.manager import DatabaseManager
from logger import setup_logging


def main():
    """Main CLI entry point with subcommands."""
    parser = argparse.ArgumentParser(
        prog="cli",
        description="PFT - Personal finance tracker API",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    subparsers = parser.add_subparsers(
        title="commands",
        description="Available commands",
        dest="command",
        required=True,
    )

    serve.setup_parser(subparsers)
    migrate.setup_parser(subparsers)

    args = parser.parse_args()

    if hasattr(args, "func"):
        try:
            config = load_config()
            setup_logging(config)

            # Commands that use services: serve
            # Commands that use db_manager directly: migrate
            if args.command == "serve":
                args.func(args, Services(config))
            elif args.command == "migrate":
                args.func(args, DatabaseManager(config))
            else:
                args.func(args)
        except Exception as e:
            print(f"Error: {e}")
            sys.exit(1)
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
