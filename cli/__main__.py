#!/usr/bin/env python3
"""
Tally CLI - command-line interface for a user's ledger and fueling records.

Usage:
    python -m cli <command> <subcommand> [options]

Commands:
    users         Manage users
    categories    Manage a user's categories
    transactions  Record and list a user's transactions
    summary       Monthly total for a user
    fuelings      Manage a user's fueling records
    migrate       Database migrations

Examples:
    python -m cli migrate apply
    python -m cli users create alice
    python -m cli categories create --user 1 Food
    python -m cli transactions create --user 1 --description Lunch \\
        --amount 12.50 --date 2024-03-15 --category 1
    python -m cli summary --user 1 --month 2024/03
"""

import sys
import sqlite3
import argparse
from cli import categories, fuelings, migrate, transactions, users
from config import load_config
from errors import LedgerError
from services.base import Services
from logger import get_logger, setup_logging


def main():
    """Main CLI entry point with subcommands."""
    parser = argparse.ArgumentParser(
        prog="cli",
        description="Tally - personal finance and fueling tracker",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    subparsers = parser.add_subparsers(
        title="commands",
        description="Available commands",
        dest="command",
        required=True,
    )

    users.setup_parser(subparsers)
    categories.setup_parser(subparsers)
    transactions.setup_parser(subparsers)
    fuelings.setup_parser(subparsers)
    migrate.setup_parser(subparsers)

    args = parser.parse_args()

    if not hasattr(args, "func"):
        parser.print_help()
        sys.exit(1)

    config = load_config()
    setup_logging(config)
    logger = get_logger()

    services = Services(config)

    try:
        if args.command == "migrate":
            # Migrate commands need db_manager for raw database operations
            args.func(args, services.db_manager)
        else:
            args.func(args, services)
    except LedgerError as e:
        logger.error(f"Error ({e.reason}): {e}")
        sys.exit(1)
    except sqlite3.Error as e:
        logger.error(f"Database error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
