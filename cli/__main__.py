#!/usr/bin/env python3
"""
SmartBudget CLI - Command-line interface for categories, transactions and suggestions.

Usage:
    python -m cli <command> <subcommand> [options]

Commands:
    categories   Manage categories and get category suggestions
    patterns     Inspect learned description -> category patterns
    transactions Record and categorize transactions
    migrate      Database migrations

Examples:
    python -m cli migrate apply
    python -m cli categories seed
    python -m cli categories suggest "Starbucks Coffee"
    python -m cli transactions add --amount -5.75 --description "Starbucks" --category "Food & Dining"
    python -m cli transactions suggest-all
"""

import sys
import argparse
from cli import categories, patterns, transactions, migrate
from config import load_config
from services.base import Services
from db.manager import DatabaseManager
from logger import setup_logging


def main():
    """Main CLI entry point with subcommands."""
    parser = argparse.ArgumentParser(
        prog="cli",
        description="SmartBudget - Personal budget tracking with category suggestions",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    subparsers = parser.add_subparsers(
        title="commands",
        description="Available commands",
        dest="command",
        required=True,
    )

    categories.setup_parser(subparsers)
    patterns.setup_parser(subparsers)
    transactions.setup_parser(subparsers)
    migrate.setup_parser(subparsers)

    args = parser.parse_args()

    if hasattr(args, "func"):
        try:
            config = load_config()
            setup_logging(config)

            # migrate works on the raw database, everything else goes through services
            if args.command == "migrate":
                args.func(args, DatabaseManager(config))
            else:
                args.func(args, Services(config))
        except Exception as e:
            print(f"Error: {e}")
            sys.exit(1)
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
