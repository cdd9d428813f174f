#!/usr/bin/env python3

import sys
import argparse
from datetime import datetime
from categorization import auto_categorize
from services.transactions import TransactionError
from logger import get_logger

logger = get_logger()


def _resolve_category(services, category_input):
    """Look up a category by ID first, then by name."""
    try:
        return services.categories.find(int(category_input))
    except ValueError:
        return services.categories.find_by_name(category_input)


def cmd_add(args, services):
    """Add a transaction, optionally with a category.

    Args:
        args: Parsed command-line arguments with amount, description, date, category
        services: Services container with transactions and categories services
    """
    transaction_date = None
    if args.date:
        try:
            transaction_date = datetime.strptime(args.date, "%Y/%m/%d").date()
        except ValueError:
            logger.error("Date must be in YYYY/MM/DD format")
            sys.exit(1)

    category = None
    if args.category:
        category = _resolve_category(services, args.category)
        if not category:
            logger.error(f"Category '{args.category}' not found.")
            logger.info("Use 'python -m cli categories list' to see available categories.")
            sys.exit(1)

    try:
        transaction = services.transactions.create(
            args.description,
            args.amount,
            transaction_date=transaction_date,
            category_id=category.id if category else None,
        )
    except TransactionError as e:
        logger.error(f"Error adding transaction: {e}")
        sys.exit(1)

    logger.info(f"✓ Transaction added with ID: {transaction.id}")
    logger.info(f"  {transaction.transaction_date} {transaction.description} {transaction.amount}")

    if category:
        logger.info(f"  Category: {category.name}")
        return

    suggestions = services.categories.get_suggested_categories(transaction.description)
    if suggestions:
        names = ", ".join(c.name for c in suggestions)
        logger.info(f"  Suggested categories: {names}")
        logger.info(
            f"  Use 'python -m cli transactions categorize {transaction.id} <category>' to assign one."
        )


def cmd_list(args, services):
    """List all transactions, newest first."""
    transactions = services.transactions.find_all()

    if not transactions:
        logger.info("No transactions found.")
        return

    names = {c.id: c.name for c in services.categories.find_all()}

    logger.info(f"\n{'ID':>5}  {'Date':<10}  {'Description':<40} {'Amount':>10}  Category")
    logger.info("=" * 90)
    for txn in transactions:
        if txn.category_id is not None:
            category_name = names.get(txn.category_id, "Unknown")
        elif txn.auto_category_id is not None:
            category_name = f"({names.get(txn.auto_category_id, 'Unknown')}?)"
        else:
            category_name = "Uncategorized"
        logger.info(
            f"{txn.id:>5}  {txn.transaction_date.isoformat():<10}  "
            f"{txn.description[:40]:<40} {txn.amount:>10}  {category_name}"
        )

    logger.info(f"\nTotal transactions: {len(transactions)}")


def cmd_categorize(args, services):
    """Set the category for a transaction and learn from it."""
    category = _resolve_category(services, args.category)
    if not category:
        logger.error(f"Category '{args.category}' not found.")
        logger.info("Use 'python -m cli categories list' to see available categories.")
        sys.exit(1)

    try:
        transaction = services.transactions.update_category(args.transaction_id, category.id)
    except TransactionError as e:
        logger.error(f"Error updating transaction: {e}")
        sys.exit(1)

    logger.info("✓ Transaction categorized successfully")
    logger.info(f"  Transaction: {transaction.description[:50]}")
    logger.info(f"  Category: {category.name}")


def cmd_suggest_all(args, services):
    """Store a suggested category on every uncategorized transaction."""
    transactions = services.transactions.find_uncategorized()
    if not transactions:
        logger.info("No uncategorized transactions.")
        return

    config = services.config
    auto_categorize(
        transactions,
        services.categories.find_all(),
        services.patterns.find_all(),
        dictionary=services.categories.dictionary,
        fuzzy_threshold=config.fuzzy_threshold,
        min_pattern_count=config.min_pattern_count,
        max_results=config.max_suggestions,
    )
    updated = services.transactions.batch_update_auto_categories(transactions)
    logger.info(f"✓ Updated suggestions for {updated} transaction(s)")


def setup_parser(subparsers):
    """Setup transactions subcommand parser.

    Args:
        subparsers: The subparsers object from the main CLI
    """
    parser = subparsers.add_parser(
        "transactions",
        help="Manage transactions",
        description="Record transactions and assign categories",
    )

    transactions_subparsers = parser.add_subparsers(
        title="subcommands",
        description="Available transaction commands",
        dest="subcommand",
        required=True,
    )

    # transactions add
    add_parser = transactions_subparsers.add_parser(
        "add",
        help="Add a transaction",
        epilog="""
Examples:
  python -m cli transactions add --amount -5.75 --description "Starbucks Coffee"
  python -m cli transactions add --amount 2500 --description "Paycheck" --category Salary
        """,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    add_parser.add_argument(
        "--amount",
        required=True,
        help="Amount: positive for income, negative for expense",
    )
    add_parser.add_argument("--description", required=True, help="Transaction description")
    add_parser.add_argument("--date", help="Transaction date in YYYY/MM/DD format (default: today)")
    add_parser.add_argument("--category", help="Category name or ID")
    add_parser.set_defaults(func=cmd_add)

    # transactions list
    list_parser = transactions_subparsers.add_parser("list", help="List transactions")
    list_parser.set_defaults(func=cmd_list)

    # transactions categorize
    categorize_parser = transactions_subparsers.add_parser(
        "categorize",
        help="Set category for a transaction",
        description="Assign a category to a transaction and record it as a learned pattern",
    )
    categorize_parser.add_argument("transaction_id", type=int, help="Transaction ID")
    categorize_parser.add_argument("category", help="Category name or ID")
    categorize_parser.set_defaults(func=cmd_categorize)

    # transactions suggest-all
    suggest_all_parser = transactions_subparsers.add_parser(
        "suggest-all",
        help="Suggest categories for all uncategorized transactions",
    )
    suggest_all_parser.set_defaults(func=cmd_suggest_all)
