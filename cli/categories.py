#!/usr/bin/env python3

import sys
from services.categories import CategoryError
from logger import get_logger

logger = get_logger()


def cmd_list(args, services):
    """List all categories in the database."""
    categories = services.categories.find_all()

    if not categories:
        logger.info("No categories found. Run 'python -m cli categories seed' to add defaults.")
        return

    logger.info("\nCategories:")
    logger.info("=" * 80)
    for category in categories:
        default_marker = " (default)" if category.is_default else ""
        logger.info(f"{category.id:>4}  {category.name:<24} {category.type:<8}{default_marker}")

    logger.info(f"\nTotal categories: {len(categories)}")


def cmd_create(args, services):
    """Create a new category."""
    try:
        category = services.categories.create(
            args.name, args.type, icon=args.icon, color=args.color
        )
    except CategoryError as e:
        logger.error(f"Error creating category: {e}")
        sys.exit(1)

    logger.info(f"✓ Category '{category.name}' created with ID: {category.id}")


def cmd_delete(args, services):
    """Delete a category by ID."""
    category = services.categories.find(args.category_id)
    if not category:
        logger.error(f"Category with ID {args.category_id} not found.")
        sys.exit(1)

    if args.reassign_to == category.id:
        logger.error("Cannot reassign transactions to the category being deleted.")
        sys.exit(1)

    if not args.yes:
        confirm = (
            input(f"\nDelete category '{category.name}' and its learned patterns? (yes/no): ")
            .strip()
            .lower()
        )
        if confirm != "yes":
            logger.info("Deletion cancelled.")
            return

    if args.reassign_to is not None:
        moved = services.transactions.reassign_category(category.id, args.reassign_to)
        logger.info(f"Moved {moved} transaction(s) to category {args.reassign_to}")

    if services.categories.delete(category.id):
        logger.info(f"✓ Category '{category.name}' deleted successfully.")
    else:
        logger.error("Failed to delete category.")
        sys.exit(1)


def cmd_seed(args, services):
    """Seed the default categories."""
    created = services.categories.seed_defaults()

    if not created:
        logger.info("Categories already exist - nothing seeded.")
        return

    for category in created:
        logger.info(f"✓ Created '{category.name}' ({category.type})")
    logger.info(f"\nSeeded {len(created)} categories.")


def cmd_suggest(args, services):
    """Show suggested categories for a description."""
    suggestions = services.categories.get_suggested_categories(args.description)

    if not suggestions:
        logger.info(f"No suggestions for '{args.description}'.")
        return

    logger.info(f"Suggestions for '{args.description}':")
    for rank, category in enumerate(suggestions, start=1):
        logger.info(f"  {rank}. {category.name} (ID: {category.id})")


def setup_parser(subparsers):
    """Setup categories subcommand parser.

    Args:
        subparsers: The subparsers object from the main CLI
    """
    parser = subparsers.add_parser(
        "categories",
        help="Manage categories",
        description="Create, list and delete categories, and get suggestions",
    )

    categories_subparsers = parser.add_subparsers(
        title="subcommands",
        description="Available category commands",
        dest="subcommand",
        required=True,
    )

    list_parser = categories_subparsers.add_parser("list", help="List all categories")
    list_parser.set_defaults(func=cmd_list)

    create_parser = categories_subparsers.add_parser("create", help="Create a new category")
    create_parser.add_argument("name", help="Category name, e.g. 'Pets'")
    create_parser.add_argument(
        "--type", choices=["income", "expense"], default="expense", help="Category type"
    )
    create_parser.add_argument("--icon", help="Icon name")
    create_parser.add_argument("--color", help="Hex color, e.g. '#6b7280'")
    create_parser.set_defaults(func=cmd_create)

    delete_parser = categories_subparsers.add_parser("delete", help="Delete a category by ID")
    delete_parser.add_argument("category_id", type=int, help="ID of the category to delete")
    delete_parser.add_argument(
        "--reassign-to",
        type=int,
        help="Move the category's transactions to this category ID first",
    )
    delete_parser.add_argument("--yes", action="store_true", help="Skip confirmation")
    delete_parser.set_defaults(func=cmd_delete)

    seed_parser = categories_subparsers.add_parser(
        "seed", help="Create the default categories if none exist"
    )
    seed_parser.set_defaults(func=cmd_seed)

    suggest_parser = categories_subparsers.add_parser(
        "suggest", help="Suggest categories for a transaction description"
    )
    suggest_parser.add_argument("description", help="Transaction description")
    suggest_parser.set_defaults(func=cmd_suggest)
