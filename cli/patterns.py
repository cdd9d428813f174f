#!/usr/bin/env python3

from logger import get_logger

logger = get_logger()


def cmd_list(args, services):
    """List learned patterns, optionally for one description."""
    if args.description:
        patterns = services.patterns.find_by_description(args.description)
    else:
        patterns = services.patterns.find_all()

    if not patterns:
        logger.info("No learned patterns found.")
        return

    names = {c.id: c.name for c in services.categories.find_all()}
    min_count = services.config.min_pattern_count

    logger.info(f"\n{'Description':<40} {'Category':<24} {'Count':>5}  Last used")
    logger.info("=" * 90)
    for pattern in patterns:
        category_name = names.get(pattern.category_id, f"<deleted {pattern.category_id}>")
        # '*' marks patterns trusted for suggestions
        marker = "*" if pattern.count >= min_count else " "
        last_used = pattern.last_used.strftime("%Y-%m-%d %H:%M") if pattern.last_used else "-"
        logger.info(
            f"{pattern.description[:40]:<40} {category_name[:24]:<24} "
            f"{pattern.count:>5}{marker} {last_used}"
        )

    logger.info(f"\nTotal patterns: {len(patterns)} (* = used for suggestions)")


def setup_parser(subparsers):
    """Setup patterns subcommand parser.

    Args:
        subparsers: The subparsers object from the main CLI
    """
    parser = subparsers.add_parser(
        "patterns",
        help="Inspect learned patterns",
        description="Show learned description -> category assignments",
    )

    patterns_subparsers = parser.add_subparsers(
        title="subcommands",
        description="Available pattern commands",
        dest="subcommand",
        required=True,
    )

    list_parser = patterns_subparsers.add_parser("list", help="List learned patterns")
    list_parser.add_argument("--description", help="Only show patterns for this description")
    list_parser.set_defaults(func=cmd_list)
