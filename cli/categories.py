#!/usr/bin/env python3

from cli.users import add_user_argument
from logger import get_logger

logger = get_logger()


def cmd_list(args, services):
    """List the user's categories."""
    categories = services.ledger.list_categories(args.user_id)

    if not categories:
        logger.info("No categories found.")
        return

    logger.info("\nCategories:")
    logger.info("=" * 80)
    for category in categories:
        logger.info(f"ID: {category.id}")
        logger.info(f"Name: {category.name}")
        logger.info(f"Created: {category.created_at.isoformat()}")
        logger.info("-" * 80)

    logger.info(f"\nTotal categories: {len(categories)}")


def cmd_create(args, services):
    """Create a new category."""
    category = services.ledger.create_category(args.user_id, args.name)

    logger.info(f"\n✓ Category created successfully with ID: {category.id}")
    logger.info(f"  Name: {category.name}")


def cmd_delete(args, services):
    """Delete a category by ID."""
    category_id = args.category_id

    if not args.yes:
        confirm = (
            input(f"\nDelete category {category_id}? (yes/no): ").strip().lower()
        )
        if confirm != "yes":
            logger.info("Deletion cancelled.")
            return

    services.ledger.delete_category(args.user_id, category_id)
    logger.info(f"✓ Category {category_id} deleted successfully.")


def setup_parser(subparsers):
    """Setup categories subcommand parser.

    Args:
        subparsers: The subparsers object from the main CLI
    """
    parser = subparsers.add_parser(
        "categories",
        help="Manage categories",
        description="Create, list, and delete a user's transaction categories",
    )

    categories_subparsers = parser.add_subparsers(
        title="subcommands",
        description="Available category commands",
        dest="subcommand",
        required=True,
    )

    # categories list
    list_parser = categories_subparsers.add_parser(
        "list", help="List the user's categories"
    )
    add_user_argument(list_parser)
    list_parser.set_defaults(func=cmd_list)

    # categories create
    create_parser = categories_subparsers.add_parser(
        "create", help="Create a new category"
    )
    add_user_argument(create_parser)
    create_parser.add_argument("name", help="Category name, e.g. Groceries")
    create_parser.set_defaults(func=cmd_create)

    # categories delete
    delete_parser = categories_subparsers.add_parser(
        "delete", help="Delete a category that no transaction uses"
    )
    add_user_argument(delete_parser)
    delete_parser.add_argument(
        "category_id",
        type=int,
        help="ID of the category to delete",
    )
    delete_parser.add_argument(
        "--yes", action="store_true", help="Skip the confirmation prompt"
    )
    delete_parser.set_defaults(func=cmd_delete)
