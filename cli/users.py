#!/usr/bin/env python3

from logger import get_logger

logger = get_logger()


def add_user_argument(parser):
    """Add the --user option identifying whose ledger a command acts on."""
    parser.add_argument(
        "--user",
        dest="user_id",
        type=int,
        required=True,
        help="ID of the user the command acts for",
    )


def cmd_list(args, services):
    """List all users."""
    users = services.users.find_all()

    if not users:
        logger.info("No users found.")
        return

    logger.info("\nUsers:")
    logger.info("=" * 80)
    for user in users:
        logger.info(f"ID: {user.id}  Username: {user.username}")

    logger.info(f"\nTotal users: {len(users)}")


def cmd_create(args, services):
    """Create a user."""
    user = services.users.create(args.username.strip())
    logger.info(f"✓ User '{user.username}' created with ID: {user.id}")


def setup_parser(subparsers):
    """Setup users subcommand parser.

    Args:
        subparsers: The subparsers object from the main CLI
    """
    parser = subparsers.add_parser(
        "users",
        help="Manage users",
        description="Create and list the users that own ledger data",
    )

    users_subparsers = parser.add_subparsers(
        title="subcommands",
        description="Available user commands",
        dest="subcommand",
        required=True,
    )

    list_parser = users_subparsers.add_parser("list", help="List all users")
    list_parser.set_defaults(func=cmd_list)

    create_parser = users_subparsers.add_parser("create", help="Create a user")
    create_parser.add_argument("username", help="Unique username")
    create_parser.set_defaults(func=cmd_create)
