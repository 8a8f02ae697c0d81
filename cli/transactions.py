#!/usr/bin/env python3

import sys

from cli.users import add_user_argument
from logger import get_logger

logger = get_logger()


def cmd_list(args, services):
    """List the user's transactions, newest first."""
    transactions = services.ledger.list_transactions(args.user_id)

    if not transactions:
        logger.info("No transactions found.")
        return

    logger.info("\nTransactions:")
    logger.info("=" * 80)
    for t in transactions:
        logger.info(
            f"{t.id:>6}  {t.date.date().isoformat()}  {t.amount:>12.2f}  "
            f"{t.category.name:<20}  {t.description[:30]}"
        )

    logger.info(f"\nTotal transactions: {len(transactions)}")


def cmd_create(args, services):
    """Record a transaction."""
    transaction = services.ledger.create_transaction(
        args.user_id,
        args.description,
        args.amount,
        args.date,
        args.category_id,
    )

    logger.info(f"\n✓ Transaction created successfully with ID: {transaction.id}")
    logger.info(f"  Description: {transaction.description}")
    logger.info(f"  Amount: {transaction.amount:.2f}")
    logger.info(f"  Date: {transaction.date.isoformat()}")
    logger.info(f"  Category: {transaction.category.name}")


def cmd_delete(args, services):
    """Delete a transaction by ID."""
    services.ledger.delete_transaction(args.user_id, args.transaction_id)
    logger.info(f"✓ Transaction {args.transaction_id} deleted successfully.")


def cmd_summary(args, services):
    """Show the total of a user's transactions for one month."""
    try:
        year, month = args.month.split("/")
        year = int(year)
        month = int(month)
    except ValueError:
        logger.error("Invalid month format. Use YYYY/MM.")
        sys.exit(1)

    # December 9999 has no following month to close the window
    if year < 1 or year > 9999 or (year == 9999 and month == 12):
        logger.error("Year must be between 1 and 9999, before 9999/12")
        sys.exit(1)

    if month < 1 or month > 12:
        logger.error("Month must be between 1 and 12")
        sys.exit(1)

    summary = services.ledger.monthly_summary(args.user_id, year, month)
    logger.info(f"Total expenses for {year}/{month:02d}: {summary.total_expenses:.2f}")


def setup_parser(subparsers):
    """Setup transactions and summary subcommand parsers.

    Args:
        subparsers: The subparsers object from the main CLI
    """
    parser = subparsers.add_parser(
        "transactions",
        help="Record and manage transactions",
        description="Create, list, and delete a user's transactions",
    )

    transactions_subparsers = parser.add_subparsers(
        title="subcommands",
        description="Available transaction commands",
        dest="subcommand",
        required=True,
    )

    # transactions list
    list_parser = transactions_subparsers.add_parser(
        "list", help="List the user's transactions"
    )
    add_user_argument(list_parser)
    list_parser.set_defaults(func=cmd_list)

    # transactions create
    create_parser = transactions_subparsers.add_parser(
        "create", help="Record a transaction"
    )
    add_user_argument(create_parser)
    create_parser.add_argument("--description", required=True)
    create_parser.add_argument(
        "--amount", type=float, required=True, help="Positive for expenses"
    )
    create_parser.add_argument(
        "--date",
        required=True,
        help="Effective date, ISO-8601 (e.g. 2024-03-15 or 2024-03-15T12:30:00+00:00)",
    )
    create_parser.add_argument(
        "--category", dest="category_id", type=int, required=True, help="Category ID"
    )
    create_parser.set_defaults(func=cmd_create)

    # transactions delete
    delete_parser = transactions_subparsers.add_parser(
        "delete", help="Delete a transaction by ID"
    )
    add_user_argument(delete_parser)
    delete_parser.add_argument("transaction_id", type=int)
    delete_parser.set_defaults(func=cmd_delete)

    # summary
    summary_parser = subparsers.add_parser(
        "summary",
        help="Monthly total",
        description="Sum a user's transaction amounts for a calendar month (UTC)",
    )
    add_user_argument(summary_parser)
    summary_parser.add_argument("--month", required=True, help="Month as YYYY/MM")
    summary_parser.set_defaults(func=cmd_summary)
