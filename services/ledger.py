"""Ledger service: the per-user operations on categories and transactions.

Every operation takes the authenticated user's ID as its first argument and
only ever reads or writes that user's rows. Input is validated here; the
stores below enforce the integrity rules atomically in the database.
"""

import math
from datetime import datetime, timezone
from typing import List

from dateutil.relativedelta import relativedelta

from db.timestamps import parse_timestamp
from errors import ForbiddenError, NotFoundError, ValidationError
from logger import get_logger
from models.category import Category
from models.transaction import MonthlySummary, Transaction
from services.store import MAX_ID

logger = get_logger()


class LedgerService:
    """Operations on a user's ledger.

    Holds no mutable state, so one instance can serve concurrent callers.

    Args:
        categories: CategoryStore instance.
        transactions: TransactionStore instance.
    """

    def __init__(self, categories, transactions):
        self.categories = categories
        self.transactions = transactions

    # --- Categories ---

    def create_category(self, user_id: int, name: str) -> Category:
        """Create a category for a user.

        Args:
            user_id: Authenticated user ID.
            name: Category name; surrounding whitespace is stripped.

        Returns:
            The created Category.

        Raises:
            ValidationError: If the name is empty.
            ConflictError: If the user already has a category with this name.
        """
        if not isinstance(name, str) or not name.strip():
            raise ValidationError("Category name cannot be empty")

        category = self.categories.create(user_id, name.strip())
        logger.info(f"User {user_id} created category {category.id}")
        return category

    def list_categories(self, user_id: int) -> List[Category]:
        """Get a user's categories in creation order."""
        return self.categories.find_by_user(user_id)

    def delete_category(self, user_id: int, category_id: int) -> None:
        """Soft-delete one of the user's categories.

        Raises:
            NotFoundError: If the category does not exist.
            ForbiddenError: If it belongs to another user.
            ConflictError: If live transactions still reference it.
        """
        self._owned_category(user_id, category_id)
        if not self.categories.soft_delete(category_id):
            raise NotFoundError("Category not found")
        logger.info(f"User {user_id} deleted category {category_id}")

    # --- Transactions ---

    def create_transaction(
        self,
        user_id: int,
        description: str,
        amount: float,
        date,
        category_id: int,
    ) -> Transaction:
        """Record a transaction against one of the user's categories.

        Args:
            user_id: Authenticated user ID.
            description: Non-empty description.
            amount: Finite number; positive amounts are expenses.
            date: Effective date as a datetime, date or ISO-8601 string.
                Naive values are taken as UTC.
            category_id: ID of a category owned by the user.

        Returns:
            The created Transaction with its category populated.

        Raises:
            ValidationError: If any field is missing or malformed.
            NotFoundError: If the category does not exist.
            ForbiddenError: If the category belongs to another user.
        """
        if not isinstance(description, str) or not description.strip():
            raise ValidationError("Transaction description cannot be empty")
        amount = _validate_amount(amount)
        try:
            effective_date = parse_timestamp(date)
        except ValueError as e:
            raise ValidationError("Transaction date is not a valid timestamp") from e
        _validate_id(category_id, "category_id")

        self._owned_category(user_id, category_id)

        transaction = self.transactions.create(
            user_id, description, amount, effective_date, category_id
        )
        if transaction is None:
            # Category was deleted between the ownership check and the insert
            raise NotFoundError("Category not found")

        logger.info(f"User {user_id} created transaction {transaction.id}")
        return transaction

    def list_transactions(self, user_id: int) -> List[Transaction]:
        """Get a user's transactions, most recent effective date first."""
        return self.transactions.find_by_user(user_id)

    def delete_transaction(self, user_id: int, transaction_id: int) -> None:
        """Soft-delete one of the user's transactions.

        Raises:
            NotFoundError: If the transaction does not exist.
            ForbiddenError: If it belongs to another user.
        """
        _validate_id(transaction_id, "transaction_id")
        transaction = self.transactions.find(transaction_id)
        if transaction is None:
            raise NotFoundError("Transaction not found")
        if transaction.user_id != user_id:
            logger.warning(
                f"User {user_id} tried to delete transaction {transaction_id} "
                f"owned by another user"
            )
            raise ForbiddenError("Transaction belongs to another user")

        if not self.transactions.soft_delete(transaction_id):
            raise NotFoundError("Transaction not found")
        logger.info(f"User {user_id} deleted transaction {transaction_id}")

    # --- Aggregation ---

    def get_monthly_summary(self, user_id: int, year: int, month: int) -> float:
        """Sum the user's transaction amounts for a calendar month (UTC).

        The window is [first instant of the month, first instant of the next
        month). Every amount counts as given, regardless of sign.

        Returns:
            The total, 0.0 if the month has no transactions.

        Raises:
            ValidationError: If the month, or the one after it, cannot be
                represented as a datetime (month outside 1-12, year outside
                1-9999, or December 9999).
        """
        try:
            start = datetime(year, month, 1, tzinfo=timezone.utc)
            end = start + relativedelta(months=1)
        except ValueError as e:
            raise ValidationError(f"{year}/{month} is not a supported month") from e
        return self.transactions.sum_amount(user_id, start, end)

    def monthly_summary(self, user_id: int, year: int, month: int) -> MonthlySummary:
        """Same as get_monthly_summary, wrapped for serialization."""
        return MonthlySummary(
            year=year,
            month=month,
            total_expenses=self.get_monthly_summary(user_id, year, month),
        )

    def _owned_category(self, user_id: int, category_id: int) -> Category:
        """Fetch a category and verify the user owns it."""
        _validate_id(category_id, "category_id")
        category = self.categories.find(category_id)
        if category is None:
            raise NotFoundError("Category not found")
        if category.user_id != user_id:
            logger.warning(
                f"User {user_id} referenced category {category_id} "
                f"owned by another user"
            )
            raise ForbiddenError("Category belongs to another user")
        return category


def _validate_amount(amount) -> float:
    # bool is an int subclass but never a valid amount
    if isinstance(amount, bool) or not isinstance(amount, (int, float)):
        raise ValidationError("Transaction amount must be a number")
    try:
        value = float(amount)
    except OverflowError as e:
        raise ValidationError("Transaction amount must be finite") from e
    if not math.isfinite(value):
        raise ValidationError("Transaction amount must be finite")
    return value


def _validate_id(value, field: str) -> None:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError(f"{field} must be a positive integer")
    if not 0 < value <= MAX_ID:
        raise ValidationError(f"{field} must be between 1 and {MAX_ID}")
