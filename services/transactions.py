"""Transaction store for database operations."""

from datetime import datetime
from typing import List, Optional

from db import timestamps
from models.transaction import Transaction
from services.categories import row_to_category
from services.store import StoreService

# Transaction columns followed by the joined category's columns
_TRANSACTION_SELECT = """
    SELECT t.id, t.user_id, t.description, t.amount, t.date, t.category_id,
           t.created_at, t.updated_at, t.deleted_at,
           c.id, c.user_id, c.name, c.created_at, c.updated_at, c.deleted_at
    FROM transactions t
    JOIN categories c ON c.id = t.category_id
"""


class TransactionStore(StoreService):
    """Persistence for transactions. Reads never return soft-deleted rows."""

    def create(
        self,
        user_id: int,
        description: str,
        amount: float,
        date: datetime,
        category_id: int,
    ) -> Optional[Transaction]:
        """Create a transaction and read it back with its category.

        The insert only happens if the category is live and owned by
        ``user_id``; that condition is part of the INSERT statement itself.

        Args:
            user_id: ID of the owning user.
            description: Free-text description.
            amount: Signed amount.
            date: Effective date (aware or UTC-naive datetime).
            category_id: ID of a category owned by ``user_id``.

        Returns:
            The created Transaction with its category populated, or None if
            the category is missing, deleted or owned by someone else.
        """
        now = timestamps.to_db(timestamps.utcnow())
        with self.connect() as conn:
            cursor = conn.execute(
                """
                INSERT INTO transactions
                    (user_id, description, amount, date, category_id, created_at, updated_at)
                SELECT ?, ?, ?, ?, id, ?, ?
                FROM categories
                WHERE id = ? AND user_id = ? AND deleted_at IS NULL
                """,
                (
                    user_id,
                    description,
                    float(amount),
                    timestamps.to_db(date),
                    now,
                    now,
                    category_id,
                    user_id,
                ),
            )
            conn.commit()

            if cursor.rowcount == 0:
                return None

            # Read back on the same connection so the write is visible
            cursor = conn.execute(
                f"{_TRANSACTION_SELECT} WHERE t.id = ?", (cursor.lastrowid,)
            )
            return self._row_to_transaction(cursor.fetchone())

    def find(self, transaction_id: int) -> Optional[Transaction]:
        """Get a single live transaction by ID.

        Args:
            transaction_id: The transaction ID to find.

        Returns:
            Transaction object if found, None otherwise.
        """
        with self.connect() as conn:
            cursor = conn.execute(
                f"{_TRANSACTION_SELECT} WHERE t.id = ? AND t.deleted_at IS NULL",
                (transaction_id,),
            )
            row = cursor.fetchone()

        if row:
            return self._row_to_transaction(row)
        return None

    def find_by_user(self, user_id: int) -> List[Transaction]:
        """Get all live transactions owned by a user.

        Args:
            user_id: The owning user's ID.

        Returns:
            List of Transaction objects ordered by date (newest first).
        """
        with self.connect() as conn:
            cursor = conn.execute(
                f"""
                {_TRANSACTION_SELECT}
                WHERE t.user_id = ? AND t.deleted_at IS NULL
                ORDER BY t.date DESC, t.id DESC
                """,
                (user_id,),
            )
            rows = cursor.fetchall()

        return [self._row_to_transaction(row) for row in rows]

    def sum_amount(self, user_id: int, start: datetime, end: datetime) -> float:
        """Sum a user's live transaction amounts dated in [start, end).

        Args:
            user_id: The owning user's ID.
            start: Inclusive lower bound.
            end: Exclusive upper bound.

        Returns:
            The total, 0.0 if no transactions match.
        """
        with self.connect() as conn:
            cursor = conn.execute(
                """
                SELECT COALESCE(SUM(amount), 0.0)
                FROM transactions
                WHERE user_id = ?
                  AND deleted_at IS NULL
                  AND date >= ?
                  AND date < ?
                """,
                (user_id, timestamps.to_db(start), timestamps.to_db(end)),
            )
            (total,) = cursor.fetchone()

        return float(total)

    def soft_delete(self, transaction_id: int) -> bool:
        """Mark a transaction as deleted.

        Args:
            transaction_id: The transaction ID to delete.

        Returns:
            True if the transaction was deleted, False if not found.
        """
        now = timestamps.to_db(timestamps.utcnow())
        with self.connect() as conn:
            cursor = conn.execute(
                """
                UPDATE transactions
                SET deleted_at = ?, updated_at = ?
                WHERE id = ? AND deleted_at IS NULL
                """,
                (now, now, transaction_id),
            )
            conn.commit()
            return cursor.rowcount > 0

    def _row_to_transaction(self, row: tuple) -> Transaction:
        """Convert a joined database row to a Transaction object."""
        return Transaction(
            id=row[0],
            user_id=row[1],
            description=row[2],
            amount=float(row[3]),
            date=timestamps.from_db(row[4]),
            category_id=row[5],
            created_at=timestamps.from_db(row[6]),
            updated_at=timestamps.from_db(row[7]),
            deleted_at=timestamps.from_db(row[8]),
            category=row_to_category(row[9:]),
        )
