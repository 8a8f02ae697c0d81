"""Category store for database operations."""

from typing import List, Optional

from db import timestamps
from errors import ConflictError
from models.category import Category
from services.store import StoreService

_CATEGORY_SELECT_FIELDS = "id, user_id, name, created_at, updated_at, deleted_at"


class CategoryStore(StoreService):
    """Persistence for categories. Reads never return soft-deleted rows."""

    conflict_message = "A category with this name already exists"

    def create(self, user_id: int, name: str) -> Category:
        """Create a new category.

        Args:
            user_id: ID of the owning user.
            name: Category name, unique per user.

        Returns:
            The created Category object with id and timestamps populated.

        Raises:
            ConflictError: If the user already has a live category with this name.
            StorageError: If the insert fails for any other reason.
        """
        now = timestamps.utcnow()
        with self.connect() as conn:
            cursor = conn.execute(
                """
                INSERT INTO categories (user_id, name, created_at, updated_at)
                VALUES (?, ?, ?, ?)
                """,
                (user_id, name, timestamps.to_db(now), timestamps.to_db(now)),
            )
            conn.commit()
            category_id = cursor.lastrowid

        return Category(
            id=category_id,
            user_id=user_id,
            name=name,
            created_at=now,
            updated_at=now,
        )

    def find(self, category_id: int) -> Optional[Category]:
        """Get a single live category by ID.

        Args:
            category_id: The category ID to find.

        Returns:
            Category object if found, None otherwise.
        """
        with self.connect() as conn:
            cursor = conn.execute(
                f"""
                SELECT {_CATEGORY_SELECT_FIELDS}
                FROM categories
                WHERE id = ? AND deleted_at IS NULL
                """,
                (category_id,),
            )
            row = cursor.fetchone()

        if row:
            return row_to_category(row)
        return None

    def find_by_user(self, user_id: int) -> List[Category]:
        """Get all live categories owned by a user.

        Args:
            user_id: The owning user's ID.

        Returns:
            List of Category objects in creation order.
        """
        with self.connect() as conn:
            cursor = conn.execute(
                f"""
                SELECT {_CATEGORY_SELECT_FIELDS}
                FROM categories
                WHERE user_id = ? AND deleted_at IS NULL
                ORDER BY id
                """,
                (user_id,),
            )
            rows = cursor.fetchall()

        return [row_to_category(row) for row in rows]

    def soft_delete(self, category_id: int) -> bool:
        """Mark a category as deleted.

        The check for referencing transactions and the update run as one
        statement, so a concurrent insert cannot slip in between.

        Args:
            category_id: The category ID to delete.

        Returns:
            True if the category was deleted, False if not found.

        Raises:
            ConflictError: If live transactions still reference the category.
        """
        now = timestamps.to_db(timestamps.utcnow())
        with self.connect() as conn:
            cursor = conn.execute(
                """
                UPDATE categories
                SET deleted_at = ?, updated_at = ?
                WHERE id = ?
                  AND deleted_at IS NULL
                  AND NOT EXISTS (
                      SELECT 1 FROM transactions
                      WHERE category_id = ? AND deleted_at IS NULL
                  )
                """,
                (now, now, category_id, category_id),
            )
            conn.commit()
            if cursor.rowcount > 0:
                return True

            cursor = conn.execute(
                "SELECT 1 FROM categories WHERE id = ? AND deleted_at IS NULL",
                (category_id,),
            )
            if cursor.fetchone():
                raise ConflictError("Category is still used by transactions")
            return False


def row_to_category(row: tuple) -> Category:
    """Convert a database row to a Category object.

    Args:
        row: Row laid out as ``_CATEGORY_SELECT_FIELDS``.

    Returns:
        Category object.
    """
    return Category(
        id=row[0],
        user_id=row[1],
        name=row[2],
        created_at=timestamps.from_db(row[3]),
        updated_at=timestamps.from_db(row[4]),
        deleted_at=timestamps.from_db(row[5]),
    )
