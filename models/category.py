"""Category model for grouping a user's transactions."""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass
class Category:
    """Represents a user-owned transaction category.

    Attributes:
        id: Unique identifier (auto-generated).
        user_id: ID of the owning user.
        name: Category name, unique among the user's live categories.
        created_at: When the category was created.
        updated_at: When the category was last modified.
        deleted_at: When the category was soft-deleted, None while live.
    """

    id: int
    user_id: int
    name: str
    created_at: datetime
    updated_at: datetime
    deleted_at: Optional[datetime] = None

    def to_dict(self) -> dict:
        """Convert category to a JSON-serializable dictionary."""
        return {
            "id": self.id,
            "user_id": self.user_id,
            "name": self.name,
            "created_at": self.created_at.isoformat(),
            "updated_at": self.updated_at.isoformat(),
            "deleted_at": self.deleted_at.isoformat() if self.deleted_at else None,
        }
