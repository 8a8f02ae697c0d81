from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from models.category import Category


@dataclass
class Transaction:
    id: int
    user_id: int
    description: str
    amount: float  # positive = expense
    date: datetime  # effective date, UTC
    category_id: int
    category: Category
    created_at: datetime
    updated_at: datetime
    deleted_at: Optional[datetime] = None

    def to_dict(self) -> dict:
        """Convert transaction to a JSON-serializable dictionary."""
        return {
            "id": self.id,
            "user_id": self.user_id,
            "description": self.description,
            "amount": self.amount,
            "date": self.date.isoformat(),
            "category_id": self.category_id,
            "category": self.category.to_dict(),
            "created_at": self.created_at.isoformat(),
            "updated_at": self.updated_at.isoformat(),
            "deleted_at": self.deleted_at.isoformat() if self.deleted_at else None,
        }


@dataclass
class MonthlySummary:
    """Sum of a user's transaction amounts for one calendar month."""

    year: int
    month: int
    total_expenses: float

    def to_dict(self) -> dict:
        return {"total_expenses": self.total_expenses}
