"""Fueling model for vehicle refuel records."""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass
class Fueling:
    """A single vehicle refuel.

    Attributes:
        id: Unique identifier (auto-generated).
        user_id: ID of the owning user.
        cost: Amount paid.
        fuel_type: Free text, e.g. "gasoline" or "diesel".
        location: Optional station or place name.
        car_km: Optional odometer reading.
        timestamp: When the refuel happened, UTC.
    """

    id: int
    user_id: int
    cost: float
    fuel_type: str
    location: Optional[str]
    car_km: Optional[float]
    timestamp: datetime
    created_at: datetime
    updated_at: datetime
    deleted_at: Optional[datetime] = None

    def to_dict(self) -> dict:
        """Convert fueling record to a JSON-serializable dictionary."""
        return {
            "id": self.id,
            "user_id": self.user_id,
            "cost": self.cost,
            "fuel_type": self.fuel_type,
            "location": self.location,
            "car_km": self.car_km,
            "timestamp": self.timestamp.isoformat(),
            "created_at": self.created_at.isoformat(),
            "updated_at": self.updated_at.isoformat(),
            "deleted_at": self.deleted_at.isoformat() if self.deleted_at else None,
        }
