from dataclasses import dataclass
from datetime import datetime


@dataclass
class User:
    id: int
    username: str
    created_at: datetime

    def to_dict(self) -> dict:
        """Convert user to a JSON-serializable dictionary."""
        return {
            "id": self.id,
            "username": self.username,
            "created_at": self.created_at.isoformat(),
        }
