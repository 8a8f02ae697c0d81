"""User service: the registry of principals that ledger rows point at."""

from typing import List, Optional

from db import timestamps
from models.user import User
from services.store import StoreService


class UserService(StoreService):
    """Service for managing users.

    Authentication lives outside this project; users only exist here so
    that ledger rows have an owner to reference.
    """

    conflict_message = "A user with this username already exists"

    def create(self, username: str) -> User:
        """Create a new user.

        Args:
            username: Unique login name.

        Returns:
            The created User object with id populated.

        Raises:
            ConflictError: If the username is taken.
        """
        now = timestamps.utcnow()
        with self.connect() as conn:
            cursor = conn.execute(
                "INSERT INTO users (username, created_at) VALUES (?, ?)",
                (username, timestamps.to_db(now)),
            )
            conn.commit()
            user_id = cursor.lastrowid

        return User(id=user_id, username=username, created_at=now)

    def find_all(self) -> List[User]:
        with self.connect() as conn:
            cursor = conn.execute(
                "SELECT id, username, created_at FROM users ORDER BY id"
            )
            rows = cursor.fetchall()

        return [self._row_to_user(row) for row in rows]

    def find(self, user_id: int) -> Optional[User]:
        with self.connect() as conn:
            cursor = conn.execute(
                "SELECT id, username, created_at FROM users WHERE id = ?",
                (user_id,),
            )
            row = cursor.fetchone()

        if row:
            return self._row_to_user(row)
        return None

    def find_by_username(self, username: str) -> Optional[User]:
        with self.connect() as conn:
            cursor = conn.execute(
                "SELECT id, username, created_at FROM users WHERE username = ?",
                (username,),
            )
            row = cursor.fetchone()

        if row:
            return self._row_to_user(row)
        return None

    def _row_to_user(self, row: tuple) -> User:
        return User(
            id=row[0], username=row[1], created_at=timestamps.from_db(row[2])
        )
