"""Fueling service for per-user vehicle refuel records."""

import math
from typing import Dict, List, Optional

from db import timestamps
from errors import ForbiddenError, NotFoundError, ValidationError
from logger import get_logger
from models.fueling import Fueling
from services.store import MAX_ID, StoreService

logger = get_logger()

_FUELING_SELECT_FIELDS = """id, user_id, cost, fuel_type, location, car_km, timestamp,
       created_at, updated_at, deleted_at"""


def _number(value, field: str) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValidationError(f"{field} must be a number")
    try:
        number = float(value)
    except OverflowError as e:
        raise ValidationError(f"{field} must be finite") from e
    if not math.isfinite(number):
        raise ValidationError(f"{field} must be finite")
    return number


def _text(value, field: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"{field} cannot be empty")
    return value.strip()


def _optional_text(value, field: str) -> Optional[str]:
    if value is None:
        return None
    if not isinstance(value, str):
        raise ValidationError(f"{field} must be text")
    return value.strip() or None


def _optional_number(value, field: str) -> Optional[float]:
    if value is None:
        return None
    return _number(value, field)


def _timestamp(value, field: str) -> str:
    try:
        return timestamps.to_db(timestamps.parse_timestamp(value))
    except ValueError as e:
        raise ValidationError(f"{field} is not a valid timestamp") from e


# Fields a caller may change, each mapped to its validator/converter
_UPDATABLE_FIELDS = {
    "cost": _number,
    "fuel_type": _text,
    "location": _optional_text,
    "car_km": _optional_number,
    "timestamp": _timestamp,
}


class FuelingService(StoreService):
    """Service for managing fueling records.

    Update and delete verify that the record belongs to the caller.
    """

    def create(
        self,
        user_id: int,
        cost: float,
        fuel_type: str,
        timestamp,
        location: Optional[str] = None,
        car_km: Optional[float] = None,
    ) -> Fueling:
        """Create a new fueling record.

        Args:
            user_id: Authenticated user ID.
            cost: Amount paid.
            fuel_type: Fuel description, e.g. "diesel".
            timestamp: When the refuel happened (datetime, date or ISO string).
            location: Optional place name.
            car_km: Optional odometer reading.

        Returns:
            The created Fueling record.

        Raises:
            ValidationError: If any field is malformed.
        """
        values = {
            "cost": _number(cost, "cost"),
            "fuel_type": _text(fuel_type, "fuel_type"),
            "location": _optional_text(location, "location"),
            "car_km": _optional_number(car_km, "car_km"),
            "timestamp": _timestamp(timestamp, "timestamp"),
        }
        now = timestamps.to_db(timestamps.utcnow())

        with self.connect() as conn:
            cursor = conn.execute(
                """
                INSERT INTO fuelings
                    (user_id, cost, fuel_type, location, car_km, timestamp,
                     created_at, updated_at)
                VALUES (?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    user_id,
                    values["cost"],
                    values["fuel_type"],
                    values["location"],
                    values["car_km"],
                    values["timestamp"],
                    now,
                    now,
                ),
            )
            conn.commit()
            fueling = self._fetch(conn, cursor.lastrowid)

        logger.info(f"User {user_id} created fueling record {fueling.id}")
        return fueling

    def find_by_user(self, user_id: int) -> List[Fueling]:
        """Get a user's fueling records, most recent first."""
        with self.connect() as conn:
            cursor = conn.execute(
                f"""
                SELECT {_FUELING_SELECT_FIELDS}
                FROM fuelings
                WHERE user_id = ? AND deleted_at IS NULL
                ORDER BY timestamp DESC, id DESC
                """,
                (user_id,),
            )
            rows = cursor.fetchall()

        return [self._row_to_fueling(row) for row in rows]

    def find(self, fueling_id: int) -> Optional[Fueling]:
        """Get a single live fueling record by ID, regardless of owner."""
        with self.connect() as conn:
            return self._fetch(conn, fueling_id)

    def update(self, user_id: int, fueling_id: int, changes: Dict) -> Fueling:
        """Update selected fields of one of the user's fueling records.

        Args:
            user_id: Authenticated user ID.
            fueling_id: The record to update.
            changes: Field name to new value. Supported fields:
                'cost', 'fuel_type', 'location', 'car_km', 'timestamp'

        Returns:
            The updated Fueling record.

        Raises:
            ValidationError: If changes is empty, names an unsupported field,
                or holds a malformed value.
            NotFoundError: If the record does not exist.
            ForbiddenError: If it belongs to another user.
        """
        if not changes:
            raise ValidationError("No fields to update")

        invalid_fields = set(changes) - set(_UPDATABLE_FIELDS)
        if invalid_fields:
            raise ValidationError(
                f"Unsupported field names: {', '.join(sorted(invalid_fields))}"
            )

        values = {
            field: _UPDATABLE_FIELDS[field](value, field)
            for field, value in changes.items()
        }
        self._owned(user_id, fueling_id)

        # Column names come from the allow-list above, never from the caller
        set_clause = ", ".join(f"{field} = ?" for field in values)
        params = list(values.values())
        params.extend([timestamps.to_db(timestamps.utcnow()), fueling_id, user_id])

        with self.connect() as conn:
            cursor = conn.execute(
                f"""
                UPDATE fuelings
                SET {set_clause}, updated_at = ?
                WHERE id = ? AND user_id = ? AND deleted_at IS NULL
                """,
                params,
            )
            conn.commit()
            if cursor.rowcount == 0:
                raise NotFoundError("Fueling record not found")
            fueling = self._fetch(conn, fueling_id)

        logger.info(
            f"User {user_id} updated fueling record {fueling_id} "
            f"({', '.join(sorted(values))})"
        )
        return fueling

    def delete(self, user_id: int, fueling_id: int) -> None:
        """Soft-delete one of the user's fueling records.

        Raises:
            ValidationError: If fueling_id is not a storable ID.
            NotFoundError: If the record does not exist.
            ForbiddenError: If it belongs to another user.
        """
        self._owned(user_id, fueling_id)
        now = timestamps.to_db(timestamps.utcnow())

        with self.connect() as conn:
            cursor = conn.execute(
                """
                UPDATE fuelings
                SET deleted_at = ?, updated_at = ?
                WHERE id = ? AND user_id = ? AND deleted_at IS NULL
                """,
                (now, now, fueling_id, user_id),
            )
            conn.commit()
            if cursor.rowcount == 0:
                raise NotFoundError("Fueling record not found")

        logger.info(f"User {user_id} deleted fueling record {fueling_id}")

    def _owned(self, user_id: int, fueling_id: int) -> Fueling:
        if (
            isinstance(fueling_id, bool)
            or not isinstance(fueling_id, int)
            or not 0 < fueling_id <= MAX_ID
        ):
            raise ValidationError(f"fueling_id must be between 1 and {MAX_ID}")
        fueling = self.find(fueling_id)
        if fueling is None:
            raise NotFoundError("Fueling record not found")
        if fueling.user_id != user_id:
            logger.warning(
                f"User {user_id} tried to modify fueling record {fueling_id} "
                f"owned by another user"
            )
            raise ForbiddenError("Fueling record belongs to another user")
        return fueling

    def _fetch(self, conn, fueling_id: int) -> Optional[Fueling]:
        cursor = conn.execute(
            f"""
            SELECT {_FUELING_SELECT_FIELDS}
            FROM fuelings
            WHERE id = ? AND deleted_at IS NULL
            """,
            (fueling_id,),
        )
        row = cursor.fetchone()
        if row:
            return self._row_to_fueling(row)
        return None

    def _row_to_fueling(self, row: tuple) -> Fueling:
        """Convert a database row to a Fueling object."""
        return Fueling(
            id=row[0],
            user_id=row[1],
            cost=float(row[2]),
            fuel_type=row[3],
            location=row[4],
            car_km=float(row[5]) if row[5] is not None else None,
            timestamp=timestamps.from_db(row[6]),
            created_at=timestamps.from_db(row[7]),
            updated_at=timestamps.from_db(row[8]),
            deleted_at=timestamps.from_db(row[9]),
        )
