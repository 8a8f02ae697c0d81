from datetime import datetime, timezone

import pytest

from errors import ForbiddenError, NotFoundError, ValidationError


def _utc(*args):
    return datetime(*args, tzinfo=timezone.utc)


class TestFuelingService:
    """Tests for FuelingService."""

    @pytest.fixture
    def fill_up(self, services, alice):
        return services.fuelings.create(
            alice.id,
            cost=75.40,
            fuel_type="diesel",
            timestamp=_utc(2024, 3, 10, 8, 15),
            location="Shell A1",
            car_km=120345.5,
        )

    def test_create_fueling(self, fill_up, alice):
        assert fill_up.id > 0
        assert fill_up.user_id == alice.id
        assert fill_up.cost == 75.40
        assert fill_up.fuel_type == "diesel"
        assert fill_up.location == "Shell A1"
        assert fill_up.car_km == 120345.5
        assert fill_up.timestamp == _utc(2024, 3, 10, 8, 15)
        assert fill_up.deleted_at is None

    def test_create_without_optional_fields(self, services, alice):
        fueling = services.fuelings.create(
            alice.id, cost=40, fuel_type="gasoline", timestamp="2024-03-11T09:00:00"
        )

        assert fueling.location is None
        assert fueling.car_km is None
        assert fueling.cost == 40.0

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"cost": "40"},
            {"cost": float("nan")},
            {"cost": 10**400},
            {"car_km": -(10**400)},
            {"fuel_type": ""},
            {"timestamp": "yesterday"},
            {"car_km": "far"},
            {"location": 12},
        ],
    )
    def test_create_rejects_bad_fields(self, services, alice, kwargs):
        values = {"cost": 40.0, "fuel_type": "gasoline", "timestamp": _utc(2024, 3, 1)}
        values.update(kwargs)

        with pytest.raises(ValidationError):
            services.fuelings.create(alice.id, **values)

    def test_find_by_user_newest_first(self, services, alice, bob):
        for day in (5, 20, 12):
            services.fuelings.create(
                alice.id, cost=float(day), fuel_type="gasoline", timestamp=_utc(2024, 3, day)
            )
        services.fuelings.create(
            bob.id, cost=1.0, fuel_type="gasoline", timestamp=_utc(2024, 3, 1)
        )

        fuelings = services.fuelings.find_by_user(alice.id)

        assert [f.timestamp.day for f in fuelings] == [20, 12, 5]
        assert {f.user_id for f in fuelings} == {alice.id}

    def test_update_allowed_fields(self, services, alice, fill_up):
        updated = services.fuelings.update(
            alice.id, fill_up.id, {"cost": 80.0, "location": "BP Central"}
        )

        assert updated.cost == 80.0
        assert updated.location == "BP Central"
        assert updated.fuel_type == "diesel"
        assert updated.updated_at >= fill_up.updated_at

        found = services.fuelings.find(fill_up.id)
        assert found.cost == 80.0
        assert found.location == "BP Central"

    def test_update_can_clear_optional_field(self, services, alice, fill_up):
        updated = services.fuelings.update(alice.id, fill_up.id, {"car_km": None})

        assert updated.car_km is None

    @pytest.mark.parametrize("field", ["user_id", "id", "deleted_at", "cost = 0, user_id"])
    def test_update_rejects_fields_outside_allow_list(
        self, services, alice, fill_up, field
    ):
        with pytest.raises(ValidationError, match="Unsupported field names"):
            services.fuelings.update(alice.id, fill_up.id, {field: 2})

        assert services.fuelings.find(fill_up.id).user_id == alice.id

    def test_update_rejects_empty_changes(self, services, alice, fill_up):
        with pytest.raises(ValidationError):
            services.fuelings.update(alice.id, fill_up.id, {})

    def test_update_rejects_bad_value(self, services, alice, fill_up):
        with pytest.raises(ValidationError):
            services.fuelings.update(alice.id, fill_up.id, {"cost": "cheap"})

        assert services.fuelings.find(fill_up.id).cost == 75.40

    def test_update_other_users_record_forbidden(self, services, bob, fill_up):
        with pytest.raises(ForbiddenError):
            services.fuelings.update(bob.id, fill_up.id, {"cost": 1.0})

        assert services.fuelings.find(fill_up.id).cost == 75.40

    def test_update_missing_record(self, services, alice):
        with pytest.raises(NotFoundError):
            services.fuelings.update(alice.id, 9999, {"cost": 1.0})

    @pytest.mark.parametrize("fueling_id", [2**63, 0, "1", True])
    def test_unstorable_id_rejected(self, services, alice, fueling_id):
        with pytest.raises(ValidationError):
            services.fuelings.update(alice.id, fueling_id, {"cost": 1.0})
        with pytest.raises(ValidationError):
            services.fuelings.delete(alice.id, fueling_id)

    def test_delete_fueling(self, services, alice, fill_up):
        services.fuelings.delete(alice.id, fill_up.id)

        assert services.fuelings.find(fill_up.id) is None
        assert services.fuelings.find_by_user(alice.id) == []

    def test_delete_other_users_record_forbidden(self, services, alice, bob, fill_up):
        with pytest.raises(ForbiddenError):
            services.fuelings.delete(bob.id, fill_up.id)

        assert len(services.fuelings.find_by_user(alice.id)) == 1

    def test_delete_twice_not_found(self, services, alice, fill_up):
        services.fuelings.delete(alice.id, fill_up.id)

        with pytest.raises(NotFoundError):
            services.fuelings.delete(alice.id, fill_up.id)

    def test_update_deleted_record_not_found(self, services, alice, fill_up):
        services.fuelings.delete(alice.id, fill_up.id)

        with pytest.raises(NotFoundError):
            services.fuelings.update(alice.id, fill_up.id, {"cost": 1.0})

    def test_to_dict(self, fill_up):
        data = fill_up.to_dict()

        assert data["fuel_type"] == "diesel"
        assert data["timestamp"] == "2024-03-10T08:15:00+00:00"
        assert data["deleted_at"] is None
