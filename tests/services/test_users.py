import pytest

from errors import ConflictError


class TestUserService:
    """Tests for UserService."""

    def test_create_user(self, services):
        user = services.users.create("carol")

        assert user.id > 0
        assert user.username == "carol"

    def test_duplicate_username_conflicts(self, services):
        services.users.create("carol")

        with pytest.raises(ConflictError, match="username already exists"):
            services.users.create("carol")

    def test_find_and_find_by_username(self, services):
        created = services.users.create("dave")

        assert services.users.find(created.id).username == "dave"
        assert services.users.find_by_username("dave").id == created.id
        assert services.users.find(9999) is None
        assert services.users.find_by_username("nobody") is None

    def test_find_all(self, services, alice, bob):
        assert [u.username for u in services.users.find_all()] == ["alice", "bob"]
