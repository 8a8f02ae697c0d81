import argparse
import logging

import pytest

from cli import users as users_cli
from errors import ConflictError


class TestUserCommands:
    """Tests for the users command handlers."""

    def test_create_strips_username(self, services, caplog):
        caplog.set_level(logging.INFO, logger="tally")

        users_cli.cmd_create(argparse.Namespace(username="  carol "), services)

        assert services.users.find_by_username("carol") is not None
        assert "User 'carol' created" in caplog.text

    def test_duplicate_username_conflicts(self, services, alice):
        with pytest.raises(ConflictError):
            users_cli.cmd_create(argparse.Namespace(username="alice"), services)

    def test_list(self, services, alice, bob, caplog):
        caplog.set_level(logging.INFO, logger="tally")

        users_cli.cmd_list(argparse.Namespace(), services)

        assert "Username: alice" in caplog.text
        assert "Username: bob" in caplog.text
        assert "Total users: 2" in caplog.text

    def test_user_argument_is_an_int(self):
        parser = argparse.ArgumentParser()
        users_cli.add_user_argument(parser)

        assert parser.parse_args(["--user", "12"]).user_id == 12
        with pytest.raises(SystemExit):
            parser.parse_args(["--user", "twelve"])
