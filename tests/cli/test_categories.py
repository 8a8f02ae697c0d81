import argparse
import logging

import pytest

from cli import categories as categories_cli
from errors import ConflictError


class TestCategoryCommands:
    """Tests for the categories command handlers."""

    def test_create_and_list(self, services, alice, caplog):
        caplog.set_level(logging.INFO, logger="tally")

        categories_cli.cmd_create(
            argparse.Namespace(user_id=alice.id, name="Groceries"), services
        )
        categories_cli.cmd_list(argparse.Namespace(user_id=alice.id), services)

        assert "Category created successfully" in caplog.text
        assert "Name: Groceries" in caplog.text
        assert "Total categories: 1" in caplog.text

    def test_list_is_per_user(self, services, alice, bob, caplog):
        services.ledger.create_category(alice.id, "Groceries")
        caplog.set_level(logging.INFO, logger="tally")

        categories_cli.cmd_list(argparse.Namespace(user_id=bob.id), services)

        assert "No categories found." in caplog.text
        assert "Groceries" not in caplog.text

    def test_duplicate_create_raises_conflict(self, services, alice):
        services.ledger.create_category(alice.id, "Groceries")

        with pytest.raises(ConflictError):
            categories_cli.cmd_create(
                argparse.Namespace(user_id=alice.id, name="Groceries"), services
            )

    def test_delete_with_yes_skips_prompt(self, services, alice, monkeypatch):
        category = services.ledger.create_category(alice.id, "Groceries")
        monkeypatch.setattr("builtins.input", pytest.fail)

        categories_cli.cmd_delete(
            argparse.Namespace(user_id=alice.id, category_id=category.id, yes=True),
            services,
        )

        assert services.ledger.list_categories(alice.id) == []

    def test_delete_cancelled_at_prompt(self, services, alice, monkeypatch, caplog):
        category = services.ledger.create_category(alice.id, "Groceries")
        monkeypatch.setattr("builtins.input", lambda prompt: "no")
        caplog.set_level(logging.INFO, logger="tally")

        categories_cli.cmd_delete(
            argparse.Namespace(user_id=alice.id, category_id=category.id, yes=False),
            services,
        )

        assert "Deletion cancelled." in caplog.text
        assert len(services.ledger.list_categories(alice.id)) == 1

    def test_parser_requires_user(self):
        parser = argparse.ArgumentParser()
        subparsers = parser.add_subparsers(dest="command", required=True)
        categories_cli.setup_parser(subparsers)

        with pytest.raises(SystemExit):
            parser.parse_args(["categories", "list"])
