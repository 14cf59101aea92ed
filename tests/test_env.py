"""Tests for the environment variable store.

Environment variables are key-value string pairs that configure the
session; the REPL reads its prompt from ``PS1``.
"""

import pytest

from virtual_fs.env import DEFAULT_PROMPT, Environment, default_environment


class TestEnvironment:
    """Verify the Environment key-value store."""

    def test_get_and_set(self) -> None:
        """Setting a variable should make it retrievable."""
        env = Environment()
        env.set("HOME", "/")
        assert env.get("HOME") == "/"

    def test_get_missing_returns_none(self) -> None:
        """Getting a missing key should return None."""
        env = Environment()
        assert env.get("MISSING") is None

    def test_get_missing_with_default(self) -> None:
        """Getting a missing key with a default should return the default."""
        env = Environment()
        assert env.get("MISSING", "fallback") == "fallback"

    def test_set_overwrites(self) -> None:
        """Setting an existing key should overwrite the value."""
        env = Environment()
        env.set("X", "old")
        env.set("X", "new")
        assert env.get("X") == "new"

    def test_delete(self) -> None:
        """Deleting a variable should remove it."""
        env = Environment()
        env.set("X", "val")
        env.delete("X")
        assert env.get("X") is None

    def test_delete_missing_raises(self) -> None:
        """Deleting a non-existent key should raise KeyError."""
        env = Environment()
        with pytest.raises(KeyError):
            env.delete("NOPE")

    def test_items_sorted(self) -> None:
        """Items should return all pairs sorted by key."""
        env = Environment()
        env.set("B", "2")
        env.set("A", "1")
        assert env.items() == [("A", "1"), ("B", "2")]

    def test_initial_is_copied(self) -> None:
        """Changing the initial dict afterwards should not leak in."""
        initial = {"X": "1"}
        env = Environment(initial)
        initial["X"] = "2"
        assert env.get("X") == "1"


class TestDefaultEnvironment:
    """Verify the environment a session starts with."""

    def test_default_prompt(self) -> None:
        """PS1 should default to the classic prompt."""
        assert default_environment().get("PS1") == DEFAULT_PROMPT

    def test_defaults_are_fresh(self) -> None:
        """Each call should return an independent environment."""
        first = default_environment()
        first.set("PS1", "$ ")
        assert default_environment().get("PS1") == DEFAULT_PROMPT
