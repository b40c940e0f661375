"""
Unit tests for the in-memory ChatHistoryStore.
"""

import os
import sys

import pytest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from sms_relay.errors import HistoryNotFoundError
from sms_relay.history import ChatHistoryStore, Turn


class TestChatHistoryStore:
    """Tests for create/get/add semantics."""

    def setup_method(self):
        self.store = ChatHistoryStore()

    def test_get_missing_returns_none(self):
        """No history yet is a normal outcome, not an error."""
        assert self.store.get("555") is None
        assert "555" not in self.store

    def test_create_returns_empty_history(self):
        history = self.store.create("555", "Assistant", "p1")
        assert history.caller_id == "555"
        assert history.agent_name == "Assistant"
        assert history.prompt_id == "p1"
        assert history.turns == []
        assert self.store.get("555") is history

    def test_create_replaces_existing(self):
        """Create overwrites rather than merges."""
        self.store.create("555", "Assistant", "p1")
        self.store.add("555", "Hi", "User")
        history = self.store.create("555", "Helper", "p2")
        assert history.turns == []
        assert self.store.get("555").agent_name == "Helper"
        assert len(self.store) == 1

    def test_add_appends_in_order(self):
        self.store.create("555", "Assistant", "p1")
        self.store.add("555", "Hi", "User")
        self.store.add("555", "Hello!", "Assistant")
        assert self.store.get("555").turns == [
            Turn(speaker="User", text="Hi"),
            Turn(speaker="Assistant", text="Hello!"),
        ]

    def test_add_without_history_raises(self):
        with pytest.raises(HistoryNotFoundError) as exc:
            self.store.add("999", "Hi", "User")
        assert exc.value.caller_id == "999"

    def test_get_or_create_keeps_existing(self):
        first = self.store.get_or_create("555", "Assistant", "p1")
        self.store.add("555", "Hi", "User")
        second = self.store.get_or_create("555", "Other", "p2")
        assert second is first
        assert len(second.turns) == 1

    def test_histories_are_isolated_by_caller(self):
        self.store.create("111", "Assistant", "p1")
        self.store.create("222", "Assistant", "p1")
        self.store.add("111", "only for 111", "User")
        assert self.store.get("222").turns == []

    def test_lock_is_per_caller(self):
        """Same caller shares a lock; different callers do not."""
        assert self.store.lock("111") is self.store.lock("111")
        assert self.store.lock("111") is not self.store.lock("222")

    def test_turn_is_immutable(self):
        turn = Turn(speaker="User", text="Hi")
        with pytest.raises(AttributeError):
            turn.text = "changed"
