"""Tests for InMemorySessionStore."""

import pytest

from rolerelay.application.orchestrator import make_message
from rolerelay.domain.exceptions import SessionNotFound
from rolerelay.domain.models import Phase, Role


class TestInMemorySessionStore:
    """Tests for in-memory session storage."""

    def test_save_and_load(self, memory_store, populated_context):
        messages = [make_message(0, Role.USER, "hi", Phase.INIT)]
        memory_store.save("s1", populated_context, messages)

        context, loaded = memory_store.load("s1")

        assert context is populated_context
        assert loaded == tuple(messages)

    def test_save_replaces(self, memory_store, populated_context):
        memory_store.save("s1", populated_context, [])
        memory_store.save("s1", populated_context, [make_message(0, Role.USER, "hi", Phase.INIT)])
        assert len(memory_store.load("s1")[1]) == 1

    def test_load_missing(self, memory_store):
        with pytest.raises(SessionNotFound, match="Session not found"):
            memory_store.load("nonexistent")

    def test_exists_and_list(self, memory_store, populated_context):
        assert not memory_store.exists("b")
        memory_store.save("b", populated_context, [])
        memory_store.save("a", populated_context, [])
        assert memory_store.exists("b")
        assert memory_store.list_sessions() == ["a", "b"]
