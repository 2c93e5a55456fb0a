"""
In-memory implementation of the session store.

Useful for testing and ephemeral sessions.
"""

from collections.abc import Sequence

from rolerelay.domain.exceptions import SessionNotFound
from rolerelay.domain.interfaces import SessionStoreInterface
from rolerelay.domain.models import Message, ProjectContext


class InMemorySessionStore(SessionStoreInterface):
    """Simple in-memory store for testing."""

    def __init__(self) -> None:
        self._sessions: dict[str, tuple[ProjectContext, tuple[Message, ...]]] = {}

    def save(
        self,
        session_id: str,
        context: ProjectContext,
        messages: Sequence[Message],
    ) -> None:
        self._sessions[session_id] = (context, tuple(messages))

    def load(self, session_id: str) -> tuple[ProjectContext, tuple[Message, ...]]:
        if session_id not in self._sessions:
            raise SessionNotFound(session_id)
        return self._sessions[session_id]

    def exists(self, session_id: str) -> bool:
        return session_id in self._sessions

    def list_sessions(self) -> list[str]:
        return sorted(self._sessions)
