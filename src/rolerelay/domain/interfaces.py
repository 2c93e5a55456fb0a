"""
Domain interfaces (Ports) for the role relay.

These abstract base classes define the contracts that adapters must satisfy.
They have no external dependencies and represent the core domain boundaries.
"""

from abc import ABC, abstractmethod
from collections.abc import Sequence
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from rolerelay.domain.models import (
        ConversationTurn,
        Message,
        ProjectContext,
        WorkerResult,
    )


class WorkerInterface(ABC):
    """
    Port for one specialized worker (manager, analyst, implementer, ...).

    Note (Failure reporting):
        Implementations must not raise for ordinary model refusals or
        network errors. They return a best-effort fallback result with
        ``failed=True`` and zero usage, so the orchestrator can detect a
        degraded call without relying on exceptions. Anything that still
        escapes is treated by the orchestrator as a halt.

    Note (Resources):
        Timeouts, sandboxes and clients belong to the implementation. The
        orchestrator never references them.
    """

    @abstractmethod
    async def run(
        self,
        conversation: Sequence["ConversationTurn"],
        model: str,
    ) -> "WorkerResult":
        """
        Run the worker on assembled input.

        Args:
            conversation: Ordered prompt blocks from the prompt assembler
            model: Model identifier chosen by the model mapper

        Returns:
            The worker's text, optional routing/identity fields, files and usage
        """
        pass


class SessionStoreInterface(ABC):
    """
    Port for session persistence.

    The orchestrator hands the context and message log to a store after
    every step; the store defines no schema beyond the domain models.
    """

    @abstractmethod
    def save(
        self,
        session_id: str,
        context: "ProjectContext",
        messages: Sequence["Message"],
    ) -> None:
        """
        Persist the latest state of a session, replacing any prior state.

        Args:
            session_id: Session identifier
            context: Current project context
            messages: Full message log
        """
        pass

    @abstractmethod
    def load(self, session_id: str) -> tuple["ProjectContext", tuple["Message", ...]]:
        """
        Load a session.

        Args:
            session_id: Session identifier

        Returns:
            The stored context and message log

        Raises:
            SessionNotFound: If nothing is stored for the id
        """
        pass

    @abstractmethod
    def exists(self, session_id: str) -> bool:
        pass

    @abstractmethod
    def list_sessions(self) -> list[str]:
        """Return stored session ids, sorted."""
        pass
