"""
ProjectSession: user-facing entry point for one generation session.

Owns the session's context and message log, turns user input into
messages and hands them to the Orchestrator. A manual re-prompt always
re-enters the chain at the manager.
"""

import logging
from collections.abc import Sequence

from rolerelay.application.orchestrator import (
    Orchestrator,
    latest_role_files,
    make_message,
)
from rolerelay.domain.context import empty_context, update_context
from rolerelay.domain.interfaces import SessionStoreInterface
from rolerelay.domain.models import (
    ChainResult,
    Message,
    ModelTier,
    Phase,
    ProjectContext,
    Role,
    Usage,
)

logger = logging.getLogger(__name__)


class ProjectSession:
    """
    One project's conversation with the worker pipeline.

    Steps within a session run strictly in sequence; callers must not
    submit to the same session concurrently.
    """

    def __init__(
        self,
        session_id: str,
        orchestrator: Orchestrator,
        store: SessionStoreInterface | None = None,
        context: ProjectContext | None = None,
        messages: Sequence[Message] = (),
    ):
        """
        Args:
            session_id: Identifier used for persistence
            orchestrator: Orchestrator that runs worker steps
            store: Optional store; state is saved after every step
            context: Existing context (defaults to an empty one)
            messages: Existing message log
        """
        self._session_id = session_id
        self._orchestrator = orchestrator
        self._store = store
        self._context = context or empty_context()
        self._messages: tuple[Message, ...] = tuple(messages)

    @classmethod
    def load(
        cls,
        session_id: str,
        orchestrator: Orchestrator,
        store: SessionStoreInterface,
    ) -> "ProjectSession":
        """
        Restore a session from a store.

        Raises:
            SessionNotFound: If the store has no such session
        """
        context, messages = store.load(session_id)
        return cls(session_id, orchestrator, store, context, messages)

    @property
    def session_id(self) -> str:
        return self._session_id

    @property
    def context(self) -> ProjectContext:
        return self._context

    @property
    def messages(self) -> tuple[Message, ...]:
        return self._messages

    async def submit(self, text: str, tier: ModelTier = ModelTier.MID) -> ChainResult:
        """
        Add a user message and run the chain.

        The first message of a session declares INIT, later ones REVISE.

        Args:
            text: The user's request
            tier: Model tier for every worker in this run

        Returns:
            The orchestrator's ChainResult
        """
        phase = Phase.REVISE if self._messages else Phase.INIT
        message = make_message(
            sequence=len(self._messages),
            role=Role.USER,
            content=text,
            phase=phase,
            model=tier.value,
        )
        self._messages = (*self._messages, message)
        self._context = update_context(self._context, Role.USER, text, {})
        self._save(self._context, self._messages)
        logger.info("Session %s: user message (%s)", self._session_id, phase.value)
        return await self.resume(tier)

    async def resume(self, tier: ModelTier = ModelTier.MID) -> ChainResult:
        """Run the chain from the latest message."""
        result = await self._orchestrator.run(
            self._context,
            self._messages,
            tier=tier,
            on_step=self._save,
        )
        self._context = result.context
        self._messages = result.messages
        logger.info(
            "Session %s halted (%s) after %d step(s)",
            self._session_id,
            result.halt_reason.value,
            len(result.appended),
        )
        return result

    def usage(self) -> dict[Role, Usage]:
        """Token usage per role across the whole log, in first-seen order."""
        totals: dict[Role, Usage] = {}
        for message in self._messages:
            totals[message.role] = totals.get(message.role, Usage()) + message.usage
        return totals

    def latest_files(self, role: Role = Role.IMPLEMENTER) -> dict[str, str]:
        """Latest raw file map of a role (empty if it produced none)."""
        return latest_role_files(self._messages, role)

    def _save(self, context: ProjectContext, messages: tuple[Message, ...]) -> None:
        if self._store is not None:
            self._store.save(self._session_id, context, messages)
