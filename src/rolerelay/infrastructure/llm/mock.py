"""
Mock worker for testing without an LLM.

Returns predefined results in sequence.
"""

from collections.abc import Sequence

from rolerelay.domain.interfaces import WorkerInterface
from rolerelay.domain.models import ConversationTurn, WorkerResult


class MockWorker(WorkerInterface):
    """Returns predefined results for testing."""

    def __init__(self, results: list[WorkerResult]):
        """
        Args:
            results: List of results to return in sequence
        """
        self._results = results
        self._call_count = 0
        self.calls: list[tuple[tuple[ConversationTurn, ...], str]] = []

    async def run(
        self,
        conversation: Sequence[ConversationTurn],
        model: str,
    ) -> WorkerResult:
        """Return the next predefined result."""
        if self._call_count >= len(self._results):
            raise RuntimeError("MockWorker exhausted results")

        self.calls.append((tuple(conversation), model))
        result = self._results[self._call_count]
        self._call_count += 1
        return result

    @property
    def call_count(self) -> int:
        """Number of times run() has returned a result."""
        return self._call_count

    def reset(self) -> None:
        """Reset the call counter to reuse results."""
        self._call_count = 0
        self.calls.clear()
