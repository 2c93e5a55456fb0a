"""
Domain exceptions for the role relay.

These represent invariant violations and lookup misses in the domain layer.
Routing exhaustion and degraded worker calls are not exceptions; they end a
chain through ``HaltReason``.
"""


class MergeInvariantViolation(ValueError):
    """
    Raised when a merged file's ``lines`` and ``status`` lengths differ.

    The merge contract never produces such a file; seeing this means a
    programming error upstream of the merge engine.
    """


class SessionNotFound(KeyError):
    """Raised when a session store has no state for the requested id."""

    def __init__(self, session_id: str):
        """
        Args:
            session_id: The identifier that was looked up
        """
        super().__init__(f"Session not found: {session_id}")
        self.session_id = session_id
