"""
Prompt templates for workers.

This module provides the structure only. The wording each worker uses is
defined by the adapters (see ``rolerelay.infrastructure.llm.prompts``) or
loaded from configuration.
"""

from collections.abc import Sequence
from dataclasses import dataclass

from rolerelay.domain.models import ConversationTurn


@dataclass(frozen=True)
class PromptTemplate:
    """Structured prompt template for a worker."""

    role: str
    constraints: str
    task: str

    def instructions(self) -> str:
        """System instructions: who the worker is and the rules it follows."""
        parts = [f"# ROLE\n{self.role}"]
        if self.constraints:
            parts.append(f"# CONSTRAINTS\n{self.constraints}")
        return "\n\n".join(parts)

    def render(self, conversation: Sequence[ConversationTurn]) -> str:
        """Render the assembled conversation followed by the task."""
        parts = []
        if conversation:
            history = "\n\n".join(
                f"{turn.role}: {turn.content}" for turn in conversation
            )
            parts.append(f"# CONVERSATION HISTORY\n{history}")
        parts.append(f"# TASK\n{self.task}")
        return "\n\n".join(parts)
