"""
Prompt assembler: renders a ProjectContext into conversation blocks.

Output depends only on the context value, so identical contexts always
produce byte-identical prompts.
"""

from collections.abc import Collection
from typing import Literal

from rolerelay.domain.models import ConversationTurn, ProjectContext, Role, RoleArtifact


def transport_role(role: Role) -> Literal["user", "assistant"]:
    """Only the end user speaks as ``user``; all agent output is ``assistant``."""
    return "user" if role is Role.USER else "assistant"


def render_artifact(role: Role, artifact: RoleArtifact) -> str:
    """Render one role's text and line-tagged files as a prompt block."""
    parts = [f"Context from agent {role.value}:\n", artifact.text, "\n\n"]
    for path, merged in artifact.files.items():
        parts.append(f"From File {path}:\n")
        for line, tag in zip(merged.lines, merged.status, strict=True):
            parts.append(f"[{tag.value}] {line}\n")
    return "".join(parts)


def assemble(
    context: ProjectContext,
    role_filter: Collection[Role] | None = None,
) -> list[ConversationTurn]:
    """
    Render the context as ordered prompt blocks for a worker.

    Args:
        context: Project context to render
        role_filter: When given, only artifacts of these roles are emitted.
            The project identity block is emitted regardless.

    Returns:
        Identity block (if the project is named) followed by one block per
        role in first-output order
    """
    blocks: list[ConversationTurn] = []

    if context.name:
        summary = context.summary or "No summary provided."
        blocks.append(
            ConversationTurn(
                role="assistant",
                content=f"Project: {context.name}\nSummary: {summary}",
            )
        )

    for role, artifact in context.artifacts.items():
        if role_filter is not None and role not in role_filter:
            continue
        blocks.append(
            ConversationTurn(
                role=transport_role(role),
                content=render_artifact(role, artifact),
            )
        )

    return blocks
