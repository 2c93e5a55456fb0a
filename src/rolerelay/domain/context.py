"""
Context store operations.

Pure transforms over ``ProjectContext``. Every operation returns a new value
and leaves its input untouched, so sequential updates need no locking.
"""

from collections.abc import Mapping
from dataclasses import replace
from types import MappingProxyType

from rolerelay.domain.merge import merge_artifact
from rolerelay.domain.models import ProjectContext, Role


def empty_context() -> ProjectContext:
    return ProjectContext()


def update_context(
    context: ProjectContext,
    role: Role,
    new_text: str,
    new_files: Mapping[str, str],
) -> ProjectContext:
    """
    Replace one role's artifact with its merge against the new output.

    Other roles' artifacts, the name and the summary carry over unchanged.
    A role that already has an artifact keeps its position in iteration
    order.
    """
    artifacts = dict(context.artifacts)
    artifacts[role] = merge_artifact(artifacts.get(role), new_text, new_files)
    return replace(
        context,
        version=context.version + 1,
        artifacts=MappingProxyType(artifacts),
    )


def set_identity(context: ProjectContext, name: str, summary: str) -> ProjectContext:
    """Set project name and summary (last write wins)."""
    return replace(context, name=name, summary=summary, version=context.version + 1)
