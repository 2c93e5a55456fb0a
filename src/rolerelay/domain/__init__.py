"""
Domain layer for the role relay.

Contains the data model, the line differ, the merge engine, the context
store and the routing table. No external dependencies.
"""

from rolerelay.domain.context import empty_context, set_identity, update_context
from rolerelay.domain.diff import diff_lines, split_lines
from rolerelay.domain.exceptions import MergeInvariantViolation, SessionNotFound
from rolerelay.domain.interfaces import SessionStoreInterface, WorkerInterface
from rolerelay.domain.merge import merge_artifact, merge_file
from rolerelay.domain.models import (
    ArtifactRef,
    ChainResult,
    ConversationTurn,
    DiffLine,
    FragmentType,
    HaltReason,
    LineTag,
    MergedFile,
    Message,
    ModelPurpose,
    ModelTier,
    Phase,
    ProjectContext,
    Role,
    RoleArtifact,
    Usage,
    WorkerResult,
)
from rolerelay.domain.prompts import PromptTemplate
from rolerelay.domain.routing import TRANSITIONS, next_role, resolve_phase

__all__ = [
    # Models
    "Role",
    "Phase",
    "ModelTier",
    "ModelPurpose",
    "LineTag",
    "DiffLine",
    "MergedFile",
    "RoleArtifact",
    "ProjectContext",
    "Usage",
    "FragmentType",
    "ArtifactRef",
    "Message",
    "ConversationTurn",
    "WorkerResult",
    "HaltReason",
    "ChainResult",
    # Diff and merge
    "split_lines",
    "diff_lines",
    "merge_file",
    "merge_artifact",
    # Context store
    "empty_context",
    "update_context",
    "set_identity",
    # Routing
    "TRANSITIONS",
    "next_role",
    "resolve_phase",
    # Prompts
    "PromptTemplate",
    # Interfaces
    "WorkerInterface",
    "SessionStoreInterface",
    # Exceptions
    "MergeInvariantViolation",
    "SessionNotFound",
]
