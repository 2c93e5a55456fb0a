"""
rolerelay: role-routed code generation with compact incremental context.

A user request is relayed through a fixed set of workers (manager, analyst,
architect, tester, implementer, reviewer, deployer). Each worker sees a
line-tagged merge of what the others produced, so a prompt carries what
changed rather than everything ever produced.

Example:
    import asyncio

    from rolerelay import Orchestrator, ProjectSession
    from rolerelay.infrastructure import DEFAULT_MODEL_MAP, build_workers

    orchestrator = Orchestrator(build_workers(), model_for=DEFAULT_MODEL_MAP.model_for)
    session = ProjectSession("demo", orchestrator)
    result = asyncio.run(session.submit("Build a slugify library"))
    print(session.latest_files())
"""

# Application layer (orchestration)
from rolerelay.application.assembler import assemble
from rolerelay.application.orchestrator import Orchestrator, OrchestratorConfig
from rolerelay.application.session import ProjectSession

# Domain exceptions
from rolerelay.domain.exceptions import MergeInvariantViolation, SessionNotFound

# Domain interfaces (for type hints and custom implementations)
from rolerelay.domain.interfaces import SessionStoreInterface, WorkerInterface

# Domain models (most commonly used)
from rolerelay.domain.models import (
    ChainResult,
    HaltReason,
    LineTag,
    MergedFile,
    Message,
    ModelTier,
    Phase,
    ProjectContext,
    Role,
    RoleArtifact,
    Usage,
    WorkerResult,
)

# Prompts (structure only - wording defined by the worker adapters)
from rolerelay.domain.prompts import PromptTemplate

# Infrastructure (explicit import encouraged for dependency injection)
from rolerelay.infrastructure.persistence import (
    FilesystemSessionStore,
    InMemorySessionStore,
)

__version__ = "0.1.0"

__all__ = [
    # Version
    "__version__",
    # Application
    "assemble",
    "Orchestrator",
    "OrchestratorConfig",
    "ProjectSession",
    # Models
    "ChainResult",
    "HaltReason",
    "LineTag",
    "MergedFile",
    "Message",
    "ModelTier",
    "Phase",
    "ProjectContext",
    "Role",
    "RoleArtifact",
    "Usage",
    "WorkerResult",
    # Prompts
    "PromptTemplate",
    # Interfaces
    "WorkerInterface",
    "SessionStoreInterface",
    # Exceptions
    "MergeInvariantViolation",
    "SessionNotFound",
    # Persistence
    "InMemorySessionStore",
    "FilesystemSessionStore",
]
