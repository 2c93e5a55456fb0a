"""
LLM adapters for worker steps.
"""

from rolerelay.infrastructure.llm.base import PydanticAIWorker, WorkerSettings
from rolerelay.infrastructure.llm.mock import MockWorker
from rolerelay.infrastructure.llm.prompts import DEFAULT_PROMPTS
from rolerelay.infrastructure.llm.workers import (
    AnalystWorker,
    ArchitectWorker,
    DeployerWorker,
    ImplementerWorker,
    ManagerWorker,
    ReviewerWorker,
    TesterWorker,
    build_workers,
)

__all__ = [
    "DEFAULT_PROMPTS",
    "AnalystWorker",
    "ArchitectWorker",
    "DeployerWorker",
    "ImplementerWorker",
    "ManagerWorker",
    "MockWorker",
    "PydanticAIWorker",
    "ReviewerWorker",
    "TesterWorker",
    "WorkerSettings",
    "build_workers",
]
