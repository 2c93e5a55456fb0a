"""
Infrastructure layer for the role relay.

Contains adapters for external concerns (LLM workers, persistence, model
selection).
"""

from rolerelay.infrastructure.llm import MockWorker, WorkerSettings, build_workers
from rolerelay.infrastructure.model_mapper import DEFAULT_MODEL_MAP, ModelMap
from rolerelay.infrastructure.persistence import (
    FilesystemSessionStore,
    InMemorySessionStore,
)

__all__ = [
    # Persistence
    "InMemorySessionStore",
    "FilesystemSessionStore",
    # LLM
    "MockWorker",
    "WorkerSettings",
    "build_workers",
    # Model selection
    "ModelMap",
    "DEFAULT_MODEL_MAP",
]
