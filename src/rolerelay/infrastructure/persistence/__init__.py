"""
Persistence adapters for project sessions.
"""

from rolerelay.infrastructure.persistence.filesystem import FilesystemSessionStore
from rolerelay.infrastructure.persistence.memory import InMemorySessionStore

__all__ = [
    "InMemorySessionStore",
    "FilesystemSessionStore",
]
