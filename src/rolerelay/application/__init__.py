"""
Application layer for the role relay.

Contains the prompt assembler, the orchestrator state machine and the
project session that feeds it user input.
"""

from rolerelay.application.assembler import assemble, render_artifact, transport_role
from rolerelay.application.orchestrator import (
    Orchestrator,
    OrchestratorConfig,
    make_message,
)
from rolerelay.application.session import ProjectSession

__all__ = [
    "assemble",
    "render_artifact",
    "transport_role",
    "Orchestrator",
    "OrchestratorConfig",
    "make_message",
    "ProjectSession",
]
