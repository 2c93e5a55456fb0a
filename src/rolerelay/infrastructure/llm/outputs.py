"""Structured output schemas for PydanticAI workers.

These are OUTPUT schemas for LLM extraction, not core types. Core types
(Role, Phase, WorkerResult, ...) live in rolerelay.domain.
"""

from typing import Literal

from pydantic import BaseModel, Field


class ManagerDecision(BaseModel):
    """Routing decision from the manager."""

    phase: Literal["ANALYSIS", "DESIGN", "CODE", "TEST", "REVIEW", "DEPLOY"] = Field(
        description=(
            "The project phase that needs attention: ANALYSIS for requirement "
            "changes, DESIGN for architecture changes, CODE for implementation "
            "changes, TEST for test changes, REVIEW for a security review, "
            "DEPLOY for release work"
        )
    )
    text: str = Field(
        description="Short natural summary of what the user wants, addressed to the next agent"
    )
    name: str | None = Field(
        default=None,
        description="Short project name (only on the first message of a project)",
    )
    summary: str | None = Field(
        default=None,
        description="One-paragraph project summary (only on the first message)",
    )


class FileWrite(BaseModel):
    """One file to create or update."""

    path: str = Field(description="Path of the file (e.g. index.ts, package.json)")
    content: str = Field(description="Full file content")


class FileSetOutput(BaseModel):
    """Files produced by the implementer or the tester."""

    summary: str = Field(description="Short summary of what was written")
    files: list[FileWrite] = Field(default_factory=list)
    phase: Literal["CODE", "RETEST", "REVIEW", "DONE"] | None = Field(
        default=None,
        description="Optional handoff: REVIEW when the work is complete",
    )


class ReviewOutput(BaseModel):
    """Security and quality review of the implementation."""

    report: str = Field(description="Review findings in markdown")
    approved: bool = Field(description="True when the code is ready to deploy")
