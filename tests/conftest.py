"""Shared pytest fixtures for rolerelay tests."""

import pytest

from rolerelay.application.orchestrator import (
    Orchestrator,
    OrchestratorConfig,
    make_message,
)
from rolerelay.domain.context import empty_context, update_context
from rolerelay.domain.models import (
    LineTag,
    MergedFile,
    Message,
    ModelPurpose,
    ModelTier,
    Phase,
    ProjectContext,
    Role,
    Usage,
    WorkerResult,
)
from rolerelay.infrastructure.llm.mock import MockWorker
from rolerelay.infrastructure.persistence.memory import InMemorySessionStore


def _fixed_model(tier: ModelTier, purpose: ModelPurpose) -> str:
    return f"{tier.value.lower()}-{purpose.value.lower()}"


@pytest.fixture
def model_for():
    """Model selector returning "<tier>-<purpose>" identifiers."""
    return _fixed_model


@pytest.fixture
def ok():
    """Build a WorkerResult with non-zero usage (a healthy model call)."""

    def _ok(text: str = "ok", phase: Phase | None = None, **kwargs) -> WorkerResult:
        kwargs.setdefault("usage", Usage(input_tokens=10, output_tokens=5))
        return WorkerResult(text=text, declared_phase=phase, **kwargs)

    return _ok


@pytest.fixture
def assert_merge_invariant():
    """Check that every merged file keeps lines and status parallel."""

    def _check(context: ProjectContext) -> None:
        for artifact in context.artifacts.values():
            for merged in artifact.files.values():
                assert len(merged.lines) == len(merged.status)

    return _check


@pytest.fixture
def user_init() -> Message:
    return make_message(0, Role.USER, "Build a slugify library", Phase.INIT)


@pytest.fixture
def populated_context() -> ProjectContext:
    """Context with user, analyst and implementer output."""
    context = update_context(empty_context(), Role.USER, "Build a slugify library", {})
    context = update_context(
        context, Role.ANALYST, "Requirements ready", {"Analysis Report": "slugify"}
    )
    context = update_context(
        context, Role.IMPLEMENTER, "Implemented", {"index.ts": "a\nb"}
    )
    return context


@pytest.fixture
def merged_file() -> MergedFile:
    return MergedFile(
        lines=("a", "b", "c"),
        status=(LineTag.UNCHANGED, LineTag.REMOVED, LineTag.ADDED),
    )


@pytest.fixture
def memory_store() -> InMemorySessionStore:
    """Create an in-memory session store."""
    return InMemorySessionStore()


@pytest.fixture
def make_orchestrator():
    """Build an orchestrator from role -> list of scripted results."""

    def _make(scripts: dict[Role, list[WorkerResult]], **config) -> Orchestrator:
        workers = {role: MockWorker(results) for role, results in scripts.items()}
        return Orchestrator(
            workers, model_for=_fixed_model, config=OrchestratorConfig(**config)
        )

    return _make
