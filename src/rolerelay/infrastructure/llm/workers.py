"""Concrete workers for each pipeline role.

Each worker fixes its output schema, its default prompt and how the
validated output becomes a WorkerResult. Document-producing roles store
their output as a single named file so the merge engine tracks revisions
of it like any source file.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import ClassVar

from rolerelay.domain.interfaces import WorkerInterface
from rolerelay.domain.models import Phase, Role, Usage, WorkerResult
from rolerelay.domain.prompts import PromptTemplate
from rolerelay.infrastructure.llm.base import (
    ModelFactory,
    PydanticAIWorker,
    WorkerSettings,
)
from rolerelay.infrastructure.llm.outputs import (
    FileSetOutput,
    ManagerDecision,
    ReviewOutput,
)
from rolerelay.infrastructure.llm.prompts import (
    ANALYST_PROMPT,
    ARCHITECT_PROMPT,
    DEFAULT_PROMPTS,
    DEPLOYER_PROMPT,
    IMPLEMENTER_PROMPT,
    MANAGER_PROMPT,
    REVIEWER_PROMPT,
    TESTER_PROMPT,
)

# =============================================================================
# MANAGER
# =============================================================================


class ManagerWorker(PydanticAIWorker[ManagerDecision]):
    """Decides the next phase and, on a project's first turn, its identity."""

    role = Role.MANAGER
    output_type = ManagerDecision
    default_prompt = MANAGER_PROMPT

    fallback_text = (
        "An error occurred while analyzing the project. "
        "Please provide more details about what you want to build."
    )
    fallback_phase = Phase.ANALYSIS

    def _to_result(
        self, output: ManagerDecision, usage: Usage, elapsed: float
    ) -> WorkerResult:
        return WorkerResult(
            text=output.text,
            declared_phase=Phase(output.phase),
            name=output.name,
            summary=output.summary,
            usage=usage,
            time_taken_seconds=elapsed,
        )


# =============================================================================
# DOCUMENT WORKERS
# =============================================================================


class DocumentWorker(PydanticAIWorker[str]):
    """Writes one markdown document and hands off with a fixed note."""

    output_type = str
    document_title: ClassVar[str]
    handoff_text: ClassVar[str]

    def _to_result(self, output: str, usage: Usage, elapsed: float) -> WorkerResult:
        return WorkerResult(
            text=self.handoff_text,
            files=MappingProxyType({self.document_title: output}),
            usage=usage,
            time_taken_seconds=elapsed,
        )


class AnalystWorker(DocumentWorker):
    role = Role.ANALYST
    default_prompt = ANALYST_PROMPT
    document_title = "Analysis Report"
    handoff_text = (
        "@sys_arch here's the requirement. "
        "Design the system architecture and define the key modules."
    )


class ArchitectWorker(DocumentWorker):
    role = Role.ARCHITECT
    default_prompt = ARCHITECT_PROMPT
    document_title = "System Architecture"
    handoff_text = (
        "@dev here's the system design. Implement it as a complete NPM package."
    )


class DeployerWorker(DocumentWorker):
    role = Role.DEPLOYER
    default_prompt = DEPLOYER_PROMPT
    document_title = "Deployment Plan"
    handoff_text = "Deployment plan is ready."


# =============================================================================
# FILE WORKERS
# =============================================================================


class FileSetWorker(PydanticAIWorker[FileSetOutput]):
    """Creates or updates source files."""

    output_type = FileSetOutput

    def _to_result(
        self, output: FileSetOutput, usage: Usage, elapsed: float
    ) -> WorkerResult:
        files = {f.path: f.content for f in output.files}
        return WorkerResult(
            text=output.summary,
            declared_phase=Phase(output.phase) if output.phase else None,
            files=MappingProxyType(files),
            usage=usage,
            time_taken_seconds=elapsed,
        )


class ImplementerWorker(FileSetWorker):
    role = Role.IMPLEMENTER
    default_prompt = IMPLEMENTER_PROMPT


class TesterWorker(FileSetWorker):
    role = Role.TESTER
    default_prompt = TESTER_PROMPT


# =============================================================================
# REVIEWER
# =============================================================================


class ReviewerWorker(PydanticAIWorker[ReviewOutput]):
    """Reviews the implementation; approval hands off to deployment."""

    role = Role.REVIEWER
    output_type = ReviewOutput
    default_prompt = REVIEWER_PROMPT

    def _to_result(
        self, output: ReviewOutput, usage: Usage, elapsed: float
    ) -> WorkerResult:
        if output.approved:
            text = "@devops code passed review. Prepare the release."
            phase = Phase.DEPLOY
        else:
            text = "Review found issues that need attention before release."
            phase = Phase.DONE
        return WorkerResult(
            text=text,
            declared_phase=phase,
            files=MappingProxyType({"Review Report": output.report}),
            usage=usage,
            time_taken_seconds=elapsed,
        )


WORKER_CLASSES: tuple[type[PydanticAIWorker], ...] = (
    ManagerWorker,
    AnalystWorker,
    ArchitectWorker,
    TesterWorker,
    ImplementerWorker,
    ReviewerWorker,
    DeployerWorker,
)


def build_workers(
    settings: WorkerSettings | None = None,
    prompts: dict[Role, PromptTemplate] | None = None,
    model_factory: ModelFactory | None = None,
) -> dict[Role, WorkerInterface]:
    """
    Build one worker per role.

    Args:
        settings: Provider connection settings shared by all workers
        prompts: Per-role prompt overrides (missing roles use the defaults)
        model_factory: Optional model builder passed to every worker

    Returns:
        Mapping of role to worker
    """
    prompts = {**DEFAULT_PROMPTS, **(prompts or {})}
    return {
        cls.role: cls(
            template=prompts[cls.role],
            settings=settings,
            model_factory=model_factory,
        )
        for cls in WORKER_CLASSES
    }
