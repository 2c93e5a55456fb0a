"""
Orchestrator: the role-transition state machine.

Given the latest message, looks up the next worker in the transition table,
assembles its input from the project context, awaits it, appends its
message and merges its output into the context. Runs as an explicit loop
until no transition applies.
"""

import logging
import uuid
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass
from datetime import UTC, datetime
from types import MappingProxyType

from rolerelay.application.assembler import assemble
from rolerelay.domain.context import set_identity, update_context
from rolerelay.domain.interfaces import WorkerInterface
from rolerelay.domain.models import (
    ArtifactRef,
    ChainResult,
    HaltReason,
    Message,
    ModelPurpose,
    ModelTier,
    Phase,
    ProjectContext,
    Role,
    Usage,
    WorkerResult,
)
from rolerelay.domain.routing import (
    ACCUMULATING_ROLES,
    ROLE_ARTIFACTS,
    WORKER_INPUT_ROLES,
    WORKER_PURPOSE,
    next_role,
    resolve_phase,
)

logger = logging.getLogger(__name__)

ModelSelector = Callable[[ModelTier, ModelPurpose], str]
StepHook = Callable[[ProjectContext, tuple[Message, ...]], None]


def make_message(
    sequence: int,
    role: Role,
    content: str,
    phase: Phase | None,
    artifact: ArtifactRef | None = None,
    usage: Usage = Usage(),
    time_taken_seconds: float = 0.0,
    model: str = "",
    events: Sequence[str] = (),
) -> Message:
    """Create a log entry with a fresh id and timestamp."""
    return Message(
        message_id=str(uuid.uuid4()),
        sequence=sequence,
        role=role,
        content=content,
        phase=phase,
        artifact=artifact,
        usage=usage,
        time_taken_seconds=time_taken_seconds,
        model=model,
        events=tuple(events),
        created_at=datetime.now(UTC).isoformat(),
    )


def latest_role_files(messages: Sequence[Message], role: Role) -> dict[str, str]:
    """Raw ``{path: content}`` map of the role's most recent artifact.

    Read from the message log rather than the merged context so content is
    returned byte for byte, empty files and trailing newlines included.
    """
    for message in reversed(messages):
        if message.role is role and message.artifact is not None:
            return dict(message.artifact.files)
    return {}


@dataclass(frozen=True)
class OrchestratorConfig:
    """Configuration for Orchestrator."""

    test_driven: bool = True
    max_steps: int = 12  # Hard ceiling on worker steps per run
    max_retest_rounds: int = 1  # Implementer -> tester loops per run


class Orchestrator:
    """
    Drives workers through the fixed role graph.

    Stateless between runs: the context and message log are passed in and
    returned in the ChainResult, so one orchestrator can serve many
    sessions concurrently.
    """

    def __init__(
        self,
        workers: Mapping[Role, WorkerInterface],
        model_for: ModelSelector,
        config: OrchestratorConfig | None = None,
    ):
        """
        Args:
            workers: Worker adapter per role (roles without one halt the chain)
            model_for: Maps (tier, purpose) to a model identifier
            config: Routing options (defaults to OrchestratorConfig())
        """
        self._workers = dict(workers)
        self._model_for = model_for
        self._config = config or OrchestratorConfig()

    @property
    def config(self) -> OrchestratorConfig:
        return self._config

    async def run(
        self,
        context: ProjectContext,
        messages: Sequence[Message],
        tier: ModelTier = ModelTier.MID,
        on_step: StepHook | None = None,
    ) -> ChainResult:
        """
        Run the chain from the latest message until it halts.

        Args:
            context: Current project context
            messages: Message log; the last entry is the routing cursor
            tier: Model tier used for every worker in this run
            on_step: Called with the new context and full log after each
                successful step (persistence hook)

        Returns:
            ChainResult with the updated context, full log, the messages
            appended by this run and the halt reason
        """
        log = list(messages)
        appended: list[Message] = []
        retest_rounds = 0

        def halt(reason: HaltReason, error: str | None = None) -> ChainResult:
            return ChainResult(
                context=context,
                messages=tuple(log),
                appended=tuple(appended),
                halt_reason=reason,
                error=error,
            )

        while True:
            if not log:
                return halt(HaltReason.EMPTY_LOG)

            last = log[-1]
            role = next_role(last.role, last.phase, self._config.test_driven)
            if role is None:
                logger.info(
                    "No transition from (%s, %s); chain complete",
                    last.role.value,
                    last.phase.value if last.phase else None,
                )
                return halt(HaltReason.TERMINAL)

            if len(appended) >= self._config.max_steps:
                logger.warning(
                    "Step limit %d reached before %s; halting",
                    self._config.max_steps,
                    role.value,
                )
                return halt(HaltReason.STEP_LIMIT)

            worker = self._workers.get(role)
            if worker is None:
                logger.warning("No worker registered for %s; halting", role.value)
                return halt(HaltReason.NO_WORKER)

            conversation = assemble(context, WORKER_INPUT_ROLES.get(role))
            model = self._model_for(tier, WORKER_PURPOSE[role])
            logger.info(
                "Step %d: %s/%s -> %s (model=%s)",
                len(appended) + 1,
                last.role.value,
                last.phase.value if last.phase else None,
                role.value,
                model,
            )
            logger.debug("Assembled %d blocks for %s", len(conversation), role.value)

            try:
                result = await worker.run(conversation, model)
            except Exception as e:
                logger.exception("Worker %s failed", role.value)
                return halt(HaltReason.WORKER_FAILED, error=str(e))

            events: list[str] = []
            if role is Role.MANAGER and last.phase is Phase.INIT:
                context, events = self._apply_identity(context, result)

            phase = resolve_phase(
                role,
                result.declared_phase,
                test_driven=self._config.test_driven,
                retest_exhausted=retest_rounds >= self._config.max_retest_rounds,
            )
            if role is Role.IMPLEMENTER and phase is Phase.RETEST:
                retest_rounds += 1

            # A fallback result is logged but never merged into the context
            files = {} if result.failed else self._files_for(log, role, result)
            message = make_message(
                sequence=len(log),
                role=role,
                content=result.text,
                phase=phase,
                artifact=self._artifact_ref(role, files),
                usage=result.usage,
                time_taken_seconds=result.time_taken_seconds,
                model=model,
                events=events,
            )
            log.append(message)
            appended.append(message)
            if not result.failed:
                context = update_context(context, role, result.text, files)

            if on_step is not None:
                on_step(context, tuple(log))

            if result.failed:
                logger.warning("%s returned a fallback result; halting", role.value)
                return halt(HaltReason.DEGRADED)
            # Zero input tokens from the manager means its call degraded to
            # the adapter fallback.
            if role is Role.MANAGER and result.usage.input_tokens == 0:
                logger.warning("Manager reported zero input tokens; halting")
                return halt(HaltReason.DEGRADED)

    def _apply_identity(
        self, context: ProjectContext, result: WorkerResult
    ) -> tuple[ProjectContext, list[str]]:
        """Set project name/summary from the manager's first turn."""
        if not result.name and not result.summary:
            return context, []

        events = []
        if result.name:
            events.append(f'Updated project name to "{result.name}"')
        if result.summary:
            events.append("Updated project summary")
        context = set_identity(
            context,
            result.name or context.name,
            result.summary or context.summary,
        )
        return context, events

    def _files_for(
        self, log: Sequence[Message], role: Role, result: WorkerResult
    ) -> dict[str, str]:
        """File snapshot to merge for this step."""
        if role not in ACCUMULATING_ROLES:
            return dict(result.files)
        files = latest_role_files(log, role)
        files.update(result.files)
        return files

    def _artifact_ref(self, role: Role, files: Mapping[str, str]) -> ArtifactRef | None:
        if not files or role not in ROLE_ARTIFACTS:
            return None
        kind, title = ROLE_ARTIFACTS[role]
        return ArtifactRef(kind=kind, title=title, files=MappingProxyType(dict(files)))
