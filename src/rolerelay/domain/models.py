"""
Domain models for the role relay.

These are pure data structures describing a generation session: the roles
and phases that drive routing, the line-tagged merged view of each role's
files, the per-project context and the message log.
All models are immutable (frozen dataclasses) so a context value can be
threaded through the orchestrator without defensive copies.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Literal

from rolerelay.domain.exceptions import MergeInvariantViolation

# =============================================================================
# ROLES AND PHASES
# =============================================================================


class Role(Enum):
    """Fixed pipeline participants."""

    USER = "user"
    MANAGER = "manager"
    ANALYST = "analyst"
    ARCHITECT = "architect"
    IMPLEMENTER = "implementer"
    TESTER = "tester"
    REVIEWER = "reviewer"
    DEPLOYER = "deployer"


class Phase(Enum):
    """Next pipeline stage declared on a message. Drives routing only."""

    INIT = "INIT"  # First user message of a session
    REVISE = "REVISE"  # Any later user message
    ANALYSIS = "ANALYSIS"
    DESIGN = "DESIGN"
    CODE = "CODE"
    TEST = "TEST"
    RETEST = "RETEST"
    REVIEW = "REVIEW"
    DEPLOY = "DEPLOY"
    DONE = "DONE"  # Explicit terminal declaration


class ModelTier(Enum):
    """Quality tier selected by the user for a submission."""

    HIGH = "HIGH"
    MID = "MID"


class ModelPurpose(Enum):
    """What a worker uses its model for."""

    THINK = "THINK"
    DEV = "DEV"


# =============================================================================
# LINE-TAGGED FILES
# =============================================================================


class LineTag(Enum):
    """Status of one line in a merged file."""

    UNCHANGED = "UNCHANGED"
    ADDED = "ADDED"
    REMOVED = "REMOVED"


@dataclass(frozen=True)
class DiffLine:
    """Single entry of a line diff."""

    tag: LineTag
    line: str


@dataclass(frozen=True)
class MergedFile:
    """
    Line-tagged view of the latest two snapshots of one file.

    ``lines`` and ``status`` are parallel: ``status[i]`` tags ``lines[i]``.
    REMOVED lines are historical and excluded from the current content.
    """

    lines: tuple[str, ...] = ()
    status: tuple[LineTag, ...] = ()

    def __post_init__(self) -> None:
        if len(self.lines) != len(self.status):
            raise MergeInvariantViolation(
                f"lines/status length mismatch: {len(self.lines)} != {len(self.status)}"
            )

    def current_lines(self) -> list[str]:
        return [
            line
            for line, tag in zip(self.lines, self.status, strict=True)
            if tag is not LineTag.REMOVED
        ]

    def current_text(self) -> str:
        """Reconstruct the latest snapshot from UNCHANGED and ADDED lines."""
        return "\n".join(self.current_lines())

    @property
    def changed(self) -> bool:
        return any(tag is not LineTag.UNCHANGED for tag in self.status)


@dataclass(frozen=True)
class RoleArtifact:
    """Accumulated output of one role: latest free text plus merged files."""

    text: str = ""
    files: Mapping[str, MergedFile] = field(
        default_factory=lambda: MappingProxyType({})
    )

    def snapshot(self) -> dict[str, str]:
        """Line-joined view of the current files; files with no lines are omitted.

        Trailing newlines are not kept. Raw file content lives on the
        message log's artifact references.
        """
        result = {}
        for path, merged in self.files.items():
            lines = merged.current_lines()
            if lines:
                result[path] = "\n".join(lines)
        return result


@dataclass(frozen=True)
class ProjectContext:
    """
    Durable state of one generation session.

    Holds at most one artifact per role. Iteration order of ``artifacts`` is
    the order in which each role first produced output.
    """

    name: str = ""
    summary: str = ""
    version: int = 0
    artifacts: Mapping[Role, RoleArtifact] = field(
        default_factory=lambda: MappingProxyType({})
    )


# =============================================================================
# MESSAGES
# =============================================================================


@dataclass(frozen=True)
class Usage:
    """Token usage of one model call (or a sum of calls)."""

    input_tokens: int = 0
    output_tokens: int = 0

    @property
    def total_tokens(self) -> int:
        return self.input_tokens + self.output_tokens

    def __add__(self, other: "Usage") -> "Usage":
        return Usage(
            input_tokens=self.input_tokens + other.input_tokens,
            output_tokens=self.output_tokens + other.output_tokens,
        )


class FragmentType(Enum):
    """Kind of artifact attached to a message."""

    DOC = "DOC"
    CODE = "CODE"


@dataclass(frozen=True)
class ArtifactRef:
    """Files a message carries for display and download."""

    kind: FragmentType
    title: str
    files: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))


@dataclass(frozen=True)
class Message:
    """Immutable log entry produced by user input or a worker step."""

    message_id: str
    sequence: int  # Creation order within the session
    role: Role
    content: str
    phase: Phase | None
    artifact: ArtifactRef | None = None
    usage: Usage = Usage()
    time_taken_seconds: float = 0.0
    model: str = ""
    events: tuple[str, ...] = ()
    created_at: str = ""


@dataclass(frozen=True)
class ConversationTurn:
    """One assembled prompt block in transport form."""

    role: Literal["user", "assistant"]
    content: str


# =============================================================================
# WORKER RESULT
# =============================================================================


@dataclass(frozen=True)
class WorkerResult:
    """
    Outcome of one worker call.

    ``failed`` is set by adapters when they return a fallback after a model
    or network error; such results carry zero usage.
    """

    text: str
    declared_phase: Phase | None = None
    name: str | None = None
    summary: str | None = None
    files: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))
    usage: Usage = Usage()
    time_taken_seconds: float = 0.0
    failed: bool = False


# =============================================================================
# CHAIN RESULT
# =============================================================================


class HaltReason(Enum):
    """Why an orchestrator run stopped."""

    TERMINAL = "terminal"  # No transition for (role, phase)
    DEGRADED = "degraded"  # Manager reported zero input tokens
    WORKER_FAILED = "worker_failed"  # Worker raised
    STEP_LIMIT = "step_limit"  # max_steps reached
    NO_WORKER = "no_worker"  # Next role has no registered worker
    EMPTY_LOG = "empty_log"  # Nothing to route from


@dataclass(frozen=True)
class ChainResult:
    """Result of one orchestrator run."""

    context: ProjectContext
    messages: tuple[Message, ...]  # Full log after the run
    appended: tuple[Message, ...]  # Messages produced by this run
    halt_reason: HaltReason
    error: str | None = None
