"""
Role routing: the transition table and per-role policies.

The table is data, not conditionals, so the state machine can be tested
without invoking any worker. ``next_role`` answers "who runs after this
message", ``resolve_phase`` answers "which phase does this worker's message
declare".
"""

from collections.abc import Mapping
from types import MappingProxyType

from rolerelay.domain.models import FragmentType, ModelPurpose, Phase, Role

# =============================================================================
# TRANSITION TABLE
# =============================================================================

TRANSITIONS: Mapping[tuple[Role, Phase], Role] = MappingProxyType(
    {
        (Role.USER, Phase.INIT): Role.MANAGER,
        (Role.USER, Phase.REVISE): Role.MANAGER,
        (Role.MANAGER, Phase.ANALYSIS): Role.ANALYST,
        (Role.MANAGER, Phase.DESIGN): Role.ARCHITECT,
        (Role.MANAGER, Phase.CODE): Role.IMPLEMENTER,
        (Role.MANAGER, Phase.TEST): Role.TESTER,
        (Role.MANAGER, Phase.REVIEW): Role.REVIEWER,
        (Role.MANAGER, Phase.DEPLOY): Role.DEPLOYER,
        (Role.ANALYST, Phase.DESIGN): Role.ARCHITECT,
        (Role.ARCHITECT, Phase.TEST): Role.TESTER,
        (Role.ARCHITECT, Phase.CODE): Role.IMPLEMENTER,
        (Role.TESTER, Phase.CODE): Role.IMPLEMENTER,
        (Role.IMPLEMENTER, Phase.RETEST): Role.TESTER,
        (Role.IMPLEMENTER, Phase.REVIEW): Role.REVIEWER,
        (Role.REVIEWER, Phase.DEPLOY): Role.DEPLOYER,
    }
)


def next_role(role: Role, phase: Phase | None, test_driven: bool = True) -> Role | None:
    """
    Look up the worker that runs after a message.

    Args:
        role: Role that produced the latest message
        phase: Phase declared on that message
        test_driven: When False the tester is skipped: the implementer runs
            in its place, and an implementer RETEST goes straight to review

    Returns:
        The next role, or None when the pair is terminal
    """
    if phase is None:
        return None
    target = TRANSITIONS.get((role, phase))
    if target is Role.TESTER and not test_driven:
        if role is Role.IMPLEMENTER:
            return Role.REVIEWER
        return Role.IMPLEMENTER
    return target


# =============================================================================
# PHASE POLICY
# =============================================================================


def resolve_phase(
    role: Role,
    declared: Phase | None,
    test_driven: bool = True,
    retest_exhausted: bool = False,
) -> Phase | None:
    """
    Decide the phase stamped on a worker's message.

    Analyst and architect always hand off along the fixed pipeline; the
    implementer's handoff depends on test-driven mode. Other roles use their
    declaration, falling back to a default.
    """
    if role is Role.ANALYST:
        return Phase.DESIGN
    if role is Role.ARCHITECT:
        return Phase.TEST if test_driven else Phase.CODE
    if role is Role.IMPLEMENTER:
        if not test_driven or retest_exhausted or declared is Phase.REVIEW:
            return Phase.REVIEW
        return Phase.RETEST
    if role is Role.MANAGER:
        return declared or Phase.ANALYSIS
    if role is Role.TESTER:
        return declared or Phase.CODE
    if role is Role.REVIEWER:
        return declared or Phase.DEPLOY
    if role is Role.DEPLOYER:
        return declared or Phase.DONE
    return declared


# =============================================================================
# PER-WORKER POLICIES
# =============================================================================

# Upstream roles each worker sees in its assembled input (None = all roles)
WORKER_INPUT_ROLES: Mapping[Role, frozenset[Role] | None] = MappingProxyType(
    {
        Role.MANAGER: None,
        Role.ANALYST: frozenset({Role.USER, Role.MANAGER}),
        Role.ARCHITECT: frozenset({Role.USER, Role.MANAGER, Role.ANALYST}),
        Role.TESTER: frozenset(
            {Role.USER, Role.MANAGER, Role.ARCHITECT, Role.IMPLEMENTER}
        ),
        Role.IMPLEMENTER: frozenset(
            {Role.USER, Role.MANAGER, Role.ARCHITECT, Role.TESTER}
        ),
        Role.REVIEWER: frozenset(
            {Role.USER, Role.MANAGER, Role.ARCHITECT, Role.TESTER, Role.IMPLEMENTER}
        ),
        Role.DEPLOYER: frozenset({Role.MANAGER, Role.IMPLEMENTER, Role.REVIEWER}),
    }
)

WORKER_PURPOSE: Mapping[Role, ModelPurpose] = MappingProxyType(
    {
        Role.MANAGER: ModelPurpose.THINK,
        Role.ANALYST: ModelPurpose.THINK,
        Role.ARCHITECT: ModelPurpose.THINK,
        Role.REVIEWER: ModelPurpose.THINK,
        Role.IMPLEMENTER: ModelPurpose.DEV,
        Role.TESTER: ModelPurpose.DEV,
        Role.DEPLOYER: ModelPurpose.DEV,
    }
)

# How files produced by each role are presented on its message
ROLE_ARTIFACTS: Mapping[Role, tuple[FragmentType, str]] = MappingProxyType(
    {
        Role.ANALYST: (FragmentType.DOC, "Analysis Report"),
        Role.ARCHITECT: (FragmentType.DOC, "System Architecture"),
        Role.TESTER: (FragmentType.CODE, "Tests"),
        Role.IMPLEMENTER: (FragmentType.CODE, "Code"),
        Role.REVIEWER: (FragmentType.DOC, "Review Report"),
        Role.DEPLOYER: (FragmentType.DOC, "Deployment Plan"),
    }
)

# Roles whose file output is create-or-update: a turn never deletes files
ACCUMULATING_ROLES: frozenset[Role] = frozenset({Role.IMPLEMENTER, Role.TESTER})
