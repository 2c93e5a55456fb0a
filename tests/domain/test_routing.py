"""Tests for the transition table and phase policy."""

import pytest

from rolerelay.domain.models import ModelPurpose, Phase, Role
from rolerelay.domain.routing import (
    TRANSITIONS,
    WORKER_INPUT_ROLES,
    WORKER_PURPOSE,
    next_role,
    resolve_phase,
)


class TestNextRole:
    """Tests for next_role."""

    @pytest.mark.parametrize(
        ("role", "phase", "expected"),
        [
            (Role.USER, Phase.INIT, Role.MANAGER),
            (Role.USER, Phase.REVISE, Role.MANAGER),
            (Role.MANAGER, Phase.ANALYSIS, Role.ANALYST),
            (Role.MANAGER, Phase.DESIGN, Role.ARCHITECT),
            (Role.MANAGER, Phase.CODE, Role.IMPLEMENTER),
            (Role.MANAGER, Phase.TEST, Role.TESTER),
            (Role.MANAGER, Phase.REVIEW, Role.REVIEWER),
            (Role.MANAGER, Phase.DEPLOY, Role.DEPLOYER),
            (Role.ANALYST, Phase.DESIGN, Role.ARCHITECT),
            (Role.ARCHITECT, Phase.TEST, Role.TESTER),
            (Role.ARCHITECT, Phase.CODE, Role.IMPLEMENTER),
            (Role.TESTER, Phase.CODE, Role.IMPLEMENTER),
            (Role.IMPLEMENTER, Phase.RETEST, Role.TESTER),
            (Role.IMPLEMENTER, Phase.REVIEW, Role.REVIEWER),
            (Role.REVIEWER, Phase.DEPLOY, Role.DEPLOYER),
        ],
    )
    def test_table_entries(self, role, phase, expected):
        assert next_role(role, phase) is expected

    def test_table_has_fifteen_entries(self):
        assert len(TRANSITIONS) == 15

    @pytest.mark.parametrize(
        ("role", "phase"),
        [
            (Role.DEPLOYER, Phase.DONE),
            (Role.REVIEWER, Phase.DONE),
            (Role.ANALYST, Phase.CODE),
            (Role.USER, Phase.CODE),
            (Role.MANAGER, Phase.INIT),
        ],
    )
    def test_pairs_outside_table_are_terminal(self, role, phase):
        assert next_role(role, phase) is None

    def test_missing_phase_is_terminal(self):
        assert next_role(Role.MANAGER, None) is None

    def test_done_appears_in_no_transition(self):
        assert all(phase is not Phase.DONE for _, phase in TRANSITIONS)

    def test_non_tdd_skips_tester(self):
        assert next_role(Role.ARCHITECT, Phase.TEST, test_driven=False) is Role.IMPLEMENTER
        assert next_role(Role.MANAGER, Phase.TEST, test_driven=False) is Role.IMPLEMENTER
        assert next_role(Role.IMPLEMENTER, Phase.RETEST, test_driven=False) is Role.REVIEWER

    def test_non_tdd_leaves_other_routes(self):
        assert next_role(Role.MANAGER, Phase.DESIGN, test_driven=False) is Role.ARCHITECT
        assert next_role(Role.TESTER, Phase.CODE, test_driven=False) is Role.IMPLEMENTER


class TestResolvePhase:
    """Tests for resolve_phase."""

    def test_manager_uses_declaration(self):
        assert resolve_phase(Role.MANAGER, Phase.DESIGN) is Phase.DESIGN

    def test_manager_defaults_to_analysis(self):
        assert resolve_phase(Role.MANAGER, None) is Phase.ANALYSIS

    def test_analyst_always_hands_to_design(self):
        assert resolve_phase(Role.ANALYST, None) is Phase.DESIGN
        assert resolve_phase(Role.ANALYST, Phase.CODE) is Phase.DESIGN

    def test_architect_depends_on_mode(self):
        assert resolve_phase(Role.ARCHITECT, None) is Phase.TEST
        assert resolve_phase(Role.ARCHITECT, None, test_driven=False) is Phase.CODE

    def test_implementer_tdd_retests(self):
        assert resolve_phase(Role.IMPLEMENTER, None) is Phase.RETEST

    def test_implementer_may_declare_review(self):
        assert resolve_phase(Role.IMPLEMENTER, Phase.REVIEW) is Phase.REVIEW

    def test_implementer_non_tdd_reviews(self):
        assert resolve_phase(Role.IMPLEMENTER, Phase.RETEST, test_driven=False) is Phase.REVIEW

    def test_implementer_reviews_when_retests_exhausted(self):
        phase = resolve_phase(Role.IMPLEMENTER, Phase.RETEST, retest_exhausted=True)
        assert phase is Phase.REVIEW

    def test_tester_defaults_to_code(self):
        assert resolve_phase(Role.TESTER, None) is Phase.CODE
        assert resolve_phase(Role.TESTER, Phase.REVIEW) is Phase.REVIEW

    def test_reviewer_and_deployer_defaults(self):
        assert resolve_phase(Role.REVIEWER, None) is Phase.DEPLOY
        assert resolve_phase(Role.REVIEWER, Phase.DONE) is Phase.DONE
        assert resolve_phase(Role.DEPLOYER, None) is Phase.DONE


class TestWorkerPolicies:
    """Tests for per-worker input filters and model purposes."""

    def test_every_worker_role_has_policies(self):
        workers = set(Role) - {Role.USER}
        assert set(WORKER_INPUT_ROLES) == workers
        assert set(WORKER_PURPOSE) == workers

    def test_manager_sees_everything(self):
        assert WORKER_INPUT_ROLES[Role.MANAGER] is None

    def test_analyst_sees_user_and_manager(self):
        assert WORKER_INPUT_ROLES[Role.ANALYST] == {Role.USER, Role.MANAGER}

    def test_implementer_does_not_see_analyst(self):
        assert Role.ANALYST not in WORKER_INPUT_ROLES[Role.IMPLEMENTER]

    def test_purposes(self):
        assert WORKER_PURPOSE[Role.ARCHITECT] is ModelPurpose.THINK
        assert WORKER_PURPOSE[Role.IMPLEMENTER] is ModelPurpose.DEV
