"""Tests for ProjectSession."""

import asyncio

import pytest

from rolerelay.application.session import ProjectSession
from rolerelay.domain.exceptions import SessionNotFound
from rolerelay.domain.models import HaltReason, ModelTier, Phase, Role, Usage


class TestSubmit:
    """Tests for submitting user input."""

    def test_first_message_is_init(self, make_orchestrator, ok):
        session = ProjectSession("s1", make_orchestrator({Role.MANAGER: [ok(phase=Phase.DONE)]}))

        asyncio.run(session.submit("Build a slugify library"))

        first = session.messages[0]
        assert first.role is Role.USER
        assert first.phase is Phase.INIT
        assert first.content == "Build a slugify library"
        assert session.context.artifacts[Role.USER].text == "Build a slugify library"

    def test_later_messages_are_revise(self, make_orchestrator, ok):
        session = ProjectSession(
            "s1",
            make_orchestrator(
                {Role.MANAGER: [ok(phase=Phase.DONE), ok(phase=Phase.DONE)]}
            ),
        )

        asyncio.run(session.submit("first"))
        asyncio.run(session.submit("second"))

        user_phases = [m.phase for m in session.messages if m.role is Role.USER]
        assert user_phases == [Phase.INIT, Phase.REVISE]
        assert [m.sequence for m in session.messages] == [0, 1, 2, 3]

    def test_records_tier_on_user_message(self, make_orchestrator, ok):
        session = ProjectSession("s1", make_orchestrator({Role.MANAGER: [ok(phase=Phase.DONE)]}))
        asyncio.run(session.submit("go", tier=ModelTier.HIGH))
        assert session.messages[0].model == "HIGH"
        assert session.messages[1].model == "high-think"

    def test_returns_chain_result(self, make_orchestrator, ok):
        session = ProjectSession(
            "s1",
            make_orchestrator(
                {
                    Role.MANAGER: [ok(phase=Phase.CODE)],
                    Role.IMPLEMENTER: [ok(files={"index.ts": "export {}"})],
                },
                test_driven=False,
            ),
        )

        result = asyncio.run(session.submit("go"))

        assert result.halt_reason is HaltReason.NO_WORKER  # No reviewer registered
        assert [m.role for m in result.appended] == [Role.MANAGER, Role.IMPLEMENTER]
        assert session.latest_files() == {"index.ts": "export {}"}


class TestPersistence:
    """Tests for saving and restoring sessions."""

    def test_saves_after_every_step(self, make_orchestrator, ok, memory_store):
        saved = []
        original_save = memory_store.save

        def recording_save(session_id, context, messages):
            saved.append(len(messages))
            original_save(session_id, context, messages)

        memory_store.save = recording_save
        session = ProjectSession(
            "s1",
            make_orchestrator(
                {Role.MANAGER: [ok(phase=Phase.ANALYSIS)], Role.ANALYST: [ok()]},
                max_steps=2,
            ),
            store=memory_store,
        )

        asyncio.run(session.submit("go"))

        assert saved == [1, 2, 3]

    def test_load_restores_state(self, make_orchestrator, ok, memory_store):
        orchestrator = make_orchestrator(
            {Role.MANAGER: [ok(phase=Phase.DONE, name="slugify"), ok(phase=Phase.DONE)]}
        )
        session = ProjectSession("s1", orchestrator, store=memory_store)
        asyncio.run(session.submit("first"))

        restored = ProjectSession.load("s1", orchestrator, memory_store)
        assert restored.context == session.context
        assert restored.messages == session.messages

        asyncio.run(restored.submit("second"))
        assert restored.messages[-2].phase is Phase.REVISE

    def test_load_missing(self, make_orchestrator, memory_store):
        with pytest.raises(SessionNotFound):
            ProjectSession.load("missing", make_orchestrator({}), memory_store)


class TestResume:
    """Tests for resuming a halted chain."""

    def test_resume_continues_from_last_message(self, make_orchestrator, ok):
        orchestrator = make_orchestrator(
            {
                Role.MANAGER: [ok(phase=Phase.ANALYSIS)],
                Role.ANALYST: [ok(), ok()],
                Role.ARCHITECT: [ok()],
            },
            max_steps=1,
        )
        session = ProjectSession("s1", orchestrator)

        first = asyncio.run(session.submit("go"))
        assert first.halt_reason is HaltReason.STEP_LIMIT

        second = asyncio.run(session.resume())
        assert [m.role for m in second.appended] == [Role.ANALYST]
        assert [m.role for m in session.messages] == [
            Role.USER,
            Role.MANAGER,
            Role.ANALYST,
        ]


class TestUsage:
    """Tests for usage aggregation."""

    def test_usage_per_role(self, make_orchestrator, ok):
        session = ProjectSession(
            "s1",
            make_orchestrator(
                {
                    Role.MANAGER: [
                        ok(phase=Phase.DONE, usage=Usage(5, 1)),
                        ok(phase=Phase.DONE, usage=Usage(7, 2)),
                    ]
                }
            ),
        )
        asyncio.run(session.submit("a"))
        asyncio.run(session.submit("b"))

        usage = session.usage()
        assert usage[Role.MANAGER] == Usage(12, 3)
        assert usage[Role.USER] == Usage()

    def test_latest_files_empty_without_output(self, make_orchestrator):
        session = ProjectSession("s1", make_orchestrator({}))
        assert session.latest_files() == {}
        assert session.latest_files(Role.TESTER) == {}

    def test_latest_files_are_raw(self, make_orchestrator, ok):
        session = ProjectSession(
            "s1",
            make_orchestrator(
                {
                    Role.MANAGER: [ok(phase=Phase.CODE)],
                    Role.IMPLEMENTER: [
                        ok(files={"main.py": "print(1)\n", "pkg/__init__.py": ""})
                    ],
                },
                test_driven=False,
            ),
        )
        asyncio.run(session.submit("go"))
        assert session.latest_files() == {"main.py": "print(1)\n", "pkg/__init__.py": ""}
