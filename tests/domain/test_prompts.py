"""Tests for domain prompts - PromptTemplate."""

from rolerelay.domain.models import ConversationTurn
from rolerelay.domain.prompts import PromptTemplate


class TestPromptTemplate:
    """Tests for PromptTemplate rendering."""

    def test_init_stores_fields(self) -> None:
        template = PromptTemplate(
            role="TypeScript developer",
            constraints="No external imports",
            task="Write a function",
        )

        assert template.role == "TypeScript developer"
        assert template.constraints == "No external imports"
        assert template.task == "Write a function"

    def test_instructions_include_constraints(self) -> None:
        template = PromptTemplate(role="dev", constraints="be terse", task="t")
        assert template.instructions() == "# ROLE\ndev\n\n# CONSTRAINTS\nbe terse"

    def test_instructions_without_constraints(self) -> None:
        template = PromptTemplate(role="dev", constraints="", task="t")
        assert template.instructions() == "# ROLE\ndev"

    def test_render_with_conversation(self) -> None:
        template = PromptTemplate(role="dev", constraints="", task="Write code")
        rendered = template.render(
            [
                ConversationTurn(role="user", content="hello"),
                ConversationTurn(role="assistant", content="hi"),
            ]
        )
        assert rendered == (
            "# CONVERSATION HISTORY\nuser: hello\n\nassistant: hi\n\n# TASK\nWrite code"
        )

    def test_render_without_conversation(self) -> None:
        template = PromptTemplate(role="dev", constraints="", task="Write code")
        assert template.render([]) == "# TASK\nWrite code"
