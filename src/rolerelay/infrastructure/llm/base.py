"""PydanticAI-based worker adapters.

Provides the base class every LLM-backed worker derives from. PydanticAI
handles provider selection and structured output parsing with retries=0;
a failed call is turned into a fallback WorkerResult instead of an
exception, so the orchestrator can stop the chain without error handling.
"""

from __future__ import annotations

import logging
import time
from abc import abstractmethod
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Any, ClassVar, Generic, TypeVar

from pydantic_ai import Agent
from pydantic_ai.exceptions import UnexpectedModelBehavior
from pydantic_ai.models import Model
from pydantic_ai.settings import ModelSettings

from rolerelay.domain.interfaces import WorkerInterface
from rolerelay.domain.models import ConversationTurn, Phase, Role, Usage, WorkerResult
from rolerelay.domain.prompts import PromptTemplate

logger = logging.getLogger(__name__)

OutputT = TypeVar("OutputT")

ModelFactory = Callable[[str], "Model | str"]


@dataclass(frozen=True)
class WorkerSettings:
    """Connection settings shared by all PydanticAI workers.

    With neither base_url nor api_key set, plain identifiers use the OpenAI
    provider (OPENAI_API_KEY from the environment) and provider-prefixed
    identifiers ("anthropic:...") are resolved by PydanticAI.
    """

    base_url: str | None = None
    api_key: str | None = None
    timeout: float = 180.0
    temperature: float | None = None  # Reasoning models reject temperature


class PydanticAIWorker(WorkerInterface, Generic[OutputT]):
    """Base worker using a PydanticAI Agent.

    Subclasses must set:
    - role: The pipeline role this worker fills
    - output_type: str or a Pydantic model for structured output
    - default_prompt: PromptTemplate used when none is injected
    and implement _to_result to turn validated output into a WorkerResult.

    Example:
        class AnalystWorker(PydanticAIWorker[str]):
            role = Role.ANALYST
            output_type = str
            default_prompt = ANALYST_PROMPT

            def _to_result(self, output, usage, elapsed):
                return WorkerResult(text=output, usage=usage, time_taken_seconds=elapsed)
    """

    role: ClassVar[Role]
    output_type: ClassVar[type[Any]]
    default_prompt: ClassVar[PromptTemplate]

    # Returned when the model call fails
    fallback_text: ClassVar[str] = "Something went wrong, please try again."
    fallback_phase: ClassVar[Phase | None] = None

    def __init__(
        self,
        template: PromptTemplate | None = None,
        settings: WorkerSettings | None = None,
        model_factory: ModelFactory | None = None,
    ):
        """
        Args:
            template: Prompt template (defaults to the class default_prompt)
            settings: Provider connection settings
            model_factory: Builds the PydanticAI model for an identifier.
                Overrides provider selection (used by tests with TestModel).
        """
        self._template = template or self.default_prompt
        self._settings = settings or WorkerSettings()
        self._model_factory = model_factory
        self._models: dict[str, Model | str] = {}

        # retries=0: a bad output becomes a fallback result, not a re-ask
        self._agent: Agent[None, OutputT] = Agent(
            output_type=self.output_type,
            instructions=self._template.instructions(),
            retries=0,
        )

    @property
    def template(self) -> PromptTemplate:
        return self._template

    async def run(
        self,
        conversation: Sequence[ConversationTurn],
        model: str,
    ) -> WorkerResult:
        """Run the agent on the assembled conversation.

        Args:
            conversation: Prompt blocks from the assembler
            model: Model identifier

        Returns:
            WorkerResult built from validated output, or a fallback result
            (failed=True, zero usage) if the call failed
        """
        logger.info("[%s] Running with %s...", self.__class__.__name__, model)
        prompt = self._template.render(conversation)
        start = time.perf_counter()

        try:
            result = await self._agent.run(
                prompt,
                model=self._resolve_model(model),
                model_settings=self._model_settings(),
            )
        except UnexpectedModelBehavior as e:
            logger.warning(
                "[%s] Output validation failed: %s", self.__class__.__name__, e
            )
            return self._fallback(time.perf_counter() - start)
        except Exception as e:
            # Network, auth, timeout, provider errors
            logger.warning("[%s] Generation failed: %s", self.__class__.__name__, e)
            return self._fallback(time.perf_counter() - start)

        elapsed = time.perf_counter() - start
        run_usage = result.usage()
        usage = Usage(
            input_tokens=run_usage.input_tokens or 0,
            output_tokens=run_usage.output_tokens or 0,
        )
        logger.debug(
            "[%s] Done in %.2fs (%d in / %d out tokens)",
            self.__class__.__name__,
            elapsed,
            usage.input_tokens,
            usage.output_tokens,
        )
        return self._to_result(result.output, usage, elapsed)

    @abstractmethod
    def _to_result(self, output: OutputT, usage: Usage, elapsed: float) -> WorkerResult:
        """Convert validated output into a WorkerResult.

        Args:
            output: Validated agent output
            usage: Token usage of the call
            elapsed: Wall time in seconds

        Returns:
            The worker's result
        """
        pass

    def _fallback(self, elapsed: float) -> WorkerResult:
        return WorkerResult(
            text=self.fallback_text,
            declared_phase=self.fallback_phase,
            usage=Usage(),
            time_taken_seconds=elapsed,
            failed=True,
        )

    def _model_settings(self) -> ModelSettings:
        settings = ModelSettings(timeout=self._settings.timeout)
        if self._settings.temperature is not None:
            settings["temperature"] = self._settings.temperature
        return settings

    def _resolve_model(self, identifier: str) -> Model | str:
        """Build (once) the PydanticAI model for an identifier."""
        if identifier not in self._models:
            self._models[identifier] = self._build_model(identifier)
        return self._models[identifier]

    def _build_model(self, identifier: str) -> Model | str:
        if self._model_factory is not None:
            return self._model_factory(identifier)

        from pydantic_ai.models.openai import OpenAIChatModel

        base_url = self._settings.base_url
        api_key = self._settings.api_key

        if (base_url and "ollama" in base_url.lower()) or api_key == "ollama":
            from pydantic_ai.providers.ollama import OllamaProvider

            return OpenAIChatModel(
                model_name=identifier,
                provider=OllamaProvider(base_url=base_url),
            )

        if base_url or api_key:
            # Generic OpenAI-compatible APIs
            from pydantic_ai.providers.openai import OpenAIProvider

            return OpenAIChatModel(
                model_name=identifier,
                provider=OpenAIProvider(base_url=base_url, api_key=api_key),
            )

        if ":" in identifier:
            # Provider-prefixed, e.g. "anthropic:claude-sonnet-4-0"
            return identifier

        return OpenAIChatModel(model_name=identifier)
