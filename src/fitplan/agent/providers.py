"""
Model providers for fitplan.

This module is the only place that *directly* calls an LLM.  Everything else (agent client, task
runner, HTTP routes) only sees the :data:`~fitplan.core.schema.AgentEvent` stream a provider yields.

We support two back-ends out of the box:

1. **Anthropic** Messages API (default, requires ``ANTHROPIC_API_KEY``).
2. **OpenAI** Chat Completions API (requires ``OPENAI_API_KEY``).

Additional providers can be added by subclassing :class:`ModelProvider` and registering via
:func:`register_provider`.
"""

import logging
from abc import (
    ABC,
    abstractmethod,
)
from typing import (
    Any,
    AsyncIterator,
    Callable,
    ClassVar,
    Type,
)

from fitplan.config import settings
from fitplan.core.schema import (
    AgentEvent,
    StopEvent,
    TextEvent,
    UsageEvent,
)

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Registry helpers
# ---------------------------------------------------------------------------
_PROVIDER_REGISTRY: dict[str, Type["ModelProvider"]] = {}


def register_provider(name: str) -> Callable:
    """Decorator to register a provider class under *name*."""

    def wrapper(cls: Type["ModelProvider"]) -> Type["ModelProvider"]:
        _PROVIDER_REGISTRY[name] = cls
        return cls

    return wrapper


def get_provider_class(name: str | None = None) -> Type["ModelProvider"]:
    """
    Look up a registered provider class.

    Fallback order:
    1. *name* arg
    2. ``settings.MODEL_PROVIDER`` env/.env option
    """
    target = name or settings.MODEL_PROVIDER
    cls = _PROVIDER_REGISTRY.get(target.lower())
    if cls is None:
        raise ValueError(f"Model provider '{target}' is not registered.")
    return cls


def load_provider(name: str | None, api_key: str) -> "ModelProvider":
    """Factory that returns an instantiated provider holding *api_key*."""
    return get_provider_class(name)(api_key=api_key)


# ---------------------------------------------------------------------------
# Base class
# ---------------------------------------------------------------------------
class ModelProvider(ABC):
    """Abstract provider that turns a prompt into a stream of agent events."""

    # Environment variable holding the provider credential
    API_KEY_ENV: ClassVar[str]
    # Model used when neither the caller nor settings name one
    DEFAULT_MODEL: ClassVar[str]

    def __init__(self, api_key: str, max_tokens: int | None = None) -> None:
        self.api_key = api_key
        self.max_tokens = max_tokens or settings.MAX_TOKENS

    @abstractmethod
    def stream(self, prompt: str, model: str) -> AsyncIterator[AgentEvent]:
        """Yield events for a single-turn generation of *prompt* with *model*."""


# ---------------------------------------------------------------------------
# Concrete providers
# ---------------------------------------------------------------------------
@register_provider("anthropic")
class AnthropicModelProvider(ModelProvider):
    """Anthropic Claude provider using the async streaming Messages API."""

    API_KEY_ENV = "ANTHROPIC_API_KEY"
    DEFAULT_MODEL = "claude-sonnet-4-20250514"

    def __init__(self, api_key: str, max_tokens: int | None = None) -> None:
        super().__init__(api_key, max_tokens)
        import anthropic  # pylint: disable=import-outside-toplevel

        self.client: Any = anthropic.AsyncAnthropic(api_key=api_key)

    async def stream(self, prompt: str, model: str) -> AsyncIterator[AgentEvent]:
        async with self.client.messages.stream(
            model=model,
            max_tokens=self.max_tokens,
            messages=[{"role": "user", "content": prompt}],
        ) as stream:
            async for event in stream:
                # Only text deltas carry content; block/message bookkeeping events are skipped
                if event.type == "text":
                    yield TextEvent(content=event.text)

            message = await stream.get_final_message()

        logger.debug(
            "Anthropic stream finished (stop_reason=%s, usage=%s)", message.stop_reason, message.usage
        )
        yield UsageEvent(
            input_tokens=message.usage.input_tokens,
            output_tokens=message.usage.output_tokens,
        )
        yield StopEvent(reason=message.stop_reason)


@register_provider("openai")
class OpenAIModelProvider(ModelProvider):
    """OpenAI provider using streamed chat completions."""

    API_KEY_ENV = "OPENAI_API_KEY"
    DEFAULT_MODEL = "gpt-4o-mini"

    def __init__(self, api_key: str, max_tokens: int | None = None) -> None:
        super().__init__(api_key, max_tokens)
        import openai  # pylint: disable=import-outside-toplevel

        self.client: Any = openai.AsyncOpenAI(api_key=api_key)

    async def stream(self, prompt: str, model: str) -> AsyncIterator[AgentEvent]:
        chunks = await self.client.chat.completions.create(
            model=model,
            max_tokens=self.max_tokens,
            messages=[{"role": "user", "content": prompt}],
            stream=True,
            stream_options={"include_usage": True},
        )

        async for chunk in chunks:
            for choice in chunk.choices:
                if choice.delta.content:
                    yield TextEvent(content=choice.delta.content)
                if choice.finish_reason:
                    yield StopEvent(reason=choice.finish_reason)

            # With include_usage the final chunk has no choices and carries the totals
            if chunk.usage is not None:
                yield UsageEvent(
                    input_tokens=chunk.usage.prompt_tokens,
                    output_tokens=chunk.usage.completion_tokens,
                )
