"""Process-wide agent handle shared by every request."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import AsyncIterator

from pydantic import (
    BaseModel,
    Field,
)

from fitplan.agent.providers import ModelProvider
from fitplan.core.schema import AgentEvent

logger = logging.getLogger(__name__)


class AgentContext(BaseModel, frozen=True):
    """Where the agent runs."""

    working_directory: Path = Field(..., description="Directory the agent treats as its workspace")


def create_agent_context(path: str | Path) -> AgentContext:
    """Build an :class:`AgentContext` rooted at *path*, which must be an existing directory."""
    working_directory = Path(path).expanduser().resolve()
    if not working_directory.is_dir():
        raise ValueError(f"Agent working directory does not exist: {working_directory}")
    return AgentContext(working_directory=working_directory)


class AgentClient:
    """
    Runs prompts against a model provider and exposes the result as an event stream.

    One instance is created at startup and shared by all in-flight requests.  It keeps no
    per-task state, so concurrent ``run_task`` calls do not interfere with each other.
    """

    def __init__(self, context: AgentContext, provider: ModelProvider) -> None:
        self.context = context
        self.provider = provider

    def run_task(self, prompt: str, model: str) -> AsyncIterator[AgentEvent]:
        """
        Start a task and return its events.

        The returned iterator is lazy, finite and single-use: nothing is sent to the provider
        until the first event is awaited, and it cannot be replayed once drained.
        """
        logger.debug(
            "Running task with model=%s in %s (%d prompt chars)",
            model,
            self.context.working_directory,
            len(prompt),
        )
        return self.provider.stream(prompt, model)
