"""
Schema definitions for the events an agent emits while running a task.

These data models are the contract between model providers, the agent client and the task runner.
We keep them separate from runtime logic so they can be imported anywhere without side-effects.
"""

from typing import (
    Annotated,
    Literal,
    Optional,
    Union,
)

from pydantic import (
    BaseModel,
    Field,
)


class TextEvent(BaseModel):
    """A fragment of generated text, in the order the provider produced it."""

    type: Literal["text"] = "text"
    content: str = Field(..., description="Text fragment")


class UsageEvent(BaseModel):
    """Token accounting reported by the provider once generation finishes."""

    type: Literal["usage"] = "usage"
    input_tokens: int = 0
    output_tokens: int = 0


class StopEvent(BaseModel):
    """Generation ended; *reason* is the provider's stop/finish reason if it gave one."""

    type: Literal["stop"] = "stop"
    reason: Optional[str] = None


AgentEvent = Annotated[Union[TextEvent, UsageEvent, StopEvent], Field(discriminator="type")]
"""Tagged union of everything ``AgentClient.run_task`` can yield."""
