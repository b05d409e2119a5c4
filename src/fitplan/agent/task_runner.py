"""Runs an agent task to completion and collects its text output."""

import logging

from fitplan.agent.client import AgentClient

logger = logging.getLogger(__name__)


class TaskExecutionError(RuntimeError):
    """Raised when an agent task cannot start or its event stream fails."""


async def run_task_to_text(agent: AgentClient, prompt: str, model: str) -> str:
    """
    Run *prompt* on *agent* and return the concatenated text it generated.

    Parameters
    ----------
    agent:
        The shared agent client.
    prompt:
        Instruction text passed verbatim to the provider.
    model:
        Model identifier understood by the agent's provider.

    Returns
    -------
    str
        Content of every ``text`` event joined in the order received, untrimmed.  Empty when the
        stream produced no text.

    Raises
    ------
    TaskExecutionError
        If starting the task or any step of the event stream raises.
    """
    parts: list[str] = []
    ignored = 0

    try:
        async for event in agent.run_task(prompt, model):
            if event.type == "text":
                parts.append(event.content)
            else:
                ignored += 1
                logger.debug("Skipping %s event: %s", event.type, event)
    except Exception as exc:  # noqa: BLE001
        logger.exception("Agent task failed with model '%s'", model)
        raise TaskExecutionError(f"Agent task failed: {exc}") from exc

    text = "".join(parts)
    logger.info(
        "Agent task finished: %d text events (%d chars), %d other events",
        len(parts),
        len(text),
        ignored,
    )
    return text
