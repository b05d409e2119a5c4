"""Shared fixtures: a scripted model provider and an app serving a temporary front-end."""

from pathlib import Path
from typing import (
    AsyncIterator,
    Iterable,
    List,
    Tuple,
)

import pytest
from fastapi.testclient import TestClient

from fitplan.agent.client import (
    AgentClient,
    create_agent_context,
)
from fitplan.agent.providers import ModelProvider
from fitplan.api.app import create_app
from fitplan.core.schema import AgentEvent

TEST_MODEL = "test-model"


class ScriptedProvider(ModelProvider):
    """Provider that replays a fixed list of events, then optionally raises."""

    API_KEY_ENV = "SCRIPTED_API_KEY"
    DEFAULT_MODEL = TEST_MODEL

    def __init__(self, events: Iterable[AgentEvent] = (), error: Exception | None = None) -> None:
        super().__init__(api_key="test-key")
        self.events = list(events)
        self.error = error
        self.calls: List[Tuple[str, str]] = []

    async def stream(self, prompt: str, model: str) -> AsyncIterator[AgentEvent]:
        self.calls.append((prompt, model))
        for event in self.events:
            yield event
        if self.error is not None:
            raise self.error


@pytest.fixture
def provider() -> ScriptedProvider:
    """Provider with no scripted events; tests fill in ``events``/``error``."""
    return ScriptedProvider()


@pytest.fixture
def agent(provider: ScriptedProvider, tmp_path: Path) -> AgentClient:
    """Agent client backed by the scripted provider."""
    return AgentClient(create_agent_context(tmp_path), provider)


@pytest.fixture
def public_root(tmp_path: Path) -> Path:
    """A small front-end: index page, script, stylesheet and an image."""
    root = tmp_path / "public"
    root.mkdir()
    (root / "index.html").write_text("<h1>Weekly plan</h1>", encoding="utf-8")
    (root / "app.js").write_text("console.log('plan');", encoding="utf-8")
    (root / "style.css").write_text("body { margin: 0; }", encoding="utf-8")
    (root / "logo.png").write_bytes(b"\x89PNG\r\n")
    (root / "assets").mkdir()
    return root


@pytest.fixture
def client(agent: AgentClient, public_root: Path) -> TestClient:
    """Test client for an app wired to the scripted agent."""
    return TestClient(create_app(agent, model=TEST_MODEL, public_root=public_root))
