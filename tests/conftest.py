from __future__ import annotations

import sys
from pathlib import Path
from typing import Callable, List

import pytest
from fastapi.testclient import TestClient
from langchain_core.messages import AIMessage

ROOT_DIR = Path(__file__).resolve().parents[1]
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

from medcrew.models.messages import ConversationTurn, Sender  # noqa: E402
from medcrew.services.app_state import AppState  # noqa: E402

# Modules that resolve a chat model at call time, and the accessors they use.
MODEL_ACCESSORS = {
    "medcrew.agents.triage_graph": [
        "get_router_model",
        "get_clarifier_model",
        "get_triage_model",
    ],
    "medcrew.agents.document_agent": ["get_vision_model", "get_assistant_model"],
    "medcrew.agents.drug_agent": ["get_assistant_model"],
    "medcrew.agents.insight_agent": ["get_assistant_model"],
}


class ScriptedLLM:
    """Chat model stand-in that replays canned replies and records prompts."""

    def __init__(self, replies: List):
        self.replies = list(replies)
        self.prompts: List = []

    async def ainvoke(self, messages):
        self.prompts.append(messages[-1].content)
        reply = self.replies.pop(0)
        if isinstance(reply, Exception):
            raise reply
        return AIMessage(content=reply)

    @property
    def calls(self) -> int:
        return len(self.prompts)


@pytest.fixture
def scripted_llm(monkeypatch) -> Callable[..., ScriptedLLM]:
    def _install(*replies) -> ScriptedLLM:
        llm = ScriptedLLM(list(replies))
        for module, names in MODEL_ACCESSORS.items():
            for name in names:
                monkeypatch.setattr(f"{module}.{name}", lambda: llm)
        return llm

    return _install


@pytest.fixture
def transcript() -> Callable[..., List[ConversationTurn]]:
    """Build a transcript from alternating ("p"|"a", text) pairs."""

    def _make(*turns) -> List[ConversationTurn]:
        return [
            ConversationTurn(
                sender=Sender.PATIENT if who == "p" else Sender.ASSISTANT, text=text
            )
            for who, text in turns
        ]

    return _make


@pytest.fixture
def store() -> AppState:
    return AppState()


@pytest.fixture
def client():
    import main

    with TestClient(main.app) as test_client:
        yield test_client


@pytest.fixture
def png_data_url() -> str:
    return "data:image/png;base64,iVBORw0KGgoAAAANSUhEUg=="
