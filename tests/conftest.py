"""Pytest configuration and shared fixtures."""
import asyncio
import os
from typing import Any

import pytest

from colloquy.llm import ChatMessage, LLMProvider, LLMResponse, TextGenerationClient
from colloquy.session import Message, SessionController

BEHAVIOR = "You are a test assistant."


class ScriptedProvider(LLMProvider):
    """In-process provider that replays scripted replies or errors.

    Each entry of ``script`` is either a reply string or an exception
    instance to raise. When ``gate`` is set, every call waits for it first.
    """

    def __init__(self, script: list[Any] | None = None, gate: asyncio.Event | None = None):
        self.script = list(script or [])
        self.gate = gate
        self.calls: list[list[ChatMessage]] = []
        self.closed = False

    @property
    def model(self) -> str:
        return "scripted-model"

    async def chat_completion(
        self,
        messages: list[ChatMessage],
        model: str | None = None,
        temperature: float = 0.7,
        max_tokens: int | None = None,
        **kwargs: Any
    ) -> LLMResponse:
        self.calls.append(list(messages))
        if self.gate is not None:
            await self.gate.wait()
        step = self.script.pop(0) if self.script else "ok"
        if isinstance(step, BaseException):
            raise step
        return LLMResponse(content=step, model=self.model)

    async def close(self) -> None:
        self.closed = True


class Recorder:
    """Session listener that keeps every notification."""

    def __init__(self) -> None:
        self.events: list[tuple[tuple[Message, ...], bool]] = []

    def __call__(self, log: tuple[Message, ...], pending: bool) -> None:
        self.events.append((log, pending))

    @property
    def pending_flags(self) -> list[bool]:
        return [pending for _, pending in self.events]


@pytest.fixture
def make_session():
    """Build a (controller, provider, recorder) triple around a scripted provider."""
    def _make(script: list[Any] | None = None, gate: asyncio.Event | None = None):
        provider = ScriptedProvider(script, gate=gate)
        controller = SessionController(TextGenerationClient(provider), behavior_instruction=BEHAVIOR)
        recorder = Recorder()
        controller.subscribe(recorder)
        return controller, provider, recorder

    return _make


@pytest.fixture(scope="session")
def api_keys():
    """Return API keys from environment."""
    return {
        "gemini": os.getenv("GEMINI_API_KEY"),
        "anthropic": os.getenv("ANTHROPIC_API_KEY"),
        "openai": os.getenv("OPENAI_API_KEY"),
    }


@pytest.fixture
def clean_env(monkeypatch):
    """Remove every backend-related variable from the environment."""
    for name in (
        "LLM_PROVIDER", "LLM_BASE_URL", "LLM_TIMEOUT", "LLM_TEMPERATURE",
        "GEMINI_API_KEY", "GEMINI_MODEL",
        "ANTHROPIC_API_KEY", "ANTHROPIC_MODEL",
        "OPENAI_API_KEY", "OPENAI_CHAT_MODEL",
        "DEEPSEEK_API_KEY", "DEEPSEEK_MODEL",
    ):
        monkeypatch.delenv(name, raising=False)
    return monkeypatch
