"""Tests for the Textual interface."""
import asyncio

import pytest
from textual.widgets import Button, TextArea

from colloquy.llm import TextGenerationClient
from colloquy.session import GREETING_TEXT, SessionController
from colloquy.ui import ChatHistoryWidget, ColloquyApp, LogLevel, LogPanel

from conftest import BEHAVIOR, ScriptedProvider


def _make_app(script=None, gate=None):
    provider = ScriptedProvider(script, gate=gate)
    controller = SessionController(TextGenerationClient(provider), behavior_instruction=BEHAVIOR)
    return ColloquyApp(controller, model_name=provider.model), controller


class TestLogLevel:
    """Tests for LogLevel helpers."""

    def test_from_string(self):
        assert LogLevel.from_string("INFO") == LogLevel.INFO
        assert LogLevel.from_string("nonsense") == LogLevel.DEBUG

    def test_name_rounds_down(self):
        assert LogLevel.name(LogLevel.WARNING) == "WARN"
        assert LogLevel.name(50) == "ERROR"
        assert LogLevel.name(5) == "DEBUG"


class TestColloquyApp:
    """Pilot tests for ColloquyApp."""

    @pytest.mark.asyncio
    async def test_greeting_rendered_on_mount(self):
        app, _ = _make_app()
        async with app.run_test() as pilot:
            await pilot.pause()
            chat = app.query_one("#chat-history", ChatHistoryWidget)

            assert chat.message_count == 1
            assert chat.get_last_response() == GREETING_TEXT
            assert app.query_one("#send-btn", Button).disabled is False

    @pytest.mark.asyncio
    async def test_reply_rendered_after_submit(self):
        app, controller = _make_app(["Hi there"])
        async with app.run_test() as pilot:
            await controller.submit("hello")
            await pilot.pause()
            chat = app.query_one("#chat-history", ChatHistoryWidget)

            assert chat.message_count == 3
            assert chat.get_last_response() == "Hi there"

    @pytest.mark.asyncio
    async def test_send_disabled_while_pending(self):
        gate = asyncio.Event()
        app, controller = _make_app(["done"], gate=gate)
        async with app.run_test() as pilot:
            task = asyncio.create_task(controller.submit("hello"))
            await pilot.pause()

            assert controller.pending is True
            assert app.query_one("#send-btn", Button).disabled is True
            assert app.query_one("#chat-history").has_class("pending")

            gate.set()
            await task
            await pilot.pause()

            assert app.query_one("#send-btn", Button).disabled is False
            assert not app.query_one("#chat-history").has_class("pending")

    @pytest.mark.asyncio
    async def test_ctrl_j_while_pending_keeps_log_and_input(self):
        """Submitting from the keyboard during a request leaves the log alone."""
        gate = asyncio.Event()
        app, controller = _make_app(["first reply", "second reply"], gate=gate)
        async with app.run_test() as pilot:
            task = asyncio.create_task(controller.submit("hello"))
            await pilot.pause()
            before = controller.log

            text_area = app.query_one("#chat-input", TextArea)
            text_area.text = "again"
            text_area.focus()
            await pilot.press("ctrl+j")
            await pilot.pause()

            assert controller.log == before
            assert controller.pending is True
            assert "again" in text_area.text

            gate.set()
            await task
            await pilot.pause()

            assert [m.text for m in controller.log[1:]] == ["hello", "first reply"]
            assert app.query_one("#chat-history", ChatHistoryWidget).message_count == 3

    @pytest.mark.asyncio
    async def test_log_panel_shown_with_log_level(self):
        provider = ScriptedProvider()
        controller = SessionController(TextGenerationClient(provider), behavior_instruction=BEHAVIOR)
        app = ColloquyApp(controller, log_level="debug")
        async with app.run_test() as pilot:
            await pilot.pause()
            panel = app.query_one("#log-panel", LogPanel)

            assert panel.display is True
            assert panel.log_level == LogLevel.DEBUG
