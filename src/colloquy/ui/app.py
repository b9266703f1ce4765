"""Main Textual TUI application.

Renders a SessionController: the controller tells the app about every state
change, the app redraws the chat, the input affordances and the status line.
"""

import asyncio
import logging

from textual import work
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Vertical
from textual.widgets import Footer, Header

from ..session import Message, SessionController
from .config import LogLevel
from .log_handler import PanelLogHandler
from .styles import APP_CSS
from .themes import COLLOQUY_DARK
from .widgets import ChatHistoryWidget, ChatInputBar, LogPanel, StatusBar

logger = logging.getLogger(__name__)


class ColloquyApp(App):
    """Textual chat interface for one conversation."""

    CSS = APP_CSS
    TITLE = "Colloquy"

    BINDINGS = [
        Binding("ctrl+c", "quit", "Quit"),
        Binding("ctrl+r", "copy_last_response", "Copy Response"),
        Binding("ctrl+d", "toggle_log", "Log"),
    ]

    def __init__(
        self,
        controller: SessionController,
        model_name: str | None = None,
        log_level: str | None = None,
    ) -> None:
        super().__init__()
        self._controller = controller
        self._model_name = model_name or "unknown"
        self._log_level = log_level
        self._log_handler: PanelLogHandler | None = None
        self._unsubscribe = None

    def compose(self) -> ComposeResult:
        yield Header(show_clock=True)
        yield ChatHistoryWidget(id="chat-history")
        yield LogPanel(id="log-panel")
        with Vertical(id="bottom-bar"):
            yield StatusBar(id="status")
            yield ChatInputBar(id="chat-input-bar")
        yield Footer()

    def on_mount(self) -> None:
        self.register_theme(COLLOQUY_DARK)
        self.theme = "colloquy-dark"

        log_panel = self.query_one("#log-panel", LogPanel)
        if self._log_level is not None:
            log_panel.log_level = LogLevel.from_string(self._log_level)
            log_panel.show()
        self._log_handler = PanelLogHandler(log_panel, self)
        logging.getLogger().addHandler(self._log_handler)

        self.sub_title = self._model_name if self._controller.is_available else "backend unavailable"
        self.query_one("#status", StatusBar).update_status(
            model=self._model_name,
            available=self._controller.is_available,
        )

        self._unsubscribe = self._controller.subscribe(self._on_session_changed)
        self._on_session_changed(self._controller.log, self._controller.pending)

        if not self._controller.is_available:
            self.notify("Backend unavailable - check your API key", severity="warning", timeout=5)
        self.query_one("#chat-input-bar", ChatInputBar).focus_input()

    def on_unmount(self) -> None:
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None
        if self._log_handler is not None:
            logging.getLogger().removeHandler(self._log_handler)
            self._log_handler = None

    def _on_session_changed(self, log: tuple[Message, ...], pending: bool) -> None:
        """Controller listener: redraw from the new snapshot."""
        chat = self.query_one("#chat-history", ChatHistoryWidget)
        chat.sync(log)
        chat.set_class(pending, "pending")
        self.query_one("#chat-input-bar", ChatInputBar).set_busy(pending)
        self.query_one("#status", StatusBar).update_status(
            pending=pending,
            message_count=len(log),
        )

    def on_chat_input_bar_draft_changed(self, event: ChatInputBar.DraftChanged) -> None:
        self._controller.update_draft(event.value)

    def on_chat_input_bar_submitted(self, event: ChatInputBar.Submitted) -> None:
        """Handle user input submission."""
        if self._controller.pending:
            self.notify("Please wait for the current reply", severity="warning", timeout=2)
            return
        self.query_one("#chat-input-bar", ChatInputBar).accept_input(event.value)
        self._send(event.value)

    # Not exclusive: a second worker must never cancel the request in flight
    @work(group="session", exit_on_error=False)
    async def _send(self, text: str) -> None:
        await self._controller.submit(text)

    def action_copy_last_response(self) -> None:
        """Copy last assistant response to clipboard."""
        chat = self.query_one("#chat-history", ChatHistoryWidget)
        response = chat.get_last_response()
        if response:
            self.copy_to_clipboard(response)
            self.notify("Response copied")
        else:
            self.notify("No response to copy", severity="warning")

    def action_toggle_log(self) -> None:
        """Toggle the log panel visibility."""
        log_panel = self.query_one("#log-panel", LogPanel)
        is_visible = log_panel.toggle()
        self.notify(f"Log panel {'shown' if is_visible else 'hidden'}", timeout=2)


async def run_textual_tui(
    controller: SessionController,
    model_name: str | None = None,
    log_level: str | None = None,
) -> None:
    """Run the Textual TUI.

    Args:
        controller: Session to display
        model_name: Backend model shown in the header and status line
        log_level: Log level for panel (debug/info/warning/error), None to hide
    """
    app = ColloquyApp(controller, model_name=model_name, log_level=log_level)
    try:
        await app.run_async()
    except (KeyboardInterrupt, asyncio.CancelledError):
        pass
