"""Custom Textual widgets for the TUI.

Hides widget implementation details:
- Input history management
- Status line formatting
- Log rendering and level filtering
- Chat message rendering and scrolling
"""

from datetime import datetime

from textual.containers import Horizontal, Vertical, VerticalScroll
from textual.events import Click
from textual.message import Message as TextualMessage
from textual.widgets import Button, Markdown, RichLog, Static, TextArea

from ..session import Message, Role
from .config import (
    INPUT_HISTORY_MAX_SIZE,
    LOG_MAX_MESSAGE_LENGTH,
    LOG_TIMESTAMP_FORMAT,
    MESSAGE_TIMESTAMP_FORMAT,
    THINKING_LABEL,
    LogLevel,
)


class ClickableMessage(Vertical):
    """A chat message container that copies its text when clicked."""

    def __init__(self, content: str, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._content = content

    def on_click(self, event: Click) -> None:
        event.stop()
        self.app.copy_to_clipboard(self._content)
        self.app.notify("Copied to clipboard", timeout=2)


class ChatInputBar(Horizontal):
    """Chat input bar with TextArea and Send button.

    Ctrl+J or the Send button submits. Up/Down at the edges of the text
    walk through previously sent inputs.
    """

    class Submitted(TextualMessage):
        """Posted when the user submits input."""

        def __init__(self, value: str) -> None:
            super().__init__()
            self.value = value

    class DraftChanged(TextualMessage):
        """Posted whenever the text being typed changes."""

        def __init__(self, value: str) -> None:
            super().__init__()
            self.value = value

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._history: list[str] = []
        self._history_index: int = -1

    def compose(self):
        text_area = TextArea(id="chat-input", show_line_numbers=False)
        text_area.cursor_blink = False
        yield text_area
        yield Button("Send", id="send-btn", variant="success").with_tooltip(
            "Send message (Ctrl+J)"
        )

    def on_mount(self) -> None:
        text_area = self.query_one("#chat-input", TextArea)
        text_area.highlight_cursor_line = False
        text_area.focus()

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "send-btn":
            self._submit()

    def on_text_area_changed(self, event: TextArea.Changed) -> None:
        event.stop()
        self.post_message(self.DraftChanged(event.text_area.text))

    def on_key(self, event) -> None:
        """Handle keyboard shortcuts.

        Note: ctrl+enter cannot work in terminals (terminal doesn't pass
        ctrl/shift modifiers with Enter). Use ctrl+j as the submit shortcut.
        """
        if event.key == "ctrl+j":
            self._submit()
            event.prevent_default()
            event.stop()
        elif event.key == "up" and self._is_cursor_at_start():
            self._navigate_history(-1)
            event.prevent_default()
            event.stop()
        elif event.key == "down" and self._is_cursor_at_end():
            self._navigate_history(1)
            event.prevent_default()
            event.stop()

    def _is_cursor_at_start(self) -> bool:
        text_area = self.query_one("#chat-input", TextArea)
        return text_area.cursor_location == (0, 0)

    def _is_cursor_at_end(self) -> bool:
        text_area = self.query_one("#chat-input", TextArea)
        lines = text_area.text.split("\n")
        return text_area.cursor_location == (len(lines) - 1, len(lines[-1]))

    def _navigate_history(self, direction: int) -> None:
        if not self._history:
            return
        text_area = self.query_one("#chat-input", TextArea)
        if direction < 0:
            if self._history_index == -1:
                self._history_index = len(self._history) - 1
            elif self._history_index > 0:
                self._history_index -= 1
        else:
            if self._history_index == -1:
                return
            if self._history_index < len(self._history) - 1:
                self._history_index += 1
            else:
                self._history_index = -1
                text_area.text = ""
                return
        text_area.text = self._history[self._history_index]

    def _submit(self) -> None:
        value = self.query_one("#chat-input", TextArea).text
        if value.strip():
            self.post_message(self.Submitted(value))

    def accept_input(self, value: str) -> None:
        """Record ``value`` in the input history and empty the text area."""
        value = value.strip()
        if value and (not self._history or self._history[-1] != value):
            self._history.append(value)
            del self._history[:-INPUT_HISTORY_MAX_SIZE]
        self._history_index = -1
        self.query_one("#chat-input", TextArea).text = ""

    def set_busy(self, busy: bool) -> None:
        """Disable the Send button while a request is in flight."""
        self.query_one("#send-btn", Button).disabled = busy

    def focus_input(self) -> None:
        self.query_one("#chat-input", TextArea).focus()


class StatusBar(Static):
    """One-line status: backend, availability, request state and message count."""

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._model = "unknown"
        self._available = True
        self._pending = False
        self._message_count = 0

    def on_mount(self) -> None:
        self._update_display()

    def update_status(
        self,
        model: str | None = None,
        available: bool | None = None,
        pending: bool | None = None,
        message_count: int | None = None,
    ) -> None:
        """Update any subset of the displayed fields."""
        if model is not None:
            self._model = model
        if available is not None:
            self._available = available
        if pending is not None:
            self._pending = pending
        if message_count is not None:
            self._message_count = message_count
        self._update_display()

    def _update_display(self) -> None:
        if not self._available:
            backend = "[bold red]unavailable[/]"
        else:
            backend = f"[bold green]{self._model}[/]"

        state = f"[bold yellow]{THINKING_LABEL}[/]" if self._pending else "[dim]Ready[/]"
        self.update(
            f"[bold cyan]Backend:[/] {backend}  "
            f"[bold cyan]State:[/] {state}  "
            f"[bold cyan]Messages:[/] {self._message_count}"
        )


class LogPanel(RichLog):
    """Log panel showing application log records with level filtering.

    Hidden by default, shown with --log-level or toggled with Ctrl+D.
    """

    BORDER_TITLE = "Log"

    LEVEL_COLORS = {
        LogLevel.DEBUG: "dim white",
        LogLevel.INFO: "cyan",
        LogLevel.WARNING: "yellow",
        LogLevel.ERROR: "red",
    }

    def __init__(self, *args, log_level: int = LogLevel.INFO, **kwargs) -> None:
        super().__init__(
            *args,
            markup=True,
            highlight=False,
            auto_scroll=True,
            wrap=True,
            **kwargs
        )
        self._log_level = log_level
        self.display = False

    @property
    def log_level(self) -> int:
        """Current log level threshold."""
        return self._log_level

    @log_level.setter
    def log_level(self, level: int) -> None:
        self._log_level = level
        self._update_subtitle()

    def _update_subtitle(self) -> None:
        if self.display:
            self.border_subtitle = f"Level: {LogLevel.name(self._log_level)}"
        else:
            self.border_subtitle = "Hidden"

    def on_mount(self) -> None:
        self._update_subtitle()

    def add_entry(self, component: str, message: str, level: int = LogLevel.INFO) -> None:
        """Add a log entry if it meets the current level threshold."""
        if level < self._log_level:
            return

        from rich.markup import escape

        if len(message) > LOG_MAX_MESSAGE_LENGTH:
            message = message[:LOG_MAX_MESSAGE_LENGTH] + "..."

        timestamp = datetime.now().strftime(LOG_TIMESTAMP_FORMAT)
        color = self.LEVEL_COLORS.get(level, "red" if level > LogLevel.ERROR else "white")
        self.write(
            f"[dim]{timestamp}[/] "
            f"[{color}]{LogLevel.name(level):<5}[/] "
            f"[magenta]\\[{escape(component)}][/] {escape(message)}"
        )

    def show(self) -> None:
        self.display = True
        self._update_subtitle()

    def hide(self) -> None:
        self.display = False
        self._update_subtitle()

    def toggle(self) -> bool:
        """Toggle visibility. Returns new state."""
        if self.display:
            self.hide()
            return False
        self.show()
        return True


class ChatHistoryWidget(VerticalScroll):
    """Scrollable rendering of the session log.

    Only messages it has not rendered yet are mounted, so re-syncing with a
    longer snapshot appends at the bottom.
    """

    BORDER_TITLE = "Chat"
    BORDER_SUBTITLE = "Conversation"
    ALLOW_SELECT = True

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._messages: list[Message] = []
        self._rendered_ids: set[str] = set()

    @property
    def message_count(self) -> int:
        return len(self._messages)

    def sync(self, log: tuple[Message, ...]) -> int:
        """Render the messages of ``log`` not shown yet.

        Scrolling to the newest message is deferred until after the next
        refresh, when the new content has a size.

        Returns:
            Number of newly rendered messages
        """
        new_messages = [msg for msg in log if msg.id not in self._rendered_ids]
        for msg in new_messages:
            self._rendered_ids.add(msg.id)
            self._messages.append(msg)
            self._render_message(msg)

        if new_messages:
            self.border_subtitle = f"{len(self._messages)} messages"
            self.call_after_refresh(self.scroll_end, animate=False)
        return len(new_messages)

    def get_last_response(self) -> str | None:
        """Get the last assistant response."""
        for msg in reversed(self._messages):
            if msg.role == Role.ASSISTANT:
                return msg.text
        return None

    def _render_message(self, msg: Message) -> None:
        if msg.role == Role.USER:
            header_text = f"> You [{msg.created_at.strftime(MESSAGE_TIMESTAMP_FORMAT)}]"
            border_class = "user-message"
            body = Static(msg.text, markup=False, classes="message-content")
        else:
            header_text = f"< Assistant [{msg.created_at.strftime(MESSAGE_TIMESTAMP_FORMAT)}]"
            border_class = "assistant-message"
            body = Markdown(msg.text, classes="message-content")

        container = ClickableMessage(content=msg.text, classes=f"chat-message {border_class}")
        container.compose_add_child(Static(header_text, markup=False, classes="message-header"))
        container.compose_add_child(body)
        self.mount(container)
