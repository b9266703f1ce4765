"""Terminal UI module for colloquy.

Provides a Textual-based TUI that renders a SessionController.

Module structure (each module hides a design decision):
- widgets.py: Custom widgets (chat rendering, input bar, status, log panel)
- styles.py: CSS styling (layout decisions)
- themes.py: Color palettes and theme configuration
- log_handler.py: How log records reach the log panel
- app.py: Application orchestration (user interaction flow)
"""

from .app import ColloquyApp, run_textual_tui
from .config import LogLevel
from .log_handler import PanelLogHandler
from .widgets import ChatHistoryWidget, ChatInputBar, LogPanel, StatusBar

__all__ = [
    "ChatHistoryWidget",
    "ChatInputBar",
    "ColloquyApp",
    "LogLevel",
    "LogPanel",
    "PanelLogHandler",
    "StatusBar",
    "run_textual_tui",
]
