"""Routes standard logging records into the TUI log panel.

Hides how the panel receives records: records logged from worker threads
are handed over with call_from_thread, records from the UI thread are
written directly.
"""

import logging
import threading
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from textual.app import App

    from .widgets import LogPanel


class PanelLogHandler(logging.Handler):
    """logging.Handler that writes into a LogPanel."""

    def __init__(self, panel: "LogPanel", app: "App", level: int = logging.NOTSET) -> None:
        super().__init__(level)
        self.panel = panel
        self.app = app
        self.setFormatter(logging.Formatter("%(message)s"))

    def emit(self, record: logging.LogRecord) -> None:
        try:
            message = self.format(record)
            component = record.name.rsplit(".", 1)[-1]
            if self.app._thread_id != threading.get_ident():
                self.app.call_from_thread(self.panel.add_entry, component, message, record.levelno)
            else:
                self.panel.add_entry(component, message, record.levelno)
        except Exception:
            self.handleError(record)
