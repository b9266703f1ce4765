"""
Central logging configuration.

Call `configure_logging()` once at application startup.
Use `logger = logging.getLogger(__name__)` inside modules.
"""

import logging

from rich.console import Console
from rich.logging import RichHandler

NOISY_LOGGERS = ("httpx", "httpcore", "google_genai", "anthropic", "openai")


def configure_logging(level: str = "WARNING", console: Console | None = None) -> None:
    """
    Configure the root logger with a Rich handler.

    Parameters
    ----------
    level : str
        Minimum log level (e.g. "DEBUG", "INFO", "WARNING").
    console : rich.console.Console, optional
        Console to write to (defaults to stderr).
    """
    root = logging.getLogger()
    root.setLevel(level.upper())
    if any(isinstance(h, RichHandler) for h in root.handlers):
        # Avoid configuring twice
        return

    handler = RichHandler(
        console=console or Console(stderr=True),
        show_path=False,
        rich_tracebacks=True,
        log_time_format="[%H:%M:%S]",
    )
    handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))
    root.addHandler(handler)

    # Reduce noise from SDK internals
    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
