"""Client and session construction for CLI commands.

Centralizes creation of the backend client and the session controller from
environment variables. Hides configuration details from command
implementations.
"""

import logging

from rich.console import Console
from rich.markup import escape

from ..config import BackendConfig, load_backend_config
from ..llm import InitializationError, TextGenerationClient, create_client
from ..session import SessionController

logger = logging.getLogger(__name__)

# Default console for output
_console = Console()


def get_client(console: Console | None = None) -> tuple[BackendConfig | None, TextGenerationClient]:
    """Load the configuration and initialize the backend client once.

    Invalid settings and missing credentials are reported and yield an
    unavailable client instead of aborting, so the conversation can still
    start.

    Returns:
        (config, client); config is None when the environment could not be
        turned into a configuration
    """
    con = console or _console
    config: BackendConfig | None
    try:
        config = load_backend_config()
    except InitializationError as e:
        logger.warning("Invalid backend configuration: %s", e)
        config = None
        client = TextGenerationClient.unavailable(str(e))
    else:
        client = create_client(config)

    if not client.is_available():
        con.print(
            f"[yellow]Warning: {escape(client.unavailable_reason or 'backend unavailable')}. "
            f"The assistant will answer that it is unavailable.[/yellow]"
        )
    return config, client


def get_session(client: TextGenerationClient) -> SessionController:
    """Start a new conversation on ``client``."""
    return SessionController(client)
