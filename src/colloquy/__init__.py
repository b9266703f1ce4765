"""
Colloquy: a single-conversation chat session controller for remote LLM backends.

Each module hides one design decision: the backend provider (llm),
the conversation state machine (session), how the assistant is instructed
(prompts) and how the conversation is presented (ui, cli).
"""

__version__ = "0.1.0"

from .llm import InitializationError, TextGenerationClient, TransportError, create_client
from .session import Message, Role, SessionController

__all__ = [
    "InitializationError",
    "Message",
    "Role",
    "SessionController",
    "TextGenerationClient",
    "TransportError",
    "create_client",
]
