"""Conversation session module.

Provides the message model and the single-request session state machine.
"""

from .constants import ERROR_TEXT, FALLBACK_TEXT, GREETING_TEXT, UNAVAILABLE_TEXT
from .controller import SessionController, SessionListener
from .models import Message, Role, SessionState

__all__ = [
    "ERROR_TEXT",
    "FALLBACK_TEXT",
    "GREETING_TEXT",
    "Message",
    "Role",
    "SessionController",
    "SessionListener",
    "SessionState",
    "UNAVAILABLE_TEXT",
]
