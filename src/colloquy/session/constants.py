"""Fixed assistant texts shown by the session.

None of these carry diagnostic detail; backend errors go to the log only.
"""

GREETING_TEXT = (
    "Hello! I'm your assistant. Ask me anything and I'll do my best to help."
)

# Backend answered but produced no usable text
FALLBACK_TEXT = "Sorry, I couldn't come up with a response to that. Could you try rephrasing?"

# A generation request failed
ERROR_TEXT = "Sorry, something went wrong while contacting the assistant. Please try again."

# The backend client could not be initialized at startup
UNAVAILABLE_TEXT = (
    "The assistant is currently unavailable because the backend is not configured. "
    "Please check the API key settings and restart."
)

FIXED_ASSISTANT_TEXTS = frozenset({GREETING_TEXT, FALLBACK_TEXT, ERROR_TEXT, UNAVAILABLE_TEXT})
