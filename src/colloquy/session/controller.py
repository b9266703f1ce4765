"""Conversation state machine.

Hides how the message log and the in-flight request are managed. The
controller owns the log, allows at most one outstanding request, and tells
its listeners about every state transition:

    Idle --submit(text)--> Awaiting --completion--> Idle

Consumers render the snapshots they receive; anything that depends on the
rendered result (such as scrolling to the latest message) happens on the
consumer's side after its own render pass.
"""

import logging
from collections.abc import Callable

from ..llm import TextGenerationClient, TransportError
from ..prompts import get_behavior_instruction
from .constants import ERROR_TEXT, FALLBACK_TEXT, GREETING_TEXT, UNAVAILABLE_TEXT
from .models import Message, SessionState

logger = logging.getLogger(__name__)

SessionListener = Callable[[tuple[Message, ...], bool], None]


class SessionController:
    """Controller for one conversation with one backend.

    Example:
        controller = SessionController(create_client(config))
        controller.subscribe(lambda log, pending: render(log, pending))
        await controller.submit("hello")
    """

    def __init__(
        self,
        client: TextGenerationClient,
        behavior_instruction: str | None = None,
        greeting: str = GREETING_TEXT,
    ) -> None:
        """Start a conversation seeded with the assistant greeting.

        Args:
            client: Backend client, possibly in unavailable mode
            behavior_instruction: Instruction sent with every request
                (defaults to the packaged behaviour prompt)
            greeting: Text of the initial assistant message
        """
        self._client = client
        if behavior_instruction is None:
            behavior_instruction = get_behavior_instruction()
        self._behavior_instruction = behavior_instruction
        self._state = SessionState(log=[Message.assistant(greeting)])
        self._listeners: list[SessionListener] = []

    @property
    def log(self) -> tuple[Message, ...]:
        """Snapshot of the message log."""
        return self._state.snapshot()

    @property
    def pending(self) -> bool:
        """True while a request is in flight."""
        return self._state.pending

    @property
    def draft(self) -> str:
        return self._state.draft

    @property
    def is_available(self) -> bool:
        return self._client.is_available()

    def subscribe(self, listener: SessionListener) -> Callable[[], None]:
        """Register a listener called with (log, pending) after each transition.

        Returns:
            A function that removes the listener again
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def update_draft(self, text: str) -> None:
        """Record the text the user is currently typing."""
        self._state.draft = text

    async def submit(self, text: str) -> bool:
        """Send user text to the backend and record the reply.

        Blank text, or text submitted while a request is in flight, is
        dropped without touching the log or notifying anyone.

        Args:
            text: Raw user input

        Returns:
            True if the text was accepted, False if it was dropped
        """
        prompt = text.strip()
        if not prompt:
            return False
        if self._state.pending:
            logger.info("Request already in flight, dropping submission")
            return False

        # Guard and transition happen before the first await
        self._state.log.append(Message.user(prompt))
        self._state.draft = ""
        self._state.pending = True
        self._notify()

        if not self._client.is_available():
            logger.info("Backend unavailable, skipping request")
            self._complete(UNAVAILABLE_TEXT)
            return True

        reply_text = ERROR_TEXT
        try:
            reply = await self._client.generate(prompt, self._behavior_instruction)
        except TransportError as e:
            logger.warning("Generation failed: %s", e)
        except Exception:
            logger.exception("Unexpected error during generation")
        else:
            if reply and reply.strip():
                reply_text = reply.strip()
            else:
                logger.info("Backend returned an empty response, using fallback text")
                reply_text = FALLBACK_TEXT
        finally:
            self._complete(reply_text)
        return True

    def _complete(self, reply_text: str) -> None:
        """Awaiting -> Idle: append the assistant reply and clear pending."""
        self._state.log.append(Message.assistant(reply_text))
        self._state.pending = False
        self._notify()

    def _notify(self) -> None:
        snapshot = self._state.snapshot()
        pending = self._state.pending
        for listener in list(self._listeners):
            try:
                listener(snapshot, pending)
            except Exception:
                logger.exception("Session listener %r failed", listener)
