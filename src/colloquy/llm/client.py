"""Remote text-generation client.

Wraps one provider behind the single capability the session needs: turn a
prompt plus a fixed behavioural instruction into text. Hides which provider
is configured and whether it could be initialized at all.
"""

import asyncio
import logging
from typing import Any

import httpx

from ..config import BackendConfig
from .base import LLMProvider
from .errors import InitializationError, TransportError
from .factory import create_llm_provider
from .models import ChatMessage

logger = logging.getLogger(__name__)


class TextGenerationClient:
    """One request/response exchange with the remote backend per call.

    Build it with ``initialize`` (raises on bad configuration) or with
    ``create_client`` (degrades to an unavailable client instead). A client
    that failed initialization never becomes available later.
    """

    def __init__(
        self,
        provider: LLMProvider | None,
        temperature: float = 0.7,
        max_tokens: int | None = None,
        unavailable_reason: str | None = None,
    ) -> None:
        self._provider = provider
        self._temperature = temperature
        self._max_tokens = max_tokens
        self._unavailable_reason = unavailable_reason

    @classmethod
    def initialize(cls, config: BackendConfig) -> "TextGenerationClient":
        """Construct a ready client from configuration.

        Raises:
            InitializationError: Missing credential, unknown provider, or a
                provider SDK that rejects the configuration
        """
        if not config.api_key or not config.api_key.strip():
            raise InitializationError(f"No API key configured for provider '{config.provider}'")

        provider_config: dict[str, Any] = {
            "api_key": config.api_key.strip(),
            "timeout": config.timeout,
        }
        if config.model:
            provider_config["model"] = config.model
        if config.base_url:
            provider_config["base_url"] = config.base_url

        try:
            provider = create_llm_provider(config.provider, **provider_config)
        except (ValueError, TypeError) as e:
            raise InitializationError(str(e)) from e

        logger.info("Initialized %s backend (model: %s)", config.provider, provider.model)
        return cls(provider, temperature=config.temperature, max_tokens=config.max_tokens)

    @classmethod
    def unavailable(cls, reason: str) -> "TextGenerationClient":
        """A client that permanently reports itself unavailable."""
        return cls(None, unavailable_reason=reason)

    def is_available(self) -> bool:
        """Whether initialization succeeded."""
        return self._provider is not None

    @property
    def unavailable_reason(self) -> str | None:
        return self._unavailable_reason

    @property
    def model(self) -> str | None:
        """Default model of the underlying provider, None when unavailable."""
        return self._provider.model if self._provider is not None else None

    async def generate(self, prompt: str, behavior_instruction: str) -> str:
        """Send ``prompt`` with the fixed instruction and return the reply text.

        The returned string may be empty when the backend produced no usable
        text; deciding what to show instead is up to the caller.

        Raises:
            InitializationError: If the client is unavailable
            TransportError: On network failure, timeout or remote rejection
        """
        if self._provider is None:
            raise InitializationError(self._unavailable_reason or "Backend client is unavailable")

        messages = []
        if behavior_instruction:
            messages.append(ChatMessage(role="system", content=behavior_instruction))
        messages.append(ChatMessage(role="user", content=prompt))

        logger.debug("Sending %d-character prompt to %s", len(prompt), self._provider.model)
        try:
            response = await self._provider.chat_completion(
                messages,
                temperature=self._temperature,
                max_tokens=self._max_tokens,
            )
        except TransportError:
            raise
        except (asyncio.TimeoutError, httpx.HTTPError) as e:
            raise TransportError(f"Request to {self._provider.model} failed: {e}") from e

        if response.usage:
            logger.debug("Token usage: %s", response.usage)
        return response.content

    async def close(self) -> None:
        """Release the provider's connections."""
        if self._provider is not None:
            await self._provider.close()

    async def __aenter__(self) -> "TextGenerationClient":
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        await self.close()


def create_client(config: BackendConfig) -> TextGenerationClient:
    """Initialize the backend once, degrading to unavailable mode on failure.

    Never raises for credential problems; the returned client reports
    ``is_available() == False`` instead.
    """
    try:
        return TextGenerationClient.initialize(config)
    except InitializationError as e:
        logger.warning("Backend unavailable: %s", e)
        return TextGenerationClient.unavailable(str(e))
