"""Anthropic Claude LLM provider implementation.

Uses the official Anthropic Python SDK for async chat completions.
Reference: https://github.com/anthropics/anthropic-sdk-python
"""

from typing import Any

import anthropic
from anthropic import AsyncAnthropic

from ..base import LLMProvider
from ..errors import TransportError
from ..models import ChatMessage, LLMResponse


class AnthropicProvider(LLMProvider):
    """Anthropic Claude LLM provider implementation.

    Hidden design decisions:
    - Anthropic API client initialization (SDK retries disabled)
    - Message format conversion (system message handling)
    - Mapping anthropic.APIError to TransportError
    """

    def __init__(
        self,
        api_key: str,
        model: str = "claude-sonnet-4-20250514",
        base_url: str | None = None,
        timeout: float | None = None,
        **client_kwargs: Any
    ):
        """Initialize Anthropic provider.

        Args:
            api_key: Anthropic API key
            model: Default model to use (default: claude-sonnet-4-20250514)
            base_url: Optional custom API base URL
            timeout: Request timeout in seconds
            **client_kwargs: Additional kwargs for AsyncAnthropic client
        """
        self._model = model
        if timeout is not None:
            client_kwargs["timeout"] = timeout
        client_kwargs.setdefault("max_retries", 0)
        self._client = AsyncAnthropic(
            api_key=api_key,
            base_url=base_url,
            **client_kwargs
        )

    @property
    def model(self) -> str:
        """Get the default model name."""
        return self._model

    async def chat_completion(
        self,
        messages: list[ChatMessage],
        model: str | None = None,
        temperature: float = 0.7,
        max_tokens: int | None = None,
        **kwargs: Any
    ) -> LLMResponse:
        """Generate a chat completion using Anthropic Claude.

        Args:
            messages: System instruction and conversation turns
            model: Model to use (overrides default)
            temperature: Sampling temperature
            max_tokens: Maximum tokens to generate (default: 4096)
            **kwargs: Additional Anthropic-specific parameters

        Returns:
            LLMResponse with generated content

        Raises:
            TransportError: If the request fails
        """
        model_to_use = model or self._model

        system_message = None
        anthropic_messages = []

        for msg in messages:
            if msg.role == "system":
                system_message = msg.content
            else:
                anthropic_messages.append({
                    "role": msg.role,
                    "content": msg.content
                })

        request_params: dict[str, Any] = {
            "model": model_to_use,
            "messages": anthropic_messages,
            "temperature": temperature,
            "max_tokens": max_tokens or 4096,  # Anthropic requires max_tokens
            **kwargs
        }

        if system_message:
            request_params["system"] = system_message

        try:
            response = await self._client.messages.create(**request_params)
        except anthropic.APIError as e:
            raise TransportError(f"Anthropic request failed: {e}") from e

        usage = None
        if response.usage:
            usage = {
                "prompt_tokens": response.usage.input_tokens,
                "completion_tokens": response.usage.output_tokens,
                "total_tokens": response.usage.input_tokens + response.usage.output_tokens
            }

        # Join text blocks; tool or thinking blocks carry no text
        content = "".join(
            block.text for block in response.content if getattr(block, "text", None)
        )

        return LLMResponse(
            content=content,
            model=response.model,
            usage=usage
        )

    async def close(self) -> None:
        """Close the Anthropic client."""
        await self._client.close()
