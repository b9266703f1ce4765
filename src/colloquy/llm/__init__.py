from .base import LLMProvider
from .client import TextGenerationClient, create_client
from .errors import InitializationError, LLMError, TransportError
from .factory import create_llm_provider
from .models import ChatMessage, LLMResponse
from .providers import AnthropicProvider, DeepSeekProvider, GeminiProvider, OpenAIProvider

__all__ = [
    "LLMProvider",
    "TextGenerationClient",
    "create_client",
    "create_llm_provider",
    "ChatMessage",
    "LLMResponse",
    "LLMError",
    "InitializationError",
    "TransportError",
    "AnthropicProvider",
    "DeepSeekProvider",
    "GeminiProvider",
    "OpenAIProvider",
]
