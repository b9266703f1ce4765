"""Backend configuration.

Hides where the backend settings come from. Values are read once at process
start from the environment (optionally populated from a .env file by the CLI)
and frozen for the process lifetime.
"""

import os
from collections.abc import Mapping

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .llm.errors import InitializationError

DEFAULT_PROVIDER = "gemini"
DEFAULT_TIMEOUT = 60.0

# provider -> (api key variable, model variable)
PROVIDER_ENV_VARS = {
    "gemini": ("GEMINI_API_KEY", "GEMINI_MODEL"),
    "anthropic": ("ANTHROPIC_API_KEY", "ANTHROPIC_MODEL"),
    "claude": ("ANTHROPIC_API_KEY", "ANTHROPIC_MODEL"),
    "openai": ("OPENAI_API_KEY", "OPENAI_CHAT_MODEL"),
    "deepseek": ("DEEPSEEK_API_KEY", "DEEPSEEK_MODEL"),
}

_FIELD_ENV_VARS = {"timeout": "LLM_TIMEOUT", "temperature": "LLM_TEMPERATURE"}


class BackendConfig(BaseModel):
    """Static description of the remote text-generation backend."""

    model_config = ConfigDict(frozen=True)

    provider: str = Field(default=DEFAULT_PROVIDER, description="Provider name")
    api_key: str | None = Field(default=None, repr=False, description="Provider credential")
    model: str | None = Field(default=None, description="Model identifier, None for the provider default")
    base_url: str | None = Field(default=None, description="Custom API base URL")
    timeout: float = Field(default=DEFAULT_TIMEOUT, gt=0, description="Transport timeout in seconds")
    temperature: float = Field(default=0.7, ge=0.0, le=2.0)
    max_tokens: int | None = Field(default=None, ge=1)


def _float_var(env: Mapping[str, str], name: str, default: float) -> float:
    raw = env.get(name)
    if raw is None or not raw.strip():
        return default
    try:
        return float(raw)
    except ValueError:
        raise InitializationError(f"{name} must be a number, got {raw!r}") from None


def load_backend_config(environ: Mapping[str, str] | None = None) -> BackendConfig:
    """Build a BackendConfig from environment variables.

    Args:
        environ: Mapping to read from (defaults to os.environ)

    Returns:
        Frozen BackendConfig. A missing API key is not an error here; it is
        detected when the client is initialized.

    Raises:
        InitializationError: If a variable cannot be parsed or is out of
            range. Callers treat this like any other initialization failure
            and run with the backend unavailable.

    Environment variables:
        LLM_PROVIDER: gemini, anthropic, openai or deepseek (default: gemini)
        GEMINI_API_KEY / GEMINI_MODEL
        ANTHROPIC_API_KEY / ANTHROPIC_MODEL
        OPENAI_API_KEY / OPENAI_CHAT_MODEL
        DEEPSEEK_API_KEY / DEEPSEEK_MODEL
        LLM_BASE_URL: Optional custom endpoint
        LLM_TIMEOUT: Request timeout in seconds (default: 60)
        LLM_TEMPERATURE: Sampling temperature (default: 0.7)
    """
    env = os.environ if environ is None else environ

    provider = env.get("LLM_PROVIDER", DEFAULT_PROVIDER).strip().lower() or DEFAULT_PROVIDER
    key_var, model_var = PROVIDER_ENV_VARS.get(provider, (None, None))

    try:
        return BackendConfig(
            provider=provider,
            api_key=env.get(key_var) if key_var else None,
            model=(env.get(model_var) or None) if model_var else None,
            base_url=env.get("LLM_BASE_URL") or None,
            timeout=_float_var(env, "LLM_TIMEOUT", DEFAULT_TIMEOUT),
            temperature=_float_var(env, "LLM_TEMPERATURE", 0.7),
        )
    except ValidationError as e:
        problems = "; ".join(
            f"{_FIELD_ENV_VARS.get(str(err['loc'][0]), err['loc'][0])}: {err['msg']}"
            for err in e.errors()
        )
        raise InitializationError(f"Invalid backend configuration: {problems}") from e
