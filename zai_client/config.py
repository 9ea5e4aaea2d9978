"""
Client configuration for zai-client.

Settings reads ZAI_* environment variables (and a .env file). It is only
instantiated inside resolve_config(), which runs once when a client is
constructed and produces an immutable ClientConfig. Nothing here keeps
module-level mutable state.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from zai_client.runtime.errors import ErrorKind, ZaiError
from zai_client.runtime.http_client import DEFAULT_SOURCE_CHANNEL, DEFAULT_TIMEOUT
from zai_client.runtime.retry import DEFAULT_MAX_RETRIES

# Overseas regions
ZAI_BASE_URL = "https://api.z.ai/api/paas/v4"
# Mainland China regions
ZHIPUAI_BASE_URL = "https://open.bigmodel.cn/api/paas/v4"


class Settings(BaseSettings):
    """
    Environment-backed settings.

    Every field is optional; explicit constructor arguments take precedence.
    """

    API_KEY: str | None = None
    BASE_URL: str | None = None
    MAX_RETRIES: int | None = None
    TIMEOUT: float | None = None
    SOURCE_CHANNEL: str | None = None
    LOG_LEVEL: str = "INFO"
    LOG_JSON: bool = False

    model_config = SettingsConfigDict(
        env_prefix="ZAI_",
        env_file=".env",
        extra="ignore",
    )


class ClientConfig(BaseModel):
    """Resolved, immutable configuration owned by one client."""

    api_key: str
    base_url: str
    timeout: float = DEFAULT_TIMEOUT
    max_retries: int = Field(default=DEFAULT_MAX_RETRIES, ge=0)
    source_channel: str = DEFAULT_SOURCE_CHANNEL
    custom_headers: dict[str, str] = Field(default_factory=dict)
    disable_token_cache: bool = False

    model_config = {"frozen": True}


def _first(*values: Any) -> Any:
    """Return the first value that is neither None nor an empty string."""
    for value in values:
        if value is not None and value != "":
            return value
    return None


def resolve_config(
    default_base_url: str,
    api_key: str | None = None,
    base_url: str | None = None,
    timeout: float | None = None,
    max_retries: int | None = None,
    source_channel: str | None = None,
    custom_headers: dict[str, str] | None = None,
    disable_token_cache: bool = False,
    settings: Settings | None = None,
) -> ClientConfig:
    """Resolve client configuration once.

    Precedence for each value: explicit argument, then ZAI_* environment,
    then the built-in default. ``max_retries=0`` is honoured.

    Args:
        default_base_url: Base URL of the client variant.
        api_key: API key; falls back to ZAI_API_KEY.
        base_url: Base URL; falls back to ZAI_BASE_URL, then the default.
        timeout: Request timeout in seconds.
        max_retries: Additional attempts after the first one.
        source_channel: Value for the x-source-channel header.
        custom_headers: Headers applied on every request, last.
        disable_token_cache: Accepted for API compatibility; unused.
        settings: Pre-loaded settings (tests inject these).

    Returns:
        The resolved ClientConfig.

    Raises:
        ZaiError: CONFIGURATION when no API key is available.
    """
    env = settings or Settings()

    resolved_key = _first(api_key, env.API_KEY)
    if not resolved_key:
        raise ZaiError(
            kind=ErrorKind.CONFIGURATION,
            message="api_key not provided, please provide it through parameters or environment variables",
        )

    return ClientConfig(
        api_key=resolved_key,
        base_url=_first(base_url, env.BASE_URL, default_base_url),
        timeout=_first(timeout, env.TIMEOUT, DEFAULT_TIMEOUT),
        max_retries=_first(max_retries, env.MAX_RETRIES, DEFAULT_MAX_RETRIES),
        source_channel=_first(source_channel, env.SOURCE_CHANNEL, DEFAULT_SOURCE_CHANNEL),
        custom_headers=dict(custom_headers or {}),
        disable_token_cache=disable_token_cache,
    )
