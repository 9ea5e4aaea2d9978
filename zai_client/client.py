"""
Client entry points.

ZaiClient targets the overseas endpoint and ZhipuAiClient the mainland China
endpoint; otherwise they are identical. Configuration is resolved once, at
construction, and never changes afterwards.
"""

from __future__ import annotations

from typing import Any

import httpx
from loguru import logger

from zai_client.config import ZAI_BASE_URL, ZHIPUAI_BASE_URL, ClientConfig, Settings, resolve_config
from zai_client.runtime import RetryPolicy, ServiceHttpClient
from zai_client.services import ChatService, EmbeddingsService, ImagesService, VideosService


class BaseClient:
    """Shared implementation of the client variants.

    Attributes:
        config: The resolved, immutable configuration.
        chat: Chat completions.
        embeddings: Text embeddings.
        images: Image generation.
        videos: Video generation.
    """

    DEFAULT_BASE_URL = ZAI_BASE_URL

    def __init__(
        self,
        api_key: str | None = None,
        *,
        base_url: str | None = None,
        http_client: httpx.AsyncClient | None = None,
        timeout: float | None = None,
        max_retries: int | None = None,
        source_channel: str | None = None,
        custom_headers: dict[str, str] | None = None,
        disable_token_cache: bool = False,
        settings: Settings | None = None,
    ):
        """Initialize the client.

        Args:
            api_key: API key. Falls back to ZAI_API_KEY.
            base_url: Overrides ZAI_BASE_URL and the variant default.
            http_client: Transport to use. The client closes only a
                transport it created itself.
            timeout: Request timeout in seconds (default 300).
            max_retries: Retries after the first attempt (default 2).
            source_channel: x-source-channel header value.
            custom_headers: Headers added to every request, last.
            disable_token_cache: Accepted for compatibility; unused.
            settings: Pre-loaded environment settings.

        Raises:
            ZaiError: CONFIGURATION when no API key can be found.
        """
        self.config: ClientConfig = resolve_config(
            self.DEFAULT_BASE_URL,
            api_key=api_key,
            base_url=base_url,
            timeout=timeout,
            max_retries=max_retries,
            source_channel=source_channel,
            custom_headers=custom_headers,
            disable_token_cache=disable_token_cache,
            settings=settings,
        )

        self._http = ServiceHttpClient(
            base_url=self.config.base_url,
            api_key=self.config.api_key,
            source_channel=self.config.source_channel,
            custom_headers=self.config.custom_headers,
            timeout=self.config.timeout,
            retry_policy=RetryPolicy(max_retries=self.config.max_retries),
            http_client=http_client,
        )

        self.chat = ChatService(self._http)
        self.embeddings = EmbeddingsService(self._http)
        self.images = ImagesService(self._http)
        self.videos = VideosService(self._http)

        logger.debug(
            f"{type(self).__name__} initialized (base_url={self.config.base_url}, "
            f"max_retries={self.config.max_retries})"
        )

    @property
    def http(self) -> ServiceHttpClient:
        """The HTTP executor shared by all services."""
        return self._http

    async def close(self) -> None:
        """Close the HTTP client and release connections."""
        await self._http.close()

    async def __aenter__(self) -> "BaseClient":
        """Enter async context manager."""
        return self

    async def __aexit__(self, *args: Any) -> None:
        """Exit async context manager."""
        await self.close()


class ZaiClient(BaseClient):
    """Client for the Z.ai API (overseas regions)."""

    DEFAULT_BASE_URL = ZAI_BASE_URL


class ZhipuAiClient(BaseClient):
    """Client for the Zhipu AI API (mainland China regions)."""

    DEFAULT_BASE_URL = ZHIPUAI_BASE_URL
