"""
Async HTTP executor for the inference API.

This module sends authenticated JSON requests, classifies failed responses
into ZaiError kinds, retries transient failures, and opens SSE streams.
"""

from __future__ import annotations

import json
from typing import Any, TypeVar

import httpx
from loguru import logger
from opentelemetry import trace
from pydantic import BaseModel, ValidationError

from .context import RunContext
from .errors import ErrorKind, ZaiError, classify_error
from .retry import RetryPolicy, retry_async
from .streaming import EventStream

ModelT = TypeVar("ModelT", bound=BaseModel)

DEFAULT_TIMEOUT = 300.0
DEFAULT_SOURCE_CHANNEL = "python-sdk"

_tracer = trace.get_tracer("zai_client")


class ServiceHttpClient:
    """HTTP executor shared by every API service of a client.

    Features:
    - Connection pooling via httpx.AsyncClient (own or injected)
    - Authorization, source-channel and correlation headers on every call
    - Custom headers applied last, overriding the defaults
    - Linear-backoff retry on transient failures
    - SSE streaming with a single attempt

    Example:
        http = ServiceHttpClient("https://api.z.ai/api/paas/v4", api_key="...")
        async with http:
            result = await http.post("/embeddings", body=request,
                                     response_model=EmbeddingsResponse)
    """

    def __init__(
        self,
        base_url: str,
        api_key: str,
        source_channel: str = DEFAULT_SOURCE_CHANNEL,
        custom_headers: dict[str, str] | None = None,
        timeout: float = DEFAULT_TIMEOUT,
        retry_policy: RetryPolicy | None = None,
        http_client: httpx.AsyncClient | None = None,
        max_connections: int = 100,
        max_keepalive: int = 20,
    ):
        """Initialize the HTTP executor.

        Args:
            base_url: Base URL for all requests.
            api_key: Credential sent as a bearer token.
            source_channel: Value of the x-source-channel header.
            custom_headers: Headers applied verbatim after the defaults.
            timeout: Default timeout in seconds (for an owned transport).
            retry_policy: Retry configuration. Uses default if None.
            http_client: Transport to use. When None, one is created lazily
                and closed by close().
            max_connections: Maximum total connections in an owned pool.
            max_keepalive: Maximum keepalive connections in an owned pool.
        """
        self.base_url = base_url.rstrip("/")
        self.source_channel = source_channel
        self.custom_headers = dict(custom_headers or {})
        self.timeout = timeout
        self.retry_policy = retry_policy or RetryPolicy()
        self._api_key = api_key

        self._limits = httpx.Limits(
            max_connections=max_connections,
            max_keepalive_connections=max_keepalive,
            keepalive_expiry=30.0,
        )
        self._client: httpx.AsyncClient | None = http_client
        self._owns_client = http_client is None

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create the HTTP client.

        Returns:
            The shared httpx.AsyncClient instance.
        """
        if self._client is None:
            self._client = httpx.AsyncClient(
                timeout=self.timeout,
                limits=self._limits,
            )
        return self._client

    async def close(self) -> None:
        """Close the HTTP client if this executor created it."""
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> "ServiceHttpClient":
        """Enter async context manager."""
        await self._get_client()
        return self

    async def __aexit__(self, *args: Any) -> None:
        """Exit async context manager."""
        await self.close()

    def _build_url(self, path: str) -> str:
        """Build full URL from path.

        Args:
            path: Request path (with or without leading slash).

        Returns:
            Full URL including base_url.
        """
        path = path.lstrip("/")
        return f"{self.base_url}/{path}"

    def _build_headers(self, context: RunContext, stream: bool = False) -> httpx.Headers:
        """Assemble request headers.

        Args:
            context: RunContext providing the correlation header.
            stream: Whether to ask for an event stream.

        Returns:
            Headers with custom headers applied last.
        """
        headers = httpx.Headers(
            {
                "Content-Type": "application/json",
                "Authorization": f"Bearer {self._api_key}",
                "x-source-channel": self.source_channel,
            }
        )
        headers.update(context.get_headers())
        if stream:
            headers["Accept"] = "text/event-stream"

        # Case-insensitive replace, so custom headers win
        for key, value in self.custom_headers.items():
            headers[key] = value
        return headers

    @staticmethod
    def _encode_body(body: Any) -> bytes | None:
        """Serialize a request body to JSON.

        Pydantic models are dumped without None fields, so absent optional
        values never reach the wire.

        Raises:
            ZaiError: CONFIGURATION if the body cannot be serialized.
        """
        if body is None:
            return None
        try:
            if isinstance(body, BaseModel):
                payload = body.model_dump(mode="json", exclude_none=True, by_alias=True)
            else:
                payload = body
            return json.dumps(payload).encode("utf-8")
        except (TypeError, ValueError) as e:
            raise ZaiError(
                kind=ErrorKind.CONFIGURATION,
                message=f"failed to marshal request body: {e}",
                cause=e,
            ) from e

    async def request_once(
        self,
        method: str,
        path: str,
        context: RunContext,
        content: bytes | None = None,
        response_model: type[ModelT] | None = None,
        attempt: int = 1,
    ) -> ModelT | None:
        """Make a single HTTP request without retry.

        Args:
            method: HTTP method (GET, POST, etc.).
            path: Request path.
            context: RunContext for header injection and correlation.
            content: Request body already encoded by _encode_body().
            response_model: Model to decode a successful body into. When
                None the body is read and discarded.
            attempt: Attempt number, recorded on the trace span.

        Returns:
            The decoded response model, or None without a response_model.

        Raises:
            ZaiError: Classified failure for this attempt.
        """
        client = await self._get_client()

        with _tracer.start_as_current_span(f"zai {method} {path}") as span:
            span.set_attribute("http.method", method)
            span.set_attribute("zai.path", path)
            span.set_attribute("zai.attempt", attempt)
            span.set_attribute("zai.request_id", context.request_id)
            try:
                return await self._send_and_decode(
                    client, method, path, context, content, response_model
                )
            except ZaiError as e:
                span.set_attribute("zai.error_kind", e.kind.value)
                raise

    async def _send_and_decode(
        self,
        client: httpx.AsyncClient,
        method: str,
        path: str,
        context: RunContext,
        content: bytes | None,
        response_model: type[ModelT] | None,
    ) -> ModelT | None:
        try:
            response = await client.request(
                method=method,
                url=self._build_url(path),
                headers=self._build_headers(context),
                content=content,
            )
        except httpx.RequestError as e:
            raise ZaiError(
                kind=ErrorKind.TIMEOUT,
                message=f"request failed: {e!r}",
                cause=e,
            ) from e

        logger.debug(f"[{context.request_id}] {method} {path} -> {response.status_code}")

        if response.status_code >= 400:
            raise classify_error(response.status_code, response.content)

        if response_model is None:
            return None

        try:
            return response_model.model_validate_json(response.content)
        except ValidationError as e:
            raise ZaiError(
                kind=ErrorKind.DECODE,
                message=f"failed to unmarshal response: {e.error_count()} validation error(s)",
                cause=e,
            ) from e

    async def request(
        self,
        method: str,
        path: str,
        context: RunContext | None = None,
        body: Any = None,
        response_model: type[ModelT] | None = None,
        retry_policy: RetryPolicy | None = None,
    ) -> ModelT | None:
        """Make an HTTP request with header injection and retry.

        Args:
            method: HTTP method (GET, POST, etc.).
            path: Request path.
            context: RunContext for correlation. Generated if None.
            body: Optional request body.
            response_model: Model to decode the success body into.
            retry_policy: Overrides the executor's policy for this call.

        Returns:
            The decoded response, or None without a response_model.

        Raises:
            ZaiError: The last attempt's error once retries are exhausted,
                or the first non-retryable error.
        """
        ctx = context or RunContext.new()
        content = self._encode_body(body)
        attempts = 0

        async def attempt() -> ModelT | None:
            nonlocal attempts
            attempts += 1
            return await self.request_once(
                method,
                path,
                ctx,
                content=content,
                response_model=response_model,
                attempt=attempts,
            )

        return await retry_async(
            attempt,
            retry_policy or self.retry_policy,
            name=f"{method} {path} [{ctx.request_id}]",
        )

    async def get(
        self,
        path: str,
        context: RunContext | None = None,
        **kwargs: Any,
    ) -> Any:
        """Make a GET request.

        Args:
            path: Request path.
            context: RunContext for correlation.
            **kwargs: Additional arguments (response_model, retry_policy).

        Returns:
            The decoded response.
        """
        return await self.request("GET", path, context, **kwargs)

    async def post(
        self,
        path: str,
        context: RunContext | None = None,
        **kwargs: Any,
    ) -> Any:
        """Make a POST request.

        Args:
            path: Request path.
            context: RunContext for correlation.
            **kwargs: Additional arguments (body, response_model, ...).

        Returns:
            The decoded response.
        """
        return await self.request("POST", path, context, **kwargs)

    async def open_stream(
        self,
        path: str,
        model: type[ModelT],
        context: RunContext | None = None,
        body: Any = None,
        method: str = "POST",
    ) -> EventStream[ModelT]:
        """Open an SSE stream with a single attempt.

        Streams are never retried: once chunks reach the caller, a repeat
        attempt could duplicate observed output.

        Args:
            path: Request path.
            model: Model each data frame is decoded into.
            context: RunContext for correlation. Generated if None.
            body: Optional request body.
            method: HTTP method.

        Returns:
            An EventStream owning the open response.

        Raises:
            ZaiError: TIMEOUT on transport failure, or the classified error
                for a >= 400 response.
        """
        ctx = context or RunContext.new()
        content = self._encode_body(body)
        client = await self._get_client()

        with _tracer.start_as_current_span(f"zai stream {method} {path}") as span:
            span.set_attribute("http.method", method)
            span.set_attribute("zai.path", path)
            span.set_attribute("zai.request_id", ctx.request_id)

            request = client.build_request(
                method,
                self._build_url(path),
                headers=self._build_headers(ctx, stream=True),
                content=content,
            )
            try:
                response = await client.send(request, stream=True)
            except httpx.RequestError as e:
                span.set_attribute("zai.error_kind", ErrorKind.TIMEOUT.value)
                raise ZaiError(
                    kind=ErrorKind.TIMEOUT,
                    message=f"request failed: {e!r}",
                    cause=e,
                ) from e

            if response.status_code >= 400:
                try:
                    raw = await response.aread()
                except httpx.RequestError as e:
                    raise ZaiError(
                        kind=ErrorKind.TIMEOUT,
                        message=f"failed to read error response: {e!r}",
                        status_code=response.status_code,
                        cause=e,
                    ) from e
                finally:
                    await response.aclose()
                error = classify_error(response.status_code, raw)
                span.set_attribute("zai.error_kind", error.kind.value)
                raise error

        logger.debug(f"[{ctx.request_id}] Stream opened: {method} {path}")
        return EventStream(response, model, request_id=ctx.request_id)
