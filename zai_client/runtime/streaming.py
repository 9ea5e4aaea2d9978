"""
Server-sent-event stream decoding.

EventStream wraps an open streaming httpx.Response and turns its
``data: <json>`` lines into typed chunks, one per ``next()`` call. The stream
ends at the ``[DONE]`` sentinel or when the server closes the connection.
The underlying response is released exactly once, however the stream ends.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, AsyncIterator, Generic, TypeVar

import httpx
from loguru import logger
from pydantic import BaseModel, ValidationError

from .errors import ErrorKind, ZaiError

ModelT = TypeVar("ModelT", bound=BaseModel)

DATA_PREFIX = "data: "
DONE_SENTINEL = "[DONE]"


class StreamState(str, Enum):
    """Lifecycle of an EventStream."""

    READING = "reading"
    EMITTING = "emitting"
    DONE = "done"
    CLOSED = "closed"


class EventStream(Generic[ModelT]):
    """Lazily decoded SSE stream of pydantic models.

    The stream is owned by the caller that opened it and is not meant to be
    consumed from several tasks at once.

    Example:
        async with await client.chat.create_stream(request) as stream:
            async for chunk in stream:
                print(chunk.choices[0].delta.content or "", end="")
    """

    def __init__(
        self,
        response: httpx.Response,
        model: type[ModelT],
        request_id: str | None = None,
    ):
        """Initialize the stream.

        Args:
            response: Open response returned by ``send(..., stream=True)``.
            model: Model each data frame is decoded into.
            request_id: Correlation ID used in log lines.
        """
        self._response = response
        self._model = model
        self._request_id = request_id or "-"
        self._lines: AsyncIterator[str] | None = None
        self._state = StreamState.READING
        self._released = False

    @property
    def state(self) -> StreamState:
        """Current lifecycle state."""
        return self._state

    @property
    def response(self) -> httpx.Response:
        """The underlying HTTP response."""
        return self._response

    async def next(self) -> ModelT | None:
        """Read up to the next data frame and decode it.

        Returns:
            The decoded chunk, or None once the stream has ended.

        Raises:
            ZaiError: STREAM_DECODE for a malformed frame, GENERIC when the
                connection fails mid-stream. Both end the stream.
        """
        if self._state in (StreamState.DONE, StreamState.CLOSED):
            return None

        self._state = StreamState.READING
        if self._lines is None:
            self._lines = self._response.aiter_lines()

        while True:
            try:
                line = await self._lines.__anext__()
            except StopAsyncIteration:
                # Connection closed without a sentinel
                await self._finish()
                return None
            except (httpx.RequestError, httpx.StreamError) as e:
                await self._finish()
                raise ZaiError(
                    kind=ErrorKind.GENERIC,
                    message=f"failed to read stream: {e}",
                    cause=e,
                ) from e

            line = line.strip()
            if not line or not line.startswith(DATA_PREFIX):
                continue

            data = line[len(DATA_PREFIX):]
            if data == DONE_SENTINEL:
                await self._finish()
                return None

            try:
                chunk = self._model.model_validate_json(data)
            except ValidationError as e:
                await self._finish()
                raise ZaiError(
                    kind=ErrorKind.STREAM_DECODE,
                    message=f"failed to unmarshal chunk: {e.errors(include_url=False)[0]['msg']}",
                    cause=e,
                ) from e

            self._state = StreamState.EMITTING
            return chunk

    async def close(self) -> None:
        """Close the stream and release the connection. Idempotent."""
        if self._state is StreamState.CLOSED:
            return
        self._state = StreamState.CLOSED
        await self._release()

    async def _finish(self) -> None:
        self._state = StreamState.DONE
        await self._release()

    async def _release(self) -> None:
        if self._released:
            return
        self._released = True

        if self._lines is not None:
            aclose = getattr(self._lines, "aclose", None)
            if aclose is not None:
                await aclose()
        await self._response.aclose()
        logger.debug(f"[{self._request_id}] Stream released ({self._state.value})")

    def __aiter__(self) -> "EventStream[ModelT]":
        return self

    async def __anext__(self) -> ModelT:
        chunk = await self.next()
        if chunk is None:
            raise StopAsyncIteration
        return chunk

    async def __aenter__(self) -> "EventStream[ModelT]":
        """Enter async context manager."""
        return self

    async def __aexit__(self, *args: Any) -> None:
        """Exit async context manager."""
        await self.close()
