"""
Chat completions service.

Both the one-shot and the streaming call normalize sampling parameters
before sending. Only the one-shot call is retried.
"""

from __future__ import annotations

from zai_client.domain.chat import (
    ChatCompletion,
    ChatCompletionChunk,
    ChatCompletionRequest,
    normalize_sampling,
)
from zai_client.runtime import EventStream, RunContext, ServiceHttpClient

CHAT_COMPLETIONS_PATH = "/chat/completions"

ChatCompletionStream = EventStream[ChatCompletionChunk]


class ChatService:
    """Chat completion operations.

    Example:
        completion = await client.chat.create(
            ChatCompletionRequest(model="glm-4.7", messages=[Message.user("Hi")])
        )
        print(completion.choices[0].message.content)
    """

    def __init__(self, http: ServiceHttpClient):
        self._http = http

    async def create(
        self,
        request: ChatCompletionRequest,
        context: RunContext | None = None,
    ) -> ChatCompletion:
        """Create a chat completion.

        Args:
            request: The completion request.
            context: Optional RunContext for correlation ID propagation.

        Returns:
            The full completion.
        """
        payload = normalize_sampling(request)
        return await self._http.post(
            CHAT_COMPLETIONS_PATH,
            context,
            body=payload,
            response_model=ChatCompletion,
        )

    async def create_stream(
        self,
        request: ChatCompletionRequest,
        context: RunContext | None = None,
    ) -> ChatCompletionStream:
        """Create a streaming chat completion.

        Forces ``stream=True`` on the payload. The caller owns the returned
        stream and must close it (``async with`` does this).

        Args:
            request: The completion request.
            context: Optional RunContext for correlation ID propagation.

        Returns:
            A stream of ChatCompletionChunk.
        """
        payload = normalize_sampling(request.model_copy(update={"stream": True}))
        return await self._http.open_stream(
            CHAT_COMPLETIONS_PATH,
            ChatCompletionChunk,
            context=context,
            body=payload,
        )
