"""
Embeddings service.
"""

from __future__ import annotations

from zai_client.domain.embeddings import EmbeddingsRequest, EmbeddingsResponse
from zai_client.runtime import RunContext, ServiceHttpClient

EMBEDDINGS_PATH = "/embeddings"


class EmbeddingsService:
    """Text embedding operations."""

    def __init__(self, http: ServiceHttpClient):
        self._http = http

    async def create(
        self,
        request: EmbeddingsRequest,
        context: RunContext | None = None,
    ) -> EmbeddingsResponse:
        """Create embeddings for the request's input.

        Args:
            request: Embeddings request (single text or batch).
            context: Optional RunContext for correlation ID propagation.

        Returns:
            One embedding per input, in input order.
        """
        return await self._http.post(
            EMBEDDINGS_PATH,
            context,
            body=request,
            response_model=EmbeddingsResponse,
        )
