"""
Video generation service.
"""

from __future__ import annotations

from zai_client.domain.videos import VideoGenerationRequest, VideoObject
from zai_client.runtime import ErrorKind, RunContext, ServiceHttpClient, ZaiError

from .images import async_result_path

VIDEOS_GENERATIONS_PATH = "/videos/generations"


class VideosService:
    """Video generation operations (always asynchronous on the server)."""

    def __init__(self, http: ServiceHttpClient):
        self._http = http

    async def generate(
        self,
        request: VideoGenerationRequest,
        context: RunContext | None = None,
    ) -> VideoObject:
        """Start a video generation task from a prompt and/or image.

        Raises:
            ZaiError: CONFIGURATION when the request has no model.
        """
        if not request.model:
            raise ZaiError(kind=ErrorKind.CONFIGURATION, message="model must be provided")

        return await self._http.post(
            VIDEOS_GENERATIONS_PATH,
            context,
            body=request,
            response_model=VideoObject,
        )

    async def retrieve_result(
        self,
        task_id: str,
        context: RunContext | None = None,
    ) -> VideoObject:
        """Fetch the state of a video task by id."""
        return await self._http.get(
            async_result_path(task_id),
            context,
            response_model=VideoObject,
        )
