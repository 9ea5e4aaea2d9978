"""
Image generation service.

Synchronous generation returns the images directly. Asynchronous generation
returns a task whose result is polled with retrieve_result().
"""

from __future__ import annotations

from zai_client.domain.images import (
    AsyncImageGenerationRequest,
    AsyncImagesResponse,
    ImageGenerationRequest,
    ImagesResponse,
)
from zai_client.runtime import ErrorKind, RunContext, ServiceHttpClient, ZaiError

IMAGES_GENERATIONS_PATH = "/images/generations"
ASYNC_IMAGES_GENERATIONS_PATH = "/async/images/generations"
ASYNC_RESULT_PATH = "/async-result/{id}"


def async_result_path(task_id: str) -> str:
    """Build the polling path for an asynchronous task.

    Raises:
        ZaiError: CONFIGURATION when task_id is empty.
    """
    if not task_id:
        raise ZaiError(kind=ErrorKind.CONFIGURATION, message="id must be provided")
    return ASYNC_RESULT_PATH.format(id=task_id)


class ImagesService:
    """Image generation operations."""

    def __init__(self, http: ServiceHttpClient):
        self._http = http

    async def generate(
        self,
        request: ImageGenerationRequest,
        context: RunContext | None = None,
    ) -> ImagesResponse:
        """Generate images from a text prompt."""
        return await self._http.post(
            IMAGES_GENERATIONS_PATH,
            context,
            body=request,
            response_model=ImagesResponse,
        )

    async def generate_async(
        self,
        request: AsyncImageGenerationRequest,
        context: RunContext | None = None,
    ) -> AsyncImagesResponse:
        """Start an asynchronous image generation task.

        Only some models (e.g. glm-image) support this. Poll the returned
        task id with retrieve_result().
        """
        return await self._http.post(
            ASYNC_IMAGES_GENERATIONS_PATH,
            context,
            body=request,
            response_model=AsyncImagesResponse,
        )

    async def retrieve_result(
        self,
        task_id: str,
        context: RunContext | None = None,
    ) -> AsyncImagesResponse:
        """Fetch the state of an asynchronous image task.

        Args:
            task_id: Task id returned by generate_async().
            context: Optional RunContext for correlation ID propagation.

        Returns:
            The task, with image_result set once it succeeded.

        Raises:
            ZaiError: CONFIGURATION when task_id is empty (nothing is sent).
        """
        return await self._http.get(
            async_result_path(task_id),
            context,
            response_model=AsyncImagesResponse,
        )
