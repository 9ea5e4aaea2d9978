"""
Domain models for image generation (synchronous and asynchronous).
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field

from .common import SensitiveWordCheck


class GeneratedImage(BaseModel):
    b64_json: Optional[str] = None
    url: Optional[str] = None
    revised_prompt: Optional[str] = None


class ImagesResponse(BaseModel):
    created: int = 0
    data: list[GeneratedImage] = Field(default_factory=list)


class AsyncImagesResponse(BaseModel):
    """
    Result of an asynchronous image task.

    ``task_status`` is one of TaskStatus.PROCESSING / SUCCESS / FAIL.
    """

    id: Optional[str] = None
    model: str = ""
    request_id: str = ""
    task_status: str = ""
    image_result: Optional[list[GeneratedImage]] = None


class ImageGenerationRequest(BaseModel):
    prompt: str
    model: Optional[str] = None
    n: Optional[int] = None
    quality: Optional[str] = None
    response_format: Optional[str] = None
    size: Optional[str] = None
    style: Optional[str] = None
    sensitive_word_check: Optional[SensitiveWordCheck] = None
    user: Optional[str] = None
    user_id: Optional[str] = None
    request_id: Optional[str] = None
    watermark_enabled: Optional[bool] = None

    @classmethod
    def simple(cls, prompt: str, model: str) -> "ImageGenerationRequest":
        return cls(prompt=prompt, model=model)


class AsyncImageGenerationRequest(BaseModel):
    prompt: str
    model: Optional[str] = None
    quality: Optional[str] = None
    size: Optional[str] = None
    user_id: Optional[str] = None
    request_id: Optional[str] = None
    watermark_enabled: Optional[bool] = None

    @classmethod
    def simple(cls, prompt: str, model: str) -> "AsyncImageGenerationRequest":
        return cls(prompt=prompt, model=model)
