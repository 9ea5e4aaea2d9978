"""
Domain models for video generation.
"""

from __future__ import annotations

from typing import Any, Optional, Union

from pydantic import BaseModel, Field

from .common import SensitiveWordCheck

# One image URL, several (first/last frame), or a provider-specific object
VideoImageInput = Union[str, list[str], dict[str, Any]]


class VideoGenerationRequest(BaseModel):
    model: str
    prompt: Optional[str] = None
    image_url: Optional[VideoImageInput] = None
    quality: Optional[str] = Field(default=None, description='"quality" or "speed"')
    with_audio: Optional[bool] = None
    size: Optional[str] = None
    duration: Optional[int] = None
    fps: Optional[int] = None
    style: Optional[str] = None
    aspect_ratio: Optional[str] = None
    off_peak: Optional[bool] = None
    movement_amplitude: Optional[str] = None
    sensitive_word_check: Optional[SensitiveWordCheck] = None
    request_id: Optional[str] = None
    user_id: Optional[str] = None
    watermark_enabled: Optional[bool] = None

    @classmethod
    def text_to_video(cls, model: str, prompt: str) -> "VideoGenerationRequest":
        return cls(model=model, prompt=prompt)

    @classmethod
    def image_to_video(cls, model: str, image_url: str) -> "VideoGenerationRequest":
        return cls(model=model, image_url=image_url)


class VideoResult(BaseModel):
    url: str = ""
    cover_image_url: str = ""


class VideoObject(BaseModel):
    """Video task handle / result; poll until task_status leaves PROCESSING."""

    id: Optional[str] = None
    model: str = ""
    video_result: list[VideoResult] = Field(default_factory=list)
    task_status: str = ""
    request_id: str = ""
