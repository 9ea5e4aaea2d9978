"""
zai-client: async Python client for the Z.ai / Zhipu AI inference API.
"""

from .client import ZaiClient, ZhipuAiClient
from .config import ZAI_BASE_URL, ZHIPUAI_BASE_URL, ClientConfig
from .domain import (
    AsyncImageGenerationRequest,
    ChatCompletion,
    ChatCompletionChunk,
    ChatCompletionRequest,
    EmbeddingsRequest,
    ImageGenerationRequest,
    Message,
    Tool,
    VideoGenerationRequest,
)
from .runtime import ErrorKind, RetryPolicy, RunContext, ZaiError

__all__ = [
    "ZaiClient",
    "ZhipuAiClient",
    "ZAI_BASE_URL",
    "ZHIPUAI_BASE_URL",
    "ClientConfig",
    "AsyncImageGenerationRequest",
    "ChatCompletion",
    "ChatCompletionChunk",
    "ChatCompletionRequest",
    "EmbeddingsRequest",
    "ImageGenerationRequest",
    "Message",
    "Tool",
    "VideoGenerationRequest",
    "ErrorKind",
    "RetryPolicy",
    "RunContext",
    "ZaiError",
]
