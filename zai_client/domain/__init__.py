"""
Request and response models for the inference API.
"""

from .chat import (
    ChatCompletion,
    ChatCompletionChunk,
    ChatCompletionChunkChoice,
    ChatCompletionChunkDelta,
    ChatCompletionRequest,
    CompletionChoice,
    CompletionMessage,
    ContentPart,
    Function,
    FunctionDefinition,
    ImageContentPart,
    ImageURL,
    Message,
    TextContentPart,
    Tool,
    ToolCall,
    WebSearchTool,
    normalize_sampling,
)
from .common import (
    CompletionTokensDetails,
    CompletionUsage,
    PromptTokensDetails,
    SensitiveWordCheck,
    TaskStatus,
)
from .embeddings import Embedding, EmbeddingsRequest, EmbeddingsResponse
from .images import (
    AsyncImageGenerationRequest,
    AsyncImagesResponse,
    GeneratedImage,
    ImageGenerationRequest,
    ImagesResponse,
)
from .videos import VideoGenerationRequest, VideoObject, VideoResult

__all__ = [
    "ChatCompletion",
    "ChatCompletionChunk",
    "ChatCompletionChunkChoice",
    "ChatCompletionChunkDelta",
    "ChatCompletionRequest",
    "CompletionChoice",
    "CompletionMessage",
    "ContentPart",
    "Function",
    "FunctionDefinition",
    "ImageContentPart",
    "ImageURL",
    "Message",
    "TextContentPart",
    "Tool",
    "ToolCall",
    "WebSearchTool",
    "normalize_sampling",
    "CompletionTokensDetails",
    "CompletionUsage",
    "PromptTokensDetails",
    "SensitiveWordCheck",
    "TaskStatus",
    "Embedding",
    "EmbeddingsRequest",
    "EmbeddingsResponse",
    "AsyncImageGenerationRequest",
    "AsyncImagesResponse",
    "GeneratedImage",
    "ImageGenerationRequest",
    "ImagesResponse",
    "VideoGenerationRequest",
    "VideoObject",
    "VideoResult",
]
