"""
API services, one per capability area.
"""

from .chat import ChatCompletionStream, ChatService
from .embeddings import EmbeddingsService
from .images import ImagesService
from .videos import VideosService

__all__ = [
    "ChatCompletionStream",
    "ChatService",
    "EmbeddingsService",
    "ImagesService",
    "VideosService",
]
