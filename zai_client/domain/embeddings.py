"""
Domain models for text embeddings.
"""

from __future__ import annotations

from typing import Optional, Union

from pydantic import BaseModel, Field

from .common import CompletionUsage, SensitiveWordCheck

# A single text, a batch of texts, a token array, or a batch of token arrays
EmbeddingsInput = Union[str, list[str], list[int], list[list[int]]]


class EmbeddingsRequest(BaseModel):
    input: EmbeddingsInput
    model: str
    dimensions: Optional[int] = None
    encoding_format: Optional[str] = None
    user: Optional[str] = None
    request_id: Optional[str] = None
    sensitive_word_check: Optional[SensitiveWordCheck] = None

    @classmethod
    def single(cls, model: str, text: str) -> "EmbeddingsRequest":
        """Request embeddings for one text."""
        return cls(model=model, input=text)

    @classmethod
    def batch(cls, model: str, texts: list[str]) -> "EmbeddingsRequest":
        """Request embeddings for several texts in one call."""
        return cls(model=model, input=list(texts))


class Embedding(BaseModel):
    object: str = ""
    index: Optional[int] = None
    embedding: list[float] = Field(default_factory=list)


class EmbeddingsResponse(BaseModel):
    object: str = ""
    data: list[Embedding] = Field(default_factory=list)
    model: str = ""
    usage: CompletionUsage = Field(default_factory=CompletionUsage)
