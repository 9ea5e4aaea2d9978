"""
Shared request/response shapes used by several API areas.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel


class SensitiveWordCheck(BaseModel):
    """Sensitive word check configuration (e.g. type="ALL")."""

    type: str


class PromptTokensDetails(BaseModel):
    cached_tokens: int = 0


class CompletionTokensDetails(BaseModel):
    reasoning_tokens: int = 0


class CompletionUsage(BaseModel):
    """Token usage reported by chat and embeddings responses."""

    prompt_tokens: int = 0
    prompt_tokens_details: Optional[PromptTokensDetails] = None
    completion_tokens: int = 0
    completion_tokens_details: Optional[CompletionTokensDetails] = None
    total_tokens: int = 0


class TaskStatus:
    """Values of ``task_status`` on asynchronous generation results."""

    PROCESSING = "PROCESSING"
    SUCCESS = "SUCCESS"
    FAIL = "FAIL"
