"""
Domain models for chat completions.

Requests are serialized with ``exclude_none=True``, so an unset optional
field is omitted from the payload rather than sent as a zero value.
"""

from __future__ import annotations

from typing import Annotated, Any, Literal, Optional, Union

from pydantic import BaseModel, Field

from .common import CompletionUsage, SensitiveWordCheck

# Sampling parameters must lie strictly inside (0, 1)
MIN_SAMPLING_VALUE = 0.01
MAX_SAMPLING_VALUE = 0.99


# ---------------------------------------------------------------------------
# Messages
# ---------------------------------------------------------------------------


class ImageURL(BaseModel):
    url: str


class TextContentPart(BaseModel):
    type: Literal["text"] = "text"
    text: str


class ImageContentPart(BaseModel):
    type: Literal["image_url"] = "image_url"
    image_url: ImageURL


ContentPart = Annotated[
    Union[TextContentPart, ImageContentPart],
    Field(discriminator="type"),
]


class Message(BaseModel):
    """
    A chat message.

    ``content`` is either plain text or a list of multimodal parts.
    """

    role: str
    content: Union[str, list[ContentPart]]

    @classmethod
    def user(cls, content: str) -> "Message":
        return cls(role="user", content=content)

    @classmethod
    def system(cls, content: str) -> "Message":
        return cls(role="system", content=content)

    @classmethod
    def assistant(cls, content: str) -> "Message":
        return cls(role="assistant", content=content)

    @classmethod
    def multimodal(cls, role: str, text: str, image_url: str) -> "Message":
        """Build a message carrying one text part and one image part."""
        return cls(
            role=role,
            content=[
                TextContentPart(text=text),
                ImageContentPart(image_url=ImageURL(url=image_url)),
            ],
        )


# ---------------------------------------------------------------------------
# Tools
# ---------------------------------------------------------------------------


class FunctionDefinition(BaseModel):
    name: str
    description: Optional[str] = None
    parameters: Optional[dict[str, Any]] = None


class WebSearchTool(BaseModel):
    search_query: Optional[str] = None
    search_result: Optional[bool] = None


class Tool(BaseModel):
    """A tool the model may call: ``function`` or ``web_search``."""

    type: str
    function: Optional[FunctionDefinition] = None
    web_search: Optional[WebSearchTool] = None

    @classmethod
    def web_search_tool(cls, query: str, include_result: bool) -> "Tool":
        return cls(
            type="web_search",
            web_search=WebSearchTool(search_query=query, search_result=include_result),
        )

    @classmethod
    def function_tool(
        cls,
        name: str,
        description: str,
        parameters: dict[str, Any] | None = None,
    ) -> "Tool":
        return cls(
            type="function",
            function=FunctionDefinition(
                name=name,
                description=description or None,
                parameters=parameters,
            ),
        )


class Function(BaseModel):
    name: str = ""
    arguments: str = ""


class ToolCall(BaseModel):
    """
    A tool call made by the model.

    In stream deltas a call may arrive in fragments, so every field has a
    default; ``index`` identifies which call a fragment belongs to.
    """

    id: str = ""
    type: str = ""
    function: Function = Field(default_factory=Function)
    index: Optional[int] = None


# ---------------------------------------------------------------------------
# Request
# ---------------------------------------------------------------------------


class ChatCompletionRequest(BaseModel):
    model: str
    messages: list[Message]
    request_id: Optional[str] = None
    user_id: Optional[str] = None
    do_sample: Optional[bool] = None
    stream: Optional[bool] = None
    temperature: Optional[float] = None
    top_p: Optional[float] = None
    max_tokens: Optional[int] = None
    seed: Optional[int] = None
    stop: Optional[Union[str, list[str]]] = None
    sensitive_word_check: Optional[SensitiveWordCheck] = None
    tools: Optional[list[Tool]] = None
    tool_choice: Optional[str] = None
    meta: Optional[dict[str, str]] = None
    response_format: Optional[Any] = None
    thinking: Optional[Any] = None
    watermark_enabled: Optional[bool] = None
    tool_stream: Optional[bool] = None


def _clamp(value: float) -> float:
    if value <= 0:
        return MIN_SAMPLING_VALUE
    if value >= 1:
        return MAX_SAMPLING_VALUE
    return value


def normalize_sampling(request: ChatCompletionRequest) -> ChatCompletionRequest:
    """
    Clamp temperature and top_p into the open interval the API accepts.

    A temperature <= 0 becomes 0.01 and also turns sampling off
    (``do_sample=False``): the API expresses deterministic decoding that way.
    Values >= 1 become 0.99. Returns a copy; the argument is left untouched.

    Args:
        request: The chat completion request.

    Returns:
        A request with normalized sampling parameters.
    """
    update: dict[str, Any] = {}

    if request.temperature is not None:
        if request.temperature <= 0:
            update["do_sample"] = False
        update["temperature"] = _clamp(request.temperature)

    if request.top_p is not None:
        update["top_p"] = _clamp(request.top_p)

    return request.model_copy(update=update)


# ---------------------------------------------------------------------------
# Responses
# ---------------------------------------------------------------------------


class CompletionMessage(BaseModel):
    role: str = ""
    content: Optional[str] = None
    reasoning_content: Optional[str] = None
    tool_calls: Optional[list[ToolCall]] = None


class CompletionChoice(BaseModel):
    index: int = 0
    finish_reason: Optional[str] = None
    message: CompletionMessage = Field(default_factory=CompletionMessage)


class ChatCompletion(BaseModel):
    id: str = ""
    created: int = 0
    model: str = ""
    choices: list[CompletionChoice] = Field(default_factory=list)
    usage: CompletionUsage = Field(default_factory=CompletionUsage)

    def summary(self) -> str:
        """Render a short human-readable digest of the completion."""
        lines = [f"ChatCompletion(id={self.id}, model={self.model}, choices={len(self.choices)})"]
        for i, choice in enumerate(self.choices):
            content = choice.message.content or ""
            lines.append(f"  Choice {i}: {content} (finish_reason={choice.finish_reason or ''})")
        lines.append(
            f"  Usage: prompt={self.usage.prompt_tokens}, "
            f"completion={self.usage.completion_tokens}, total={self.usage.total_tokens}"
        )
        return "\n".join(lines) + "\n"

    def __str__(self) -> str:
        return self.summary()


class ChatCompletionChunkDelta(BaseModel):
    content: Optional[str] = None
    role: Optional[str] = None
    reasoning_content: Optional[str] = None
    tool_calls: Optional[list[ToolCall]] = None


class ChatCompletionChunkChoice(BaseModel):
    index: int = 0
    delta: ChatCompletionChunkDelta = Field(default_factory=ChatCompletionChunkDelta)
    finish_reason: Optional[str] = None


class ChatCompletionChunk(BaseModel):
    """One incremental unit of a streamed completion."""

    id: str = ""
    created: int = 0
    model: str = ""
    choices: list[ChatCompletionChunkChoice] = Field(default_factory=list)
    usage: Optional[CompletionUsage] = None
