"""
Request-execution runtime for zai-client.

This package provides the machinery shared by every API service:
- RunContext: Call-scoped context with a correlation ID
- ZaiError / ErrorKind: Typed errors and the status-code classifier
- ServiceHttpClient: Async HTTP executor with headers, retry and streaming
- RetryPolicy: Linear-backoff retry configuration
- EventStream: Lazily decoded SSE stream
"""

from .context import RunContext
from .errors import ErrorKind, ZaiError, classify_error
from .http_client import ServiceHttpClient
from .retry import RetryPolicy, retry_async, with_retry
from .streaming import EventStream, StreamState

__all__ = [
    "RunContext",
    "ErrorKind",
    "ZaiError",
    "classify_error",
    "ServiceHttpClient",
    "RetryPolicy",
    "retry_async",
    "with_retry",
    "EventStream",
    "StreamState",
]
