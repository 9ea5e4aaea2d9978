"""
Call-scoped context for API requests.

RunContext carries the correlation ID that is propagated to the API on every
attempt of a call, so retries of one logical call share a request id in the
logs. Cancellation and deadlines are left to asyncio (``task.cancel()``,
``asyncio.timeout()``), which interrupts any pending send or backoff sleep.
"""

from __future__ import annotations

import uuid

from pydantic import BaseModel


class RunContext(BaseModel):
    """Call-scoped context for client operations.

    Attributes:
        request_id: Unique identifier for request tracing.
        user_id: Optional end-user identifier for log correlation.
    """

    request_id: str
    user_id: str | None = None

    model_config = {"frozen": True}

    @classmethod
    def new(cls, user_id: str | None = None) -> "RunContext":
        """Create a context with a generated request_id.

        Args:
            user_id: Optional end-user identifier.

        Returns:
            A new RunContext.
        """
        return cls(request_id=str(uuid.uuid4()), user_id=user_id)

    def get_headers(self) -> dict[str, str]:
        """Get HTTP headers for propagating context.

        Returns:
            Dictionary of headers to inject into outbound requests.
        """
        return {"X-Request-Id": self.request_id}
