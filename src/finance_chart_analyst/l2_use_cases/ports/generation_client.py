"""Port: generation service client."""

from __future__ import annotations

from typing import Any, Protocol


class GenerationClient(Protocol):
    """Abstract tool-augmented generation service. Zero transport types leak through."""

    async def invoke(self, model: str, payload: dict[str, Any]) -> dict[str, Any]:
        """Send one request payload for *model*. Returns the decoded reply.

        Raises UpstreamError on transport or service failure.
        """
        ...

    async def aclose(self) -> None:
        """Release the underlying connection pool."""
        ...
