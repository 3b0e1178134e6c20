from __future__ import annotations

import httpx


class RecordNotFoundError(httpx.HTTPStatusError):
    """Raised when the remote endpoint answers 404 for a single record."""

    @classmethod
    def from_response(cls, response: httpx.Response) -> "RecordNotFoundError":
        message = f"{response.request.method} {response.request.url.path} returned 404"
        return cls(message, request=response.request, response=response)
