"""Errors raised when talking to the upstream catalog provider."""

from typing import Any, Optional

import httpx


class UpstreamError(Exception):
    """Token exchange or catalog call failure, with the upstream details attached."""

    def __init__(self, message: str, status_code: Optional[int] = None, details: Any = None):
        super().__init__(message)
        self.status_code = status_code
        self.details = details

    @classmethod
    def from_httpx(cls, exc: httpx.HTTPError) -> "UpstreamError":
        if isinstance(exc, httpx.HTTPStatusError):
            response = exc.response
            try:
                details = response.json()
            except ValueError:
                details = response.text or None
            # str(exc) includes the request URL
            message = f"Request failed with status code {response.status_code}"
            return cls(message, status_code=response.status_code, details=details)
        return cls(str(exc) or type(exc).__name__)
