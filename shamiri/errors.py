"""
Error taxonomy for Shamiri.

Every failure that leaves a service is one of these. The HTTP layer maps
each ``code`` to a status in ``server.main``.
"""

import math
from typing import Any, Dict, Optional


class ShamiriError(Exception):
    """Base error for all service failures."""

    code = "INTERNAL_ERROR"

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class AuthenticationError(ShamiriError):
    """No authenticated principal was supplied."""

    code = "UNAUTHORIZED"

    def __init__(self, message: str = "Authentication required"):
        super().__init__(message)


class NotFoundError(ShamiriError):
    """Resource is missing or owned by someone else. The two are never distinguished."""

    code = "NOT_FOUND"

    def __init__(self, resource_type: str):
        super().__init__(f"{resource_type.capitalize()} not found", {"resource_type": resource_type})
        self.resource_type = resource_type


class ValidationError(ShamiriError):
    code = "VALIDATION_ERROR"


class RateLimitError(ShamiriError):
    """Creation bucket for this user is empty."""

    code = "RATE_LIMITED"

    def __init__(self, retry_after: float):
        super().__init__(
            "Too many requests. Please try again later",
            {"retry_after_seconds": round(retry_after) if math.isfinite(retry_after) else None},
        )
        self.retry_after = retry_after


class UpstreamError(ShamiriError):
    """
    The completion provider failed: unreachable, non-success status, or an
    empty/malformed candidate list. ``detail`` is kept for diagnostics and is
    not meant for end users.
    """

    code = "EXTERNAL_SERVICE_ERROR"

    def __init__(self, provider: str, detail: str, status_code: Optional[int] = None):
        super().__init__(
            f"Completion provider '{provider}' failed",
            {"provider": provider, "status_code": status_code},
        )
        self.provider = provider
        self.detail = detail
        self.status_code = status_code

    def __str__(self) -> str:
        status = f" (status {self.status_code})" if self.status_code is not None else ""
        return f"{self.message}{status}: {self.detail}"
