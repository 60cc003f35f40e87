"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Error types raised across the menukit data layer.
"""

from __future__ import annotations


class MenuKitError(RuntimeError):
    """Base error for menukit failures."""


class StorageError(MenuKitError):
    """Raised by key-value storage adapters when the backend fails."""


class MenuAPIError(MenuKitError):
    """
    Raised when the menu listing source cannot produce a response.

    Args:
        message: Human readable error message shown to callers.
        code: Stable error code (``NETWORK_ERROR``, ``HTTP_<status>``, ...).
        status: HTTP status code when the server answered.
    """

    def __init__(
        self,
        message: str,
        *,
        code: str = "UNKNOWN_ERROR",
        status: int | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.status = status


class FetchTimeoutError(MenuAPIError):
    """Raised when a listing call exceeds the configured request timeout."""

    def __init__(self, timeout_s: float) -> None:
        super().__init__(
            f"Request timed out after {timeout_s:g}s",
            code="TIMEOUT",
        )
        self.timeout_s = timeout_s
