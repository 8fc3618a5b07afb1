# file: opencnam/errors.py
"""
Exception types raised by opencnam.

Transport failures are not wrapped: whatever the HTTP client raises
(`httpx.TransportError`, `httpx.HTTPStatusError`) reaches the caller as-is.
"""

from __future__ import annotations


class OpenCNAMError(Exception):
    """Base class for errors raised by opencnam itself."""


class InvalidConfigurationError(OpenCNAMError, ValueError):
    """Raised when a request is configured with an invalid phone number, format or base URL."""


class TrustStoreError(OpenCNAMError):
    """Raised when a CA bundle cannot be loaded into an SSL context."""
