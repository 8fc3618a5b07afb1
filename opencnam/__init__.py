# file: opencnam/__init__.py
"""
opencnam - a small client for the OpenCNAM caller ID name (CNAM) lookup API.

A `LookupRequest` validates a phone number and output format, builds the query
URL and performs one GET through an injected transport, returning the raw
response body (text, JSON or XML) for the caller to parse.
"""

from __future__ import annotations

__all__ = [
    "__version__",
    "FORMAT_JSON",
    "FORMAT_TEXT",
    "FORMAT_XML",
    "InvalidConfigurationError",
    "LookupRequest",
    "OpenCNAMError",
    "OutputFormat",
]

__version__ = "0.1.0"

from opencnam.errors import InvalidConfigurationError, OpenCNAMError
from opencnam.request import (
    FORMAT_JSON,
    FORMAT_TEXT,
    FORMAT_XML,
    LookupRequest,
    OutputFormat,
)
