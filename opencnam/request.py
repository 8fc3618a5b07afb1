# file: opencnam/request.py
"""
Reusable OpenCNAM lookup request.

A `LookupRequest` holds the configuration for one CNAM query (phone number,
output format, optional credentials) and executes it through a `Transport`
bound at construction. The response body is returned unmodified; decoding the
text/JSON/XML payload is left to the caller.

Typical use:

    with build_client(HttpClientConfig()) as client:
        req = LookupRequest(HttpxTransport(client))
        req.set_phone_number("+1 (339) 203-3301")
        req.set_format(FORMAT_JSON)
        body = req.execute()
"""

from __future__ import annotations

import logging
import re
from enum import Enum

from opencnam.errors import InvalidConfigurationError
from opencnam.net.http import Transport

logger = logging.getLogger(__name__)

# Must include the trailing slash; the phone number is appended directly.
OPENCNAM_BASE_URL = "https://api.opencnam.com/v2/phone/"

PARAM_FORMAT = "format"
PARAM_AUTH_TOKEN = "auth_token"
PARAM_ACCOUNT_SID = "account_sid"

PHONE_NUMBER_DIGITS = 10

_NON_DIGIT = re.compile(r"[^0-9]+")


class OutputFormat(str, Enum):
    """Serialization format of the API response."""

    TEXT = "text"
    JSON = "json"
    XML = "xml"


FORMAT_TEXT = OutputFormat.TEXT
FORMAT_JSON = OutputFormat.JSON
FORMAT_XML = OutputFormat.XML


def normalize_phone_number(raw: str) -> str:
    """
    Reduce user input to the 10-digit form OpenCNAM expects.

    Every non-digit character is removed. Inputs with more than 10 digits keep
    only the rightmost 10, so a leading country code ("1") or noise before the
    number is discarded.

    Raises:
        InvalidConfigurationError: if fewer than 10 digits remain.
    """

    if not isinstance(raw, str):
        raise InvalidConfigurationError("Phone number must be a string")

    digits = _NON_DIGIT.sub("", raw)
    if len(digits) < PHONE_NUMBER_DIGITS:
        raise InvalidConfigurationError(
            f"Phone numbers must be at least {PHONE_NUMBER_DIGITS} digits"
        )
    return digits[-PHONE_NUMBER_DIGITS:]


def coerce_format(value: OutputFormat | str) -> OutputFormat:
    """Return the `OutputFormat` for an enum member or its exact string token."""

    if isinstance(value, OutputFormat):
        return value
    if isinstance(value, str):
        for member in OutputFormat:
            if member.value == value:
                return member
    raise InvalidConfigurationError(
        f"Invalid format {value!r}. Must be one of: "
        + ", ".join(m.value for m in OutputFormat)
    )


def build_request_url(
    phone_number: str,
    fmt: OutputFormat,
    *,
    auth_token: str | None = None,
    account_sid: str | None = None,
    base_url: str = OPENCNAM_BASE_URL,
) -> str:
    """
    Build the lookup URL.

    Parameter order is fixed: format, then auth_token, then account_sid.
    Credentials are appended only when non-empty. Values are inserted as-is
    (no percent-encoding).
    """

    parts = [f"{base_url}{phone_number}?{PARAM_FORMAT}={fmt.value}"]
    if auth_token:
        parts.append(f"&{PARAM_AUTH_TOKEN}={auth_token}")
    if account_sid:
        parts.append(f"&{PARAM_ACCOUNT_SID}={account_sid}")
    return "".join(parts)


def redact_url(url: str) -> str:
    """Mask the auth_token value in a lookup URL for logging."""

    return re.sub(rf"([?&]{PARAM_AUTH_TOKEN}=)[^&]*", r"\1***", url)


class LookupRequest:
    """
    Mutable, reusable CNAM lookup.

    The transport is shared, not owned: the request never closes it. Instances
    are not safe for concurrent reconfiguration; use one request per thread or
    synchronize access around `set_*` + `execute()`.
    """

    def __init__(self, transport: Transport, *, base_url: str = OPENCNAM_BASE_URL) -> None:
        if not base_url.endswith("/"):
            raise InvalidConfigurationError("base_url must end with a trailing slash")
        self._transport = transport
        self._base_url = base_url
        self._phone_number: str | None = None
        self._format = OutputFormat.TEXT
        self._account_sid: str | None = None
        self._auth_token: str | None = None
        self.last_url: str | None = None

    @property
    def transport(self) -> Transport:
        return self._transport

    @property
    def base_url(self) -> str:
        return self._base_url

    @property
    def phone_number(self) -> str | None:
        return self._phone_number

    @property
    def format(self) -> OutputFormat:
        return self._format

    @property
    def account_sid(self) -> str | None:
        return self._account_sid

    @property
    def auth_token(self) -> str | None:
        return self._auth_token

    def set_phone_number(self, raw: str) -> None:
        """
        Set the number to look up on the next `execute()`.

        The stored value is the rightmost 10 digits of `raw`. On failure the
        previously stored number is kept.
        """

        self._phone_number = normalize_phone_number(raw)

    def set_format(self, fmt: OutputFormat | str) -> None:
        self._format = coerce_format(fmt)

    def set_account_sid(self, account_sid: str | None) -> None:
        self._account_sid = account_sid or None

    def set_auth_token(self, auth_token: str | None) -> None:
        self._auth_token = auth_token or None

    def build_request_url(self) -> str:
        if self._phone_number is None:
            raise InvalidConfigurationError("Phone number has not been set")
        return build_request_url(
            self._phone_number,
            self._format,
            auth_token=self._auth_token,
            account_sid=self._account_sid,
            base_url=self._base_url,
        )

    def execute(self) -> str:
        """
        Perform the lookup and return the raw response body.

        Exactly one call is made to the transport. Its exceptions propagate
        unchanged; nothing is retried or cached.
        """

        url = self.build_request_url()
        self.last_url = url
        logger.debug("GET %s", redact_url(url))
        body = self._transport.execute(url)
        logger.debug("Received %d characters (format=%s)", len(body), self._format.value)
        return body
