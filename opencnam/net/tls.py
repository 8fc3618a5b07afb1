# file: opencnam/net/tls.py
"""
Trust-store helpers for the HTTP transport.

Some platforms ship incomplete CA stores and fail to verify the OpenCNAM
endpoint. Point `build_ssl_context` at a PEM bundle containing the certificate
chain to trust and hand the result to `HttpClientConfig(ssl_context=...)`.

Two modes:
- pinned (default): trust only the certificates in `cafile`.
- additional: trust the default roots (certifi) plus `cafile`.
"""

from __future__ import annotations

import logging
import ssl
from pathlib import Path

import certifi

from opencnam.errors import TrustStoreError

logger = logging.getLogger(__name__)


def _load(context: ssl.SSLContext, cafile: Path) -> None:
    try:
        context.load_verify_locations(cafile=str(cafile))
    except (OSError, ssl.SSLError) as exc:
        raise TrustStoreError(f"Unable to load CA bundle {cafile}: {exc}") from exc


def build_ssl_context(
    cafile: Path | str | None = None, *, include_default_roots: bool = False
) -> ssl.SSLContext:
    """
    Build a client-side SSL context for the lookup transport.

    Args:
        cafile: PEM file with the certificate(s) to trust. When omitted, the
            context trusts the certifi bundle and `include_default_roots`
            has no effect.
        include_default_roots: Also trust the certifi bundle alongside `cafile`.

    Raises:
        TrustStoreError: if `cafile` is missing or not a readable PEM bundle.
    """

    if cafile is None:
        return ssl.create_default_context(cafile=certifi.where())

    path = Path(cafile)
    if not path.is_file():
        raise TrustStoreError(f"CA bundle not found: {path}")

    if include_default_roots:
        context = ssl.create_default_context(cafile=certifi.where())
    else:
        # PROTOCOL_TLS_CLIENT starts with no trusted roots, CERT_REQUIRED and hostname checks.
        context = ssl.SSLContext(ssl.PROTOCOL_TLS_CLIENT)
    _load(context, path)
    logger.debug(
        "Loaded CA bundle %s (default roots %s)",
        path,
        "included" if include_default_roots else "excluded",
    )
    return context
