"""
HTTP client utilities.

The notary signing service is the only HTTP collaborator; this module
builds the httpx client it is reached through.
"""

import logging
from typing import Dict, Optional

import httpx
from httpx import HTTPTransport

# ============================================================================
# HTTP Configuration Constants
# ============================================================================

# Connection-level retries performed by the transport
MAX_RETRIES = 3

DEFAULT_TIMEOUT = 30.0
CONNECT_TIMEOUT = 10.0


def create_session_with_retry(
    timeout: float = DEFAULT_TIMEOUT,
    headers: Optional[Dict[str, str]] = None,
    max_connections: int = 10,
) -> httpx.Client:
    """
    Create an httpx client with connection retries and pooling.

    Args:
        timeout: Total timeout in seconds (default: 30.0)
        headers: Extra default headers (e.g. Authorization)
        max_connections: Maximum number of connections in the pool

    Returns:
        Configured httpx.Client

    Example:
        >>> client = create_session_with_retry(timeout=120.0)
        >>> response = client.post("https://notary.example.com/api/sign", files=...)
    """
    limits = httpx.Limits(
        max_connections=max_connections,
        max_keepalive_connections=max(1, max_connections // 2),
    )
    transport = HTTPTransport(limits=limits, retries=MAX_RETRIES)

    logging.debug("Creating HTTP client (timeout=%s, retries=%d)", timeout, MAX_RETRIES)
    return httpx.Client(
        transport=transport,
        timeout=httpx.Timeout(timeout, connect=CONNECT_TIMEOUT),
        follow_redirects=True,
        headers=headers or {},
    )


__all__ = ["create_session_with_retry"]
