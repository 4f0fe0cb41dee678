"""HTTP client factory for talking to Snowizard servers."""

import httpx

from snowizard.codecs import WireFormat

USER_AGENT = "pysnowizard"


def create_snowizard_http_client(
    wire_format: WireFormat,
    connect_timeout: float,
    *,
    transport: httpx.BaseTransport | None = None,
) -> httpx.Client:
    """
    Build a Client whose only deadline is connection establishment.

    Reading the body is not time-bounded; pass a custom transport to change that or
    to substitute an ``httpx.MockTransport`` in tests.
    """
    return httpx.Client(
        headers={
            "Content-Type": wire_format.content_type,
            "User-Agent": USER_AGENT,
        },
        timeout=httpx.Timeout(None, connect=connect_timeout),
        follow_redirects=True,
        transport=transport,
    )
