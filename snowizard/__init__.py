"""
Client library for the Snowizard unique-ID service.

Typical use::

    from snowizard import create_text_client

    with create_text_client(["snowizard-1.dev:6776", "snowizard-2.dev:6776"], 2.0) as client:
        new_id = client.next_id()
"""

from snowizard.client import (
    SnowizardClient,
    create_client,
    create_json_client,
    create_protobuf_client,
    create_text_client,
)
from snowizard.codecs import WireFormat
from snowizard.errors import MalformedResponseError, NoServersError, SnowizardError
from snowizard.settings import Settings

__all__ = [
    "MalformedResponseError",
    "NoServersError",
    "Settings",
    "SnowizardClient",
    "SnowizardError",
    "WireFormat",
    "create_client",
    "create_json_client",
    "create_protobuf_client",
    "create_text_client",
]
