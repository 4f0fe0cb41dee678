"""
Snowizard ID client.

The client walks its configured hosts in order and returns the first ID that a
server hands back in a decodable body. Failures on one host are logged and the
next host is tried; callers only see an error once every host has failed.
"""

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from types import TracebackType

import httpx

from snowizard.codecs import Codec, WireFormat, get_codec
from snowizard.errors import MalformedResponseError, NoServersError
from snowizard.http_client import create_snowizard_http_client
from snowizard.settings import Settings

logger = logging.getLogger(__name__)


def _clean_hosts(hosts: Iterable[str]) -> tuple[str, ...]:
    """Normalize and validate the ``host:port`` entries."""
    cleaned = []
    for host in hosts:
        value = host.strip()
        if not value:
            raise ValueError("hosts must not contain empty entries.")
        cleaned.append(value)
    return tuple(cleaned)


@dataclass(frozen=True, slots=True)
class SnowizardClient:
    """Failover client bound to one wire format."""

    hosts: tuple[str, ...]
    wire_format: WireFormat
    connect_timeout: float
    _http: httpx.Client

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        *,
        transport: httpx.BaseTransport | None = None,
    ) -> "SnowizardClient":
        """Factory that builds the client from Settings."""
        return create_client(
            settings.hosts,
            settings.connect_timeout,
            settings.wire_format,
            transport=transport,
        )

    @property
    def codec(self) -> Codec:
        return get_codec(self.wire_format)

    def close(self) -> None:
        """Close the underlying HTTP resources."""
        self._http.close()

    def __enter__(self) -> "SnowizardClient":
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    def next_id(self) -> int:
        """
        Return the next ID from the first host that answers with a valid body.

        Raises MalformedResponseError when the last host tried answered 200 with
        an undecodable body, and NoServersError when every host failed otherwise.
        Exhaustion is therefore not always NoServersError: a decode failure on the
        final host is surfaced as-is so callers can tell a broken server from an
        unreachable one. Decode failures on earlier hosts are only logged.
        """
        last_decode_error: MalformedResponseError | None = None

        for host in self.hosts:
            body = self._fetch(host)
            if body is None:
                last_decode_error = None
                continue

            try:
                return self.codec.decode(body)
            except MalformedResponseError as exc:
                logger.warning(
                    "Failed decoding Snowizard response body",
                    extra={"host": host, "wire_format": self.wire_format.name, "error": str(exc)},
                )
                last_decode_error = exc

        if last_decode_error is not None:
            raise last_decode_error

        logger.error("No Snowizard servers available", extra={"hosts": list(self.hosts)})
        raise NoServersError("Snowizard: no servers configured or available.")

    def _fetch(self, host: str) -> bytes | None:
        """Request one host and return its body, or None if the host should be skipped."""
        url = f"http://{host}"
        try:
            with self._http.stream("GET", url) as response:
                if response.status_code != httpx.codes.OK:
                    logger.warning(
                        "Snowizard host responded with unexpected status",
                        extra={"host": host, "status_code": response.status_code},
                    )
                    return None
                try:
                    return response.read()
                except httpx.HTTPError as exc:
                    logger.warning(
                        "Failed reading Snowizard response body",
                        extra={"host": host},
                        exc_info=exc,
                    )
                    return None
        except httpx.TimeoutException as exc:
            logger.warning("Snowizard request timed out", extra={"host": host}, exc_info=exc)
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            logger.warning(
                "Snowizard request failed",
                extra={"host": host, "error": str(exc)},
                exc_info=exc,
            )
        return None


def create_client(
    hosts: Iterable[str],
    connect_timeout: float,
    wire_format: WireFormat,
    *,
    transport: httpx.BaseTransport | None = None,
) -> SnowizardClient:
    """Assemble a client; no network activity happens here."""
    if connect_timeout <= 0:
        raise ValueError("connect_timeout must be greater than zero.")
    wire_format = WireFormat(wire_format)
    return SnowizardClient(
        hosts=_clean_hosts(hosts),
        wire_format=wire_format,
        connect_timeout=connect_timeout,
        _http=create_snowizard_http_client(wire_format, connect_timeout, transport=transport),
    )


def create_text_client(
    hosts: Iterable[str],
    connect_timeout: float,
    *,
    transport: httpx.BaseTransport | None = None,
) -> SnowizardClient:
    """Client that requests text/plain IDs."""
    return create_client(hosts, connect_timeout, WireFormat.TEXT, transport=transport)


def create_json_client(
    hosts: Iterable[str],
    connect_timeout: float,
    *,
    transport: httpx.BaseTransport | None = None,
) -> SnowizardClient:
    """Client that requests application/json IDs."""
    return create_client(hosts, connect_timeout, WireFormat.JSON, transport=transport)


def create_protobuf_client(
    hosts: Iterable[str],
    connect_timeout: float,
    *,
    transport: httpx.BaseTransport | None = None,
) -> SnowizardClient:
    """Client that requests application/x-protobuf IDs."""
    return create_client(hosts, connect_timeout, WireFormat.PROTOBUF, transport=transport)
