"""
Wire formats understood by the Snowizard server.

Each format pairs the Content-Type label sent with the request with a codec that
turns a response body into an int64 ID (and back, for mock servers and tests).
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable

from google.protobuf.message import DecodeError
from pydantic import BaseModel, Field, ValidationError

from snowizard.errors import MalformedResponseError
from snowizard.snowizard_pb2 import SnowizardResponse

logger = logging.getLogger(__name__)

INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1


class WireFormat(str, Enum):
    """Supported response encodings, valued by their Content-Type."""

    TEXT = "text/plain"
    JSON = "application/json"
    PROTOBUF = "application/x-protobuf"

    @property
    def content_type(self) -> str:
        return self.value

    @classmethod
    def from_name(cls, name: str) -> "WireFormat":
        """Resolve a short name such as ``json`` (case-insensitive)."""
        try:
            return cls[name.strip().upper()]
        except KeyError as exc:
            choices = ", ".join(member.name.lower() for member in cls)
            raise ValueError(f"Unknown wire format {name!r}; expected one of: {choices}.") from exc


class IdResponse(BaseModel):
    """JSON body returned by the server."""

    id: int = Field(strict=True, ge=INT64_MIN, le=INT64_MAX)


def _check_int64(value: int) -> int:
    if not INT64_MIN <= value <= INT64_MAX:
        raise ValueError(f"{value} does not fit in a signed 64-bit integer.")
    return value


def encode_text(value: int) -> bytes:
    return str(_check_int64(value)).encode("ascii")


def decode_text(body: bytes) -> int:
    """Parse the body as an integer literal, honouring 0x/0o/0b prefixes."""
    try:
        value = int(body.decode("ascii"), 0)
    except (UnicodeDecodeError, ValueError) as exc:
        logger.debug("Text body is not an integer literal", extra={"error": str(exc)})
        raise MalformedResponseError("Snowizard returned a malformed text response.") from exc
    if not INT64_MIN <= value <= INT64_MAX:
        raise MalformedResponseError("Snowizard returned a text ID outside the int64 range.")
    return value


def encode_json(value: int) -> bytes:
    return IdResponse(id=_check_int64(value)).model_dump_json().encode("utf-8")


def decode_json(body: bytes) -> int:
    """Validate the body as ``{"id": <int64>}``; a missing id is an error."""
    try:
        return IdResponse.model_validate_json(body).id
    except ValidationError as exc:
        logger.debug("JSON body failed validation", extra={"errors": exc.errors()})
        raise MalformedResponseError("Snowizard returned a malformed JSON response.") from exc


def encode_protobuf(value: int) -> bytes:
    return SnowizardResponse(id=_check_int64(value)).SerializeToString()


def decode_protobuf(body: bytes) -> int:
    """Parse a serialized SnowizardResponse; an unset id is an error."""
    try:
        message = SnowizardResponse.FromString(body)
    except DecodeError as exc:
        logger.debug("Protobuf body could not be parsed", extra={"error": str(exc)})
        raise MalformedResponseError("Snowizard returned a malformed protobuf response.") from exc
    if not message.HasField("id"):
        raise MalformedResponseError("Snowizard protobuf response did not include an id.")
    return message.id


@dataclass(frozen=True, slots=True)
class Codec:
    """Encoder/decoder pair for a single wire format."""

    wire_format: WireFormat
    encode: Callable[[int], bytes]
    decode: Callable[[bytes], int]


_CODECS: dict[WireFormat, Codec] = {
    WireFormat.TEXT: Codec(WireFormat.TEXT, encode_text, decode_text),
    WireFormat.JSON: Codec(WireFormat.JSON, encode_json, decode_json),
    WireFormat.PROTOBUF: Codec(WireFormat.PROTOBUF, encode_protobuf, decode_protobuf),
}


def get_codec(wire_format: WireFormat) -> Codec:
    return _CODECS[WireFormat(wire_format)]
