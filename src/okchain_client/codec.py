"""
Wire codec for OKChain client.

Query parameters and custom query responses travel as JSON. Store values and
transactions travel as length-prefixed documents: an unsigned varint byte
count followed by exactly that many bytes of JSON. Decoding is strict, so a
payload with a missing or an extra byte is rejected instead of half-parsed.
"""

import base64
import json
from dataclasses import fields, is_dataclass
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Any

from .utils import format_rfc3339

MAX_UVARINT_BYTES = 10

_JSON_DECODER = json.JSONDecoder(parse_float=Decimal)


class DecodeError(ValueError):
    """Raised when bytes do not match the expected shape."""

    def __init__(self, message: str, payload: bytes = b""):
        super().__init__(message)
        self.payload = payload


def to_wire(value: Any) -> Any:
    """Convert records and scalars into JSON-compatible values.

    Dataclass fields are emitted under the name found in their ``json``
    metadata entry, falling back to the attribute name.
    """
    if is_dataclass(value) and not isinstance(value, type):
        return {
            f.metadata.get("json", f.name): to_wire(getattr(value, f.name))
            for f in fields(value)
        }
    if isinstance(value, dict):
        return {str(k): to_wire(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_wire(item) for item in value]
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, Decimal):
        return str(value)
    if isinstance(value, datetime):
        return format_rfc3339(value)
    if isinstance(value, (bytes, bytearray)):
        return base64.b64encode(bytes(value)).decode("ascii")
    return value


def encode_uvarint(value: int) -> bytes:
    """Encode a non-negative integer as an unsigned varint."""
    if value < 0:
        raise ValueError(f"uvarint cannot encode negative value: {value}")

    out = bytearray()
    while True:
        byte = value & 0x7F
        value >>= 7
        if value:
            out.append(byte | 0x80)
        else:
            out.append(byte)
            return bytes(out)


def decode_uvarint(data: bytes) -> tuple[int, int]:
    """Decode an unsigned varint, returning (value, bytes consumed)."""
    result = 0
    shift = 0
    for index, byte in enumerate(data):
        if index >= MAX_UVARINT_BYTES:
            raise DecodeError("uvarint prefix overflows 64 bits", data)
        result |= (byte & 0x7F) << shift
        if not byte & 0x80:
            return result, index + 1
        shift += 7
    raise DecodeError("truncated uvarint length prefix", data)


class Codec:
    """Marshals requests and unmarshals responses for the node RPC."""

    def marshal_json(self, value: Any, sort_keys: bool = False) -> bytes:
        """Serialize a record into compact JSON bytes."""
        return json.dumps(
            to_wire(value), separators=(",", ":"), sort_keys=sort_keys
        ).encode("utf-8")

    def unmarshal_json(self, data: bytes) -> Any:
        """Parse JSON bytes. Floating point numbers are parsed as Decimal."""
        if not data:
            raise DecodeError("cannot decode empty payload", data)

        try:
            text = bytes(data).decode("utf-8")
            value, end = _JSON_DECODER.raw_decode(text)
        except UnicodeDecodeError as e:
            raise DecodeError(f"payload is not valid UTF-8: {e}", data) from e
        except json.JSONDecodeError as e:
            raise DecodeError(f"malformed JSON payload: {e}", data) from e

        if end != len(text):
            raise DecodeError(f"{len(text) - end} trailing characters after JSON document", data)
        return value

    def marshal_binary_length_prefixed(self, value: Any) -> bytes:
        """Serialize a record as a uvarint length prefix plus JSON body."""
        body = self.marshal_json(value)
        return encode_uvarint(len(body)) + body

    def unmarshal_binary_length_prefixed(self, data: bytes) -> Any:
        """Parse a length-prefixed document, rejecting short or long payloads."""
        if not data:
            raise DecodeError("cannot decode empty payload", data)

        length, consumed = decode_uvarint(data)
        body = bytes(data[consumed:])
        if len(body) < length:
            raise DecodeError(
                f"short read: prefix declares {length} bytes, got {len(body)}", data
            )
        if len(body) > length:
            raise DecodeError(
                f"{len(body) - length} trailing bytes after length-prefixed document", data
            )
        return self.unmarshal_json(body)
