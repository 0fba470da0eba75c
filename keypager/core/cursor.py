from __future__ import annotations

import base64
import binascii
from dataclasses import dataclass
from datetime import timezone
from typing import Any

from bson import json_util
from bson.errors import BSONError

from keypager.utils.exceptions import CursorDecodeError
from keypager.utils.types import get_field


@dataclass(frozen=True)
class Cursor:
    """Opaque boundary marker: the primary sort key's value at a row."""

    value: Any


class CursorCodec:
    """Encodes cursor values as urlsafe base64 of MongoDB extended JSON.

    Extended JSON keeps ObjectId, datetime and Decimal128 values typed across
    the round trip, so decoded operands compare the way the store does.
    """

    _json_options = json_util.JSONOptions(
        json_mode=json_util.JSONMode.CANONICAL,
        tz_aware=True,
        tzinfo=timezone.utc,
    )

    def encode(self, value: Any) -> str:
        raw = json_util.dumps({"v": value}, json_options=self._json_options)
        token = base64.urlsafe_b64encode(raw.encode("utf-8")).decode("ascii")
        return token.rstrip("=")

    def encode_row(self, row: Any, field: str) -> str:
        """Encode the value of ``field`` on a row (mapping or object)."""
        return self.encode(get_field(row, field))

    def decode(self, token: str) -> Cursor:
        """Decode a token produced by encode().

        Raises:
            CursorDecodeError: If the token is not a valid cursor
        """
        if not isinstance(token, str) or not token:
            raise CursorDecodeError("Cursor must be a non-empty string")
        # Restore base64 padding stripped by encode()
        padded = token + "=" * (-len(token) % 4)
        try:
            raw = base64.urlsafe_b64decode(padded.encode("ascii")).decode("utf-8")
            payload = json_util.loads(raw, json_options=self._json_options)
        except (binascii.Error, UnicodeError, ValueError, TypeError, ArithmeticError, BSONError) as e:
            raise CursorDecodeError(f"Malformed cursor: {token!r}") from e
        if not isinstance(payload, dict) or "v" not in payload:
            raise CursorDecodeError(f"Malformed cursor: {token!r}")
        return Cursor(payload["v"])


default_codec = CursorCodec()


def encode_cursor(value: Any) -> str:
    return default_codec.encode(value)


def decode_cursor(token: str) -> Cursor:
    return default_codec.decode(token)
