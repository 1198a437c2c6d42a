"""
Binary media fields (profile pictures, post attachments).

Media is stored as raw bytes and always leaves the process as a standard
base64 string, in HTTP responses and socket payloads alike. A string given on
input is read back as base64, so a serialized record validates to the same
bytes again.
"""

import base64
import binascii
from typing import Annotated, Any

from pydantic import BeforeValidator, PlainSerializer


def encode_media(value: bytes | None) -> str | None:
    return base64.b64encode(value).decode("ascii") if value else None


def decode_media(value: Any) -> Any:
    if isinstance(value, str):
        if not value:
            return None
        try:
            return base64.b64decode(value, validate=True)
        except binascii.Error as e:
            raise ValueError("media must be base64 encoded") from e
    return value


MediaBytes = Annotated[
    bytes | None,
    BeforeValidator(decode_media),
    PlainSerializer(encode_media, return_type=str | None, when_used="json"),
]
