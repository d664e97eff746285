"""
Byte/text helpers: strict unpadded base64url and UTF-8 conversion.

Decoding is canonical-only. Padding, characters outside the URL-safe
alphabet and non-zero trailing bits are all rejected, so every byte string
has exactly one accepted encoding.
"""

import base64
import binascii
import re
from typing import Union

_BASE64URL_RE = re.compile(r"[A-Za-z0-9_-]*")

# Mask of the bits a final partial quantum must leave unset, keyed by len % 4.
_RESIDUAL_MASK = {2: 0x0F, 3: 0x03}

_ALPHABET = "ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789-_"


def base64url_encode(data: bytes) -> str:
    """Encode bytes as base64url without padding."""
    return base64.urlsafe_b64encode(bytes(data)).decode("ascii").rstrip("=")


def base64url_decode(value: str) -> bytes:
    """
    Decode an unpadded base64url string.

    Raises:
        ValueError: If the input uses characters outside the base64url
            alphabet, carries padding, has an impossible length, or has
            non-zero residual bits.
    """
    if not isinstance(value, str):
        raise ValueError("base64url input must be a string")
    if not _BASE64URL_RE.fullmatch(value):
        raise ValueError("invalid base64url character")

    remainder = len(value) % 4
    if remainder == 1:
        raise ValueError("invalid base64url length")
    if remainder and _ALPHABET.index(value[-1]) & _RESIDUAL_MASK[remainder]:
        raise ValueError("non-canonical base64url encoding")

    try:
        return base64.urlsafe_b64decode(value + "=" * (-remainder % 4))
    except binascii.Error as e:
        raise ValueError(f"invalid base64url: {e}") from e


def to_bytes(value: Union[str, bytes, bytearray, memoryview]) -> bytes:
    """UTF-8 encode text; pass byte sequences through as bytes."""
    if isinstance(value, str):
        return value.encode("utf-8")
    if isinstance(value, (bytes, bytearray, memoryview)):
        return bytes(value)
    raise TypeError(f"expected str or bytes, got {type(value).__name__}")


def to_text(data: bytes) -> str:
    """Strict UTF-8 decode. Raises UnicodeDecodeError on invalid input."""
    return bytes(data).decode("utf-8")
