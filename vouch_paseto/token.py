"""
Token grammar for v4.public tokens.

Wire format:

    v4.public.<base64url(payload || signature)>[.<base64url(footer)>]

Parsing here is purely structural. No cryptographic work happens in this
module; every failure is a TokenInvalidError.
"""

from dataclasses import dataclass
from typing import Union

from vouch_paseto.ed25519 import SIGNATURE_SIZE
from vouch_paseto.encoding import base64url_decode, base64url_encode, to_text
from vouch_paseto.errors import TokenInvalidError

VERSION = "v4"
PURPOSE = "public"
HEADER = f"{VERSION}.{PURPOSE}."

TokenInput = Union[str, bytes, bytearray, memoryview]


@dataclass(frozen=True)
class ParsedToken:
    """Segments of a structurally valid token. Nothing here is verified yet."""

    payload: bytes
    signature: bytes
    footer: bytes = b""


def coerce_token(token: TokenInput) -> str:
    """
    Resolve a text or byte-sequence token to text.

    Raises:
        TokenInvalidError: If the token is neither text nor bytes, or the
            bytes are not ASCII.
    """
    if isinstance(token, str):
        return token
    if isinstance(token, (bytes, bytearray, memoryview)):
        try:
            return bytes(token).decode("ascii")
        except UnicodeDecodeError as e:
            raise TokenInvalidError("Token bytes are not ASCII") from e
    raise TokenInvalidError(f"Token must be str or bytes, got {type(token).__name__}")


def format_token(payload: bytes, signature: bytes, footer: bytes = b"") -> str:
    """Render a token. An empty footer is omitted from the wire form."""
    token = HEADER + base64url_encode(payload + signature)
    if footer:
        token += "." + base64url_encode(footer)
    return token


def _split(token: str) -> list:
    parts = token.split(".")
    if len(parts) not in (3, 4):
        raise TokenInvalidError(f"Token must have 3 or 4 segments, got {len(parts)}")
    if f"{parts[0]}.{parts[1]}." != HEADER:
        raise TokenInvalidError(f"Token header must be '{HEADER}'")
    return parts


def _decode_footer(parts: list) -> bytes:
    if len(parts) == 3:
        return b""
    if not parts[3]:
        raise TokenInvalidError("Token footer segment is empty")
    try:
        return base64url_decode(parts[3])
    except ValueError as e:
        raise TokenInvalidError(f"Token footer is not valid base64url: {e}") from e


def parse_token(token: TokenInput) -> ParsedToken:
    """
    Split a token into payload, signature and footer bytes.

    Raises:
        TokenInvalidError: On a wrong segment count or header, undecodable
            base64url, or a body too short to hold a signature.
    """
    parts = _split(coerce_token(token))

    try:
        body = base64url_decode(parts[2])
    except ValueError as e:
        raise TokenInvalidError(f"Token body is not valid base64url: {e}") from e
    if len(body) < SIGNATURE_SIZE:
        raise TokenInvalidError(
            f"Token body must be at least {SIGNATURE_SIZE} bytes, got {len(body)}"
        )

    return ParsedToken(
        payload=body[:-SIGNATURE_SIZE],
        signature=body[-SIGNATURE_SIZE:],
        footer=_decode_footer(parts),
    )


def decode_footer(token: TokenInput) -> str:
    """
    Read the footer of a token WITHOUT verifying it.

    Useful for picking a key (e.g. by a ``kid`` in the footer) before calling
    verify(). The returned text is untrusted until the token is verified.
    """
    footer = parse_token(token).footer
    try:
        return to_text(footer)
    except UnicodeDecodeError as e:
        raise TokenInvalidError("Token footer is not valid UTF-8") from e
