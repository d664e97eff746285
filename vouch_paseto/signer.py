"""
Vouch PASETO Signer - issues v4.public tokens signed with Ed25519.

The signature covers PAE(header, payload, footer, assertion) rather than the
raw payload, binding the footer and the (never transmitted) assertion to the
token.
"""

import json
import logging
from collections.abc import Mapping
from typing import Any, Union

from vouch_paseto import ed25519
from vouch_paseto.encoding import to_bytes
from vouch_paseto.errors import KeyInvalidError, PayloadInvalidError
from vouch_paseto.keys import load_secret_key, public_key_from_secret
from vouch_paseto.pae import pae
from vouch_paseto.token import HEADER, format_token

logger = logging.getLogger(__name__)

Payload = Union[str, bytes, Mapping]


def encode_payload(payload: Any) -> bytes:
    """
    Encode a payload for signing.

    Text is UTF-8 encoded, bytes are taken as-is and mappings are serialized
    as compact JSON.

    Raises:
        PayloadInvalidError: If the payload cannot be encoded.
    """
    if isinstance(payload, Mapping):
        try:
            payload = json.dumps(dict(payload), separators=(",", ":"), ensure_ascii=False)
        except (TypeError, ValueError) as e:
            raise PayloadInvalidError(f"Payload is not JSON serializable: {e}") from e
    try:
        return to_bytes(payload)
    except (TypeError, UnicodeEncodeError) as e:
        raise PayloadInvalidError(f"Payload must be text, bytes or a mapping: {e}") from e


def encode_assertion(assertion: Union[str, bytes, None]) -> bytes:
    if assertion is None:
        return b""
    try:
        return to_bytes(assertion)
    except (TypeError, UnicodeEncodeError) as e:
        raise PayloadInvalidError(f"Assertion must be text or bytes: {e}") from e


def sign(
    secret_key: str,
    payload: Payload,
    footer: Union[Payload, None] = "",
    assertion: Union[str, bytes, None] = "",
) -> str:
    """
    Sign a payload and return a v4.public token.

    Args:
        secret_key: ``k4.secret.`` key string.
        payload: Text (typically JSON), bytes, or a mapping serialized as JSON.
        footer: Optional footer, transported unencrypted but covered by the
            signature. An empty footer is omitted from the token.
        assertion: Optional implicit assertion. It is signed but never
            transported, so the verifier must supply the same value.

    Returns:
        The token string.

    Raises:
        KeyInvalidError: If the secret key is malformed.
        PayloadInvalidError: If the payload, footer or assertion cannot be
            encoded.
    """
    private_key = load_secret_key(secret_key)

    payload_bytes = encode_payload(payload)
    footer_bytes = b"" if footer is None else encode_payload(footer)
    assertion_bytes = encode_assertion(assertion)

    message = pae(HEADER.encode("ascii"), payload_bytes, footer_bytes, assertion_bytes)
    try:
        signature = ed25519.sign(private_key, message)
    except ValueError as e:
        raise KeyInvalidError(f"Signing failed: {e}") from e

    logger.debug(
        f"Signed token: payload={len(payload_bytes)} bytes, "
        f"footer={len(footer_bytes)} bytes, assertion={bool(assertion_bytes)}"
    )
    return format_token(payload_bytes, signature, footer_bytes)


class Signer:
    """
    Issues v4.public tokens with one secret key.

    Example:
        >>> keys = generate_keys()
        >>> signer = Signer(keys.secret_key)
        >>> token = signer.sign({"sub": "napoleon"}, footer="kid-1")
    """

    def __init__(self, secret_key: str):
        """
        Initialize the Signer.

        Raises:
            KeyInvalidError: If secret_key is not a valid ``k4.secret.`` key.
        """
        load_secret_key(secret_key)
        self._secret_key = secret_key

    def sign(
        self,
        payload: Payload,
        footer: Union[Payload, None] = "",
        assertion: Union[str, bytes, None] = "",
    ) -> str:
        """Sign ``payload``. See :func:`vouch_paseto.signer.sign`."""
        return sign(self._secret_key, payload, footer=footer, assertion=assertion)

    def get_public_key(self) -> str:
        """Returns the ``k4.public.`` key that verifies this signer's tokens."""
        return public_key_from_secret(self._secret_key)

    def __repr__(self) -> str:
        return f"Signer(public_key={self.get_public_key()!r})"
