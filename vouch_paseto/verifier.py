"""
Vouch PASETO Verifier - checks v4.public tokens and recovers their contents.

Verification runs in strict stages, each failing with its own error kind:

    parse (TokenInvalid) -> signature (SignatureInvalid) -> decode (PayloadInvalid)

The payload is only interpreted after the signature has been checked.
"""

import hmac
import json
import logging
from dataclasses import dataclass
from typing import Any, Optional, Tuple, Union

from vouch_paseto import ed25519
from vouch_paseto.encoding import to_text
from vouch_paseto.errors import (
    PasetoError,
    PayloadInvalidError,
    SignatureInvalidError,
    TokenInvalidError,
)
from vouch_paseto.keys import load_public_key
from vouch_paseto.pae import pae
from vouch_paseto.signer import Payload, encode_assertion, encode_payload
from vouch_paseto.token import HEADER, TokenInput, parse_token

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class VerifiedToken:
    """The authenticated contents of a token."""

    payload: Any
    """The payload parsed as JSON."""

    footer: str = ""
    """The footer text, empty when the token has none."""


def verify(
    public_key: str,
    token: TokenInput,
    assertion: Union[str, bytes, None] = "",
    footer: Optional[Payload] = None,
) -> VerifiedToken:
    """
    Verify a v4.public token.

    Args:
        public_key: ``k4.public.`` key string.
        token: The token as text or bytes.
        assertion: The implicit assertion used when the token was signed.
        footer: If given, the footer the token must carry. Compared in
            constant time before the signature is checked.

    Returns:
        VerifiedToken with the parsed payload and the footer text.

    Raises:
        KeyInvalidError: If the public key is malformed.
        TokenInvalidError: If the token is structurally invalid.
        SignatureInvalidError: If the signature does not verify, including
            when the assertion differs from the one used at signing.
        PayloadInvalidError: If the verified payload is not UTF-8 JSON.
    """
    key = load_public_key(public_key)
    assertion_bytes = encode_assertion(assertion)

    try:
        parsed = parse_token(token)
        if footer is not None and not hmac.compare_digest(
            parsed.footer, encode_payload(footer)
        ):
            raise TokenInvalidError("Token footer does not match the expected footer")
    except TokenInvalidError as e:
        logger.debug(f"Rejected token ({e.kind.value}): {e.detail}")
        raise

    message = pae(HEADER.encode("ascii"), parsed.payload, parsed.footer, assertion_bytes)
    if not ed25519.verify(key, message, parsed.signature):
        logger.debug("Rejected token (signature_invalid)")
        raise SignatureInvalidError("Token signature verification failed")

    try:
        payload = json.loads(to_text(parsed.payload))
    except (UnicodeDecodeError, ValueError, RecursionError) as e:
        raise PayloadInvalidError(f"Token payload is not valid JSON: {e}") from e
    try:
        footer_text = to_text(parsed.footer)
    except UnicodeDecodeError as e:
        raise PayloadInvalidError("Token footer is not valid UTF-8") from e

    return VerifiedToken(payload=payload, footer=footer_text)


class Verifier:
    """
    Verifies v4.public tokens against one public key.

    Example:
        >>> verifier = Verifier(keys.public_key)
        >>> result = verifier.verify(token)
        >>> result.payload["sub"]
        'napoleon'

        # Non-raising form
        >>> is_valid, result = verifier.check(token)
    """

    def __init__(self, public_key: str):
        """
        Initialize the Verifier.

        Raises:
            KeyInvalidError: If public_key is not a valid ``k4.public.`` key.
        """
        load_public_key(public_key)
        self._public_key = public_key

    @property
    def public_key(self) -> str:
        return self._public_key

    def verify(
        self,
        token: TokenInput,
        assertion: Union[str, bytes, None] = "",
        footer: Optional[Payload] = None,
    ) -> VerifiedToken:
        """Verify ``token``. See :func:`vouch_paseto.verifier.verify`."""
        return verify(self._public_key, token, assertion=assertion, footer=footer)

    def check(
        self,
        token: TokenInput,
        assertion: Union[str, bytes, None] = "",
        footer: Optional[Payload] = None,
    ) -> Tuple[bool, Optional[VerifiedToken]]:
        """
        Verify without raising.

        Returns:
            Tuple of (is_valid, VerifiedToken or None)
        """
        try:
            return True, self.verify(token, assertion=assertion, footer=footer)
        except PasetoError as e:
            logger.debug(f"Token check failed ({e.kind.value}): {e.detail}")
            return False, None
