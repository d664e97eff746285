"""
Vouch PASETO - v4.public tokens for the Vouch Protocol.

Issues and verifies compact, Ed25519-signed tokens carrying a payload, an
optional unencrypted footer and an optional implicit assertion.
"""

__version__ = "1.0.0"

# Core signing/verification
from .signer import Signer, sign
from .verifier import Verifier, VerifiedToken, verify
from .token import decode_footer

# Key management
from .keys import KeyPair, generate_keys, key_from_jwk, key_to_jwk, public_key_from_secret

# Errors
from .errors import (
    ErrorKind,
    KeyInvalidError,
    PasetoError,
    PayloadInvalidError,
    SignatureInvalidError,
    TokenInvalidError,
)


def __getattr__(name):
    """Lazy loading of the async API."""
    if name in ("AsyncVerifier", "VerificationResult", "sign_async", "verify_async"):
        from . import async_verifier

        return getattr(async_verifier, name)
    raise AttributeError(f"module 'vouch_paseto' has no attribute '{name}'")


__all__ = [
    "__version__",
    # Core
    "sign",
    "verify",
    "Signer",
    "Verifier",
    "VerifiedToken",
    "decode_footer",
    # Key management
    "KeyPair",
    "generate_keys",
    "key_to_jwk",
    "key_from_jwk",
    "public_key_from_secret",
    # Errors
    "ErrorKind",
    "PasetoError",
    "KeyInvalidError",
    "TokenInvalidError",
    "SignatureInvalidError",
    "PayloadInvalidError",
    # Async (lazy loaded)
    "AsyncVerifier",
    "VerificationResult",
    "sign_async",
    "verify_async",
]
