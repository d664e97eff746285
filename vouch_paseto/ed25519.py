"""
Ed25519 signature primitive backed by the ``cryptography`` package.

Deterministic signatures of a fixed width; key widths match the raw
encodings carried inside ``k4.secret.`` and ``k4.public.`` strings.
"""

from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives.asymmetric.ed25519 import (
    Ed25519PrivateKey,
    Ed25519PublicKey,
)
from cryptography.hazmat.primitives.serialization import Encoding, PublicFormat

SIGNATURE_SIZE = 64
SEED_SIZE = 32
PUBLIC_KEY_SIZE = 32
# Secret keys are carried as seed || public key.
SECRET_KEY_SIZE = SEED_SIZE + PUBLIC_KEY_SIZE


def private_key_from_seed(seed: bytes) -> Ed25519PrivateKey:
    return Ed25519PrivateKey.from_private_bytes(seed)


def public_key_from_bytes(raw: bytes) -> Ed25519PublicKey:
    return Ed25519PublicKey.from_public_bytes(raw)


def raw_public_bytes(key: Ed25519PublicKey) -> bytes:
    """Return the 32-byte raw encoding of a public key."""
    return key.public_bytes(encoding=Encoding.Raw, format=PublicFormat.Raw)


def sign(private_key: Ed25519PrivateKey, message: bytes) -> bytes:
    return private_key.sign(message)


def verify(public_key: Ed25519PublicKey, message: bytes, signature: bytes) -> bool:
    """Return True when ``signature`` is valid for ``message``."""
    try:
        public_key.verify(signature, message)
    except InvalidSignature:
        return False
    return True
