"""
Key material for v4.public tokens.

Keys are exchanged as text with an explicit version and type prefix:

    k4.secret.<base64url(seed || public key)>
    k4.public.<base64url(public key)>

Loading a key checks the prefix and the decoded width before any
cryptographic call is made.
"""

import json
from dataclasses import dataclass

from cryptography.hazmat.primitives.asymmetric.ed25519 import (
    Ed25519PrivateKey,
    Ed25519PublicKey,
)
from jwcrypto import jwk
from jwcrypto.common import JWException

from vouch_paseto import ed25519
from vouch_paseto.encoding import base64url_decode, base64url_encode
from vouch_paseto.errors import KeyInvalidError

SECRET_PREFIX = "k4.secret."
PUBLIC_PREFIX = "k4.public."


@dataclass(frozen=True)
class KeyPair:
    """A matching pair of ``k4.secret.`` and ``k4.public.`` key strings."""

    secret_key: str
    public_key: str

    def __repr__(self) -> str:
        return f"KeyPair(public_key={self.public_key!r})"


def generate_keys() -> KeyPair:
    """
    Generate a fresh Ed25519 key pair.

    Returns:
        KeyPair with the secret key (keep it private) and the public key.
    """
    key = jwk.JWK.generate(kty="OKP", crv="Ed25519")
    return _keypair_from_okp(json.loads(key.export_private()))


def _decode_key(key: str, prefix: str, size: int) -> bytes:
    if not isinstance(key, str):
        raise KeyInvalidError("Key must be a string")
    if not key.startswith(prefix):
        raise KeyInvalidError(f"Key must start with '{prefix}'")
    try:
        raw = base64url_decode(key[len(prefix):])
    except ValueError as e:
        raise KeyInvalidError(f"Key is not valid base64url: {e}") from e
    if len(raw) != size:
        raise KeyInvalidError(f"Key must decode to {size} bytes, got {len(raw)}")
    return raw


def load_secret_key(secret_key: str) -> Ed25519PrivateKey:
    """
    Parse a ``k4.secret.`` string into a signing key.

    Raises:
        KeyInvalidError: On a wrong prefix or width, or when the embedded
            public half does not belong to the seed.
    """
    return _private_key_from_raw(_decode_key(secret_key, SECRET_PREFIX, ed25519.SECRET_KEY_SIZE))


def _private_key_from_raw(raw: bytes) -> Ed25519PrivateKey:
    seed, public = raw[: ed25519.SEED_SIZE], raw[ed25519.SEED_SIZE:]
    try:
        private_key = ed25519.private_key_from_seed(seed)
    except ValueError as e:
        raise KeyInvalidError(f"Invalid Ed25519 seed: {e}") from e
    if ed25519.raw_public_bytes(private_key.public_key()) != public:
        raise KeyInvalidError("Secret key does not match its embedded public key")
    return private_key


def load_public_key(public_key: str) -> Ed25519PublicKey:
    """
    Parse a ``k4.public.`` string into a verification key.

    Raises:
        KeyInvalidError: On a wrong prefix, encoding or width.
    """
    raw = _decode_key(public_key, PUBLIC_PREFIX, ed25519.PUBLIC_KEY_SIZE)
    try:
        return ed25519.public_key_from_bytes(raw)
    except ValueError as e:
        raise KeyInvalidError(f"Invalid Ed25519 public key: {e}") from e


def public_key_from_secret(secret_key: str) -> str:
    """Return the ``k4.public.`` string matching a secret key."""
    private_key = load_secret_key(secret_key)
    return PUBLIC_PREFIX + base64url_encode(ed25519.raw_public_bytes(private_key.public_key()))


# =============================================================================
# JWK interop
# =============================================================================


def _keypair_from_okp(params: dict) -> KeyPair:
    seed = base64url_decode(params["d"])
    public = base64url_decode(params["x"])
    return KeyPair(
        secret_key=SECRET_PREFIX + base64url_encode(seed + public),
        public_key=PUBLIC_PREFIX + base64url_encode(public),
    )


def key_to_jwk(key: str) -> str:
    """
    Convert a ``k4.secret.`` or ``k4.public.`` key to an OKP/Ed25519 JWK.

    Returns:
        JWK JSON string; private keys include the ``d`` parameter.
    """
    if isinstance(key, str) and key.startswith(SECRET_PREFIX):
        raw = _decode_key(key, SECRET_PREFIX, ed25519.SECRET_KEY_SIZE)
        _private_key_from_raw(raw)
        params = {
            "kty": "OKP",
            "crv": "Ed25519",
            "d": base64url_encode(raw[: ed25519.SEED_SIZE]),
            "x": base64url_encode(raw[ed25519.SEED_SIZE:]),
        }
        return jwk.JWK(**params).export_private()

    raw = _decode_key(key, PUBLIC_PREFIX, ed25519.PUBLIC_KEY_SIZE)
    return jwk.JWK(kty="OKP", crv="Ed25519", x=base64url_encode(raw)).export_public()


def key_from_jwk(jwk_json: str) -> str:
    """
    Convert an OKP/Ed25519 JWK to a ``k4.secret.`` or ``k4.public.`` key.

    Private JWKs yield the secret key, public JWKs the public key.
    """
    try:
        key = jwk.JWK.from_json(jwk_json)
    except (JWException, ValueError, TypeError) as e:
        raise KeyInvalidError(f"Invalid JWK: {e}") from e
    if key.get("kty") != "OKP" or key.get("crv") != "Ed25519":
        raise KeyInvalidError("Key must be an Ed25519 key (OKP with crv=Ed25519)")

    try:
        if key.has_private:
            secret_key = _keypair_from_okp(json.loads(key.export_private())).secret_key
            load_secret_key(secret_key)
            return secret_key
        public = base64url_decode(json.loads(key.export_public())["x"])
    except (KeyError, ValueError) as e:
        raise KeyInvalidError(f"Invalid Ed25519 JWK: {e}") from e
    if len(public) != ed25519.PUBLIC_KEY_SIZE:
        raise KeyInvalidError("Ed25519 public key must be 32 bytes")
    return PUBLIC_PREFIX + base64url_encode(public)
