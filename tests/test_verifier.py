"""
Unit tests for verification.
"""

import pytest

from vouch_paseto import Verifier, generate_keys, sign, verify
from vouch_paseto.encoding import base64url_encode
from vouch_paseto.errors import (
    ErrorKind,
    KeyInvalidError,
    PayloadInvalidError,
    SignatureInvalidError,
    TokenInvalidError,
)
from vouch_paseto.token import HEADER


def _replace_char(token: str, index: int) -> str:
    replacement = "B" if token[index] == "A" else "A"
    return token[:index] + replacement + token[index + 1:]


class TestVerifyCrossImplementation:
    """Tokens issued by an independent implementation."""

    def test_verifies_vector_token(self, vector_keys, vector_token):
        result = verify(vector_keys.public_key, vector_token)
        assert result.payload["sub"] == "napoleon"
        assert result.payload["exp"] == "3023-01-09T15:34:46.865Z"
        assert result.footer == ""

    def test_verifies_vector_token_as_bytes(self, vector_keys, vector_token):
        result = verify(vector_keys.public_key, vector_token.encode("ascii"))
        assert result.payload["sub"] == "napoleon"

    def test_verifies_vector_token_as_bytearray(self, vector_keys, vector_token):
        result = verify(vector_keys.public_key, bytearray(vector_token, "ascii"))
        assert result.payload["sub"] == "napoleon"

    def test_round_trip_with_vector_keys(self, vector_keys, vector_message):
        token = sign(vector_keys.secret_key, vector_message)
        assert verify(vector_keys.public_key, token).payload["sub"] == "napoleon"


class TestVerifyRoundTrip:
    """sign() followed by verify()."""

    def test_payload_and_footer(self, keypair, sample_payload):
        token = sign(keypair.secret_key, sample_payload, footer="test")
        result = verify(keypair.public_key, token)
        assert result.payload == sample_payload
        assert result.footer == "test"

    def test_with_assertion(self, keypair, sample_payload):
        token = sign(keypair.secret_key, sample_payload, footer="test", assertion="abc")
        result = verify(keypair.public_key, token, assertion="abc")
        assert result.payload == sample_payload
        assert result.footer == "test"

    def test_unicode_footer(self, keypair, sample_payload):
        token = sign(keypair.secret_key, sample_payload, footer="clé ✓")
        assert verify(keypair.public_key, token).footer == "clé ✓"

    def test_none_assertion_equals_empty(self, keypair, sample_payload):
        token = sign(keypair.secret_key, sample_payload, assertion=None)
        assert verify(keypair.public_key, token, assertion="").payload == sample_payload

    def test_expected_footer_matches(self, keypair, sample_payload):
        token = sign(keypair.secret_key, sample_payload, footer={"kid": "k1"})
        result = verify(keypair.public_key, token, footer={"kid": "k1"})
        assert result.footer == '{"kid":"k1"}'


class TestVerifyStructuralRejection:
    """Malformed tokens fail with TokenInvalidError before any signature work."""

    def test_prefixed_token(self, vector_keys, vector_token):
        with pytest.raises(TokenInvalidError):
            verify(vector_keys.public_key, "a" + vector_token)

    def test_prefixed_token_bytes(self, vector_keys, vector_token):
        with pytest.raises(TokenInvalidError):
            verify(vector_keys.public_key, ("a" + vector_token).encode("ascii"))

    def test_non_canonical_body(self, vector_keys, vector_token):
        """A trailing character that leaves non-zero residual bits."""
        with pytest.raises(TokenInvalidError, match="non-canonical"):
            verify(vector_keys.public_key, vector_token + "a")

    @pytest.mark.parametrize("value", [1, None, 3.5, object()])
    def test_not_text_or_bytes(self, vector_keys, value):
        with pytest.raises(TokenInvalidError):
            verify(vector_keys.public_key, value)

    def test_more_than_four_segments(self, vector_keys, vector_token):
        with pytest.raises(TokenInvalidError, match="segments"):
            verify(vector_keys.public_key, vector_token + ".a.b.c")

    def test_body_shorter_than_signature(self, vector_keys):
        with pytest.raises(TokenInvalidError, match="at least 64"):
            verify(vector_keys.public_key, "v4.public.abc")

    def test_63_byte_body(self, vector_keys):
        with pytest.raises(TokenInvalidError):
            verify(vector_keys.public_key, HEADER + base64url_encode(b"\x01" * 63))

    def test_expected_footer_mismatch(self, keypair, sample_payload):
        token = sign(keypair.secret_key, sample_payload, footer="kid-1")
        with pytest.raises(TokenInvalidError, match="expected footer"):
            verify(keypair.public_key, token, footer="kid-2")


class TestVerifySignatureRejection:
    """Structurally valid tokens whose authenticity check fails."""

    def test_appended_canonical_character(self, vector_keys, vector_token):
        """The body still decodes, but the signature suffix has shifted."""
        with pytest.raises(SignatureInvalidError):
            verify(vector_keys.public_key, vector_token + "A")

    def test_tampered_payload(self, vector_keys, vector_token):
        tampered = _replace_char(vector_token, len(HEADER) + 10)
        with pytest.raises(SignatureInvalidError):
            verify(vector_keys.public_key, tampered)

    def test_tampered_signature(self, vector_keys, vector_token):
        tampered = _replace_char(vector_token, len(vector_token) - 10)
        with pytest.raises(SignatureInvalidError):
            verify(vector_keys.public_key, tampered)

    def test_tampered_footer(self, keypair, sample_payload):
        token = sign(keypair.secret_key, sample_payload, footer="test")
        head, _ = token.rsplit(".", 1)
        with pytest.raises(SignatureInvalidError):
            verify(keypair.public_key, head + "." + base64url_encode(b"tesu"))

    def test_stripped_footer(self, keypair, sample_payload):
        token = sign(keypair.secret_key, sample_payload, footer="test")
        with pytest.raises(SignatureInvalidError):
            verify(keypair.public_key, token.rsplit(".", 1)[0])

    def test_wrong_assertion(self, vector_keys, vector_message):
        token = sign(vector_keys.secret_key, vector_message, footer="test", assertion="abc")
        with pytest.raises(SignatureInvalidError):
            verify(vector_keys.public_key, token, assertion="abcd")

    def test_missing_assertion(self, keypair, sample_payload):
        token = sign(keypair.secret_key, sample_payload, assertion="abc")
        with pytest.raises(SignatureInvalidError):
            verify(keypair.public_key, token)

    def test_wrong_public_key(self, vector_token):
        with pytest.raises(SignatureInvalidError):
            verify(generate_keys().public_key, vector_token)


class TestVerifyKeyAndPayloadRejection:
    """Key checks come first; payload checks come last."""

    def test_secret_key_rejected(self, vector_keys, vector_token):
        with pytest.raises(KeyInvalidError):
            verify(vector_keys.secret_key, vector_token)

    def test_short_public_key(self, vector_token):
        with pytest.raises(KeyInvalidError, match="32 bytes"):
            verify("k4.public.AAAA", vector_token)

    def test_key_checked_before_token(self):
        with pytest.raises(KeyInvalidError):
            verify("k4.public.AAAA", 1)

    def test_non_json_payload(self, keypair):
        token = sign(keypair.secret_key, "not json")
        with pytest.raises(PayloadInvalidError):
            verify(keypair.public_key, token)

    def test_non_utf8_payload(self, keypair):
        token = sign(keypair.secret_key, b"\xff\xfe")
        with pytest.raises(PayloadInvalidError):
            verify(keypair.public_key, token)

    def test_deeply_nested_payload(self, keypair):
        """JSON nested past the recursion limit is a payload error."""
        token = sign(keypair.secret_key, "[" * 100000 + "]" * 100000)
        with pytest.raises(PayloadInvalidError, match="JSON"):
            verify(keypair.public_key, token)

    def test_non_utf8_footer(self, keypair, sample_payload):
        token = sign(keypair.secret_key, sample_payload, footer=b"\xff")
        with pytest.raises(PayloadInvalidError, match="footer"):
            verify(keypair.public_key, token)

    def test_error_kinds(self):
        assert TokenInvalidError().kind is ErrorKind.TOKEN_INVALID
        assert SignatureInvalidError().kind is ErrorKind.SIGNATURE_INVALID
        assert PayloadInvalidError().kind is ErrorKind.PAYLOAD_INVALID
        assert KeyInvalidError().kind is ErrorKind.KEY_INVALID


class TestVerifierClass:
    """Tests for the Verifier class."""

    def test_init_rejects_invalid_key(self):
        with pytest.raises(KeyInvalidError):
            Verifier("k4.secret.AAAA")

    def test_verify(self, signer, verifier, sample_payload):
        token = signer.sign(sample_payload, footer="kid")
        result = verifier.verify(token)
        assert result.payload == sample_payload
        assert result.footer == "kid"

    def test_check_valid(self, signer, verifier, sample_payload):
        is_valid, result = verifier.check(signer.sign(sample_payload))
        assert is_valid is True
        assert result.payload == sample_payload

    @pytest.mark.parametrize("token", ["", "v4.public.abc", None, "invalid.token.here"])
    def test_check_invalid_does_not_raise(self, verifier, token):
        is_valid, result = verifier.check(token)
        assert is_valid is False
        assert result is None

    def test_check_deeply_nested_payload(self, signer, verifier):
        token = signer.sign("[" * 100000 + "]" * 100000)
        assert verifier.check(token) == (False, None)

    def test_check_wrong_assertion(self, signer, verifier, sample_payload):
        token = signer.sign(sample_payload, assertion="aud-1")
        assert verifier.check(token, assertion="aud-2") == (False, None)
