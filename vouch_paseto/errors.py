"""
Error types raised while issuing and verifying v4.public tokens.

Every failure belongs to exactly one ErrorKind, so callers can tell a
malformed token apart from one whose authenticity check failed.
"""

from enum import Enum


class ErrorKind(str, Enum):
    """The closed set of failure kinds."""

    KEY_INVALID = "key_invalid"
    TOKEN_INVALID = "token_invalid"
    SIGNATURE_INVALID = "signature_invalid"
    PAYLOAD_INVALID = "payload_invalid"


class PasetoError(Exception):
    """Base exception for token errors."""

    kind: ErrorKind

    def __init__(self, detail: str):
        super().__init__(detail)
        self.detail = detail

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.detail!r})"


class KeyInvalidError(PasetoError):
    """Raised when a key string has the wrong prefix, encoding or width."""

    kind = ErrorKind.KEY_INVALID

    def __init__(self, detail: str = "Invalid key"):
        super().__init__(detail)


class TokenInvalidError(PasetoError):
    """Raised when a token is structurally malformed."""

    kind = ErrorKind.TOKEN_INVALID

    def __init__(self, detail: str = "Invalid token"):
        super().__init__(detail)


class SignatureInvalidError(PasetoError):
    """Raised when a well-formed token fails the signature check."""

    kind = ErrorKind.SIGNATURE_INVALID

    def __init__(self, detail: str = "Invalid signature"):
        super().__init__(detail)


class PayloadInvalidError(PasetoError):
    """Raised when a payload cannot be encoded, or decoded after verification."""

    kind = ErrorKind.PAYLOAD_INVALID

    def __init__(self, detail: str = "Invalid payload"):
        super().__init__(detail)
