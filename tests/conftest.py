"""
Shared pytest fixtures for Vouch PASETO tests.
"""

import pytest

from vouch_paseto import KeyPair, Signer, Verifier, generate_keys

# Ed25519 key pair and token produced by an independent implementation (panva/paseto).
VECTOR_KEYS = KeyPair(
    secret_key="k4.secret.FgbULh0ylLoBsG6KRi2ZM0ZDzNMgaCBp1jB0sbf8OXGBf_1Cd0wyDa76n-iN0qGj0vaYSu5QXdZhbj5lUWhkyA",
    public_key="k4.public.gX_9QndMMg2u-p_ojdKho9L2mEruUF3WYW4-ZVFoZMg",
)
VECTOR_MESSAGE = '{"sub":"napoleon","iat":"2023-01-13T14:36:14.754Z","exp":"3023-01-09T15:34:46.865Z"}'
VECTOR_TOKEN = (
    "v4.public.eyJzdWIiOiJuYXBvbGVvbiIsImlhdCI6IjIwMjMtMDEtMTNUMTQ6MzY6MTQuNzU0WiIsImV4cCI6"
    "IjMwMjMtMDEtMDlUMTU6MzQ6NDYuODY1WiJ9DwetzN2O8ReSqW1MjRl__QOjIMPg2fTc6HnWdbDHbO74bj4idH20"
    "nxfvUG3NTI0k5iMNcWwYAf6dIl3yZ2PJBA"
)


@pytest.fixture
def vector_keys() -> KeyPair:
    """Key pair matching the cross-implementation token."""
    return VECTOR_KEYS


@pytest.fixture
def vector_token() -> str:
    return VECTOR_TOKEN


@pytest.fixture
def vector_message() -> str:
    return VECTOR_MESSAGE


@pytest.fixture
def keypair() -> KeyPair:
    """Generate a fresh keypair for testing."""
    return generate_keys()


@pytest.fixture
def signer(keypair: KeyPair) -> Signer:
    """Create a Signer instance with test keys."""
    return Signer(keypair.secret_key)


@pytest.fixture
def verifier(keypair: KeyPair) -> Verifier:
    """Create a Verifier instance matching the signer fixture."""
    return Verifier(keypair.public_key)


@pytest.fixture
def sample_payload() -> dict:
    """Sample payload for signing tests."""
    return {
        "sub": "agent-7",
        "action": "read_database",
        "scope": ["read", "list"],
    }
