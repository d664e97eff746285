"""
Vouch PASETO Async API - awaitable signing and batch verification.

Signing and verification are CPU-bound and stateless; the awaitable forms run
the same synchronous code in a worker thread so they can be gathered without
blocking the event loop.
"""

import asyncio
import logging
from dataclasses import dataclass
from typing import Dict, List, Optional, Union

from vouch_paseto import config
from vouch_paseto.errors import ErrorKind, PasetoError
from vouch_paseto.keys import load_public_key
from vouch_paseto.signer import Payload, sign
from vouch_paseto.token import TokenInput
from vouch_paseto.verifier import VerifiedToken, verify

logger = logging.getLogger(__name__)


async def sign_async(
    secret_key: str,
    payload: Payload,
    footer: Union[Payload, None] = "",
    assertion: Union[str, bytes, None] = "",
) -> str:
    """Awaitable form of :func:`vouch_paseto.signer.sign`."""
    return await asyncio.to_thread(sign, secret_key, payload, footer, assertion)


async def verify_async(
    public_key: str,
    token: TokenInput,
    assertion: Union[str, bytes, None] = "",
    footer: Optional[Payload] = None,
) -> VerifiedToken:
    """Awaitable form of :func:`vouch_paseto.verifier.verify`."""
    return await asyncio.to_thread(verify, public_key, token, assertion, footer)


@dataclass
class VerificationResult:
    """Result of one token in a batch verification."""

    token_index: int
    is_valid: bool
    result: Optional[VerifiedToken]
    error: Optional[str] = None
    error_kind: Optional[ErrorKind] = None


class AsyncVerifier:
    """
    Async v4.public verifier for high-throughput services.

    Example:
        >>> verifier = AsyncVerifier(public_key)
        >>> result = await verifier.verify(token)
        >>> results = await verifier.verify_batch(tokens)
    """

    def __init__(self, public_key: str, max_concurrent: Optional[int] = None):
        """
        Initialize the async verifier.

        Args:
            public_key: ``k4.public.`` key string.
            max_concurrent: Max verifications in flight during a batch
                (default: PASETO_BATCH_CONCURRENCY).

        Raises:
            KeyInvalidError: If public_key is malformed.
            ValueError: If max_concurrent is less than 1.
        """
        load_public_key(public_key)
        if max_concurrent is None:
            max_concurrent = config.BATCH_CONCURRENCY
        if max_concurrent < 1:
            raise ValueError(f"max_concurrent must be at least 1, got {max_concurrent}")
        self._public_key = public_key
        self._max_concurrent = max_concurrent

        self._stats = {
            "verifications": 0,
            "successes": 0,
            "failures": 0,
        }
        for kind in ErrorKind:
            self._stats[kind.value] = 0

    async def verify(
        self,
        token: TokenInput,
        assertion: Union[str, bytes, None] = "",
        footer: Optional[Payload] = None,
    ) -> VerifiedToken:
        """
        Verify a token asynchronously.

        Raises:
            PasetoError: The same errors as the synchronous verify().
        """
        self._stats["verifications"] += 1
        try:
            result = await verify_async(self._public_key, token, assertion, footer)
        except PasetoError as e:
            self._stats["failures"] += 1
            self._stats[e.kind.value] += 1
            raise
        self._stats["successes"] += 1
        return result

    async def verify_batch(
        self,
        tokens: List[TokenInput],
        assertion: Union[str, bytes, None] = "",
    ) -> List[VerificationResult]:
        """
        Verify multiple tokens concurrently.

        Args:
            tokens: Tokens to verify.
            assertion: Implicit assertion shared by every token.

        Returns:
            List of VerificationResult objects, in input order.
        """
        semaphore = asyncio.Semaphore(self._max_concurrent)

        async def verify_one(index: int, token: TokenInput) -> VerificationResult:
            async with semaphore:
                try:
                    result = await self.verify(token, assertion=assertion)
                    return VerificationResult(token_index=index, is_valid=True, result=result)
                except PasetoError as e:
                    return VerificationResult(
                        token_index=index,
                        is_valid=False,
                        result=None,
                        error=e.detail,
                        error_kind=e.kind,
                    )

        results = await asyncio.gather(*(verify_one(i, t) for i, t in enumerate(tokens)))

        failed = sum(1 for r in results if not r.is_valid)
        if failed:
            logger.debug(f"Batch verification: {failed}/{len(results)} tokens rejected")
        return list(results)

    @property
    def stats(self) -> Dict[str, int]:
        """Return verification statistics."""
        return self._stats.copy()
