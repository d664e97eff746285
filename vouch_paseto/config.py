# vouch_paseto/config.py
"""
Centralized configuration for Vouch PASETO.

All configurable values are read from environment variables with sensible defaults.

Usage:
    from vouch_paseto.config import BATCH_CONCURRENCY

Environment Variables:
    PASETO_SECRET_KEY: k4.secret key used by the CLI when --key is omitted
    PASETO_PUBLIC_KEY: k4.public key used by the CLI when --key is omitted
    PASETO_BATCH_CONCURRENCY: Default concurrency for batch verification (default: 50)
    PASETO_LOG_LEVEL: CLI log level when -v is not given (default: WARNING)
"""

import os
from typing import Final, Optional

# =============================================================================
# Keys
# =============================================================================

SECRET_KEY: Final[Optional[str]] = os.getenv("PASETO_SECRET_KEY")

PUBLIC_KEY: Final[Optional[str]] = os.getenv("PASETO_PUBLIC_KEY")

# =============================================================================
# Verification
# =============================================================================

# Upper bound on verifications in flight during AsyncVerifier.verify_batch()
BATCH_CONCURRENCY: Final[int] = int(os.getenv("PASETO_BATCH_CONCURRENCY", "50"))

# =============================================================================
# Logging
# =============================================================================

LOG_LEVEL: Final[str] = os.getenv("PASETO_LOG_LEVEL", "WARNING").upper()

# =============================================================================
# Configuration Summary (for debugging)
# =============================================================================


def _mask(value: Optional[str], keep: int = 10) -> str:
    if not value:
        return "(unset)"
    return value[:keep] + "..."


def print_config() -> None:
    """Print current configuration (useful for debugging). Secrets are masked."""
    print("Vouch PASETO Configuration:")
    print(f"  SECRET_KEY:        {_mask(SECRET_KEY)}")
    print(f"  PUBLIC_KEY:        {PUBLIC_KEY or '(unset)'}")
    print(f"  BATCH_CONCURRENCY: {BATCH_CONCURRENCY}")
    print(f"  LOG_LEVEL:         {LOG_LEVEL}")


if __name__ == "__main__":
    print_config()
