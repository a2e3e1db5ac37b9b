"""Identifier hashing so user and therapist IDs never reach the logs.

Diary text and conversation content are never logged at all; only their
lengths or a digest from ``hash_text_for_audit``.
"""
import hashlib
import logging
from typing import Optional

logger = logging.getLogger(__name__)


MIN_SALT_LENGTH = 32

# Injected at startup from the PII_HASH_SALT secret
_PII_SALT: Optional[str] = None


def configure_pii_salt(salt: str) -> None:
    """Configure the salt used by ``hash_pii``.

    Must be called during application startup before any identifier is
    hashed.

    Args:
        salt: Secret salt value

    Raises:
        ValueError: If salt is empty or shorter than MIN_SALT_LENGTH
    """
    global _PII_SALT
    if not salt or len(salt) < MIN_SALT_LENGTH:
        logger.critical(
            "PII_SALT_CONFIGURATION_FAILED",
            extra={"reason": "Salt too short or empty", "min_length": MIN_SALT_LENGTH}
        )
        raise ValueError(f"PII salt must be at least {MIN_SALT_LENGTH} characters")

    _PII_SALT = salt
    logger.info("PII_SALT_CONFIGURED", extra={"salt_length": len(salt)})


def hash_pii(value: str) -> str:
    """Return a salted SHA-256 digest of a user or therapist identifier.

    The digest is stable for a given salt, so it can be used as a log
    correlation key and as a stream partition key.

    Raises:
        RuntimeError: If configure_pii_salt() has not been called
    """
    if _PII_SALT is None:
        logger.critical(
            "PII_HASH_FAILED",
            extra={"reason": "Salt not configured", "action": "call configure_pii_salt()"}
        )
        raise RuntimeError("PII salt not configured. Call configure_pii_salt() first.")

    return hashlib.sha256(f"{_PII_SALT}{value}".encode()).hexdigest()


def hash_text_for_audit(text: str) -> str:
    """Unsalted SHA-256 fingerprint of free text (diary entries, messages)."""
    return hashlib.sha256((text or "").encode()).hexdigest()
