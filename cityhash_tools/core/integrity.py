"""Digest verification for hashed content.

Compares the CityHash32 digest of a buffer against a previously recorded
value, e.g. a checksum stored next to a file or a shard key kept in an index.
"""

from __future__ import annotations

import structlog

from cityhash_tools.hashing.city import digest32

logger = structlog.get_logger()


class DigestMismatchError(Exception):
    """Raised when a computed digest differs from the expected one.

    Attributes:
        expected: Expected digest
        actual: Computed digest
        source: Description of the verified input
    """

    def __init__(
        self,
        message: str,
        *,
        expected: int | None = None,
        actual: int | None = None,
        source: str | None = None,
    ):
        self.expected = expected
        self.actual = actual
        self.source = source
        super().__init__(message)


def verify_digest(data: bytes, expected: int, source: str | None = None) -> bool:
    """Verify data hashes to the expected digest.

    Args:
        data: Content to hash
        expected: Expected 32-bit digest
        source: Optional description used in the error message

    Returns:
        True if the digest of data matches expected

    Raises:
        DigestMismatchError: If the digest does not match
    """
    actual = digest32(data)
    if actual != expected:
        label = f" for {source}" if source else ""
        logger.debug(
            "digest_mismatch", source=source, expected=expected, actual=actual
        )
        raise DigestMismatchError(
            f"Digest mismatch{label}: expected {expected:08x}, got {actual:08x}",
            expected=expected,
            actual=actual,
            source=source,
        )
    return True
