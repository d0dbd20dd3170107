"""Core functionality for cityhash_tools.

This module provides shared functionality used across the entire package:
- Configuration management
- Type definitions
- Utility functions
- Digest verification
"""

from cityhash_tools.core.types import Bracket, DigestResult
from cityhash_tools.core.utils import (
    format_digest,
    format_size,
    hexlify,
    parse_digest,
    read_input,
    unhexlify,
)

__all__ = [
    # Types
    "Bracket",
    "DigestResult",
    # Utils
    "hexlify",
    "unhexlify",
    "format_size",
    "format_digest",
    "parse_digest",
    "read_input",
]
