"""CityHash Tools - CityHash32 digests in pure Python.

This package provides a bit-exact implementation of the 32-bit CityHash
function together with a small command-line tool for hashing and verifying
files.

Key modules:
- hashing: The CityHash32 digest and its mixing primitives
- core: Shared functionality (config, types, utilities, verification)
- commands: CLI command implementations
"""

__version__ = "0.1.0"
__author__ = "CityHash Tools Team"

# Re-export commonly used types and functions
from cityhash_tools.core.types import Bracket, DigestResult
from cityhash_tools.hashing.city import digest32, hash32_hex

__all__ = [
    "__version__",
    "__author__",
    "Bracket",
    "DigestResult",
    "digest32",
    "hash32_hex",
]
