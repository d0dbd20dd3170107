"""Non-cryptographic hash functions."""

from __future__ import annotations

from cityhash_tools.hashing.city import (
    digest32,
    hash32_hex,
    main_loop_iterations,
    seed_offsets,
    select_bracket,
)

__all__ = [
    "digest32",
    "hash32_hex",
    "main_loop_iterations",
    "seed_offsets",
    "select_bracket",
]
