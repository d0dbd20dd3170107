"""CityHash32 by Geoff Pike and Jyrki Alakuijala.

This module implements the 32-bit CityHash function. It maps a byte buffer of
any length to a 32-bit digest and is intended for hash tables, checksums and
shard selection. It is not a cryptographic hash.

The input is processed by one of four strategies chosen from its length:

- 0 to 4 bytes: byte-fold
- 5 to 12 bytes: quad-word blend
- 13 to 24 bytes: six-word blend
- more than 24 bytes: 20-byte chunk loop seeded from the tail

Words are always read as little-endian, so digests are identical on big- and
little-endian hosts.

Reference: https://github.com/google/cityhash
"""

from __future__ import annotations

import struct
import sys

from cityhash_tools.core.types import Bracket

MASK_32 = 0xFFFFFFFF

# Magic numbers for 32-bit hashing, copied from murmur3.
C1 = 0xCC9E2D51
C2 = 0x1B873593
MUR_ADD = 0xE6546B64

# Some primes between 2^63 and 2^64, reserved for the 64-bit variant.
K0 = 0xC3A5C85C97CB3127
K1 = 0xB492B66FBE98F273
K2 = 0x9AE16A3B2F90404F

_WORD_FORMATS = {"little": "<I", "big": ">I"}


def _uload32(data: bytes, offset: int, byteorder: str) -> int:
    """Load the raw machine word at offset as a host of byteorder sees it."""
    return struct.unpack_from(_WORD_FORMATS[byteorder], data, offset)[0]


def bswap32(x: int) -> int:
    """Reverse the byte order of a 32-bit value."""
    return int.from_bytes((x & MASK_32).to_bytes(4, "little"), "big")


def fetch32(data: bytes, offset: int, byteorder: str = sys.byteorder) -> int:
    """Read a 32-bit little-endian word at an arbitrary offset.

    Args:
        data: Buffer to read from
        offset: Byte offset of the word, unaligned offsets are allowed
        byteorder: Native byte order of the host ("little" or "big")

    Returns:
        The word in little-endian order, whatever the host byte order
    """
    word = _uload32(data, offset, byteorder)
    if byteorder == "big":
        word = bswap32(word)
    return word


def rotate32(val: int, shift: int) -> int:
    """Rotate a 32-bit value right by shift bits, 0 <= shift < 32."""
    val &= MASK_32
    return val if shift == 0 else ((val >> shift) | (val << (32 - shift))) & MASK_32


def fmix(h: int) -> int:
    """Murmur3 finalizer, forces all bits of h to avalanche."""
    h &= MASK_32
    h ^= h >> 16
    h = (h * 0x85EBCA6B) & MASK_32
    h ^= h >> 13
    h = (h * 0xC2B2AE35) & MASK_32
    h ^= h >> 16
    return h


def mur(a: int, h: int) -> int:
    """Fold the word a into the accumulator h (murmur3 combining step)."""
    a = (a * C1) & MASK_32
    a = rotate32(a, 17)
    a = (a * C2) & MASK_32
    h ^= a
    h = rotate32(h, 19)
    return (h * 5 + MUR_ADD) & MASK_32


def permute3(a: int, b: int, c: int) -> tuple[int, int, int]:
    """Rotate three values one position: (a, b, c) -> (c, a, b)."""
    return c, a, b


def _premix(word: int) -> int:
    return (rotate32((word * C1) & MASK_32, 17) * C2) & MASK_32


def hash32_0_to_4(data: bytes, length: int) -> int:
    """Hash 0 to 4 bytes by folding each byte as a signed value."""
    b = 0
    c = 9
    for i in range(length):
        v = data[i]
        if v > 127:
            v -= 256
        b = (b * C1 + v) & MASK_32
        c ^= b
    return fmix(mur(b, mur(length, c)))


def hash32_5_to_12(data: bytes, length: int) -> int:
    """Hash 5 to 12 bytes from three, possibly overlapping, words."""
    a = length
    b = length * 5
    c = 9
    d = b

    a = (a + fetch32(data, 0)) & MASK_32
    b = (b + fetch32(data, length - 4)) & MASK_32
    c = (c + fetch32(data, (length >> 1) & 4)) & MASK_32

    return fmix(mur(c, mur(b, mur(a, d))))


def hash32_13_to_24(data: bytes, length: int) -> int:
    """Hash 13 to 24 bytes from six words folded in a fixed order."""
    a = fetch32(data, (length >> 1) - 4)
    b = fetch32(data, 4)
    c = fetch32(data, length - 8)
    d = fetch32(data, length >> 1)
    e = fetch32(data, 0)
    f = fetch32(data, length - 4)
    h = length

    return fmix(mur(f, mur(e, mur(d, mur(c, mur(b, mur(a, h)))))))


def hash32_main_loop(data: bytes, length: int) -> int:
    """Hash more than 24 bytes.

    The three accumulators are seeded from the last 20 bytes, then every
    complete 20-byte chunk from the start of the buffer is mixed in.
    """
    h = length & MASK_32
    g = (C1 * length) & MASK_32
    f = g

    a0 = _premix(fetch32(data, length - 4))
    a1 = _premix(fetch32(data, length - 8))
    a2 = _premix(fetch32(data, length - 16))
    a3 = _premix(fetch32(data, length - 12))
    a4 = _premix(fetch32(data, length - 20))

    h ^= a0
    h = rotate32(h, 19)
    h = (h * 5 + MUR_ADD) & MASK_32
    h ^= a2
    h = rotate32(h, 19)
    h = (h * 5 + MUR_ADD) & MASK_32
    g ^= a1
    g = rotate32(g, 19)
    g = (g * 5 + MUR_ADD) & MASK_32
    g ^= a3
    g = rotate32(g, 19)
    g = (g * 5 + MUR_ADD) & MASK_32
    f = (f + a4) & MASK_32
    f = rotate32(f, 19)
    f = (f * 5 + MUR_ADD) & MASK_32

    offset = 0
    for _ in range(main_loop_iterations(length)):
        a0 = _premix(fetch32(data, offset))
        a1 = fetch32(data, offset + 4)
        a2 = _premix(fetch32(data, offset + 8))
        a3 = _premix(fetch32(data, offset + 12))
        a4 = fetch32(data, offset + 16)

        h ^= a0
        h = rotate32(h, 18)
        h = (h * 5 + MUR_ADD) & MASK_32
        f = (f + a1) & MASK_32
        f = rotate32(f, 19)
        f = (f * C1) & MASK_32
        g = (g + a2) & MASK_32
        g = rotate32(g, 18)
        g = (g * 5 + MUR_ADD) & MASK_32
        h ^= (a3 + a1) & MASK_32
        h = rotate32(h, 19)
        h = (h * 5 + MUR_ADD) & MASK_32
        g ^= a4
        g = (bswap32(g) * 5) & MASK_32
        h = (h + a4 * 5) & MASK_32
        h = bswap32(h)
        f = (f + a0) & MASK_32
        f, h, g = permute3(f, h, g)
        offset += 20

    g = (rotate32(g, 11) * C1) & MASK_32
    g = (rotate32(g, 17) * C1) & MASK_32
    f = (rotate32(f, 11) * C1) & MASK_32
    f = (rotate32(f, 17) * C1) & MASK_32
    h = rotate32(h + g, 19)
    h = (h * 5 + MUR_ADD) & MASK_32
    h = (rotate32(h, 17) * C1) & MASK_32
    h = rotate32(h + f, 19)
    h = (h * 5 + MUR_ADD) & MASK_32
    h = (rotate32(h, 17) * C1) & MASK_32
    return h


def select_bracket(length: int) -> Bracket:
    """Return the strategy used for an input of the given length."""
    if length < 0:
        raise ValueError(f"Length must be non-negative, got {length}")
    if length <= 4:
        return Bracket.BYTE_FOLD
    if length <= 12:
        return Bracket.QUAD_WORD
    if length <= 24:
        return Bracket.SIX_WORD
    return Bracket.MAIN_LOOP


def main_loop_iterations(length: int) -> int:
    """Number of 20-byte chunks mixed by the main loop.

    Only complete chunks below the last byte are consumed; the tail seeding
    covers the rest. Returns 0 for lengths handled by the short strategies.
    """
    if length <= 24:
        return 0
    return (length - 1) // 20


def seed_offsets(length: int) -> list[int]:
    """Offsets of the words read outside the main loop, in read order.

    The byte-fold bracket reads single bytes and no words, so it returns an
    empty list.
    """
    bracket = select_bracket(length)
    if bracket is Bracket.BYTE_FOLD:
        return []
    if bracket is Bracket.QUAD_WORD:
        return [0, length - 4, (length >> 1) & 4]
    if bracket is Bracket.SIX_WORD:
        return [(length >> 1) - 4, 4, length - 8, length >> 1, 0, length - 4]
    return [length - 4, length - 8, length - 16, length - 12, length - 20]


_STRATEGIES = {
    Bracket.BYTE_FOLD: hash32_0_to_4,
    Bracket.QUAD_WORD: hash32_5_to_12,
    Bracket.SIX_WORD: hash32_13_to_24,
    Bracket.MAIN_LOOP: hash32_main_loop,
}


def digest32(data: bytes | bytearray | memoryview, length: int | None = None) -> int:
    """Compute the CityHash32 digest of a buffer.

    Args:
        data: Any object supporting the buffer protocol
        length: Number of leading bytes to hash, defaults to the whole buffer

    Returns:
        32-bit hash value

    Raises:
        TypeError: If data does not support the buffer protocol
        ValueError: If length is negative or exceeds the buffer size

    Example:
        >>> hex(digest32(b""))
        '0xdc56d17a'
        >>> hex(digest32(b"hello"))
        '0x79969366'
    """
    view = memoryview(data).cast("B")
    if length is None:
        length = len(view)
    elif length < 0:
        raise ValueError(f"Length must be non-negative, got {length}")
    elif length > len(view):
        raise ValueError(
            f"Length {length} exceeds buffer size {len(view)}"
        )
    return _STRATEGIES[select_bracket(length)](view, length)


def hash32_hex(data: bytes | bytearray | memoryview) -> str:
    """Compute the digest of data as eight lower-case hex digits.

    Example:
        >>> hash32_hex(b"hello world")
        '19a7581a'
    """
    return f"{digest32(data):08x}"
