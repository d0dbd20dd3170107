"""Tests for the CityHash32 digest and its primitives."""

from __future__ import annotations

import random
import struct

import pytest

from cityhash_tools.core.types import Bracket
from cityhash_tools.hashing import city
from cityhash_tools.hashing.city import (
    C1,
    C2,
    K0,
    K1,
    K2,
    MUR_ADD,
    bswap32,
    digest32,
    fetch32,
    fmix,
    hash32_0_to_4,
    hash32_5_to_12,
    hash32_13_to_24,
    hash32_hex,
    hash32_main_loop,
    main_loop_iterations,
    mur,
    permute3,
    rotate32,
    seed_offsets,
    select_bracket,
)

M = 0xFFFFFFFF


# Straightforward restatements of each bracket, used as oracles.

def _word(data: bytes, offset: int) -> int:
    return struct.unpack("<I", bytes(data[offset:offset + 4]))[0]


def _rotr(v: int, s: int) -> int:
    v &= M
    return ((v >> s) | (v << (32 - s))) & M if s else v


def _mur(a: int, h: int) -> int:
    a = _rotr(a * C1, 17) * C2 & M
    h = _rotr(h ^ a, 19)
    return (h * 5 + 0xE6546B64) & M


def _fmix(h: int) -> int:
    h ^= h >> 16
    h = h * 0x85EBCA6B & M
    h ^= h >> 13
    h = h * 0xC2B2AE35 & M
    return h ^ (h >> 16)


def oracle_byte_fold(data: bytes) -> int:
    b, c = 0, 9
    for v in struct.unpack(f"{len(data)}b", data):
        b = (b * C1 + v) & M
        c ^= b
    return _fmix(_mur(b, _mur(len(data), c)))


def oracle_quad_word(data: bytes) -> int:
    n = len(data)
    a = (n + _word(data, 0)) & M
    b = (n * 5 + _word(data, n - 4)) & M
    c = (9 + _word(data, (n >> 1) & 4)) & M
    return _fmix(_mur(c, _mur(b, _mur(a, n * 5))))


def oracle_six_word(data: bytes) -> int:
    n = len(data)
    h = n
    for offset in ((n >> 1) - 4, 4, n - 8, n >> 1, 0, n - 4):
        h = _mur(_word(data, offset), h)
    return _fmix(h)


def random_bytes(rng: random.Random, length: int) -> bytes:
    return bytes(rng.getrandbits(8) for _ in range(length))


class TestRotate32:
    """Tests for 32-bit right rotation."""

    def test_zero_shift_returns_value(self) -> None:
        assert rotate32(0xDEADBEEF, 0) == 0xDEADBEEF

    def test_one_bit_wraps_to_top(self) -> None:
        assert rotate32(1, 1) == 0x80000000

    def test_byte_rotation(self) -> None:
        assert rotate32(0x12345678, 8) == 0x78123456

    def test_known_value(self) -> None:
        assert rotate32(0xDEADBEEF, 17) == 0xDF77EF56

    def test_masks_wide_input(self) -> None:
        assert rotate32(0x1_0000_0001, 1) == 0x80000000

    def test_every_shift_is_reversible(self) -> None:
        for shift in range(32):
            assert rotate32(rotate32(0xCAFEBABE, shift), (32 - shift) % 32) == 0xCAFEBABE


class TestBswap32:
    """Tests for byte swapping."""

    def test_known_value(self) -> None:
        assert bswap32(0x12345678) == 0x78563412

    def test_involution(self) -> None:
        assert bswap32(bswap32(0xA1B2C3D4)) == 0xA1B2C3D4

    def test_palindrome(self) -> None:
        assert bswap32(0xFF0000FF) == 0xFF0000FF


class TestFetch32:
    """Tests for the little-endian word loader."""

    def test_little_endian_order(self) -> None:
        assert fetch32(b"\x01\x02\x03\x04", 0) == 0x04030201

    def test_unaligned_offset(self) -> None:
        data = bytes(range(10))
        assert fetch32(data, 3) == 0x06050403

    @pytest.mark.parametrize("offset", [0, 1, 2, 3, 5, 12])
    def test_host_byte_order_independent(self, offset: int) -> None:
        data = bytes(range(0x80, 0x90))
        little = fetch32(data, offset, byteorder="little")
        big = fetch32(data, offset, byteorder="big")
        assert little == big == int.from_bytes(data[offset:offset + 4], "little")

    def test_out_of_range_offset_raises(self) -> None:
        with pytest.raises(struct.error):
            fetch32(b"\x00\x01\x02", 0)


class TestFmix:
    """Tests for the avalanche finalizer."""

    def test_zero_is_fixed_point(self) -> None:
        assert fmix(0) == 0

    def test_known_values(self) -> None:
        assert fmix(1) == 0x514E28B7
        assert fmix(0xDEADBEEF) == 0x0DE5C6A9

    def test_is_injective_on_sample(self) -> None:
        values = {fmix(i) for i in range(5000)}
        assert len(values) == 5000


class TestMur:
    """Tests for the pairwise mixer."""

    def test_known_values(self) -> None:
        assert mur(0, 9) == 0xE65A0B64
        assert mur(1, 2) == 0x26D04576
        assert mur(0xFFFFFFFF, 0xFFFFFFFF) == 0xB849F5EE

    def test_order_matters(self) -> None:
        assert mur(2, mur(1, 0)) != mur(1, mur(2, 0))

    def test_matches_oracle(self) -> None:
        rng = random.Random(7)
        for _ in range(200):
            a, h = rng.getrandbits(32), rng.getrandbits(32)
            assert mur(a, h) == _mur(a, h)


class TestPermute3:
    """Tests for the three-way rotation."""

    def test_rotation(self) -> None:
        assert permute3(1, 2, 3) == (3, 1, 2)

    def test_three_rotations_restore(self) -> None:
        values = (10, 20, 30)
        assert permute3(*permute3(*permute3(*values))) == values


class TestConstants:
    """Tests for the fixed multipliers."""

    def test_murmur_constants(self) -> None:
        assert C1 == 0xCC9E2D51
        assert C2 == 0x1B873593
        assert MUR_ADD == 0xE6546B64

    def test_reserved_wide_constants(self) -> None:
        for k in (K0, K1, K2):
            assert 2**63 < k < 2**64
            assert k % 2 == 1


class TestSelectBracket:
    """Tests for length dispatch."""

    @pytest.mark.parametrize(
        "length, bracket",
        [
            (0, Bracket.BYTE_FOLD),
            (1, Bracket.BYTE_FOLD),
            (4, Bracket.BYTE_FOLD),
            (5, Bracket.QUAD_WORD),
            (12, Bracket.QUAD_WORD),
            (13, Bracket.SIX_WORD),
            (24, Bracket.SIX_WORD),
            (25, Bracket.MAIN_LOOP),
            (44, Bracket.MAIN_LOOP),
            (1000, Bracket.MAIN_LOOP),
        ],
    )
    def test_boundaries(self, length: int, bracket: Bracket) -> None:
        assert select_bracket(length) is bracket

    def test_negative_length(self) -> None:
        with pytest.raises(ValueError):
            select_bracket(-1)

    @pytest.mark.parametrize("length, count", [(0, 0), (24, 0), (25, 1), (44, 2), (45, 2), (1000, 49)])
    def test_main_loop_iterations(self, length: int, count: int) -> None:
        assert main_loop_iterations(length) == count


class TestBracketOracles:
    """Each bracket agrees with an independent restatement of its formula."""

    def test_byte_fold(self) -> None:
        rng = random.Random(1)
        for length in range(5):
            for _ in range(50):
                data = random_bytes(rng, length)
                assert hash32_0_to_4(data, length) == oracle_byte_fold(data)
                assert digest32(data) == oracle_byte_fold(data)

    def test_quad_word(self) -> None:
        rng = random.Random(2)
        for length in range(5, 13):
            for _ in range(50):
                data = random_bytes(rng, length)
                assert hash32_5_to_12(data, length) == oracle_quad_word(data)
                assert digest32(data) == oracle_quad_word(data)

    def test_six_word(self) -> None:
        rng = random.Random(3)
        for length in range(13, 25):
            for _ in range(50):
                data = random_bytes(rng, length)
                assert hash32_13_to_24(data, length) == oracle_six_word(data)
                assert digest32(data) == oracle_six_word(data)

    def test_empty_input_scenario(self) -> None:
        assert digest32(b"") == fmix(mur(0, mur(0, 9))) == 0xDC56D17A

    def test_main_loop_dispatch(self) -> None:
        data = bytes(range(200))
        for length in (25, 44, 45, 199):
            assert digest32(data[:length]) == hash32_main_loop(data, length)


class TestMainLoop:
    """Tests for the >24 byte strategy."""

    @pytest.mark.parametrize("length, count", [(25, 1), (44, 2), (1000, 49)])
    def test_iteration_count(
        self, monkeypatch: pytest.MonkeyPatch, length: int, count: int
    ) -> None:
        calls = []
        original = city.permute3

        def counting(a: int, b: int, c: int) -> tuple[int, int, int]:
            calls.append((a, b, c))
            return original(a, b, c)

        monkeypatch.setattr(city, "permute3", counting)
        digest32(bytes(length))
        assert len(calls) == count

    def test_length_25_read_offsets(self, monkeypatch: pytest.MonkeyPatch) -> None:
        offsets = []
        original = city.fetch32

        def recording(data: bytes, offset: int) -> int:
            offsets.append(offset)
            return original(data, offset)

        monkeypatch.setattr(city, "fetch32", recording)
        digest32(bytes(25))
        assert offsets[:5] == [21, 17, 9, 13, 5]
        assert offsets[5:] == [0, 4, 8, 12, 16]

    def test_seed_offsets(self) -> None:
        assert seed_offsets(25) == [21, 17, 9, 13, 5]
        assert seed_offsets(4) == []
        assert seed_offsets(5) == [0, 1, 0]
        assert seed_offsets(12) == [0, 8, 4]
        assert seed_offsets(13) == [2, 4, 5, 6, 0, 9]

    def test_simulated_big_endian_host(self, monkeypatch: pytest.MonkeyPatch) -> None:
        original = city.fetch32
        data = bytes((i * 31 + 7) % 256 for i in range(1000))
        expected = {n: digest32(data[:n]) for n in (5, 13, 25, 1000)}

        monkeypatch.setattr(city, "fetch32", lambda d, o: original(d, o, "big"))
        for n, value in expected.items():
            assert digest32(data[:n]) == value
        assert digest32(data) == 0x380C722E


class TestDigest32:
    """Tests for the public entry point."""

    def test_returns_32_bit(self) -> None:
        rng = random.Random(4)
        for length in (0, 3, 9, 20, 77, 500):
            value = digest32(random_bytes(rng, length))
            assert 0 <= value <= 0xFFFFFFFF

    def test_deterministic(self) -> None:
        data = b"deterministic test input for cityhash"
        assert digest32(data) == digest32(bytes(data))

    def test_length_prefix(self) -> None:
        data = b"prefix-hashing-with-explicit-length"
        assert digest32(data, 10) == digest32(data[:10])
        assert digest32(data, 0) == digest32(b"")

    def test_length_exceeds_buffer(self) -> None:
        with pytest.raises(ValueError, match="exceeds buffer size"):
            digest32(b"abc", 4)

    def test_negative_length(self) -> None:
        with pytest.raises(ValueError):
            digest32(b"abc", -1)

    def test_rejects_str(self) -> None:
        with pytest.raises(TypeError):
            digest32("text")  # type: ignore[arg-type]

    def test_hex_helper(self) -> None:
        assert hash32_hex(b"") == "dc56d17a"
        assert hash32_hex(b"hello world") == "19a7581a"

    def test_input_not_mutated(self) -> None:
        data = bytearray(b"x" * 64)
        digest32(data)
        assert data == bytearray(b"x" * 64)


class TestDistribution:
    """Statistical sanity checks."""

    def test_single_bit_flip_changes_digest(self) -> None:
        rng = random.Random(5)
        changed = total = 0
        for _ in range(100):
            data = bytearray(random_bytes(rng, rng.randint(8, 120)))
            base = digest32(data)
            for _ in range(8):
                bit = rng.randrange(len(data) * 8)
                data[bit // 8] ^= 1 << (bit % 8)
                changed += digest32(data) != base
                total += 1
                data[bit // 8] ^= 1 << (bit % 8)
        assert changed / total > 0.99

    def test_avalanche_flips_about_half_the_bits(self) -> None:
        rng = random.Random(6)
        flipped = samples = 0
        for _ in range(300):
            data = bytearray(random_bytes(rng, rng.randint(8, 60)))
            base = digest32(data)
            bit = rng.randrange(len(data) * 8)
            data[bit // 8] ^= 1 << (bit % 8)
            flipped += bin(base ^ digest32(data)).count("1")
            samples += 1
        assert 13 < flipped / samples < 19

    def test_empty_and_zero_inputs_do_not_collide(self) -> None:
        rng = random.Random(8)
        digests = [digest32(b"")]
        digests += [digest32(bytes(n)) for n in (1, 2, 4, 5, 8, 12, 13, 24, 25, 64, 100)]
        digests += [digest32(random_bytes(rng, rng.randint(8, 64))) for _ in range(200)]
        assert len(set(digests)) == len(digests)
        assert digest32(b"") != 0


class TestHashingModuleExports:
    """Test that the package level exports work."""

    def test_import_from_hashing(self) -> None:
        from cityhash_tools.hashing import digest32 as exported
        assert exported is digest32

    def test_import_from_package(self) -> None:
        import cityhash_tools
        assert cityhash_tools.digest32(b"hello") == 0x79969366
        assert cityhash_tools.hash32_hex(b"") == "dc56d17a"
