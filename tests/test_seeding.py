#!/usr/bin/env python3
"""
Tests for deterministic hashing and the seeded generator.

These tests verify:
1. The rolling hash matches the 32-bit signed reference values
2. Bearings from hashes always fall in [0, 360)
3. Seeded generators are reproducible and independent of each other
"""

import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent))

from starsystem.seeding import (
    LCG_MASK,
    SeededRandom,
    hash_to_degrees,
    hash_to_int,
    seed_from_text,
)


class TestHashToInt:
    """Tests for the rolling string hash."""

    def test_empty_string(self):
        """Empty string hashes to zero."""
        assert hash_to_int("") == 0

    def test_short_strings(self):
        """Small hashes are plain base-31 polynomials."""
        assert hash_to_int("a") == 97
        assert hash_to_int("ab") == 97 * 31 + 98

    def test_reference_value(self):
        """Matches the well-known 32-bit value for "hello"."""
        assert hash_to_int("hello") == 99162322

    def test_signed_wraparound(self):
        """Overflow wraps to a signed 32-bit value."""
        assert hash_to_int("polygenelubricants") == -2 ** 31

    def test_known_collision(self):
        """Different strings can share a hash value."""
        assert hash_to_int("Aa") == hash_to_int("BB")

    def test_result_in_int32_range(self):
        """Long inputs stay inside the signed 32-bit range."""
        for text in ("1910-gasgiant-0", "Regina-planet-3", "x" * 500):
            h = hash_to_int(text)
            assert -2 ** 31 <= h <= 2 ** 31 - 1

    def test_astral_characters_use_surrogate_pairs(self):
        """Characters outside the BMP hash as two UTF-16 code units."""
        expected = 0xD83D * 31 + 0xDE80
        assert hash_to_int("\U0001F680") == expected


class TestHashToDegrees:
    """Tests for string-to-bearing mapping."""

    def test_small_hash(self):
        """Small hash reduces modulo 360."""
        assert hash_to_degrees("ab") == 3105 % 360

    def test_minimum_int32(self):
        """The most negative hash still maps into range."""
        assert hash_to_degrees("polygenelubricants") == 128

    def test_range(self):
        """Every bearing is in [0, 360)."""
        for i in range(200):
            assert 0 <= hash_to_degrees(f"System-{i}-planet-{i % 7}") < 360

    def test_seed_is_non_negative(self):
        """Seeds are absolute hash values."""
        assert seed_from_text("polygenelubricants") == 2 ** 31
        assert seed_from_text("1910") >= 0


class TestSeededRandom:
    """Tests for the linear congruential generator."""

    def test_first_values_from_zero(self):
        """The sequence from seed 0 matches the reference constants."""
        rng = SeededRandom(0)
        assert rng.next() == 12345 / LCG_MASK
        rng.next()
        assert rng.state == 1406932606

    def test_same_seed_same_sequence(self):
        """Identical seeds produce identical sequences."""
        a = SeededRandom(12345)
        b = SeededRandom(12345)
        assert [a.next() for _ in range(50)] == [b.next() for _ in range(50)]

    def test_different_seeds_differ(self):
        """Different seeds produce different sequences."""
        a = SeededRandom(1)
        b = SeededRandom(2)
        assert [a.next() for _ in range(5)] != [b.next() for _ in range(5)]

    def test_instances_are_independent(self):
        """Drawing from one instance does not affect another."""
        a = SeededRandom(99)
        b = SeededRandom(99)
        for _ in range(10):
            a.next()
        fresh = SeededRandom(99)
        assert b.next() == fresh.next()

    def test_values_in_unit_interval(self):
        """Values stay within [0, 1]."""
        rng = SeededRandom(seed_from_text("1910"))
        for _ in range(1000):
            value = rng.next()
            assert 0.0 <= value <= 1.0

    def test_uniform_bounds(self):
        """uniform() scales into the requested interval."""
        rng = SeededRandom(7)
        for _ in range(200):
            value = rng.uniform(1.5, 40.0)
            assert 1.5 <= value <= 40.0

    def test_large_seed(self):
        """Seeds beyond 31 bits are accepted and masked."""
        rng = SeededRandom(2 ** 31)
        rng.next()
        assert 0 <= rng.state <= LCG_MASK

    def test_repr(self):
        """repr shows seed and state."""
        rng = SeededRandom(5)
        assert "seed=5" in repr(rng)

    @pytest.mark.parametrize("seed", [0, 1, 1910, 2 ** 31 - 1])
    def test_state_stays_31_bit(self, seed):
        """State never exceeds the mask."""
        rng = SeededRandom(seed)
        for _ in range(100):
            rng.next()
            assert 0 <= rng.state <= LCG_MASK
