#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Deterministic Hashing and Seeded Random Numbers

Turns identifier strings (sector hexes, system names) into stable integer
seeds, and provides a small linear congruential generator seeded from them.
The rolling hash is part of the persisted identifier and bearing format, so
it must stay bit-for-bit identical across versions.
"""

from typing import Iterator

# 32-bit wraparound for the rolling hash
_UINT32_MASK = 0xFFFFFFFF
_INT32_SIGN = 0x80000000

# Linear congruential generator constants
LCG_MULTIPLIER = 1103515245
LCG_INCREMENT = 12345
LCG_MASK = 0x7FFFFFFF


def _utf16_code_units(text: str) -> Iterator[int]:
    """Yield the UTF-16 code units of a string (surrogate pairs split)."""
    for ch in text:
        code = ord(ch)
        if code > 0xFFFF:
            code -= 0x10000
            yield 0xD800 + (code >> 10)
            yield 0xDC00 + (code & 0x3FF)
        else:
            yield code


def hash_to_int(text: str) -> int:
    """
    Stable rolling hash of a string.

    Computes ``h = h * 31 + code_unit`` over the UTF-16 code units of the
    string, wrapping to a signed 32-bit integer after every step.

    Parameters
    ----------
    text : str
        String to hash

    Returns
    -------
    int
        Hash value in [-2**31, 2**31 - 1]
    """
    h = 0
    for unit in _utf16_code_units(text):
        h = (h * 31 + unit) & _UINT32_MASK
    if h & _INT32_SIGN:
        h -= 1 << 32
    return h


def hash_to_degrees(text: str) -> int:
    """
    Map a string onto a compass bearing in [0, 360).

    The remainder takes the sign of the hash before the absolute value is
    applied, which for a positive modulus is the same as ``abs(h) % 360``.
    """
    return abs(hash_to_int(text)) % 360


def seed_from_text(text: str) -> int:
    """Non-negative generator seed for an identifier string."""
    return abs(hash_to_int(text))


class SeededRandom:
    """
    Small-state deterministic random number generator.

    One instance is created per generation call and passed explicitly to
    every function that draws from it. Two instances built from the same
    seed always produce the same sequence.

    Parameters
    ----------
    seed : int
        Initial generator state

    Attributes
    ----------
    seed : int
        The seed this generator was built from
    state : int
        Current internal state (31-bit)
    """

    def __init__(self, seed: int):
        self.seed = int(seed)
        self.state = self.seed

    def next(self) -> float:
        """
        Advance the generator and return the next value.

        The product is formed in IEEE double precision before masking so the
        low bits match sequences already stored in persisted sector data.

        Returns
        -------
        float
            Next value in [0, 1)
        """
        product = float(self.state) * LCG_MULTIPLIER + LCG_INCREMENT
        self.state = int(product) & LCG_MASK
        return self.state / LCG_MASK

    def uniform(self, low: float, high: float) -> float:
        """Next value scaled into [low, high)."""
        return low + self.next() * (high - low)

    def __repr__(self) -> str:
        return f"SeededRandom(seed={self.seed}, state={self.state})"
