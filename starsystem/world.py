#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
World Statistics Parsing

Decodes a Universal World Profile string such as "A867974-C" into its
starport, physical and social codes. Digits use extended hex (0-9, A-H,
J-N, P-Z; I and O are skipped). Missing or unreadable digits decode to None
rather than raising.
"""

from dataclasses import dataclass
from typing import Optional

_EHEX_DIGITS = "0123456789ABCDEFGHJKLMNPQRSTUVWXYZ"

ATMOSPHERES = (
    "None",
    "Trace",
    "Very Thin Tainted",
    "Very Thin",
    "Thin Tainted",
    "Thin",
    "Standard",
    "Standard Tainted",
    "Dense",
    "Dense Tainted",
    "Exotic",
    "Corrosive",
    "Insidious",
    "Dense High",
    "Thin Low",
    "Unusual",
)


def ehex_value(char: Optional[str]) -> Optional[int]:
    """Decode a single extended-hex digit, None if it is not one."""
    if not char or len(char) != 1:
        return None
    index = _EHEX_DIGITS.find(char.upper())
    return index if index >= 0 else None


@dataclass(frozen=True)
class WorldProfile:
    """
    Decoded world statistics.

    Attributes
    ----------
    starport : str, optional
        Starport class letter (A-E, X)
    size, atmosphere, hydrographics : int, optional
        Physical codes
    population, government, law_level : int, optional
        Social codes
    tech_level : int, optional
        Tech level (the digit after the dash)
    """

    starport: Optional[str] = None
    size: Optional[int] = None
    atmosphere: Optional[int] = None
    hydrographics: Optional[int] = None
    population: Optional[int] = None
    government: Optional[int] = None
    law_level: Optional[int] = None
    tech_level: Optional[int] = None

    @property
    def is_breathable(self) -> bool:
        return self.atmosphere is not None and 4 <= self.atmosphere <= 9


def parse_world_stats(uwp: Optional[str]) -> WorldProfile:
    """
    Parse a world-statistics string.

    Parameters
    ----------
    uwp : str, optional
        Profile such as "A867974-C"; shorter strings decode the fields
        present and leave the rest as None

    Returns
    -------
    WorldProfile
        Decoded profile (all None for an empty or missing string)
    """
    if not uwp or not isinstance(uwp, str):
        return WorldProfile()

    text = uwp.strip()
    main, _, tech = text.partition("-")

    def digit(position: int) -> Optional[int]:
        return ehex_value(main[position]) if position < len(main) else None

    starport = main[0].upper() if main and main[0].isalpha() else None

    return WorldProfile(
        starport=starport,
        size=digit(1),
        atmosphere=digit(2),
        hydrographics=digit(3),
        population=digit(4),
        government=digit(5),
        law_level=digit(6),
        tech_level=ehex_value(tech[:1]) if tech else None,
    )


def atmosphere_description(code: Optional[int]) -> str:
    if code is None or not 0 <= code < len(ATMOSPHERES):
        return "Unknown"
    return ATMOSPHERES[code]
