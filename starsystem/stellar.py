#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Stellar Classification and Habitable Zones

Parses spectral classification strings ("G2 V", "M0 V M4 V", "D"), derives
approximate stellar properties, and computes the habitable zone band from
luminosity. Luminosity in solar units, distances in AU, radii in km.

Unrecognised classifications fall back to a solar-type star so that a
sector-wide build never stops on a malformed entry.
"""

import logging
import math
import re
from dataclasses import dataclass
from typing import Dict, Optional, Tuple, Union

logger = logging.getLogger(__name__)

SOLAR_RADIUS_KM = 696340.0
AU_KM = 149597870.7

# Insolation (relative to Earth) at the habitable-zone edges
INNER_EDGE_FLUX = 1.1
OUTER_EDGE_FLUX = 0.53

DEFAULT_SUBCLASS = 5
DEFAULT_LUMINOSITY_CLASS = "V"


@dataclass(frozen=True)
class SpectralType:
    """
    Reference values for one spectral letter.

    For main-sequence letters the values describe subclass 0; properties
    for later subclasses are interpolated towards the next cooler letter.
    """

    luminosity: float
    temperature: float
    radius: float  # Solar radii
    mass: float  # Solar masses
    color: str
    description: str


# Harvard sequence, hottest first. The terminal entry closes the M range.
MAIN_SEQUENCE_ORDER = ("O", "B", "A", "F", "G", "K", "M")

SPECTRAL_TYPES: Dict[str, SpectralType] = {
    "O": SpectralType(500000.0, 50000.0, 15.0, 60.0, "#9bb0ff", "Blue Giant"),
    "B": SpectralType(20000.0, 30000.0, 6.6, 16.0, "#aabfff", "Blue-White"),
    "A": SpectralType(40.0, 10000.0, 1.8, 2.1, "#cad7ff", "White"),
    "F": SpectralType(6.0, 7500.0, 1.4, 1.4, "#f8f7ff", "Yellow-White"),
    "G": SpectralType(1.3, 6000.0, 1.15, 1.04, "#fff4ea", "Yellow (Sol-type)"),
    "K": SpectralType(0.45, 5200.0, 0.96, 0.8, "#ffd2a1", "Orange Dwarf"),
    "M": SpectralType(0.07, 3700.0, 0.7, 0.45, "#ffcc6f", "Red Dwarf"),
    # Substellar objects and remnants: subclass is ignored
    "L": SpectralType(1e-4, 1800.0, 0.1, 0.06, "#ff6633", "Brown Dwarf"),
    "T": SpectralType(1e-5, 1000.0, 0.09, 0.04, "#cc3300", "Cool Brown Dwarf"),
    "Y": SpectralType(1e-6, 500.0, 0.09, 0.02, "#993300", "Ultra-cool Brown Dwarf"),
    "D": SpectralType(3e-3, 10000.0, 0.012, 0.6, "#ffffff", "White Dwarf"),
    "N": SpectralType(1e-4, 500000.0, 1.5e-5, 1.4, "#aaaaff", "Neutron Star"),
}

_LATE_M = SpectralType(3e-4, 2400.0, 0.1, 0.08, "#ffcc6f", "Red Dwarf")

# Luminosity class -> (luminosity multiplier, radius multiplier, label)
LUMINOSITY_CLASSES: Dict[str, Tuple[float, float, str]] = {
    "IA": (10000.0, 100.0, "Bright Supergiant"),
    "IB": (5000.0, 50.0, "Supergiant"),
    "II": (1000.0, 25.0, "Bright Giant"),
    "III": (100.0, 10.0, "Giant"),
    "IV": (5.0, 2.0, "Subgiant"),
    "V": (1.0, 1.0, "Main Sequence"),
    "VI": (0.5, 0.8, "Subdwarf"),
    "VII": (0.001, 0.01, "White Dwarf"),
}

_COMPONENT_PATTERN = re.compile(
    r"\b(BD|D[ABOQZC]?|[OBAFGKMLTYN])(?=\d|\s|$)(\d(?:\.\d+)?)?"
    r"(?:\s*(IA|IB|III|II|IV|VII|VI|V)\b)?",
    re.IGNORECASE,
)


@dataclass(frozen=True)
class SpectralClass:
    """
    One parsed star of a classification string.

    Attributes
    ----------
    letter : str
        Spectral letter (O, B, A, F, G, K, M, L, T, Y, D or N)
    subclass : float, optional
        Numeric subclass 0-9 as written, None when absent
    luminosity_class : str
        Luminosity class in upper case ("V", "III", "IA", ...)
    """

    letter: str
    subclass: Optional[float] = None
    luminosity_class: str = DEFAULT_LUMINOSITY_CLASS

    @property
    def effective_subclass(self) -> float:
        return DEFAULT_SUBCLASS if self.subclass is None else self.subclass

    @property
    def is_main_sequence_letter(self) -> bool:
        return self.letter in MAIN_SEQUENCE_ORDER

    def __str__(self) -> str:
        if not self.is_main_sequence_letter and self.subclass is None:
            return self.letter
        sub = self.effective_subclass
        sub_text = str(int(sub)) if float(sub).is_integer() else str(sub)
        lum = self.luminosity_class
        if lum in ("IA", "IB"):
            lum = lum[0] + lum[1].lower()
        return f"{self.letter}{sub_text} {lum}"


SOLAR_CLASS = SpectralClass("G", 2, "V")


@dataclass(frozen=True)
class StellarProperties:
    """Derived physical properties of a star."""

    spectral_class: SpectralClass
    luminosity: float  # Solar luminosities
    temperature: float  # Kelvin
    radius_km: float
    mass: float  # Solar masses
    color: str
    description: str


@dataclass(frozen=True)
class HabitableZone:
    """
    Orbital distance band where liquid water is plausible.

    Attributes
    ----------
    inner : float
        Inner (hot) edge in AU
    optimal : float
        Earth-equivalent insolation distance in AU
    outer : float
        Outer (cold) edge in AU
    """

    inner: float
    optimal: float
    outer: float

    def contains(self, orbit_au: float) -> bool:
        return self.inner <= orbit_au <= self.outer

    def zone_for(self, orbit_au: float) -> str:
        """Classify an orbit as "hot", "inner", "habitable" or "outer"."""
        if orbit_au < self.inner * 0.5:
            return "hot"
        if orbit_au < self.inner:
            return "inner"
        if orbit_au <= self.outer:
            return "habitable"
        return "outer"


def parse_spectral_class(stellar_class: Optional[str]) -> Tuple[SpectralClass, ...]:
    """
    Parse a stellar classification string into its component stars.

    Parameters
    ----------
    stellar_class : str, optional
        Classification such as "G2 V", "K4 III", "M0 V M4 V" or "D"

    Returns
    -------
    tuple of SpectralClass
        Primary first. A solar-type G2 V primary when nothing is recognised.
    """
    if not stellar_class or not isinstance(stellar_class, str):
        logger.debug(f"No stellar classification given, using {SOLAR_CLASS}")
        return (SOLAR_CLASS,)

    stars = []
    for match in _COMPONENT_PATTERN.finditer(stellar_class):
        letter = match.group(1).upper()
        if letter == "BD":
            letter = "L"
        elif letter.startswith("D"):
            # White dwarf spectral subtypes (DA, DB, ...) share one entry
            letter = "D"
        subclass = float(match.group(2)) if match.group(2) else None
        if subclass is not None and subclass.is_integer():
            subclass = int(subclass)
        lum_class = (match.group(3) or DEFAULT_LUMINOSITY_CLASS).upper()
        stars.append(SpectralClass(letter, subclass, lum_class))

    if not stars:
        logger.debug(f"Unrecognised stellar classification {stellar_class!r}, using {SOLAR_CLASS}")
        return (SOLAR_CLASS,)
    return tuple(stars)


def _interpolate(hot: float, cool: float, t: float, geometric: bool = True) -> float:
    if geometric:
        return hot * (cool / hot) ** t
    return hot + (cool - hot) * t


def stellar_properties(spectral: Union[SpectralClass, str, None]) -> StellarProperties:
    """
    Approximate physical properties for a spectral class.

    Luminosity, radius and mass are interpolated geometrically across the
    subclass (0 = hot end, 10 = next letter), temperature linearly. The
    luminosity class then scales luminosity and radius.
    """
    if not isinstance(spectral, SpectralClass):
        spectral = parse_spectral_class(spectral)[0]

    base = SPECTRAL_TYPES.get(spectral.letter, SPECTRAL_TYPES["G"])

    if spectral.is_main_sequence_letter:
        order = MAIN_SEQUENCE_ORDER.index(spectral.letter)
        if order + 1 < len(MAIN_SEQUENCE_ORDER):
            cooler = SPECTRAL_TYPES[MAIN_SEQUENCE_ORDER[order + 1]]
        else:
            cooler = _LATE_M
        t = min(max(spectral.effective_subclass, 0.0), 9.9) / 10.0
        luminosity = _interpolate(base.luminosity, cooler.luminosity, t)
        radius = _interpolate(base.radius, cooler.radius, t)
        mass = _interpolate(base.mass, cooler.mass, t)
        temperature = _interpolate(base.temperature, cooler.temperature, t, geometric=False)
        lum_mult, radius_mult, label = LUMINOSITY_CLASSES.get(
            spectral.luminosity_class, LUMINOSITY_CLASSES[DEFAULT_LUMINOSITY_CLASS]
        )
        luminosity *= lum_mult
        radius *= radius_mult
    else:
        luminosity, radius, mass = base.luminosity, base.radius, base.mass
        temperature = base.temperature
        label = "Main Sequence"

    description = base.description
    if label != "Main Sequence":
        description = f"{description} {label}"

    return StellarProperties(
        spectral_class=spectral,
        luminosity=luminosity,
        temperature=temperature,
        radius_km=radius * SOLAR_RADIUS_KM,
        mass=mass,
        color=base.color,
        description=description,
    )


def habitable_zone_for_luminosity(luminosity: float) -> HabitableZone:
    """Habitable zone for a luminosity in solar units."""
    if not luminosity or luminosity <= 0 or math.isnan(luminosity):
        luminosity = 1.0
    return HabitableZone(
        inner=math.sqrt(luminosity / INNER_EDGE_FLUX),
        optimal=math.sqrt(luminosity),
        outer=math.sqrt(luminosity / OUTER_EDGE_FLUX),
    )


def calculate_habitable_zone(stellar_class: Optional[str]) -> HabitableZone:
    """
    Habitable zone for the primary star of a classification string.

    Parameters
    ----------
    stellar_class : str, optional
        Classification such as "G2 V"

    Returns
    -------
    HabitableZone
        Zone in AU; solar-equivalent for unrecognised classes
    """
    primary = parse_spectral_class(stellar_class)[0]
    return habitable_zone_for_luminosity(stellar_properties(primary).luminosity)
