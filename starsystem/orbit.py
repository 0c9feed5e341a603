#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Orbital Position Calculator

Computes where bodies are along their (circular) orbits at a campaign date.
Positions are deterministic per system:

- the initial bearing comes from the system name and planet index
- elapsed time is measured from the reference epoch 1100-001 00:00
- the period follows Kepler's third law for a one-solar-mass primary

Bearings are in degrees, always normalised to [0, 360). Distances in AU.
"""

import math
from typing import Any, Dict, List, Mapping, Optional, Tuple

import numpy as np

from .bodies import CelestialObject, StarSystem
from .campaign_date import DAYS_PER_YEAR, DateLike, days_since_epoch
from .seeding import hash_to_degrees
from .stellar import AU_KM

# Period used when the orbital radius is missing or non-positive
DEFAULT_PERIOD_DAYS = float(DAYS_PER_YEAR)

# Radius assumed for planets listed without one
DEFAULT_PLANET_AU = 1.0

# Cosmetic drift: degrees per millisecond at 1 AU
ANIMATION_RATE = 0.001
ANIMATION_MIN_AU = 0.1


def orbital_period_days(orbit_au: Optional[float]) -> float:
    """
    Orbital period from Kepler's third law.

    Parameters
    ----------
    orbit_au : float
        Orbital radius (AU)

    Returns
    -------
    float
        Period in days: ``orbit_au ** 1.5`` years of 365 days, or one year
        for a missing, non-positive or non-finite radius
    """
    if orbit_au is None or not math.isfinite(orbit_au) or orbit_au <= 0:
        return DEFAULT_PERIOD_DAYS
    return orbit_au ** 1.5 * DAYS_PER_YEAR


def normalize_bearing(degrees: float) -> float:
    """Wrap an angle into [0, 360)."""
    bearing = degrees % 360.0
    # A tiny negative input rounds up to exactly 360.0
    if bearing >= 360.0:
        bearing = 0.0
    return bearing


def get_initial_bearing(system_name: str, planet_index: int) -> int:
    """Bearing (degrees) of a planet at the epoch, unique per index."""
    return hash_to_degrees(f"{system_name}-planet-{planet_index}")


def calculate_orbital_position(
    system_name: str,
    planet_index: int,
    orbit_au: Optional[float],
    current_date: DateLike,
) -> float:
    """
    Current bearing of a planet.

    Parameters
    ----------
    system_name : str
        Name of the star system
    planet_index : int
        Index of the planet in the system
    orbit_au : float
        Orbital radius (AU)
    current_date : str or CampaignDate
        Campaign date; None means the epoch

    Returns
    -------
    float
        ``initial + elapsed_days / period_days * 360`` wrapped into [0, 360)
    """
    initial_bearing = get_initial_bearing(system_name, planet_index)
    elapsed_days = days_since_epoch(current_date)
    period_days = orbital_period_days(orbit_au)

    degrees_travelled = (elapsed_days / period_days) * 360
    return normalize_bearing(initial_bearing + degrees_travelled)


def _planet_orbit_au(planet: Any) -> float:
    if isinstance(planet, Mapping):
        orbit_au = planet.get("orbitAU")
    else:
        orbit_au = getattr(planet, "orbit_au", None)
    return orbit_au or DEFAULT_PLANET_AU


def _system_planets(system: Any) -> Tuple[str, List[Any]]:
    if system is None:
        return "", []
    if isinstance(system, Mapping):
        return system.get("name") or "", list(system.get("planets") or [])
    if isinstance(system, StarSystem):
        return system.display_name, system.planets
    return getattr(system, "name", "") or "", list(getattr(system, "planets", None) or [])


def calculate_system_orbits(system: Any, current_date: DateLike) -> Dict[int, float]:
    """
    Current bearings of every planet in a system.

    Parameters
    ----------
    system : StarSystem or mapping
        A generated StarSystem, or a mapping with "name" and "planets" (each
        planet a mapping with "orbitAU"). Planets without a radius are taken
        to orbit at 1 AU.
    current_date : str or CampaignDate
        Campaign date

    Returns
    -------
    dict
        planet index -> bearing in degrees; empty when the system or its
        planet list is missing
    """
    name, planets = _system_planets(system)
    if not planets:
        return {}

    elapsed_days = days_since_epoch(current_date)
    initial = np.array(
        [get_initial_bearing(name, index) for index in range(len(planets))], dtype=float
    )
    orbits = np.array([_planet_orbit_au(planet) for planet in planets], dtype=float)

    valid = np.isfinite(orbits) & (orbits > 0)
    safe_orbits = np.where(valid, orbits, 1.0)
    periods = np.where(valid, safe_orbits ** 1.5 * DAYS_PER_YEAR, DEFAULT_PERIOD_DAYS)

    bearings = np.mod(initial + (elapsed_days / periods) * 360, 360.0)
    bearings[bearings >= 360.0] = 0.0

    return {index: float(bearing) for index, bearing in enumerate(bearings)}


def get_animation_offset(elapsed_ms: float, orbit_au: float) -> float:
    """
    Cosmetic drift layered on top of the true bearing for live display.

    Inner bodies drift faster than outer ones. The value is for smoothing
    animation between time steps only; it is not an orbital position.
    """
    speed = ANIMATION_RATE / math.sqrt(max(ANIMATION_MIN_AU, orbit_au or 0.0))
    return normalize_bearing(elapsed_ms * speed)


def _unit_vector(bearing: float) -> np.ndarray:
    radians = math.radians(bearing)
    return np.array([math.cos(radians), math.sin(radians)])


def system_positions(system: StarSystem, current_date: DateLike) -> Dict[str, np.ndarray]:
    """
    Positions of every body in a system, in AU, with the star at the origin.

    Star-orbiting bodies are placed at their current bearing (measured
    counter-clockwise from +x). Moons are placed relative to their parent:
    parent position plus ``orbit_km`` (converted to AU) along the moon's
    catalog bearing. A moon whose parent is not in the system is skipped.

    Parameters
    ----------
    system : StarSystem
        Generated system
    current_date : str or CampaignDate
        Campaign date

    Returns
    -------
    dict
        body id -> numpy array [x, y] (AU)
    """
    positions: Dict[str, np.ndarray] = {}

    star = system.star
    if star is not None:
        positions[star.id] = np.zeros(2)

    bearings = calculate_system_orbits(system, current_date)
    for index, planet in enumerate(system.planets):
        positions[planet.id] = planet.orbit_au * _unit_vector(bearings[index])

    for moon in system.moons:
        parent_position = positions.get(moon.parent_id)
        if parent_position is None:
            continue
        positions[moon.id] = parent_position + moon_offset_au(moon)

    return positions


def moon_offset_au(moon: CelestialObject) -> np.ndarray:
    """Offset of a moon from its parent's center, in AU."""
    return (moon.orbit_km / AU_KM) * _unit_vector(moon.bearing)
