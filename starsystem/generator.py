#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Star System Generation Module

Builds a complete system (star, mainworld, gas giants, belts and moons) from
a sector hex coordinate, a world-statistics string and a stellar
classification. Output depends only on the inputs: the same arguments always
reproduce the same bodies, identifiers and orbits.

Moons are generated with parent-relative orbits only. They never receive a
distance from the star.

Missing or malformed optional inputs are replaced with defaults instead of
raising, so a sector-wide build never stops partway through.
"""

import logging
from dataclasses import dataclass
from typing import List, Optional, Tuple, Union

from .bodies import (
    BodyType,
    CelestialObject,
    HeliocentricOrbit,
    SatelliteOrbit,
    StarSystem,
)
from .seeding import SeededRandom, hash_to_int, seed_from_text
from .stellar import (
    HabitableZone,
    calculate_habitable_zone,
    parse_spectral_class,
    stellar_properties,
)
from .world import WorldProfile, atmosphere_description, parse_world_stats

logger = logging.getLogger(__name__)

# Seed offsets for per-object generators, relative to the hex seed
MAINWORLD_MOON_SEED_OFFSET = 50
GAS_GIANT_SEED_OFFSET = 100
GAS_GIANT_MOON_SEED_OFFSET = 200
BELT_SEED_OFFSET = 300

DEFAULT_WORLD_SIZE = 5


@dataclass(frozen=True)
class GasGiantClass:
    """Size class of gas giant with its selection weight."""

    name: str
    radius_range: Tuple[float, float]  # km
    mass_range: Tuple[float, float]  # Earth masses
    probability: float
    has_rings: bool = False
    max_moons: int = 4


# Largest first; a low roll selects a large class
GAS_GIANT_CLASSES: Tuple[GasGiantClass, ...] = (
    GasGiantClass("Super-Jupiter", (70000, 90000), (300, 1000), 0.15, max_moons=8),
    GasGiantClass("Jupiter-like", (50000, 70000), (100, 300), 0.35, max_moons=6),
    GasGiantClass("Saturn-like", (35000, 50000), (50, 100), 0.25, has_rings=True, max_moons=7),
    GasGiantClass("Ice Giant", (20000, 35000), (15, 50), 0.20),
    GasGiantClass("Sub-Neptune", (15000, 20000), (5, 15), 0.05),
)


@dataclass(frozen=True)
class PlacementBand:
    """
    Orbit band for mainworld placement.

    The orbit is ``zone.<anchor> * (low + r * span)`` for a random ``r``.
    """

    anchor: str
    low: float
    span: float

    def place(self, zone: HabitableZone, r: float) -> float:
        return getattr(zone, self.anchor) * (self.low + r * self.span)


@dataclass
class GeneratorConfig:
    """
    Tunable biases for system generation.

    Attributes
    ----------
    frost_line_factor : float
        Frost line as a multiple of the habitable zone's outer edge.
    gas_giant_orbit_jitter : float
        Maximum fractional push beyond the frost line for each gas giant.
    gas_giant_spacing : tuple of float
        (minimum, maximum) spacing between successive gas giants, in
        multiples of the frost line.
    inner_gas_giant_bias : float
        Factor applied to the size roll of the first gas giant; lower values
        favour larger classes more strongly.
    gas_giant_bias_step : float
        Amount the size-roll factor relaxes towards 1.0 for each later gas
        giant.
    ring_chance : float
        Probability of rings on classes that do not always have them.
    standard_band, thin_band, dense_band : PlacementBand
        Mainworld orbit bands by atmosphere (4-6, 2-3 and 7-9).
    large_airless_band, small_airless_band : PlacementBand
        Mainworld orbit bands for other atmospheres, by world size.
    large_world_size : int
        Size codes above this use the large band.
    mainworld_moon_chance : float
        Probability that the mainworld has moons.
    moon_min_orbit_radii : float
        Innermost moon orbit in parent radii (Roche limit approximation).
    tidal_lock_radii : float
        Moons closer than this many parent radii are noted as tidally locked.
    belt_width_fraction : float
        Belt width as a fraction of its orbital radius.
    """

    frost_line_factor: float = 2.5
    gas_giant_orbit_jitter: float = 0.2
    gas_giant_spacing: Tuple[float, float] = (0.5, 1.0)
    inner_gas_giant_bias: float = 0.5
    gas_giant_bias_step: float = 0.25
    ring_chance: float = 0.15
    standard_band: PlacementBand = PlacementBand("optimal", 0.95, 0.10)
    thin_band: PlacementBand = PlacementBand("inner", 1.05, 0.15)
    dense_band: PlacementBand = PlacementBand("outer", 0.85, 0.10)
    large_airless_band: PlacementBand = PlacementBand("outer", 1.10, 0.35)
    small_airless_band: PlacementBand = PlacementBand("inner", 0.50, 0.30)
    large_world_size: int = 5
    mainworld_moon_chance: float = 0.5
    moon_min_orbit_radii: float = 1.5
    tidal_lock_radii: float = 10.0
    belt_width_fraction: float = 0.2

    def frost_line(self, zone: HabitableZone) -> float:
        return zone.outer * self.frost_line_factor

    def size_roll_factor(self, index: int) -> float:
        """Size-roll multiplier for the gas giant at ``index``."""
        return min(1.0, self.inner_gas_giant_bias + index * self.gas_giant_bias_step)


DEFAULT_CONFIG = GeneratorConfig()


def generate_id(
    hex_coordinate: str,
    body_type: Union[BodyType, str],
    index: int,
    parent_id: Optional[str] = None,
) -> str:
    """
    Deterministic identifier for a body.

    Parameters
    ----------
    hex_coordinate : str
        Sector hex of the system
    body_type : BodyType or str
        Kind of body; a BodyType contributes its id token
    index : int
        Index within the body type
    parent_id : str, optional
        Identifier of the parent body (moons)

    Returns
    -------
    str
        ``"{hex}[-{parent_id}]-{type}-{index}-{hash}"`` where the hash is the
        first four hex digits of the base string's rolling hash
    """
    token = body_type.id_token if isinstance(body_type, BodyType) else str(body_type).lower()
    if parent_id:
        base = f"{hex_coordinate}-{parent_id}-{token}-{index}"
    else:
        base = f"{hex_coordinate}-{token}-{index}"
    suffix = format(abs(hash_to_int(base)), "x")[:4]
    return f"{base}-{suffix}"


def _coerce_count(value, label: str) -> int:
    if value is None:
        return 0
    try:
        count = int(value)
    except (TypeError, ValueError):
        logger.debug(f"Unreadable {label} {value!r}, using 0")
        return 0
    if count < 0:
        logger.debug(f"Negative {label} {count}, using 0")
        return 0
    return count


def _bearing(rng: SeededRandom) -> float:
    return float(round(rng.next() * 360) % 360)


def select_gas_giant_class(roll: float) -> GasGiantClass:
    """Pick a gas giant class from the weighted table for a roll in [0, 1]."""
    cumulative = 0.0
    for giant_class in GAS_GIANT_CLASSES:
        cumulative += giant_class.probability
        if roll < cumulative:
            return giant_class
    return GAS_GIANT_CLASSES[-1]


def generate_star(
    hex_coordinate: str,
    stellar_class: Optional[str],
    system_name: str = "",
) -> CelestialObject:
    """Primary star at the system origin. Companion stars are noted, not placed."""
    components = parse_spectral_class(stellar_class)
    properties = stellar_properties(components[0])

    notes = [properties.description]
    notes.extend(f"Companion: {companion}" for companion in components[1:])

    return CelestialObject(
        id=generate_id(hex_coordinate, BodyType.STAR, 0),
        type=BodyType.STAR,
        subtype=str(components[0]),
        name=system_name or "Primary",
        radius_km=float(round(properties.radius_km)),
        bearing=0.0,
        orbit=HeliocentricOrbit(0.0),
        notes=tuple(notes),
    )


def place_mainworld(
    profile: WorldProfile,
    zone: HabitableZone,
    rng: SeededRandom,
    config: GeneratorConfig = DEFAULT_CONFIG,
) -> float:
    """
    Orbital radius (AU) for the mainworld.

    Standard atmospheres land around the optimal distance, thin ones near
    the inner edge and dense ones near the outer edge. Airless and exotic
    worlds sit outside the zone, further out for larger worlds. Without an
    atmosphere code the optimal distance is used unchanged.
    """
    atmosphere = profile.atmosphere
    if atmosphere is None:
        return zone.optimal

    if 4 <= atmosphere <= 6:
        band = config.standard_band
    elif 2 <= atmosphere <= 3:
        band = config.thin_band
    elif 7 <= atmosphere <= 9:
        band = config.dense_band
    else:
        size = DEFAULT_WORLD_SIZE if profile.size is None else profile.size
        band = config.large_airless_band if size > config.large_world_size else config.small_airless_band

    return band.place(zone, rng.next())


def _mainworld_subtype(size: int) -> str:
    if size == 0:
        return "Planetoid"
    if size <= 3:
        return "Small Terrestrial"
    if size <= 7:
        return "Terrestrial"
    return "Large Terrestrial"


def generate_mainworld(
    hex_coordinate: str,
    world_stats: Optional[str],
    zone: HabitableZone,
    rng: SeededRandom,
    config: GeneratorConfig = DEFAULT_CONFIG,
    system_name: str = "",
) -> CelestialObject:
    profile = parse_world_stats(world_stats)
    if profile.atmosphere is None:
        logger.debug(f"No atmosphere code in {world_stats!r}, placing mainworld at optimal orbit")

    orbit_au = place_mainworld(profile, zone, rng, config)
    size = DEFAULT_WORLD_SIZE if profile.size is None else profile.size

    notes = [f"Atmosphere: {atmosphere_description(profile.atmosphere)}"]
    if not zone.contains(orbit_au):
        notes.append("Outside habitable zone")

    return CelestialObject(
        id=generate_id(hex_coordinate, BodyType.MAINWORLD, 0),
        type=BodyType.MAINWORLD,
        subtype=_mainworld_subtype(size),
        name=system_name or "Mainworld",
        radius_km=float(3000 + size * 500),
        bearing=_bearing(rng),
        orbit=HeliocentricOrbit(orbit_au),
        is_mainworld=True,
        notes=tuple(notes),
    )


def generate_gas_giant(
    hex_coordinate: str,
    zone: HabitableZone,
    index: int,
    rng: SeededRandom,
    config: GeneratorConfig = DEFAULT_CONFIG,
    system_name: str = "",
) -> CelestialObject:
    """
    Gas giant beyond the frost line.

    Parameters
    ----------
    hex_coordinate : str
        Sector hex of the system
    zone : HabitableZone
        Habitable zone of the primary
    index : int
        Which gas giant (0 = closest to the frost line)
    rng : SeededRandom
        Generator for this gas giant
    config : GeneratorConfig
        Generation biases

    Returns
    -------
    CelestialObject
        The gas giant
    """
    frost_line = config.frost_line(zone)
    spacing_low, spacing_high = config.gas_giant_spacing

    orbit_au = frost_line * (1 + rng.next() * config.gas_giant_orbit_jitter)
    orbit_au += index * frost_line * rng.uniform(spacing_low, spacing_high)

    giant_class = select_gas_giant_class(rng.next() * config.size_roll_factor(index))
    low, high = giant_class.radius_range
    radius_km = float(round(rng.uniform(low, high)))
    has_rings = giant_class.has_rings or rng.next() < config.ring_chance

    prefix = f"{system_name} " if system_name else ""
    return CelestialObject(
        id=generate_id(hex_coordinate, BodyType.GAS_GIANT, index),
        type=BodyType.GAS_GIANT,
        subtype=giant_class.name,
        name=f"{prefix}Gas Giant {index + 1}",
        radius_km=radius_km,
        bearing=_bearing(rng),
        orbit=HeliocentricOrbit(orbit_au),
        has_rings=has_rings,
    )


def _moon_limit(parent: CelestialObject) -> int:
    # Stars and belts have no satellites of their own
    if parent.type in (BodyType.STAR, BodyType.BELT) or parent.radius_km <= 0:
        return 0
    if parent.type is BodyType.GAS_GIANT:
        for giant_class in GAS_GIANT_CLASSES:
            if giant_class.name == parent.subtype:
                return giant_class.max_moons
        return 4
    return 2 if parent.radius_km > 5000 else 1


def _moon_subtype(radius_km: float) -> str:
    if radius_km < 200:
        return "Moonlet"
    if radius_km < 1000:
        return "Minor Moon"
    return "Major Moon"


def generate_moons(
    parent: CelestialObject,
    seed: int,
    hex_coordinate: Optional[str] = None,
    config: GeneratorConfig = DEFAULT_CONFIG,
) -> Tuple[CelestialObject, ...]:
    """
    Moons for a parent body.

    Moon orbits are expressed only relative to the parent: ``orbit_radii``
    in parent radii and ``orbit_km = orbit_radii * parent.radius_km``. Each
    moon carries ``parent_id = parent.id`` and never an AU distance.

    Parameters
    ----------
    parent : CelestialObject
        Planet or gas giant being orbited
    seed : int
        Seed for this parent's moon generator
    hex_coordinate : str, optional
        Sector hex used in moon identifiers; without it identifiers are
        derived from the parent id alone
    config : GeneratorConfig
        Generation biases

    Returns
    -------
    tuple of CelestialObject
        Zero or more moons
    """
    if parent.type is BodyType.MOON:
        raise ValueError(f"Moons cannot orbit another moon ({parent.id})")

    rng = SeededRandom(seed)
    limit = _moon_limit(parent)
    if limit == 0:
        logger.debug(f"{parent.type.value} {parent.id} cannot hold moons, generating none")
        return ()
    count = min(int(rng.next() * (limit + 1)), limit)

    max_orbit = 20.0 + limit * 5
    max_radius = 2500.0 if parent.type is BodyType.GAS_GIANT else 1000.0

    moons = []
    for i in range(count):
        orbit_radii = round(rng.uniform(config.moon_min_orbit_radii, max_orbit), 2)
        size_factor = 1 - (orbit_radii / max_orbit) * 0.5
        radius_km = float(round(50 + rng.next() * max_radius * size_factor))

        if hex_coordinate:
            moon_id = generate_id(hex_coordinate, BodyType.MOON, i, parent.id)
        else:
            moon_id = f"{parent.id}-moon-{i}"

        notes = ("Tidally locked",) if orbit_radii < config.tidal_lock_radii else ()

        moons.append(CelestialObject(
            id=moon_id,
            type=BodyType.MOON,
            subtype=_moon_subtype(radius_km),
            name=f"{parent.name} {chr(ord('a') + i)}",
            radius_km=radius_km,
            bearing=_bearing(rng),
            orbit=SatelliteOrbit(
                parent_id=parent.id,
                radii=orbit_radii,
                km=orbit_radii * parent.radius_km,
            ),
            notes=notes,
        ))

    return tuple(moons)


def generate_belt(
    hex_coordinate: str,
    zone: HabitableZone,
    index: int,
    rng: SeededRandom,
    inner_limit_au: float,
    first_gas_giant_au: Optional[float] = None,
    config: GeneratorConfig = DEFAULT_CONFIG,
    system_name: str = "",
) -> CelestialObject:
    """
    Planetoid belt.

    The first belt sits inside the first gas giant's orbit (where its
    resonances stop accretion) but outside ``inner_limit_au``; later belts,
    or any belt in a system without gas giants, lie beyond the frost line.
    """
    frost_line = config.frost_line(zone)

    if index == 0 and first_gas_giant_au:
        orbit_au = first_gas_giant_au * rng.uniform(0.4, 0.6)
        if orbit_au <= inner_limit_au:
            orbit_au = (inner_limit_au + first_gas_giant_au) / 2
    else:
        orbit_au = frost_line * (1.2 + index * 1.5 + rng.next() * 0.8)

    if orbit_au < zone.outer:
        composition = "Metallic"
    elif orbit_au < frost_line:
        composition = "Rocky"
    else:
        composition = "Icy"

    prefix = f"{system_name} " if system_name else ""
    name = f"{prefix}Belt" if index == 0 else f"{prefix}Outer Belt {index}"

    return CelestialObject(
        id=generate_id(hex_coordinate, BodyType.BELT, index),
        type=BodyType.BELT,
        subtype=composition,
        name=name,
        radius_km=0.0,
        bearing=_bearing(rng),
        orbit=HeliocentricOrbit(orbit_au),
        width_au=round(orbit_au * config.belt_width_fraction, 3),
    )


def build_star_system(
    hex_coordinate: str,
    world_stats: Optional[str],
    stellar_class: Optional[str],
    gas_giant_count: Optional[int] = 0,
    belt_count: Optional[int] = 0,
    name: str = "",
    config: Optional[GeneratorConfig] = None,
) -> StarSystem:
    """
    Generate a complete star system.

    Parameters
    ----------
    hex_coordinate : str
        Sector hex (e.g. "1910"); seeds the whole system
    world_stats : str, optional
        Mainworld statistics (e.g. "A867974-C")
    stellar_class : str, optional
        Stellar classification (e.g. "G2 V")
    gas_giant_count : int, optional
        Number of gas giants; missing or invalid counts mean none
    belt_count : int, optional
        Number of planetoid belts
    name : str
        System name used for display names
    config : GeneratorConfig, optional
        Generation biases; defaults when None

    Returns
    -------
    StarSystem
        Star, mainworld (and its moons), gas giants each followed by their
        moons, then belts
    """
    config = config or DEFAULT_CONFIG
    hex_coordinate = str(hex_coordinate or "")
    if not hex_coordinate:
        logger.debug("Empty hex coordinate, seeding from the empty string")

    gas_giant_count = _coerce_count(gas_giant_count, "gas giant count")
    belt_count = _coerce_count(belt_count, "belt count")

    seed = seed_from_text(hex_coordinate)
    rng = SeededRandom(seed)
    zone = calculate_habitable_zone(stellar_class)

    objects: List[CelestialObject] = []

    # 1. Primary star
    objects.append(generate_star(hex_coordinate, stellar_class, name))

    # 2. Mainworld, optionally with moons
    mainworld = generate_mainworld(hex_coordinate, world_stats, zone, rng, config, name)
    objects.append(mainworld)
    if rng.next() < config.mainworld_moon_chance:
        objects.extend(generate_moons(
            mainworld, seed + MAINWORLD_MOON_SEED_OFFSET, hex_coordinate, config
        ))

    # 3. Gas giants beyond the frost line, each followed by its moons
    gas_giant_orbits = []
    for i in range(gas_giant_count):
        giant = generate_gas_giant(
            hex_coordinate, zone, i, SeededRandom(seed + GAS_GIANT_SEED_OFFSET + i), config, name
        )
        objects.append(giant)
        objects.extend(generate_moons(
            giant, seed + GAS_GIANT_MOON_SEED_OFFSET + i * 10, hex_coordinate, config
        ))
        gas_giant_orbits.append(giant.orbit_au)

    # 4. Belts
    first_gas_giant_au = min(gas_giant_orbits) if gas_giant_orbits else None
    for i in range(belt_count):
        objects.append(generate_belt(
            hex_coordinate,
            zone,
            i,
            SeededRandom(seed + BELT_SEED_OFFSET + i),
            inner_limit_au=mainworld.orbit_au,
            first_gas_giant_au=first_gas_giant_au,
            config=config,
            system_name=name,
        ))

    logger.debug(
        f"Generated system {hex_coordinate} ({stellar_class!r}): "
        f"{len(objects)} objects, {gas_giant_count} gas giants, {belt_count} belts"
    )

    return StarSystem(
        hex=hex_coordinate,
        world_stats=world_stats or "",
        stellar_class=stellar_class or "",
        objects=tuple(objects),
        gas_giant_count=gas_giant_count,
        belt_count=belt_count,
        name=name,
    )


def generate_system(
    hex_coordinate: str,
    world_stats: Optional[str],
    stellar_class: Optional[str],
    gas_giant_count: Optional[int] = 0,
    belt_count: Optional[int] = 0,
    name: str = "",
    config: Optional[GeneratorConfig] = None,
) -> List[CelestialObject]:
    """
    Generate the ordered list of bodies for a system.

    Same arguments as :func:`build_star_system`; returns its objects as a
    list.
    """
    return list(build_star_system(
        hex_coordinate,
        world_stats,
        stellar_class,
        gas_giant_count,
        belt_count,
        name=name,
        config=config,
    ).objects)
