#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Star System Package

Procedural star system generation for sector maps and the orbital clock
used to place bodies at a campaign date. Every function is pure: outputs
depend only on the arguments, so systems can be generated in parallel.
"""

from .seeding import (
    SeededRandom,
    hash_to_int,
    hash_to_degrees,
    seed_from_text,
)

from .stellar import (
    HabitableZone,
    SpectralClass,
    StellarProperties,
    parse_spectral_class,
    stellar_properties,
    calculate_habitable_zone,
    AU_KM,
    SOLAR_RADIUS_KM,
)

from .world import (
    WorldProfile,
    parse_world_stats,
    atmosphere_description,
)

from .bodies import (
    BodyType,
    HeliocentricOrbit,
    SatelliteOrbit,
    CelestialObject,
    StarSystem,
)

from .generator import (
    GeneratorConfig,
    GAS_GIANT_CLASSES,
    generate_id,
    generate_moons,
    generate_system,
    build_star_system,
)

from .orbit import (
    orbital_period_days,
    normalize_bearing,
    get_initial_bearing,
    calculate_orbital_position,
    calculate_system_orbits,
    get_animation_offset,
    system_positions,
    moon_offset_au,
)

from .campaign_date import (
    CampaignDate,
    DateFormatError,
    EPOCH,
    parse_date,
    days_since_epoch,
    parse_canonical,
    compare_dates,
    minutes_between,
    hours_between,
    advance_date,
    format_date,
)


__all__ = [
    # Seeding
    "SeededRandom",
    "hash_to_int",
    "hash_to_degrees",
    "seed_from_text",

    # Stellar
    "HabitableZone",
    "SpectralClass",
    "StellarProperties",
    "parse_spectral_class",
    "stellar_properties",
    "calculate_habitable_zone",
    "AU_KM",
    "SOLAR_RADIUS_KM",

    # World statistics
    "WorldProfile",
    "parse_world_stats",
    "atmosphere_description",

    # Bodies
    "BodyType",
    "HeliocentricOrbit",
    "SatelliteOrbit",
    "CelestialObject",
    "StarSystem",

    # Generation
    "GeneratorConfig",
    "GAS_GIANT_CLASSES",
    "generate_id",
    "generate_moons",
    "generate_system",
    "build_star_system",

    # Orbits
    "orbital_period_days",
    "normalize_bearing",
    "get_initial_bearing",
    "calculate_orbital_position",
    "calculate_system_orbits",
    "get_animation_offset",
    "system_positions",
    "moon_offset_au",

    # Calendar
    "CampaignDate",
    "DateFormatError",
    "EPOCH",
    "parse_date",
    "days_since_epoch",
    "parse_canonical",
    "compare_dates",
    "minutes_between",
    "hours_between",
    "advance_date",
    "format_date",
]

__version__ = "1.0.0"
