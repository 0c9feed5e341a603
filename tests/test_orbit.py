#!/usr/bin/env python3
"""
Tests for the orbital position calculator.

These tests verify:
1. Periods follow Kepler's third law with a guard for degenerate radii
2. Bearings start at the hashed initial bearing at the epoch
3. Bearings are always normalised to [0, 360)
4. Whole-system bearings and positions, with moons placed from their parent
"""

import math
import sys
from pathlib import Path

import numpy as np
import pytest

sys.path.insert(0, str(Path(__file__).parent.parent))

from starsystem.orbit import (
    calculate_orbital_position,
    calculate_system_orbits,
    get_animation_offset,
    get_initial_bearing,
    moon_offset_au,
    normalize_bearing,
    orbital_period_days,
    system_positions,
)
from starsystem.seeding import hash_to_degrees
from starsystem.stellar import AU_KM


class TestOrbitalPeriod:
    """Tests for Kepler period calculation."""

    def test_one_au_is_one_year(self):
        """A 1 AU orbit takes 365 days."""
        assert orbital_period_days(1.0) == 365.0

    @pytest.mark.parametrize("x", [0.1, 1.0, 2.5, 30.0])
    def test_kepler_scaling(self, x):
        """Eight times the radius gives 8 ** 1.5 times the period."""
        assert orbital_period_days(8 * x) / orbital_period_days(x) == pytest.approx(22.627, rel=1e-4)

    @pytest.mark.parametrize("orbit_au", [0, -1.0, None, float("nan"), float("inf")])
    def test_degenerate_radius(self, orbit_au):
        """Degenerate radii fall back to one year."""
        assert orbital_period_days(orbit_au) == 365.0


class TestOrbitalPosition:
    """Tests for single-body bearings."""

    def test_epoch_gives_initial_bearing(self):
        """Zero elapsed time leaves the bearing unchanged."""
        bearing = calculate_orbital_position("Regina", 0, 1.0, "1100-001 00:00")
        assert bearing == get_initial_bearing("Regina", 0)

    def test_initial_bearing_uses_planet_key(self):
        """Initial bearings hash "{name}-planet-{index}"."""
        assert get_initial_bearing("Regina", 3) == hash_to_degrees("Regina-planet-3")

    def test_initial_bearing_differs_by_index(self):
        """Planets of one system start at different bearings."""
        bearings = {get_initial_bearing("Regina", i) for i in range(4)}
        assert len(bearings) > 1

    def test_full_orbit_returns(self):
        """After one period the bearing is back where it started."""
        start = calculate_orbital_position("Efate", 1, 1.0, "1100-001")
        later = calculate_orbital_position("Efate", 1, 1.0, "1101-001")
        assert later == pytest.approx(start)

    def test_half_orbit(self):
        """Half a period moves the body 180 degrees."""
        start = get_initial_bearing("Efate", 2)
        # 4 AU: period of 8 years, so 4 years is half an orbit
        bearing = calculate_orbital_position("Efate", 2, 4.0, "1104-001")
        assert bearing == pytest.approx((start + 180) % 360)

    def test_missing_date_is_epoch(self):
        """A missing date reads as the epoch."""
        assert calculate_orbital_position("Regina", 1, 2.0, None) == get_initial_bearing("Regina", 1)

    @pytest.mark.parametrize("date", [
        "1100-001 00:00", "1105-120 08:30", "1099-200 23:59", "0001-001 00:00",
        "0950-365", "9999-365 23:59",
    ])
    @pytest.mark.parametrize("orbit_au", [0.05, 0.7, 1.0, 5.2, 39.5, 0])
    def test_bearing_range(self, date, orbit_au):
        """Bearings stay in [0, 360) for past and future dates."""
        bearing = calculate_orbital_position("Spinward", 4, orbit_au, date)
        assert 0.0 <= bearing < 360.0


class TestNormalizeBearing:
    """Tests for angle wrapping."""

    def test_negative(self):
        """Negative angles wrap upward."""
        assert normalize_bearing(-90.0) == 270.0

    def test_over_full_turn(self):
        """Angles over 360 wrap down."""
        assert normalize_bearing(720.0) == 0.0
        assert normalize_bearing(365.0) == 5.0

    def test_tiny_negative(self):
        """A tiny negative angle does not produce 360."""
        assert normalize_bearing(-1e-14) == 0.0


class TestSystemOrbits:
    """Tests for whole-system bearings."""

    @pytest.mark.parametrize("system", [None, {}, {"name": "Regina"}, {"name": "Regina", "planets": []}])
    def test_missing_planets(self, system):
        """Missing systems or planet lists give an empty mapping."""
        assert calculate_system_orbits(system, "1105-001 00:00") == {}

    def test_mapping_input(self):
        """Mapping systems give one bearing per planet index."""
        system = {"name": "Regina", "planets": [{"orbitAU": 1.0}, {"orbitAU": 5.2}, {}]}
        bearings = calculate_system_orbits(system, "1105-120 08:00")

        assert list(bearings) == [0, 1, 2]
        assert bearings[0] == pytest.approx(calculate_orbital_position("Regina", 0, 1.0, "1105-120 08:00"))
        assert bearings[1] == pytest.approx(calculate_orbital_position("Regina", 1, 5.2, "1105-120 08:00"))
        # A planet without a radius orbits at 1 AU
        assert bearings[2] == pytest.approx(calculate_orbital_position("Regina", 2, 1.0, "1105-120 08:00"))

    def test_star_system_input(self, regina_system):
        """Generated systems are keyed by the index of each star-orbiting body."""
        bearings = calculate_system_orbits(regina_system, "1105-120 08:00")
        planets = regina_system.planets

        assert len(bearings) == len(planets)
        for index, planet in enumerate(planets):
            expected = calculate_orbital_position("Regina", index, planet.orbit_au, "1105-120 08:00")
            assert bearings[index] == pytest.approx(expected)

    def test_negative_elapsed_time(self, regina_system):
        """Dates before the epoch still give normalised bearings."""
        for bearing in calculate_system_orbits(regina_system, "1000-100 12:00").values():
            assert 0.0 <= bearing < 360.0

    def test_values_are_floats(self, regina_system):
        """Bearings are plain floats."""
        for bearing in calculate_system_orbits(regina_system, "1105-001").values():
            assert type(bearing) is float


class TestAnimationOffset:
    """Tests for the cosmetic drift."""

    def test_outer_bodies_drift_slower(self):
        """Offset magnitude decreases with orbital radius."""
        assert get_animation_offset(1000, 0.5) > get_animation_offset(1000, 4.0)

    def test_value(self):
        """Offset rate is 0.001 / sqrt(au) degrees per millisecond."""
        assert get_animation_offset(1000, 4.0) == pytest.approx(0.5)

    def test_radius_floor(self):
        """Tiny or missing radii are clamped."""
        assert get_animation_offset(100, 0.01) == get_animation_offset(100, 0.1)
        assert get_animation_offset(100, None) == get_animation_offset(100, 0.1)

    def test_range(self):
        """Offsets are bearings in [0, 360)."""
        assert 0.0 <= get_animation_offset(10 ** 9, 1.0) < 360.0


class TestSystemPositions:
    """Tests for Cartesian positions."""

    def test_star_at_origin(self, regina_system):
        """The star is at the origin."""
        positions = system_positions(regina_system, "1105-001")
        assert np.allclose(positions[regina_system.star.id], [0.0, 0.0])

    def test_planet_distance(self, regina_system):
        """Star-orbiting bodies sit at their orbital radius."""
        positions = system_positions(regina_system, "1105-001")
        for planet in regina_system.planets:
            assert np.linalg.norm(positions[planet.id]) == pytest.approx(planet.orbit_au)

    def test_moons_relative_to_parent(self, gas_giant_rich_system):
        """Moons sit orbit_km from their parent, not from the star."""
        system = gas_giant_rich_system
        positions = system_positions(system, "1110-200 06:00")
        for moon in system.moons:
            offset = positions[moon.id] - positions[moon.parent_id]
            assert np.linalg.norm(offset) == pytest.approx(moon.orbit_km / AU_KM)
            assert np.allclose(offset, moon_offset_au(moon))

    def test_every_body_placed(self, gas_giant_rich_system):
        """Every body in the system gets a position."""
        positions = system_positions(gas_giant_rich_system, "1100-001")
        assert set(positions) == {o.id for o in gas_giant_rich_system}

    def test_bearing_direction(self, regina_system):
        """Position angle matches the current bearing."""
        date = "1107-050 10:00"
        positions = system_positions(regina_system, date)
        bearings = calculate_system_orbits(regina_system, date)
        for index, planet in enumerate(regina_system.planets):
            x, y = positions[planet.id]
            angle = math.degrees(math.atan2(y, x)) % 360
            assert min(abs(angle - bearings[index]), 360 - abs(angle - bearings[index])) < 1e-6
