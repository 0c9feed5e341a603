#!/usr/bin/env python3
"""
Tests for the celestial body data model.

These tests verify:
1. A body carries exactly one kind of orbit
2. Moons cannot be given a distance from the star
3. Dictionary conversion keeps the persisted field names
"""

import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent))

from starsystem.bodies import (
    BodyType,
    CelestialObject,
    HeliocentricOrbit,
    SatelliteOrbit,
    StarSystem,
)


def make_moon(parent_id="p", **overrides):
    fields = dict(
        id="m",
        type=BodyType.MOON,
        subtype="Minor Moon",
        name="Moon",
        radius_km=400.0,
        bearing=90.0,
        orbit=SatelliteOrbit(parent_id=parent_id, radii=4.0, km=24000.0),
    )
    fields.update(overrides)
    return CelestialObject(**fields)


class TestOrbits:
    """Tests for orbit value types."""

    def test_heliocentric_rejects_negative(self):
        """Negative AU is invalid."""
        with pytest.raises(ValueError):
            HeliocentricOrbit(-0.1)

    def test_heliocentric_rejects_nan(self):
        """NaN AU is invalid."""
        with pytest.raises(ValueError):
            HeliocentricOrbit(float("nan"))

    def test_satellite_requires_parent(self):
        """A satellite orbit needs a parent id."""
        with pytest.raises(ValueError):
            SatelliteOrbit(parent_id="", radii=2.0, km=100.0)

    def test_satellite_requires_positive_radius(self):
        """Satellite radii must be positive."""
        with pytest.raises(ValueError):
            SatelliteOrbit(parent_id="p", radii=0.0, km=100.0)


class TestCelestialObject:
    """Tests for body construction rules."""

    def test_moon_has_parent_relative_fields(self):
        """Moon accessors expose only the parent-relative orbit."""
        moon = make_moon()
        assert moon.is_satellite
        assert moon.orbit_au is None
        assert moon.parent_id == "p"
        assert moon.orbit_radii == 4.0
        assert moon.orbit_km == 24000.0

    def test_moon_cannot_orbit_star(self):
        """A moon with a heliocentric orbit is rejected."""
        with pytest.raises(ValueError):
            make_moon(orbit=HeliocentricOrbit(1.0))

    def test_planet_cannot_have_satellite_orbit(self):
        """Non-moons cannot have a satellite orbit."""
        with pytest.raises(ValueError):
            make_moon(type=BodyType.GAS_GIANT)

    def test_moon_cannot_orbit_itself(self):
        """A moon's parent is another body."""
        with pytest.raises(ValueError):
            make_moon(parent_id="m")

    def test_orbit_type_checked(self):
        """A bare number is not an orbit."""
        with pytest.raises(TypeError):
            make_moon(orbit=1.0)

    def test_moon_dict_has_no_orbit_au(self):
        """Moon dictionaries omit orbitAU entirely."""
        data = make_moon().to_dict()
        assert "orbitAU" not in data
        assert data["parentId"] == "p"
        assert data["orbitRadii"] == 4.0
        assert data["orbitKm"] == 24000.0

    def test_planet_dict_has_only_orbit_au(self):
        """Star-orbiting dictionaries carry orbitAU and no parent fields."""
        planet = CelestialObject(
            id="g",
            type=BodyType.GAS_GIANT,
            subtype="Ice Giant",
            name="Giant",
            radius_km=25000.0,
            bearing=10.0,
            orbit=HeliocentricOrbit(7.5),
            has_rings=True,
        )
        data = planet.to_dict()
        assert data["orbitAU"] == 7.5
        assert data["type"] == "GasGiant"
        assert data["hasRings"] is True
        assert not {"parentId", "orbitRadii", "orbitKm"} & set(data)

    def test_from_dict_round_trip(self):
        """from_dict restores an equal body."""
        moon = make_moon(notes=("Tidally locked",))
        assert CelestialObject.from_dict(moon.to_dict()) == moon

    def test_frozen(self):
        """Bodies are immutable."""
        moon = make_moon()
        with pytest.raises(AttributeError):
            moon.bearing = 0.0

    def test_id_token(self):
        """Identifier tokens are lower-case type names."""
        assert BodyType.GAS_GIANT.id_token == "gasgiant"
        assert BodyType.MOON.id_token == "moon"


class TestStarSystem:
    """Tests for StarSystem lookups."""

    def test_lookups(self, regina_system):
        """Star, mainworld, planets and moons are found by role."""
        system = regina_system
        assert system.star is system.objects[0]
        assert system.mainworld.is_mainworld
        assert all(not p.is_satellite for p in system.planets)
        assert system.star not in system.planets
        assert len(system.planets) + len(system.moons) + 1 == len(system)

    def test_get_and_children(self, gas_giant_rich_system):
        """Moons are reachable from their parent's id."""
        system = gas_giant_rich_system
        for moon in system.moons:
            parent = system.get(moon.parent_id)
            assert parent is not None
            assert moon in system.children(parent.id)
        assert system.get("missing") is None

    def test_display_name(self):
        """Display name falls back to the hex."""
        assert StarSystem(hex="0101", world_stats="", stellar_class="").display_name == "0101"

    def test_dict_round_trip(self, regina_system):
        """A system survives conversion to and from a dictionary."""
        data = regina_system.to_dict()
        assert data["objectCount"] == len(regina_system)
        assert StarSystem.from_dict(data) == regina_system
