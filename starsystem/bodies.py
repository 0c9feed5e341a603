#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Celestial Bodies and Star Systems

Data model for generated systems. A system is a flat, ordered collection of
bodies addressed by identifier; moons point at their parent through
``parent_id`` rather than holding a reference.

Where a body orbits is carried by the type of its orbit:

- HeliocentricOrbit: distance from the star in AU (stars, planets, belts)
- SatelliteOrbit: distance from the parent body, in parent radii and km

A moon never carries an AU distance, and its dictionary form has no
``orbitAU`` key at all.
"""

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Iterator, List, Optional, Tuple, Union


class BodyType(Enum):
    """Kinds of generated bodies."""

    STAR = "Star"
    MAINWORLD = "Mainworld"
    GAS_GIANT = "GasGiant"
    BELT = "Belt"
    MOON = "Moon"

    @property
    def id_token(self) -> str:
        """Token used inside identifiers ("gasgiant", "moon", ...)."""
        return self.value.lower()


@dataclass(frozen=True)
class HeliocentricOrbit:
    """
    Circular orbit around the primary star.

    Attributes
    ----------
    au : float
        Orbital radius in AU (0 for the star itself)
    """

    au: float

    def __post_init__(self):
        if self.au < 0 or math.isnan(self.au):
            raise ValueError("Orbital radius must be non-negative")


@dataclass(frozen=True)
class SatelliteOrbit:
    """
    Circular orbit around a parent body.

    Attributes
    ----------
    parent_id : str
        Identifier of the body being orbited
    radii : float
        Orbital radius in multiples of the parent's radius
    km : float
        Orbital radius in km from the parent's center
    """

    parent_id: str
    radii: float
    km: float

    def __post_init__(self):
        if not self.parent_id:
            raise ValueError("Satellite orbit requires a parent id")
        if self.radii <= 0 or self.km <= 0:
            raise ValueError("Satellite orbit radius must be positive")


Orbit = Union[HeliocentricOrbit, SatelliteOrbit]


@dataclass(frozen=True)
class CelestialObject:
    """
    One generated body.

    Parameters
    ----------
    id : str
        Deterministic identifier
    type : BodyType
        Kind of body
    subtype : str
        Size or composition class, specific to the body type
    name : str
        Display name
    radius_km : float
        Body radius (km)
    bearing : float
        Initial angular offset along the orbit (degrees)
    orbit : HeliocentricOrbit or SatelliteOrbit
        Where the body orbits; moons must use SatelliteOrbit, everything
        else HeliocentricOrbit
    is_mainworld : bool
        True only for the system's mainworld
    notes : tuple of str
        Free-form annotations
    has_rings : bool
        Ring system present
    width_au : float, optional
        Radial width of a belt (AU)
    """

    id: str
    type: BodyType
    subtype: str
    name: str
    radius_km: float
    bearing: float
    orbit: Orbit
    is_mainworld: bool = False
    notes: Tuple[str, ...] = ()
    has_rings: bool = False
    width_au: Optional[float] = None

    def __post_init__(self):
        if not isinstance(self.orbit, (HeliocentricOrbit, SatelliteOrbit)):
            raise TypeError(
                f"orbit must be HeliocentricOrbit or SatelliteOrbit, not {type(self.orbit).__name__}"
            )
        is_moon = self.type is BodyType.MOON
        if is_moon and not isinstance(self.orbit, SatelliteOrbit):
            raise ValueError(f"Moon {self.id} must orbit a parent body, not the star")
        if not is_moon and isinstance(self.orbit, SatelliteOrbit):
            raise ValueError(f"{self.type.value} {self.id} cannot have a satellite orbit")
        if is_moon and self.orbit.parent_id == self.id:
            raise ValueError(f"Moon {self.id} cannot orbit itself")

    @property
    def is_satellite(self) -> bool:
        return isinstance(self.orbit, SatelliteOrbit)

    @property
    def orbit_au(self) -> Optional[float]:
        """Distance from the star (AU), None for moons."""
        if isinstance(self.orbit, HeliocentricOrbit):
            return self.orbit.au
        return None

    @property
    def parent_id(self) -> Optional[str]:
        if isinstance(self.orbit, SatelliteOrbit):
            return self.orbit.parent_id
        return None

    @property
    def orbit_radii(self) -> Optional[float]:
        if isinstance(self.orbit, SatelliteOrbit):
            return self.orbit.radii
        return None

    @property
    def orbit_km(self) -> Optional[float]:
        if isinstance(self.orbit, SatelliteOrbit):
            return self.orbit.km
        return None

    def to_dict(self) -> Dict[str, Any]:
        """Dictionary form using the persisted field names."""
        data: Dict[str, Any] = {
            "id": self.id,
            "type": self.type.value,
            "subtype": self.subtype,
            "name": self.name,
            "radiusKm": self.radius_km,
            "bearing": self.bearing,
            "isMainworld": self.is_mainworld,
        }
        if isinstance(self.orbit, SatelliteOrbit):
            data["parentId"] = self.orbit.parent_id
            data["orbitRadii"] = self.orbit.radii
            data["orbitKm"] = self.orbit.km
        else:
            data["orbitAU"] = self.orbit.au
        if self.has_rings:
            data["hasRings"] = True
        if self.width_au is not None:
            data["widthAU"] = self.width_au
        if self.notes:
            data["notes"] = list(self.notes)
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "CelestialObject":
        """Create from dictionary."""
        if "parentId" in data:
            orbit: Orbit = SatelliteOrbit(
                parent_id=data["parentId"],
                radii=float(data["orbitRadii"]),
                km=float(data["orbitKm"]),
            )
        else:
            orbit = HeliocentricOrbit(float(data["orbitAU"]))
        return cls(
            id=data["id"],
            type=BodyType(data["type"]),
            subtype=data.get("subtype", ""),
            name=data.get("name", ""),
            radius_km=float(data.get("radiusKm", 0.0)),
            bearing=float(data.get("bearing", 0.0)),
            orbit=orbit,
            is_mainworld=bool(data.get("isMainworld", False)),
            notes=tuple(data.get("notes", ())),
            has_rings=bool(data.get("hasRings", False)),
            width_au=data.get("widthAU"),
        )


@dataclass(frozen=True)
class StarSystem:
    """
    A generated star system.

    Attributes
    ----------
    hex : str
        Sector hex coordinate (e.g. "1910")
    world_stats : str
        Mainworld statistics string the system was generated from
    stellar_class : str
        Stellar classification the system was generated from
    objects : tuple of CelestialObject
        Bodies in generation order, star first
    gas_giant_count : int
        Number of gas giants requested
    belt_count : int
        Number of belts requested
    name : str
        System name; bearings fall back to the hex when empty
    """

    hex: str
    world_stats: str
    stellar_class: str
    objects: Tuple[CelestialObject, ...] = field(default_factory=tuple)
    gas_giant_count: int = 0
    belt_count: int = 0
    name: str = ""

    def __iter__(self) -> Iterator[CelestialObject]:
        return iter(self.objects)

    def __len__(self) -> int:
        return len(self.objects)

    @property
    def display_name(self) -> str:
        return self.name or self.hex

    def get(self, object_id: str) -> Optional[CelestialObject]:
        """Look up a body by identifier."""
        for obj in self.objects:
            if obj.id == object_id:
                return obj
        return None

    def children(self, parent_id: str) -> List[CelestialObject]:
        """Moons orbiting the given body."""
        return [obj for obj in self.objects if obj.parent_id == parent_id]

    def of_type(self, body_type: BodyType) -> List[CelestialObject]:
        return [obj for obj in self.objects if obj.type is body_type]

    @property
    def star(self) -> Optional[CelestialObject]:
        stars = self.of_type(BodyType.STAR)
        return stars[0] if stars else None

    @property
    def mainworld(self) -> Optional[CelestialObject]:
        for obj in self.objects:
            if obj.is_mainworld:
                return obj
        return None

    @property
    def planets(self) -> List[CelestialObject]:
        """Star-orbiting bodies other than the star, in generation order."""
        return [
            obj for obj in self.objects
            if obj.type is not BodyType.STAR and not obj.is_satellite
        ]

    @property
    def moons(self) -> List[CelestialObject]:
        return self.of_type(BodyType.MOON)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "hex": self.hex,
            "name": self.name,
            "worldStats": self.world_stats,
            "stellarClass": self.stellar_class,
            "gasGiantCount": self.gas_giant_count,
            "beltCount": self.belt_count,
            "objectCount": len(self.objects),
            "objects": [obj.to_dict() for obj in self.objects],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "StarSystem":
        """Create from dictionary."""
        return cls(
            hex=data["hex"],
            world_stats=data.get("worldStats", ""),
            stellar_class=data.get("stellarClass", ""),
            objects=tuple(CelestialObject.from_dict(o) for o in data.get("objects", ())),
            gas_giant_count=int(data.get("gasGiantCount", 0)),
            belt_count=int(data.get("beltCount", 0)),
            name=data.get("name", ""),
        )
