#!/usr/bin/env python3
"""
Pytest Configuration and Shared Fixtures

Provides common fixtures and markers for testing star system generation,
the orbital clock and the sector build tool.
"""

import json
import sys
from pathlib import Path

import pytest

# Add parent directory for imports
sys.path.insert(0, str(Path(__file__).parent.parent))


# =============================================================================
# PYTEST MARKERS
# =============================================================================

def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "slow: mark test as slow running"
    )
    config.addinivalue_line(
        "markers", "integration: mark as integration test"
    )


# =============================================================================
# SYSTEM FIXTURES
# =============================================================================

@pytest.fixture
def regina_system():
    """Regina-like system with two gas giants and a belt."""
    from starsystem import build_star_system

    return build_star_system(
        "1910", "A788899-C", "F7 V M3 V", gas_giant_count=2, belt_count=1, name="Regina"
    )


@pytest.fixture
def gas_giant_rich_system():
    """System with many gas giants, so moons are all but certain."""
    from starsystem import build_star_system

    return build_star_system("1910", "A867974-C", "G2 V", gas_giant_count=4)


@pytest.fixture
def sample_gas_giant():
    """Stand-alone gas giant for moon generation tests."""
    from starsystem import BodyType, CelestialObject, HeliocentricOrbit

    return CelestialObject(
        id="1910-gasgiant-0-abcd",
        type=BodyType.GAS_GIANT,
        subtype="Jupiter-like",
        name="Test Giant",
        radius_km=60000.0,
        bearing=45.0,
        orbit=HeliocentricOrbit(5.2),
    )


# =============================================================================
# SECTOR FILE FIXTURES
# =============================================================================

@pytest.fixture
def sector_entries():
    """Raw sector file entries (including an unmapped placeholder)."""
    return [
        {"hex": "1910", "name": "Regina", "uwp": "A788899-C", "stellar": "F7V BD M3V", "gg": 2, "pb": 1},
        {"hex": "1215", "name": "Efate", "uwp": "A646930-D", "stellar": "M1 V", "gg": 1},
        {"hex": "0101", "name": "Zeycude", "uwp": "C430698-9", "stellar": "K1 V", "gasGiants": 0, "belts": 2},
        {"hex": "0000", "name": "Unmapped", "uwp": "", "stellar": ""},
    ]


@pytest.fixture
def sector_file(tmp_path, sector_entries):
    """Sector JSON file on disk."""
    path = tmp_path / "sector.json"
    with open(path, "w") as f:
        json.dump({"systems": sector_entries}, f)
    return path
