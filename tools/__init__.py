#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Star System Tools Package

Utility tools built on the starsystem package:

- Sector Build: generate every system of a sector file and export JSON
"""

from .build_sector import (
    SectorBuilder,
    SectorBuildConfig,
    SectorWorld,
    build_world,
    run_build,
    subsector_for_hex,
)

__all__ = [
    "SectorBuilder",
    "SectorBuildConfig",
    "SectorWorld",
    "build_world",
    "run_build",
    "subsector_for_hex",
]

__version__ = "1.0.0"
