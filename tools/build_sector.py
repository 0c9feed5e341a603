#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Sector Build Utility

Generates star systems for every world in a sector file and writes them as
JSON, one file per subsector plus a metadata file. Generation is pure, so
worlds are built in parallel worker processes when requested and the output
is identical to a serial build.

Sector file format (JSON):

    {"systems": [
        {"hex": "1910", "name": "Regina", "uwp": "A788899-C",
         "stellar": "F7 V BD M3 V", "gg": 2, "pb": 1},
        ...
    ]}

Usage
-----
Command-line:
    python -m tools.build_sector --sector spinward-marches.json \\
        --output ./systems --workers 4

Programmatic:
    from tools.build_sector import SectorBuilder

    builder = SectorBuilder.from_file("spinward-marches.json")
    builder.build(workers=4)
    builder.export("./systems")
"""

from concurrent.futures import ProcessPoolExecutor
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional, Union
import json
import logging
import re
import sys

from starsystem import StarSystem, build_star_system


logger = logging.getLogger(__name__)

GENERATOR_NAME = "starsystem"
GENERATOR_VERSION = "1.0"

# Placeholder hex used by sector files for unmapped entries
NULL_HEX = "0000"

# Subsectors are 8 columns x 10 rows, lettered A-P left to right, top to bottom
SUBSECTOR_COLUMNS = 8
SUBSECTOR_ROWS = 10
SUBSECTOR_LETTERS = "ABCDEFGHIJKLMNOP"

_SPACELESS_CLASS = re.compile(r"([OBAFGKM]\d)(?=[IV])")


@dataclass
class SectorWorld:
    """
    One world entry of a sector file.

    Attributes
    ----------
    hex : str
        Sector hex coordinate ("CCRR")
    name : str
        World name
    uwp : str
        World statistics string
    stellar : str
        Stellar classification
    gas_giants : int
        Number of gas giants
    belts : int
        Number of planetoid belts
    """
    hex: str
    name: str = ""
    uwp: str = ""
    stellar: str = ""
    gas_giants: int = 0
    belts: int = 0

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SectorWorld":
        """Create from a sector file entry, accepting short and long field names."""
        stellar = data.get("stellar") or ""
        # "G2V" -> "G2 V"
        stellar = _SPACELESS_CLASS.sub(r"\1 ", stellar)
        return cls(
            hex=str(data.get("hex", "")),
            name=data.get("name") or "",
            uwp=data.get("uwp") or "",
            stellar=stellar,
            gas_giants=data.get("gg", data.get("gasGiants")) or 0,
            belts=data.get("pb", data.get("belts")) or 0,
        )


@dataclass
class SectorBuildConfig:
    """
    Configuration for a sector build.

    Attributes
    ----------
    sector_file : Path
        Input sector JSON
    output_dir : Path, optional
        Directory for output files (required unless dry_run)
    workers : int
        Worker processes; 1 builds serially in this process
    hex_filter : str, optional
        Build only the world at this hex
    dry_run : bool
        Build without writing anything
    """
    sector_file: Path
    output_dir: Optional[Path] = None
    workers: int = 1
    hex_filter: Optional[str] = None
    dry_run: bool = False


def subsector_for_hex(hex_coordinate: str) -> Optional[str]:
    """
    Subsector letter (A-P) for a sector hex, None if outside the sector.

    Examples
    --------
    >>> subsector_for_hex("1910")
    'C'
    >>> subsector_for_hex("1215")
    'F'
    """
    if len(hex_coordinate) != 4 or not hex_coordinate.isdigit():
        return None
    column = int(hex_coordinate[:2])
    row = int(hex_coordinate[2:])
    if not (1 <= column <= 4 * SUBSECTOR_COLUMNS and 1 <= row <= 4 * SUBSECTOR_ROWS):
        return None
    index = ((row - 1) // SUBSECTOR_ROWS) * 4 + (column - 1) // SUBSECTOR_COLUMNS
    return SUBSECTOR_LETTERS[index]


def build_world(world: SectorWorld) -> StarSystem:
    """Generate the system for one sector entry (runs in worker processes)."""
    return build_star_system(
        world.hex,
        world.uwp,
        world.stellar,
        gas_giant_count=world.gas_giants,
        belt_count=world.belts,
        name=world.name,
    )


class SectorBuilder:
    """
    Builds and exports every system of a sector.

    Parameters
    ----------
    worlds : list of SectorWorld, optional
        Worlds to build

    Examples
    --------
    >>> builder = SectorBuilder([SectorWorld("1910", "Regina", "A788899-C", "F7 V", 2)])
    >>> systems = builder.build()
    >>> builder.export("./systems")
    """

    def __init__(self, worlds: Optional[List[SectorWorld]] = None):
        self.worlds: List[SectorWorld] = []
        self.systems: List[StarSystem] = []
        for world in worlds or []:
            self.add_world(world)

    @classmethod
    def from_file(cls, path: Union[Path, str], hex_filter: Optional[str] = None) -> "SectorBuilder":
        """
        Load worlds from a sector JSON file.

        Raises
        ------
        ValueError
            If ``hex_filter`` is given and no world has that hex
        """
        with open(path) as f:
            data = json.load(f)

        entries = data.get("systems", []) if isinstance(data, dict) else data
        worlds = [SectorWorld.from_dict(entry) for entry in entries]
        worlds = [w for w in worlds if w.hex and w.hex != NULL_HEX]

        if hex_filter is not None:
            worlds = [w for w in worlds if w.hex == hex_filter]
            if not worlds:
                raise ValueError(f"No system found with hex {hex_filter}")

        logger.info(f"Loaded {len(worlds)} worlds from {path}")
        return cls(worlds)

    def add_world(self, world: Union[SectorWorld, Dict[str, Any]]) -> SectorWorld:
        """Add a world entry (a SectorWorld or a sector file dictionary)."""
        if isinstance(world, dict):
            world = SectorWorld.from_dict(world)
        self.worlds.append(world)
        return world

    def build(self, workers: int = 1) -> List[StarSystem]:
        """
        Generate a system for every world.

        Parameters
        ----------
        workers : int
            Number of worker processes; 1 or less builds serially

        Returns
        -------
        list of StarSystem
            Systems in the same order as the worlds
        """
        if workers > 1 and len(self.worlds) > 1:
            logger.debug(f"Building {len(self.worlds)} systems with {workers} workers")
            with ProcessPoolExecutor(max_workers=workers) as executor:
                self.systems = list(executor.map(build_world, self.worlds, chunksize=16))
        else:
            self.systems = [build_world(world) for world in self.worlds]

        for system in self.systems:
            logger.debug(f"Built {system.hex} {system.name}: {len(system)} objects")

        return self.systems

    def by_subsector(self) -> Dict[str, List[StarSystem]]:
        """Built systems grouped by subsector letter ("-" for hexes outside the grid)."""
        grouped: Dict[str, List[StarSystem]] = {}
        for system in self.systems:
            letter = subsector_for_hex(system.hex) or "-"
            grouped.setdefault(letter, []).append(system)
        return grouped

    def export(self, output_dir: Union[Path, str]) -> Path:
        """
        Write one JSON file per subsector plus metadata.json.

        Returns
        -------
        Path
            The output directory
        """
        output_dir = Path(output_dir)
        output_dir.mkdir(parents=True, exist_ok=True)

        grouped = self.by_subsector()
        for letter, systems in sorted(grouped.items()):
            filepath = output_dir / f"subsector-{letter}.json"
            with open(filepath, "w") as f:
                json.dump({"subsector": letter, "systems": [s.to_dict() for s in systems]}, f, indent=2)
            logger.debug(f"Wrote {filepath}")

        self._write_metadata(output_dir, grouped)
        logger.info(f"Exported {len(self.systems)} systems to {output_dir}")
        return output_dir

    def _write_metadata(self, output_dir: Path, grouped: Dict[str, List[StarSystem]]) -> Path:
        filepath = output_dir / "metadata.json"
        metadata = {
            "created": datetime.now(timezone.utc).isoformat(),
            "generator": GENERATOR_NAME,
            "version": GENERATOR_VERSION,
            "num_systems": len(self.systems),
            "total_objects": sum(len(s) for s in self.systems),
            "subsectors": {letter: len(systems) for letter, systems in sorted(grouped.items())},
        }
        with open(filepath, "w") as f:
            json.dump(metadata, f, indent=2)
        return filepath


def run_build(config: SectorBuildConfig) -> SectorBuilder:
    """Load, build and (unless dry-run) export according to a config."""
    builder = SectorBuilder.from_file(config.sector_file, hex_filter=config.hex_filter)
    builder.build(workers=config.workers)

    if config.dry_run:
        for system in builder.systems:
            logger.info(f"[dry run] {system.hex} {system.name}: {len(system)} objects")
        return builder

    if config.output_dir is None:
        raise ValueError("An output directory is required unless dry_run is set")
    builder.export(config.output_dir)
    return builder


# Command-line interface
def main(argv: Optional[List[str]] = None) -> int:
    """Command-line entry point."""
    import argparse

    parser = argparse.ArgumentParser(
        description="Generate star systems for every world in a sector file"
    )

    parser.add_argument(
        "--sector", "-s",
        type=Path,
        required=True,
        help="Sector JSON file"
    )

    parser.add_argument(
        "--output", "-o",
        type=Path,
        default=None,
        help="Output directory for subsector files"
    )

    parser.add_argument(
        "--workers", "-w",
        type=int,
        default=1,
        help="Worker processes (default: 1)"
    )

    parser.add_argument(
        "--hex",
        type=str,
        default=None,
        help="Build a single system"
    )

    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Build without writing files"
    )

    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable verbose output"
    )

    args = parser.parse_args(argv)

    # Configure logging
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s: %(message)s"
    )

    if args.output is None and not args.dry_run:
        parser.error("--output is required unless --dry-run is given")

    config = SectorBuildConfig(
        sector_file=args.sector,
        output_dir=args.output,
        workers=args.workers,
        hex_filter=args.hex,
        dry_run=args.dry_run,
    )

    try:
        run_build(config)
    except (OSError, ValueError) as e:
        logger.error(f"Sector build failed: {e}")
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
