#!/usr/bin/env python3
"""
Star System Generator

Command-line entry point for generating a star system and reporting where
its bodies are at a campaign date.

Usage:
    python main.py --hex 1910 --uwp A788899-C --stellar "F7 V" -g 2
    python main.py --hex 1910 --uwp A788899-C --date "1105-120 08:00"
    python main.py --hex 1910 --date "1105-120" --steps 5 --step-hours 240
    python main.py --hex 0101 --json                # JSON output
    python main.py --help                           # Show all options
"""

import argparse
import json
import logging
import sys


def main(argv=None):
    parser = argparse.ArgumentParser(
        description="Procedural Star System Generator and Orbital Clock",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s --hex 1910 --uwp A788899-C --stellar "F7 V" -g 2   # Regina-like system
  %(prog)s --hex 2118 --stellar "M2 V" -g 1 -b 1              # Red dwarf with a belt
  %(prog)s --hex 1910 --date "1105-120 08:00"                  # Bearings at a date
  %(prog)s --hex 1910 --steps 4 --step-hours 720               # Bearings every 30 days
  %(prog)s --hex 1910 --json                                   # JSON for storage
        """,
    )

    # -------------------------------------------------------------------------
    # World parameters
    # -------------------------------------------------------------------------
    parser.add_argument(
        "--hex",
        type=str,
        required=True,
        help="Sector hex coordinate, e.g. 1910",
    )
    parser.add_argument(
        "--uwp",
        type=str,
        default="",
        help="Mainworld statistics string, e.g. A867974-C",
    )
    parser.add_argument(
        "--stellar",
        type=str,
        default="G2 V",
        help="Stellar classification (default: G2 V)",
    )
    parser.add_argument(
        "--gas-giants",
        "-g",
        type=int,
        default=0,
        help="Number of gas giants (default: 0)",
    )
    parser.add_argument(
        "--belts",
        "-b",
        type=int,
        default=0,
        help="Number of planetoid belts (default: 0)",
    )
    parser.add_argument(
        "--name",
        type=str,
        default="",
        help="System name (bearings are keyed by it; defaults to the hex)",
    )

    # -------------------------------------------------------------------------
    # Orbital clock
    # -------------------------------------------------------------------------
    parser.add_argument(
        "--date",
        type=str,
        default=None,
        help="Campaign date, YYYY-DDD or YYYY-DDD HH:MM (default: epoch 1100-001)",
    )
    parser.add_argument(
        "--steps",
        type=int,
        default=1,
        help="Number of dates to report bearings for (default: 1)",
    )
    parser.add_argument(
        "--step-hours",
        type=int,
        default=24,
        help="Hours between reported dates (default: 24)",
    )

    # -------------------------------------------------------------------------
    # Output
    # -------------------------------------------------------------------------
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print the generated system as JSON",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable debug logging",
    )

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s: %(message)s",
    )

    from starsystem import (
        DateFormatError,
        advance_date,
        build_star_system,
        calculate_habitable_zone,
        calculate_system_orbits,
        parse_date,
    )

    try:
        start_date = str(parse_date(args.date))
    except DateFormatError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    system = build_star_system(
        args.hex,
        args.uwp,
        args.stellar,
        gas_giant_count=args.gas_giants,
        belt_count=args.belts,
        name=args.name,
    )

    if args.json:
        data = system.to_dict()
        data["bearings"] = {
            str(index): bearing
            for index, bearing in calculate_system_orbits(system, start_date).items()
        }
        data["date"] = start_date
        print(json.dumps(data, indent=2))
        return 0

    # -------------------------------------------------------------------------
    # Print system summary
    # -------------------------------------------------------------------------
    zone = calculate_habitable_zone(args.stellar)

    print("=" * 72)
    print(f"System {system.display_name} ({system.hex})")
    print("=" * 72)
    print(f"\nStellar Class: {system.star.subtype}")
    print(f"World Statistics: {args.uwp or '(none)'}")
    print(
        f"Habitable Zone: {zone.inner:.2f} - {zone.outer:.2f} AU "
        f"(optimal {zone.optimal:.2f} AU)"
    )
    print(f"Objects: {len(system)}")

    print(f"\n{'Type':<10} {'Subtype':<18} {'Orbit':>22} {'Radius':>10}  Id")
    print("-" * 72)
    for obj in system:
        if obj.is_satellite:
            orbit = f"{obj.orbit_radii:.2f} Rp / {obj.orbit_km:,.0f} km"
        else:
            orbit = f"{obj.orbit_au:.3f} AU"
        marker = "*" if obj.is_mainworld else " "
        print(
            f"{obj.type.value:<10} {obj.subtype:<18} {orbit:>22} "
            f"{obj.radius_km:>8,.0f}km {marker}{obj.id}"
        )

    # -------------------------------------------------------------------------
    # Bearings over time
    # -------------------------------------------------------------------------
    planets = system.planets
    print(f"\n{'=' * 72}")
    print("Orbital Bearings")
    print(f"{'=' * 72}")

    date = start_date
    for _ in range(max(1, args.steps)):
        bearings = calculate_system_orbits(system, date)
        print(f"\n{date}")
        for index, bearing in bearings.items():
            print(f"  {planets[index].name:<28} {bearing:7.2f}°")
        date = advance_date(date, hours=args.step_hours)

    return 0


if __name__ == "__main__":
    sys.exit(main())
