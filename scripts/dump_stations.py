#!/usr/bin/env python3
"""Dump the fused station set the dashboard would show.

Runs the same sequence a dashboard session does: global load, optionally
"locate me" at a fixed position, optionally a search whose first hit is
selected. Prints the fused, worst-first station list and every camera
action the focus arbiter emitted along the way.

Usage
-----
::

    export WARDWATCH_WAQI_TOKEN="your-token"
    python scripts/dump_stations.py
    python scripts/dump_stations.py --lat 28.61 --lng 77.21 --search "anand vihar"

Options::

    --lat/--lng LAT LNG  Pretend the user is at this position
    --search QUERY       Search and select the first result
    --top N              Only print the N worst stations (default: 20)
    --json               Output as machine-readable JSON
    --output FILE        Write output to FILE instead of stdout
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

# Allow running from the repo root without installing the package.
_repo = Path(__file__).resolve().parent.parent
_src = _repo / "src"
if _src.is_dir():
    sys.path.insert(0, str(_src))

from wardwatch import (  # noqa: E402
    Coordinate,
    DashboardController,
    FixedGeolocator,
    FocusAction,
    PollutionSeverity,
    Station,
    WaqiClient,
    WardWatchConfig,
    WardWatchError,
)

# ── helpers ──────────────────────────────────────────────────


def _section(title: str) -> str:
    line = "=" * 60
    return f"\n{line}\n  {title}\n{line}"


def _format_station(rank: int, station: Station) -> str:
    severity = PollutionSeverity.from_aqi(station.aqi)
    return (
        f"  {rank:>3}. {station.aqi:>4}  {severity.value:<31} "
        f"{station.name} [{station.id}] ({station.location.lat:.4f}, {station.location.lng:.4f})"
    )


def _format_action(action: FocusAction) -> str:
    if action.target is not None:
        return f"  {action.kind}: ({action.target.lat:.4f}, {action.target.lng:.4f}) zoom={action.zoom}"
    if action.bounds is not None:
        b = action.bounds
        return f"  {action.kind}: [{b.south:.4f}, {b.west:.4f}] - [{b.north:.4f}, {b.east:.4f}]"
    return f"  {action.kind}"


# ── main ─────────────────────────────────────────────────────


async def main() -> None:
    parser = argparse.ArgumentParser(
        description="Dump the fused station set and camera actions for debugging / development.",
    )
    parser.add_argument("--lat", type=float, help="User latitude for the locate step")
    parser.add_argument("--lng", type=float, help="User longitude for the locate step")
    parser.add_argument("--search", help="Search query; the first result is selected")
    parser.add_argument("--top", type=int, default=20, help="How many stations to print")
    parser.add_argument("--json", action="store_true", dest="json_mode", help="Output machine-readable JSON")
    parser.add_argument("--output", "-o", help="Write output to FILE instead of stdout")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    args = parser.parse_args()

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")
    else:
        logging.basicConfig(level=logging.WARNING)

    if (args.lat is None) != (args.lng is None):
        parser.error("--lat and --lng must be given together")

    config = WardWatchConfig.from_env()
    actions: list[FocusAction] = []
    geolocator = None
    if args.lat is not None:
        geolocator = FixedGeolocator(Coordinate(lat=args.lat, lng=args.lng))

    result: dict[str, Any] = {"timestamp": datetime.now(UTC).isoformat()}

    async with WaqiClient(config) as client:
        controller = DashboardController(client, config, geolocator=geolocator, on_focus=actions.append)
        await controller.load()
        result["global_count"] = len(controller.repository)

        if geolocator is not None:
            try:
                await controller.locate_me()
            except WardWatchError as exc:
                print(f"  !! locate failed: {exc}", file=sys.stderr)

        if args.search:
            hits = await controller.search(args.search)
            result["search_hits"] = [hit.model_dump(mode="json", exclude={"raw"}) for hit in hits]
            if hits:
                await controller.select_search_result(hits[0])

        snapshot = controller.snapshot()

    stations = snapshot.stations[: max(args.top, 0)]
    result["average_aqi"] = snapshot.average_aqi
    result["selected"] = snapshot.selected.id if snapshot.selected else None
    result["actions"] = [action.model_dump(mode="json") for action in actions]
    result["stations"] = [station.model_dump(mode="json", exclude={"raw"}) for station in stations]

    if args.json_mode or args.output:
        payload = json.dumps(result, indent=2, default=str, ensure_ascii=False)
        if args.output:
            Path(args.output).write_text(payload, encoding="utf-8")
            print(f"JSON written to {args.output}", file=sys.stderr)
        else:
            print(payload)
        return

    out: list[str] = [_section("wardwatch dump_stations")]
    out.append(f"  time      : {result['timestamp']}")
    out.append(f"  stations  : {len(snapshot.stations)} (global load: {result['global_count']})")
    out.append(f"  average   : {snapshot.average_aqi} ({snapshot.average_severity.value})")
    out.append(f"  selected  : {result['selected']}")

    out.append(_section("CAMERA ACTIONS"))
    out.extend(_format_action(action) for action in actions)

    out.append(_section(f"STATIONS (worst {len(stations)})"))
    out.extend(_format_station(rank, station) for rank, station in enumerate(stations, start=1))
    print("\n".join(out))


if __name__ == "__main__":
    asyncio.run(main())
