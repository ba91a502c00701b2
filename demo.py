"""
Space Debris Tracking Demonstration

Loads a 3LE catalog, places every object on a headless globe layer and
optionally advances the simulation for a number of frames, re-propagating
every object on each frame.

Usage:
    python demo.py [--source SOURCE] [--frames N] [--fallback] [--verbose]

Arguments:
    --source: URL or file path of the 3LE catalog (default from
        SPACETRASH_TLE_SOURCE)
    --frames: Frames to draw with the simulation enabled (0 disables it)
    --fallback: Load the built-in ISS element set if the catalog cannot be
        fetched
    --verbose: Enable debug logging
"""

import argparse
import asyncio
import logging
from datetime import datetime, timezone
from typing import Optional

from config import TrackerConfig, fallback_catalog_text
from logging_config import configure_logging, get_logger
from spacetrash.globe import RenderableLayer, WorldWindow
from spacetrash.tracker import LoadReport, Simulation, TickReport, TrackerContext, load_catalog, load_text

logger = get_logger(__name__)

# Initial camera target (Bucharest)
LOOK_AT_LATITUDE = 44.439663
LOOK_AT_LONGITUDE = 26.096306


def build_context(config: TrackerConfig):
    """Create the window, the debris layer and the tracker context."""
    window = WorldWindow("canvasOne")
    layer = RenderableLayer("spacetrash")
    window.add_layer(layer)
    context = TrackerContext(layer, label=config.LABEL)
    return window, context


def print_positions(context: TrackerContext, limit: int = 10) -> None:
    """Print the current position of the first placed objects."""
    shown = 0
    for entry in context.entries:
        if entry.renderable is None:
            continue
        position = entry.renderable.position
        print(
            f"  [{entry.record.id:>5}] {entry.record.name:<24} "
            f"lat {position.latitude:8.3f}  lon {position.longitude:9.3f}  "
            f"h {position.altitude / 1000.0:10.1f} km"
        )
        shown += 1
        if shown >= limit:
            break
    remaining = sum(1 for e in context.entries if e.renderable is not None) - shown
    if remaining > 0:
        print(f"  ... and {remaining} more")


def report_tick(report: TickReport) -> None:
    logger.info(
        f"Tick at {report.at_time.isoformat()}: {report.refreshed}/{report.attempted} refreshed"
    )


async def load(context: TrackerContext, config: TrackerConfig, use_fallback: bool) -> LoadReport:
    report = await load_catalog(
        context,
        config.TLE_SOURCE,
        layout=config.TLE_LAYOUT,
        timeout=config.FETCH_TIMEOUT,
    )
    if not report.ok and use_fallback:
        logger.warning("Catalog unavailable, loading the fallback element set")
        report = load_text(context, fallback_catalog_text())
    return report


def main(argv: Optional[list] = None) -> int:
    config = TrackerConfig()

    parser = argparse.ArgumentParser(description="Space debris tracking demonstration")
    parser.add_argument("--source", default=config.TLE_SOURCE, help="URL or path of the 3LE catalog")
    parser.add_argument("--frames", type=int, default=config.FRAMES, help="Frames to simulate")
    parser.add_argument("--fallback", action="store_true", help="Use the built-in TLE if loading fails")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    args = parser.parse_args(argv)

    configure_logging(logging.DEBUG if args.verbose else config.log_level)
    config.TLE_SOURCE = args.source

    window, context = build_context(config)
    logger.info(f"Looking at {LOOK_AT_LATITUDE:.4f}, {LOOK_AT_LONGITUDE:.4f}")

    report = asyncio.run(load(context, config, args.fallback))
    if not report.ok and not len(context):
        print(f"Catalog could not be loaded: {report.fetch.reason}")
        return 1

    print(f"\nLoaded {report.loaded} object(s) at {datetime.now(timezone.utc).isoformat()}:")
    print_positions(context)

    if args.frames > 0:
        simulation = Simulation(context, window, on_report=report_tick)
        simulation.attach()
        simulation.set_enabled(True)
        drawn = window.run(max_frames=args.frames)
        simulation.set_enabled(False)

        print(f"\nAfter {drawn} simulated frame(s):")
        print_positions(context)

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
