"""
Space Debris Tracking Package

Loads a three-line element catalog, propagates every object with SGP4 and
keeps one labelled point per object on a virtual-globe layer up to date.

Modules:
    catalog: 3LE text parsing into an ordered catalog
    fetch: Asynchronous retrieval of catalog text
    propagation: SGP4 propagation to geodetic coordinates
    globe: Headless virtual-globe collaborator (layers, labels, redraws)
    tracker: Catalog loading and the per-frame refresh loop
"""

from spacetrash.catalog import Catalog, OrbitalRecord, parse_catalog
from spacetrash.exceptions import PropagationError, SpacetrashError
from spacetrash.fetch import FetchResult, fetch_catalog_text
from spacetrash.propagation import GeodeticPosition, PropagatedState, propagate_record, refresh
from spacetrash.tracker import (
    CatalogEntry,
    LoadReport,
    Simulation,
    TickReport,
    TrackerContext,
    load_catalog,
    load_text,
    refresh_all,
)

__version__ = "1.0.0"

__all__ = [
    "Catalog",
    "CatalogEntry",
    "FetchResult",
    "GeodeticPosition",
    "LoadReport",
    "OrbitalRecord",
    "PropagatedState",
    "PropagationError",
    "Simulation",
    "SpacetrashError",
    "TickReport",
    "TrackerContext",
    "fetch_catalog_text",
    "load_catalog",
    "load_text",
    "parse_catalog",
    "propagate_record",
    "refresh",
    "refresh_all",
]
