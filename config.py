"""
Tracker Configuration

Runtime settings for the debris tracker and fallback TLE data.

Settings are read from environment variables when TrackerConfig is
created:

    SPACETRASH_TLE_SOURCE     URL or file path of the 3LE catalog
    SPACETRASH_TLE_LAYOUT     "3le" (default) or "2le"
    SPACETRASH_FETCH_TIMEOUT  HTTP timeout in seconds
    SPACETRASH_LABEL          Label field for each point: "id" or "name"
    SPACETRASH_FRAMES         Frames to draw with the simulation enabled
    SPACETRASH_LOG_LEVEL      Logging level name (INFO, DEBUG, ...)

Fallback TLE Data:
    Hardcoded ISS element set for demonstrations and testing when no
    catalog is reachable. Positions drift quickly away from the epoch
    (2023-09-16), so propagate close to it.

Sources for current element sets:
    - Space-Track.org (requires free registration)
    - CelesTrak.org (public access)
"""

import logging
import os
from typing import Any, Dict

DEFAULT_TLE_SOURCE: str = "./trash-data/space-track-full-3le.txt"
DEFAULT_FETCH_TIMEOUT_S: float = 30.0
DEFAULT_FRAMES: int = 10

# Fallback ISS TLE for demonstrations and testing
FALLBACK_TLE: Dict[str, Any] = {
    'name': 'ISS (ZARYA)',
    'norad_id': 25544,
    'line1': '1 25544U 98067A   23259.57580000  .00012022  00000-0  21844-3 0  9995',
    'line2': '2 25544  51.6416 220.9944 0004263 122.0101 312.2755 15.49541986415598',
    'epoch': '2023-09-16T13:49:09Z',
}


def fallback_catalog_text() -> str:
    """The fallback TLE as a one-object 3LE catalog."""
    return "\n".join([FALLBACK_TLE['name'], FALLBACK_TLE['line1'], FALLBACK_TLE['line2']])


class TrackerConfig:
    """Environment-driven tracker settings."""

    def __init__(self, environ=None):
        env = os.environ if environ is None else environ
        self.TLE_SOURCE = env.get('SPACETRASH_TLE_SOURCE', DEFAULT_TLE_SOURCE)
        self.TLE_LAYOUT = env.get('SPACETRASH_TLE_LAYOUT', '3le').lower()
        self.FETCH_TIMEOUT = float(env.get('SPACETRASH_FETCH_TIMEOUT', str(DEFAULT_FETCH_TIMEOUT_S)))
        self.LABEL = env.get('SPACETRASH_LABEL', 'id').lower()
        self.FRAMES = int(env.get('SPACETRASH_FRAMES', str(DEFAULT_FRAMES)))
        self.LOG_LEVEL = env.get('SPACETRASH_LOG_LEVEL', 'INFO').upper()

        if self.TLE_LAYOUT not in ('3le', '2le'):
            raise ValueError(f"SPACETRASH_TLE_LAYOUT must be '3le' or '2le', got {self.TLE_LAYOUT!r}")
        if self.LABEL not in ('id', 'name'):
            raise ValueError(f"SPACETRASH_LABEL must be 'id' or 'name', got {self.LABEL!r}")
        if self.FRAMES < 0:
            raise ValueError("SPACETRASH_FRAMES must not be negative")

    @property
    def log_level(self) -> int:
        return getattr(logging, self.LOG_LEVEL, logging.INFO)
