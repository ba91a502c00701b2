"""Shared fixtures for the test suite."""

from datetime import datetime, timezone

ISS_NAME = "ISS (ZARYA)"
ISS_LINE1 = "1 25544U 98067A   23259.57580000  .00012022  00000-0  21844-3 0  9995"
ISS_LINE2 = "2 25544  51.6416 220.9944 0004263 122.0101 312.2755 15.49541986415598"

# Close to the ISS element set epoch (2023-09-16 13:49:09 UTC)
ISS_TIME = datetime(2023, 9, 16, 13, 49, 0, tzinfo=timezone.utc)


def three_le(*names):
    """A 3LE catalog with one ISS element set per name."""
    lines = []
    for name in names:
        lines.extend([name, ISS_LINE1, ISS_LINE2])
    return "\n".join(lines) + "\n"
