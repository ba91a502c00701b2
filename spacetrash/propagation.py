"""
Position Refresher

Computes where a catalog object is at a given instant using the sgp4
library:

1. Parse the element lines into a Satrec
2. Propagate to the requested time (TEME position/velocity, used as ECI)
3. Compute Greenwich Mean Sidereal Time for that time
4. Rotate into the Earth-fixed frame and solve for geodetic coordinates
5. Report latitude/longitude in degrees and height in meters

The functions here keep no state between calls, so the same record and
time always give the same position.
"""

import math
from datetime import datetime, timezone
from typing import Tuple

import numpy as np
from pydantic import BaseModel, ConfigDict
from sgp4.api import Satrec, jday
from sgp4.propagation import gstime

from spacetrash.catalog import OrbitalRecord
from spacetrash.constants import (
    GEODETIC_MAX_ITERATIONS,
    GEODETIC_TOLERANCE_RAD,
    KM_TO_M,
    SGP4_ERROR_CODES,
    WGS84_A_KM,
    WGS84_E2,
)
from spacetrash.exceptions import PropagationError


class GeodeticPosition(BaseModel):
    """Latitude/longitude in degrees, height above the ellipsoid in meters."""

    model_config = ConfigDict(frozen=True)

    latitude: float
    longitude: float
    height: float


class PropagatedState(BaseModel):
    """Full result of propagating one record to one instant."""

    model_config = ConfigDict(frozen=True)

    at_time: datetime
    position_eci_km: Tuple[float, float, float]
    velocity_eci_kms: Tuple[float, float, float]
    gmst_rad: float
    height_km: float
    geodetic: GeodeticPosition


def datetime_to_jd_fr(dt: datetime) -> Tuple[float, float]:
    """
    Convert datetime to Julian date and fraction.

    Naive datetimes are taken to be UTC.
    """
    dt = as_utc(dt)
    second = dt.second + dt.microsecond / 1e6
    return jday(dt.year, dt.month, dt.day, dt.hour, dt.minute, second)


def as_utc(dt: datetime) -> datetime:
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def eci_to_geodetic(
    position_eci: np.ndarray, gmst: float
) -> Tuple[float, float, float]:
    """
    Convert an ECI position to geodetic coordinates on the WGS-84 ellipsoid.

    Args:
        position_eci: Position vector [x, y, z] (km)
        gmst: Greenwich Mean Sidereal Time (radians)

    Returns:
        Tuple of (latitude_rad, longitude_rad, height_km), longitude in
        [-pi, pi]
    """
    cos_g = math.cos(gmst)
    sin_g = math.sin(gmst)
    rotation = np.array([
        [cos_g, sin_g, 0.0],
        [-sin_g, cos_g, 0.0],
        [0.0, 0.0, 1.0],
    ])
    x, y, z = rotation @ position_eci

    lon = math.atan2(y, x)
    # Distance from z-axis
    p = math.hypot(x, y)

    lat = math.atan2(z, p)
    c = 1.0
    for _ in range(GEODETIC_MAX_ITERATIONS):
        sin_lat = math.sin(lat)
        c = 1.0 / math.sqrt(1.0 - WGS84_E2 * sin_lat * sin_lat)
        new_lat = math.atan2(z + WGS84_A_KM * c * WGS84_E2 * sin_lat, p)
        if abs(new_lat - lat) < GEODETIC_TOLERANCE_RAD:
            lat = new_lat
            break
        lat = new_lat

    sin_lat = math.sin(lat)
    c = 1.0 / math.sqrt(1.0 - WGS84_E2 * sin_lat * sin_lat)
    cos_lat = math.cos(lat)
    if abs(cos_lat) > 1e-10:
        height = p / cos_lat - WGS84_A_KM * c
    else:
        # Over a pole
        height = abs(z) / abs(sin_lat) - WGS84_A_KM * c * (1.0 - WGS84_E2)

    return lat, lon, height


def propagate_lines(line1: str, line2: str, at_time: datetime, record=None) -> PropagatedState:
    """
    Propagate a raw element set to at_time.

    Raises:
        PropagationError: if the lines cannot be parsed, sgp4 reports an
            error, or the result is not finite
    """
    try:
        satellite = Satrec.twoline2rv(line1, line2)
    except (ValueError, IndexError, ZeroDivisionError) as e:
        raise PropagationError(
            f"Cannot parse element set: {e}\n{line1}\n{line2}", record=record
        ) from e

    at_time = as_utc(at_time)
    jd, fr = datetime_to_jd_fr(at_time)

    try:
        error, position, velocity = satellite.sgp4(jd, fr)
    except (ValueError, ArithmeticError) as e:
        raise PropagationError(
            f"SGP4 propagation failed: {e}\n{line1}\n{line2}", record=record
        ) from e

    if error != 0:
        message = SGP4_ERROR_CODES.get(error, f"Unknown error code {error}")
        raise PropagationError(
            f"SGP4 error {error}: {message}\n{line1}\n{line2}",
            record=record,
            error_code=error,
        )

    r = np.array(position, dtype=float)
    v = np.array(velocity, dtype=float)
    if not (np.all(np.isfinite(r)) and np.all(np.isfinite(v))):
        raise PropagationError(
            f"SGP4 returned a non-finite state\n{line1}\n{line2}", record=record
        )

    gmst = gstime(jd + fr)
    lat, lon, height_km = eci_to_geodetic(r, gmst)

    if not all(math.isfinite(value) for value in (lat, lon, height_km)):
        raise PropagationError(
            f"Geodetic conversion did not converge\n{line1}\n{line2}", record=record
        )

    geodetic = GeodeticPosition(
        latitude=math.degrees(lat),
        longitude=math.degrees(lon),
        height=height_km * KM_TO_M,
    )

    return PropagatedState(
        at_time=at_time,
        position_eci_km=tuple(float(c) for c in r),
        velocity_eci_kms=tuple(float(c) for c in v),
        gmst_rad=gmst,
        height_km=height_km,
        geodetic=geodetic,
    )


def propagate_record(record: OrbitalRecord, at_time: datetime) -> PropagatedState:
    """Propagate one catalog record, keeping the intermediate state."""
    return propagate_lines(record.line1, record.line2, at_time, record=record)


def refresh(record: OrbitalRecord, at_time: datetime) -> GeodeticPosition:
    """
    Geodetic position of record at at_time.

    Height is in meters. It is the only place the km-to-m factor is
    applied; callers use the value as is.
    """
    return propagate_record(record, at_time).geodetic
