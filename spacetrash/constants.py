"""
Constants and Reference Data

Ellipsoid parameters and unit factors used by the position refresher, and
the meaning of the error codes returned by the sgp4 library.
"""

# WGS-84 ellipsoid (km)
WGS84_A_KM: float = 6378.137
WGS84_B_KM: float = 6356.7523142
WGS84_F: float = (WGS84_A_KM - WGS84_B_KM) / WGS84_A_KM
WGS84_E2: float = 2.0 * WGS84_F - WGS84_F * WGS84_F

# Height is produced in km by sgp4 and displayed in meters
KM_TO_M: float = 1000.0

# Iterations for the geodetic latitude solution
GEODETIC_MAX_ITERATIONS: int = 20
GEODETIC_TOLERANCE_RAD: float = 1e-12

# SGP4 error code meanings
SGP4_ERROR_CODES = {
    0: "No error",
    1: "Mean eccentricity < 0.0 or > 1.0",
    2: "Mean motion < 0.0",
    3: "Perturbed eccentricity < 0.0 or > 1.0",
    4: "Semi-latus rectum < 0.0",
    5: "Satellite has decayed",
    6: "Satellite has decayed (low altitude)",
}
