"""Exception types raised by the spacetrash package."""


class SpacetrashError(Exception):
    """Base class for spacetrash errors."""


class PropagationError(SpacetrashError, RuntimeError):
    """
    Raised when an element set cannot be propagated to a geodetic position.

    Attributes:
        record: The OrbitalRecord that failed (may be None for raw lines)
        error_code: SGP4 error code, or None when the failure happened
            before or after the sgp4 call
    """

    def __init__(self, message, record=None, error_code=None):
        super().__init__(message)
        self.record = record
        self.error_code = error_code
