"""
Sidereal Time

Local Sidereal Time from the low-precision J2000 formula:

    LST = 100.46 + 0.985647 * d + long + 15 * UT

where d is the number of whole days since J2000.0, UT is universal time in
decimal hours and long is the observer longitude in degrees (east positive).
The result is accurate to a fraction of a degree, which is well below the
resolution of a 2048 step mount (~0.18 deg/step).
"""

import math
from datetime import datetime, timezone

import ephem

LST_OFFSET_DEG = 100.46
SIDEREAL_DRIFT_DEG_PER_DAY = 0.985647
DEGREES_PER_HOUR = 15.0


def normalize_degrees(angle: float) -> float:
    """Reduces an angle of any magnitude into [0, 360)."""
    if not math.isfinite(angle):
        raise ValueError(f"Cannot normalize non-finite angle {angle!r}")
    reduced = angle % 360.0
    # -1e-17 % 360 rounds to exactly 360.0
    if reduced >= 360.0:
        reduced = 0.0
    return reduced


def to_utc(instant: datetime) -> datetime:
    """Returns a naive UTC datetime. Naive inputs are assumed to be UTC already."""
    if instant.tzinfo is not None:
        instant = instant.astimezone(timezone.utc).replace(tzinfo=None)
    return instant


def days_since_j2000(instant: datetime) -> int:
    """Whole days elapsed since J2000.0 (2000-01-01 12:00 UTC)."""
    return math.floor(ephem.Date(to_utc(instant)) - ephem.J2000)


def universal_time_hours(instant: datetime) -> float:
    """UTC time of day in decimal hours (minute resolution)."""
    utc = to_utc(instant)
    return utc.hour + utc.minute / 60.0


def local_sidereal_time(instant: datetime, longitude: float) -> float:
    """
    Computes Local Sidereal Time.

    Args:
        instant (datetime): Observation time.
        longitude (float): Observer longitude in degrees, east positive.

    Returns:
        float: LST in degrees, within [0, 360).
    """
    lst = (
        LST_OFFSET_DEG
        + SIDEREAL_DRIFT_DEG_PER_DAY * days_since_j2000(instant)
        + longitude
        + DEGREES_PER_HOUR * universal_time_hours(instant)
    )
    return normalize_degrees(lst)
