"""
Coordinate Transformation

Data types for geographic, equatorial and horizontal coordinates, and the
conversion of an equatorial position into azimuth/altitude for a given
observer and Local Sidereal Time:

    sin(ALT) = sin(DEC)*sin(LAT) + cos(DEC)*cos(LAT)*cos(HA)

                sin(DEC) - sin(ALT)*sin(LAT)
    cos(A)  = --------------------------------
                    cos(ALT)*cos(LAT)

    AZ = A if sin(HA) < 0, otherwise AZ = 360 - A
"""

import math
from dataclasses import dataclass
from typing import Optional

from .errors import BelowHorizonError
from .sidereal import DEGREES_PER_HOUR, normalize_degrees

# Azimuth is undefined within this many degrees of the zenith
ZENITH_TOLERANCE_DEG = 1e-5
# Below this cos(LAT) the observer is at a pole
POLE_EPSILON = 1e-12


def _clamp_unit(value: float) -> float:
    return max(-1.0, min(1.0, value))


@dataclass(frozen=True)
class GeographicPosition:
    """Observer position in degrees, longitude east positive."""

    latitude: float
    longitude: float

    def __post_init__(self):
        if not -90.0 <= self.latitude <= 90.0:
            raise ValueError(f"Latitude out of range [-90, 90]: {self.latitude}")
        if not -180.0 <= self.longitude <= 180.0:
            raise ValueError(f"Longitude out of range [-180, 180]: {self.longitude}")


@dataclass(frozen=True)
class EquatorialCoordinate:
    """
    Catalog position of a fixed object.

    Attributes:
        ra_hour (int): Whole hours of right ascension.
        ra_minute (float): Minutes of right ascension, [0, 60).
        dec (float): Declination in degrees.
    """

    ra_hour: int
    ra_minute: float
    dec: float

    def __post_init__(self):
        if self.ra_hour < 0:
            raise ValueError(f"RA hour must be non-negative: {self.ra_hour}")
        if not 0.0 <= self.ra_minute < 60.0:
            raise ValueError(f"RA minute out of range [0, 60): {self.ra_minute}")
        if not -90.0 <= self.dec <= 90.0:
            raise ValueError(f"Declination out of range [-90, 90]: {self.dec}")

    @classmethod
    def from_hours(cls, ra_hours: float, dec: float) -> "EquatorialCoordinate":
        """Builds a coordinate from decimal RA hours."""
        hour = math.floor(ra_hours)
        return cls(hour, (ra_hours - hour) * 60.0, dec)

    @property
    def ra_hours(self) -> float:
        return self.ra_hour + self.ra_minute / 60.0

    @property
    def ra_degrees(self) -> float:
        return DEGREES_PER_HOUR * self.ra_hours


@dataclass(frozen=True)
class HorizontalCoordinate:
    """Azimuth (from north through east) and altitude, in degrees."""

    azimuth: float
    altitude: float


def hour_angle(lst: float, ra_degrees: float) -> float:
    """Hour angle in degrees, within (0, 360]."""
    ha = normalize_degrees(lst - ra_degrees)
    if ha <= 0.0:
        ha += 360.0
    return ha


def to_horizontal(
    target: EquatorialCoordinate,
    position: GeographicPosition,
    lst: float,
    name: Optional[str] = None,
) -> HorizontalCoordinate:
    """
    Converts an equatorial coordinate to azimuth/altitude.

    Args:
        target (EquatorialCoordinate): Object to point at.
        position (GeographicPosition): Observer location.
        lst (float): Local Sidereal Time in degrees.
        name (str, optional): Target name, used in the rejection only.

    Returns:
        HorizontalCoordinate: Azimuth in [0, 360) and altitude in [0, 90].

    Raises:
        BelowHorizonError: If the computed altitude is negative.
    """
    ha_rad = math.radians(hour_angle(lst, target.ra_degrees))
    dec_rad = math.radians(target.dec)
    lat_rad = math.radians(position.latitude)

    sin_alt = math.sin(dec_rad) * math.sin(lat_rad) + math.cos(dec_rad) * math.cos(
        lat_rad
    ) * math.cos(ha_rad)
    alt_rad = math.asin(_clamp_unit(sin_alt))
    altitude = math.degrees(alt_rad)

    if altitude < 0.0:
        raise BelowHorizonError(altitude, target=name)

    if 90.0 - altitude < ZENITH_TOLERANCE_DEG or abs(math.cos(lat_rad)) < POLE_EPSILON:
        # Azimuth is undefined at the zenith and for an observer at a pole
        return HorizontalCoordinate(0.0, altitude)

    denominator = math.cos(alt_rad) * math.cos(lat_rad)
    cos_a = (math.sin(dec_rad) - math.sin(alt_rad) * math.sin(lat_rad)) / denominator
    a_deg = math.degrees(math.acos(_clamp_unit(cos_a)))

    azimuth = a_deg if math.sin(ha_rad) < 0 else 360.0 - a_deg
    return HorizontalCoordinate(normalize_degrees(azimuth), altitude)
