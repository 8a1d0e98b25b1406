"""
Clock and location collaborators used by the pointing session.
"""

import abc
from datetime import datetime, timezone
from typing import Optional

from .coordinates import GeographicPosition
from .errors import LocationUnavailableError


class SystemClock:
    """Wall clock in UTC."""

    def now(self) -> datetime:
        return datetime.now(timezone.utc)


class FixedClock:
    """Always reports the same instant."""

    def __init__(self, instant: datetime):
        self.instant = instant

    def now(self) -> datetime:
        return self.instant


class LocationProvider(abc.ABC):
    """
    Source of the observer's geographic position.

    Implementations may need to wait for a fix, so the accessor is a
    coroutine. A provider that has no fix raises LocationUnavailableError;
    it must never fall back to a default position.
    """

    @abc.abstractmethod
    async def get_position(self) -> GeographicPosition:
        """Returns the current position or raises LocationUnavailableError."""


class StaticLocationProvider(LocationProvider):
    """
    Position fixed by configuration or recorded from a one-shot fix.

    Attributes:
        position (GeographicPosition): Last fix, or None if none was recorded.
    """

    def __init__(self, position: Optional[GeographicPosition] = None):
        self.position = position
        self.last_error: Optional[str] = None

    def update(self, position: GeographicPosition) -> None:
        """Records a successful fix."""
        self.position = position
        self.last_error = None

    def fail(self, reason: str) -> None:
        """Records a failed fix attempt. A previous fix is kept."""
        self.last_error = reason

    async def get_position(self) -> GeographicPosition:
        if self.position is None:
            raise LocationUnavailableError(reason=self.last_error or "no fix yet")
        return self.position


def location_from_config(config: dict) -> StaticLocationProvider:
    """
    Builds a location provider from the 'observer' config section.

    Missing latitude or longitude leaves the provider without a fix.
    """
    obs_cfg = config.get("observer") or {}
    lat = obs_cfg.get("latitude")
    lon = obs_cfg.get("longitude")
    if lat is None or lon is None:
        return StaticLocationProvider()
    return StaticLocationProvider(GeographicPosition(float(lat), float(lon)))
