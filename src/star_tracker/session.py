"""
Pointing Session

Holds the observer's collaborators and the mount's last known horizontal
coordinate, and turns "point at this object" requests into step commands.

States:
    IDLE     no pointing done yet, mount position unknown
    POINTED  last commanded coordinate is known
"""

import asyncio
from datetime import datetime
from enum import Enum
from typing import Optional

from .coordinates import (
    EquatorialCoordinate,
    GeographicPosition,
    HorizontalCoordinate,
    to_horizontal,
)
from .motion import MountProfile, StepCommand, plan_steps
from .providers import LocationProvider, SystemClock
from .sidereal import local_sidereal_time


class SessionState(Enum):
    IDLE = "idle"
    POINTED = "pointed"


def compute(
    target: EquatorialCoordinate,
    position: GeographicPosition,
    instant: datetime,
    name: Optional[str] = None,
) -> HorizontalCoordinate:
    """Horizontal coordinate of target for one position/time snapshot."""
    lst = local_sidereal_time(instant, position.longitude)
    return to_horizontal(target, position, lst, name=name)


class PointingSession:
    """
    Orchestrates sidereal time, coordinate transform and motion planning.

    Requests are serialized: each one snapshots position and time, runs to
    completion and only then updates the stored coordinate, so consecutive
    step commands always chain from the previous target.
    """

    def __init__(
        self,
        location: LocationProvider,
        clock=None,
        profile: Optional[MountProfile] = None,
    ):
        self.location = location
        self.clock = clock or SystemClock()
        self.profile = profile or MountProfile()
        self.state = SessionState.IDLE
        self.current: Optional[HorizontalCoordinate] = None
        self.lock = asyncio.Lock()

    async def point_at(
        self, target: EquatorialCoordinate, name: Optional[str] = None
    ) -> StepCommand:
        """
        Computes the step command that brings the mount onto target.

        Args:
            target (EquatorialCoordinate): Object to point at.
            name (str, optional): Object name for diagnostics.

        Returns:
            StepCommand: Relative move; (0, 0) on the first pointing.

        Raises:
            LocationUnavailableError: No position fix is available.
            BelowHorizonError: Target is below the horizon. The stored
                coordinate is left unchanged.
        """
        async with self.lock:
            position = await self.location.get_position()
            instant = self.clock.now()

            horizontal = compute(target, position, instant, name=name)

            # Unknown mount position: assume it already points at the target
            previous = self.current if self.state is SessionState.POINTED else horizontal
            command = plan_steps(previous, horizontal, self.profile)

            self.current = horizontal
            self.state = SessionState.POINTED
            return command

    def reset(self) -> None:
        """Forgets the mount position."""
        self.current = None
        self.state = SessionState.IDLE
