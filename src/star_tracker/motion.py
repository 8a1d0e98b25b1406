"""
Motion Planning

Discretizes the angular move between two horizontal coordinates into whole
stepper motor pulses per axis.
"""

import math
from dataclasses import dataclass

from .coordinates import HorizontalCoordinate
from .errors import InvalidMountProfileError

DEFAULT_STEPS_PER_REVOLUTION = 2048


@dataclass(frozen=True)
class MountProfile:
    """
    Mechanical resolution of the mount.

    Attributes:
        steps_per_revolution (int): Motor pulses per full 360 degree turn.
        shortest_path (bool): Wrap the azimuth move across 0/360 instead of
            travelling the linear difference.
    """

    steps_per_revolution: int = DEFAULT_STEPS_PER_REVOLUTION
    shortest_path: bool = False

    def __post_init__(self):
        steps = self.steps_per_revolution
        if isinstance(steps, bool) or not isinstance(steps, int) or steps <= 0:
            raise InvalidMountProfileError(steps)

    @property
    def degrees_per_step(self) -> float:
        return 360.0 / self.steps_per_revolution


@dataclass(frozen=True)
class StepCommand:
    """Signed pulse counts for one repositioning of both axes."""

    azimuth_steps: int
    altitude_steps: int

    def as_query_params(self) -> dict:
        """Wire representation used by the actuator /steps endpoint."""
        return {
            "azimuthMotorSteps": self.azimuth_steps,
            "altitudeMotorSteps": self.altitude_steps,
        }


def wrap_delta(delta: float) -> float:
    """Folds an angular difference into [-180, 180)."""
    return (delta + 180.0) % 360.0 - 180.0


def degrees_to_steps(delta: float, profile: MountProfile) -> int:
    """
    Converts an angular move to pulses, rounding towards +inf.

    Ceiling keeps the result deterministic but biases any fractional residue
    by up to one step in the positive direction.
    """
    return math.ceil(delta / profile.degrees_per_step)


def plan_steps(
    previous: HorizontalCoordinate,
    target: HorizontalCoordinate,
    profile: MountProfile,
) -> StepCommand:
    """
    Computes the step command moving the mount from previous to target.

    Args:
        previous (HorizontalCoordinate): Where the mount points now.
        target (HorizontalCoordinate): Where it should point.
        profile (MountProfile): Mount resolution and azimuth policy.

    Returns:
        StepCommand: Signed steps per axis.
    """
    delta_az = target.azimuth - previous.azimuth
    if profile.shortest_path:
        delta_az = wrap_delta(delta_az)
    delta_alt = target.altitude - previous.altitude

    return StepCommand(
        degrees_to_steps(delta_az, profile), degrees_to_steps(delta_alt, profile)
    )
