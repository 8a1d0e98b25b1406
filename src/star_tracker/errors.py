"""
Star Tracker Exceptions

Exception hierarchy for the pointing pipeline and its collaborators.

    TrackerError
    ├── ConfigurationError
    │   └── InvalidMountProfileError
    ├── BelowHorizonError
    ├── LocationUnavailableError
    ├── CatalogError
    │   └── ObjectNotFoundError
    └── TransportError
"""

from typing import Any, Optional


class TrackerError(Exception):
    """
    Base class for all tracker errors.

    Attributes:
        message (str): Human-readable description.
        details (dict): Additional context, rendered in str().
    """

    def __init__(self, message: str, details: Optional[dict[str, Any]] = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        if self.details:
            detail_str = ", ".join(f"{k}={v}" for k, v in self.details.items())
            return f"{self.message} ({detail_str})"
        return self.message


class ConfigurationError(TrackerError):
    """Invalid or unreadable configuration."""

    def __init__(
        self,
        message: str,
        config_key: Optional[str] = None,
        config_file: Optional[str] = None,
    ):
        details = {}
        if config_key:
            details["config_key"] = config_key
        if config_file:
            details["config_file"] = config_file
        super().__init__(message, details)
        self.config_key = config_key
        self.config_file = config_file


class InvalidMountProfileError(ConfigurationError, ValueError):
    """Mount profile with a non-positive steps-per-revolution."""

    def __init__(self, steps_per_revolution: Any):
        super().__init__(
            f"steps_per_revolution must be a positive integer, got {steps_per_revolution!r}",
            config_key="mount.steps_per_revolution",
        )
        self.steps_per_revolution = steps_per_revolution


class BelowHorizonError(TrackerError):
    """
    Target is below the observer's horizon.

    The computed altitude is kept so callers can report how far below.
    """

    def __init__(self, altitude: float, target: Optional[str] = None):
        details: dict[str, Any] = {"altitude": round(altitude, 3)}
        if target:
            details["target"] = target
        super().__init__("Selected object is below the horizon", details)
        self.altitude = altitude
        self.target = target


class LocationUnavailableError(TrackerError):
    """No geographic position fix is available."""

    def __init__(self, message: str = "Observer location is not available", reason=None):
        details = {"reason": reason} if reason else None
        super().__init__(message, details)
        self.reason = reason


class CatalogError(TrackerError):
    """Base class for catalog errors."""

    pass


class ObjectNotFoundError(CatalogError):
    """Named object is not in the catalog."""

    def __init__(self, object_name: str):
        super().__init__("Object not found in catalog", {"object_name": object_name})
        self.object_name = object_name


class TransportError(TrackerError):
    """Step command could not be delivered to the actuator."""

    def __init__(self, message: str, url: Optional[str] = None, status: Optional[int] = None):
        details: dict[str, Any] = {}
        if url:
            details["url"] = url
        if status is not None:
            details["status"] = status
        super().__init__(message, details)
        self.url = url
        self.status = status
