"""Error taxonomy for the portal.

The pure coordinate code never raises these; they are raised at the edges
(configuration, request parsing, catalog lookup, upstream weather feed) and
translated into JSON responses by the server.
"""

from __future__ import annotations


class PortalError(Exception):
    """Base class for portal errors."""


class ConfigError(PortalError):
    """Raised when a configuration value cannot be interpreted."""


class InvalidQueryError(PortalError, ValueError):
    """Raised when a request parameter or body field is malformed."""

    def __init__(self, field: str, value: object, reason: str = "is not a valid number") -> None:
        self.field = field
        self.value = value
        super().__init__(f"{field}={value!r} {reason}")


class ObjectNotFoundError(PortalError, KeyError):
    """Raised when a catalog id is unknown."""

    def __init__(self, object_id: object) -> None:
        self.object_id = object_id
        super().__init__(object_id)

    def __str__(self) -> str:
        return "Object not found"


class WeatherFetchError(PortalError):
    """Raised when the upstream weather feed cannot be read."""
