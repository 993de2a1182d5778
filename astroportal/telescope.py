"""Simulated telescope pointing and imaging state.

The controller owns the current ``TelescopeState``; every change replaces the
whole record, nothing is edited in place.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, replace
from typing import Any

from astroportal.catalog import CatalogStore, CelestialObject
from astroportal.errors import InvalidQueryError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TelescopeState:
    azimuth_deg: float
    elevation_deg: float
    ra: str
    dec: str
    target_name: str
    field_of_view: str
    exposure_seconds: float = 30.0
    filter: str = "Luminance"
    binning: str = "1x1"
    gain: float = 100.0
    region_of_interest: Any = None
    tracking_active: bool = True

    @classmethod
    def pointed_at(cls, obj: CelestialObject, **kwargs: Any) -> TelescopeState:
        return cls(
            azimuth_deg=kwargs.pop("azimuth_deg", 127.5),
            elevation_deg=kwargs.pop("elevation_deg", 35.2),
            ra=obj.ra,
            dec=obj.dec,
            target_name=obj.name,
            field_of_view=obj.fov,
            **kwargs,
        )

    def to_dict(self) -> dict:
        """Wire format of the pointing/imaging record (tracking flag excluded)."""
        return {
            "az": self.azimuth_deg,
            "el": self.elevation_deg,
            "ra": self.ra,
            "dec": self.dec,
            "target": self.target_name,
            "exposure": self.exposure_seconds,
            "filter": self.filter,
            "binning": self.binning,
            "gain": self.gain,
            "roi": self.region_of_interest,
            "fov": self.field_of_view,
        }


class TelescopeController:
    """Single writer for the telescope state."""

    def __init__(self, catalog: CatalogStore, state: TelescopeState | None = None) -> None:
        self._catalog = catalog
        self._state = state if state is not None else TelescopeState.pointed_at(catalog.first())

    @property
    def state(self) -> TelescopeState:
        return self._state

    def status(self) -> dict:
        return {**self._state.to_dict(), "trackingActive": self._state.tracking_active}

    def configure(self, settings: dict) -> TelescopeState:
        """Apply the imaging settings present in ``settings``; absent ones are left alone."""
        changes: dict[str, Any] = {}
        if settings.get("exposure") is not None:
            changes["exposure_seconds"] = _as_float("exposure", settings["exposure"])
        if settings.get("filter"):
            changes["filter"] = str(settings["filter"])
        if settings.get("binning"):
            changes["binning"] = str(settings["binning"])
        if settings.get("gain") is not None:
            changes["gain"] = _as_float("gain", settings["gain"])
        if settings.get("tracking") is not None:
            changes["tracking_active"] = bool(settings["tracking"])
        roi = settings.get("roi")
        # containers count as set even when empty
        if isinstance(roi, (dict, list)) or roi:
            changes["region_of_interest"] = roi

        self._state = replace(self._state, **changes)
        if changes:
            logger.info("telescope config updated: %s", ", ".join(sorted(changes)))
        return self._state

    def point_at(self, object_id: str) -> TelescopeState:
        """Slew to a catalog object and resume tracking.

        Raises:
            ObjectNotFoundError: ``object_id`` is not in the catalog.
        """
        obj = self._catalog.get(object_id)
        self._state = replace(
            self._state,
            ra=obj.ra,
            dec=obj.dec,
            target_name=obj.name,
            field_of_view=obj.fov,
            tracking_active=True,
        )
        logger.info("telescope target set to %s (%s %s)", obj.id, obj.ra, obj.dec)
        return self._state


def _as_float(field: str, value: Any) -> float:
    if isinstance(value, bool):
        raise InvalidQueryError(field, value)
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise InvalidQueryError(field, value) from None
    if not math.isfinite(number):
        raise InvalidQueryError(field, value)
    return number
