"""Which catalog objects are above a minimum altitude for an observer.

Every entry is annotated with its altitude before filtering, so
``annotate_all`` and ``visible_objects`` always agree on the numbers.
"""

from __future__ import annotations

import math
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import datetime, timezone
from decimal import ROUND_HALF_UP, Decimal

from astroportal.catalog import CelestialObject
from astroportal.config import SiteDefaults
from astroportal.errors import InvalidQueryError
from astroportal.horizontal import altitude_degrees
from astroportal.sexagesimal import dec_to_degrees, ra_to_degrees

ALTITUDE_STEP = Decimal("0.1")


@dataclass(frozen=True)
class ObserverContext:
    """Observer position, instant and altitude threshold for one query."""

    latitude_deg: float  # [-90, 90], north positive
    longitude_deg: float  # [-180, 360], east positive
    timestamp_utc: datetime  # tz-aware UTC
    min_altitude_deg: float = 15.0


@dataclass(frozen=True)
class VisibilityResult:
    """A catalog entry with its altitude for one observer context."""

    object: CelestialObject
    altitude_deg: float  # rounded to 0.1
    is_visible: bool

    def to_dict(self) -> dict:
        data = self.object.to_dict()
        data["altitude"] = self.altitude_deg
        data["visible"] = self.is_visible
        return data


def round_altitude(value: float) -> float:
    """Round to one decimal, halves away from zero."""
    return float(Decimal(repr(value)).quantize(ALTITUDE_STEP, rounding=ROUND_HALF_UP))


def build_observer_context(
    site: SiteDefaults,
    lat: float | None = None,
    lon: float | None = None,
    when: datetime | None = None,
    min_altitude: float | None = None,
) -> ObserverContext:
    """Fill in missing query values from ``site`` and validate the result.

    Raises:
        InvalidQueryError: latitude, longitude or threshold out of range.
    """
    lat = site.observer_lat if lat is None else lat
    lon = site.observer_lon if lon is None else lon
    min_altitude = site.min_altitude_deg if min_altitude is None else min_altitude
    if when is None:
        when = datetime.now(timezone.utc)
    elif when.tzinfo is None:
        when = when.replace(tzinfo=timezone.utc)

    if not math.isfinite(lat) or not -90.0 <= lat <= 90.0:
        raise InvalidQueryError("lat", lat, "must be within [-90, 90]")
    if not math.isfinite(lon) or not -180.0 <= lon <= 360.0:
        raise InvalidQueryError("lon", lon, "must be within [-180, 360]")
    if math.isnan(min_altitude):
        raise InvalidQueryError("minAlt", min_altitude)

    return ObserverContext(
        latitude_deg=float(lat),
        longitude_deg=float(lon),
        timestamp_utc=when.astimezone(timezone.utc),
        min_altitude_deg=float(min_altitude),
    )


def annotate(obj: CelestialObject, ctx: ObserverContext) -> VisibilityResult:
    alt = altitude_degrees(
        ctx.timestamp_utc,
        ctx.latitude_deg,
        ctx.longitude_deg,
        ra_to_degrees(obj.ra),
        dec_to_degrees(obj.dec),
    )
    rounded = round_altitude(alt)
    return VisibilityResult(object=obj, altitude_deg=rounded, is_visible=rounded >= ctx.min_altitude_deg)


def annotate_all(catalog: Iterable[CelestialObject], ctx: ObserverContext) -> list[VisibilityResult]:
    """Every catalog entry with its altitude, in catalog order."""
    return [annotate(obj, ctx) for obj in catalog]


def visible_objects(catalog: Iterable[CelestialObject], ctx: ObserverContext) -> list[VisibilityResult]:
    """Entries at or above ``ctx.min_altitude_deg``, in catalog order."""
    return [r for r in annotate_all(catalog, ctx) if r.is_visible]
