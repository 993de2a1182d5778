"""Julian Date and Greenwich mean sidereal time."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

UNIX_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)
UNIX_EPOCH_JD = 2440587.5
MS_PER_DAY = 86400000.0

J2000_JD = 2451545.0
DAYS_PER_CENTURY = 36525.0


def julian_date(instant: datetime) -> float:
    """Julian Date of an instant, at millisecond resolution.

    Naive datetimes are taken as UTC.
    """
    if instant.tzinfo is None:
        instant = instant.replace(tzinfo=timezone.utc)
    epoch_ms = (instant - UNIX_EPOCH) // timedelta(milliseconds=1)
    return epoch_ms / MS_PER_DAY + UNIX_EPOCH_JD


def greenwich_sidereal_time(jd: float) -> float:
    """
    Greenwich mean sidereal time in degrees, in [0, 360).

    IAU 1982 polynomial in Julian centuries since J2000.0. The double
    reduction keeps the result in range even when the first modulo lands
    on 360.0 through rounding.
    """
    days = jd - J2000_JD
    t = days / DAYS_PER_CENTURY
    theta = (
        280.46061837
        + 360.98564736629 * days
        + 0.000387933 * t * t
        - t * t * t / 38710000.0
    )
    return ((theta % 360.0) + 360.0) % 360.0
