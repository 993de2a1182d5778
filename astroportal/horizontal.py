"""Equatorial to horizontal altitude for a ground observer.

Plain spherical trigonometry: no refraction, parallax, precession, nutation
or proper motion.
"""

from __future__ import annotations

import math
from datetime import datetime

from astroportal.sidereal import greenwich_sidereal_time, julian_date


def clamp(x: float, lo: float, hi: float) -> float:
    return lo if x < lo else hi if x > hi else x


def local_sidereal_time(gst_deg: float, lon_deg: float) -> float:
    """LST in degrees from GST and east-positive longitude."""
    return (gst_deg + lon_deg + 360.0) % 360.0


def hour_angle(lst_deg: float, ra_deg: float) -> float:
    """Hour angle in degrees, folded into [-180, 180)."""
    return ((lst_deg - ra_deg + 540.0) % 360.0) - 180.0


def altitude_degrees(
    instant: datetime,
    lat_deg: float,
    lon_deg: float,
    ra_deg: float,
    dec_deg: float,
) -> float:
    """Altitude above the horizon in degrees, in [-90, 90]."""
    gst = greenwich_sidereal_time(julian_date(instant))
    lst = local_sidereal_time(gst, lon_deg)
    ha = math.radians(hour_angle(lst, ra_deg))
    dec = math.radians(dec_deg)
    lat = math.radians(lat_deg)

    sin_alt = math.sin(dec) * math.sin(lat) + math.cos(dec) * math.cos(lat) * math.cos(ha)
    return math.degrees(math.asin(clamp(sin_alt, -1.0, 1.0)))
