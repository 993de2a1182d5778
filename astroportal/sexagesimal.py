"""Sexagesimal RA/Dec strings to decimal degrees.

Catalog coordinates look like ``"00h 42m 44s"`` and ``"+41° 16′ 09″"``. Any
separators are accepted between the three numeric groups. A string that does
not contain three groups maps to 0 degrees instead of raising, so one bad
catalog entry cannot abort a whole visibility query.
"""

from __future__ import annotations

import logging
import re

logger = logging.getLogger(__name__)

RA_PATTERN = re.compile(r"(\d+)\D+(\d+)\D+(\d+(?:\.\d+)?)")
DEC_PATTERN = re.compile(r"([+\-]?\d+)\D+(\d+)\D+(\d+(?:\.\d+)?)")

UNICODE_MINUS = "−"


def ra_to_degrees(text: str) -> float:
    """Right ascension ``HHh MMm SSs`` to degrees (15 degrees per hour)."""
    match = RA_PATTERN.search(text or "")
    if match is None:
        logger.debug("unparseable right ascension %r, using 0", text)
        return 0.0
    hours, minutes, seconds = (float(g) for g in match.groups())
    return (hours + minutes / 60.0 + seconds / 3600.0) * 15.0


def dec_to_degrees(text: str) -> float:
    """Declination ``±DD° MM′ SS″`` to signed degrees.

    The sign comes from a leading ``-`` on the degrees group, not from its
    numeric value, so ``"-00° 30′ 00″"`` is -0.5.
    """
    normalized = (text or "").replace(UNICODE_MINUS, "-")
    match = DEC_PATTERN.search(normalized)
    if match is None:
        logger.debug("unparseable declination %r, using 0", text)
        return 0.0
    degrees_group, minutes, seconds = match.groups()
    sign = -1.0 if degrees_group.startswith("-") else 1.0
    degrees = abs(float(degrees_group))
    return sign * (degrees + float(minutes) / 60.0 + float(seconds) / 3600.0)
