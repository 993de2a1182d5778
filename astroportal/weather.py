"""Pass-through proxy for the observatory weather station feed on ThingSpeak."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Any

import requests

from astroportal.config import PortalConfig
from astroportal.errors import WeatherFetchError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class WeatherReading:
    temperature: float | None
    humidity: float | None
    pressure: float | None
    wind_speed: float | None
    read_at: str | None

    def to_dict(self) -> dict:
        return {
            "temperature": self.temperature,
            "humidity": self.humidity,
            "pressure": self.pressure,
            "windSpeed": self.wind_speed,
            "readAt": self.read_at,
        }


def as_number(value: Any) -> float | None:
    """Finite float or None."""
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return number if math.isfinite(number) else None


class WeatherProxy:
    """Fetches the latest ThingSpeak entry and reshapes it into a WeatherReading."""

    def __init__(
        self,
        url: str,
        *,
        read_key: str = "",
        timeout_seconds: float = 10.0,
        user_agent: str = "astro-portal weather-proxy",
        session: requests.Session | None = None,
    ) -> None:
        self.url = url
        self.read_key = read_key
        self.timeout_seconds = float(timeout_seconds)
        self.session = session or requests.Session()
        self.session.headers.update({"User-Agent": user_agent})

    @classmethod
    def from_config(cls, config: PortalConfig) -> WeatherProxy:
        return cls(
            config.weather_url,
            read_key=config.thingspeak_read_key,
            timeout_seconds=config.weather_timeout,
        )

    def fetch(self) -> WeatherReading:
        """
        Latest reading from the feed.

        Raises:
            WeatherFetchError: network failure, non-2xx status or a body that
                is not JSON.
        """
        params: dict[str, Any] = {"results": 2}
        if self.read_key:
            params["api_key"] = self.read_key
        try:
            resp = self.session.get(self.url, params=params, timeout=self.timeout_seconds)
        except requests.RequestException as e:
            logger.warning("weather feed unreachable: %s", e)
            raise WeatherFetchError(f"ThingSpeak request failed: {e}") from e
        if not resp.ok:
            logger.warning("weather feed returned HTTP %s", resp.status_code)
            raise WeatherFetchError(f"ThingSpeak error {resp.status_code}")
        try:
            data = resp.json()
        except ValueError as e:
            raise WeatherFetchError(f"ThingSpeak returned invalid JSON: {e}") from e
        return parse_feed(data)


def parse_feed(data: Any) -> WeatherReading:
    """Reading from the last entry of a ThingSpeak ``feeds.json`` payload."""
    feeds = data.get("feeds") if isinstance(data, dict) else None
    latest = feeds[-1] if isinstance(feeds, list) and feeds else {}
    if not isinstance(latest, dict):
        latest = {}
    return WeatherReading(
        temperature=as_number(latest.get("field1")),
        humidity=as_number(latest.get("field2")),
        pressure=as_number(latest.get("field3")),
        wind_speed=as_number(latest.get("field4")),
        read_at=latest.get("created_at"),
    )
