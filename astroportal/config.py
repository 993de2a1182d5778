"""Portal configuration."""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass, field

from astroportal.errors import ConfigError

THINGSPEAK_FEED_URL = "https://api.thingspeak.com/channels/{channel}/feeds.json"


@dataclass(frozen=True)
class SiteDefaults:
    """
    Fallback observer parameters for visibility queries.

    Attributes
    ----------
    observer_lat : float
        Site latitude in degrees, north positive (default: Melbourne).
    observer_lon : float
        Site longitude in degrees, east positive (default: Melbourne).
    min_altitude_deg : float
        Altitude threshold applied when the caller gives none (default: 15).
    """

    observer_lat: float = -37.8136
    observer_lon: float = 144.9631
    min_altitude_deg: float = 15.0


@dataclass(frozen=True)
class PortalConfig:
    """
    Server configuration, built once at startup and passed to ``create_app``.

    Attributes
    ----------
    host : str
        Interface the HTTP server binds to.
    port : int
        First port tried by the launcher.
    port_attempts : int
        How many consecutive ports to try when the port is taken.
    thingspeak_channel : str
        ThingSpeak channel id of the weather station.
    thingspeak_read_key : str
        Read API key, only needed for private channels.
    weather_timeout : float
        Timeout in seconds for the upstream weather request.
    log_level : str
        Root logging level name.
    site : SiteDefaults
        Observer defaults for visibility queries.
    """

    host: str = "0.0.0.0"
    port: int = 3000
    port_attempts: int = 10
    thingspeak_channel: str = "270748"
    thingspeak_read_key: str = ""
    weather_timeout: float = 10.0
    log_level: str = "INFO"
    site: SiteDefaults = field(default_factory=SiteDefaults)

    @property
    def weather_url(self) -> str:
        return THINGSPEAK_FEED_URL.format(channel=self.thingspeak_channel)

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> PortalConfig:
        """Read configuration from environment variables, keeping defaults for unset ones."""
        env = os.environ if environ is None else environ
        site_defaults = SiteDefaults()
        site = SiteDefaults(
            observer_lat=_env_number(env, "SITE_LAT", site_defaults.observer_lat),
            observer_lon=_env_number(env, "SITE_LON", site_defaults.observer_lon),
            min_altitude_deg=_env_number(env, "MIN_ALTITUDE", site_defaults.min_altitude_deg),
        )
        return cls(
            host=env.get("HOST", cls.host),
            port=int(_env_number(env, "PORT", cls.port)),
            port_attempts=int(_env_number(env, "PORT_ATTEMPTS", cls.port_attempts)),
            thingspeak_channel=env.get("THINGSPEAK_CHANNEL", cls.thingspeak_channel),
            thingspeak_read_key=env.get("THINGSPEAK_READ_KEY", cls.thingspeak_read_key),
            weather_timeout=_env_number(env, "WEATHER_TIMEOUT", cls.weather_timeout),
            log_level=env.get("LOG_LEVEL", cls.log_level).upper(),
            site=site,
        )


def _env_number(env: Mapping[str, str], name: str, default: float) -> float:
    raw = env.get(name)
    if raw is None or raw.strip() == "":
        return float(default)
    try:
        return float(raw)
    except ValueError:
        raise ConfigError(f"{name}={raw!r} is not a number") from None
