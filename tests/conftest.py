from __future__ import annotations

from datetime import datetime, timezone

import pytest

from astroportal.catalog import CatalogStore
from astroportal.config import PortalConfig
from astroportal.errors import WeatherFetchError
from astroportal.weather import WeatherReading

# JD 2451545.0 exactly, where GST is the polynomial's constant term
J2000_NOON = datetime(2000, 1, 1, 12, 0, 0, tzinfo=timezone.utc)

MELBOURNE = (-37.8136, 144.9631)


class StubWeather:
    def __init__(self, reading: WeatherReading | None = None, error: str | None = None) -> None:
        self.reading = reading
        self.error = error
        self.calls = 0

    def fetch(self) -> WeatherReading:
        self.calls += 1
        if self.error is not None:
            raise WeatherFetchError(self.error)
        assert self.reading is not None
        return self.reading


@pytest.fixture
def catalog() -> CatalogStore:
    return CatalogStore()


@pytest.fixture
def stub_weather() -> StubWeather:
    return StubWeather(
        WeatherReading(
            temperature=14.2,
            humidity=71.0,
            pressure=1013.4,
            wind_speed=3.1,
            read_at="2024-05-01T10:00:00Z",
        )
    )


@pytest.fixture
def app(catalog: CatalogStore, stub_weather: StubWeather):
    from server import create_app

    app = create_app(PortalConfig(), catalog=catalog, weather=stub_weather)
    app.config["TESTING"] = True
    return app


@pytest.fixture
def client(app):
    return app.test_client()
