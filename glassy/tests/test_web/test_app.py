"""Tests for the web front end with a mocked surf-forecast.com client."""

from datetime import datetime
from unittest.mock import MagicMock

import httpx
import pytest
import pytz
from fastapi.testclient import TestClient

from glassy.config.schema import AppConfig, ServerConfig
from glassy.ingest.errors import BreakNotFound, StructureNotFound, stage
from glassy.ingest.surf_forecast_client import SurfForecastClient
from glassy.models.forecast import (
    DailyForecast,
    ForecastIssue,
    HourlyForecast,
    Swell,
    Swells,
    Wind,
)
from glassy.models.surf_break import Break, BreakSearchResult
from glassy.web import create_app

LA = pytz.timezone("America/Los_Angeles")


def _issue() -> ForecastIssue:
    def hour(h: int) -> HourlyForecast:
        return HourlyForecast(
            timestamp=LA.localize(datetime(2026, 10, 2, h)),
            rating=3,
            swells=Swells(primary=Swell(11.0, 250.0, "WSW", 1.8)),
            wave_energy_kj=512.0,
            wind=Wind(speed_kmh=9.0, direction_to_degrees=90.0, direction_from_compass="W", state="glass"),
        )

    return ForecastIssue(
        issued_at=LA.localize(datetime(2026, 10, 2, 5)),
        daily=(
            DailyForecast(date=LA.localize(datetime(2026, 10, 2)), hourly=(hour(7), hour(15))),
            DailyForecast(date=LA.localize(datetime(2026, 10, 3)), hourly=(hour(7),)),
        ),
    )


@pytest.fixture
def surf_client() -> MagicMock:
    return MagicMock(spec=SurfForecastClient)


@pytest.fixture
def web(surf_client: MagicMock) -> TestClient:
    config = AppConfig(server=ServerConfig(cache_max_age_seconds=120))
    return TestClient(create_app(config, client=surf_client))


class TestIndex:
    def test_redirects_to_search(self, web: TestClient):
        resp = web.get("/", follow_redirects=False)
        assert resp.status_code == 301
        assert resp.headers["location"] == "/search"


class TestSearch:
    def test_blank_query(self, web: TestClient, surf_client: MagicMock):
        resp = web.get("/search", params={"q": "   "})
        assert resp.status_code == 200
        assert "search-bar" in resp.text
        assert "No surf spots found" not in resp.text
        surf_client.search_breaks.assert_not_called()

    def test_results(self, web: TestClient, surf_client: MagicMock):
        surf_client.search_breaks.return_value = [
            BreakSearchResult(id=123, name="Break A", country_name="Country"),
        ]
        resp = web.get("/search", params={"q": " break a "})
        assert resp.status_code == 200
        assert 'href="/breaks/123/forecasts/latest"' in resp.text
        assert "Break A" in resp.text
        assert resp.headers["cache-control"] == "max-age=120"
        surf_client.search_breaks.assert_called_once_with("break a")

    def test_no_results(self, web: TestClient, surf_client: MagicMock):
        surf_client.search_breaks.return_value = []
        resp = web.get("/search", params={"q": "nowhere"})
        assert "No surf spots found" in resp.text

    def test_upstream_failure(self, web: TestClient, surf_client: MagicMock):
        surf_client.search_breaks.side_effect = httpx.ConnectError("refused")
        resp = web.get("/search", params={"q": "break"})
        assert resp.status_code == 500
        assert "refused" in resp.text


class TestLatestForecast:
    def test_renders(self, web: TestClient, surf_client: MagicMock):
        surf_client.get_break.return_value = Break(
            id=42, slug="Test-Break", name="Test Break", country_name="USA - California"
        )
        surf_client.latest_forecast_issue.return_value = _issue()

        resp = web.get("/breaks/42/forecasts/latest")
        assert resp.status_code == 200
        assert "Test Break" in resp.text
        assert "USA - California" in resp.text
        assert "Today" in resp.text
        assert "Tomorrow" in resp.text
        assert "2 Oct" in resp.text
        assert "3 pm" in resp.text
        assert "1.8" in resp.text
        assert "glass" in resp.text
        assert resp.headers["cache-control"] == "max-age=120"
        surf_client.get_break.assert_called_once_with(42)
        surf_client.latest_forecast_issue.assert_called_once_with("Test-Break")

    def test_non_numeric_id(self, web: TestClient, surf_client: MagicMock):
        resp = web.get("/breaks/pipeline/forecasts/latest")
        assert resp.status_code == 400
        surf_client.get_break.assert_not_called()

    def test_superscript_digit_id(self, web: TestClient, surf_client: MagicMock):
        resp = web.get("/breaks/%C2%B2/forecasts/latest")
        assert resp.status_code == 400
        surf_client.get_break.assert_not_called()

    def test_unknown_break(self, web: TestClient, surf_client: MagicMock):
        surf_client.get_break.side_effect = BreakNotFound("surf break not found")
        resp = web.get("/breaks/42/forecasts/latest")
        assert resp.status_code == 404

    def test_scrape_failure(self, web: TestClient, surf_client: MagicMock):
        surf_client.get_break.return_value = Break(
            id=42, slug="Test-Break", name="Test Break", country_name="USA"
        )

        def fail(slug):
            with stage("forecast page"), stage("table"):
                raise StructureNotFound("could not find table node")

        surf_client.latest_forecast_issue.side_effect = fail
        resp = web.get("/breaks/42/forecasts/latest")
        assert resp.status_code == 500
        assert resp.text == "forecast page: table: could not find table node"
