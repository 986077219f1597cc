"""Shared test fixtures."""

from pathlib import Path

import pytest
import yaml

from glassy.config.schema import AppConfig
from glassy.ingest.timezones import MappingResolver
from glassy.ingest.tree import parse_html


@pytest.fixture
def default_config() -> AppConfig:
    """Return default AppConfig."""
    return AppConfig()


@pytest.fixture
def config_yaml_path(tmp_path: Path) -> Path:
    """Write a minimal valid config YAML and return its path."""
    data = {
        "scraper": {"base_url": "https://test-surf.example.com", "timeout_seconds": 2.5},
        "server": {"port": 9090, "cache_max_age_seconds": 60},
        "logging": {"level": "DEBUG"},
    }
    path = tmp_path / "test_config.yaml"
    with open(path, "w") as f:
        yaml.dump(data, f)
    return path


@pytest.fixture
def fixtures_dir() -> Path:
    """Return the path to the test fixtures directory."""
    return Path(__file__).parent / "fixtures"


@pytest.fixture
def resolver() -> MappingResolver:
    """Abbreviation table covering the zones used by the fixtures."""
    return MappingResolver({
        "PDT": ["America/Los_Angeles"],
        "PST": ["America/Los_Angeles"],
        "WEST": ["Atlantic/Canary", "Atlantic/Madeira"],
        "BOGUS": ["Not/A_Zone"],
    })


@pytest.fixture
def forecast_html(fixtures_dir: Path) -> str:
    return (fixtures_dir / "forecast_latest.html").read_text()


@pytest.fixture
def break_html(fixtures_dir: Path) -> str:
    return (fixtures_dir / "break_page.html").read_text()


@pytest.fixture
def forecast_document(forecast_html: str):
    return parse_html(forecast_html)
