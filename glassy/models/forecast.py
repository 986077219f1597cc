"""Surf forecast data models."""

from dataclasses import dataclass, field
from datetime import datetime


@dataclass(frozen=True)
class Swell:
    period_s: float = 0.0
    direction_to_degrees: float = 0.0
    direction_from_compass: str = ""
    wave_height_m: float = 0.0


@dataclass(frozen=True)
class Swells:
    """Primary swell plus any secondary swells of a single hour.

    A cell without any swell entries decodes to Swells() with a zeroed primary.
    """

    primary: Swell = field(default_factory=Swell)
    secondary: tuple[Swell, ...] = ()


@dataclass(frozen=True)
class Wind:
    speed_kmh: float
    direction_to_degrees: float
    direction_from_compass: str
    state: str


@dataclass(frozen=True)
class HourlyForecast:
    timestamp: datetime
    rating: int  # 0-10, or 11 for "!" (rough conditions)
    swells: Swells
    wave_energy_kj: float
    wind: Wind


@dataclass(frozen=True)
class DailyForecast:
    date: datetime  # local midnight
    hourly: tuple[HourlyForecast, ...]


@dataclass(frozen=True)
class ForecastIssue:
    issued_at: datetime  # surf break's local timezone
    daily: tuple[DailyForecast, ...]
