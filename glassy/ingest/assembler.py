"""Combine the scraped per-row series into a ForecastIssue."""

from collections.abc import Sequence
from datetime import datetime

from glassy.ingest.errors import MisalignedSeries, stage
from glassy.ingest.fields import WindVector
from glassy.ingest.timestamps import infer_dates, localize
from glassy.models.forecast import (
    DailyForecast,
    ForecastIssue,
    HourlyForecast,
    Swells,
    Wind,
)


def _check_lengths(reference: str, length: int, series: dict[str, Sequence]) -> None:
    for name, values in series.items():
        if len(values) != length:
            raise MisalignedSeries(
                f"{reference} and {name} must have equal number of elements "
                f"({length} != {len(values)})"
            )


def assemble_forecast_issue(
    issued_at: datetime,
    days: Sequence[int],
    hours: Sequence[Sequence[int]],
    ratings: Sequence[Sequence[int]],
    swells: Sequence[Sequence[Swells]],
    wave_energies: Sequence[Sequence[float]],
    winds: Sequence[Sequence[WindVector]],
    wind_states: Sequence[Sequence[str]],
) -> ForecastIssue:
    """Validate that all series line up and build the forecast.

    Every day-level series must have one entry per day, and within each day
    every hour-level series must have one entry per hour. Nothing is built
    until all lengths agree.
    """
    _check_lengths("days", len(days), {
        "hours": hours,
        "ratings": ratings,
        "swells": swells,
        "wave energies": wave_energies,
        "winds": winds,
        "wind states": wind_states,
    })
    for i in range(len(days)):
        with stage(f"day {i}"):
            _check_lengths("hours", len(hours[i]), {
                "ratings": ratings[i],
                "swells": swells[i],
                "wave energies": wave_energies[i],
                "winds": winds[i],
                "wind states": wind_states[i],
            })

    dates = infer_dates(issued_at, days)
    daily = []
    for i, date in enumerate(dates):
        hourly = tuple(
            HourlyForecast(
                timestamp=localize(date.tzinfo, date.replace(tzinfo=None, hour=hour)),
                rating=ratings[i][j],
                swells=swells[i][j],
                wave_energy_kj=wave_energies[i][j],
                wind=Wind(
                    speed_kmh=winds[i][j].speed_kmh,
                    direction_to_degrees=winds[i][j].direction_to_degrees,
                    direction_from_compass=winds[i][j].direction_from_compass,
                    state=wind_states[i][j],
                ),
            )
            for j, hour in enumerate(hours[i])
        )
        daily.append(DailyForecast(date=date, hourly=hourly))

    return ForecastIssue(issued_at=issued_at, daily=tuple(daily))
