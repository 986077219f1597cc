"""Output formatters for forecasts and search results."""

import json
from dataclasses import asdict
from datetime import datetime
from typing import Any

from glassy.models.forecast import ForecastIssue
from glassy.models.surf_break import BreakSearchResult


def weekday_label(index: int, date: datetime) -> str:
    """"Today", "Tomorrow", then the weekday name of a forecast day."""
    if index == 0:
        return "Today"
    if index == 1:
        return "Tomorrow"
    return date.strftime("%A")


def date_label(date: datetime) -> str:
    """Day and short month, e.g. "2 Jan"."""
    return f"{date.day} {date.strftime('%b')}"


def hour_label(timestamp: datetime) -> str:
    """12-hour clock hour, e.g. "3 pm"."""
    hour = timestamp.hour % 12 or 12
    return f"{hour} {'am' if timestamp.hour < 12 else 'pm'}"


def format_number(value: float) -> str:
    """Shortest readable number: 10.0 -> "10", 1.25 -> "1.25"."""
    return f"{value:g}"


def format_forecast_text(issue: ForecastIssue, title: str = "") -> str:
    """Plain text forecast for the terminal."""
    lines = []
    if title:
        lines.append(f"=== {title} ===")
    lines.append(f"Issued: {issue.issued_at:%Y-%m-%d %H:%M %Z}")
    for i, day in enumerate(issue.daily):
        lines.append("")
        lines.append(f"{weekday_label(i, day.date)} {date_label(day.date)}")
        for h in day.hourly:
            swell = h.swells.primary
            lines.append(
                f"  {hour_label(h.timestamp):>5}  "
                f"{format_number(swell.wave_height_m)} m "
                f"{format_number(swell.period_s)} s "
                f"{swell.direction_from_compass:<3}  "
                f"{format_number(h.wave_energy_kj)} kJ  "
                f"{format_number(h.wind.speed_kmh)} km/h "
                f"{h.wind.direction_from_compass:<3} {h.wind.state}  "
                f"rating {h.rating}"
            )
    return "\n".join(lines)


def _json_default(value: Any) -> Any:
    if isinstance(value, datetime):
        return value.isoformat()
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def format_forecast_json(issue: ForecastIssue) -> str:
    """JSON forecast for programmatic consumption."""
    return json.dumps(asdict(issue), default=_json_default, indent=2)


def format_search_text(results: list[BreakSearchResult]) -> str:
    if not results:
        return "No surf breaks found"
    return "\n".join(f"{r.id:>8}  {r.name} ({r.country_name})" for r in results)
