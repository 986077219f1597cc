"""Parsers for individual forecast table cells.

Each scrape_* function reads one cell of one data series and either returns a
typed value or raises FieldParseError. Nothing is defaulted on bad input.
"""

import json
import math
from dataclasses import dataclass
from datetime import datetime
from typing import Any

from glassy.ingest.errors import FieldParseError
from glassy.ingest.timestamps import parse_hour
from glassy.ingest.tree import (
    Tree,
    collect_text,
    find_all,
    find_first,
    first_child,
    has_class,
    has_class_containing,
    text_of,
)
from glassy.models.forecast import Swell, Swells

EXTREME_RATING = 11
MAX_RATING = 10


@dataclass(frozen=True)
class WindVector:
    """Wind reading of a single hour, before its state is attached."""

    speed_kmh: float
    direction_to_degrees: float
    direction_from_compass: str


def _parse_float(s: str) -> float:
    try:
        value = float(s)
    except ValueError:
        raise FieldParseError(f"not float: {s!r}") from None
    if not math.isfinite(value):
        raise FieldParseError(f"not finite: {s!r}")
    return value


def _require_attribute(tree: Tree, node: Any, name: str) -> str:
    value = tree.attribute(node, name)
    if value is None:
        raise FieldParseError(f"could not find {name} attribute")
    return value


def _require_text(tree: Tree, node: Any, what: str) -> str:
    text = text_of(tree, node)
    if text is None:
        raise FieldParseError(f"could not find {what} text node")
    return text


# Days


def parse_day_name(s: str) -> int:
    """Day of month from a day name attribute such as "Mon_02"."""
    try:
        return datetime.strptime(s, "%a_%d").day
    except ValueError:
        raise FieldParseError(f"could not parse day name attribute: {s!r}") from None


def scrape_day(tree: Tree, cell: Any) -> int:
    return parse_day_name(_require_attribute(tree, cell, "data-day-name"))


# Hours


def scrape_hour(tree: Tree, cell: Any) -> int:
    values = find_all(tree, cell, has_class("forecast-table__value"))
    if len(values) != 2:
        raise FieldParseError(f"unexpected table values: found {len(values)}, want 2")
    hour_text = _require_text(tree, values[0], "hour")
    period_text = _require_text(tree, values[1], "clock period")
    return parse_hour(hour_text, period_text)


# Ratings


def parse_rating(s: str) -> int:
    # Rough conditions are rated "!" rather than with a number
    if s == "!":
        return EXTREME_RATING
    try:
        rating = int(s)
    except ValueError:
        raise FieldParseError(f"not integer: {s!r}") from None
    if rating < 0 or rating > MAX_RATING:
        raise FieldParseError(f"invalid rating: {s!r}")
    return rating


def scrape_rating(tree: Tree, cell: Any) -> int:
    node = find_first(tree, cell, has_class_containing("star-rating__rating"))
    if node is None:
        raise FieldParseError("could not find rating node")
    return parse_rating(_require_text(tree, node, "rating").strip())


# Swells


def _swell_number(entry: dict, key: str, low: float, high: float | None = None) -> float:
    value = entry.get(key, 0)
    if isinstance(value, bool) or not isinstance(value, int | float):
        raise FieldParseError(f"swell {key} not a number: {value!r}")
    if not math.isfinite(value) or value < low or (high is not None and value > high):
        raise FieldParseError(f"invalid swell {key}: {value!r}")
    return float(value)


def decode_swells(payload: str) -> Swells:
    """Decode a data-swell-state JSON array into primary and secondary swells.

    Null entries and empty objects are skipped. An array without any entries gives
    the empty Swells().
    """
    try:
        entries = json.loads(payload)
    except ValueError as e:
        raise FieldParseError(f"could not unmarshal swells: {e}") from None
    if not isinstance(entries, list):
        raise FieldParseError(f"swells payload is not an array: {payload!r}")

    swells: list[Swell] = []
    for entry in entries:
        if entry is None or entry == {}:
            continue
        if not isinstance(entry, dict):
            raise FieldParseError(f"unexpected swell entry: {entry!r}")
        letters = entry.get("letters", "")
        if not isinstance(letters, str):
            raise FieldParseError(f"swell letters not a string: {letters!r}")
        swells.append(Swell(
            period_s=_swell_number(entry, "period", 0.0),
            direction_to_degrees=_swell_number(entry, "angle", 0.0, 360.0),
            direction_from_compass=letters,
            wave_height_m=_swell_number(entry, "height", 0.0),
        ))

    if not swells:
        return Swells()
    return Swells(primary=swells[0], secondary=tuple(swells[1:]))


def scrape_swells(tree: Tree, cell: Any) -> Swells:
    return decode_swells(_require_attribute(tree, cell, "data-swell-state"))


# Wave energy


def parse_wave_energy(s: str) -> float:
    energy = _parse_float(s)
    if energy < 0:
        raise FieldParseError(f"invalid wave energy: {s!r}")
    return energy


def scrape_wave_energy(tree: Tree, cell: Any) -> float:
    node = first_child(tree, cell)
    if node is None:
        raise FieldParseError("could not find wave energy node")
    return parse_wave_energy(_require_text(tree, node, "wave energy").strip())


# Wind


def parse_wind_speed(s: str) -> float:
    speed = _parse_float(s)
    if speed < 0:
        raise FieldParseError(f"invalid wind speed: {s!r}")
    return speed


def parse_wind_direction_degrees(s: str) -> float:
    degrees = _parse_float(s)
    if degrees < 0 or degrees > 360:
        raise FieldParseError(f"invalid wind direction degrees: {s!r}")
    return degrees


def parse_rotation(transform: str) -> float:
    """Degrees from an SVG transform such as "rotate(045.5)"."""
    degrees = transform.strip().removeprefix("rotate(").removesuffix(")")
    return parse_wind_direction_degrees(degrees)


def scrape_wind(tree: Tree, cell: Any) -> WindVector:
    icon = find_first(tree, cell, has_class("wind-icon"))
    if icon is None:
        raise FieldParseError("could not find wind icon node")

    speed = parse_wind_speed(_require_attribute(tree, icon, "data-speed"))

    arrow = find_first(tree, icon, has_class("wind-icon__arrow"))
    if arrow is None:
        raise FieldParseError("could not find wind direction arrow node")
    degrees = parse_rotation(_require_attribute(tree, arrow, "transform"))

    letters = find_first(tree, icon, has_class("wind-icon__letters"))
    if letters is None:
        raise FieldParseError("could not find wind direction letters node")

    return WindVector(
        speed_kmh=speed,
        direction_to_degrees=degrees,
        direction_from_compass=_require_text(tree, letters, "wind direction letters").strip(),
    )


# Wind states


def scrape_wind_state(tree: Tree, cell: Any) -> str:
    state = collect_text(tree, cell).strip()
    if not state:
        raise FieldParseError("invalid wind state: empty")
    return state
