"""Extract one data series per forecast table row.

The table lays hours out left to right across all days; a cell with the
"is-day-end" class closes a day. Grouped rows come back as one list of hourly
values per day.
"""

import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from typing import Any, TypeVar

from glassy.ingest import fields
from glassy.ingest.errors import RowNotFound, stage
from glassy.ingest.tree import (
    Predicate,
    Tree,
    find_all,
    find_first,
    has_attribute,
    has_class,
    has_class_containing,
)
from glassy.models.forecast import Swells

logger = logging.getLogger(__name__)

T = TypeVar("T")
CellParser = Callable[[Tree, Any], T]

ROW_CLASS = "forecast-table__row"
CELL = has_class_containing("forecast-table__cell")
DAY_END = has_class_containing("is-day-end")


@dataclass(frozen=True)
class RowSpec:
    row_name: str  # data-row-name attribute
    classes: tuple[str, ...] = (ROW_CLASS,)
    exact_class: bool = False

    def predicates(self) -> list[Predicate]:
        if self.exact_class:
            class_match = has_class(" ".join(self.classes))
        else:
            class_match = has_class_containing(*self.classes)
        return [class_match, has_attribute("data-row-name", self.row_name)]


DAYS_ROW = RowSpec("days", (ROW_CLASS, "forecast-table-days"))
HOURS_ROW = RowSpec("time", (ROW_CLASS, "forecast-table-time"))
RATINGS_ROW = RowSpec("rating", (ROW_CLASS, "forecast-table-rating"))
SWELLS_ROW = RowSpec("wave-height", exact_class=True)
WAVE_ENERGIES_ROW = RowSpec("energy", exact_class=True)
WINDS_ROW = RowSpec("wind", exact_class=True)
WIND_STATES_ROW = RowSpec("wind-state", exact_class=True)


def find_row(tree: Tree, table: Any, spec: RowSpec) -> Any:
    row = find_first(tree, table, *spec.predicates())
    if row is None:
        raise RowNotFound(f"could not find {spec.row_name} row")
    return row


def group_by_day_end(values: Iterable[tuple[T, bool]]) -> tuple[list[list[T]], list[T]]:
    """Fold (value, is_day_end) pairs into day buckets.

    Returns the sealed days and whatever followed the last day end.
    """
    days: list[list[T]] = []
    bucket: list[T] = []
    for value, day_end in values:
        bucket.append(value)
        if day_end:
            days.append(bucket)
            bucket = []
    return days, bucket


def _parse_cell(tree: Tree, parse: CellParser, index: int, cell: Any) -> Any:
    with stage(f"cell {index}"):
        return parse(tree, cell)


def extract_flat(tree: Tree, table: Any, spec: RowSpec, parse: CellParser) -> list:
    row = find_row(tree, table, spec)
    return [
        _parse_cell(tree, parse, i, cell)
        for i, cell in enumerate(find_all(tree, row, CELL))
    ]


def extract_grouped(tree: Tree, table: Any, spec: RowSpec, parse: CellParser) -> list[list]:
    row = find_row(tree, table, spec)
    days, trailing = group_by_day_end(
        (_parse_cell(tree, parse, i, cell), DAY_END(tree, cell))
        for i, cell in enumerate(find_all(tree, row, CELL))
    )
    if trailing:
        logger.debug(
            "Dropping %d %s cells after the last day end",
            len(trailing), spec.row_name,
        )
    return days


def extract_days(tree: Tree, table: Any) -> list[int]:
    return extract_flat(tree, table, DAYS_ROW, fields.scrape_day)


def extract_hours(tree: Tree, table: Any) -> list[list[int]]:
    return extract_grouped(tree, table, HOURS_ROW, fields.scrape_hour)


def extract_ratings(tree: Tree, table: Any) -> list[list[int]]:
    return extract_grouped(tree, table, RATINGS_ROW, fields.scrape_rating)


def extract_swells(tree: Tree, table: Any) -> list[list[Swells]]:
    return extract_grouped(tree, table, SWELLS_ROW, fields.scrape_swells)


def extract_wave_energies(tree: Tree, table: Any) -> list[list[float]]:
    return extract_grouped(tree, table, WAVE_ENERGIES_ROW, fields.scrape_wave_energy)


def extract_winds(tree: Tree, table: Any) -> list[list[fields.WindVector]]:
    return extract_grouped(tree, table, WINDS_ROW, fields.scrape_wind)


def extract_wind_states(tree: Tree, table: Any) -> list[list[str]]:
    return extract_grouped(tree, table, WIND_STATES_ROW, fields.scrape_wind_state)
