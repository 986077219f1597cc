"""Timezone abbreviation resolvers.

surf-forecast.com prints issue times with an abbreviation such as "PDT" or
"WEST". A resolver maps the abbreviation to the IANA zones known to use it.
"""

import logging
from collections.abc import Iterable, Mapping, Sequence
from datetime import datetime
from typing import Protocol

import pytz

from glassy.models.common import utc_now

logger = logging.getLogger(__name__)

# Mid-winter and mid-summer pick up both standard and daylight saving names
SAMPLE_MONTHS = (1, 7)


class TimezoneResolver(Protocol):
    def lookup(self, abbreviation: str) -> list[str]:
        """Return IANA zone names using abbreviation, in a stable order."""
        ...


class MappingResolver:
    def __init__(self, table: Mapping[str, Sequence[str]]):
        self._table = {abbr: list(zones) for abbr, zones in table.items()}

    def lookup(self, abbreviation: str) -> list[str]:
        return list(self._table.get(abbreviation, []))


class PytzAbbreviationResolver:
    """Abbreviation table derived from the pytz zone database.

    Zones are scanned in alphabetical order, so when several zones share an
    abbreviation the alphabetically first one comes first. Numeric
    abbreviations like "+03" are skipped; those are parsed as offsets.
    """

    def __init__(
        self,
        zones: Iterable[str] | None = None,
        years: Sequence[int] | None = None,
    ):
        self._zones = sorted(zones if zones is not None else pytz.common_timezones)
        self._years = tuple(years) if years else (utc_now().year,)
        self._table: dict[str, list[str]] | None = None

    def lookup(self, abbreviation: str) -> list[str]:
        if self._table is None:
            self._table = self._build()
        return list(self._table.get(abbreviation.upper(), []))

    def _build(self) -> dict[str, list[str]]:
        table: dict[str, list[str]] = {}
        for name in self._zones:
            tz = pytz.timezone(name)
            for year in self._years:
                for month in SAMPLE_MONTHS:
                    sample = datetime(year, month, 15, 12, tzinfo=pytz.utc)
                    abbr = sample.astimezone(tz).tzname()
                    if not abbr or abbr[0] in "+-":
                        continue
                    zones = table.setdefault(abbr, [])
                    if name not in zones:
                        zones.append(name)
        logger.debug(
            "Built timezone abbreviation table: %d abbreviations from %d zones",
            len(table), len(self._zones),
        )
        return table
