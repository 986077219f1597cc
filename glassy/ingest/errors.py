"""Scrape failure taxonomy.

Every failure raised while turning an upstream page into domain values is a
ScrapeError. Failures are tagged with the stages they passed through on the way
out, outermost first, so "wind: cell 5: invalid wind direction degrees: '400'"
reads from the series down to the offending value.
"""

from collections.abc import Iterator
from contextlib import contextmanager


class ScrapeError(Exception):
    def __init__(self, message: str):
        super().__init__(message)
        self.message = message
        self.stages: list[str] = []

    @property
    def stage(self) -> str | None:
        """Outermost stage the failure passed through."""
        return self.stages[0] if self.stages else None

    def __str__(self) -> str:
        return "".join(f"{s}: " for s in self.stages) + self.message


class StructureNotFound(ScrapeError):
    """An expected anchor node is absent; the upstream markup has changed."""


class RowNotFound(StructureNotFound):
    """A forecast table row for one data series is absent."""


class UnexpectedFormat(ScrapeError):
    """Token count or shape of a value does not match what the page used to serve."""


class UnknownTimezone(ScrapeError):
    """A timezone abbreviation has no known IANA zone."""


class MisalignedSeries(ScrapeError):
    """Parallel data series have unequal lengths."""


class FieldParseError(ScrapeError):
    """A single cell value is missing, non-numeric or out of range."""


class BreakNotFound(ScrapeError):
    """The surf break does not exist upstream."""


class UpstreamError(ScrapeError):
    """The upstream site answered with a status the caller cannot handle."""


@contextmanager
def stage(name: str) -> Iterator[None]:
    """Tag any ScrapeError raised inside the block with the given stage name."""
    try:
        yield
    except ScrapeError as e:
        e.stages.insert(0, name)
        raise
