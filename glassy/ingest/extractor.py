"""Forecast page extraction: HTML in, ForecastIssue out.

Extraction is all or nothing. Any failure is raised as a ScrapeError tagged
with the stage that produced it.
"""

import logging
from typing import Any

from glassy.ingest import rows
from glassy.ingest.assembler import assemble_forecast_issue
from glassy.ingest.errors import stage
from glassy.ingest.locator import find_issue_text, find_table
from glassy.ingest.timestamps import parse_issue_timestamp
from glassy.ingest.timezones import TimezoneResolver
from glassy.ingest.tree import SOUP, Tree, parse_html
from glassy.models.forecast import ForecastIssue

logger = logging.getLogger(__name__)


def scrape_forecast_issue(
    document: Any, resolver: TimezoneResolver, tree: Tree = SOUP
) -> ForecastIssue:
    """Scrape a parsed forecast page."""
    with stage("issue timestamp"):
        issued_at = parse_issue_timestamp(find_issue_text(tree, document), resolver)

    with stage("table"):
        table = find_table(tree, document)

    with stage("days"):
        days = rows.extract_days(tree, table)
    with stage("hours"):
        hours = rows.extract_hours(tree, table)
    with stage("ratings"):
        ratings = rows.extract_ratings(tree, table)
    with stage("swells"):
        swells = rows.extract_swells(tree, table)
    with stage("wave energies"):
        wave_energies = rows.extract_wave_energies(tree, table)
    with stage("winds"):
        winds = rows.extract_winds(tree, table)
    with stage("wind states"):
        wind_states = rows.extract_wind_states(tree, table)

    with stage("forecast"):
        issue = assemble_forecast_issue(
            issued_at,
            days,
            hours,
            ratings,
            swells,
            wave_energies,
            winds,
            wind_states,
        )

    logger.debug(
        "Scraped forecast issued at %s: %d days, %d hours",
        issue.issued_at.isoformat(), len(issue.daily),
        sum(len(d.hourly) for d in issue.daily),
    )
    return issue


def extract_forecast(markup: str | bytes, resolver: TimezoneResolver) -> ForecastIssue:
    """Parse forecast page HTML and scrape it."""
    return scrape_forecast_issue(parse_html(markup), resolver)
