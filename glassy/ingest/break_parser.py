"""Parse surf break search results, slug redirects and break pages."""

import json
from typing import Any

import httpx

from glassy.ingest.errors import BreakNotFound, StructureNotFound, UnexpectedFormat
from glassy.ingest.tree import SOUP, Tree, find_first, has_attribute, text_of
from glassy.models.surf_break import BreakSearchResult

BREAKS_PATH_PREFIX = "/breaks/"
FORECASTS_PATH_SEPARATOR = "/forecasts"


def is_break_id(text: str) -> bool:
    """Break ids are plain ASCII digits; regions and countries carry letter prefixes."""
    return text.isascii() and text.isdecimal()


def parse_search_payload(body: str) -> list[BreakSearchResult]:
    """Parse the location autocomplete payload into surf breaks.

    The payload is a JSON-like 2D array of strings quoted with single quotes,
    e.g. [['123','Break A','Country'],['re45','Region','Country']]. Each row is
    [id, name, country]. Breaks have numeric ids; regions, countries and other
    localities carry prefixes like "re" or "co" and are skipped.
    """
    try:
        rows = json.loads(body.replace("'", '"'))
    except ValueError as e:
        raise UnexpectedFormat(f"could not unmarshal search results: {e}") from None
    if not isinstance(rows, list):
        raise UnexpectedFormat(f"search results are not an array: {body[:200]!r}")

    breaks = []
    for row in rows:
        if not isinstance(row, list) or len(row) != 3 or not all(isinstance(v, str) for v in row):
            raise UnexpectedFormat(f"unexpected search result: {row!r}")
        id_text, name, country_name = row
        if not is_break_id(id_text):
            continue
        breaks.append(BreakSearchResult(id=int(id_text), name=name, country_name=country_name))
    return breaks


def parse_break_redirect(location: str) -> str:
    """Slug from the Location of a /breaks/catch redirect.

    "/breaks/Pipeline_1/forecasts/latest" gives "Pipeline_1". Redirects outside
    /breaks/ mean the site did not recognize the break.
    """
    try:
        path = httpx.URL(location).path
    except httpx.InvalidURL:
        raise UnexpectedFormat(f"could not parse redirect url: {location!r}") from None

    if not path.startswith(BREAKS_PATH_PREFIX):
        raise BreakNotFound(f"surf break not found (redirected to {path!r})")

    parts = path.removeprefix(BREAKS_PATH_PREFIX).split(FORECASTS_PATH_SEPARATOR)
    if len(parts) != 2 or not parts[0]:
        raise UnexpectedFormat(f"unexpected redirect url format: {location!r}")
    return parts[0]


def _selected_option_text(tree: Tree, nav: Any, select_id: str, what: str) -> str:
    select = find_first(tree, nav, has_attribute("id", select_id))
    if select is None:
        raise StructureNotFound(f"could not find {what} node")
    option = find_first(tree, select, has_attribute("selected"))
    if option is None:
        raise StructureNotFound(f"could not find {what} name node")
    text = text_of(tree, option)
    if text is None:
        raise StructureNotFound(f"could not find {what} name text node")
    return text.strip()


def scrape_break(document: Any, tree: Tree = SOUP) -> tuple[str, str]:
    """Break name and country name from the navigation selects of a break page."""
    nav = find_first(tree, document, has_attribute("id", "dropformcont-nav"))
    if nav is None:
        raise StructureNotFound("could not find navigation node")
    country_name = _selected_option_text(tree, nav, "country_id", "country")
    name = _selected_option_text(tree, nav, "location_filename_part", "surf break")
    return name, country_name
