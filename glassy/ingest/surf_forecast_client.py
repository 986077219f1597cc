"""surf-forecast.com client: forecasts, break pages, slug resolution and search.

Requests are made once; failures are logged and raised, never retried.
"""

import logging

import httpx

from glassy.config.defaults import DEFAULT_BASE_URL, DEFAULT_TIMEOUT_SECONDS, DEFAULT_USER_AGENT
from glassy.config.schema import ScraperConfig
from glassy.ingest.break_parser import (
    is_break_id,
    parse_break_redirect,
    parse_search_payload,
    scrape_break,
)
from glassy.ingest.errors import BreakNotFound, UnexpectedFormat, UpstreamError, stage
from glassy.ingest.extractor import extract_forecast
from glassy.ingest.timezones import PytzAbbreviationResolver, TimezoneResolver
from glassy.ingest.tree import parse_html
from glassy.models.forecast import ForecastIssue
from glassy.models.surf_break import Break, BreakSearchResult

logger = logging.getLogger(__name__)


class SurfForecastClient:
    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        user_agent: str = DEFAULT_USER_AGENT,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        resolver: TimezoneResolver | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.user_agent = user_agent
        self.timeout = timeout
        self.resolver = resolver if resolver is not None else PytzAbbreviationResolver()

    @classmethod
    def from_config(
        cls, config: ScraperConfig, resolver: TimezoneResolver | None = None
    ) -> "SurfForecastClient":
        return cls(
            base_url=config.base_url,
            user_agent=config.user_agent,
            timeout=config.timeout_seconds,
            resolver=resolver,
        )

    def _get(
        self, path: str, params: dict | None = None, not_found_is_break: bool = True
    ) -> httpx.Response:
        url = f"{self.base_url}{path}"
        headers = {"User-Agent": self.user_agent}
        try:
            resp = httpx.get(url, params=params, headers=headers, timeout=self.timeout)
            if resp.status_code == 404 and not_found_is_break:
                raise BreakNotFound(f"surf break not found: {path}")
            resp.raise_for_status()
            return resp
        except httpx.HTTPStatusError as e:
            logger.error("surf-forecast.com error for %s: %s", path, e)
            raise
        except httpx.RequestError as e:
            logger.error("surf-forecast.com request failed for %s: %s", path, e)
            raise

    def latest_forecast_issue(self, slug: str) -> ForecastIssue:
        """Latest forecast of a surf break for the next 8 or 9 days.

        Timestamps use the break's local timezone. Raises BreakNotFound for
        unknown slugs.
        """
        resp = self._get(f"/breaks/{slug}/forecasts/latest")
        with stage("forecast page"):
            return extract_forecast(resp.text, self.resolver)

    def search_breaks(self, query: str) -> list[BreakSearchResult]:
        resp = self._get(
            "/breaks/ac_location_name",
            params={"query": query},
            not_found_is_break=False,
        )
        with stage("search results"):
            return parse_search_payload(resp.text)

    def break_slug(self, break_id: int) -> str:
        """Slug of a surf break by id. Raises BreakNotFound for unknown ids.

        The catch endpoint answers with a redirect to the break's forecast
        page; the redirect is read, not followed.
        """
        url = f"{self.base_url}/breaks/catch"
        headers = {"User-Agent": self.user_agent}
        try:
            resp = httpx.post(
                url,
                data={"loc_id": str(break_id)},
                headers=headers,
                timeout=self.timeout,
                follow_redirects=False,
            )
        except httpx.RequestError as e:
            logger.error("surf-forecast.com request failed for break id=%d: %s", break_id, e)
            raise

        if resp.status_code != httpx.codes.FOUND:
            raise UpstreamError(f"received response with {resp.status_code} status code")

        location = resp.headers.get("location")
        if not location:
            raise UnexpectedFormat("redirect response without location")
        with stage("break redirect"):
            return parse_break_redirect(location)

    def resolve_break_slug(self, identifier: str) -> str:
        """Slug from a numeric break id or a free-text break name.

        Names are searched and the first matching break wins.
        """
        identifier = identifier.strip()
        if is_break_id(identifier):
            return self.break_slug(int(identifier))

        results = self.search_breaks(identifier)
        if not results:
            raise BreakNotFound(f"surf break not found: {identifier!r}")
        logger.info(
            "Resolved %r to break %s (%d), %d candidates",
            identifier, results[0].name, results[0].id, len(results),
        )
        return self.break_slug(results[0].id)

    def get_break(self, break_id: int) -> Break:
        """Surf break by id. Raises BreakNotFound for unknown ids."""
        slug = self.break_slug(break_id)
        resp = self._get(f"/breaks/{slug}")
        with stage("break page"):
            name, country_name = scrape_break(parse_html(resp.text))
        return Break(id=break_id, slug=slug, name=name, country_name=country_name)
