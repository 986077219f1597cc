"""Web front end: break search and latest forecast pages."""

import logging
from pathlib import Path

import httpx
from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import HTMLResponse, PlainTextResponse, RedirectResponse, Response
from fastapi.templating import Jinja2Templates

from glassy.config.schema import AppConfig
from glassy.ingest.break_parser import is_break_id
from glassy.ingest.errors import BreakNotFound, ScrapeError
from glassy.ingest.surf_forecast_client import SurfForecastClient
from glassy.reporting.formatters import date_label, format_number, hour_label, weekday_label

logger = logging.getLogger(__name__)

TEMPLATES_DIR = Path(__file__).parent / "templates"


def create_app(
    config: AppConfig | None = None, client: SurfForecastClient | None = None
) -> FastAPI:
    config = config or AppConfig()
    if client is None:
        client = SurfForecastClient.from_config(config.scraper)

    templates = Jinja2Templates(directory=TEMPLATES_DIR)
    templates.env.globals.update(
        weekday_label=weekday_label,
        date_label=date_label,
        hour_label=hour_label,
        number=format_number,
    )
    cache_control = f"max-age={config.server.cache_max_age_seconds}"

    app = FastAPI(title="Glassy", version="0.1.0")

    def _render(request: Request, name: str, context: dict) -> Response:
        resp = templates.TemplateResponse(request, name, context)
        resp.headers["Cache-Control"] = cache_control
        return resp

    @app.get("/")
    def index():
        return RedirectResponse("/search", status_code=301)

    @app.get("/search", response_class=HTMLResponse)
    def search(request: Request, q: str = ""):
        """Search page; a blank query renders the empty search bar."""
        query = q.strip()
        breaks = []
        if query:
            try:
                breaks = client.search_breaks(query)
            except (ScrapeError, httpx.HTTPError) as e:
                logger.exception("Search failed for %r", query)
                return PlainTextResponse(str(e), status_code=500)
        return _render(request, "search.html", {"query": query, "breaks": breaks})

    @app.get("/breaks/{break_id}/forecasts/latest", response_class=HTMLResponse)
    def latest_forecast(request: Request, break_id: str):
        break_id = break_id.strip()
        if not is_break_id(break_id):
            raise HTTPException(400, "invalid break id")

        try:
            brk = client.get_break(int(break_id))
            issue = client.latest_forecast_issue(brk.slug)
        except BreakNotFound:
            raise HTTPException(404, "surf break not found") from None
        except (ScrapeError, httpx.HTTPError) as e:
            logger.exception("Latest forecast failed for break %s", break_id)
            return PlainTextResponse(str(e), status_code=500)

        return _render(request, "forecast.html", {"brk": brk, "issue": issue})

    return app
