"""CLI entry point for glassy."""

import argparse
import logging

import httpx

from glassy.config.loader import get_config_value, load_config
from glassy.ingest.break_parser import is_break_id
from glassy.ingest.errors import BreakNotFound, ScrapeError
from glassy.ingest.surf_forecast_client import SurfForecastClient
from glassy.reporting.formatters import (
    format_forecast_json,
    format_forecast_text,
    format_search_text,
)

DEFAULT_CONFIG = "glassy.yaml"


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="glassy",
        description="Lighter surf forecasts scraped from www.surf-forecast.com",
    )
    parser.add_argument(
        "--config", default=DEFAULT_CONFIG, help="Config YAML path"
    )

    sub = parser.add_subparsers(dest="command")

    # serve
    serve_p = sub.add_parser("serve", help="Run the web front end")
    serve_p.add_argument("--host", help="Override server.host")
    serve_p.add_argument("--port", type=int, help="Override server.port")

    # forecast
    forecast_p = sub.add_parser("forecast", help="Print the latest forecast of a surf break")
    forecast_p.add_argument("identifier", help="Break id or name")
    forecast_p.add_argument("--json", action="store_true", help="Print JSON")

    # search
    search_p = sub.add_parser("search", help="Search surf breaks by name")
    search_p.add_argument("query")

    # config show / config get
    config_p = sub.add_parser("config", help="Config operations")
    config_sub = config_p.add_subparsers(dest="config_command")
    config_sub.add_parser("show", help="Display current config")
    get_p = config_sub.add_parser("get", help="Display a config value")
    get_p.add_argument("key", help="Dotted key, e.g. scraper.timeout_seconds")

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 1

    config = load_config(args.config)

    logging.basicConfig(
        level=config.logging.level.value,
        format=config.logging.format,
    )

    if args.command == "serve":
        return _cmd_serve(config, args)
    elif args.command == "forecast":
        return _cmd_forecast(config, args)
    elif args.command == "search":
        return _cmd_search(config, args)
    elif args.command == "config":
        return _cmd_config(config, args)
    else:
        parser.print_help()
        return 1


def _cmd_serve(config, args) -> int:
    import uvicorn

    from glassy.web import create_app

    host = args.host or config.server.host
    port = args.port or config.server.port
    uvicorn.run(create_app(config), host=host, port=port)
    return 0


def _cmd_forecast(config, args) -> int:
    client = SurfForecastClient.from_config(config.scraper)
    try:
        identifier = args.identifier.strip()
        if is_break_id(identifier):
            brk = client.get_break(int(identifier))
            slug, title = brk.slug, f"{brk.name}, {brk.country_name}"
        else:
            slug = client.resolve_break_slug(identifier)
            title = slug
        issue = client.latest_forecast_issue(slug)
    except BreakNotFound:
        print(f"Surf break not found: {args.identifier}")
        return 1
    except (ScrapeError, httpx.HTTPError) as e:
        print(f"Error: {e}")
        return 1

    if args.json:
        print(format_forecast_json(issue))
    else:
        print(format_forecast_text(issue, title=title))
    return 0


def _cmd_search(config, args) -> int:
    client = SurfForecastClient.from_config(config.scraper)
    try:
        results = client.search_breaks(args.query)
    except (ScrapeError, httpx.HTTPError) as e:
        print(f"Error: {e}")
        return 1
    print(format_search_text(results))
    return 0


def _cmd_config(config, args) -> int:
    if args.config_command == "show":
        print(config.model_dump_json(indent=2))
        return 0
    elif args.config_command == "get":
        try:
            print(get_config_value(config, args.key))
            return 0
        except KeyError as e:
            print(f"Error: {e}")
            return 1
    else:
        print("Use: config show | config get key")
        return 1
