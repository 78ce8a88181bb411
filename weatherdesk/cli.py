"""CLI entry point for the weatherdesk forecast client."""

import argparse
import logging

from weatherdesk.app.shell import ForecastSession
from weatherdesk.app.watch import WatchLoop
from weatherdesk.config.loader import (
    build_feed_gateway,
    build_gateway,
    get_config_value,
    load_config,
)
from weatherdesk.config.schema import AppConfig
from weatherdesk.models.common import TemperatureUnit
from weatherdesk.models.forecast import FutureEntry
from weatherdesk.render.dispatcher import render_all
from weatherdesk.render.formatters import format_forecast_json, format_forecast_text

FETCH_TIMEOUT = 60.0


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="weatherdesk",
        description="Weather forecast desktop client",
    )
    parser.add_argument("--config", default=None, help="Config YAML path")

    sub = parser.add_subparsers(dest="command")
    units = [u.value for u in TemperatureUnit]

    # show
    show_p = sub.add_parser("show", help="Fetch and print the forecast once")
    show_p.add_argument(
        "-c", "--current", action="store_true",
        help="Only current conditions and warnings",
    )
    show_p.add_argument("--unit", choices=units, help="Temperature unit")
    show_p.add_argument(
        "-v", "--verbose", action="store_true", help="Include summaries"
    )
    show_p.add_argument("--json", action="store_true", help="Print JSON")

    # watch
    watch_p = sub.add_parser(
        "watch", help="Keep the forecast on screen (SIGUSR1 refreshes)"
    )
    watch_p.add_argument("--unit", choices=units, help="Temperature unit")
    watch_p.add_argument(
        "-v", "--verbose", action="store_true", help="Include summaries"
    )

    # serve
    serve_p = sub.add_parser("serve", help="Run the forecast backend")
    serve_p.add_argument("--host", default=None)
    serve_p.add_argument("--port", type=int, default=None)

    # config show
    config_p = sub.add_parser("config", help="Config operations")
    config_sub = config_p.add_subparsers(dest="config_command")
    config_sub.add_parser("show", help="Display current config")
    get_p = config_sub.add_parser("get", help="Display one config value")
    get_p.add_argument("key", help="Dotted key, e.g. gateway.feed_url")

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 1

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    config = load_config(args.config)

    if args.command == "show":
        return _cmd_show(config, args)
    elif args.command == "watch":
        return _cmd_watch(config, args)
    elif args.command == "serve":
        return _cmd_serve(config, args)
    elif args.command == "config":
        return _cmd_config(config, args)
    else:
        parser.print_help()
        return 1


def _unit(config: AppConfig, args) -> TemperatureUnit:
    if args.unit:
        return TemperatureUnit(args.unit)
    return config.display.unit


def _cmd_show(config: AppConfig, args) -> int:
    session = ForecastSession(build_gateway(config), unit=_unit(config, args))
    with session:
        if not session.wait_until_settled(FETCH_TIMEOUT):
            print("Error: timed out waiting for forecast")
            return 1
        state = session.state

    entries = state.entries
    if args.current:
        entries = tuple(e for e in entries if not isinstance(e, FutureEntry))
    nodes = render_all(entries, session.unit)

    if args.json:
        print(format_forecast_json(state, nodes))
    else:
        print(format_forecast_text(state, nodes, verbose=args.verbose))
    return 0 if state.error is None else 1


def _cmd_watch(config: AppConfig, args) -> int:
    session = ForecastSession(build_gateway(config), unit=_unit(config, args))
    WatchLoop(session, verbose=args.verbose).start()
    return 0


def _cmd_serve(config: AppConfig, args) -> int:
    import uvicorn

    from weatherdesk.backend import create_app

    uvicorn.run(
        create_app(build_feed_gateway(config)),
        host=args.host or config.server.host,
        port=args.port or config.server.port,
    )
    return 0


def _cmd_config(config: AppConfig, args) -> int:
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
