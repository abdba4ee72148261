"""CLI entry point for the weather screen."""

import argparse
import asyncio
import logging

from pydantic import ValidationError

from simpleweather.config.loader import API_KEY_ENV, load_config, masked_config_json
from simpleweather.config.schema import AppConfig, Tab
from simpleweather.display.screen import WeatherScreen
from simpleweather.ingest.weatherapi_client import WeatherApiClient
from simpleweather.models.ui_state import Success
from simpleweather.state.forecast_state import ForecastStateMachine

DEFAULT_CONFIG = "configs/default.yaml"


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="simpleweather",
        description="3-day weather forecast for one location",
    )
    parser.add_argument(
        "--config", default=DEFAULT_CONFIG, help="Config YAML path"
    )

    sub = parser.add_subparsers(dest="command")

    # show
    show_p = sub.add_parser("show", help="Fetch and render the forecast")
    show_p.add_argument(
        "--tab", choices=[t.value for t in Tab], default=None,
        help="Tab to render (default from config)",
    )
    show_p.add_argument(
        "--retries", type=int, default=0,
        help="Retry automatically this many times on error",
    )
    show_p.add_argument(
        "--interactive", action="store_true",
        help="Ask before retrying once automatic retries are used up",
    )

    # config show
    config_p = sub.add_parser("config", help="Config operations")
    config_sub = config_p.add_subparsers(dest="config_command")
    config_sub.add_parser("show", help="Display current config")

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 1

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        config = load_config(args.config)
    except ValidationError as e:
        print(f"Invalid config {args.config}: {e}")
        return 1

    if args.command == "show":
        return _cmd_show(config, args)
    elif args.command == "config":
        return _cmd_config(config, args)
    else:
        parser.print_help()
        return 1


def _cmd_show(config: AppConfig, args) -> int:
    if not config.api.api_key:
        print(f"Error: no API key configured (set api.api_key or {API_KEY_ENV})")
        return 2
    tab = Tab(args.tab) if args.tab else config.display.default_tab
    state = asyncio.run(_run_screen(config, tab, _retry_prompt(args.retries, args.interactive)))
    return 0 if isinstance(state, Success) else 1


async def _run_screen(config: AppConfig, tab: Tab, confirm_retry):
    client = WeatherApiClient.from_config(config)
    machine = ForecastStateMachine.from_config(client, config)
    screen = WeatherScreen(
        machine,
        tab=tab,
        title=config.location.name,
        locale=config.display.date_locale,
        confirm_retry=confirm_retry,
    )
    return await screen.run()


def _retry_prompt(retries: int, interactive: bool):
    remaining = retries

    def confirm() -> bool:
        nonlocal remaining
        if remaining > 0:
            remaining -= 1
            return True
        if interactive:
            answer = input("Repeat? [y/N] ")
            return answer.strip().lower() in ("y", "yes")
        return False

    return confirm


def _cmd_config(config: AppConfig, args) -> int:
    if args.config_command == "show":
        print(masked_config_json(config))
        return 0
    else:
        print("Use: config show")
        return 1
