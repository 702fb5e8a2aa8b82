#!/usr/bin/env python3
"""
omp-browser command-line interface.
"""

import os
import sys
import asyncio
import argparse
import curses
from pathlib import Path
from typing import Optional
import yaml

from .browser import ServerBrowser
from .config import BrowserConfig, ConfigLoader
from .exceptions import BrowserError, ConfigError, FavoritesError
from .favorites import FavoritesStore, is_favorite
from .fetcher import ServerListFetcher
from .filter import compute_view, refresh_favorite_info
from .logging_config import setup_logging, get_logger
from .ui import CursesScreen


def show_configuration(loader: ConfigLoader, config: BrowserConfig):
    """Print the config file location and the effective settings."""
    exists = "" if loader.config_path.exists() else " (not found, using defaults)"
    print(f"Configuration file: {loader.config_path}{exists}")
    print()
    print(yaml.safe_dump(config.to_dict(), sort_keys=False).rstrip())


async def list_servers(config: BrowserConfig, search_term: str = "") -> int:
    """Print the computed view once, without the interactive UI."""
    store = FavoritesStore(config.favorites_file)
    fetcher = ServerListFetcher(config.servers_url, timeout=config.timeout,
                                servers_path=config.servers_path)

    favorites = await store.load()
    servers = await fetcher.fetch()

    refresh_favorite_info(favorites, servers)
    view = compute_view(servers, favorites, search_term, config.blacklist)

    for server in view:
        mark = "*" if is_favorite(favorites, server) else " "
        print(f"{mark} {server.address:<22} {server.row_text()}")

    return len(view)


def run_curses(stdscr, browser: ServerBrowser):
    """curses.wrapper target: drive the browser on its own event loop."""
    asyncio.run(browser.run(CursesScreen(stdscr)))


def apply_overrides(config: BrowserConfig, args) -> BrowserConfig:
    if args.url:
        config.servers_url = args.url
    if args.favorites:
        config.favorites_file = Path(args.favorites).expanduser()
    if args.debug:
        config.debug = True
    return config


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="omp-browser",
        description="omp-browser - Terminal server browser for open.mp",
        epilog="""
Examples:
  omp-browser                          # Interactive browser
  omp-browser --list                   # Print the server list and exit
  omp-browser --list --search roleplay # Print matching servers
  omp-browser --show-config            # Show current configuration

Configuration:
  Default config: ~/.config/omp-browser/config.yaml
  Override with --config or the OMP_BROWSER_CONFIG environment variable
        """,
        formatter_class=argparse.RawDescriptionHelpFormatter
    )
    parser.add_argument("--config", "-c", help="Custom configuration file path")
    parser.add_argument("--url", help="Server list URL (overrides config)")
    parser.add_argument("--favorites", help="Favorites file path (overrides config)")
    parser.add_argument("--list", action="store_true",
                        help="Print the server list and exit")
    parser.add_argument("--search", default="",
                        help="Search term used with --list")
    parser.add_argument("--show-config", action="store_true",
                        help="Show current configuration path and content")
    parser.add_argument("--debug", action="store_true",
                        help="Enable debug output")
    parser.add_argument("--log-level", choices=["TRACE", "DEBUG", "INFO", "WARNING", "ERROR"],
                        help="Set logging level")
    parser.add_argument("--log-file", help="Log file (the interactive UI never logs to the terminal)")
    return parser


def main(argv: Optional[list] = None):
    """Main entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    loader = ConfigLoader(Path(args.config).expanduser() if args.config else None)
    try:
        config = apply_overrides(loader.load(), args)
    except ConfigError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    if args.show_config:
        show_configuration(loader, config)
        return

    log_file = Path(args.log_file).expanduser() if args.log_file else config.log_file

    if args.list:
        # stdout carries the listing; only warnings go to stderr by default
        level = args.log_level or ("DEBUG" if config.debug else "WARNING")
        setup_logging(debug=config.debug, log_level=level)
        try:
            asyncio.run(list_servers(config, args.search))
        except BrowserError as e:
            print(f"Error: {e}", file=sys.stderr)
            sys.exit(1)
        return

    # curses owns the terminal from here on
    setup_logging(debug=config.debug, log_file=log_file,
                  log_level=args.log_level, console=False)
    logger = get_logger(__name__)

    try:
        browser = ServerBrowser(config)
    except ConfigError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    # Esc would otherwise wait a full second for an escape sequence
    os.environ.setdefault("ESCDELAY", "25")

    try:
        curses.wrapper(run_curses, browser)
    except KeyboardInterrupt:
        logger.info("Interrupted, exiting")
    except FavoritesError as e:
        logger.error(str(e))
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
