"""
Command-line interface for hydromap.

This module provides the main entry point for the CLI.
"""

from __future__ import annotations

import argparse
import functools
import http.server
import logging
import sys
from pathlib import Path

from hydromap import __version__
from hydromap.config import get_settings
from hydromap.datasources import hydrometric
from hydromap.diagnostics import DiagnosticLog
from hydromap.errors import HydromapError
from hydromap.flows.build import build_all
from hydromap.flows.fetch import fetch_all
from hydromap.renderers.date_utils import format_timestamp
from hydromap.services.http import create_session


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the CLI."""
    parser = argparse.ArgumentParser(
        prog="hydromap",
        description="Map viewer for near-real-time hydrometric station readings",
    )
    parser.add_argument(
        "-v",
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    subparsers.add_parser("info", help="Show configuration")

    station_parser = subparsers.add_parser("station", help="Show one station's latest readings")
    station_parser.add_argument("station_id", help="Station number, e.g. 05JF003")

    subparsers.add_parser("refresh", help="Fetch data and build site")

    serve_parser = subparsers.add_parser("serve", help="Serve site locally")
    serve_parser.add_argument(
        "--port",
        type=int,
        default=None,
        help="Port to serve on (default: api_port from settings)",
    )

    return parser


def configure_logging(debug: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def cmd_info(_args: argparse.Namespace) -> int:
    """Handle the 'info' command."""
    settings = get_settings()
    print(f"Application: {settings.app_name}")
    print(f"Version: {__version__}")
    print(f"Environment: {settings.app_env}")
    print(f"Debug: {settings.debug}")
    print(f"Region: {settings.bounding_box.as_envelope()}")
    print(f"Stations: {', '.join(settings.stations) or '(none)'}")
    print(f"Layers: {len(settings.layers)}")
    for url in settings.layers:
        print(f"  {url}")
    return 0


def cmd_station(args: argparse.Namespace) -> int:
    """Handle the 'station' command: print location and latest readings."""
    settings = get_settings()
    config = settings.hydrometric_config()
    session = create_session(timeout=settings.http_timeout)
    diagnostics = DiagnosticLog()

    try:
        location = hydrometric.resolve_station_location(
            args.station_id, config=config, diagnostics=diagnostics, http=session
        )
        observations = hydrometric.resolve_latest_observations(
            args.station_id, config=config, diagnostics=diagnostics, http=session
        )
    except HydromapError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    title = f"WSC {location.station_id}"
    if location.name:
        title = f"{title} - {location.name}"
    print(title)
    print(f"Location: {location.latitude:.5f}, {location.longitude:.5f}")

    if not observations:
        print("No recent values")
        return 0

    for obs in observations:
        value = "" if obs.value is None else f"{obs.value:g}"
        unit = obs.unit or ""
        when = format_timestamp(obs.timestamp.isoformat()) if obs.timestamp else ""
        print(f"  {obs.parameter:<20} {value:>10} {unit:<8} {when}")
    return 0


def cmd_refresh(_args: argparse.Namespace) -> int:
    """Handle the 'refresh' command: fetch data then build site."""
    settings = get_settings()
    print(f"Fetching {len(settings.stations)} station(s) and {len(settings.layers)} layer(s)...")
    viewer_data = fetch_all(settings=settings)

    print("Building site...")
    result = build_all(viewer_data, settings=settings)
    if "error" in result:
        print(f"Error: {result['error']}", file=sys.stderr)
        return 1

    print("Done.")
    return 0


def cmd_serve(args: argparse.Namespace) -> int:
    """Handle the 'serve' command: serve the built site locally."""
    settings = get_settings()
    port = args.port if args.port is not None else settings.api_port
    site_dir = Path(settings.site_dir)

    if not site_dir.exists():
        print("No site directory found. Run 'hydromap refresh' first.", file=sys.stderr)
        return 1

    handler = functools.partial(http.server.SimpleHTTPRequestHandler, directory=str(site_dir))

    with http.server.HTTPServer(("", port), handler) as server:
        print(f"Serving site on http://localhost:{port}/ (Ctrl+C to stop)")
        try:
            server.serve_forever()
        except KeyboardInterrupt:
            print("\nServer stopped.")

    return 0


def main() -> int:
    """Main entry point for the CLI."""
    parser = create_parser()
    args = parser.parse_args()

    if args.command is None:
        parser.print_help()
        return 0

    configure_logging(getattr(args, "debug", False) or get_settings().debug)

    commands = {
        "info": cmd_info,
        "station": cmd_station,
        "refresh": cmd_refresh,
        "serve": cmd_serve,
    }

    handler = commands.get(args.command)
    if handler:
        return handler(args)
    else:
        parser.print_help()
        return 1


if __name__ == "__main__":
    sys.exit(main())
