"""
Command-line interface for the application.

This module provides the main entry point for the CLI.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from datetime import date, datetime

from naturalist import __version__, observations
from naturalist.client import Client
from naturalist.config import get_settings
from naturalist.errors import NaturalistError
from naturalist.schemas import GetObservationsOpt, Location, Rectangle


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the CLI."""
    parser = argparse.ArgumentParser(
        prog="naturalist",
        description="Query iNaturalist observations",
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

    subparsers.add_parser("info", help="Show client configuration")

    # 'observations' command - list with filters
    list_parser = subparsers.add_parser("observations", help="List observations")
    list_parser.add_argument("--page", type=int, default=None)
    list_parser.add_argument("--per-page", type=int, default=None)
    list_parser.add_argument(
        "--bbox",
        type=float,
        nargs=4,
        metavar=("SWLNG", "SWLAT", "NELNG", "NELAT"),
        default=None,
        help="Bounding box: southwest lng/lat then northeast lng/lat",
    )
    list_parser.add_argument("--on", type=date.fromisoformat, default=None, help="YYYY-MM-DD")
    list_parser.add_argument(
        "--updated-since",
        type=datetime.fromisoformat,
        default=None,
        help="ISO 8601 timestamp",
    )
    list_parser.add_argument("--order-by", type=str, default=None)
    order = list_parser.add_mutually_exclusive_group()
    order.add_argument("--asc", dest="order_ascending", action="store_const", const=True)
    order.add_argument("--desc", dest="order_ascending", action="store_const", const=False)
    list_parser.add_argument("--has-geo", action="store_true", help="Only geotagged results")

    # 'observation' command - one observation by id
    get_parser = subparsers.add_parser("observation", help="Show one observation")
    get_parser.add_argument("id", type=int)
    get_parser.add_argument("--full", action="store_true", help="Include photos/comments/projects")

    # 'user' command - observations by login
    user_parser = subparsers.add_parser("user", help="List a user's observations")
    user_parser.add_argument("login", type=str)

    return parser


def options_from_args(args: argparse.Namespace) -> GetObservationsOpt:
    """Build list options from parsed arguments; unset flags stay unset."""
    fields: dict[str, object] = {}
    for name in ("page", "per_page", "on", "updated_since", "order_by", "order_ascending"):
        value = getattr(args, name, None)
        if value is not None:
            fields[name] = value
    if args.bbox is not None:
        swlng, swlat, nelng, nelat = args.bbox
        fields["rectangle"] = Rectangle(
            southwest=Location(longitude=swlng, latitude=swlat),
            northeast=Location(longitude=nelng, latitude=nelat),
        )
    if args.has_geo:
        fields["has_geo"] = True
    return GetObservationsOpt(**fields)


def _print_json(data: object) -> None:
    print(json.dumps(data, indent=2, default=str))


def cmd_info(_args: argparse.Namespace) -> int:
    """Handle the 'info' command."""
    settings = get_settings()
    print(f"Application: {settings.app_name}")
    print(f"Version: {__version__}")
    print(f"Environment: {settings.app_env}")
    print(f"Base URL: {settings.base_url}")
    print(f"Authenticated: {settings.access_token is not None}")
    return 0


def cmd_observations(args: argparse.Namespace, client: Client) -> int:
    """Handle the 'observations' command."""
    page = observations.get_observations(client, options_from_args(args))
    _print_json(page.model_dump(mode="json"))
    return 0


def cmd_observation(args: argparse.Namespace, client: Client) -> int:
    """Handle the 'observation' command."""
    if args.full:
        full = observations.get_observation(client, args.id)
        _print_json(full.model_dump(mode="json"))
    else:
        simple = observations.get_simple_observation(client, args.id)
        _print_json(simple.model_dump(mode="json"))
    return 0


def cmd_user(args: argparse.Namespace, client: Client) -> int:
    """Handle the 'user' command."""
    page = observations.get_observations_by_username(client, args.login)
    _print_json(page.model_dump(mode="json"))
    return 0


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the CLI."""
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.debug:
        logging.basicConfig(level=logging.DEBUG)

    if args.command is None:
        parser.print_help()
        return 0

    if args.command == "info":
        return cmd_info(args)

    commands = {
        "observations": cmd_observations,
        "observation": cmd_observation,
        "user": cmd_user,
    }

    handler = commands.get(args.command)
    if handler is None:
        parser.print_help()
        return 1

    client = Client(get_settings())
    try:
        return handler(args, client)
    except NaturalistError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
