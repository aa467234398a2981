from __future__ import annotations

import argparse
import json
import sys
from datetime import date
from pathlib import Path

from dateutil import tz as dateutil_tz

from .auth import OauthClient, build_authorization_url
from .config import DEFAULT_SCOPE
from .credentials import CredentialInput, resolve_client_id, resolve_strava_credentials
from .exceptions import StravaDataAnalyserError
from .repository import StravaDataRepository
from .utils import ActivityJSONEncoder, get_logger

logger = get_logger(__name__)


def _add_strava_auth_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--client-id", dest="client_id", help="Strava application client id")
    parser.add_argument("--client-secret", dest="client_secret", help="Strava client secret")
    parser.add_argument("--code", dest="authorization_code", help="Strava OAuth authorization code")
    parser.add_argument("--properties", dest="properties_file", type=Path, help="Properties file with strava.* keys")


def _parse_date(raw: str) -> date:
    try:
        return date.fromisoformat(raw)
    except ValueError as err:
        raise argparse.ArgumentTypeError(f"invalid date {raw!r}, expected YYYY-MM-DD") from err


def _parse_tz(raw: str):
    tzinfo = dateutil_tz.gettz(raw)
    if tzinfo is None:
        raise argparse.ArgumentTypeError(f"unknown time zone {raw!r}")
    return tzinfo


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="strava-data-analyser", description="Read-only Strava API client")
    subparsers = parser.add_subparsers(dest="command", required=True)

    auth_url = subparsers.add_parser("auth-url", help="Print the URL that grants an authorization code")
    _add_strava_auth_args(auth_url)
    auth_url.add_argument("--redirect-uri", required=True, help="Redirect URI registered for the application")
    auth_url.add_argument(
        "--scope",
        action="append",
        dest="scope",
        default=None,
        help=f"OAuth scope, repeatable (default: {','.join(DEFAULT_SCOPE)})",
    )
    auth_url.add_argument("--state", help="Opaque state echoed back on redirect")
    auth_url.set_defaults(handler=_handle_auth_url)

    activity = subparsers.add_parser("activity", help="Fetch one activity")
    _add_strava_auth_args(activity)
    activity.add_argument("activity_id", type=int)
    activity.set_defaults(handler=_handle_activity)

    athlete = subparsers.add_parser("athlete", help="Fetch one athlete")
    _add_strava_auth_args(athlete)
    athlete.add_argument("athlete_id", type=int)
    athlete.set_defaults(handler=_handle_athlete)

    activities = subparsers.add_parser("activities", help="List the authenticated athlete's activities")
    _add_strava_auth_args(activities)
    activities.add_argument("--from", dest="from_date", type=_parse_date, required=True, help="YYYY-MM-DD")
    activities.add_argument("--to", dest="to_date", type=_parse_date, required=True, help="YYYY-MM-DD")
    activities.add_argument("--tz", type=_parse_tz, help="Time zone of the dates (default: local)")
    activities.set_defaults(handler=_handle_activities)
    return parser


def _credential_input_from_args(args: argparse.Namespace) -> CredentialInput:
    return CredentialInput(
        client_id=getattr(args, "client_id", None),
        client_secret=getattr(args, "client_secret", None),
        authorization_code=getattr(args, "authorization_code", None),
        properties_file=getattr(args, "properties_file", None),
    )


def _build_repository(args: argparse.Namespace) -> StravaDataRepository:
    credentials = resolve_strava_credentials(_credential_input_from_args(args))
    return StravaDataRepository(OauthClient(credentials))


def _print_json(data) -> None:
    print(json.dumps(data, cls=ActivityJSONEncoder, indent=2, ensure_ascii=False))


def _handle_auth_url(args: argparse.Namespace) -> None:
    client_id = resolve_client_id(_credential_input_from_args(args))
    print(build_authorization_url(client_id, args.redirect_uri, args.scope or DEFAULT_SCOPE, args.state))


def _handle_activity(args: argparse.Namespace) -> None:
    _print_json(_build_repository(args).get_activity(args.activity_id))


def _handle_athlete(args: argparse.Namespace) -> None:
    _print_json(_build_repository(args).get_athlete(args.athlete_id))


def _handle_activities(args: argparse.Namespace) -> None:
    repository = _build_repository(args)
    activities = repository.list_activities_for_athlete(args.from_date, args.to_date, tz=args.tz)
    logger.info(f"Fetched {len(activities)} activities.")
    _print_json(activities)


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(sys.argv[1:] if argv is None else argv)
    try:
        args.handler(args)
    except StravaDataAnalyserError as exc:
        logger.error("Command failed: %s", exc)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
