import json
from datetime import date
from unittest.mock import patch

import pytest
from dateutil import tz as dateutil_tz

from strava_data_analyser.cli import build_parser, main
from strava_data_analyser.config import DEFAULT_SCOPE
from strava_data_analyser.exceptions import AuthenticationError, ConfigurationError


def test_parser_activities():
    args = build_parser().parse_args(["activities", "--from", "2015-12-11", "--to", "2015-12-12", "--code", "abc"])
    assert args.command == "activities"
    assert args.from_date == date(2015, 12, 11)
    assert args.to_date == date(2015, 12, 12)
    assert args.authorization_code == "abc"
    assert args.tz is None


def test_parser_rejects_bad_date():
    with pytest.raises(SystemExit) as excinfo:
        build_parser().parse_args(["activities", "--from", "11/12/2015", "--to", "2015-12-12"])
    assert excinfo.value.code == 2


def test_parser_athlete_requires_integer_id():
    with pytest.raises(SystemExit):
        build_parser().parse_args(["athlete", "abc"])


def test_parser_auth_url_scope_is_repeatable():
    args = build_parser().parse_args(
        ["auth-url", "--redirect-uri", "http://localhost/cb", "--scope", "read", "--scope", "profile:read_all"]
    )
    assert args.scope == ["read", "profile:read_all"]


def test_main_athlete_prints_json(capsys):
    with (
        patch("strava_data_analyser.cli.resolve_strava_credentials"),
        patch("strava_data_analyser.cli.OauthClient"),
        patch("strava_data_analyser.cli.StravaDataRepository") as mock_repository,
    ):
        mock_repository.return_value.get_athlete.return_value = {"id": 4124, "firstname": "Manol"}
        assert main(["athlete", "4124"]) == 0

    mock_repository.return_value.get_athlete.assert_called_once_with(4124)
    assert json.loads(capsys.readouterr().out) == {"id": 4124, "firstname": "Manol"}


def test_main_activities_passes_dates(capsys):
    with (
        patch("strava_data_analyser.cli.resolve_strava_credentials"),
        patch("strava_data_analyser.cli.OauthClient"),
        patch("strava_data_analyser.cli.StravaDataRepository") as mock_repository,
    ):
        mock_repository.return_value.list_activities_for_athlete.return_value = []
        assert main(["activities", "--from", "2015-12-11", "--to", "2015-12-12", "--tz", "UTC"]) == 0

    mock_repository.return_value.list_activities_for_athlete.assert_called_once_with(
        date(2015, 12, 11), date(2015, 12, 12), tz=dateutil_tz.UTC
    )
    assert json.loads(capsys.readouterr().out) == []


def test_main_activity_uses_resolved_credentials(credentials):
    with (
        patch("strava_data_analyser.cli.resolve_strava_credentials", return_value=credentials) as mock_resolve,
        patch("strava_data_analyser.cli.OauthClient") as mock_oauth,
        patch("strava_data_analyser.cli.StravaDataRepository") as mock_repository,
    ):
        mock_repository.return_value.get_activity.return_value = {"id": 7}
        assert main(["activity", "7", "--client-id", "9342", "--client-secret", "s", "--code", "c"]) == 0

    input_data = mock_resolve.call_args.args[0]
    assert input_data.client_id == "9342"
    assert input_data.client_secret == "s"
    assert input_data.authorization_code == "c"
    mock_oauth.assert_called_once_with(credentials)
    mock_repository.assert_called_once_with(mock_oauth.return_value)


def test_main_returns_1_on_missing_configuration():
    with patch("strava_data_analyser.cli.resolve_strava_credentials", side_effect=ConfigurationError("missing")):
        assert main(["athlete", "4124"]) == 1


def test_main_returns_1_on_failed_exchange():
    with (
        patch("strava_data_analyser.cli.resolve_strava_credentials"),
        patch("strava_data_analyser.cli.OauthClient"),
        patch("strava_data_analyser.cli.StravaDataRepository", side_effect=AuthenticationError("bad code")),
    ):
        assert main(["athlete", "4124"]) == 1


def test_main_auth_url(capsys):
    with (
        patch("strava_data_analyser.cli.resolve_client_id", return_value=9342),
        patch(
            "strava_data_analyser.cli.build_authorization_url",
            return_value="https://www.strava.com/oauth/authorize?client_id=9342",
        ) as mock_build,
    ):
        assert main(["auth-url", "--redirect-uri", "http://localhost/cb"]) == 0

    mock_build.assert_called_once_with(9342, "http://localhost/cb", DEFAULT_SCOPE, None)
    assert capsys.readouterr().out.strip() == "https://www.strava.com/oauth/authorize?client_id=9342"


def test_main_unknown_time_zone_exits_before_exchange():
    argv = [
        "activities",
        "--from",
        "2015-12-11",
        "--to",
        "2015-12-12",
        "--tz",
        "Not/AZone",
        "--client-id",
        "1",
        "--client-secret",
        "s",
        "--code",
        "c",
    ]
    with (
        patch("strava_data_analyser.cli.resolve_strava_credentials") as mock_resolve,
        patch("strava_data_analyser.cli.OauthClient") as mock_oauth,
        patch("strava_data_analyser.cli.StravaDataRepository") as mock_repository,
    ):
        with pytest.raises(SystemExit) as excinfo:
            main(argv)

    assert excinfo.value.code == 2
    mock_resolve.assert_not_called()
    mock_oauth.assert_not_called()
    mock_repository.assert_not_called()
