import os
from dataclasses import dataclass
from pathlib import Path

from .config import PROPERTIES_FILE
from .exceptions import ConfigurationError
from .type_defs import EnvConfig, StravaCredentials
from .utils import load_env_config, load_environ_config, load_properties_config


@dataclass(frozen=True)
class CredentialInput:
    client_id: str | int | None = None
    client_secret: str | None = None
    authorization_code: str | None = None
    properties_file: Path | None = None


def _parse_client_id(value) -> int:
    try:
        return int(str(value).strip())
    except ValueError as err:
        raise ConfigurationError(f"Strava application client id must be an integer, got {value!r}") from err


def _collect(input_data: CredentialInput, environ) -> EnvConfig:
    """
    Merge field by field: explicit input first, then .env.local, then the
    properties file, then the process environment.
    """
    sources = [
        load_env_config() or {},
        load_properties_config(input_data.properties_file or PROPERTIES_FILE) or {},
        load_environ_config(os.environ if environ is None else environ),
    ]

    def pick(field, explicit):
        if explicit not in (None, ""):
            return explicit
        for source in sources:
            if source.get(field):
                return source[field]
        return None

    return {
        "client_id": pick("client_id", input_data.client_id),
        "client_secret": pick("client_secret", input_data.client_secret),
        "authorization_code": pick("authorization_code", input_data.authorization_code),
    }


def resolve_client_id(input_data: CredentialInput, environ=None) -> int:
    client_id = _collect(input_data, environ)["client_id"]
    if client_id is None:
        raise ConfigurationError("Missing Strava credentials: strava.application-client-id.")
    return _parse_client_id(client_id)


def resolve_strava_credentials(input_data: CredentialInput, environ=None) -> StravaCredentials:
    config = _collect(input_data, environ)
    missing = [
        name
        for name, field in (
            ("strava.application-client-id", "client_id"),
            ("strava.client-secret", "client_secret"),
            ("strava.code", "authorization_code"),
        )
        if config[field] is None
    ]
    if missing:
        raise ConfigurationError(
            f"Missing Strava credentials: {', '.join(missing)}. "
            "Provide args, .env.local, application.properties or environment values."
        )
    return StravaCredentials(
        client_secret=str(config["client_secret"]),
        client_id=_parse_client_id(config["client_id"]),
        authorization_code=str(config["authorization_code"]),
    )
