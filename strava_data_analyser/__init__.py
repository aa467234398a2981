from .auth import OauthClient, build_authorization_url
from .credentials import CredentialInput, resolve_strava_credentials
from .domain import Activity
from .exceptions import (
    ApiError,
    AuthenticationError,
    ConfigurationError,
    NetworkError,
    NotFoundError,
    StravaDataAnalyserError,
)
from .repository import StravaDataRepository
from .service import StravaService
from .type_defs import AccessToken, StravaCredentials

__all__ = [
    "AccessToken",
    "Activity",
    "ApiError",
    "AuthenticationError",
    "ConfigurationError",
    "CredentialInput",
    "NetworkError",
    "NotFoundError",
    "OauthClient",
    "StravaCredentials",
    "StravaDataAnalyserError",
    "StravaDataRepository",
    "StravaService",
    "build_authorization_url",
    "resolve_strava_credentials",
]
