import os
from pathlib import Path
from typing import Final

# Project root directory
PROJECT_ROOT: Final[Path] = Path(__file__).resolve().parent.parent

ENV_FILE: Final[Path] = PROJECT_ROOT / ".env.local"
PROPERTIES_FILE: Final[Path] = PROJECT_ROOT / "application.properties"

DEFAULT_SCOPE: Final[tuple[str, ...]] = ("read", "activity:read_all")

# /athlete/activities is requested as a single fixed page
ACTIVITIES_PAGE: Final[int] = 1
ACTIVITIES_PAGE_SIZE: Final[int] = 100

REQUEST_TIMEOUT_SECONDS: Final[float] = float(os.getenv("STRAVA_REQUEST_TIMEOUT", "30"))

# configuration key -> credential field
PROPERTY_KEYS: Final[dict[str, str]] = {
    "strava.client-secret": "client_secret",
    "strava.application-client-id": "client_id",
    "strava.code": "authorization_code",
}
ENV_KEYS: Final[dict[str, str]] = {
    "STRAVA_CLIENT_SECRET": "client_secret",
    "STRAVA_APPLICATION_CLIENT_ID": "client_id",
    "STRAVA_CLIENT_ID": "client_id",
    "STRAVA_CODE": "authorization_code",
}
