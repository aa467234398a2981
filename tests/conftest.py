"""Pytest configuration and shared fixtures."""

import sys
import tempfile
from pathlib import Path
from unittest.mock import MagicMock

import pytest

# Add project root to path for imports
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from strava_data_analyser.type_defs import StravaCredentials  # noqa: E402


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test files."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def credentials():
    return StravaCredentials(client_secret="secret123", client_id=9342, authorization_code="code123")


@pytest.fixture
def token_response():
    """Payload returned by stravalib's exchange_code_for_token."""
    return {
        "access_token": "access123",
        "refresh_token": "refresh123",
        "expires_at": 1449878400,
    }


@pytest.fixture
def mock_strava_client(token_response):
    """A stravalib.Client stand-in whose token exchange succeeds."""
    client = MagicMock()
    client.access_token = None
    client.exchange_code_for_token.return_value = token_response
    return client


@pytest.fixture
def sample_activity_payload():
    """Sample activity JSON with fields the domain object does not know."""
    return {
        "activityType": "Run",
        "duration": 1800,
        "distance": 5000.0,
        "name": "Morning Run",
        "id": 1234567890,
        "average_heartrate": 145,
        "map": {"summary_polyline": "o}zcFwxjqU"},
    }


@pytest.fixture
def mock_env_file(temp_dir):
    """Create a mock .env.local file."""
    env_content = """
# Strava application
STRAVA_APPLICATION_CLIENT_ID=12345
STRAVA_CLIENT_SECRET=secret123
STRAVA_CODE=code123
"""
    env_file = temp_dir / ".env.local"
    env_file.write_text(env_content)
    return env_file


@pytest.fixture
def mock_properties_file(temp_dir):
    """Create a mock application.properties file."""
    properties_content = """
# Strava application
strava.client-secret=props-secret
strava.application-client-id = 777
! legacy comment style
strava.code: props-code
server.port=8080
"""
    properties_file = temp_dir / "application.properties"
    properties_file.write_text(properties_content)
    return properties_file
