"""Fetches a single plain activity record from a fixed HTTP endpoint."""

import httpx

from .config import REQUEST_TIMEOUT_SECONDS
from .domain import Activity
from .exceptions import NetworkError, NotFoundError
from .utils import get_logger


class StravaService:
    """
    Generic GET of ``endpoint`` decoded into an Activity.

    Unlike StravaDataRepository this path carries no OAuth token.
    """

    def __init__(self, endpoint: str, http_client: httpx.Client | None = None, timeout: float = REQUEST_TIMEOUT_SECONDS):
        self.endpoint = endpoint
        self.http_client = http_client if http_client is not None else httpx.Client(timeout=timeout)
        self.logger = get_logger(self.__class__.__name__)

    def get_activity(self) -> Activity:
        self.logger.info(f"Fetching activity from {self.endpoint}")
        try:
            response = self.http_client.get(self.endpoint)
            response.raise_for_status()
        except httpx.HTTPStatusError as err:
            if err.response.status_code == 404:
                raise NotFoundError(f"No activity at {self.endpoint}", resource=self.endpoint) from err
            self.logger.warning(f"Activity endpoint returned {err.response.status_code}")
            raise NetworkError(f"Activity endpoint returned {err.response.status_code}") from err
        except httpx.HTTPError as err:
            self.logger.warning(f"Activity request failed: {err}")
            raise NetworkError(f"Activity request failed: {err}") from err

        try:
            payload = response.json()
        except ValueError as err:
            raise NetworkError(f"Activity endpoint returned invalid JSON: {err}") from err
        if not isinstance(payload, dict):
            raise NetworkError(f"Activity endpoint returned {type(payload).__name__}, expected an object")
        return Activity.from_dict(payload)

    def close(self) -> None:
        self.http_client.close()

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.close()
