"""Read-only Strava API calls made with an exchanged access token."""

from contextlib import contextmanager
from datetime import date

import requests
from stravalib import exc, model

from .auth import OauthClient
from .config import ACTIVITIES_PAGE, ACTIVITIES_PAGE_SIZE
from .exceptions import AuthenticationError, NetworkError, NotFoundError
from .utils import get_logger, to_epoch_bounds


class StravaDataRepository:
    """
    Forwards activity and athlete lookups to stravalib.

    The token is acquired in the constructor, so a failed exchange means no
    repository is ever built.
    """

    def __init__(self, oauth_client: OauthClient):
        self.oauth_client = oauth_client
        self.token = oauth_client.get_token()
        self.client = oauth_client.client
        self.logger = get_logger(self.__class__.__name__)

    def get_activity(self, activity_id: int) -> model.DetailedActivity:
        self.logger.info(f"Fetching activity {activity_id}.")
        with self._translate_errors(f"activity {activity_id}"):
            return self.client.get_activity(activity_id, include_all_efforts=True)

    def get_athlete(self, athlete_id: int) -> model.SummaryAthlete:
        self.logger.info(f"Fetching athlete {athlete_id}.")
        with self._translate_errors(f"athlete {athlete_id}"):
            raw = self.client.protocol.get("/athletes/{id}", id=athlete_id)
        return model.SummaryAthlete.model_validate({**raw, "bound_client": self.client})

    def list_activities_for_athlete(self, from_date: date, to_date: date, tz=None) -> list[model.SummaryActivity]:
        """
        Activities of the authenticated athlete started between the start of
        ``from_date`` and the start of ``to_date``.

        Only the first page of ACTIVITIES_PAGE_SIZE items is requested; any
        further activities are not returned.
        """
        after, before = to_epoch_bounds(from_date, to_date, tz)
        self.logger.info(f"Listing activities between {from_date} ({after}) and {to_date} ({before}).")
        with self._translate_errors("athlete activities"):
            raw_activities = self.client.protocol.get(
                "/athlete/activities",
                after=after,
                before=before,
                page=ACTIVITIES_PAGE,
                per_page=ACTIVITIES_PAGE_SIZE,
            )
        return [
            model.SummaryActivity.model_validate({**raw, "bound_client": self.client})
            for raw in raw_activities[:ACTIVITIES_PAGE_SIZE]
        ]

    @contextmanager
    def _translate_errors(self, resource: str):
        try:
            yield
        except exc.ObjectNotFound as err:
            raise NotFoundError(f"Strava {resource} not found", resource=resource) from err
        except exc.AccessUnauthorized as err:
            raise AuthenticationError(f"Access to Strava {resource} denied: {err}") from err
        except (exc.Fault, requests.RequestException) as err:
            self.logger.warning(f"Strava request for {resource} failed: {err}")
            raise NetworkError(f"Strava request for {resource} failed: {err}") from err
