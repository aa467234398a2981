"""OAuth authorization-code exchange against Strava."""

from collections.abc import Iterable

import requests
from stravalib import exc
from stravalib.client import Client

from .config import DEFAULT_SCOPE
from .exceptions import AuthenticationError
from .type_defs import AccessToken, StravaCredentials
from .utils import get_logger, make_strava_client


class OauthClient:
    """
    Holds the application credentials and trades the authorization code for
    an access token.

    The exchange runs at most once per instance: the token is memoized and
    reused until ``invalidate()`` is called. It is never refreshed.
    """

    def __init__(self, credentials: StravaCredentials, client: Client | None = None):
        self.credentials = credentials
        self.client = client if client is not None else make_strava_client()
        self.logger = get_logger(self.__class__.__name__)
        self._token: AccessToken | None = None

    @property
    def has_token(self) -> bool:
        return self._token is not None

    def get_token(self) -> AccessToken:
        if self._token is None:
            self._token = self._exchange()
        return self._token

    def invalidate(self) -> None:
        """Forget the stored token so the next get_token() exchanges again."""
        self._token = None
        self.client.access_token = None

    def _exchange(self) -> AccessToken:
        self.logger.info(f"Exchanging authorization code for client {self.credentials.client_id}.")
        try:
            response = self.client.exchange_code_for_token(
                client_id=self.credentials.client_id,
                client_secret=self.credentials.client_secret,
                code=self.credentials.authorization_code,
            )
        except (exc.Fault, requests.RequestException) as err:
            self.logger.warning(f"Strava token exchange failed: {err}")
            raise AuthenticationError(f"Strava token exchange failed: {err}") from err

        access_token = response.get("access_token") if response else None
        if not access_token:
            raise AuthenticationError("Strava token exchange returned no access token")

        token = AccessToken(
            access_token=access_token,
            refresh_token=response.get("refresh_token"),
            expires_at=response.get("expires_at"),
        )
        self.client.access_token = token.access_token
        self.logger.info("Strava access token obtained successfully.")
        return token

    def authorization_url(
        self,
        redirect_uri: str,
        scope: Iterable[str] = DEFAULT_SCOPE,
        state: str | None = None,
    ) -> str:
        return build_authorization_url(self.credentials.client_id, redirect_uri, scope, state, client=self.client)


def build_authorization_url(
    client_id: int,
    redirect_uri: str,
    scope: Iterable[str] = DEFAULT_SCOPE,
    state: str | None = None,
    client: Client | None = None,
) -> str:
    """URL the athlete visits to grant access and receive the authorization code."""
    client = client if client is not None else make_strava_client()
    return client.authorization_url(
        client_id=client_id,
        redirect_uri=redirect_uri,
        scope=list(scope),
        state=state,
    )
