"""Redirect/session controller

Drives the one-time OAuth redirect handshake on page load and owns the
in-memory view state (profile, top tracks, surfaced error).
"""

import enum
import logging
from typing import List, Optional
from urllib.parse import parse_qs, urlsplit, urlunsplit

from settings import SPOTIFY_CLIENT_ID, SPOTIFY_REDIRECT_URI, TOP_TRACKS_LIMIT, TOP_TRACKS_TIME_RANGE
from spotify_api.client import SpotifyApiClient
from spotify_api.models import Profile, Track
from spotify_oauth.authorization import AuthorizationURLBuilder
from spotify_oauth.errors import ConfigurationError, ProviderAuthorizationError, SpotifyAuthError
from spotify_oauth.token_manager import TokenLifecycleManager
from .navigator import Navigator

logger = logging.getLogger(__name__)

PLACEHOLDER_CLIENT_IDS = ("", "YOUR_SPOTIFY_CLIENT_ID")


class SessionState(str, enum.Enum):
    UNAUTHENTICATED = "unauthenticated"
    AWAITING_REDIRECT = "awaiting_redirect"
    AUTHENTICATED = "authenticated"


def redirect_uri_for(url: str) -> str:
    """Origin + path of ``url``, without query string or fragment"""
    parts = urlsplit(url)
    return urlunsplit((parts.scheme, parts.netloc, parts.path or "/", "", ""))


class SessionController:
    """Session state machine shared by every presentation skin

    UNAUTHENTICATED -> AWAITING_REDIRECT -> AUTHENTICATED, and back to
    UNAUTHENTICATED on logout or on a failed handshake.
    """

    def __init__(
        self,
        token_manager: TokenLifecycleManager,
        api_client: SpotifyApiClient,
        auth_builder: AuthorizationURLBuilder,
        client_id: str = SPOTIFY_CLIENT_ID,
        redirect_uri: str = SPOTIFY_REDIRECT_URI,
        time_range: str = TOP_TRACKS_TIME_RANGE,
        limit: int = TOP_TRACKS_LIMIT,
    ):
        self.token_manager = token_manager
        self.api_client = api_client
        self.auth_builder = auth_builder
        self.client_id = client_id
        self.redirect_uri = redirect_uri
        self.time_range = time_range
        self.limit = limit

        self.state = SessionState.UNAUTHENTICATED
        self.profile: Optional[Profile] = None
        self.tracks: List[Track] = []
        self.error = ""
        self.loading = False

    def resolve_redirect_uri(self, page_url: str) -> str:
        """Configured redirect URI, or the page's own origin + path"""
        return self.redirect_uri or redirect_uri_for(page_url)

    async def handle_load(self, url: str, navigator: Navigator) -> SessionState:
        """Process a page load at ``url``

        A ``code`` parameter is exchanged exactly once: the query string is
        replaced away right after the tokens are stored, so reloading the
        page does not replay the single-use code.
        """
        self._reset_view()
        params = parse_qs(urlsplit(url).query)
        code = params.get("code", [None])[0]
        error_param = params.get("error", [None])[0]

        if error_param:
            description = params.get("error_description", [None])[0]
            logger.warning(f"Provider returned authorization error: {error_param}")
            self.error = str(ProviderAuthorizationError(error_param, description))
            self.state = SessionState.UNAUTHENTICATED

        if code:
            self.state = SessionState.AWAITING_REDIRECT
            self.loading = True
            try:
                await self.token_manager.exchange_code(code, self.resolve_redirect_uri(url))
            except SpotifyAuthError as e:
                logger.error(f"Code exchange failed: {e}")
                self.error = str(e)
                self.state = SessionState.UNAUTHENTICATED
                return self.state
            finally:
                self.loading = False

            navigator.replace_url(redirect_uri_for(url))
            await self.load_data()
            return self.state

        if error_param:
            return self.state

        try:
            token = await self.token_manager.ensure_valid_token()
        except SpotifyAuthError as e:
            logger.warning(f"Stored session could not be refreshed: {e}")
            self.error = str(e)
            self.state = SessionState.UNAUTHENTICATED
            return self.state

        if token:
            await self.load_data()
        else:
            self.state = SessionState.UNAUTHENTICATED
        return self.state

    async def load_data(self) -> None:
        """Fetch profile then top tracks, surfacing any failure as one message"""
        self.loading = True
        self.error = ""
        try:
            profile = await self.api_client.get_profile()
            tracks = await self.api_client.get_top_tracks(self.time_range, self.limit)
        except SpotifyAuthError as e:
            logger.error(f"Loading profile and top tracks failed: {e}")
            self.error = str(e)
            self.state = SessionState.UNAUTHENTICATED
            return
        finally:
            self.loading = False

        self.profile = profile
        self.tracks = tracks
        self.state = SessionState.AUTHENTICATED

    def login(self, redirect_uri: str, navigator: Navigator) -> str:
        """Start a login attempt and send the browser to Spotify

        Returns:
            The authorization URL navigated to

        Raises:
            ConfigurationError: No client id configured
        """
        self.error = ""
        if self.client_id in PLACEHOLDER_CLIENT_IDS:
            self.error = "Set SPOTIFY_CLIENT_ID before logging in."
            raise ConfigurationError(self.error)

        auth_url = self.auth_builder.get_authorize_url(self.redirect_uri or redirect_uri)
        logger.info("Redirecting to Spotify authorization")
        navigator.navigate(auth_url)
        return auth_url

    def logout(self) -> None:
        """Drop the stored session and reset the view state"""
        self.token_manager.storage.clear_tokens()
        self._reset_view()

    def _reset_view(self) -> None:
        # one controller serves every page load
        self.profile = None
        self.tracks = []
        self.error = ""
        self.loading = False
        self.state = SessionState.UNAUTHENTICATED
