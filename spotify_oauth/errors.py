"""Error taxonomy for the Spotify session core"""

from typing import Optional


class SpotifyAuthError(Exception):
    """Base class for every failure surfaced to the UI"""


class ConfigurationError(SpotifyAuthError):
    """The client is not configured well enough to start a login"""


class ProviderAuthorizationError(SpotifyAuthError):
    """The provider redirected back with an ``error`` query parameter

    Typically ``access_denied`` when the user declines consent.
    """

    def __init__(self, error: str, description: Optional[str] = None):
        self.error = error
        self.description = description
        message = error if not description else f"{error}: {description}"
        super().__init__(message)


class HTTPFailure(SpotifyAuthError):
    """A call that failed with a status code (None for timeouts and transport errors)"""

    label = "Request failed"

    def __init__(self, status: Optional[int], body: str):
        self.status = status
        self.body = body
        if status is None:
            super().__init__(f"{self.label}: {body}")
        else:
            super().__init__(f"{self.label}: {status} {body}")


class AuthExchangeError(HTTPFailure):
    """Authorization code exchange rejected; a fresh login is required"""

    label = "Token exchange failed"


class AuthRefreshError(HTTPFailure):
    """Refresh grant rejected; the session must be treated as unauthenticated"""

    label = "Refresh failed"


class ApiError(HTTPFailure):
    """Web API call failed after a token was presented"""

    label = "API error"


class UnauthenticatedError(SpotifyAuthError):
    """No usable credential before a call was attempted"""

    def __init__(self, message: str = "Authorization required"):
        super().__init__(message)
