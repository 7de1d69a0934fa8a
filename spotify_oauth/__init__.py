"""Spotify OAuth (authorization code + PKCE) session core"""

from .authorization import AuthorizationURLBuilder
from .errors import (
    ApiError,
    AuthExchangeError,
    AuthRefreshError,
    ConfigurationError,
    HTTPFailure,
    ProviderAuthorizationError,
    SpotifyAuthError,
    UnauthenticatedError,
)
from .models import PkceCodes, TokenResponse
from .pkce import PKCEManager, UNRESERVED_ALPHABET, derive_challenge, generate_verifier
from .token_exchange import exchange_code
from .token_manager import TokenLifecycleManager
from .token_refresh import refresh_access_token

__all__ = [
    "AuthorizationURLBuilder",
    "PKCEManager",
    "UNRESERVED_ALPHABET",
    "generate_verifier",
    "derive_challenge",
    "PkceCodes",
    "TokenResponse",
    "exchange_code",
    "refresh_access_token",
    "TokenLifecycleManager",
    "SpotifyAuthError",
    "ConfigurationError",
    "ProviderAuthorizationError",
    "HTTPFailure",
    "AuthExchangeError",
    "AuthRefreshError",
    "ApiError",
    "UnauthenticatedError",
]
