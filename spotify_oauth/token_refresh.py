"""OAuth token refresh functionality"""

import logging
from typing import Optional

import httpx

from settings import REQUEST_TIMEOUT, TOKEN_URL
from .errors import AuthRefreshError
from .models import TokenResponse
from .token_exchange import post_token_request

logger = logging.getLogger(__name__)


async def refresh_access_token(
    refresh_token: str,
    client_id: str,
    token_url: str = TOKEN_URL,
    client: Optional[httpx.AsyncClient] = None,
    timeout: float = REQUEST_TIMEOUT,
) -> TokenResponse:
    """Run the refresh_token grant

    Spotify may omit refresh_token from the response; the caller keeps the
    previous one in that case.

    Raises:
        AuthRefreshError: Rejected by the provider, timed out, or malformed
    """
    if not refresh_token:
        raise AuthRefreshError(None, "No refresh token available")

    form = {
        "client_id": client_id,
        "grant_type": "refresh_token",
        "refresh_token": refresh_token,
    }

    logger.info("Attempting to refresh Spotify access token...")
    tokens = await post_token_request(form, AuthRefreshError, token_url, client, timeout)
    logger.info("Successfully refreshed Spotify access token")
    return tokens
