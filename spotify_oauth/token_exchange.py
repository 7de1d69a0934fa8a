"""OAuth token exchange functionality"""

import json
import logging
from typing import Dict, Optional, Type

import httpx

from settings import REQUEST_TIMEOUT, TOKEN_URL
from .errors import AuthExchangeError, HTTPFailure
from .models import TokenResponse

logger = logging.getLogger(__name__)


async def post_token_request(
    form: Dict[str, str],
    error_cls: Type[HTTPFailure],
    token_url: str = TOKEN_URL,
    client: Optional[httpx.AsyncClient] = None,
    timeout: float = REQUEST_TIMEOUT,
) -> TokenResponse:
    """POST a form-encoded grant to the token endpoint

    Exactly one attempt is made. Timeouts and transport errors are reported
    through ``error_cls`` with status None, like any rejected request.

    Args:
        form: Grant parameters
        error_cls: Exception raised on any failure
        token_url: Token endpoint
        client: Shared AsyncClient (a short-lived one is created if None)
        timeout: Request timeout in seconds

    Returns:
        Parsed token response
    """
    try:
        if client is None:
            async with httpx.AsyncClient(timeout=timeout) as own_client:
                response = await own_client.post(token_url, data=form, timeout=timeout)
        else:
            response = await client.post(token_url, data=form, timeout=timeout)
    except httpx.TimeoutException as e:
        logger.error(f"Token request timed out after {timeout} seconds")
        raise error_cls(None, f"timed out after {timeout} seconds") from e
    except httpx.RequestError as e:
        logger.error(f"Token request failed: {e}")
        raise error_cls(None, str(e)) from e

    if not response.is_success:
        logger.error(f"Token request failed with status {response.status_code}: {response.text}")
        raise error_cls(response.status_code, response.text)

    try:
        return TokenResponse.from_dict(response.json())
    except (json.JSONDecodeError, KeyError, TypeError, ValueError) as e:
        logger.error(f"Malformed token response: {e}")
        raise error_cls(response.status_code, response.text) from e


async def exchange_code(
    code: str,
    redirect_uri: str,
    code_verifier: str,
    client_id: str,
    token_url: str = TOKEN_URL,
    client: Optional[httpx.AsyncClient] = None,
    timeout: float = REQUEST_TIMEOUT,
) -> TokenResponse:
    """Exchange an authorization code for tokens

    Authorization codes are single-use, so a failure is final for this
    login attempt and the call is never retried.

    Raises:
        AuthExchangeError: Rejected by the provider, timed out, or malformed
    """
    form = {
        "client_id": client_id,
        "grant_type": "authorization_code",
        "code": code,
        "redirect_uri": redirect_uri,
        "code_verifier": code_verifier,
    }

    logger.info(f"Exchanging authorization code for tokens at {token_url}")
    tokens = await post_token_request(form, AuthExchangeError, token_url, client, timeout)
    logger.info("Authorization code exchanged for tokens")
    return tokens
