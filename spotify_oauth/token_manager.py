"""Token lifecycle: cached access, coalesced refresh, code exchange"""

import asyncio
import logging
from typing import Optional

import httpx

from settings import REQUEST_TIMEOUT, SPOTIFY_CLIENT_ID, TOKEN_URL
from utils.storage import TokenStorage
from .errors import AuthExchangeError
from .models import TokenResponse
from .token_exchange import exchange_code
from .token_refresh import refresh_access_token

logger = logging.getLogger(__name__)


class TokenLifecycleManager:
    """Keeps a usable access token in the session store

    At most one refresh grant is in flight at a time; concurrent callers of
    ensure_valid_token share its outcome.
    """

    def __init__(
        self,
        storage: TokenStorage,
        client_id: str = SPOTIFY_CLIENT_ID,
        token_url: str = TOKEN_URL,
        http_client: Optional[httpx.AsyncClient] = None,
        timeout: float = REQUEST_TIMEOUT,
    ):
        self.storage = storage
        self.client_id = client_id
        self.token_url = token_url
        self.http_client = http_client
        self.timeout = timeout
        self._refresh_task: Optional["asyncio.Task[str]"] = None

    async def ensure_valid_token(self) -> Optional[str]:
        """Return a usable access token, refreshing it when expired

        Returns:
            Access token, or None when the user has to log in again

        Raises:
            AuthRefreshError: The refresh grant was rejected
        """
        tokens = self.storage.load_tokens()
        if tokens.access_token and self.storage.clock.now_ms() < tokens.expiry:
            return tokens.access_token

        if tokens.refresh_token:
            logger.info("Access token expired, refreshing...")
            return await self._coalesced_refresh(tokens.refresh_token)

        logger.debug("No usable access token and no refresh token")
        return None

    async def _coalesced_refresh(self, refresh_token: str) -> str:
        if self._refresh_task is None:
            self._refresh_task = asyncio.ensure_future(self._refresh_and_store(refresh_token))
            self._refresh_task.add_done_callback(self._on_refresh_done)
        else:
            logger.debug("Joining refresh already in flight")
        # shield: one cancelled caller must not cancel the shared refresh
        return await asyncio.shield(self._refresh_task)

    def _on_refresh_done(self, task: "asyncio.Task[str]") -> None:
        if self._refresh_task is task:
            self._refresh_task = None
        if not task.cancelled():
            # marks the exception as retrieved when every waiter was cancelled
            task.exception()

    async def _refresh_and_store(self, refresh_token: str) -> str:
        response = await self.refresh(refresh_token)
        return response.access_token

    async def refresh(self, refresh_token: str) -> TokenResponse:
        """Run the refresh grant and persist the result

        The stored refresh token is kept when the response does not rotate it.

        Raises:
            AuthRefreshError: Rejected, timed out, or malformed; never retried
        """
        response = await refresh_access_token(
            refresh_token,
            client_id=self.client_id,
            token_url=self.token_url,
            client=self.http_client,
            timeout=self.timeout,
        )
        self._store(response)
        return response

    async def exchange_code(self, code: str, redirect_uri: str) -> TokenResponse:
        """Exchange an authorization code using the stored PKCE verifier

        Tokens are persisted only on success; the consumed verifier is then
        discarded.

        Raises:
            AuthExchangeError: No verifier, or the exchange failed
        """
        code_verifier = self.storage.load_verifier()
        if not code_verifier:
            raise AuthExchangeError(None, "No PKCE verifier found. Start login flow first.")

        response = await exchange_code(
            code,
            redirect_uri,
            code_verifier,
            client_id=self.client_id,
            token_url=self.token_url,
            client=self.http_client,
            timeout=self.timeout,
        )
        self._store(response)
        self.storage.clear_verifier()
        return response

    def _store(self, response: TokenResponse) -> None:
        self.storage.save_tokens(
            access_token=response.access_token,
            refresh_token=response.refresh_token,
            expires_in=response.expires_in,
        )
