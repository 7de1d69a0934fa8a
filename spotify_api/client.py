"""Authenticated request gateway for the Spotify Web API"""

import json
import logging
from typing import Any, Dict, List, Optional, Type, TypeVar

import httpx
from pydantic import BaseModel, ValidationError

from settings import API_BASE, REQUEST_TIMEOUT, TOP_TRACKS_LIMIT, TOP_TRACKS_TIME_RANGE
from spotify_oauth.errors import ApiError, UnauthenticatedError
from spotify_oauth.token_manager import TokenLifecycleManager
from .models import Profile, TopTracksPage, Track

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


class SpotifyApiClient:
    """Issues bearer-authenticated GETs against the Web API

    One attempt per call: no retry and no backoff. The caller decides
    whether a failure is surfaced or retried.
    """

    def __init__(
        self,
        token_manager: TokenLifecycleManager,
        api_base: str = API_BASE,
        http_client: Optional[httpx.AsyncClient] = None,
        timeout: float = REQUEST_TIMEOUT,
    ):
        self.token_manager = token_manager
        self.api_base = api_base.rstrip("/")
        self.http_client = http_client
        self.timeout = timeout

    async def api_get(self, path: str, params: Optional[Dict[str, Any]] = None) -> Any:
        """GET ``path`` (relative to the API base) and return parsed JSON

        Raises:
            UnauthenticatedError: No usable token; nothing was sent
            AuthRefreshError: The token had to be refreshed and the refresh failed
            ApiError: Non-success status, timeout, or transport failure
        """
        response = await self._send(path, params)
        return self._json(response)

    async def _send(self, path: str, params: Optional[Dict[str, Any]]) -> httpx.Response:
        token = await self.token_manager.ensure_valid_token()
        if not token:
            raise UnauthenticatedError()

        url = f"{self.api_base}{path}"
        headers = {"Authorization": f"Bearer {token}"}

        try:
            if self.http_client is None:
                async with httpx.AsyncClient(timeout=self.timeout) as client:
                    response = await client.get(url, params=params, headers=headers, timeout=self.timeout)
            else:
                response = await self.http_client.get(url, params=params, headers=headers, timeout=self.timeout)
        except httpx.TimeoutException as e:
            logger.error(f"GET {path} timed out after {self.timeout} seconds")
            raise ApiError(None, f"timed out after {self.timeout} seconds") from e
        except httpx.RequestError as e:
            logger.error(f"GET {path} failed: {e}")
            raise ApiError(None, str(e)) from e

        logger.debug(f"GET {path} - {response.status_code}")
        if not response.is_success:
            raise ApiError(response.status_code, response.text)
        return response

    @staticmethod
    def _json(response: httpx.Response) -> Any:
        try:
            return response.json()
        except json.JSONDecodeError as e:
            raise ApiError(response.status_code, response.text) from e

    async def _get_model(
        self,
        path: str,
        model: Type[ModelT],
        params: Optional[Dict[str, Any]] = None,
    ) -> ModelT:
        response = await self._send(path, params)
        try:
            return model.model_validate(self._json(response) or {})
        except ValidationError as e:
            logger.error(f"GET {path} returned an unexpected payload: {e.error_count()} invalid field(s)")
            raise ApiError(response.status_code, response.text) from e

    async def get_profile(self) -> Profile:
        """Current user's profile"""
        return await self._get_model("/me", Profile)

    async def get_top_tracks(
        self,
        time_range: str = TOP_TRACKS_TIME_RANGE,
        limit: int = TOP_TRACKS_LIMIT,
    ) -> List[Track]:
        """Most listened tracks for ``time_range`` (short_term is roughly the last 4 weeks)

        Raises:
            ApiError: Also when the payload does not match the track schema
        """
        page = await self._get_model(
            "/me/top/tracks",
            TopTracksPage,
            params={"time_range": time_range, "limit": limit},
        )
        return page.items
