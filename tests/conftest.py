# Shared fixtures: fake clock, in-memory session, scripted Spotify endpoints.

from __future__ import annotations

import json
from urllib.parse import parse_qs

import httpx
import pytest

from session.controller import SessionController
from spotify_api.client import SpotifyApiClient
from spotify_oauth.authorization import AuthorizationURLBuilder
from spotify_oauth.pkce import PKCEManager
from spotify_oauth.token_manager import TokenLifecycleManager
from utils.clock import Clock
from utils.storage import MemorySessionStore, TokenStorage

TOKEN_URL = "https://accounts.example.test/api/token"
AUTHORIZE_URL = "https://accounts.example.test/authorize"
API_BASE = "https://api.example.test/v1"
CLIENT_ID = "test-client-id"

NOW_MS = 1_700_000_000_000


class FakeClock(Clock):
    def __init__(self, now_ms: int = NOW_MS):
        self.current = now_ms

    def now_ms(self) -> int:
        return self.current

    def advance(self, seconds: float) -> None:
        self.current += int(seconds * 1000)


class FakeSpotify:
    """Scripted token endpoint and Web API behind an httpx.MockTransport."""

    def __init__(self):
        self.token_requests: list[dict[str, str]] = []
        self.api_requests: list[httpx.Request] = []
        self.token_status = 200
        self.token_body: dict = {
            "access_token": "fresh-access",
            "refresh_token": "fresh-refresh",
            "expires_in": 3600,
            "token_type": "Bearer",
        }
        self.api_status = 200
        self.profile = {
            "id": "user-1",
            "display_name": "Test User",
            "images": [{"url": "https://img.example.test/avatar.jpg"}],
        }
        self.top_tracks = {
            "items": [
                {
                    "id": "t1",
                    "name": "First Song",
                    "artists": [{"name": "Artist A"}, {"name": "Artist B"}],
                    "album": {
                        "name": "Album",
                        "images": [
                            {"url": "https://img.example.test/640.jpg"},
                            {"url": "https://img.example.test/300.jpg"},
                            {"url": "https://img.example.test/64.jpg"},
                        ],
                    },
                    "duration_ms": 215000,
                    "preview_url": "https://p.example.test/t1.mp3",
                },
                {
                    "id": "t2",
                    "name": "Second Song",
                    "artists": [{"name": "Artist C"}],
                    "album": {"name": "Single", "images": []},
                    "duration_ms": 62000,
                    "preview_url": None,
                },
            ]
        }

    async def handler(self, request: httpx.Request) -> httpx.Response:
        if str(request.url) == TOKEN_URL:
            form = {k: v[0] for k, v in parse_qs(request.content.decode()).items()}
            self.token_requests.append(form)
            if self.token_status != 200:
                return httpx.Response(self.token_status, json={"error": "invalid_grant"})
            return httpx.Response(200, json=self.token_body)

        self.api_requests.append(request)
        if self.api_status != 200:
            return httpx.Response(self.api_status, text="upstream failure")
        if request.url.path == "/v1/me":
            return httpx.Response(200, json=self.profile)
        if request.url.path == "/v1/me/top/tracks":
            return httpx.Response(200, json=self.top_tracks)
        return httpx.Response(404, text=json.dumps({"error": "not found"}))

    def client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(self.handler))


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def store():
    return MemorySessionStore()


@pytest.fixture
def storage(store, clock):
    return TokenStorage(store, clock, leeway_seconds=30, expire_when_ttl_missing=True)


@pytest.fixture
def spotify():
    return FakeSpotify()


@pytest.fixture
def token_manager(storage, spotify):
    return TokenLifecycleManager(
        storage,
        client_id=CLIENT_ID,
        token_url=TOKEN_URL,
        http_client=spotify.client(),
        timeout=5.0,
    )


@pytest.fixture
def api_client(token_manager, spotify):
    return SpotifyApiClient(token_manager, api_base=API_BASE, http_client=spotify.client(), timeout=5.0)


@pytest.fixture
def controller(token_manager, api_client, storage):
    return SessionController(
        token_manager=token_manager,
        api_client=api_client,
        auth_builder=AuthorizationURLBuilder(
            PKCEManager(storage), client_id=CLIENT_ID, scopes=["user-top-read"], authorize_url=AUTHORIZE_URL
        ),
        client_id=CLIENT_ID,
        redirect_uri="",
    )
