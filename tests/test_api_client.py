# Tests for spotify_api/client.py and spotify_api/models.py

import httpx
import pytest

from spotify_api.client import SpotifyApiClient
from spotify_api.models import Track
from spotify_oauth.errors import ApiError, AuthRefreshError, UnauthenticatedError
from tests.conftest import API_BASE


class TestApiGet:
    @pytest.mark.asyncio
    async def test_sends_bearer_token(self, api_client, storage, spotify):
        storage.save_tokens(access_token="cached", refresh_token="R", expires_in=3600)

        data = await api_client.api_get("/me")

        assert data["display_name"] == "Test User"
        assert len(spotify.api_requests) == 1
        request = spotify.api_requests[0]
        assert request.headers["Authorization"] == "Bearer cached"
        assert str(request.url) == f"{API_BASE}/me"

    @pytest.mark.asyncio
    async def test_unauthenticated_fails_before_network(self, api_client, spotify):
        with pytest.raises(UnauthenticatedError):
            await api_client.api_get("/me")
        assert spotify.api_requests == []
        assert spotify.token_requests == []

    @pytest.mark.asyncio
    async def test_expired_token_refreshes_then_calls(self, api_client, storage, clock, spotify):
        storage.save_tokens(access_token="stale", refresh_token="R", expires_in=60)
        clock.advance(600)

        await api_client.api_get("/me")

        assert len(spotify.token_requests) == 1
        assert spotify.token_requests[0]["grant_type"] == "refresh_token"
        assert storage.load_tokens().access_token == "fresh-access"
        assert spotify.api_requests[0].headers["Authorization"] == "Bearer fresh-access"

    @pytest.mark.asyncio
    async def test_refresh_failure_propagates(self, api_client, storage, clock, spotify):
        storage.save_tokens(access_token="stale", refresh_token="R", expires_in=60)
        clock.advance(600)
        spotify.token_status = 400

        with pytest.raises(AuthRefreshError):
            await api_client.api_get("/me")
        assert spotify.api_requests == []

    @pytest.mark.asyncio
    async def test_http_error_is_api_error_without_retry(self, api_client, storage, spotify):
        storage.save_tokens(access_token="cached", expires_in=3600)
        spotify.api_status = 503

        with pytest.raises(ApiError) as exc_info:
            await api_client.api_get("/me")

        assert exc_info.value.status == 503
        assert exc_info.value.body == "upstream failure"
        assert len(spotify.api_requests) == 1

    @pytest.mark.asyncio
    async def test_timeout_is_api_error(self, token_manager, storage):
        storage.save_tokens(access_token="cached", expires_in=3600)

        def timeout_handler(request):
            raise httpx.ConnectTimeout("timed out", request=request)

        client = SpotifyApiClient(
            token_manager,
            api_base=API_BASE,
            http_client=httpx.AsyncClient(transport=httpx.MockTransport(timeout_handler)),
            timeout=1.0,
        )
        with pytest.raises(ApiError) as exc_info:
            await client.api_get("/me")
        assert exc_info.value.status is None


class TestConvenienceReads:
    @pytest.mark.asyncio
    async def test_top_tracks_query(self, api_client, storage, spotify):
        storage.save_tokens(access_token="cached", expires_in=3600)

        tracks = await api_client.get_top_tracks("short_term", 10)

        request = spotify.api_requests[0]
        assert request.url.path == "/v1/me/top/tracks"
        assert request.url.params["time_range"] == "short_term"
        assert request.url.params["limit"] == "10"
        assert [track.name for track in tracks] == ["First Song", "Second Song"]

    @pytest.mark.asyncio
    async def test_profile(self, api_client, storage):
        storage.save_tokens(access_token="cached", expires_in=3600)
        profile = await api_client.get_profile()
        assert profile.display_name == "Test User"
        assert profile.avatar_url == "https://img.example.test/avatar.jpg"

    @pytest.mark.asyncio
    async def test_malformed_track_is_api_error(self, api_client, storage, spotify):
        storage.save_tokens(access_token="cached", expires_in=3600)
        del spotify.top_tracks["items"][0]["name"]

        with pytest.raises(ApiError) as exc_info:
            await api_client.get_top_tracks()

        assert exc_info.value.status == 200
        assert len(spotify.api_requests) == 1

    @pytest.mark.asyncio
    async def test_malformed_profile_is_api_error(self, api_client, storage, spotify):
        storage.save_tokens(access_token="cached", expires_in=3600)
        spotify.profile = ["not", "a", "profile"]

        with pytest.raises(ApiError):
            await api_client.get_profile()


class TestTrackModel:
    def test_display_helpers(self, spotify):
        track = Track.model_validate(spotify.top_tracks["items"][0])
        assert track.artist_names == "Artist A, Artist B"
        assert track.thumbnail_url == "https://img.example.test/64.jpg"
        assert track.duration_label == "3:35"

    def test_thumbnail_falls_back_to_larger_images(self):
        track = Track.model_validate({
            "id": "x",
            "name": "x",
            "album": {"images": [{"url": "big"}, {"url": "medium"}]},
        })
        assert track.thumbnail_url == "medium"

    def test_missing_album_and_preview(self):
        track = Track.model_validate({"id": "x", "name": "x", "duration_ms": 5000})
        assert track.thumbnail_url is None
        assert track.preview_url is None
        assert track.duration_label == "0:05"
