# Tests for the web app (web/app.py, web/endpoints, web/rendering.py)

from urllib.parse import parse_qs, urlsplit

import pytest
from fastapi.testclient import TestClient

from web.app import create_app
from web.dependencies import get_controller
from tests.conftest import AUTHORIZE_URL


@pytest.fixture
def client(controller):
    test_app = create_app()
    test_app.dependency_overrides[get_controller] = lambda: controller
    return TestClient(test_app)


def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


def test_landing_page_when_logged_out(client, spotify):
    response = client.get("/")
    assert response.status_code == 200
    assert "Log in with Spotify" in response.text
    assert "replaceState" not in response.text
    assert spotify.api_requests == []


def test_login_redirects_to_spotify(client, storage):
    response = client.get("/login", follow_redirects=False)

    assert response.status_code == 302
    location = response.headers["location"]
    assert location.startswith(AUTHORIZE_URL)
    params = parse_qs(urlsplit(location).query)
    assert params["redirect_uri"] == ["http://testserver/"]
    assert params["code_challenge_method"] == ["S256"]
    assert storage.load_verifier() is not None


def test_login_without_client_id(client, controller):
    controller.client_id = ""
    response = client.get("/login", follow_redirects=False)
    assert response.status_code == 500
    assert "SPOTIFY_CLIENT_ID" in response.text


def test_redirect_back_renders_tracks_and_strips_query(client, spotify, storage):
    client.get("/login", follow_redirects=False)

    response = client.get("/?code=ABC123")

    assert response.status_code == 200
    assert spotify.token_requests[0]["code"] == "ABC123"
    assert spotify.token_requests[0]["redirect_uri"] == "http://testserver/"
    assert 'window.history.replaceState({}, document.title, "http://testserver/")' in response.text
    assert "First Song" in response.text
    assert "Artist A, Artist B" in response.text
    assert "3:35" in response.text
    assert "no preview" in response.text
    assert "Test User" in response.text
    assert storage.load_tokens().access_token == "fresh-access"


def test_provider_error_is_shown(client):
    response = client.get("/?error=access_denied")
    assert response.status_code == 200
    assert "access_denied" in response.text


def test_provider_error_is_gone_on_next_load(client):
    client.get("/?error=access_denied")
    response = client.get("/")
    assert "access_denied" not in response.text
    assert "Log in with Spotify" in response.text


def test_cleared_session_shows_landing_page(client, storage):
    storage.save_tokens(access_token="cached", refresh_token="R", expires_in=3600)
    assert "Test User" in client.get("/").text

    storage.clear_tokens()
    response = client.get("/")

    assert response.status_code == 200
    assert "Test User" not in response.text
    assert "First Song" not in response.text
    assert "Hi there!" in response.text


def test_malformed_api_payload_is_shown_not_raised(client, storage, spotify):
    storage.save_tokens(access_token="cached", expires_in=3600)
    del spotify.top_tracks["items"][0]["name"]

    response = client.get("/")

    assert response.status_code == 200
    assert "API error: 200" in response.text


def test_track_names_are_escaped(client, spotify, storage):
    storage.save_tokens(access_token="cached", expires_in=3600)
    spotify.top_tracks["items"][0]["name"] = "<script>alert(1)</script>"

    response = client.get("/")

    assert "<script>alert(1)</script>" not in response.text
    assert "&lt;script&gt;" in response.text


def test_logout_clears_session(client, storage, controller):
    storage.save_tokens(access_token="cached", refresh_token="R", expires_in=3600)
    client.get("/")
    assert controller.profile is not None

    response = client.post("/logout", follow_redirects=False)

    assert response.status_code == 303
    assert response.headers["location"] == "/"
    assert storage.load_tokens().access_token is None
    assert controller.profile is None


def test_auth_status(client, storage):
    storage.save_tokens(access_token="secret-access", refresh_token="secret-refresh", expires_in=3600)

    data = client.get("/auth/status").json()

    assert data["has_tokens"] is True
    assert data["is_expired"] is False
    assert data["session_state"] == "unauthenticated"
    assert "secret" not in str(data)
