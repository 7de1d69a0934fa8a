"""
Process-wide session wiring for the web app.
"""
import logging
from typing import Optional

from settings import SPOTIFY_CLIENT_ID
from session.controller import SessionController
from spotify_api.client import SpotifyApiClient
from spotify_oauth.authorization import AuthorizationURLBuilder
from spotify_oauth.pkce import PKCEManager
from spotify_oauth.token_manager import TokenLifecycleManager
from utils.storage import FileSessionStore, TokenStorage

logger = logging.getLogger(__name__)

_controller: Optional[SessionController] = None


def build_controller(storage: Optional[TokenStorage] = None, client_id: str = SPOTIFY_CLIENT_ID) -> SessionController:
    """Wire storage, token lifecycle, API gateway and controller together"""
    storage = storage or TokenStorage(FileSessionStore())
    token_manager = TokenLifecycleManager(storage, client_id=client_id)
    return SessionController(
        token_manager=token_manager,
        api_client=SpotifyApiClient(token_manager),
        auth_builder=AuthorizationURLBuilder(PKCEManager(storage), client_id=client_id),
        client_id=client_id,
    )


def get_controller() -> SessionController:
    """Single user, single session: one controller for the whole process"""
    global _controller
    if _controller is None:
        _controller = build_controller()
        logger.debug("Session controller initialized")
    return _controller
