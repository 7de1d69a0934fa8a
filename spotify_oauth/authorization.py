"""OAuth authorization URL construction"""

from typing import List, Optional
from urllib.parse import urlencode

from settings import AUTHORIZE_URL, SCOPES
from .pkce import PKCEManager


class AuthorizationURLBuilder:
    """Builds Spotify authorization URLs with PKCE"""

    def __init__(
        self,
        pkce_manager: PKCEManager,
        client_id: str,
        scopes: Optional[List[str]] = None,
        authorize_url: str = AUTHORIZE_URL,
    ):
        self.pkce = pkce_manager
        self.client_id = client_id
        self.scopes = list(scopes if scopes is not None else SCOPES)
        self.authorize_url = authorize_url

    def get_authorize_url(self, redirect_uri: str) -> str:
        """Start a login attempt and return the URL to send the browser to

        A new verifier is generated and persisted, replacing any earlier one.

        Args:
            redirect_uri: Page URL registered with Spotify (no query string)

        Returns:
            Full authorization URL
        """
        codes = self.pkce.begin()

        params = {
            "response_type": "code",
            "client_id": self.client_id,
            "scope": " ".join(self.scopes),
            "redirect_uri": redirect_uri,
            "code_challenge_method": "S256",
            "code_challenge": codes.code_challenge,
        }

        return f"{self.authorize_url}?{urlencode(params)}"
