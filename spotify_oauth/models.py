"""Data models for Spotify OAuth"""

from dataclasses import dataclass
from typing import Any, Dict, Optional


@dataclass
class PkceCodes:
    """PKCE (Proof Key for Code Exchange) codes for OAuth flow

    Attributes:
        code_verifier: Random string kept by the client until the code exchange
        code_challenge: SHA256 of code_verifier, sent in the authorize request
    """
    code_verifier: str
    code_challenge: str


@dataclass
class TokenResponse:
    """Successful token endpoint response

    Attributes:
        access_token: Bearer token for Web API calls
        refresh_token: Present on the initial exchange, optional on refresh
        expires_in: Access token lifetime in seconds
        token_type: Usually "Bearer"
        scope: Space separated scopes granted
    """
    access_token: str
    refresh_token: Optional[str] = None
    expires_in: Optional[int] = None
    token_type: str = "Bearer"
    scope: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TokenResponse":
        """Build from the JSON payload; raises KeyError without access_token"""
        expires_in = data.get("expires_in")
        return cls(
            access_token=data["access_token"],
            refresh_token=data.get("refresh_token") or None,
            expires_in=int(expires_in) if expires_in else None,
            token_type=data.get("token_type", "Bearer"),
            scope=data.get("scope"),
        )
