"""Session storage for Spotify OAuth state

The session lives in a flat string-keyed store (verifier, access token,
refresh token, expiry), written one key at a time.
"""

import json
import logging
import os
import platform
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Optional

from settings import EXPIRE_WHEN_TTL_MISSING, SESSION_FILE, TOKEN_LEEWAY_SECONDS
from .clock import Clock, SystemClock

logger = logging.getLogger(__name__)

# Storage keys
VERIFIER_KEY = "spotify_code_verifier"
ACCESS_TOKEN_KEY = "spotify_access_token"
REFRESH_TOKEN_KEY = "spotify_refresh_token"
EXPIRY_KEY = "spotify_token_expiry"

ALL_KEYS = (VERIFIER_KEY, ACCESS_TOKEN_KEY, REFRESH_TOKEN_KEY, EXPIRY_KEY)


class SessionStore:
    """Synchronous string key/value store"""

    def get(self, key: str) -> Optional[str]:
        raise NotImplementedError

    def set(self, key: str, value: str) -> None:
        raise NotImplementedError

    def remove(self, key: str) -> None:
        raise NotImplementedError


class MemorySessionStore(SessionStore):
    """Process-local store, lost on exit"""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._data: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def remove(self, key: str) -> None:
        self._data.pop(key, None)

    def keys(self):
        return list(self._data)


class FileSessionStore(SessionStore):
    """JSON file store with owner-only permissions

    Every mutation rewrites the whole file, so each key write is a separate
    durable step.
    """

    def __init__(self, session_file: Optional[str] = None):
        self.session_path = Path(session_file if session_file else SESSION_FILE).expanduser()
        self._ensure_secure_directory()

    def _ensure_secure_directory(self):
        """Create parent directory with secure permissions"""
        parent_dir = self.session_path.parent
        if not parent_dir.exists():
            parent_dir.mkdir(parents=True, exist_ok=True)
            # Set directory permissions to 700 on Unix-like systems
            if platform.system() != "Windows":
                os.chmod(parent_dir, 0o700)

    def _read(self) -> Dict[str, str]:
        if not self.session_path.exists():
            return {}
        try:
            data = json.loads(self.session_path.read_text())
        except (ValueError, OSError) as e:
            logger.warning(f"Ignoring unreadable session file {self.session_path}: {e}")
            return {}
        if not isinstance(data, dict):
            return {}
        return {str(k): str(v) for k, v in data.items()}

    def _write(self, data: Dict[str, str]) -> None:
        self._ensure_secure_directory()
        self.session_path.write_text(json.dumps(data, indent=2))
        if platform.system() != "Windows":
            os.chmod(self.session_path, 0o600)

    def get(self, key: str) -> Optional[str]:
        return self._read().get(key)

    def set(self, key: str, value: str) -> None:
        data = self._read()
        data[key] = value
        self._write(data)

    def remove(self, key: str) -> None:
        data = self._read()
        if key in data:
            del data[key]
            self._write(data)

    @property
    def session_file(self) -> Path:
        return self.session_path


@dataclass
class StoredTokens:
    """Snapshot of the persisted token fields

    Attributes:
        access_token: Bearer token, None when absent
        refresh_token: Refresh token, None when absent
        expiry: Epoch milliseconds after which access_token is invalid (0 when unknown)
    """
    access_token: Optional[str]
    refresh_token: Optional[str]
    expiry: int


class TokenStorage:
    """Reads and writes the Spotify session through a SessionStore"""

    def __init__(
        self,
        store: Optional[SessionStore] = None,
        clock: Optional[Clock] = None,
        leeway_seconds: int = TOKEN_LEEWAY_SECONDS,
        expire_when_ttl_missing: bool = EXPIRE_WHEN_TTL_MISSING,
    ):
        self.store = store if store is not None else FileSessionStore()
        self.clock = clock or SystemClock()
        self.leeway_seconds = leeway_seconds
        self.expire_when_ttl_missing = expire_when_ttl_missing

    def save_tokens(
        self,
        access_token: Optional[str] = None,
        refresh_token: Optional[str] = None,
        expires_in: Optional[int] = None,
    ) -> None:
        """Write the fields that are present, leaving the others untouched"""
        if access_token:
            self.store.set(ACCESS_TOKEN_KEY, access_token)
        if refresh_token:
            self.store.set(REFRESH_TOKEN_KEY, refresh_token)
        if expires_in:
            expiry = self.clock.now_ms() + (int(expires_in) - self.leeway_seconds) * 1000
            self.store.set(EXPIRY_KEY, str(expiry))
        elif access_token and self.expire_when_ttl_missing:
            logger.warning("Token response carried no expires_in, treating access token as expired")
            self.store.set(EXPIRY_KEY, "0")

    def load_tokens(self) -> StoredTokens:
        """Read whatever is stored; missing fields come back as None / 0"""
        raw_expiry = self.store.get(EXPIRY_KEY)
        try:
            expiry = int(raw_expiry) if raw_expiry else 0
        except ValueError:
            logger.warning(f"Ignoring malformed token expiry: {raw_expiry!r}")
            expiry = 0
        return StoredTokens(
            access_token=self.store.get(ACCESS_TOKEN_KEY) or None,
            refresh_token=self.store.get(REFRESH_TOKEN_KEY) or None,
            expiry=expiry,
        )

    def save_verifier(self, code_verifier: str) -> None:
        self.store.set(VERIFIER_KEY, code_verifier)

    def load_verifier(self) -> Optional[str]:
        return self.store.get(VERIFIER_KEY) or None

    def clear_verifier(self) -> None:
        self.store.remove(VERIFIER_KEY)

    def clear_tokens(self) -> None:
        """Remove the verifier and every token field"""
        for key in ALL_KEYS:
            self.store.remove(key)
        logger.info("Cleared Spotify session")

    def is_token_expired(self) -> bool:
        """True when there is no access token or its expiry has passed"""
        tokens = self.load_tokens()
        if not tokens.access_token:
            return True
        return self.clock.now_ms() >= tokens.expiry

    def get_status(self) -> Dict[str, Any]:
        """Get token status without exposing secrets"""
        tokens = self.load_tokens()
        if not tokens.access_token and not tokens.refresh_token:
            return {
                "has_tokens": False,
                "has_refresh_token": False,
                "is_expired": True,
                "expires_at": None,
                "time_until_expiry": "No tokens",
            }

        expires_at = datetime.fromtimestamp(tokens.expiry / 1000).isoformat() if tokens.expiry else None
        remaining = (tokens.expiry - self.clock.now_ms()) // 1000

        if not tokens.access_token or remaining <= 0:
            time_str = "expired"
        else:
            hours = remaining // 3600
            minutes = (remaining % 3600) // 60
            time_str = f"{hours}h {minutes}m" if hours > 0 else f"{minutes}m"

        status = {
            "has_tokens": True,
            "has_refresh_token": bool(tokens.refresh_token),
            "is_expired": self.is_token_expired(),
            "expires_at": expires_at,
            "time_until_expiry": time_str,
        }
        if not status["is_expired"]:
            status["expires_in_seconds"] = remaining
        return status
