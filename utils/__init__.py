"""Shared utilities package for the Spotify top tracks client"""

from .clock import Clock, SystemClock
from .storage import (
    FileSessionStore,
    MemorySessionStore,
    SessionStore,
    StoredTokens,
    TokenStorage,
)

__all__ = [
    "Clock",
    "SystemClock",
    "SessionStore",
    "MemorySessionStore",
    "FileSessionStore",
    "StoredTokens",
    "TokenStorage",
]
