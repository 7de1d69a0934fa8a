"""Spotify Web API access over the OAuth session"""

from .client import SpotifyApiClient
from .models import Album, Artist, Image, Profile, TopTracksPage, Track

__all__ = [
    "SpotifyApiClient",
    "Album",
    "Artist",
    "Image",
    "Profile",
    "TopTracksPage",
    "Track",
]
