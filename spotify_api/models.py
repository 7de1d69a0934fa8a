"""
Pydantic models for the Spotify Web API payloads the client renders.
"""
from typing import List, Optional
from pydantic import BaseModel


class Image(BaseModel):
    """Image reference (album art, avatar)"""
    url: str
    height: Optional[int] = None
    width: Optional[int] = None


class Artist(BaseModel):
    """Simplified artist"""
    id: Optional[str] = None
    name: str


class Album(BaseModel):
    """Simplified album"""
    id: Optional[str] = None
    name: str = ""
    images: List[Image] = []


class Profile(BaseModel):
    """Current user's profile (/me)"""
    id: Optional[str] = None
    display_name: Optional[str] = None
    images: List[Image] = []

    @property
    def avatar_url(self) -> Optional[str]:
        return self.images[0].url if self.images else None


class Track(BaseModel):
    """Track from /me/top/tracks"""
    id: Optional[str] = None
    name: str
    artists: List[Artist] = []
    album: Optional[Album] = None
    duration_ms: int = 0
    preview_url: Optional[str] = None

    @property
    def artist_names(self) -> str:
        return ", ".join(artist.name for artist in self.artists)

    @property
    def thumbnail_url(self) -> Optional[str]:
        """Smallest album image Spotify usually lists third, falling back to larger ones"""
        if not self.album or not self.album.images:
            return None
        images = self.album.images
        for index in (2, 1, 0):
            if index < len(images):
                return images[index].url
        return None

    @property
    def duration_label(self) -> str:
        minutes = self.duration_ms // 60000
        seconds = (self.duration_ms % 60000) // 1000
        return f"{minutes}:{seconds:02d}"


class TopTracksPage(BaseModel):
    """Paging object returned by /me/top/tracks"""
    items: List[Track] = []
    total: Optional[int] = None
    limit: Optional[int] = None
    offset: Optional[int] = None
