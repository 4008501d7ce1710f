"""Schemas for the Spotify Web API payloads the catalog client consumes.

Only the fields the genre pipeline needs are declared; everything else in the
payload is ignored.
"""

from pydantic import BaseModel, Field


class ArtistRefPayload(BaseModel):
    # Local files carry artists without an ID
    id: str | None = None
    name: str = ""


class TrackPayload(BaseModel):
    id: str | None = None
    name: str = ""
    type: str = "track"
    artists: list[ArtistRefPayload] = Field(default_factory=list)


class PlaylistItemPayload(BaseModel):
    # Removed tracks come back as null
    track: TrackPayload | None = None


class TrackPagePayload(BaseModel):
    items: list[PlaylistItemPayload] = Field(default_factory=list)
    next: str | None = None
    total: int | None = None


class PlaylistPayload(BaseModel):
    id: str
    name: str = ""
    tracks: TrackPagePayload


class ArtistPayload(BaseModel):
    id: str
    name: str = ""
    genres: list[str] = Field(default_factory=list)
