import httpx
from async_lru import alru_cache
from loguru import logger
from pydantic import BaseModel, ValidationError

from genrelens.core.errors import MalformedResponseError
from genrelens.models.genres import ArtistRecord, Track
from genrelens.models.spotify import ArtistPayload, PlaylistPayload, TrackPagePayload, TrackPayload
from genrelens.services.spotify.client import SpotifyClient

ARTIST_CACHE_SIZE = 2000


def _parse(model: type[BaseModel], data: dict, what: str):
    try:
        return model.model_validate(data)
    except ValidationError as e:
        raise MalformedResponseError(f"Unexpected payload for {what}: {e.error_count()} validation error(s)") from e


def _to_track(payload: TrackPayload) -> Track:
    artist_ids = []
    for artist in payload.artists:
        if not artist.id:
            logger.debug(f"Skipping artist without ID ({artist.name!r}) on track {payload.name!r}")
            continue
        artist_ids.append(artist.id)
    return Track(id=payload.id, name=payload.name, artist_ids=artist_ids)


class SpotifyCatalog:
    """
    Typed accessor over the Spotify Web API for playlists and artists.
    Errors from the client surface unchanged; nothing is retried here.
    """

    def __init__(self, token: str, transport: httpx.AsyncBaseTransport | None = None):
        self.client = SpotifyClient(token=token, transport=transport)
        # Memo lives with this catalog; concurrent calls for one artist share the in-flight request
        self.fetch_artist = alru_cache(maxsize=ARTIST_CACHE_SIZE)(self._fetch_artist)

    async def close(self):
        """Close the underlying HTTP client and drop memoised artists."""
        self.fetch_artist.cache_clear()
        await self.client.close()

    async def fetch_tracks(self, playlist_id: str) -> list[Track]:
        """Return every track of a playlist, following paging links until exhausted."""
        data = await self.client.get(f"/playlists/{playlist_id}")
        playlist = _parse(PlaylistPayload, data, f"playlist {playlist_id}")
        logger.info(f"Fetching tracks for playlist {playlist_id} ({playlist.name!r}, {playlist.tracks.total} items)")

        tracks: list[Track] = []
        page = playlist.tracks
        while True:
            for item in page.items:
                if item.track is None:
                    logger.debug(f"Skipping removed item in playlist {playlist_id}")
                    continue
                if item.track.type != "track":
                    logger.debug(f"Skipping {item.track.type} {item.track.name!r} in playlist {playlist_id}")
                    continue
                tracks.append(_to_track(item.track))
            if not page.next:
                break
            data = await self.client.get(page.next)
            page = _parse(TrackPagePayload, data, f"playlist {playlist_id} tracks page")

        return tracks

    async def _fetch_artist(self, artist_id: str) -> ArtistRecord:
        """Get one artist and its genre tags."""
        data = await self.client.get(f"/artists/{artist_id}")
        artist = _parse(ArtistPayload, data, f"artist {artist_id}")
        return ArtistRecord(id=artist.id, name=artist.name, genres=artist.genres)
