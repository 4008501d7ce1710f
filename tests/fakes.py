"""Fakes for the Spotify Web API and the artist catalog."""

import asyncio

import httpx

from genrelens.models.genres import ArtistRecord

API = "https://api.spotify.com/v1"


class FakeSpotify:
    """In-memory Spotify Web API serving playlists and artists over a mock transport."""

    def __init__(self, page_size: int = 100):
        self.page_size = page_size
        self.playlists: dict[str, list[list[str | None] | None]] = {}
        self.artists: dict[str, list[str]] = {}
        self.errors: dict[str, httpx.Response] = {}
        self.requests: list[httpx.Request] = []

    def add_playlist(self, playlist_id: str, tracks: list[list[str | None] | None]) -> None:
        self.playlists[playlist_id] = tracks

    def add_artist(self, artist_id: str, genres: list[str]) -> None:
        self.artists[artist_id] = genres

    def fail(self, path: str, status: int, **kwargs) -> None:
        self.errors[path] = httpx.Response(status, **kwargs)

    def _item(self, index: int, artist_ids: list[str | None] | None) -> dict:
        if artist_ids is None:
            return {"track": None}
        return {
            "track": {
                "id": f"track{index}",
                "name": f"Track {index}",
                "artists": [{"id": a, "name": f"Artist {a}"} for a in artist_ids],
            }
        }

    def _page(self, playlist_id: str, offset: int) -> dict:
        tracks = self.playlists[playlist_id]
        chunk = tracks[offset : offset + self.page_size]  # noqa
        following = offset + self.page_size
        next_url = None
        if following < len(tracks):
            next_url = f"{API}/playlists/{playlist_id}/tracks?offset={following}&limit={self.page_size}"
        return {
            "items": [self._item(offset + i, artist_ids) for i, artist_ids in enumerate(chunk)],
            "next": next_url,
            "total": len(tracks),
        }

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path.removeprefix("/v1")

        if path in self.errors:
            return self.errors[path]

        parts = path.strip("/").split("/")
        if parts[0] == "playlists" and parts[1] in self.playlists:
            playlist_id = parts[1]
            if len(parts) == 3 and parts[2] == "tracks":
                offset = int(request.url.params.get("offset", 0))
                return httpx.Response(200, json=self._page(playlist_id, offset))
            return httpx.Response(
                200, json={"id": playlist_id, "name": f"Playlist {playlist_id}", "tracks": self._page(playlist_id, 0)}
            )
        if parts[0] == "artists" and parts[1] in self.artists:
            artist_id = parts[1]
            return httpx.Response(
                200, json={"id": artist_id, "name": f"Artist {artist_id}", "genres": self.artists[artist_id]}
            )
        return httpx.Response(404, json={"error": {"status": 404, "message": "Resource not found"}})

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    def artist_requests(self) -> list[str]:
        return [r.url.path.rsplit("/", 1)[-1] for r in self.requests if "/artists/" in r.url.path]


class StubCatalog:
    """Artist catalog stand-in with per-artist delays and failures."""

    def __init__(
        self,
        artists: dict[str, list[str]],
        delays: dict[str, float] | None = None,
        failures: dict[str, Exception] | None = None,
    ):
        self.artists = artists
        self.delays = delays or {}
        self.failures = failures or {}
        self.calls: list[str] = []
        self.cancelled: list[str] = []
        self.in_flight = 0
        self.max_in_flight = 0

    async def fetch_artist(self, artist_id: str) -> ArtistRecord:
        self.calls.append(artist_id)
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            await asyncio.sleep(self.delays.get(artist_id, 0))
            if artist_id in self.failures:
                raise self.failures[artist_id]
            return ArtistRecord(id=artist_id, name=artist_id, genres=self.artists.get(artist_id, []))
        except asyncio.CancelledError:
            self.cancelled.append(artist_id)
            raise
        finally:
            self.in_flight -= 1
