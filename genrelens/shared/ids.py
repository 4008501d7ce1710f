from urllib.parse import urlparse

from genrelens.core.config import settings
from genrelens.core.errors import InvalidReferenceError

PLAYLIST_PATH_PREFIX = "/playlist/"
PLAYLIST_URI_PREFIX = "spotify:playlist:"


def resolve_playlist_id(reference: str, hostname: str | None = None) -> str:
    """Turn a playlist link, ``spotify:playlist:`` URI or bare ID into a playlist ID.

    Links must point at the sharing host; the ID is the path segment after
    ``/playlist/``. Input without a host is taken verbatim as the ID, after
    surrounding whitespace (e.g. from a pasted form value) is stripped.
    """
    hostname = hostname or settings.SPOTIFY_HOSTNAME
    raw = (reference or "").strip()
    if not raw:
        raise InvalidReferenceError("Empty playlist reference")

    if raw.startswith(PLAYLIST_URI_PREFIX):
        playlist_id = raw[len(PLAYLIST_URI_PREFIX) :]  # noqa
        if not playlist_id:
            raise InvalidReferenceError(f"Missing playlist ID in {raw!r}")
        return playlist_id

    parsed = urlparse(raw)

    if parsed.netloc:
        if parsed.hostname != hostname:
            raise InvalidReferenceError(f"Not a {hostname} link: {raw!r}")
        if not parsed.path.startswith(PLAYLIST_PATH_PREFIX):
            raise InvalidReferenceError(f"Not a playlist link: {raw!r}")
        playlist_id = parsed.path[len(PLAYLIST_PATH_PREFIX) :].split("/", 1)[0]  # noqa
        if not playlist_id:
            raise InvalidReferenceError(f"Missing playlist ID in {raw!r}")
        return playlist_id

    if parsed.scheme or not parsed.path:
        raise InvalidReferenceError(f"Unrecognised playlist reference: {raw!r}")

    return raw
