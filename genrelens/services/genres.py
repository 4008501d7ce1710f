import httpx
from loguru import logger

from genrelens.core.security import redact_token
from genrelens.models.genres import GenreReport
from genrelens.services.aggregator import GenreAggregator
from genrelens.services.report import build_report
from genrelens.services.spotify import SpotifyCatalog
from genrelens.shared.ids import resolve_playlist_id


async def aggregate(
    playlist_reference: str,
    credential: str,
    *,
    concurrency: int | None = None,
    skip_failed: bool | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> GenreReport:
    """
    Build the ranked genre breakdown for a playlist.

    Raises InvalidReferenceError for a bad reference and the catalog errors
    (AuthError, NotFoundError, TransientError, MalformedResponseError) for lookup failures.
    """
    playlist_id = resolve_playlist_id(playlist_reference)
    logger.info(f"[{redact_token(credential)}] Building genre report for playlist {playlist_id}")

    catalog = SpotifyCatalog(token=credential, transport=transport)
    try:
        tracks = await catalog.fetch_tracks(playlist_id)
        aggregator = GenreAggregator(catalog, concurrency=concurrency, skip_failed=skip_failed)
        result = await aggregator.aggregate(tracks)
    finally:
        await catalog.close()

    genres = build_report(result)
    logger.info(f"Playlist {playlist_id}: {len(tracks)} tracks, {len(genres)} genres, {result.total} genre hits")
    return GenreReport(
        playlist_id=playlist_id,
        genres=genres,
        total=result.total,
        occurrences=result.occurrences,
        skipped=result.skipped,
    )
