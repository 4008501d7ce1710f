import asyncio
from collections import Counter
from typing import Protocol

from loguru import logger

from genrelens.core.config import settings
from genrelens.core.errors import MalformedResponseError, NotFoundError, TransientError
from genrelens.models.genres import AggregationResult, ArtistRecord, Track

# Lookup failures that resilient mode may skip; anything else (e.g. AuthError) aborts
SKIPPABLE_ERRORS = (NotFoundError, TransientError, MalformedResponseError)


class ArtistCatalog(Protocol):
    async def fetch_artist(self, artist_id: str) -> ArtistRecord: ...


def artist_occurrences(tracks: list[Track]) -> list[str]:
    """Flatten tracks into artist occurrences, one per artist per track, duplicates kept."""
    return [artist_id for track in tracks for artist_id in track.artist_ids]


class GenreAggregator:
    """
    Fans out one artist lookup per occurrence and folds genre tags into a tally.

    Lookups run concurrently, capped by a semaphore, and are folded as each one
    completes. Counting is once per occurrence: an artist credited on three tracks
    contributes its genres three times. By default the first failed lookup cancels
    the outstanding ones and is re-raised; with ``skip_failed`` the failed occurrence
    is skipped and counted instead.
    """

    def __init__(self, catalog: ArtistCatalog, concurrency: int | None = None, skip_failed: bool | None = None):
        self.catalog = catalog
        self.concurrency = max(1, concurrency or settings.ARTIST_LOOKUP_CONCURRENCY)
        self.skip_failed = settings.SKIP_FAILED_ARTISTS if skip_failed is None else skip_failed

    async def aggregate(self, tracks: list[Track]) -> AggregationResult:
        occurrences = artist_occurrences(tracks)
        if not occurrences:
            logger.info("No artist occurrences to look up")
            return AggregationResult(occurrences=0)

        logger.info(
            f"Looking up {len(occurrences)} artist occurrences "
            f"({len(set(occurrences))} distinct, concurrency {self.concurrency})"
        )

        sem = asyncio.Semaphore(self.concurrency)

        async def _lookup(artist_id: str) -> ArtistRecord:
            async with sem:
                return await self.catalog.fetch_artist(artist_id)

        tasks = [asyncio.create_task(_lookup(artist_id)) for artist_id in occurrences]
        tally: Counter[str] = Counter()
        total = 0
        skipped = 0

        try:
            for next_done in asyncio.as_completed(tasks):
                try:
                    artist = await next_done
                except SKIPPABLE_ERRORS as e:
                    if not self.skip_failed:
                        raise
                    skipped += 1
                    logger.warning(f"Skipping artist lookup: {e}")
                    continue

                for genre in artist.genres:
                    tally[genre] += 1
                    total += 1
        except BaseException:
            await self._cancel_outstanding(tasks)
            raise

        if skipped:
            logger.warning(f"Skipped {skipped} of {len(occurrences)} artist occurrences")
        logger.info(f"Tallied {total} genre hits across {len(tally)} genres")

        return AggregationResult(tally=dict(tally), total=total, occurrences=len(occurrences), skipped=skipped)

    @staticmethod
    async def _cancel_outstanding(tasks: list[asyncio.Task]) -> None:
        pending = [task for task in tasks if not task.done()]
        for task in pending:
            task.cancel()
        # Settle everything so no lookup outlives the aggregation
        await asyncio.gather(*tasks, return_exceptions=True)
        if pending:
            logger.debug(f"Cancelled {len(pending)} outstanding artist lookups")
