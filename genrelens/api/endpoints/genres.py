from fastapi import APIRouter, Header, Query
from fastapi.responses import JSONResponse
from loguru import logger

from genrelens.core.config import settings
from genrelens.core.errors import (
    AuthError,
    GenreLensError,
    InvalidReferenceError,
    MalformedResponseError,
    NotFoundError,
    TransientError,
)
from genrelens.core.security import parse_bearer
from genrelens.models.genres import GenreReport
from genrelens.services.genres import aggregate

router = APIRouter(prefix="/api", tags=["genres"])

# Most specific first; CatalogError and anything else fall through to 502
ERROR_STATUS: list[tuple[type[GenreLensError], int]] = [
    (InvalidReferenceError, 400),
    (AuthError, 401),
    (NotFoundError, 404),
    (TransientError, 503),
    (MalformedResponseError, 502),
]


def status_for(exc: GenreLensError) -> int:
    for error_type, status in ERROR_STATUS:
        if isinstance(exc, error_type):
            return status
    return 502


def resolve_credential(authorization: str | None) -> str | None:
    """Prefer a bearer token from the request, fall back to the configured one."""
    return parse_bearer(authorization) or settings.SPOTIFY_TOKEN


def error_payload(exc: GenreLensError) -> dict[str, str]:
    return {"error": exc.kind, "detail": str(exc)}


@router.get("/genres", response_model=GenreReport)
async def get_genres(
    playlist: str = Query(..., description="Playlist link, spotify: URI or ID"),
    authorization: str | None = Header(default=None),
):
    credential = resolve_credential(authorization)
    if not credential:
        return JSONResponse(status_code=401, content={"error": AuthError.kind, "detail": "No Spotify credential"})

    try:
        return await aggregate(playlist, credential)
    except GenreLensError as e:
        logger.warning(f"Genre report for {playlist!r} failed ({e.kind}): {e}")
        return JSONResponse(status_code=status_for(e), content=error_payload(e))
