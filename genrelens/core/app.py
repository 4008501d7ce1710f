from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.responses import HTMLResponse
from jinja2 import Environment, FileSystemLoader, select_autoescape
from loguru import logger

from genrelens.api.endpoints.genres import status_for
from genrelens.api.main import api_router
from genrelens.core.errors import GenreLensError
from genrelens.services.genres import aggregate

from .config import settings
from .version import __version__

# Friendly text for each failure kind shown on the results page
ERROR_MESSAGES = {
    "invalid_reference": "That doesn't look like a Spotify playlist link or ID.",
    "auth": "Spotify rejected the access token. It may have expired.",
    "not_found": "That playlist (or one of its artists) could not be found or is private.",
    "transient": "Spotify is not responding right now. Try again in a moment.",
    "malformed_response": "Spotify sent back something unexpected.",
}

app = FastAPI(
    title="genrelens",
    description="Genre breakdown for Spotify playlists",
    version=__version__,
    docs_url=None if settings.APP_ENV != "development" else "/docs",
    redoc_url=None if settings.APP_ENV != "development" else "/redoc",
)

# genrelens/core/app.py -> genrelens/core -> genrelens
package_root = Path(__file__).resolve().parent.parent
templates_dir = package_root / "templates"

jinja_env = Environment(loader=FileSystemLoader(str(templates_dir)), autoescape=select_autoescape(["html"]))


@app.get("/", response_class=HTMLResponse)
async def home_page(request: Request, playlist: str | None = None):
    playlist = (playlist or "").strip()
    context = {"request": request, "app_version": __version__, "playlist": playlist}
    status_code = 200

    if playlist:
        if not settings.SPOTIFY_TOKEN:
            context["error"] = {"kind": "auth", "message": "No Spotify access token is configured."}
            status_code = 401
        else:
            try:
                context["report"] = await aggregate(playlist, settings.SPOTIFY_TOKEN)
            except GenreLensError as e:
                logger.warning(f"Genre report for {playlist!r} failed ({e.kind}): {e}")
                message = ERROR_MESSAGES.get(e.kind, "Something went wrong talking to Spotify.")
                context["error"] = {"kind": e.kind, "message": message}
                status_code = status_for(e)

    template = jinja_env.get_template("index.html")
    return HTMLResponse(content=template.render(**context), status_code=status_code, media_type="text/html")


app.include_router(api_router)
