from .client import SpotifyClient
from .service import SpotifyCatalog

__all__ = ["SpotifyCatalog", "SpotifyClient"]
