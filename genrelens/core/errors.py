class GenreLensError(Exception):
    """Base class for every error the genre pipeline raises."""

    kind = "error"


class InvalidReferenceError(GenreLensError):
    """The playlist reference is neither a playlist URL on the sharing host nor a bare ID."""

    kind = "invalid_reference"


class CatalogError(GenreLensError):
    """The catalog service answered with something we cannot use."""

    kind = "catalog_error"


class AuthError(CatalogError):
    """The bearer credential was rejected."""

    kind = "auth"


class NotFoundError(CatalogError):
    """Playlist or artist is absent or not accessible with the credential."""

    kind = "not_found"


class TransientError(CatalogError):
    """Network failure, rate limit or server error. Retrying later may succeed."""

    kind = "transient"

    def __init__(self, message: str = "Transient catalog failure", retry_after: float | None = None) -> None:
        super().__init__(message)
        self.retry_after = retry_after


class MalformedResponseError(CatalogError):
    """The catalog payload did not match the expected schema."""

    kind = "malformed_response"
