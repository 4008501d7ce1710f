BEARER_PREFIX = "bearer "


def redact_token(token: str | None) -> str:
    """
    Redact a bearer credential for logging purposes.
    Shows the first 6 characters followed by ***.
    """
    if not token:
        return "None"
    if len(token) <= 6:
        return token
    return f"{token[:6]}***"


def bearer_header(token: str) -> str:
    return f"Bearer {token}"


def parse_bearer(authorization: str | None) -> str | None:
    """Extract the token from an ``Authorization: Bearer <token>`` header value."""
    if not authorization or not authorization.lower().startswith(BEARER_PREFIX):
        return None
    return authorization[len(BEARER_PREFIX) :].strip() or None  # noqa
