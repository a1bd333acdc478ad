"""Authentication utilities for the Raindrop bridge."""

from core.config import Settings


class AuthenticationError(Exception):
    """Raised when no usable credential is available."""

    pass


def get_bearer_token(settings: Settings) -> str:
    """
    Get the Raindrop.io token from settings.

    The token is read once at startup and handed to the API client; nothing
    else reads it.

    Returns:
        The token string (without 'Bearer ' prefix).

    Raises:
        AuthenticationError: If RAINDROP_TOKEN is absent or empty.
    """
    token = settings.raindrop_token
    if not token:
        raise AuthenticationError("RAINDROP_TOKEN is not set")
    return token
