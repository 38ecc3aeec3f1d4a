"""Error taxonomy shared by the resolver, the HTTP surface and the client."""

from typing import List, Optional


class FinderError(Exception):
    """Base class for every failure a lookup can end in."""

    status_code = 500


class InvalidRequestError(FinderError):
    """Missing or blank title. Never forwarded upstream."""

    status_code = 400

    def __init__(self, message: str = "Title parameter is required"):
        super().__init__(message)


class TitleNotFoundError(FinderError):
    """The provider reported no match; carries best-effort alternatives."""

    status_code = 404

    def __init__(self, title: str, suggestions: Optional[List] = None, message: Optional[str] = None):
        self.title = title
        self.suggestions = list(suggestions or [])
        if message is None:
            if self.suggestions:
                message = f'"{title}" not found. Did you mean one of these?'
            else:
                message = f'"{title}" not found. Try a different title or spelling.'
        super().__init__(message)


class UpstreamUnavailableError(FinderError):
    """Network error, non-2xx or malformed payload from the provider."""

    status_code = 500
    public_message = "Failed to fetch movie data. The media database might be temporarily unavailable."


class ProviderConfigError(FinderError, ValueError):
    """Provider unknown or its credential missing. Reported at request time."""

    status_code = 500
