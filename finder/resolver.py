"""Turn a free-text title into one record or a ranked list of suggestions."""

import logging
from typing import Callable, List, Optional

from .api import MediaAPIClient, MediaAPIFactory
from .config import FinderConfig
from .errors import InvalidRequestError, TitleNotFoundError, UpstreamUnavailableError
from .records import MediaRecord, Suggestion

logger = logging.getLogger(__name__)

MODE_EXACT = 'exact'
MODE_SEARCH = 'search'
MODES = (MODE_EXACT, MODE_SEARCH)


def clean_title(title: Optional[str]) -> str:
    """Strip a title, rejecting missing or blank input."""
    cleaned = (title or '').strip()
    if not cleaned:
        raise InvalidRequestError()
    return cleaned


class Resolver:
    """
    Resolve titles against the configured provider.

    Exact mode returns a MediaRecord or raises TitleNotFoundError carrying
    fallback suggestions. Search mode returns a capped, upstream-ordered list.
    Provider calls are made one after another; none are retried.
    """

    def __init__(
        self,
        config: FinderConfig,
        client_factory: Callable[[FinderConfig], MediaAPIClient] = MediaAPIFactory.create_client,
    ):
        self.config = config
        self._client_factory = client_factory
        self._client: Optional[MediaAPIClient] = None

    @property
    def client(self) -> MediaAPIClient:
        # Built lazily so a missing credential fails the request, not startup
        if self._client is None:
            self._client = self._client_factory(self.config)
        return self._client

    def resolve(self, title: Optional[str], mode: Optional[str] = None):
        """Dispatch on mode: None or 'exact' -> lookup, 'search' -> suggest."""
        if mode == MODE_SEARCH:
            return self.suggest(title)
        return self.lookup(title)

    def suggest(self, title: Optional[str]) -> List[Suggestion]:
        """
        List candidates for a partial or ambiguous title.

        Args:
            title: Free-text query

        Returns:
            Up to suggestion_cap suggestions in upstream order; empty on no match

        Raises:
            InvalidRequestError: If the title is missing or blank
            UpstreamUnavailableError: If the provider call fails
        """
        title = clean_title(title)
        logger.info('Searching for "%s", mode: %s', title, MODE_SEARCH)
        return self._suggestions(
            title,
            self.config.effective_cap(self.config.suggestion_cap),
            include_rating=True,
        )

    def lookup(self, title: Optional[str]) -> MediaRecord:
        """
        Resolve a title to its best match and enrich it.

        Args:
            title: Free-text query

        Returns:
            Normalized MediaRecord

        Raises:
            InvalidRequestError: If the title is missing or blank
            TitleNotFoundError: If nothing matched; carries fallback suggestions
            UpstreamUnavailableError: If the primary lookup fails
        """
        title = clean_title(title)
        logger.info('Searching for "%s", mode: %s', title, MODE_EXACT)
        client = self.client

        try:
            match = client.find_best_match(title)
        except UpstreamUnavailableError as e:
            logger.error("Lookup failed for %s: %s", title, e)
            raise

        if match is None:
            raise TitleNotFoundError(title, self._fallback_suggestions(title))

        try:
            details = client.get_details(match)
        except Exception as e:
            logger.warning("Enrichment failed for %s, using partial data: %s", title, e)
            details = None

        record = client.to_record(match, details)
        logger.info("Success: %s", record.title)
        return record

    def _fallback_suggestions(self, title: str) -> List[Suggestion]:
        try:
            return self._suggestions(
                title,
                self.config.effective_cap(self.config.fallback_cap),
                include_rating=self.config.fallback_include_rating,
            )
        except UpstreamUnavailableError as e:
            logger.error("Suggestion fallback failed for %s: %s", title, e)
            return []

    def _suggestions(self, title: str, cap: int, include_rating: bool) -> List[Suggestion]:
        results = self.client.search(title)
        return [self.client.to_suggestion(item, include_rating) for item in results[:cap]]
