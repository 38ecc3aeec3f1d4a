"""Base interface for media API clients."""

from abc import ABC, abstractmethod
from typing import List, Dict, Optional

import requests

from ..errors import UpstreamUnavailableError
from ..records import MediaRecord, Suggestion


class MediaAPIClient(ABC):
    """Abstract base class for media API clients."""

    def __init__(self, api_key: Optional[str], base_url: str, timeout: float = 10.0):
        self.api_key = api_key
        self.base_url = base_url.rstrip('/')
        self.timeout = timeout

    def _get(self, url: str, params: Dict) -> Dict:
        """
        Issue a single GET and decode the JSON body.

        Raises:
            UpstreamUnavailableError: On transport errors, non-2xx statuses
                or a body that is not a JSON object
        """
        try:
            response = requests.get(url, params=params, timeout=self.timeout)
            response.raise_for_status()
            data = response.json()
        except requests.RequestException as e:
            raise UpstreamUnavailableError(f"{self.name} request failed: {e}") from e
        except ValueError as e:
            raise UpstreamUnavailableError(f"{self.name} returned malformed JSON: {e}") from e

        if not isinstance(data, dict):
            raise UpstreamUnavailableError(f"{self.name} returned an unexpected payload")
        return data

    @property
    @abstractmethod
    def name(self) -> str:
        """Provider label used in messages and ratings breakdowns."""
        pass

    @abstractmethod
    def search(self, title: str) -> List[Dict]:
        """
        Search for a title, return ranked results of recognized media kinds.

        Args:
            title: The title to search for

        Returns:
            List of result dictionaries in upstream order; empty on no match
        """
        pass

    @abstractmethod
    def find_best_match(self, title: str) -> Optional[Dict]:
        """
        Primary exact lookup for a title.

        Args:
            title: The title to look up

        Returns:
            The best matching item, or None when the provider reports no match
        """
        pass

    @abstractmethod
    def get_details(self, match: Dict) -> Optional[Dict]:
        """
        Enrichment call for a matched item.

        Args:
            match: Item returned by find_best_match

        Returns:
            Detail payload, or None when the provider has no separate call
        """
        pass

    @abstractmethod
    def to_suggestion(self, item: Dict, include_rating: bool = True) -> Suggestion:
        """Map one search hit to a Suggestion."""
        pass

    @abstractmethod
    def to_record(self, match: Dict, details: Optional[Dict]) -> MediaRecord:
        """
        Merge the primary match and optional enrichment into one record.

        Args:
            match: Item returned by find_best_match
            details: Enrichment payload, or None if unavailable

        Returns:
            Normalized MediaRecord
        """
        pass
