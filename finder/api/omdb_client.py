"""OMDb API client for movies and series."""

from typing import List, Dict, Optional

from .base import MediaAPIClient
from ..errors import UpstreamUnavailableError
from ..normalize import (
    detail_link,
    format_rating,
    format_runtime,
    join_top_names,
    or_na,
    split_names,
    year_from_dates,
)
from ..records import NA, MediaRecord, RatingEntry, Suggestion

OMDB_BASE_URL = "https://www.omdbapi.com"

MEDIA_KINDS = ('movie', 'series')

# Errors OMDb uses to say "nothing matched" rather than "something broke"
NO_MATCH_ERRORS = ('not found', 'too many results')


class OMDbClient(MediaAPIClient):
    """OMDb API client implementation."""

    def __init__(self, api_key: str, base_url: Optional[str] = None, timeout: float = 10.0):
        """
        Initialize OMDb client.

        Args:
            api_key: OMDb API key
            base_url: API root (default: the public OMDb API)
            timeout: Per-request timeout in seconds
        """
        super().__init__(api_key, base_url or OMDB_BASE_URL, timeout)

    @property
    def name(self) -> str:
        return 'OMDb'

    def _query(self, **params) -> Optional[Dict]:
        """
        Query OMDb, returning None when it reports no match.

        Raises:
            UpstreamUnavailableError: For transport failures and any other
                error OMDb reports (bad key, quota, ...)
        """
        params['apikey'] = self.api_key
        data = self._get(f"{self.base_url}/", params)

        if str(data.get('Response', 'True')).lower() == 'false':
            error = str(data.get('Error') or 'Unknown error')
            if any(marker in error.lower() for marker in NO_MATCH_ERRORS):
                return None
            raise UpstreamUnavailableError(f"OMDb error: {error}")
        return data

    def search(self, title: str) -> List[Dict]:
        """Search OMDb and keep movies and series in ranking order."""
        data = self._query(s=title)
        if data is None:
            return []
        results = data.get('Search') or []
        return [
            item for item in results
            if isinstance(item, dict) and str(item.get('Type', '')).lower() in MEDIA_KINDS
        ]

    def find_best_match(self, title: str) -> Optional[Dict]:
        """Single-title lookup; OMDb picks the best match itself."""
        data = self._query(t=title, plot='full')
        if data is None or str(data.get('Type', '')).lower() not in MEDIA_KINDS:
            return None
        return data

    def get_details(self, match: Dict) -> Optional[Dict]:
        """The title lookup already carries credits; there is no second call."""
        return None

    def to_suggestion(self, item: Dict, include_rating: bool = True) -> Suggestion:
        rating = format_rating(item.get('imdbRating')) if include_rating else NA
        return Suggestion(
            title=or_na(item.get('Title')),
            year=year_from_dates(item.get('Year')),
            external_id=or_na(item.get('imdbID')),
            poster_url=or_na(item.get('Poster')),
            media_kind='series' if str(item.get('Type', '')).lower() == 'series' else 'movie',
            rating=rating if rating != NA else None,
        )

    def to_record(self, match: Dict, details: Optional[Dict]) -> MediaRecord:
        merged = dict(match)
        merged.update(details or {})

        media_kind = 'series' if str(merged.get('Type', '')).lower() == 'series' else 'movie'
        imdb_id = or_na(merged.get('imdbID'))

        breakdown = tuple(
            RatingEntry(or_na(entry.get('Source')), or_na(entry.get('Value')))
            for entry in merged.get('Ratings') or []
            if isinstance(entry, dict)
        )

        directors = split_names(merged.get('Director'))

        return MediaRecord(
            title=or_na(merged.get('Title')),
            year=year_from_dates(merged.get('Year'), merged.get('Released')),
            rating=format_rating(merged.get('imdbRating')),
            external_id=imdb_id,
            plot=or_na(merged.get('Plot')),
            poster_url=or_na(merged.get('Poster')),
            genre=or_na(merged.get('Genre')),
            director=directors[0] if directors else NA,
            cast=join_top_names(split_names(merged.get('Actors'))),
            runtime=format_runtime(
                media_kind,
                minutes=merged.get('Runtime'),
                seasons=merged.get('totalSeasons'),
            ),
            ratings_breakdown=breakdown,
            detail_link=detail_link(imdb_id, media_kind, None),
            media_kind=media_kind,
        )
