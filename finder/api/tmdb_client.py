"""TMDB API client for movies and TV shows."""

from typing import List, Dict, Optional

from .base import MediaAPIClient
from ..normalize import (
    detail_link,
    first_director,
    format_rating,
    format_runtime,
    join_top_names,
    or_na,
    year_from_dates,
)
from ..records import NA, MediaRecord, RatingEntry, Suggestion

TMDB_BASE_URL = "https://api.themoviedb.org/3"
TMDB_IMAGE_URL = "https://image.tmdb.org/t/p"

# TMDB media_type values kept from a multi search
MEDIA_KINDS = {'movie': 'movie', 'tv': 'series'}


class TMDBClient(MediaAPIClient):
    """TMDB API client implementation."""

    def __init__(self, api_key: Optional[str] = None, base_url: Optional[str] = None, timeout: float = 10.0):
        """
        Initialize TMDB client.

        Args:
            api_key: TMDB API key; sent only when set
            base_url: API root (default: the public TMDB v3 API)
            timeout: Per-request timeout in seconds
        """
        super().__init__(api_key, base_url or TMDB_BASE_URL, timeout)

    @property
    def name(self) -> str:
        return 'TMDB'

    def _params(self, **extra) -> Dict:
        params = {'language': 'en-US'}
        if self.api_key:
            params['api_key'] = self.api_key
        params.update(extra)
        return params

    def search(self, title: str) -> List[Dict]:
        """Multi-search TMDB and keep movies and TV shows in ranking order."""
        data = self._get(
            f"{self.base_url}/search/multi",
            self._params(query=title, include_adult='false'),
        )
        results = data.get('results') or []
        return [
            item for item in results
            if isinstance(item, dict) and item.get('media_type') in MEDIA_KINDS
        ]

    def find_best_match(self, title: str) -> Optional[Dict]:
        """First movie or TV result of a multi search."""
        results = self.search(title)
        return results[0] if results else None

    def get_details(self, match: Dict) -> Optional[Dict]:
        """Get detailed information with credits and external ids."""
        url = f"{self.base_url}/{match['media_type']}/{match['id']}"
        return self._get(url, self._params(append_to_response='credits,external_ids'))

    def poster_url(self, poster_path: Optional[str], size: str) -> str:
        """Full poster URL for a TMDB poster path, or 'N/A'."""
        if not poster_path:
            return NA
        return f"{TMDB_IMAGE_URL}/{size}{poster_path}"

    def to_suggestion(self, item: Dict, include_rating: bool = True) -> Suggestion:
        rating = format_rating(item.get('vote_average')) if include_rating else NA
        return Suggestion(
            title=or_na(item.get('title') or item.get('name')),
            year=year_from_dates(item.get('release_date'), item.get('first_air_date')),
            external_id=or_na(item.get('id')),
            poster_url=self.poster_url(item.get('poster_path'), 'w200'),
            media_kind=MEDIA_KINDS.get(item.get('media_type'), 'movie'),
            rating=rating if rating != NA else None,
        )

    def to_record(self, match: Dict, details: Optional[Dict]) -> MediaRecord:
        """Merge a multi-search hit with its detail payload."""
        media_type = match.get('media_type', 'movie')
        media_kind = MEDIA_KINDS.get(media_type, 'movie')
        merged = dict(match)
        merged.update(details or {})

        imdb_id = or_na((merged.get('external_ids') or {}).get('imdb_id'))
        rating = format_rating(merged.get('vote_average'))

        credits = merged.get('credits') or {}
        cast_names = [c.get('name') for c in credits.get('cast') or [] if isinstance(c, dict)]

        genres = merged.get('genres') or []
        genre_names = [g.get('name') for g in genres if isinstance(g, dict) and g.get('name')]

        # Runtime and votes only exist on the detail payload
        if details:
            runtime = format_runtime(
                media_kind,
                minutes=details.get('runtime'),
                seasons=details.get('number_of_seasons'),
            )
        else:
            runtime = NA
        vote_count = merged.get('vote_count')

        return MediaRecord(
            title=or_na(merged.get('title') or merged.get('name')),
            year=year_from_dates(merged.get('release_date'), merged.get('first_air_date')),
            rating=rating,
            external_id=imdb_id,
            plot=or_na(merged.get('overview')),
            poster_url=self.poster_url(merged.get('poster_path'), 'w500'),
            genre=", ".join(genre_names) if genre_names else NA,
            director=first_director(credits.get('crew')),
            cast=join_top_names(cast_names),
            runtime=runtime,
            ratings_breakdown=(
                RatingEntry('TMDB', f"{rating}/10" if rating != NA else NA),
                RatingEntry('TMDB Votes', f"{vote_count} votes" if vote_count is not None else NA),
            ),
            detail_link=detail_link(imdb_id, media_type, merged.get('id')),
            media_kind=media_kind,
        )
