"""Value records returned by the resolver."""

from dataclasses import dataclass, field
from typing import Dict, Optional, Tuple

NA = 'N/A'


@dataclass(frozen=True)
class RatingEntry:
    """One (source, value) pair of a ratings breakdown."""

    source: str
    value: str

    def to_dict(self) -> Dict[str, str]:
        return {'source': self.source, 'value': self.value}


@dataclass(frozen=True)
class MediaRecord:
    """A single matched title, normalized from either provider."""

    title: str
    year: str = NA
    rating: str = NA
    external_id: str = NA
    plot: str = NA
    poster_url: str = NA
    genre: str = NA
    director: str = NA
    cast: str = NA
    runtime: str = NA
    ratings_breakdown: Tuple[RatingEntry, ...] = field(default_factory=tuple)
    detail_link: str = NA
    media_kind: str = 'movie'

    def to_dict(self) -> Dict:
        """Serialize to the JSON body of a successful exact lookup."""
        return {
            'title': self.title,
            'year': self.year,
            'rating': self.rating,
            'externalId': self.external_id,
            'plot': self.plot,
            'posterUrl': self.poster_url,
            'genre': self.genre,
            'director': self.director,
            'cast': self.cast,
            'runtime': self.runtime,
            'ratingsBreakdown': [entry.to_dict() for entry in self.ratings_breakdown],
            'detailLink': self.detail_link,
            'mediaKind': self.media_kind,
        }

    @classmethod
    def from_dict(cls, data: Dict) -> 'MediaRecord':
        """Rebuild a record from its JSON body (used by the HTTP client)."""
        breakdown = tuple(
            RatingEntry(source=str(entry.get('source', NA)), value=str(entry.get('value', NA)))
            for entry in data.get('ratingsBreakdown') or []
            if isinstance(entry, dict)
        )
        return cls(
            title=data.get('title') or NA,
            year=data.get('year') or NA,
            rating=data.get('rating') or NA,
            external_id=data.get('externalId') or NA,
            plot=data.get('plot') or NA,
            poster_url=data.get('posterUrl') or NA,
            genre=data.get('genre') or NA,
            director=data.get('director') or NA,
            cast=data.get('cast') or NA,
            runtime=data.get('runtime') or NA,
            ratings_breakdown=breakdown,
            detail_link=data.get('detailLink') or NA,
            media_kind=data.get('mediaKind') or 'movie',
        )


@dataclass(frozen=True)
class Suggestion:
    """One candidate in a ranked suggestion list."""

    title: str
    year: str
    external_id: str
    poster_url: str
    media_kind: str
    rating: Optional[str] = None

    def to_dict(self) -> Dict:
        return {
            'title': self.title,
            'year': self.year,
            'externalId': self.external_id,
            'posterUrl': self.poster_url,
            'mediaKind': self.media_kind,
            'rating': self.rating,
        }

    @classmethod
    def from_dict(cls, data: Dict) -> 'Suggestion':
        return cls(
            title=data.get('title') or NA,
            year=data.get('year') or NA,
            external_id=data.get('externalId') or NA,
            poster_url=data.get('posterUrl') or NA,
            media_kind=data.get('mediaKind') or 'movie',
            rating=data.get('rating'),
        )
