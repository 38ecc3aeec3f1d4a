"""Normalization helpers shared by the provider mappers."""

import re
from typing import Dict, Iterable, List, Optional

from .records import NA

IMDB_TITLE_URL = "https://www.imdb.com/title/{imdb_id}/"
TMDB_ITEM_URL = "https://www.themoviedb.org/{media_type}/{media_id}"


def or_na(value) -> str:
    """Return value as text, or the 'N/A' sentinel when it is blank."""
    if value is None:
        return NA
    text = str(value).strip()
    return text if text else NA


def year_from_dates(*dates: Optional[str]) -> str:
    """
    Derive a 4-digit year from the first date field that is present.

    Args:
        dates: Candidate date strings in priority order

    Returns:
        The 4-digit year, or 'N/A'

    Examples:
        ("2016-07-15", None) -> "2016"
        (None, "2017-12-01") -> "2017"
        ("2008–2013",) -> "2008"
        (None, None) -> "N/A"
    """
    candidate = next((d for d in dates if d and str(d).strip()), '')
    prefix = str(candidate).split('-')[0].strip()
    match = re.match(r'^(\d{4})', prefix)
    return match.group(1) if match else NA


def format_rating(value) -> str:
    """Format a numeric average to exactly one decimal place ('8.0', not '8')."""
    if value is None or isinstance(value, bool):
        return NA
    try:
        number = float(value)
    except (TypeError, ValueError):
        return NA
    # Unrated titles come back as 0
    if not number:
        return NA
    return f"{number:.1f}"


def format_runtime(media_kind: str, minutes=None, seasons=None) -> str:
    """
    Format the runtime line for a record.

    Args:
        media_kind: 'movie' or 'series'
        minutes: Running time in minutes (movies)
        seasons: Number of seasons (series)

    Returns:
        "NN min" for a movie, "N seasons" for a series, 'N/A' when unknown
    """
    if media_kind == 'series':
        count = _as_int(seasons)
        return f"{count} seasons" if count is not None else NA
    count = _as_int(minutes)
    return f"{count} min" if count is not None else NA


def _as_int(value) -> Optional[int]:
    if value is None or isinstance(value, bool):
        return None
    match = re.match(r'^\s*(\d+)', str(value))
    return int(match.group(1)) if match else None


def join_top_names(names: Iterable[str], limit: int = 3) -> str:
    """Join the first `limit` non-blank names with ', ', or 'N/A'."""
    picked: List[str] = []
    for name in names:
        if name and str(name).strip():
            picked.append(str(name).strip())
        if len(picked) == limit:
            break
    return ", ".join(picked) if picked else NA


def split_names(text: Optional[str]) -> List[str]:
    """Split a comma-joined name list, treating 'N/A' as empty."""
    if not text or text.strip() == NA:
        return []
    return [part.strip() for part in text.split(',') if part.strip()]


def first_director(crew: Optional[List[Dict]]) -> str:
    """Name of the first crew member whose job is 'Director', or 'N/A'."""
    for person in crew or []:
        if isinstance(person, dict) and person.get('job') == 'Director':
            return or_na(person.get('name'))
    return NA


def detail_link(imdb_id: Optional[str], media_type: str, media_id) -> str:
    """
    Link to the canonical external page for a title.

    Prefers the IMDb title page when a cross-reference id exists and falls
    back to the provider's own item page.
    """
    if imdb_id and imdb_id != NA:
        return IMDB_TITLE_URL.format(imdb_id=imdb_id)
    if media_id is None:
        return NA
    return TMDB_ITEM_URL.format(media_type=media_type, media_id=media_id)
