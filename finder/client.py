"""HTTP client for the resolver endpoint and the three-view browsing session."""

from enum import Enum
from typing import Callable, List, Optional

import requests

from .debounce import SuggestionDebouncer
from .errors import (
    FinderError,
    InvalidRequestError,
    TitleNotFoundError,
    UpstreamUnavailableError,
)
from .records import MediaRecord, Suggestion
from .resolver import MODE_SEARCH, clean_title

DEFAULT_SERVER_URL = "http://127.0.0.1:5000"


class FinderClient:
    """Calls GET /api/search on a running server."""

    def __init__(self, base_url: str = DEFAULT_SERVER_URL, timeout: float = 15.0):
        self.base_url = base_url.rstrip('/')
        self.timeout = timeout

    def _request(self, title: str, mode: Optional[str] = None) -> dict:
        params = {'title': title}
        if mode:
            params['mode'] = mode

        try:
            response = requests.get(f"{self.base_url}/api/search", params=params, timeout=self.timeout)
        except requests.RequestException as e:
            raise UpstreamUnavailableError(f"Could not reach {self.base_url}: {e}") from e

        try:
            body = response.json()
        except ValueError:
            body = {}
        if not isinstance(body, dict):
            body = {}

        if response.status_code == 200:
            return body

        message = body.get('error') or f"HTTP {response.status_code}"
        if response.status_code == 400:
            raise InvalidRequestError(message)
        if response.status_code == 404:
            suggestions = [Suggestion.from_dict(s) for s in body.get('suggestions') or []]
            raise TitleNotFoundError(title, suggestions, message=message)
        raise UpstreamUnavailableError(message)

    def lookup(self, title: Optional[str]) -> MediaRecord:
        """
        Exact lookup of a title.

        Raises:
            InvalidRequestError: Blank title; no request is sent
            TitleNotFoundError: No match, with any suggested alternatives
            UpstreamUnavailableError: Server unreachable or failing
        """
        title = clean_title(title)
        return MediaRecord.from_dict(self._request(title))

    def suggest(self, title: Optional[str]) -> List[Suggestion]:
        """Suggestion listing for a partial title. Blank titles send nothing."""
        title = clean_title(title)
        body = self._request(title, MODE_SEARCH)
        return [Suggestion.from_dict(s) for s in body.get('suggestions') or []]


class ViewState(Enum):
    LANDING = 'landing'
    RESULTS = 'results'
    DETAILS = 'details'


class FinderSession:
    """
    Transient UI state for one user session.

    Exactly one view is active at a time. Nothing outlives the session.
    """

    def __init__(self, client: FinderClient, debouncer_factory: Optional[Callable] = None):
        self.client = client
        self.view = ViewState.LANDING
        self.query = ''
        self.results: List[Suggestion] = []
        self.live_suggestions: List[Suggestion] = []
        self.record: Optional[MediaRecord] = None
        self.error = ''
        factory = debouncer_factory or SuggestionDebouncer
        self.debouncer = factory(self._fetch_live, self._show_live)

    def _fetch_live(self, query: str) -> List[Suggestion]:
        try:
            return self.client.suggest(query)
        except FinderError:
            return []

    def _show_live(self, query: str, suggestions: List[Suggestion]) -> None:
        self.live_suggestions = list(suggestions)

    def type_query(self, text: str) -> None:
        """Update the query text; live suggestions follow once typing pauses."""
        self.query = text
        if len((text or '').strip()) < self.debouncer.min_length:
            self.live_suggestions = []
        self.debouncer.on_input(text)

    def submit(self, text: Optional[str] = None) -> ViewState:
        """Exact lookup of the query. Blank input sets an error and sends nothing."""
        if text is not None:
            self.query = text
        self.debouncer.invalidate()
        self.live_suggestions = []

        if not self.query.strip():
            self.error = 'Please enter a movie or show title'
            return self.view

        self.error = ''
        try:
            self.record = self.client.lookup(self.query)
            self.view = ViewState.DETAILS
        except TitleNotFoundError as e:
            self.error = str(e)
            self.record = None
            if e.suggestions:
                self.results = e.suggestions
                self.view = ViewState.RESULTS
            elif self.view == ViewState.DETAILS:
                self.view = ViewState.RESULTS if self.results else ViewState.LANDING
        except FinderError as e:
            self.error = str(e) or 'An error occurred. Please try again.'
        return self.view

    def show_results(self, text: Optional[str] = None) -> ViewState:
        """List every suggestion for the query in the results view."""
        if text is not None:
            self.query = text
        self.debouncer.invalidate()
        self.live_suggestions = []

        if not self.query.strip():
            self.error = 'Please enter a movie or show title'
            return self.view

        self.error = ''
        try:
            self.results = self.client.suggest(self.query)
        except FinderError as e:
            self.error = str(e)
            return self.view

        if not self.results:
            self.error = f'No results for "{self.query.strip()}"'
        self.view = ViewState.RESULTS
        return self.view

    def pick(self, index: int) -> ViewState:
        """Open the details of a listed result (or live suggestion on the landing view)."""
        candidates = self.results if self.view == ViewState.RESULTS else self.live_suggestions
        if not 0 <= index < len(candidates):
            raise IndexError(f"No result at position {index + 1}")
        return self.submit(candidates[index].title)

    def back(self) -> ViewState:
        """DETAILS -> RESULTS (when a list exists) -> LANDING."""
        self.error = ''
        if self.view == ViewState.DETAILS:
            self.record = None
            self.view = ViewState.RESULTS if self.results else ViewState.LANDING
        elif self.view == ViewState.RESULTS:
            self.results = []
            self.view = ViewState.LANDING
        return self.view
