"""Unit tests for finder/resolver.py"""

import pytest
import responses

from finder.config import FinderConfig
from finder.errors import (
    InvalidRequestError,
    ProviderConfigError,
    TitleNotFoundError,
    UpstreamUnavailableError,
)
from finder.records import MediaRecord, Suggestion
from finder.resolver import Resolver, clean_title

SEARCH_URL = 'https://api.themoviedb.org/3/search/multi'


class FakeClient:
    """In-memory provider client recording every call."""

    def __init__(self, results=None, match=None, details=None, details_error=None,
                 search_error=None, match_error=None):
        self.results = results or []
        self.match = match
        self.details = details
        self.details_error = details_error
        self.search_error = search_error
        self.match_error = match_error
        self.calls = []

    def search(self, title):
        self.calls.append(('search', title))
        if self.search_error:
            raise self.search_error
        return list(self.results)

    def find_best_match(self, title):
        self.calls.append(('find_best_match', title))
        if self.match_error:
            raise self.match_error
        return self.match

    def get_details(self, match):
        self.calls.append(('get_details', match['id']))
        if self.details_error:
            raise self.details_error
        return self.details

    def to_suggestion(self, item, include_rating=True):
        return Suggestion(
            title=item['title'], year='2020', external_id=str(item['id']),
            poster_url='N/A', media_kind='movie',
            rating='7.5' if include_rating else None,
        )

    def to_record(self, match, details):
        return MediaRecord(title=match['title'], director=(details or {}).get('director', 'N/A'))


def make_resolver(client, **config):
    return Resolver(FinderConfig(**config), client_factory=lambda _config: client)


def items(count):
    return [{'id': i, 'title': f'Title {i}'} for i in range(count)]


# ============================================================================
# Tests for validation
# ============================================================================

@pytest.mark.parametrize("title", [None, '', '   ', '\t\n'])
def test_blank_title_never_reaches_provider(title):
    client = FakeClient()
    resolver = make_resolver(client)

    with pytest.raises(InvalidRequestError) as excinfo:
        resolver.lookup(title)
    with pytest.raises(InvalidRequestError):
        resolver.suggest(title)

    assert str(excinfo.value) == 'Title parameter is required'
    assert client.calls == []


def test_blank_title_does_not_build_client():
    def factory(_config):
        raise AssertionError("client should not be created")

    with pytest.raises(InvalidRequestError):
        Resolver(FinderConfig(), client_factory=factory).lookup(' ')


def test_clean_title_strips():
    assert clean_title('  Dark  ') == 'Dark'


# ============================================================================
# Tests for suggest()
# ============================================================================

def test_suggest_caps_and_preserves_order():
    client = FakeClient(results=items(20))

    suggestions = make_resolver(client, suggestion_cap=12).suggest('Title')

    assert [s.external_id for s in suggestions] == [str(i) for i in range(12)]
    assert client.calls == [('search', 'Title')]


def test_suggest_cap_clamped_for_omdb():
    client = FakeClient(results=items(20))

    suggestions = make_resolver(client, provider='omdb', api_key='k', suggestion_cap=12).suggest('Title')

    assert len(suggestions) == 10


def test_suggest_empty():
    assert make_resolver(FakeClient()).suggest('zzzz') == []


def test_suggest_upstream_failure_propagates():
    client = FakeClient(search_error=UpstreamUnavailableError('down'))

    with pytest.raises(UpstreamUnavailableError):
        make_resolver(client).suggest('Dark')


def test_resolve_dispatches_on_mode():
    client = FakeClient(results=items(2), match={'id': 1, 'title': 'Dark'})
    resolver = make_resolver(client)

    assert isinstance(resolver.resolve('Dark', 'search'), list)
    assert isinstance(resolver.resolve('Dark'), MediaRecord)
    assert isinstance(resolver.resolve('Dark', 'exact'), MediaRecord)


# ============================================================================
# Tests for lookup()
# ============================================================================

def test_lookup_merges_enrichment():
    client = FakeClient(match={'id': 7, 'title': 'Inception'}, details={'director': 'Christopher Nolan'})

    record = make_resolver(client).lookup(' Inception ')

    assert record.title == 'Inception'
    assert record.director == 'Christopher Nolan'
    assert client.calls == [('find_best_match', 'Inception'), ('get_details', 7)]


def test_lookup_enrichment_failure_degrades():
    client = FakeClient(
        match={'id': 7, 'title': 'Inception'},
        details_error=UpstreamUnavailableError('timeout'),
    )

    record = make_resolver(client).lookup('Inception')

    assert record.title == 'Inception'
    assert record.director == 'N/A'


def test_lookup_not_found_offers_fallback_suggestions():
    client = FakeClient(results=items(8), match=None)

    with pytest.raises(TitleNotFoundError) as excinfo:
        make_resolver(client, fallback_cap=5).lookup('Titel')

    error = excinfo.value
    assert [s.external_id for s in error.suggestions] == ['0', '1', '2', '3', '4']
    assert 'Did you mean one of these?' in str(error)
    assert client.calls == [('find_best_match', 'Titel'), ('search', 'Titel')]


def test_lookup_fallback_can_exclude_rating():
    client = FakeClient(results=items(2), match=None)

    with pytest.raises(TitleNotFoundError) as excinfo:
        make_resolver(client, fallback_include_rating=False).lookup('Titel')

    assert all(s.rating is None for s in excinfo.value.suggestions)


def test_lookup_not_found_without_alternatives():
    client = FakeClient(results=[], match=None)

    with pytest.raises(TitleNotFoundError) as excinfo:
        make_resolver(client).lookup('zzzz')

    assert excinfo.value.suggestions == []
    assert str(excinfo.value) == '"zzzz" not found. Try a different title or spelling.'


def test_lookup_fallback_failure_is_plain_not_found():
    client = FakeClient(match=None, search_error=UpstreamUnavailableError('down'))

    with pytest.raises(TitleNotFoundError) as excinfo:
        make_resolver(client).lookup('zzzz')

    assert excinfo.value.suggestions == []


def test_lookup_primary_failure_is_upstream_error():
    client = FakeClient(match_error=UpstreamUnavailableError('502'))

    with pytest.raises(UpstreamUnavailableError):
        make_resolver(client).lookup('Dark')
    assert ('search', 'Dark') not in client.calls


def test_missing_credential_fails_at_request_time():
    resolver = Resolver(FinderConfig(provider='omdb'))

    with pytest.raises(ProviderConfigError):
        resolver.lookup('Inception')


# ============================================================================
# Tests against a mocked TMDB
# ============================================================================

@responses.activate
def test_lookup_tmdb_end_to_end(load_response):
    responses.add(responses.GET, SEARCH_URL, json=load_response('tmdb_movie_search'), status=200)
    responses.add(
        responses.GET,
        'https://api.themoviedb.org/3/movie/27205',
        json=load_response('tmdb_movie_details'),
        status=200
    )

    record = Resolver(FinderConfig(api_key='k')).lookup('Inception')

    assert record.year == '2010'
    assert record.rating == '8.0'
    assert record.external_id == 'tt1375666'
    assert len(responses.calls) == 2


@responses.activate
def test_lookup_tmdb_details_down(load_response):
    responses.add(responses.GET, SEARCH_URL, json=load_response('tmdb_movie_search'), status=200)
    responses.add(responses.GET, 'https://api.themoviedb.org/3/movie/27205', status=500)

    record = Resolver(FinderConfig(api_key='k')).lookup('Inception')

    assert record.title == 'Inception'
    assert record.runtime == 'N/A'
    assert record.cast == 'N/A'
