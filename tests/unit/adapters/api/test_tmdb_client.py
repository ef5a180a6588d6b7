"""
Tests for TMDBClient - TMDB API client implementation.

Uses respx to mock httpx calls and verifies:
- Category listings hit the mapped endpoint and are capped at 20 items
- Details append credits, videos, images and watch providers
- Failures are classified into ProviderError kinds
- Exactly one HTTP attempt per call (no retry inside the client)
"""

import httpx
import pytest
import respx

from movieverse.adapters.api.tmdb_client import TMDBClient
from movieverse.core.exceptions import InvalidCategoryError, ProviderError, ProviderErrorKind
from movieverse.core.ports.api_clients import ICatalogClient
from tests.fixtures.tmdb_responses import (
    TMDB_ACTION_RESPONSE,
    TMDB_MOVIE_DETAILS_RESPONSE,
    TMDB_TV_DETAILS_RESPONSE,
    make_listing_response,
)

BASE = "https://api.themoviedb.org/3"


@pytest.fixture
def tmdb_client() -> TMDBClient:
    """TMDBClient instance with a v3 key."""
    return TMDBClient(api_key="test_api_key")


class TestTMDBClientInterface:
    """Test TMDBClient implements ICatalogClient correctly."""

    def test_implements_interface(self, tmdb_client: TMDBClient):
        assert isinstance(tmdb_client, ICatalogClient)

    def test_source_property_returns_tmdb(self, tmdb_client: TMDBClient):
        assert tmdb_client.source == "tmdb"


class TestFetchCategory:
    """Tests for TMDBClient.fetch_category()."""

    @pytest.mark.asyncio
    @respx.mock
    async def test_fetch_action_uses_discover_with_genre(self, tmdb_client: TMDBClient):
        route = respx.get(f"{BASE}/discover/movie").mock(
            return_value=httpx.Response(200, json=TMDB_ACTION_RESPONSE)
        )

        items = await tmdb_client.fetch_category("action")

        assert len(items) == 5
        assert items[0]["title"] == "Inception"
        params = route.calls.last.request.url.params
        assert params["with_genres"] == "28"
        assert params["page"] == "1"
        assert params["api_key"] == "test_api_key"

    @pytest.mark.asyncio
    @respx.mock
    async def test_fetch_classics_sends_sort_and_date_bound(self, tmdb_client: TMDBClient):
        route = respx.get(f"{BASE}/discover/movie").mock(
            return_value=httpx.Response(200, json={"results": []})
        )

        await tmdb_client.fetch_category("classics")

        params = route.calls.last.request.url.params
        assert params["sort_by"] == "vote_average.desc"
        assert params["primary_release_date.lte"] == "1990-12-31"

    @pytest.mark.asyncio
    @respx.mock
    async def test_fetch_category_caps_results_at_20(self, tmdb_client: TMDBClient):
        respx.get(f"{BASE}/movie/top_rated").mock(
            return_value=httpx.Response(200, json=make_listing_response(25))
        )

        items = await tmdb_client.fetch_category("topimdb")

        assert len(items) == 20

    @pytest.mark.asyncio
    @respx.mock
    async def test_fetch_category_missing_results_returns_empty(self, tmdb_client: TMDBClient):
        respx.get(f"{BASE}/trending/all/week").mock(return_value=httpx.Response(200, json={}))

        assert await tmdb_client.fetch_category("trending") == []

    @pytest.mark.asyncio
    @respx.mock
    async def test_unknown_category_raises_without_http_call(self, tmdb_client: TMDBClient):
        route = respx.get(url__startswith=BASE).mock(return_value=httpx.Response(200, json={}))

        with pytest.raises(InvalidCategoryError):
            await tmdb_client.fetch_category("documentaries")

        assert route.call_count == 0


class TestFetchDetails:
    """Tests for TMDBClient.fetch_details()."""

    @pytest.mark.asyncio
    @respx.mock
    async def test_fetch_movie_details_appends_sub_resources(self, tmdb_client: TMDBClient):
        route = respx.get(f"{BASE}/movie/27205").mock(
            return_value=httpx.Response(200, json=TMDB_MOVIE_DETAILS_RESPONSE)
        )

        data = await tmdb_client.fetch_details("27205")

        assert data["title"] == "Inception"
        append = route.calls.last.request.url.params["append_to_response"]
        assert append == "credits,videos,images,watch/providers"

    @pytest.mark.asyncio
    @respx.mock
    async def test_fetch_series_details_uses_tv_endpoint(self, tmdb_client: TMDBClient):
        route = respx.get(f"{BASE}/tv/1399").mock(
            return_value=httpx.Response(200, json=TMDB_TV_DETAILS_RESPONSE)
        )

        data = await tmdb_client.fetch_details("1399", is_series=True)

        assert route.called
        assert data["name"] == "Game of Thrones"


class TestErrorClassification:
    """Failures are mapped to ProviderErrorKind."""

    @pytest.mark.parametrize(
        "status_code, kind",
        [
            (429, ProviderErrorKind.RATE_LIMITED),
            (401, ProviderErrorKind.UNAUTHORIZED),
            (403, ProviderErrorKind.UNAUTHORIZED),
            (404, ProviderErrorKind.NOT_FOUND),
            (500, ProviderErrorKind.TRANSIENT),
            (503, ProviderErrorKind.TRANSIENT),
        ],
    )
    @pytest.mark.asyncio
    @respx.mock
    async def test_status_code_mapping(
        self, tmdb_client: TMDBClient, status_code: int, kind: ProviderErrorKind
    ):
        route = respx.get(f"{BASE}/movie/1").mock(return_value=httpx.Response(status_code))

        with pytest.raises(ProviderError) as exc_info:
            await tmdb_client.fetch_details("1")

        assert exc_info.value.kind == kind
        assert exc_info.value.status_code == status_code
        # Un seul essai, meme sur 429 ou 5xx
        assert route.call_count == 1

    @pytest.mark.asyncio
    @respx.mock
    async def test_timeout_is_transient(self, tmdb_client: TMDBClient):
        respx.get(f"{BASE}/discover/movie").mock(side_effect=httpx.ReadTimeout("timed out"))

        with pytest.raises(ProviderError) as exc_info:
            await tmdb_client.fetch_category("action")

        assert exc_info.value.kind == ProviderErrorKind.TRANSIENT
        assert exc_info.value.status_code is None

    @pytest.mark.asyncio
    @respx.mock
    async def test_connection_error_is_transient(self, tmdb_client: TMDBClient):
        respx.get(f"{BASE}/discover/movie").mock(side_effect=httpx.ConnectError("refused"))

        with pytest.raises(ProviderError) as exc_info:
            await tmdb_client.fetch_category("action")

        assert exc_info.value.kind == ProviderErrorKind.TRANSIENT

    @pytest.mark.asyncio
    @respx.mock
    async def test_invalid_json_is_transient(self, tmdb_client: TMDBClient):
        respx.get(f"{BASE}/movie/1").mock(return_value=httpx.Response(200, text="<html>"))

        with pytest.raises(ProviderError) as exc_info:
            await tmdb_client.fetch_details("1")

        assert exc_info.value.kind == ProviderErrorKind.TRANSIENT

    @pytest.mark.parametrize("body", [[], ["Action"], "Inception", 42])
    @pytest.mark.asyncio
    @respx.mock
    async def test_non_object_json_is_transient(self, tmdb_client: TMDBClient, body):
        respx.get(f"{BASE}/movie/1").mock(return_value=httpx.Response(200, json=body))

        with pytest.raises(ProviderError) as exc_info:
            await tmdb_client.fetch_details("1")

        assert exc_info.value.kind == ProviderErrorKind.TRANSIENT
        assert exc_info.value.status_code == 200

    @pytest.mark.asyncio
    @respx.mock
    async def test_missing_api_key_is_unauthorized_without_http_call(self):
        route = respx.get(url__startswith=BASE).mock(return_value=httpx.Response(200, json={}))
        client = TMDBClient(api_key=None)

        with pytest.raises(ProviderError) as exc_info:
            await client.fetch_category("action")

        assert exc_info.value.kind == ProviderErrorKind.UNAUTHORIZED
        assert route.call_count == 0


class TestAuthentication:
    """v3 keys go in the query string, v4 tokens in a bearer header."""

    @pytest.mark.asyncio
    @respx.mock
    async def test_v4_token_sent_as_bearer(self):
        token = "eyJ" + "a" * 60
        client = TMDBClient(api_key=token)
        route = respx.get(f"{BASE}/movie/27205").mock(
            return_value=httpx.Response(200, json=TMDB_MOVIE_DETAILS_RESPONSE)
        )

        await client.fetch_details("27205")

        request = route.calls.last.request
        assert request.headers["Authorization"] == f"Bearer {token}"
        assert "api_key" not in request.url.params
        await client.close()
