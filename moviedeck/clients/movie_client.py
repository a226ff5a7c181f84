from typing import List, Optional
import httpx
from ..config import ClientConfig
from ..schemas.movies_schemas import FilterState, MovieDetail, MovieSummary
from ..utils.utils_movies_client import (
    build_discover_params,
    build_search_params,
    get_json,
    parse_detail,
    parse_results,
)

FEATURED_COUNT = 5


class MovieClient:
    """
    Read-only client for the TMDB movie endpoints used by the front end:
    discover-by-filter, search-by-text and detail-by-id.

    No retries and no caching: every call is one GET, and a detail is
    fetched again on every request.
    """

    def __init__(
        self,
        config: ClientConfig,
        client: Optional[httpx.AsyncClient] = None
    ):
        self.config = config
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(timeout=config.timeout)

    async def __aenter__(self) -> 'MovieClient':
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        # an injected client belongs to the caller
        if self._owns_client:
            await self._client.aclose()

    def _url(self, path: str) -> str:
        return f"{self.config.base_url}{path}"

    async def list_by_filters(
        self,
        filters: FilterState,
        page: int = 1
    ) -> List[MovieSummary]:
        """
        Discover movies matching the sort key and the optional year, genre
        and original-language filters.

        :param filters: FilterState to apply.
        :param page: 1-based page number.
        :return: One page of MovieSummary objects, possibly empty.
        """
        params = build_discover_params(self.config.api_key, filters, page)
        data = await get_json(self._client, self._url('/discover/movie'), params)
        return parse_results(data, self.config.image_base_url)

    async def list_by_search(self, text: str, page: int = 1) -> List[MovieSummary]:
        """
        Full-text title search.

        :param text: Search text as typed.
        :param page: 1-based page number.
        :return: One page of MovieSummary objects, possibly empty.
        """
        params = build_search_params(self.config.api_key, text, page)
        data = await get_json(self._client, self._url('/search/movie'), params)
        return parse_results(data, self.config.image_base_url)

    async def get_detail(self, movie_id: int) -> MovieDetail:
        data = await get_json(
            self._client,
            self._url(f'/movie/{movie_id}'),
            {'api_key': self.config.api_key}
        )
        return parse_detail(data, self.config.image_base_url)

    async def featured(self, limit: int = FEATURED_COUNT) -> List[MovieSummary]:
        """Most popular movies right now, for the hero carousel."""
        movies = await self.list_by_filters(FilterState(), 1)
        return movies[:limit]
