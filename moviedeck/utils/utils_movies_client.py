import logging
import httpx
from typing import Any, Dict, List, Optional, Type, TypeVar
from pydantic import ValidationError
from ..clients.errors import DecodeError, RemoteError
from ..schemas.movies_schemas import FilterState, MovieDetail, MovieSummary

logger = logging.getLogger(__name__)

POSTER_SIZE = 'w500'
BACKDROP_SIZE = 'original'

M = TypeVar('M', bound=MovieSummary)


async def get_json(
    client: httpx.AsyncClient,
    url: str,
    params: Dict[str, Any]
) -> Dict[str, Any]:
    """
    Issue a GET request and decode the JSON object in the response.

    :param client: HTTP client for making API requests.
    :param url: Absolute endpoint URL.
    :param params: Query parameters, including the api key.
    :return: The decoded JSON object.
    :raises RemoteError: on a non-2xx status or a transport failure.
    :raises DecodeError: when the body is not a JSON object.
    """
    logger.debug("GET %s page=%s", url, params.get('page'))
    try:
        resp = await client.get(url, params=params)
    except httpx.TransportError as exc:
        raise RemoteError(None, url, reason=str(exc)) from exc

    if not 200 <= resp.status_code < 300:
        raise RemoteError(resp.status_code, url)
    try:
        data = resp.json()
    except ValueError as exc:
        raise DecodeError(f"Invalid JSON from {url}") from exc
    if not isinstance(data, dict):
        raise DecodeError(f"Expected a JSON object from {url}")
    return data


def build_discover_params(
    api_key: str,
    filters: FilterState,
    page: int
) -> Dict[str, Any]:
    """
    Query parameters for /discover/movie. Unset filters are left out
    entirely rather than sent empty.

    :param api_key: TMDB api key.
    :param filters: Active filter state.
    :param page: 1-based page number.
    :return: Dictionary of query parameters.
    """
    query: Dict[str, Any] = {
        'api_key': api_key,
        'sort_by': filters.sort_by.value,
        'page': page,
    }
    if filters.year:
        query['primary_release_year'] = filters.year
    if filters.genre_id:
        query['with_genres'] = filters.genre_id
    if filters.original_language:
        query['with_original_language'] = filters.original_language
    return query


def build_search_params(api_key: str, text: str, page: int) -> Dict[str, Any]:
    # httpx url-encodes the query value
    return {'api_key': api_key, 'query': text, 'page': page}


def image_url(base_url: str, size: str, path: Optional[str]) -> Optional[str]:
    if not path:
        return None
    return f"{base_url}/{size}{path}"


def map_to_movie(
    item: Dict[str, Any],
    image_base_url: str,
    model: Type[M] = MovieSummary
) -> M:
    """
    Map a TMDB movie object to a MovieSummary (or MovieDetail), filling in
    the absolute poster and backdrop URLs.

    :param item: Dictionary containing TMDB movie data.
    :param image_base_url: Base of the TMDB image CDN.
    :param model: Model class to build.
    :return: The validated model.
    :raises DecodeError: when the item does not fit the model.
    """
    data = dict(item)
    data['poster_url'] = image_url(
        image_base_url, POSTER_SIZE, item.get('poster_path'))
    data['backdrop_url'] = image_url(
        image_base_url, BACKDROP_SIZE, item.get('backdrop_path'))
    try:
        return model.model_validate(data)
    except ValidationError as exc:
        raise DecodeError(
            f"Unexpected movie payload for id {item.get('id')}: {exc}") from exc


def parse_results(
    data: Dict[str, Any],
    image_base_url: str
) -> List[MovieSummary]:
    """
    Extract the `results` page of a list response.

    :param data: Decoded list response.
    :param image_base_url: Base of the TMDB image CDN.
    :return: List of MovieSummary, empty when `results` is absent.
    """
    results = data.get('results') or []
    if not isinstance(results, list):
        raise DecodeError("Expected `results` to be a list")
    return [map_to_movie(item, image_base_url) for item in results]


def parse_detail(data: Dict[str, Any], image_base_url: str) -> MovieDetail:
    return map_to_movie(data, image_base_url, MovieDetail)
