import logging
from contextlib import asynccontextmanager
from typing import List
from fastapi import Depends, FastAPI, HTTPException, Request
from .clients.errors import DecodeError, MovieClientError, RemoteError
from .clients.movie_client import MovieClient
from .config import get_settings
from .controllers.query_controller import QueryController
from .schemas.movies_schemas import ErrorResponse, FilterState, MovieDetail, MovieSummary
from .schemas.session_schemas import FilterOptions, QuerySession, SearchTextUpdate
from .utils.catalogs import filter_options

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = get_settings()
    logging.basicConfig(
        level=settings.LOG_LEVEL,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )
    client = MovieClient(settings.client_config())
    app.state.movie_client = client
    app.state.controller = QueryController(client, settings.DEBOUNCE_SECONDS)
    logger.info("moviedeck started against %s", settings.TMDB_BASE_URL)
    try:
        yield
    finally:
        await app.state.controller.close()
        await client.aclose()


app = FastAPI(lifespan=lifespan)


def get_movie_client(request: Request) -> MovieClient:
    return request.app.state.movie_client


def get_controller(request: Request) -> QueryController:
    return request.app.state.controller


async def _session_after(controller: QueryController, wait: bool) -> QuerySession:
    if wait:
        await controller.wait_idle()
    return controller.snapshot()


@app.get('/session', response_model=QuerySession)
async def read_session(controller: QueryController = Depends(get_controller)):
    return controller.snapshot()


@app.put('/session/search', response_model=QuerySession)
async def update_search(
    body: SearchTextUpdate,
    wait: bool = False,
    controller: QueryController = Depends(get_controller)
):
    controller.set_search_text(body.text)
    return await _session_after(controller, wait)


@app.put('/session/filters', response_model=QuerySession)
async def update_filters(
    filters: FilterState,
    wait: bool = False,
    controller: QueryController = Depends(get_controller)
):
    controller.set_filters(filters)
    return await _session_after(controller, wait)


@app.delete('/session/filters', response_model=QuerySession)
async def clear_filters(
    wait: bool = False,
    controller: QueryController = Depends(get_controller)
):
    controller.clear_filters()
    return await _session_after(controller, wait)


@app.post('/session/more', response_model=QuerySession)
async def load_more(
    wait: bool = False,
    controller: QueryController = Depends(get_controller)
):
    controller.load_more()
    return await _session_after(controller, wait)


@app.get('/filters/options', response_model=FilterOptions)
async def read_filter_options():
    return filter_options()


@app.get('/movies/featured', response_model=List[MovieSummary], responses={502: {'model': ErrorResponse}})
async def featured_movies(client: MovieClient = Depends(get_movie_client)):
    try:
        return await client.featured()
    except MovieClientError as e:
        logger.warning("Error fetching featured movies: %s", e)
        raise HTTPException(
            status_code=502, detail=f"TMDB service error: {str(e)}")


@app.get('/movies/{movie_id}', response_model=MovieDetail,
         responses={404: {'model': ErrorResponse}, 502: {'model': ErrorResponse}})
async def movie_detail(movie_id: int, client: MovieClient = Depends(get_movie_client)):
    try:
        return await client.get_detail(movie_id)
    except RemoteError as e:
        logger.warning("Error fetching movie %s: %s", movie_id, e)
        if e.status == 404:
            raise HTTPException(
                status_code=404, detail=f"Movie {movie_id} not found")
        raise HTTPException(
            status_code=502, detail=f"TMDB service error: {str(e)}")
    except DecodeError as e:
        logger.warning("Error decoding movie %s: %s", movie_id, e)
        raise HTTPException(
            status_code=502, detail=f"TMDB service error: {str(e)}")
