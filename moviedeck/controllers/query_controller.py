import asyncio
import logging
from typing import Optional, Set, Tuple
from ..clients.errors import MovieClientError
from ..clients.movie_client import MovieClient
from ..schemas.movies_schemas import FilterState
from ..schemas.session_schemas import QueryMode, QuerySession

logger = logging.getLogger(__name__)

DEBOUNCE_SECONDS = 0.5


class QueryController:
    """
    Turns search, filter and "load more" edits into TMDB queries.

    Every edit bumps the generation and restarts the debounce timer, so a
    burst of edits produces a single fetch once input has been quiet for
    `debounce_seconds`. A fetch that was already in flight when a newer
    edit arrived is allowed to finish, but its result is dropped: only the
    latest generation may write to the session.

    Must be driven from inside a running event loop.
    """

    def __init__(
        self,
        client: MovieClient,
        debounce_seconds: float = DEBOUNCE_SECONDS
    ):
        self._client = client
        self._debounce_seconds = debounce_seconds
        self._session = QuerySession()
        self._generation = 0
        self._timer: Optional[asyncio.Task] = None
        self._inflight: Set[asyncio.Task] = set()
        # (generation, page) of the last fetch that returned a non-empty page
        self._loaded: Optional[Tuple[int, int]] = None

    @property
    def generation(self) -> int:
        return self._generation

    def snapshot(self) -> QuerySession:
        return self._session.model_copy(deep=True)

    def set_search_text(self, text: str) -> None:
        session = self._session
        session.search_text = text
        session.page_cursor = 1
        session.accumulated_results = []
        self._schedule()

    def set_filters(self, filters: FilterState) -> None:
        self._session.filters = filters
        self._session.page_cursor = 1
        self._schedule()

    def clear_filters(self) -> None:
        self.set_filters(FilterState())

    def load_more(self) -> bool:
        """
        Advance to the next page. Only allowed once the page at the current
        cursor has been fetched for the current search and filters and came
        back non-empty; refused after an edit that has not been fetched yet,
        after a failed page and after an empty page.

        :return: True when a fetch for the next page was scheduled.
        """
        if self._loaded != (self._generation, self._session.page_cursor):
            logger.debug("load_more ignored: page %s not loaded for generation %s",
                         self._session.page_cursor, self._generation)
            return False
        self._session.page_cursor += 1
        self._schedule()
        return True

    def _schedule(self) -> None:
        self._generation += 1
        if self._timer is not None and not self._timer.done():
            self._timer.cancel()
        self._timer = asyncio.create_task(
            self._fire_after_quiet(self._generation))

    async def _fire_after_quiet(self, generation: int) -> None:
        await asyncio.sleep(self._debounce_seconds)
        # the fetch runs outside the timer so a later edit cancelling the
        # timer never aborts a request already on the wire
        task = asyncio.create_task(self.run_query(generation))
        self._inflight.add(task)
        task.add_done_callback(self._inflight.discard)

    def _is_current(self, generation: Optional[int]) -> bool:
        return generation is None or generation == self._generation

    async def run_query(self, generation: Optional[int] = None) -> None:
        """
        Fetch the page at the current cursor and merge it into the session.

        Page 1 replaces the accumulated results, later pages are appended.
        On failure the results are left as they were and `error` is set.

        :param generation: Generation the fetch was scheduled for; None
            runs unconditionally as the current one.
        """
        session = self._session
        page = session.page_cursor
        mode = session.mode
        if self._is_current(generation):
            session.loading = True
        try:
            if mode == QueryMode.search:
                movies = await self._client.list_by_search(session.search_text, page)
            else:
                movies = await self._client.list_by_filters(session.filters, page)
        except MovieClientError as exc:
            logger.warning("Error fetching movies (%s, page %s): %s",
                           mode.value, page, exc)
            if self._is_current(generation):
                session.loading = False
                session.error = str(exc)
            return

        if not self._is_current(generation):
            logger.debug("Discarding stale %s page %s (generation %s, now %s)",
                         mode.value, page, generation, self._generation)
            return

        session.loading = False
        session.error = None
        self._loaded = (self._generation, page) if movies else None
        if page == 1:
            session.accumulated_results = movies
        else:
            session.accumulated_results = session.accumulated_results + movies
        logger.info("Loaded %s %s results for page %s (%s total)",
                    len(movies), mode.value, page, len(session.accumulated_results))

    async def wait_idle(self) -> None:
        """Wait until the debounce timer and every fetch it started are done."""
        while True:
            if self._timer is not None and not self._timer.done():
                await asyncio.wait({self._timer})
                continue
            pending = {task for task in self._inflight if not task.done()}
            if not pending:
                return
            await asyncio.wait(pending)

    async def close(self) -> None:
        tasks = set(self._inflight)
        if self._timer is not None:
            tasks.add(self._timer)
        for task in tasks:
            task.cancel()
        if tasks:
            await asyncio.gather(*tasks, return_exceptions=True)
        self._timer = None
