import pytest
from fastapi.testclient import TestClient

import moviedeck.main as main
from moviedeck.clients.errors import DecodeError, RemoteError
from moviedeck.config import get_settings
from moviedeck.controllers.query_controller import QueryController
from moviedeck.schemas.movies_schemas import MovieDetail, MovieSummary


class FakeMovieClient:
    def __init__(self):
        self.calls = []
        self.detail_error = None
        self.featured_error = None

    async def list_by_filters(self, filters, page):
        self.calls.append(('browse', filters.model_dump(mode='json'), page))
        return [MovieSummary(id=page * 100 + i, title=f"Popular {i}") for i in range(3)]

    async def list_by_search(self, text, page):
        self.calls.append(('search', text, page))
        return [MovieSummary(id=42, title="The Hitchhiker's Guide to the Galaxy")]

    async def featured(self, limit=5):
        if self.featured_error:
            raise self.featured_error
        return [MovieSummary(id=i, title=f"Hero {i}") for i in range(limit)]

    async def get_detail(self, movie_id):
        if self.detail_error:
            raise self.detail_error
        return MovieDetail(id=movie_id, title="Life of Pi", budget=120000000,
                           revenue=609016565, imdb_id="tt0454876")


@pytest.fixture
def fake_client():
    return FakeMovieClient()


@pytest.fixture
def client(monkeypatch, fake_client):
    monkeypatch.setenv("TMDB_API_KEY", "test-key")
    get_settings.cache_clear()
    controller = QueryController(fake_client, 0.2)
    main.app.dependency_overrides[main.get_controller] = lambda: controller
    main.app.dependency_overrides[main.get_movie_client] = lambda: fake_client
    with TestClient(main.app) as test_client:
        yield test_client
    main.app.dependency_overrides.clear()
    get_settings.cache_clear()


def test_session_starts_in_browse_mode(client):
    resp = client.get("/session")
    assert resp.status_code == 200
    body = resp.json()
    assert body["mode"] == "browse"
    assert body["page_cursor"] == 1
    assert body["accumulated_results"] == []
    assert body["filters"]["sort_by"] == "popularity.desc"


def test_search_then_clear_fetches_browse_once(client, fake_client):
    client.put("/session/search", json={"text": "batman"})
    resp = client.put("/session/search", params={"wait": "true"}, json={"text": ""})

    body = resp.json()
    assert body["mode"] == "browse"
    assert len(body["accumulated_results"]) == 3
    assert fake_client.calls == [('browse', {
        "sort_by": "popularity.desc", "year": None, "genre_id": None,
        "original_language": None,
    }, 1)]


def test_search_text_switches_to_search_mode(client, fake_client):
    resp = client.put("/session/search", params={"wait": "true"}, json={"text": "galaxy"})
    body = resp.json()
    assert body["mode"] == "search"
    assert body["accumulated_results"][0]["id"] == 42
    assert fake_client.calls == [('search', 'galaxy', 1)]


def test_filters_then_load_more_appends(client, fake_client):
    client.put("/session/filters", params={"wait": "true"},
               json={"sort_by": "vote_average.desc", "year": "2012", "genre_id": ""})
    resp = client.post("/session/more", params={"wait": "true"})

    body = resp.json()
    assert body["page_cursor"] == 2
    assert [m["id"] for m in body["accumulated_results"]] == [100, 101, 102, 200, 201, 202]
    assert body["filters"]["year"] == 2012
    assert body["filters"]["genre_id"] is None
    assert fake_client.calls[-1][0] == 'browse'
    assert fake_client.calls[-1][2] == 2


def test_clear_filters_resets_to_default(client):
    client.put("/session/filters", json={"original_language": "ja"})
    resp = client.delete("/session/filters", params={"wait": "true"})
    assert resp.json()["filters"]["original_language"] is None


def test_invalid_filters_are_rejected(client):
    resp = client.put("/session/filters", json={"sort_by": "title.asc"})
    assert resp.status_code == 422
    resp = client.put("/session/filters", json={"original_language": "english"})
    assert resp.status_code == 422


def test_filter_options_lists_catalogs(client):
    body = client.get("/filters/options").json()
    assert body["sort_keys"] == ["popularity.desc", "vote_average.desc", "release_date.desc"]
    assert {"id": 878, "name": "Science Fiction"} in body["genres"]
    assert {"code": "ko", "name": "Korean"} in body["languages"]
    assert body["years"][-1] == 2000
    assert body["years"] == sorted(body["years"], reverse=True)


def test_featured_returns_five(client):
    resp = client.get("/movies/featured")
    assert resp.status_code == 200
    assert [m["id"] for m in resp.json()] == [0, 1, 2, 3, 4]


def test_featured_upstream_error_is_502(client, fake_client):
    fake_client.featured_error = DecodeError("bad json")
    resp = client.get("/movies/featured")
    assert resp.status_code == 502
    assert "TMDB service error" in resp.json()["detail"]


def test_movie_detail(client):
    resp = client.get("/movies/87827")
    assert resp.status_code == 200
    body = resp.json()
    assert body["id"] == 87827
    assert body["profit"] == 489016565
    assert body["imdb_url"] == "https://www.imdb.com/title/tt0454876"


def test_movie_detail_not_found_is_404(client, fake_client):
    fake_client.detail_error = RemoteError(404, "u")
    resp = client.get("/movies/9999")
    assert resp.status_code == 404
    assert resp.json() == {"detail": "Movie 9999 not found"}


def test_movie_detail_upstream_failure_is_502(client, fake_client):
    fake_client.detail_error = RemoteError(500, "u")
    resp = client.get("/movies/1")
    assert resp.status_code == 502
    assert "TMDB service error" in resp.json()["detail"]


def test_movie_detail_non_integer_id_is_422(client):
    assert client.get("/movies/not-a-number").status_code == 422
