"""
HTTP API tests.
Exercise the routes the UI calls, against a temp favorites file and a stub OMDb client.
"""

import pytest

from movie_finder.errors import AuthenticationError, UpstreamUnavailableError

MATRIX_BODY = {
	"title": "The Matrix",
	"imdbID": "tt0133093",
	"year": 1999,
	"poster": "https://example.com/poster.jpg",
}

LIST_MOVIES = [
	{"title": "The Matrix", "imdbID": "tt0133093", "year": 1999, "poster": "https://example.com/poster1.jpg"},
	{"title": "Inception", "imdbID": "tt1375666", "year": 2010, "poster": "https://example.com/poster2.jpg"},
	{"title": "Interstellar", "imdbID": "tt0816692", "year": 2014, "poster": "https://example.com/poster3.jpg"},
]


def find_movie(body, imdb_id):
	return next((m for m in body["data"]["movies"] if m["imdbID"] == imdb_id), None)


def test_health(api_client):
	resp = api_client.get("/health")
	assert resp.status_code == 200
	assert resp.json()["status"] == "ok"
	assert resp.json()["service_ready"] is True


class TestSearch:
	def test_returns_annotated_movies(self, api_client):
		resp = api_client.get("/movies/search", params={"q": "Matrix", "page": 1})
		assert resp.status_code == 200
		data = resp.json()["data"]
		assert data["count"] == 2
		assert data["totalResults"] == 2
		assert set(data["movies"][0]) == {"title", "imdbID", "year", "poster", "isFavorite"}

	@pytest.mark.parametrize("query", ["/movies/search", "/movies/search?q=", "/movies/search?q=%20%20"])
	def test_missing_query_is_400(self, api_client, query):
		resp = api_client.get(query)
		assert resp.status_code == 400
		assert "Search query is required" in resp.json()["message"]

	@pytest.mark.parametrize("page", ["abc", "-1", "0"])
	def test_invalid_page_is_400(self, api_client, page):
		resp = api_client.get("/movies/search", params={"q": "Matrix", "page": page})
		assert resp.status_code == 400
		assert "Page must be a positive number" in resp.json()["message"]

	def test_page_defaults_to_one(self, api_client, search_client):
		api_client.get("/movies/search", params={"q": "Matrix"})
		assert search_client.calls == [("Matrix", 1)]

	def test_bad_api_key_is_401(self, api_client, search_client):
		search_client.error = AuthenticationError("Invalid API key")
		resp = api_client.get("/movies/search", params={"q": "Matrix"})
		assert resp.status_code == 401
		assert resp.json() == {"statusCode": 401, "message": "Invalid API key", "error": "Unauthorized"}

	def test_upstream_down_is_503(self, api_client, search_client):
		search_client.error = UpstreamUnavailableError("Failed to fetch movies from OMDb API")
		resp = api_client.get("/movies/search", params={"q": "Matrix"})
		assert resp.status_code == 503


class TestAddFavorite:
	def test_adds_movie(self, api_client):
		resp = api_client.post("/movies/favorites", json=MATRIX_BODY)
		assert resp.status_code == 201
		assert "added to favorites" in resp.json()["data"]["message"]

	def test_duplicate_is_400(self, api_client):
		api_client.post("/movies/favorites", json=MATRIX_BODY)
		resp = api_client.post("/movies/favorites", json={**MATRIX_BODY, "imdbID": "TT0133093"})
		assert resp.status_code == 400
		assert "already in favorites" in resp.json()["message"]

	@pytest.mark.parametrize("body", [
		{"title": "Test Movie"},
		{"title": "Test Movie", "imdbID": "tt1234567", "year": "not a number"},
		{"title": "Test Movie", "imdbID": "tt1234567", "year": 1800},
		{"title": "", "imdbID": "tt1234567", "year": 2000},
		{"title": "Test Movie", "imdbID": "tt1234567", "year": 2000, "rating": 9},
	])
	def test_invalid_body_is_400(self, api_client, body):
		resp = api_client.post("/movies/favorites", json=body)
		assert resp.status_code == 400
		assert resp.json()["statusCode"] == 400

	def test_poster_is_optional(self, api_client):
		resp = api_client.post("/movies/favorites", json={"title": "Test Movie", "imdbID": "tt1234567", "year": 2000})
		assert resp.status_code == 201
		listed = api_client.get("/movies/favorites/list").json()["data"]["favorites"]
		assert listed == [{"title": "Test Movie", "imdbID": "tt1234567", "year": 2000, "poster": ""}]

	def test_unavailable_poster_is_stored_empty(self, api_client):
		resp = api_client.post("/movies/favorites", json={"title": "M", "imdbID": "tt1", "year": 1999, "poster": "N/A"})
		assert resp.status_code == 201
		listed = api_client.get("/movies/favorites/list").json()["data"]["favorites"]
		assert listed == [{"title": "M", "imdbID": "tt1", "year": 1999, "poster": ""}]


class TestRemoveFavorite:
	def test_removes_case_insensitively(self, api_client):
		api_client.post("/movies/favorites", json=MATRIX_BODY)
		resp = api_client.delete("/movies/favorites/TT0133093")
		assert resp.status_code == 200
		assert "removed from favorites" in resp.json()["data"]["message"]

	def test_missing_is_404(self, api_client):
		resp = api_client.delete("/movies/favorites/tt9999999")
		assert resp.status_code == 404
		assert "not found in favorites" in resp.json()["message"]

	def test_trailing_space_is_not_trimmed(self, api_client):
		api_client.post("/movies/favorites", json=MATRIX_BODY)
		resp = api_client.delete("/movies/favorites/tt0133093%20")
		assert resp.status_code == 404
		assert api_client.get("/movies/favorites/list").json()["data"]["totalResults"] == 1

	def test_blank_id_is_400(self, api_client):
		resp = api_client.delete("/movies/favorites/%20")
		assert resp.status_code == 400


class TestListFavorites:
	@pytest.fixture(autouse=True)
	def seed(self, api_client):
		for movie in LIST_MOVIES:
			api_client.post("/movies/favorites", json=movie)

	def test_lists_all(self, api_client):
		data = api_client.get("/movies/favorites/list").json()["data"]
		assert [m["imdbID"] for m in data["favorites"]] == [m["imdbID"] for m in LIST_MOVIES]
		assert data["count"] == 3
		assert data["totalResults"] == 3
		assert data["currentPage"] == 1
		assert data["totalPages"] == 1

	def test_page_beyond_end_is_empty(self, api_client):
		resp = api_client.get("/movies/favorites/list", params={"page": 999})
		assert resp.status_code == 200
		data = resp.json()["data"]
		assert data["favorites"] == []
		assert data["count"] == 0
		assert data["totalResults"] == 3

	@pytest.mark.parametrize("page", ["abc", "-1"])
	def test_invalid_page_is_400(self, api_client, page):
		resp = api_client.get("/movies/favorites/list", params={"page": page})
		assert resp.status_code == 400
		assert "Page must be a positive number" in resp.json()["message"]


def test_empty_favorites_list(api_client):
	resp = api_client.get("/movies/favorites/list", params={"page": 1})
	assert resp.json()["data"] == {"favorites": [], "count": 0, "totalResults": 0, "currentPage": 1, "totalPages": 0}


def test_search_reflects_favorite_changes(api_client):
	"""Add The Matrix, see it flagged in search, remove it, see the flag cleared."""
	api_client.post("/movies/favorites", json={"title": "The Matrix", "imdbID": "tt0133093", "year": 1999})

	body = api_client.get("/movies/search", params={"q": "Matrix", "page": 1}).json()
	assert find_movie(body, "tt0133093")["isFavorite"] is True
	assert find_movie(body, "tt0234215")["isFavorite"] is False

	assert api_client.delete("/movies/favorites/tt0133093").status_code == 200

	body = api_client.get("/movies/search", params={"q": "Matrix", "page": 1}).json()
	assert find_movie(body, "tt0133093")["isFavorite"] is False
