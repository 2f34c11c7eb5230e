"""
Shared fixtures: a favorites store in a temp directory, a stub search client,
and a FastAPI TestClient wired to both.
"""

import sys
from pathlib import Path
from typing import List, Optional

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
	sys.path.insert(0, str(ROOT))

from movie_finder.favorites_store import FavoritesStore
from movie_finder.models import Movie
from movie_finder.movies_service import MoviesService
from movie_finder.omdb_client import OmdbSearchResult


MATRIX = Movie(title="The Matrix", imdb_id="tt0133093", year=1999, poster="https://example.com/matrix.jpg")
MATRIX_RELOADED = Movie(title="The Matrix Reloaded", imdb_id="tt0234215", year=2003, poster="")


class StubSearchClient:
	"""Returns canned results and records every call."""

	def __init__(self, movies: Optional[List[Movie]] = None, total_results: Optional[int] = None, error: Optional[Exception] = None):
		self.movies = list(movies or [])
		self.total_results = len(self.movies) if total_results is None else total_results
		self.error = error
		self.calls = []

	def search(self, title: str, page: int = 1) -> OmdbSearchResult:
		self.calls.append((title, page))
		if self.error is not None:
			raise self.error
		return OmdbSearchResult(movies=list(self.movies), total_results=self.total_results)


@pytest.fixture
def favorites_path(tmp_path):
	return tmp_path / "data" / "favorites.json"


@pytest.fixture
def store(favorites_path):
	return FavoritesStore(favorites_path)


@pytest.fixture
def search_client():
	return StubSearchClient([MATRIX, MATRIX_RELOADED], total_results=2)


@pytest.fixture
def service(store, search_client):
	return MoviesService(store=store, search_client=search_client)


@pytest.fixture
def api_client(service, monkeypatch):
	from fastapi.testclient import TestClient
	import api

	monkeypatch.setattr(api, "SERVICE", service)
	# Not used as a context manager, so the startup hook (which reads the env) never runs
	return TestClient(api.app)
