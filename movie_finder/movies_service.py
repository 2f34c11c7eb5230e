"""
Movies service.
Orchestrates one request: search OMDb and mark favorites, or mutate/list the favorites store.
The store and the search client are passed in explicitly; nothing is cached between calls.
"""

import time  # measure search latency
from typing import Protocol

from loguru import logger  # console logger

from .errors import ValidationError
from .favorites_store import DEFAULT_PAGE_SIZE, FavoritesStore
from .models import MIN_MOVIE_YEAR, FavoritesPage, Movie, SearchPage
from .omdb_client import OmdbSearchResult
from .reconciliation import annotate_favorites


class SearchClient(Protocol):
	"""Anything that can search movies by title; OmdbClient in production."""

	def search(self, title: str, page: int = 1) -> OmdbSearchResult:
		...


class MoviesService:
	def __init__(self, store: FavoritesStore, search_client: SearchClient):
		self.store = store  # favorites source of truth
		self.search_client = search_client  # upstream adapter

	def search_movies(self, query: str, page: int = 1) -> SearchPage:
		"""Search by title and annotate each hit with its favorite status."""
		start = time.time()
		result = self.search_client.search(query, page)

		# Favorites may have changed since the last request, so reload right before joining
		favorites = self.store.snapshot()
		movies = annotate_favorites(result.movies, favorites)

		elapsed_ms = (time.time() - start) * 1000
		logger.info(f"[Service] search q='{query}' page={page} served {len(movies)} movies in {elapsed_ms:.2f} ms")
		return SearchPage(movies=movies, total_results=result.total_results)

	def add_to_favorites(self, movie: Movie) -> str:
		if movie is not None and movie.year < MIN_MOVIE_YEAR:
			raise ValidationError(f"year must not be less than {MIN_MOVIE_YEAR}")
		return self.store.add(movie)

	def remove_from_favorites(self, imdb_id: str) -> str:
		return self.store.remove(imdb_id)

	def get_favorites(self, page: int = 1, page_size: int = DEFAULT_PAGE_SIZE) -> FavoritesPage:
		return self.store.list(page, page_size)
