"""
Favorites store backed by a JSON file.
Holds the user's favorite movies as an insertion-ordered list and persists it as a single JSON array.

Every public operation reloads the file first, so the store never serves state cached
across requests. Load-mutate-save sequences run under a per-store lock.
"""

# Standard libs for JSON parsing, math, threading, typing, and paths
import json  # read/write the favorites array
import math  # ceil for page counts
import os  # atomic file replacement
import threading  # per-store mutual exclusion
from dataclasses import replace  # copy records with normalized fields
from pathlib import Path  # filesystem-safe paths
from typing import Any, List, Union  # type hints

# Console logging
from loguru import logger  # console logger

from .errors import ConflictError, NotFoundError, PersistenceError, ValidationError
from .models import FavoritesPage, Movie, normalize_imdb_id, normalize_poster


DEFAULT_PAGE_SIZE = 10
MAX_PAGE_SIZE = 100

ADDED_MESSAGE = "Movie added to favorites"
REMOVED_MESSAGE = "Movie removed from favorites"


class FavoritesStore:
	"""
	Durable, deduplicated list of favorite movies.
	Identifiers are compared case-insensitively; the file is the single source of truth.
	"""

	def __init__(self, path: Union[str, Path]):
		self.path = Path(path)  # backing JSON file
		self.favorites: List[Movie] = []  # in-memory mirror, valid for the current call only
		self._lock = threading.RLock()  # guards load-mutate-save

	def load(self) -> List[Movie]:
		"""
		Read the backing file into memory and return the records.
		A missing file, unparseable JSON, or a top-level value that is not a list all yield
		an empty collection. Corruption is logged, never raised.
		"""
		with self._lock:
			self.favorites = self._read()
			return list(self.favorites)

	def save(self) -> None:
		"""Overwrite the backing file with the in-memory collection."""
		with self._lock:
			payload = json.dumps([m.to_dict() for m in self.favorites], indent=2, ensure_ascii=False)
			tmp_path = self.path.with_name(self.path.name + ".tmp")
			try:
				self.path.parent.mkdir(parents=True, exist_ok=True)
				tmp_path.write_text(payload, encoding="utf-8")
				os.replace(tmp_path, self.path)  # whole-file replacement
			except OSError as e:
				try:
					tmp_path.unlink(missing_ok=True)
				except OSError as cleanup_error:
					logger.warning(f"[Store] Could not remove {tmp_path}: {cleanup_error}")
				logger.error(f"[Store] Failed to save favorites to {self.path}: {e}")
				raise PersistenceError("Failed to save favorites") from e
			logger.debug(f"[Store] Saved {len(self.favorites)} favorites to {self.path}")

	def add(self, movie: Movie) -> str:
		"""
		Append a movie and persist.
		Raises ValidationError when imdbID or title is blank, ConflictError when the
		imdbID is already present (ignoring case).
		"""
		if movie is None or not (movie.imdb_id or "").strip() or not (movie.title or "").strip():
			raise ValidationError("Invalid movie data")

		with self._lock:
			self.load()
			if any(fav.key == movie.key for fav in self.favorites):
				logger.info(f"[Store] Rejected duplicate favorite {movie.imdb_id}")
				raise ConflictError("Movie already in favorites")

			# Only persisted fields are stored; the favorite flag is never written
			record = replace(movie, poster=normalize_poster(movie.poster), is_favorite=False)
			self.favorites.append(record)
			self.save()

		logger.info(f"[Store] Added favorite | {movie.title} ({movie.imdb_id})")
		return ADDED_MESSAGE

	def remove(self, imdb_id: str) -> str:
		"""Remove every record whose imdbID matches (ignoring case) and persist."""
		if not (imdb_id or "").strip():
			raise ValidationError("Movie ID is required")
		key = normalize_imdb_id(imdb_id)

		with self._lock:
			self.load()
			initial_length = len(self.favorites)
			self.favorites = [fav for fav in self.favorites if fav.key != key]
			if len(self.favorites) == initial_length:
				raise NotFoundError("Movie not found in favorites")
			self.save()

		logger.info(f"[Store] Removed favorite {imdb_id} | remaining={len(self.favorites)}")
		return REMOVED_MESSAGE

	def list(self, page: int = 1, page_size: int = DEFAULT_PAGE_SIZE) -> FavoritesPage:
		"""
		Return one page of favorites using offset (page-1)*page_size.
		Pages past the end come back empty but still report the true totals.
		"""
		if not isinstance(page, int) or page < 1:
			raise ValidationError("Page must be greater than 0")
		if not isinstance(page_size, int) or page_size < 1 or page_size > MAX_PAGE_SIZE:
			raise ValidationError(f"Page size must be between 1 and {MAX_PAGE_SIZE}")

		with self._lock:
			favorites = self.load()

		total_results = len(favorites)
		total_pages = math.ceil(total_results / page_size) if total_results else 0
		if page > total_pages:
			return FavoritesPage(favorites=[], total_results=total_results, current_page=page, total_pages=total_pages)

		start = (page - 1) * page_size
		return FavoritesPage(
			favorites=favorites[start:start + page_size],
			total_results=total_results,
			current_page=page,
			total_pages=total_pages,
		)

	def snapshot(self) -> List[Movie]:
		"""Reload from disk and return a copy of the current favorites."""
		return self.load()

	def contains(self, imdb_id: str) -> bool:
		key = normalize_imdb_id(imdb_id)
		return bool(key) and any(fav.key == key for fav in self.load())

	def _read(self) -> List[Movie]:
		try:
			self.path.parent.mkdir(parents=True, exist_ok=True)  # ensure data directory exists
			if not self.path.exists():
				return []
			content = self.path.read_text(encoding="utf-8")
		except OSError as e:
			self._report_corrupt(f"unreadable: {e}")
			return []

		try:
			parsed: Any = json.loads(content)
		except json.JSONDecodeError as e:
			self._report_corrupt(f"invalid JSON: {e}")
			return []

		if not isinstance(parsed, list):
			self._report_corrupt(f"expected a JSON array, got {type(parsed).__name__}")
			return []

		movies: List[Movie] = []
		for position, item in enumerate(parsed):
			if not isinstance(item, dict) or not item.get("imdbID") or not item.get("title"):
				logger.warning(f"[Store] Skipping malformed favorite at index {position} in {self.path}")
				continue
			movies.append(Movie.from_dict(item))
		return movies

	def _report_corrupt(self, reason: str) -> None:
		# Structured event so operators can alert on it; callers still see an empty list
		logger.bind(event="favorites_corrupt", path=str(self.path)).warning(
			f"[Store] Treating favorites as empty | path={self.path} | reason={reason}"
		)
