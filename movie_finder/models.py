"""
Data models for Movie Finder.
Defines the movie record shared by the favorites store, the OMDb adapter and the API,
plus the page containers returned by the service layer.
"""

# Import dataclass helpers to define simple "record-like" classes without boilerplate
from dataclasses import dataclass, field, replace  # auto-generates __init__, __repr__, etc.
# Import typing helpers for precise and self-documenting types
from typing import Any, Dict, List, Optional  # mappings and lists


# Year of the first known film; favorites older than this are rejected
MIN_MOVIE_YEAR = 1888
NOT_AVAILABLE = "N/A"  # OMDb's "field not available" sentinel


@dataclass
class Movie:
	"""
	Represents a single movie, either a saved favorite or a normalized search result.
	The JSON shape (`title`, `imdbID`, `year`, `poster`) is what the favorites file stores.
	"""
	title: str  # human-readable title
	imdb_id: str  # IMDb identifier, unique case-insensitively within favorites
	year: int = 0  # release year (0 when the upstream value could not be parsed)
	poster: str = ""  # poster URL, empty when not available
	is_favorite: bool = False  # computed for search results only, never persisted

	@property
	def key(self) -> str:
		"""Normalized identifier used for case-insensitive comparisons."""
		return normalize_imdb_id(self.imdb_id)

	def to_dict(self) -> Dict[str, Any]:
		"""Serialize to the persisted favorites shape (no isFavorite flag)."""
		return {
			"title": self.title,
			"imdbID": self.imdb_id,
			"year": self.year,
			"poster": self.poster,
		}

	def to_search_dict(self) -> Dict[str, Any]:
		"""Serialize to the search result shape, including the favorite flag."""
		payload = self.to_dict()
		payload["isFavorite"] = self.is_favorite
		return payload

	def with_favorite(self, is_favorite: bool) -> "Movie":
		"""Return a copy with the favorite flag set."""
		return replace(self, is_favorite=is_favorite)

	@classmethod
	def from_dict(cls, data: Dict[str, Any]) -> "Movie":
		"""
		Build a Movie from a persisted or API payload.
		Missing optional fields fall back to safe defaults; poster None becomes "".
		"""
		try:
			year = int(data.get("year") or 0)
		except (TypeError, ValueError):
			year = 0
		return cls(
			title=str(data.get("title") or ""),
			imdb_id=str(data.get("imdbID") or ""),
			year=year,
			poster=normalize_poster(data.get("poster")),
		)


@dataclass
class SearchPage:
	"""One page of annotated search results."""
	movies: List[Movie] = field(default_factory=list)
	total_results: int = 0

	@property
	def count(self) -> int:
		return len(self.movies)

	def to_dict(self) -> Dict[str, Any]:
		return {
			"movies": [m.to_search_dict() for m in self.movies],
			"count": self.count,
			"totalResults": self.total_results,
		}


@dataclass
class FavoritesPage:
	"""One page of the favorites collection plus the counts needed for navigation."""
	favorites: List[Movie]
	total_results: int
	current_page: int
	total_pages: int

	@property
	def count(self) -> int:
		return len(self.favorites)

	def to_dict(self) -> Dict[str, Any]:
		return {
			"favorites": [m.to_dict() for m in self.favorites],
			"count": self.count,
			"totalResults": self.total_results,
			"currentPage": self.current_page,
			"totalPages": self.total_pages,
		}


def normalize_imdb_id(imdb_id: str) -> str:
	"""Lowercase an IMDb id so lookups ignore case. Other characters are compared as-is."""
	return (imdb_id or "").lower()


def normalize_poster(raw: Optional[str]) -> str:
	"""Map a missing poster or the "N/A" sentinel to an empty string."""
	if not raw or raw == NOT_AVAILABLE:
		return ""
	return str(raw)
