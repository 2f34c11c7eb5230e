"""
HTTP client for the movies API, used by the Streamlit UI.
Mirrors the server-side input checks so obviously bad requests never leave the browser session.
"""

from typing import Any, Dict, Optional  # type hints
from urllib.parse import quote  # path-safe imdbID

import requests  # make web requests to the FastAPI server
from loguru import logger  # console logger

from .errors import ApiClientError, ValidationError
from .models import Movie


class MovieApiClient:
	def __init__(self, base_url: str, timeout: float = 15.0, session: Optional[requests.Session] = None):
		self.base_url = base_url.rstrip("/")  # e.g. http://localhost:3001/movies
		self.timeout = timeout
		self.session = session or requests.Session()

	def search_movies(self, query: str, page: int = 1) -> Dict[str, Any]:
		if not query or not query.strip():
			raise ValidationError("Search query is required")
		_check_page(page)
		return self._request("GET", "/search", "Failed to search movies", params={"q": query, "page": page})

	def get_favorites(self, page: int = 1) -> Dict[str, Any]:
		_check_page(page)
		return self._request("GET", "/favorites/list", "Failed to get favorites", params={"page": page})

	def add_to_favorites(self, movie: Movie) -> Dict[str, Any]:
		if movie is None or not movie.imdb_id or not movie.title or not movie.year:
			raise ValidationError("Movie must have imdbID, title, and year")
		return self._request("POST", "/favorites", "Failed to add movie to favorites", json=movie.to_dict())

	def remove_from_favorites(self, imdb_id: str) -> Dict[str, Any]:
		if not imdb_id or not imdb_id.strip():
			raise ValidationError("IMDb ID is required")
		path = f"/favorites/{quote(imdb_id, safe='')}"
		return self._request("DELETE", path, "Failed to remove movie from favorites")

	def health(self) -> bool:
		"""True when the server's /health endpoint answers 200."""
		root = self.base_url.rsplit("/", 1)[0]  # /health lives next to /movies
		try:
			return self.session.get(f"{root}/health", timeout=3).ok
		except requests.RequestException:
			return False

	def _request(self, method: str, path: str, fallback_message: str, **kwargs) -> Dict[str, Any]:
		url = f"{self.base_url}{path}"
		logger.debug(f"[Client] {method} {url} {kwargs.get('params', '')}")
		try:
			resp = self.session.request(method, url, timeout=self.timeout, **kwargs)
		except requests.RequestException as e:
			raise ApiClientError(f"{fallback_message}: {e}") from e

		if not resp.ok:
			message = fallback_message
			try:
				body = resp.json()
				if isinstance(body, dict) and body.get("message"):
					message = str(body["message"])
			except ValueError:
				pass  # non-JSON error page; keep the fallback message
			raise ApiClientError(message, status_code=resp.status_code)

		return resp.json()


def _check_page(page: int) -> None:
	if not isinstance(page, int) or page < 1:
		raise ValidationError("Page must be a positive number")
