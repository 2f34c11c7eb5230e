"""
OMDb search adapter.
Calls the OMDb search endpoint and normalizes its loosely typed payload
(string numbers, "N/A" sentinels, "True"/"False" strings) into Movie records.
"""

# Standard libs for regex and typing
import re  # leading-year extraction
from dataclasses import dataclass, field  # result container
from typing import Any, Dict, List, Optional  # type hints

# HTTP client for the upstream API
import requests  # make web requests to OMDb

# Console logging
from loguru import logger  # console logger

from .errors import AuthenticationError, UpstreamUnavailableError, ValidationError
from .models import Movie, normalize_poster


MAX_SEARCH_PAGE = 100  # OMDb serves at most 100 pages
_LEADING_YEAR = re.compile(r"^\d{4}")


@dataclass
class OmdbSearchResult:
	"""Normalized OMDb search page (favorite flags not yet applied)."""
	movies: List[Movie] = field(default_factory=list)
	total_results: int = 0


def parse_year(raw: Optional[str]) -> int:
	"""
	Extract the leading 4-digit year from OMDb's free-text Year field.
	"1999–2005" -> 1999, "2010" -> 2010, "N/A" or anything else -> 0.
	"""
	if not raw:
		return 0
	match = _LEADING_YEAR.match(str(raw).strip())
	return int(match.group(0)) if match else 0


def parse_total_results(raw: Any) -> int:
	try:
		return max(0, int(raw))
	except (TypeError, ValueError):
		return 0


def normalize_search_item(item: Dict[str, Any]) -> Movie:
	"""Convert one raw OMDb search hit into a Movie."""
	return Movie(
		title=str(item.get("Title") or ""),
		imdb_id=str(item.get("imdbID") or ""),
		year=parse_year(item.get("Year")),
		poster=normalize_poster(item.get("Poster")),
	)


class OmdbClient:
	"""
	Thin wrapper around the OMDb `?s=` search.
	No retries: each call either returns a normalized page or raises.
	"""

	def __init__(
		self,
		api_key: str,
		base_url: str = "http://www.omdbapi.com/",
		timeout: float = 10.0,
		session: Optional[requests.Session] = None,
	):
		self.api_key = api_key
		self.base_url = base_url
		self.timeout = timeout
		self.session = session or requests.Session()  # reuse connections across calls

	def search(self, title: str, page: int = 1) -> OmdbSearchResult:
		"""
		Search OMDb by title.
		"No results" (Response == "False") is returned as an empty page, not an error.
		Raises AuthenticationError on HTTP 401 and UpstreamUnavailableError on any other failure.
		"""
		if not title or not title.strip():
			raise ValidationError("Search title is required")
		if not isinstance(page, int) or page < 1 or page > MAX_SEARCH_PAGE:
			raise ValidationError(f"Page must be between 1 and {MAX_SEARCH_PAGE}")

		params = {"apikey": self.api_key, "s": title, "page": page}
		logger.debug(f"[OMDb] GET {self.base_url} s='{title}' page={page}")

		try:
			resp = self.session.get(self.base_url, params=params, timeout=self.timeout)
		except requests.RequestException as e:  # timeouts, DNS, refused connections
			logger.warning(f"[OMDb] Request failed: {e}")
			raise UpstreamUnavailableError("Failed to fetch movies from OMDb API") from e

		if resp.status_code == 401:
			logger.error("[OMDb] Upstream rejected the API key (401)")
			raise AuthenticationError("Invalid API key")
		if resp.status_code >= 400:
			logger.warning(f"[OMDb] Upstream error status {resp.status_code}")
			raise UpstreamUnavailableError("Failed to fetch movies from OMDb API")

		try:
			data = resp.json()
		except ValueError as e:
			logger.warning(f"[OMDb] Response was not JSON: {e}")
			raise UpstreamUnavailableError("Failed to fetch movies from OMDb API") from e

		if not isinstance(data, dict):
			raise UpstreamUnavailableError("Failed to fetch movies from OMDb API")

		# OMDb reports "no results" in-band with Response: "False" and an Error message
		if data.get("Response") == "False" or data.get("Error"):
			logger.debug(f"[OMDb] No results for '{title}': {data.get('Error')}")
			return OmdbSearchResult()

		raw_items = data.get("Search") or []
		movies = [normalize_search_item(item) for item in raw_items if isinstance(item, dict)]
		total = parse_total_results(data.get("totalResults"))
		logger.info(f"[OMDb] '{title}' page={page} -> {len(movies)} movies of {total}")
		return OmdbSearchResult(movies=movies, total_results=total)
