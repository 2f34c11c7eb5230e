"""
Configuration for Movie Finder.
Settings come from the process environment, with a `.env` file loaded first when present.
"""

# Standard libs for environment access and filesystem paths
import os  # environment variables
from dataclasses import dataclass  # immutable settings container
from pathlib import Path  # path-safe filesystem handling
from typing import Mapping, Optional  # type hints

# python-dotenv lets local development keep secrets out of the shell profile
from dotenv import load_dotenv  # reads KEY=VALUE pairs into os.environ

from .errors import ConfigError  # raised when required settings are missing


DEFAULT_OMDB_BASE_URL = "http://www.omdbapi.com/"  # OMDb search endpoint
DEFAULT_FAVORITES_PATH = "data/favorites.json"  # relative to the working directory
DEFAULT_REQUEST_TIMEOUT = 10.0  # seconds
DEFAULT_CORS_ORIGIN = "http://localhost:3000"
DEFAULT_PORT = 3001
DEFAULT_MOVIE_API_URL = "http://localhost:3001/movies"  # used by the Streamlit UI


@dataclass(frozen=True)
class Settings:
	omdb_api_key: str  # required
	omdb_base_url: str = DEFAULT_OMDB_BASE_URL
	favorites_path: Path = Path(DEFAULT_FAVORITES_PATH)
	request_timeout: float = DEFAULT_REQUEST_TIMEOUT
	cors_origin: str = DEFAULT_CORS_ORIGIN
	port: int = DEFAULT_PORT
	log_level: str = "INFO"
	log_file: Optional[str] = None

	@classmethod
	def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
		"""
		Build settings from environment variables.
		When `environ` is None the real environment is used and `.env` is loaded first.
		Raises ConfigError if OMDB_API_KEY is absent.
		"""
		if environ is None:
			load_dotenv()  # no-op when there is no .env file
			environ = os.environ

		api_key = (environ.get("OMDB_API_KEY") or "").strip()
		if not api_key:
			raise ConfigError("OMDB_API_KEY environment variable is required")

		return cls(
			omdb_api_key=api_key,
			omdb_base_url=environ.get("OMDB_BASE_URL") or DEFAULT_OMDB_BASE_URL,
			favorites_path=Path(environ.get("FAVORITES_PATH") or DEFAULT_FAVORITES_PATH),
			request_timeout=_parse_float(environ.get("REQUEST_TIMEOUT"), DEFAULT_REQUEST_TIMEOUT, "REQUEST_TIMEOUT"),
			cors_origin=environ.get("CORS_ORIGIN") or DEFAULT_CORS_ORIGIN,
			port=int(_parse_float(environ.get("PORT"), DEFAULT_PORT, "PORT")),
			log_level=(environ.get("LOG_LEVEL") or "INFO").upper(),
			log_file=environ.get("LOG_FILE") or None,
		)


def movie_api_url(environ: Optional[Mapping[str, str]] = None) -> str:
	"""Base URL of the movies API as seen by the frontend."""
	if environ is None:
		load_dotenv()
		environ = os.environ
	return (environ.get("MOVIE_API_URL") or DEFAULT_MOVIE_API_URL).rstrip("/")


def _parse_float(raw: Optional[str], default: float, name: str) -> float:
	if raw is None or not raw.strip():
		return default
	try:
		value = float(raw)
	except ValueError:
		raise ConfigError(f"{name} must be a number, got {raw!r}")
	if value <= 0:
		raise ConfigError(f"{name} must be positive, got {raw!r}")
	return value
