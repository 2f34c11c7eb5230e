"""
FastAPI server exposing the movies API.
Endpoints:
- GET /health: basic health check
- GET /movies/search?q=...&page=1: OMDb search results annotated with favorite status
- POST /movies/favorites: add a movie to favorites
- DELETE /movies/favorites/{imdbID}: remove a movie from favorites
- GET /movies/favorites/list?page=1: paginated favorites

Startup reads settings from the environment (OMDB_API_KEY is required) and
wires the favorites store and OMDb client into a MoviesService.
"""

# Import standard libraries for timing and env access
import os  # CORS origin is needed before settings are loaded
import time  # measure startup latency
from contextlib import asynccontextmanager  # startup/shutdown lifespan
from typing import List, Optional  # precise typing for clarity

# Import FastAPI for building the web API and Pydantic for request/response models
from fastapi import FastAPI, Request, status  # FastAPI primitives
from fastapi.exceptions import RequestValidationError  # body/query validation failures
from fastapi.middleware.cors import CORSMiddleware  # browser access from the UI origin
from fastapi.responses import JSONResponse  # explicit error bodies
from pydantic import BaseModel, ConfigDict, Field  # request/response schema definitions
from dotenv import load_dotenv  # .env support for local runs

# Import our internal modules
from movie_finder.config import DEFAULT_CORS_ORIGIN, Settings
from movie_finder.errors import MovieFinderError, ValidationError
from movie_finder.favorites_store import FavoritesStore
from movie_finder.logging_setup import configure_logging
from movie_finder.models import MIN_MOVIE_YEAR, Movie
from movie_finder.movies_service import MoviesService
from movie_finder.omdb_client import OmdbClient

# Import loguru for simple, structured console logging
from loguru import logger  # convenient console logger

load_dotenv()

# Globals that hold the service instance and measured startup time
SERVICE: Optional[MoviesService] = None  # set on startup (or by tests)
STARTUP_TIME_S: float = 0.0


# Lifespan hook; a missing OMDB_API_KEY raises ConfigError and aborts startup
@asynccontextmanager
async def lifespan(app: FastAPI):
	"""Load settings, configure logging and build the service."""
	global SERVICE, STARTUP_TIME_S
	start = time.time()

	settings = Settings.from_env()
	configure_logging(settings.log_level, settings.log_file)
	if SERVICE is None:
		SERVICE = build_service(settings)

	STARTUP_TIME_S = time.time() - start
	logger.info(f"[API] Startup complete in {STARTUP_TIME_S:.2f}s | favorites={settings.favorites_path}")
	yield


# Instantiate the FastAPI application with metadata
app = FastAPI(title="Movie Finder API", version="1.0.0", lifespan=lifespan)  # web app
app.add_middleware(
	CORSMiddleware,
	allow_origins=[os.getenv("CORS_ORIGIN") or DEFAULT_CORS_ORIGIN],
	allow_methods=["GET", "HEAD", "PUT", "PATCH", "POST", "DELETE"],
	allow_headers=["*"],
	allow_credentials=True,
)


# Request body for adding a favorite; unknown fields are rejected
class MovieIn(BaseModel):
	model_config = ConfigDict(extra="forbid")

	title: str = Field(..., min_length=1)
	imdbID: str = Field(..., min_length=1)
	year: int = Field(..., ge=MIN_MOVIE_YEAR)
	poster: Optional[str] = None


# A stored favorite as returned to clients
class FavoriteOut(BaseModel):
	title: str
	imdbID: str
	year: int
	poster: str = ""


# A search hit, with its favorite status
class SearchMovieOut(FavoriteOut):
	isFavorite: bool


class SearchData(BaseModel):
	movies: List[SearchMovieOut]
	count: int
	totalResults: int


class SearchResponse(BaseModel):
	data: SearchData


class FavoritesData(BaseModel):
	favorites: List[FavoriteOut]
	count: int
	totalResults: int
	currentPage: int
	totalPages: int


class FavoritesResponse(BaseModel):
	data: FavoritesData


class MessageData(BaseModel):
	message: str


class MessageResponse(BaseModel):
	data: MessageData


def build_service(settings: Settings) -> MoviesService:
	"""Wire the store and the OMDb client described by `settings`."""
	store = FavoritesStore(settings.favorites_path)
	client = OmdbClient(
		api_key=settings.omdb_api_key,
		base_url=settings.omdb_base_url,
		timeout=settings.request_timeout,
	)
	return MoviesService(store=store, search_client=client)


def get_service() -> MoviesService:
	if SERVICE is None:
		raise MovieFinderError("Service is not initialized")
	return SERVICE


def parse_page(raw: Optional[str]) -> int:
	"""Parse an optional `page` query value, defaulting to 1."""
	if raw is None or raw == "":
		return 1
	try:
		page = int(raw)
	except ValueError:
		raise ValidationError("Page must be a positive number")
	if page < 1:
		raise ValidationError("Page must be a positive number")
	return page


def _error_body(status_code: int, message: str, error: str) -> dict:
	return {"statusCode": status_code, "message": message, "error": error}


@app.exception_handler(MovieFinderError)
async def movie_finder_error_handler(request: Request, exc: MovieFinderError):
	if exc.status_code >= 500:
		logger.error(f"[API] {request.method} {request.url.path} failed: {exc.message}")
	else:
		logger.info(f"[API] {request.method} {request.url.path} -> {exc.status_code}: {exc.message}")
	return JSONResponse(status_code=exc.status_code, content=_error_body(exc.status_code, exc.message, exc.error))


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
	# Report every failing field as "<field> <reason>", like the other 400s
	messages = []
	for err in exc.errors():
		field = ".".join(str(part) for part in err.get("loc", ()) if part not in ("body", "query", "path"))
		messages.append(f"{field} {err.get('msg', 'is invalid')}".strip())
	message = "; ".join(messages) or "Invalid request"
	logger.info(f"[API] {request.method} {request.url.path} -> 400: {message}")
	return JSONResponse(status_code=400, content=_error_body(400, message, "Bad Request"))


@app.exception_handler(Exception)
async def unexpected_error_handler(request: Request, exc: Exception):
	logger.exception(f"[API] Unhandled error on {request.method} {request.url.path}")
	return JSONResponse(status_code=500, content=_error_body(500, "Internal server error", "Internal Server Error"))


# Simple health endpoint for readiness checks
@app.get("/health")
def health():
	"""Return minimal health info for liveness/readiness probes."""
	return {
		"status": "ok",
		"service_ready": SERVICE is not None,
		"startup_seconds": round(STARTUP_TIME_S, 2),
	}


@app.get("/movies/search", response_model=SearchResponse)
def search_movies(q: Optional[str] = None, page: Optional[str] = None):
	"""Search OMDb by title and mark the results that are already favorites."""
	if not q or not q.strip():
		raise ValidationError("Search query is required")
	page_number = parse_page(page)
	result = get_service().search_movies(q, page_number)
	return {"data": result.to_dict()}


@app.post("/movies/favorites", response_model=MessageResponse, status_code=status.HTTP_201_CREATED)
def add_to_favorites(movie: MovieIn):
	message = get_service().add_to_favorites(
		Movie(title=movie.title, imdb_id=movie.imdbID, year=movie.year, poster=movie.poster or "")
	)
	return {"data": {"message": message}}


@app.delete("/movies/favorites/{imdb_id}", response_model=MessageResponse)
def remove_from_favorites(imdb_id: str):
	if not imdb_id.strip():
		raise ValidationError("IMDb ID is required")
	message = get_service().remove_from_favorites(imdb_id)
	return {"data": {"message": message}}


@app.get("/movies/favorites/list", response_model=FavoritesResponse)
def get_favorites(page: Optional[str] = None):
	page_number = parse_page(page)
	result = get_service().get_favorites(page_number)
	return {"data": result.to_dict()}
