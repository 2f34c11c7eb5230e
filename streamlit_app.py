"""
Streamlit UI for Movie Finder.
Calls the movies API (default http://localhost:3001/movies) to search OMDb
and to manage the favorites list.

Run API:   python -m scripts.serve
Run UI:    streamlit run streamlit_app.py
"""

# Typing to make function signatures clearer
from typing import Any, Dict, List  # type hints

# Streamlit framework to build a simple interactive UI
import streamlit as st  # UI primitives

from movie_finder.api_client import MovieApiClient
from movie_finder.config import movie_api_url
from movie_finder.errors import ApiClientError, ValidationError
from movie_finder.models import Movie
from movie_finder.pagination import total_pages, visible_pages

COLUMNS = 5  # movie cards per row
DEFAULT_SEARCH_PAGE_SIZE = 10  # OMDb returns 10 hits per page

# Configure Streamlit page (title and layout width)
st.set_page_config(page_title="Movie Finder", page_icon="🎬", layout="wide")


def init_state():
	"""Seed session state the first time the script runs."""
	defaults = {
		"query": "",
		"search_page": 1,
		"favorites_page": 1,
		"items_per_page": None,  # learned from the size of the first search page
		"client_error": None,
	}
	for key, value in defaults.items():
		st.session_state.setdefault(key, value)


@st.cache_resource
def get_client(base_url: str) -> MovieApiClient:
	return MovieApiClient(base_url)


def toggle_favorite(client: MovieApiClient, movie: Dict[str, Any], favorites_page: bool):
	"""Add or remove a movie, recording a friendly error on failure."""
	st.session_state.client_error = None
	record = Movie.from_dict(movie)
	try:
		if movie.get("isFavorite") or favorites_page:
			client.remove_from_favorites(record.imdb_id)
		else:
			client.add_to_favorites(record)
	except (ApiClientError, ValidationError) as e:
		action = "remove" if (movie.get("isFavorite") or favorites_page) else "add"
		st.session_state.client_error = f"Failed to {action} \"{record.title}\": {e}"


def render_movies(client: MovieApiClient, movies: List[Dict[str, Any]], favorites_page: bool = False):
	"""Render movies as a grid of poster cards with a favorite toggle."""
	for row_start in range(0, len(movies), COLUMNS):
		cols = st.columns(COLUMNS)
		for col, movie in zip(cols, movies[row_start:row_start + COLUMNS]):
			with col:
				if movie.get("poster"):
					st.image(movie["poster"], width="stretch")
				else:
					st.markdown("🎞️ *No Image*")
				st.markdown(f"**{movie['title']}**")
				st.caption(f"📅 {movie['year'] or '----'}")
				is_fav = favorites_page or movie.get("isFavorite")
				label = "💔 Remove" if is_fav else "❤️ Favorite"
				if st.button(label, key=f"fav-{favorites_page}-{movie['imdbID']}"):
					toggle_favorite(client, movie, favorites_page)
					st.rerun()


def render_pagination(current: int, page_count: int, state_key: str):
	"""Prev / page window / next controls that update `state_key` in session state."""
	if page_count <= 1:
		return
	window = visible_pages(current, page_count)
	buttons = ["‹"]
	if window.show_first:
		buttons += [1] + (["…"] if window.show_first_ellipsis else [])
	buttons += window.pages
	if window.show_last:
		buttons += (["…"] if window.show_last_ellipsis else []) + [page_count]
	buttons.append("›")

	cols = st.columns(len(buttons))
	for i, (col, label) in enumerate(zip(cols, buttons)):
		with col:
			if label == "…":
				st.write("…")
				continue
			if label == "‹":
				target, disabled = current - 1, current <= 1
			elif label == "›":
				target, disabled = current + 1, current >= page_count
			else:
				target, disabled = label, label == current
			if st.button(str(label), key=f"{state_key}-{i}-{label}", disabled=disabled):
				st.session_state[state_key] = target
				st.rerun()


def search_view(client: MovieApiClient):
	st.title("🎬 Movie Finder")

	with st.form("search-form"):
		query = st.text_input("Search movies", value=st.session_state.query, placeholder="e.g., Matrix")
		submitted = st.form_submit_button("Search", type="primary")
	if submitted:
		st.session_state.query = query.strip()
		st.session_state.search_page = 1
		st.session_state.items_per_page = None  # new search, relearn page size
		st.session_state.client_error = None

	if st.session_state.client_error:
		st.error(st.session_state.client_error)

	if not st.session_state.query:
		st.subheader("Start Your Search")
		st.caption("Search for your favorite movies and add them to your favorites")
		return

	page = st.session_state.search_page
	try:
		with st.spinner("Searching for movies..."):
			payload = client.search_movies(st.session_state.query, page)["data"]
	except (ApiClientError, ValidationError) as e:
		st.error(f"Error loading movies: {e}")
		return

	movies = payload.get("movies", [])
	if not movies:
		st.info(f"No movies found for \"{st.session_state.query}\"")
		return

	if page == 1 and payload.get("count"):
		st.session_state.items_per_page = payload["count"]
	per_page = st.session_state.items_per_page or payload.get("count") or DEFAULT_SEARCH_PAGE_SIZE
	page_count = total_pages(int(payload.get("totalResults") or 0), per_page)

	st.caption(f"{payload.get('totalResults', 0)} results · page {page} of {page_count}")
	render_movies(client, movies)
	render_pagination(page, page_count, "search_page")


def favorites_view(client: MovieApiClient):
	st.title("❤️ My Favorites")

	if st.session_state.client_error:
		st.error(st.session_state.client_error)

	page = st.session_state.favorites_page
	try:
		with st.spinner("Loading favorites..."):
			payload = client.get_favorites(page)["data"]
	except (ApiClientError, ValidationError) as e:
		st.error(f"Error loading favorites: {e}")
		return

	total = payload.get("totalResults", 0)
	st.caption(f"{total} {'movie' if total == 1 else 'movies'} saved")

	# Removing the last movie on a page leaves it empty; step back one page
	if not payload.get("favorites") and page > 1:
		st.session_state.favorites_page = page - 1
		st.rerun()

	if total == 0:
		st.subheader("No Favorites Yet")
		st.caption("Start adding movies to your favorites from the search page")
		return

	render_movies(client, payload["favorites"], favorites_page=True)
	render_pagination(page, payload.get("totalPages", 0), "favorites_page")


init_state()

# Sidebar contains navigation and connection settings
with st.sidebar:
	st.header("Movie Finder")
	view = st.radio("Page", ["Search", "Favorites"])
	api_url = st.text_input("API URL", movie_api_url())

client = get_client(api_url)
if not client.health():
	st.sidebar.warning("API not reachable; start it with `python -m scripts.serve`.")

if view == "Search":
	search_view(client)
else:
	favorites_view(client)
