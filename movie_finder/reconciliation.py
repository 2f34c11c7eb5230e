"""
Reconciliation of search results with the favorites collection.
"""

from typing import Iterable, List

from .models import Movie


def annotate_favorites(movies: Iterable[Movie], favorites: Iterable[Movie]) -> List[Movie]:
	"""
	Return copies of `movies` with `is_favorite` set when their imdbID (ignoring case)
	is in `favorites`. Neither input is modified.
	"""
	favorite_keys = {fav.key for fav in favorites}
	return [movie.with_favorite(movie.key in favorite_keys) for movie in movies]
