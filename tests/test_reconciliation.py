"""
Tests for favorite annotation of search results and the service that drives it.
"""

import pytest

from movie_finder.errors import ValidationError
from movie_finder.models import Movie
from movie_finder.reconciliation import annotate_favorites

from conftest import MATRIX, MATRIX_RELOADED


def test_annotate_marks_case_insensitive_matches():
	favorites = [Movie(title="The Matrix", imdb_id="TT0133093", year=1999)]
	annotated = annotate_favorites([MATRIX, MATRIX_RELOADED], favorites)
	assert [(m.imdb_id, m.is_favorite) for m in annotated] == [("tt0133093", True), ("tt0234215", False)]


def test_annotate_does_not_mutate_inputs():
	results = [Movie(title="The Matrix", imdb_id="tt0133093", year=1999)]
	favorites = [Movie(title="The Matrix", imdb_id="tt0133093", year=1999)]
	annotate_favorites(results, favorites)
	assert results[0].is_favorite is False
	assert favorites[0].is_favorite is False


def test_annotate_with_no_favorites():
	assert all(not m.is_favorite for m in annotate_favorites([MATRIX, MATRIX_RELOADED], []))


def test_service_reloads_favorites_before_each_search(service, store, favorites_path, search_client):
	store.add(MATRIX)
	page = service.search_movies("Matrix", 1)
	assert page.movies[0].is_favorite is True
	assert page.count == 2
	assert page.total_results == 2
	assert search_client.calls == [("Matrix", 1)]

	# Another process clears the file between requests
	favorites_path.write_text("[]", encoding="utf-8")
	page = service.search_movies("Matrix", 1)
	assert page.movies[0].is_favorite is False


def test_service_rejects_years_before_first_film(service):
	with pytest.raises(ValidationError):
		service.add_to_favorites(Movie(title="Too Early", imdb_id="tt0000001", year=1800))
	assert service.get_favorites(1).total_results == 0
