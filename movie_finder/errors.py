"""
Error taxonomy for Movie Finder.
Each error carries the HTTP status the API layer answers with, so routes never
have to translate exceptions themselves.
"""

from typing import Optional


class MovieFinderError(Exception):
	"""Base class for every error raised by the service layer."""

	status_code = 500  # HTTP-equivalent status
	error = "Internal Server Error"  # short reason phrase used in error bodies

	def __init__(self, message: str):
		super().__init__(message)
		self.message = message


class ValidationError(MovieFinderError):
	"""Bad caller input: query, page or body shape."""
	status_code = 400
	error = "Bad Request"


class ConflictError(MovieFinderError):
	"""The movie is already in favorites. Answered as 400 to keep the public contract."""
	status_code = 400
	error = "Bad Request"


class NotFoundError(MovieFinderError):
	"""Removal target is not in favorites."""
	status_code = 404
	error = "Not Found"


class AuthenticationError(MovieFinderError):
	"""OMDb rejected the configured API key."""
	status_code = 401
	error = "Unauthorized"


class UpstreamUnavailableError(MovieFinderError):
	"""OMDb is unreachable or answered with an error."""
	status_code = 503
	error = "Service Unavailable"


class PersistenceError(MovieFinderError):
	"""The favorites file could not be written."""
	status_code = 500
	error = "Internal Server Error"


class ConfigError(Exception):
	"""Required configuration is missing or invalid; the process must not start."""


class ApiClientError(Exception):
	"""Raised by the frontend HTTP client when the API answers with a non-2xx status."""

	def __init__(self, message: str, status_code: Optional[int] = None):
		super().__init__(message)
		self.message = message
		self.status_code = status_code
