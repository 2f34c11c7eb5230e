"""
Run the movies API under uvicorn.

This script:
1) Validates settings (fails immediately if OMDB_API_KEY is missing)
2) Starts uvicorn serving api:app on $PORT (default 3001)
3) If startup fails (e.g. port still held by a previous process), retries
   up to 3 times, waiting 2s, then 4s between attempts

Usage:
    python -m scripts.serve
"""

import sys  # exit codes
import time  # back-off between attempts

import uvicorn  # ASGI server
from loguru import logger  # console logging

from movie_finder.config import Settings
from movie_finder.errors import ConfigError
from movie_finder.logging_setup import configure_logging


MAX_RETRIES = 3


def main() -> int:
	try:
		settings = Settings.from_env()
	except ConfigError as e:
		logger.error(f"[Serve] {e}")
		return 1
	configure_logging(settings.log_level, settings.log_file)

	for attempt in range(MAX_RETRIES):
		server = uvicorn.Server(uvicorn.Config("api:app", host="0.0.0.0", port=settings.port))
		try:
			server.run()
		except SystemExit as e:  # uvicorn exits when it cannot bind the socket
			logger.error(f"[Serve] Startup failed (attempt {attempt + 1}/{MAX_RETRIES}): exit code {e.code}")
		else:
			if server.started:
				logger.info("[Serve] Server stopped")
				return 0
			logger.error(f"[Serve] Startup failed (attempt {attempt + 1}/{MAX_RETRIES})")

		if attempt < MAX_RETRIES - 1:
			delay = (attempt + 1) * 2
			logger.info(f"[Serve] Retrying in {delay} seconds...")
			time.sleep(delay)

	logger.error("[Serve] Max retries reached. Exiting...")
	return 1


if __name__ == "__main__":
	sys.exit(main())
