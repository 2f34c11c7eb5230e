"""
Logging setup.
Every module logs through loguru's shared `logger`; this only decides where records go.
"""

import sys
from typing import Optional

from loguru import logger  # console logger


CONSOLE_FORMAT = "<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | {message}"
FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} {level} [{name}] {message} | {extra}"


def configure_logging(level: str = "INFO", log_file: Optional[str] = None) -> None:
	"""
	Replace loguru's default sink with a console sink at `level`.
	If `log_file` is given, also write DEBUG and above there, rotated at 10 MB.
	"""
	logger.remove()  # drop the default stderr handler so levels are not duplicated
	logger.add(sys.stderr, level=level, format=CONSOLE_FORMAT)
	if log_file:
		logger.add(log_file, level="DEBUG", format=FILE_FORMAT, rotation="10 MB", encoding="utf-8")
	logger.debug(f"[Logging] Configured | level={level} | file={log_file or '-'}")
