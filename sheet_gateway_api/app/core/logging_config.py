"""
Logging for the gateway.

What the gateway logs, all under the ``sheet_gateway_api`` logger tree:

* INFO ``Dispatching <action> on '<collection>'`` for every routed
  request, plus one line per row appended, updated or deleted by a
  backend;
* INFO when the daily contact guard declines a write;
* WARNING for every ``GatewayError`` answered to the client, with its
  status;
* ERROR with traceback for unexpected failures (answered as 500).

``LOG_LEVEL`` applies to the gateway loggers.  The Google client
libraries are held at WARNING so token refreshes and HTTP connection
chatter do not drown the request lines.  Handlers go on the root
logger, and only when nothing has configured it yet (uvicorn or an
earlier ``create_app`` call in the test suite).
"""

import logging
from pathlib import Path
from typing import Optional

GATEWAY_LOGGER = "sheet_gateway_api"
QUIET_LOGGERS = ("gspread", "google.auth", "urllib3")

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(level: str = "INFO", logfile: Optional[str] = None) -> None:
    """Configure gateway logging.

    Parameters
    ----------
    level : str
        Level name for the gateway loggers (e.g. ``"DEBUG"``).  Case
        insensitive; unknown names fall back to INFO.
    logfile : Optional[str]
        Path of a log file written next to the console output.  Parent
        directories are created.  If omitted or empty, only the console
        is used.
    """
    numeric_level = getattr(logging, level.upper(), logging.INFO)
    logging.getLogger(GATEWAY_LOGGER).setLevel(numeric_level)
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    root = logging.getLogger()
    if root.handlers:
        return
    root.setLevel(numeric_level)

    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    root.addHandler(console_handler)

    if logfile:
        log_path = Path(logfile).resolve()
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_path, encoding="utf-8")
        file_handler.setFormatter(formatter)
        root.addHandler(file_handler)
