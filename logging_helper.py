import json
import logging
import os
from logging.handlers import RotatingFileHandler
from pathlib import Path

RED = "\033[91m"
YELLOW = "\033[93m"
GREEN = "\033[92m"
RESET = "\033[0m"
WHITE = "\033[97m"

API_LOGGER_NAME = "products_api"

logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s.%(msecs)03d - %(message)s',
    datefmt='%Y-%m-%d %H:%M:%S'
)


def log_status(status, message, extra=""):
    status = status.lower()
    color = WHITE  # default

    if status == "error":
        color = RED
    elif status == "warning":
        color = YELLOW
    elif status == "good":
        color = GREEN

    logging.info(f"{color}{message}{extra}{RESET}")


def get_api_logger(log_path: str | None = None) -> logging.Logger:
    """
    Return the JSON-lines logger used for every outbound API call.

    With API_LOG_PATH (or log_path) set, records go to a rotating file so a run
    can be inspected afterwards; otherwise they go to a stream handler. Existing
    handlers are cleared first so repeated configuration never duplicates lines.
    """
    logger = logging.getLogger(API_LOGGER_NAME)
    if getattr(logger, "_configured", False) and log_path is None:
        return logger

    logger.setLevel(logging.INFO)
    logger.propagate = False

    for h in list(logger.handlers):
        logger.removeHandler(h)
        h.close()

    log_path = log_path or os.getenv("API_LOG_PATH")
    if log_path:
        path = (Path(os.getcwd()) / log_path).resolve()
        path.parent.mkdir(parents=True, exist_ok=True)
        handler = RotatingFileHandler(str(path), maxBytes=2_000_000, backupCount=2, encoding="utf-8")
    else:
        handler = logging.StreamHandler()

    handler.setFormatter(logging.Formatter("%(message)s"))  # JSON lines only
    logger.addHandler(handler)
    logger._configured = True
    return logger


def log_event(logger: logging.Logger, event: str, level: int = logging.INFO, **fields) -> None:
    logger.log(level, json.dumps({"event": event, **fields}, default=str))
