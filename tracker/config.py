"""
Runtime settings, read from the environment (and a local .env file).
"""
import logging
import os

from dotenv import load_dotenv

load_dotenv()


def _int_env(name: str, default: int) -> int:
    raw = (os.getenv(name) or "").strip()
    return int(raw) if raw else default


DATABASE_URL = os.getenv("TRACKER_DATABASE_URL", "sqlite:///tracker.db")
STATIC_DIR = os.getenv("TRACKER_STATIC_DIR", "public")
CORS_ORIGINS = [
    origin.strip()
    for origin in os.getenv("TRACKER_CORS_ORIGINS", "*").split(",")
    if origin.strip()
]

HOST = os.getenv("TRACKER_HOST", "0.0.0.0")
PORT = _int_env("TRACKER_PORT", 5002)
LOG_LEVEL = os.getenv("TRACKER_LOG_LEVEL", "INFO").upper()

# "其他" is "other": the label used when a meal is logged without a type
DEFAULT_MEAL_TYPE = os.getenv("TRACKER_DEFAULT_MEAL_TYPE", "其他")
SLEEP_LIST_LIMIT = _int_env("TRACKER_SLEEP_LIST_LIMIT", 50)
MEAL_LIST_LIMIT = _int_env("TRACKER_MEAL_LIST_LIMIT", 30)
STATISTICS_DAYS = _int_env("TRACKER_STATISTICS_DAYS", 7)

LOG_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"


def configure_logging(level: str | None = None) -> None:
    """Install a single stream handler on the root logger."""
    logging.basicConfig(level=level or LOG_LEVEL, format=LOG_FORMAT, force=True)
