"""Settings module."""

import os

from dotenv import load_dotenv

from src.utils.paths import project_root

load_dotenv(project_root / ".env")

# ------ SCHEDULER -------
TICK_INTERVAL = float(os.getenv("TICK_INTERVAL", "0.5"))  # seconds between ticks
MIN_HOST_INTERVAL = float(os.getenv("MIN_HOST_INTERVAL", "20"))  # per host
REFRESH_COOLDOWN = float(os.getenv("REFRESH_COOLDOWN", "30"))  # per feed, after callback

# ------ FETCHER -------
REQUEST_TIMEOUT = float(os.getenv("REQUEST_TIMEOUT", "15"))
MAX_RETRIES = int(os.getenv("MAX_RETRIES", "3"))
RETRY_BACKOFF = float(os.getenv("RETRY_BACKOFF", "0.5"))
HTTP_HEADER_USER_AGENT = os.getenv(
    "HTTP_HEADER_USER_AGENT", "python:feed-fetch-scheduler:v1.0.0",
)
HTTP_HEADER_FROM = os.getenv("HTTP_HEADER_FROM")

# ------ FILES -------
feed_list_file = project_root / os.getenv("FEED_LIST_FILE", "feeds.json")
log_path = os.getenv("FEED_LOG_PATH", "feed_scheduler.log")

project_config = {
    "tick_interval": TICK_INTERVAL,
    "min_host_interval": MIN_HOST_INTERVAL,
    "refresh_cooldown": REFRESH_COOLDOWN,
    "request_timeout": REQUEST_TIMEOUT,
    "max_retries": MAX_RETRIES,
    "retry_backoff": RETRY_BACKOFF,
    "feed_list_file": feed_list_file,
}
