"""
ttrss-client shared configuration, constants, and module-level state.
Standalone module — no imports from other project files.
"""

import os

# ---------------------------------------------------------------------------
# .env path and helpers
# ---------------------------------------------------------------------------

_PACKAGE_DIR = os.path.dirname(os.path.abspath(__file__))
_PROJECT_ROOT = os.path.dirname(_PACKAGE_DIR)

ENV_PATH = os.path.join(_PROJECT_ROOT, ".env")

_ENV_KEYS = (
    "TTRSS_URL",
    "TTRSS_USER",
    "TTRSS_PASSWORD",
    "TTRSS_HTTP_TIMEOUT_SECONDS",
    "TTRSS_HTTP_MAX_RESPONSE_BYTES",
    "TTRSS_HTTP_LOG",
    "TTRSS_HTTP_LOG_SAMPLE_RATE",
)


def load_env():
    """Read KEY=value pairs from the .env file.

    Process environment variables for known keys override the file,
    so containers can configure the client without a .env.
    """
    env = {}
    if os.path.exists(ENV_PATH):
        with open(ENV_PATH) as f:
            for line in f:
                line = line.strip()
                if line and not line.startswith("#") and "=" in line:
                    key, val = line.split("=", 1)
                    env[key.strip()] = val.strip()
    for key in _ENV_KEYS:
        value = os.environ.get(key)
        if value:
            env[key] = value
    return env


def _env_bool(key, default=False):
    """Parse common boolean env formats."""
    raw = env.get(key)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


def _env_int(key, default):
    """Parse integer env values with fallback."""
    raw = env.get(key)
    if raw is None or raw == "":
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _env_float(key, default):
    """Parse float env values with fallback."""
    raw = env.get(key)
    if raw is None or raw == "":
        return default
    try:
        return float(raw)
    except ValueError:
        return default


# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

VERSION = "0.1.0"

API_PATH = "api/"
NO_ERROR_TEXT = "(response contained no error text)"
NO_SUBSCRIBE_MESSAGE = "(no underlying error returned by API)"
ROOT_NAME = "/"

# Predefined category IDs
CATEGORY_UNCATEGORIZED = 0
CATEGORY_SPECIAL = -1
CATEGORY_LABELS = -2
CATEGORY_FEEDS_NOT_VIRTUAL = -3
CATEGORY_FEEDS_ALL = -4

# Predefined feed IDs. Plugin feeds count down from -128 and label feeds
# from -1024 (server-side PLUGIN_FEED_BASE_INDEX / LABEL_BASE_INDEX).
FEED_ARCHIVED_ARTICLES = 0
FEED_STARRED_ARTICLES = -1
FEED_PUBLISHED_ARTICLES = -2
FEED_FRESH_ARTICLES = -3
FEED_ALL_ARTICLES = -4
FEED_RECENTLY_READ = -6

# ---------------------------------------------------------------------------
# Module-level state (loaded from .env)
# ---------------------------------------------------------------------------

env = load_env()

HOST_URL = env.get("TTRSS_URL", "")
USER = env.get("TTRSS_USER", "")
PASSWORD = env.get("TTRSS_PASSWORD", "")
HTTP_TIMEOUT_SECONDS = _env_int("TTRSS_HTTP_TIMEOUT_SECONDS", 30)
HTTP_MAX_RESPONSE_BYTES = _env_int("TTRSS_HTTP_MAX_RESPONSE_BYTES", 5_000_000)
HTTP_LOG_ENABLED = _env_bool("TTRSS_HTTP_LOG", False)
HTTP_LOG_SAMPLE_RATE = min(1.0, max(0.0, _env_float("TTRSS_HTTP_LOG_SAMPLE_RATE", 1.0)))
