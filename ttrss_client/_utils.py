"""
Shared pure-utility functions for ttrss-client.

These helpers have no business logic and no side effects.
They are used across api.py, models.py, and client.py.
"""

from ttrss_client import config


def _get_field(d, *keys):
    """Get a value from a dict trying each key spelling in turn."""
    for key in keys:
        if key in d:
            return d.get(key)
    return None


def _is_int(value):
    """True for JSON integers. bool is rejected even though it subclasses int."""
    return isinstance(value, int) and not isinstance(value, bool)


def _as_integral(value):
    """Return a JSON number as int if it has no fractional part, else None."""
    if _is_int(value):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return None


def _type_name(value):
    """Short JSON-ish type name for error messages."""
    if value is None:
        return "null"
    if isinstance(value, dict):
        return "object"
    if isinstance(value, list):
        return "array"
    return type(value).__name__


def normalize_api_url(host_url):
    """Return the API endpoint for a host URL, ending in exactly one /api/.

    >>> normalize_api_url("http://host")
    'http://host/api/'
    >>> normalize_api_url("http://host/api/")
    'http://host/api/'
    """
    base = (host_url or "").strip().rstrip("/")
    if base.endswith("/api"):
        base = base[: -len("/api")]
    return f"{base}/{config.API_PATH}"
