"""
HTTP request layer, session state, and the RPC channel for ttrss-client.
"""

import hashlib
import http.client
import json
import sys
import time
import urllib.error
import urllib.request
import uuid
from dataclasses import dataclass

from ttrss_client import config
from ttrss_client._utils import normalize_api_url
from ttrss_client.exceptions import (
    ApiConnectionError,
    ApiError,
    AuthError,
    DecodeError,
    HTTPError,
)
from ttrss_client.models import Envelope, Status

_SECRET_FIELDS = frozenset({"password", "sid"})


# ---------------------------------------------------------------------------
# Security helpers
# ---------------------------------------------------------------------------


def _mask_token(token):
    """Show only first 6 chars of a token for safe logging."""
    return token[:6] + "..." if len(token) > 6 else token


def _safe_payload_for_log(payload):
    """Copy of a request payload with secrets masked."""
    safe = {}
    for key, value in payload.items():
        if key in _SECRET_FIELDS and isinstance(value, str):
            safe[key] = "***" if key == "password" else _mask_token(value)
        else:
            safe[key] = value
    return safe


def _as_json_body(payload):
    """Encode a request payload. Raises ApiError if it is not JSON-serializable."""
    try:
        return json.dumps(payload).encode("utf-8")
    except (TypeError, ValueError) as e:
        raise ApiError(
            f"[ERROR] Error encoding JSON: {e} - trying to encode "
            f"{_safe_payload_for_log(payload)!r}"
        ) from e


# ---------------------------------------------------------------------------
# HTTP request layer
# ---------------------------------------------------------------------------


def _log_http_event(**fields):
    """Emit structured HTTP logs to stderr when enabled."""
    if not config.HTTP_LOG_ENABLED:
        return
    print("[HTTP] " + json.dumps(fields, ensure_ascii=False, sort_keys=True), file=sys.stderr)


def _is_sampled_request(request_id):
    """Decide if a request should be logged based on sample rate."""
    rate = config.HTTP_LOG_SAMPLE_RATE
    if rate <= 0:
        return False
    if rate >= 1:
        return True
    if not request_id:
        return False
    digest = hashlib.sha256(request_id.encode("utf-8")).digest()
    bucket = int.from_bytes(digest[:4], "big") / 4294967295.0
    return bucket < rate


def _read_limited(stream):
    raw = stream.read(config.HTTP_MAX_RESPONSE_BYTES + 1)
    if len(raw) > config.HTTP_MAX_RESPONSE_BYTES:
        raise DecodeError(
            f"[ERROR] Response too large from TT-RSS API (>{config.HTTP_MAX_RESPONSE_BYTES} bytes)."
        )
    return raw


def _http_request(url, body, headers, request_id=None, sampled=False):
    """POST ``body`` once and return the raw response bytes.

    Raises HTTPError for non-2xx statuses (with the error body attached)
    and ApiConnectionError for network and timeout failures, including
    http.client errors from a peer that does not speak HTTP. A body shorter
    than its Content-Length comes back as the bytes that did arrive, so it
    surfaces later as a DecodeError. Never retries.
    """
    timeout = max(1, config.HTTP_TIMEOUT_SECONDS)
    start = time.perf_counter()
    try:
        req = urllib.request.Request(url, data=body, headers=headers, method="POST")
        with urllib.request.urlopen(req, timeout=timeout) as resp:
            raw = _read_limited(resp)
            if sampled:
                _log_http_event(
                    phase="response",
                    url=url,
                    status=getattr(resp, "status", 200),
                    content_type=resp.headers.get("Content-Type", ""),
                    bytes=len(raw),
                    latency_ms=round((time.perf_counter() - start) * 1000, 2),
                    request_id=request_id,
                )
            return raw
    except urllib.error.HTTPError as e:
        try:
            error_body = _read_limited(e) if e.fp else b""
        except (http.client.HTTPException, OSError) as read_err:
            raise ApiConnectionError(
                f"[ERROR] Connection error: {read_err!r} while reading HTTP {e.code} body "
                f"(url={url})"
            ) from read_err
        if sampled:
            _log_http_event(
                phase="response",
                url=url,
                status=e.code,
                bytes=len(error_body),
                latency_ms=round((time.perf_counter() - start) * 1000, 2),
                request_id=request_id,
            )
        raise HTTPError(e.code, e.reason, error_body, headers=e.headers) from e
    except TimeoutError as e:
        if sampled:
            _log_http_event(
                phase="network_error", url=url, error="timeout", request_id=request_id
            )
        raise ApiConnectionError(
            f"[ERROR] Connection error: request timed out after {timeout} seconds "
            f"(url={url})"
        ) from e
    except urllib.error.URLError as e:
        if sampled:
            _log_http_event(
                phase="network_error",
                url=url,
                error=f"url_error: {e.reason}",
                request_id=request_id,
            )
        raise ApiConnectionError(f"[ERROR] Connection error: {e.reason} (url={url})") from e
    except http.client.HTTPException as e:
        # Not an OSError: a non-HTTP peer or a body cut off mid-read.
        if sampled:
            _log_http_event(
                phase="network_error", url=url, error=f"http_error: {e!r}", request_id=request_id
            )
        raise ApiConnectionError(f"[ERROR] Connection error: {e!r} (url={url})") from e
    except (OSError, ValueError) as e:
        # ValueError: urllib rejects URLs without a scheme before connecting.
        raise ApiConnectionError(f"[ERROR] Connection error: {e} (url={url})") from e


def _decode_json(raw):
    """Parse response bytes as JSON, raising DecodeError with a URL hint."""
    try:
        return json.loads(raw.decode("utf-8"))
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise DecodeError(
            f"[ERROR] API JSON response was malformed: {e} - "
            "are you sure you supplied the correct URL?"
        ) from None


# ---------------------------------------------------------------------------
# Session and channel
# ---------------------------------------------------------------------------


@dataclass
class Session:
    """Endpoint and session id for one logged-in user.

    One Session per Channel; concurrent callers must serialize login
    against other calls themselves.
    """

    endpoint: str = ""
    token: str = ""

    @property
    def logged_in(self) -> bool:
        return bool(self.token)


class Channel:
    """Issues TT-RSS API operations and classifies their responses."""

    def __init__(self, session=None):
        self.session = session if session is not None else Session()

    def call(self, op, params=None, *, seq=None):
        """Run one API operation and return its Envelope.

        Application errors come back in the Envelope; only transport
        failures (ApiConnectionError) and undecodable bodies (DecodeError)
        raise.
        """
        if not self.session.endpoint:
            raise ApiConnectionError(
                "[ERROR] Connection error: no API endpoint set. Log in first."
            )
        payload = dict(params or {})
        payload["op"] = op
        if self.session.token:
            payload["sid"] = self.session.token
        if seq is not None:
            payload["seq"] = seq

        body = _as_json_body(payload)
        request_id = str(uuid.uuid4())
        sampled = _is_sampled_request(request_id)
        if sampled:
            _log_http_event(
                phase="request",
                op=op,
                url=self.session.endpoint,
                payload=_safe_payload_for_log(payload),
                request_id=request_id,
            )
        headers = {
            "Content-Type": "application/json",
            "Accept": "application/json",
            "X-Request-Id": request_id,
        }
        try:
            raw = _http_request(
                self.session.endpoint, body, headers, request_id=request_id, sampled=sampled
            )
        except HTTPError as e:
            # The server may still have sent an API envelope with the error.
            server_request_id = e.headers.get("X-Request-Id") if e.headers else None
            if sampled:
                _log_http_event(
                    phase="http_error",
                    op=op,
                    status=e.code,
                    request_id=request_id,
                    server_request_id=server_request_id,
                )
            try:
                envelope = Envelope.from_body(_decode_json(e.body))
            except DecodeError:
                detail = f"HTTP {e.code} {e.reason}"
                if server_request_id:
                    detail += f" (server request id {server_request_id})"
                raise DecodeError(
                    f"[ERROR] API JSON response was malformed: {detail} - "
                    "are you sure you supplied the correct URL?"
                ) from e
        else:
            envelope = Envelope.from_body(_decode_json(raw))

        if sampled:
            _log_http_event(
                phase="envelope",
                op=op,
                status=envelope.status.name,
                seq=envelope.seq,
                request_id=request_id,
            )
        return envelope

    def login(self, host_url, user, password):
        """Log in and keep the session id for later calls.

        Returns True. Raises AuthError when the server does not hand out a
        session id.
        """
        endpoint = normalize_api_url(host_url)
        self.session.endpoint = endpoint
        self.session.token = ""
        envelope = self.call("login", {"user": user, "password": password})

        session_id = envelope.content.get("session_id")
        if not isinstance(session_id, str) or envelope.status is not Status.OK:
            msg = f"[AUTH] Failed to log in at {endpoint} as {user}"
            if envelope.error:
                msg += f": {envelope.error}"
            raise AuthError(msg)
        self.session.token = session_id
        return True

    def logout(self):
        """End the server session and forget the session id."""
        if not self.session.token:
            return None
        try:
            return self.call("logout")
        finally:
            self.session.token = ""
