"""
TTRSSClient — public Python API for a Tiny Tiny RSS server.

Each method builds a request mapping, sends it through the Channel and
unwraps the field it cares about. Structured results come back as the
typed models from ttrss_client.models.
"""

from __future__ import annotations

from typing import Any

from ttrss_client import config
from ttrss_client.api import Channel, Session
from ttrss_client.exceptions import ApiResponseError, AuthError, ProtocolError
from ttrss_client.feedtree import Visitor, walk_feed_tree
from ttrss_client.models import (
    Envelope,
    FeedTreeItem,
    Status,
    SubscribeOutcome,
    decode_feed_tree,
    decode_subscribe,
)


def _require_ok(envelope: Envelope, op: str) -> dict[str, Any]:
    """Return the envelope content, raising ApiResponseError if it carries an error."""
    if not envelope.ok:
        raise ApiResponseError(
            f"[ERROR] API error in {op}: {envelope.error} (status={envelope.status.name})",
            envelope=envelope,
        )
    return envelope.content


def _require_field(content: dict[str, Any], key: str, op: str, kind: type) -> Any:
    value = content.get(key)
    if not isinstance(value, kind) or (isinstance(value, bool) and kind is not bool):
        raise ProtocolError(
            f"[ERROR] {op}: expected {kind.__name__} '{key}' in response "
            f"(keys: {sorted(content)})"
        )
    return value


class TTRSSClient:
    """Public API surface for a TT-RSS account.

    Raises ApiConnectionError/DecodeError on transport problems,
    AuthError on login failure and ApiResponseError when the server
    reports an error for an operation.
    """

    def __init__(self, session: Session | None = None, *, channel: Channel | None = None):
        self.channel = channel if channel is not None else Channel(session)

    @property
    def session(self) -> Session:
        return self.channel.session

    # -------------------------------------------------------------------
    # Session
    # -------------------------------------------------------------------

    def login(
        self,
        host_url: str | None = None,
        user: str | None = None,
        password: str | None = None,
    ) -> bool:
        """Log in, falling back to TTRSS_URL/TTRSS_USER/TTRSS_PASSWORD.

        Returns:
            True once the session id is stored.
        """
        host_url = host_url or config.HOST_URL
        user = user if user is not None else config.USER
        password = password if password is not None else config.PASSWORD
        if not host_url or not user:
            raise AuthError(
                "[AUTH] No TT-RSS host or user configured. Set TTRSS_URL and "
                "TTRSS_USER in .env or pass them to login()."
            )
        return self.channel.login(host_url, user, password)

    def logout(self) -> None:
        self.channel.logout()

    def is_logged_in(self) -> bool:
        """Ask the server whether the current session id is still valid."""
        if not self.session.logged_in:
            return False
        envelope = self.channel.call("isLoggedIn")
        content = _require_ok(envelope, "isLoggedIn")
        return _require_field(content, "status", "isLoggedIn", bool)  # type: ignore[no-any-return]

    # -------------------------------------------------------------------
    # Server info
    # -------------------------------------------------------------------

    def get_api_level(self) -> int:
        content = _require_ok(self.channel.call("getApiLevel"), "getApiLevel")
        return _require_field(content, "level", "getApiLevel", int)  # type: ignore[no-any-return]

    def get_version(self) -> str:
        content = _require_ok(self.channel.call("getVersion"), "getVersion")
        return _require_field(content, "version", "getVersion", str)  # type: ignore[no-any-return]

    def get_unread(self) -> int:
        """Total unread article count for the account."""
        content = _require_ok(self.channel.call("getUnread"), "getUnread")
        unread = content.get("unread")
        # Older servers send the count as a string.
        if isinstance(unread, str) and unread.strip().isdigit():
            return int(unread)
        return _require_field(content, "unread", "getUnread", int)  # type: ignore[no-any-return]

    # -------------------------------------------------------------------
    # Subscriptions
    # -------------------------------------------------------------------

    def subscribe_to_feed(
        self,
        feed_url: str,
        category_id: int = config.CATEGORY_UNCATEGORIZED,
        *,
        login: str | None = None,
        password: str | None = None,
    ) -> tuple[bool, SubscribeOutcome]:
        """Subscribe to a feed URL.

        Args:
            feed_url: Feed or site URL.
            category_id: Target category (0 = uncategorized).
            login: Optional HTTP auth user for the feed itself.
            password: Password for ``login``.

        Returns:
            (subscribed, outcome). ``outcome`` is returned for every code;
            inspect ``subscribed`` or ``outcome.code``, not its presence.
        """
        params: dict[str, Any] = {"feed_url": feed_url, "category_id": category_id}
        if login:
            params["login"] = login
            params["password"] = password or ""
        envelope = self.channel.call("subscribeToFeed", params)
        content = _require_ok(envelope, "subscribeToFeed")
        return decode_subscribe(content)  # type: ignore[no-any-return]

    def unsubscribe_feed(self, feed_id: int) -> None:
        _require_ok(self.channel.call("unsubscribeFeed", {"feed_id": feed_id}), "unsubscribeFeed")

    # -------------------------------------------------------------------
    # Feed tree
    # -------------------------------------------------------------------

    def get_feed_tree(self, *, include_empty: bool = False) -> FeedTreeItem:
        """Fetch the category/feed tree under a synthetic "/" root."""
        envelope = self.channel.call("getFeedTree", {"include_empty": include_empty})
        if envelope.status is not Status.OK:
            raise ApiResponseError(
                f"[ERROR] Failed to get feed tree: {envelope.error} "
                f"(status={envelope.status.name})",
                envelope=envelope,
            )
        return decode_feed_tree(envelope.content)

    def walk_feed_tree(self, visit: Visitor, *, include_empty: bool = False) -> Exception | None:
        """Fetch the feed tree and walk it. Returns the walk's aborting error, if any."""
        return walk_feed_tree(self.get_feed_tree(include_empty=include_empty), visit)
