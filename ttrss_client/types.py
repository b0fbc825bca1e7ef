"""Typed wire shapes for TT-RSS API requests and responses.

These TypedDicts document the JSON objects exchanged with the server.
They are optional — runtime behavior is unchanged (plain dicts).
"""

from __future__ import annotations

from typing import Any, TypedDict

# ---------------------------------------------------------------------------
# Envelope
# ---------------------------------------------------------------------------


class RequestPayload(TypedDict, total=False):
    """Outgoing request body. Operation fields are merged alongside."""

    op: str
    sid: str
    seq: int


class ResponseBody(TypedDict, total=False):
    """Raw response body before classification."""

    seq: int | None
    status: int
    content: dict[str, Any]


# ---------------------------------------------------------------------------
# Operation payloads
# ---------------------------------------------------------------------------


class LoginContent(TypedDict, total=False):
    session_id: str
    api_level: int
    error: str


class SubscribeStatus(TypedDict, total=False):
    """Nested ``status`` object returned by subscribeToFeed."""

    code: int
    message: str


class SubscribeContent(TypedDict, total=False):
    status: SubscribeStatus


class FeedTreeItemWire(TypedDict, total=False):
    """One entry of ``categories.items`` in a getFeedTree response."""

    id: str
    bare_id: int
    name: str
    type: str
    error: str | None
    items: list[FeedTreeItemWire]


class FeedTreeCategories(TypedDict, total=False):
    identifier: str
    label: str
    items: list[FeedTreeItemWire]


class FeedTreeContent(TypedDict, total=False):
    categories: FeedTreeCategories
