"""
Typed models for API envelopes, subscription outcomes, and the feed tree.

Raw response mappings are decoded here, once, into frozen dataclasses.
Nothing downstream of these decoders inspects raw JSON keys again.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Any

from ttrss_client import config
from ttrss_client._utils import _as_integral, _get_field, _is_int, _type_name
from ttrss_client.exceptions import DecodeError, ProtocolError
from ttrss_client.types import FeedTreeContent, FeedTreeItemWire, SubscribeContent

_ENVELOPE_KEYS = ("seq", "status")


# ---------------------------------------------------------------------------
# Envelope
# ---------------------------------------------------------------------------


class Status(Enum):
    OK = 0
    ERROR = 1

    @classmethod
    def from_wire(cls, value: int) -> Status:
        # Anything but 0 is an error, whatever number the server picked.
        return cls.OK if value == 0 else cls.ERROR


def _malformed(detail: str) -> DecodeError:
    return DecodeError(
        f"[ERROR] API JSON response was malformed: {detail} - "
        "are you sure you supplied the correct URL?"
    )


@dataclass(frozen=True)
class Envelope:
    """One decoded API response.

    ``error`` is never None when ``status`` is ERROR. When the status is OK
    it is still set if the content carries a string ``error`` entry, so
    callers should check ``ok`` rather than ``status`` alone.
    """

    seq: int | None
    status: Status
    error: str | None
    content: dict[str, Any]

    @property
    def ok(self) -> bool:
        return self.status is Status.OK and self.error is None

    @classmethod
    def from_body(cls, body: Any) -> Envelope:
        """Classify a decoded JSON body. Raises DecodeError on a bad shape."""
        if not isinstance(body, dict):
            raise _malformed(f"expected JSON object, got {_type_name(body)}")

        raw_status = body.get("status")
        if not _is_int(raw_status):
            raise _malformed(f"status is {_type_name(raw_status)}, expected integer")
        status = Status.from_wire(raw_status)

        seq = body.get("seq")
        if seq is not None and not _is_int(seq):
            raise _malformed(f"seq is {_type_name(seq)}, expected integer")

        if "content" in body:
            content = body["content"]
            if content is None:
                content = {}
            if not isinstance(content, dict):
                raise _malformed(f"content is {_type_name(content)}, expected object")
        else:
            content = {k: v for k, v in body.items() if k not in _ENVELOPE_KEYS}

        error = content.get("error")
        if not isinstance(error, str):
            error = None
        if status is Status.ERROR and error is None:
            error = config.NO_ERROR_TEXT

        return cls(seq=seq, status=status, error=error, content=content)


# ---------------------------------------------------------------------------
# Subscription outcome
# ---------------------------------------------------------------------------


class SubscribeCode(IntEnum):
    """Result codes of subscribeToFeed, contiguous from 0."""

    ALREADY_SUBSCRIBED = 0
    ADDED = 1
    INVALID_URL = 2
    HTML_NO_FEEDS = 3
    HTML_MULTIPLE_FEEDS = 4
    GET_FAILED = 5
    XML_INVALID = 6

    def describe(self) -> str:
        return _SUBSCRIBE_DESCRIPTIONS[self]


_SUBSCRIBE_DESCRIPTIONS = {
    SubscribeCode.ALREADY_SUBSCRIBED: "already subscribed to feed",
    SubscribeCode.ADDED: "subscribed to feed",
    SubscribeCode.INVALID_URL: "invalid feed URL",
    SubscribeCode.HTML_NO_FEEDS: "no feed link found in HTML at URL",
    SubscribeCode.HTML_MULTIPLE_FEEDS: "multiple feed links found in HTML at URL",
    SubscribeCode.GET_FAILED: "unable to GET URL",
    SubscribeCode.XML_INVALID: "invalid XML at URL",
}

_SUCCESS_CODES = frozenset({SubscribeCode.ADDED, SubscribeCode.ALREADY_SUBSCRIBED})


@dataclass(frozen=True)
class SubscribeOutcome:
    """What the server reported for a subscribe attempt.

    Returned for every code, successful or not. ``subscribed`` is the
    success flag; the outcome itself is informational.
    """

    code: SubscribeCode
    message: str = config.NO_SUBSCRIBE_MESSAGE

    @property
    def subscribed(self) -> bool:
        return self.code in _SUCCESS_CODES

    def __str__(self) -> str:
        return f"{self.code.describe()}: {self.message}"

    @classmethod
    def from_content(cls, content: SubscribeContent | dict[str, Any]) -> SubscribeOutcome:
        status = content.get("status")
        if not isinstance(status, dict):
            raise ProtocolError(
                "[ERROR] subscribeToFeed: no subscription status object "
                f"(status is {_type_name(status)}; keys: {sorted(content)})"
            )

        raw_code = status.get("code")
        code = _as_integral(raw_code)
        if code is None:
            raise ProtocolError(
                f"[ERROR] subscribeToFeed: status.code is {raw_code!r}, expected integer"
            )
        try:
            sub_code = SubscribeCode(code)
        except ValueError:
            raise ProtocolError(
                f"[ERROR] subscribeToFeed: unknown subscription code {code} "
                f"(valid: 0..{SubscribeCode.XML_INVALID.value})"
            ) from None

        message = status.get("message")
        if not isinstance(message, str):
            message = config.NO_SUBSCRIBE_MESSAGE
        return cls(code=sub_code, message=message)


def decode_subscribe(content):
    """Decode a subscribeToFeed content mapping.

    Returns:
        (subscribed, outcome) — outcome is returned for every code.
    """
    outcome = SubscribeOutcome.from_content(content)
    return outcome.subscribed, outcome


# ---------------------------------------------------------------------------
# Feed tree
# ---------------------------------------------------------------------------


class NodeKind(Enum):
    CATEGORY = "category"
    FEED = "feed"


@dataclass(frozen=True)
class FeedTreeItem:
    """A category or feed in the tree returned by getFeedTree.

    The root is a synthetic category named "/" whose items are the
    top-level entries of the response.
    """

    id: int
    name: str
    kind: NodeKind
    last_error: str = ""
    items: tuple[FeedTreeItem, ...] = ()

    @property
    def is_category(self) -> bool:
        return self.kind is NodeKind.CATEGORY

    @classmethod
    def from_wire(cls, item: FeedTreeItemWire | Any, path: str = "items") -> FeedTreeItem:
        if not isinstance(item, dict):
            raise ProtocolError(
                f"[ERROR] getFeedTree: {path} is {_type_name(item)}, expected object"
            )

        raw_kind = item.get("type")
        try:
            kind = NodeKind(raw_kind)
        except ValueError:
            raise ProtocolError(
                f"[ERROR] getFeedTree: {path}.type is {raw_kind!r}, "
                "expected 'category' or 'feed'"
            ) from None

        item_id = _get_field(item, "bare_ID", "bare_id")
        if not _is_int(item_id):
            raise ProtocolError(
                f"[ERROR] getFeedTree: {path}.bare_ID is {_type_name(item_id)}, expected integer"
            )

        name = item.get("name")
        if not isinstance(name, str):
            raise ProtocolError(
                f"[ERROR] getFeedTree: {path}.name is {_type_name(name)}, expected string"
            )

        if kind is NodeKind.FEED:
            last_error = item.get("error")
            if last_error is None:
                last_error = ""
            if not isinstance(last_error, str):
                raise ProtocolError(
                    f"[ERROR] getFeedTree: {path}.error is {_type_name(last_error)}, "
                    "expected string"
                )
            return cls(id=item_id, name=name, kind=kind, last_error=last_error)

        children = item.get("items")
        if children is None:
            children = []
        return cls(id=item_id, name=name, kind=kind, items=_decode_items(children, path))


def _decode_items(items, path):
    if not isinstance(items, list):
        raise ProtocolError(
            f"[ERROR] getFeedTree: {path} is {_type_name(items)}, expected array"
        )
    return tuple(
        FeedTreeItem.from_wire(child, f"{path}[{i}]") for i, child in enumerate(items)
    )


def decode_feed_tree(content: FeedTreeContent | dict[str, Any]) -> FeedTreeItem:
    """Decode getFeedTree content into a rooted tree. All-or-nothing."""
    if "categories" not in content:
        raise ProtocolError("[ERROR] getFeedTree: content lacks categories key")
    categories = content["categories"]
    if not isinstance(categories, dict):
        raise ProtocolError(
            "[ERROR] getFeedTree: categories is not a JSON object "
            f"(got {_type_name(categories)})"
        )
    if "items" not in categories:
        raise ProtocolError("[ERROR] getFeedTree: categories has no items entry")
    items = _decode_items(categories["items"], "categories.items")
    return FeedTreeItem(
        id=config.CATEGORY_UNCATEGORIZED,
        name=config.ROOT_NAME,
        kind=NodeKind.CATEGORY,
        items=items,
    )
