"""ttrss-client — Python client for the Tiny Tiny RSS JSON API."""

from ttrss_client.api import Channel, Session
from ttrss_client.client import TTRSSClient
from ttrss_client.config import VERSION
from ttrss_client.exceptions import (
    ApiConnectionError,
    ApiError,
    ApiResponseError,
    AuthError,
    DecodeError,
    ProtocolError,
    WalkError,
)
from ttrss_client.feedtree import Abort, VisitResult, count_nodes, walk_feed_tree
from ttrss_client.models import (
    Envelope,
    FeedTreeItem,
    NodeKind,
    Status,
    SubscribeCode,
    SubscribeOutcome,
    decode_feed_tree,
    decode_subscribe,
)

__all__ = [
    "VERSION",
    "Abort",
    "ApiConnectionError",
    "ApiError",
    "ApiResponseError",
    "AuthError",
    "Channel",
    "DecodeError",
    "Envelope",
    "FeedTreeItem",
    "NodeKind",
    "ProtocolError",
    "Session",
    "Status",
    "SubscribeCode",
    "SubscribeOutcome",
    "TTRSSClient",
    "VisitResult",
    "WalkError",
    "count_nodes",
    "decode_feed_tree",
    "decode_subscribe",
    "walk_feed_tree",
]
