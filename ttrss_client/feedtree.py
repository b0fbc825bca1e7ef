"""Depth-first traversal of a decoded feed tree.

The visitor decides, per node, whether the walk continues, skips a
category's children, or aborts with an error:

    def visit(item):
        if item.name == "Archive":
            return VisitResult.SKIP_SUBTREE
        if item.last_error:
            return Abort(RuntimeError(item.last_error))
        return VisitResult.CONTINUE

SKIP_SUBTREE is only legal for categories. Returning it for a feed ends
the walk with a WalkError. Returning it for the root category ends the
walk with None, the same as a finished walk: nothing is left to visit, so
there is no error to report.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum

from ttrss_client.exceptions import WalkError
from ttrss_client.models import FeedTreeItem, NodeKind


class VisitResult(Enum):
    CONTINUE = "continue"
    SKIP_SUBTREE = "skip_subtree"


@dataclass(frozen=True)
class Abort:
    """Visitor result that stops the walk and makes it return ``error``."""

    error: Exception


Visitor = Callable[[FeedTreeItem], "VisitResult | Abort | None"]


def _dispatch(item: FeedTreeItem, visit: Visitor) -> tuple[bool, Exception | None]:
    """Visit one node. Returns (descend, error)."""
    result = visit(item)
    if result is None or result is VisitResult.CONTINUE:
        return item.kind is NodeKind.CATEGORY, None
    if result is VisitResult.SKIP_SUBTREE:
        if item.kind is NodeKind.FEED:
            return False, WalkError(
                f"[ERROR] SKIP_SUBTREE returned for feed {item.id} ({item.name!r}); "
                "only categories have a subtree to skip"
            )
        return False, None
    if isinstance(result, Abort):
        return False, result.error
    raise TypeError(
        f"feed tree visitor must return VisitResult, Abort or None, got {type(result).__name__}"
    )


def _walk_items(category: FeedTreeItem, visit: Visitor) -> Exception | None:
    for item in category.items:
        descend, err = _dispatch(item, visit)
        if err is not None:
            return err
        if descend:
            err = _walk_items(item, visit)
            if err is not None:
                return err
    return None


def walk_feed_tree(root: FeedTreeItem, visit: Visitor) -> Exception | None:
    """Walk ``root`` pre-order, calling ``visit`` once per node.

    Returns the first aborting error, or None once every node that was not
    skipped has been visited. Skipping the root category ends the walk
    without error.
    """
    descend, err = _dispatch(root, visit)
    if err is not None or not descend:
        return err
    return _walk_items(root, visit)


def count_nodes(root: FeedTreeItem) -> tuple[int, int]:
    """Return (categories, feeds) in the tree, the root included."""
    counts = {NodeKind.CATEGORY: 0, NodeKind.FEED: 0}

    def _tally(item):
        counts[item.kind] += 1

    walk_feed_tree(root, _tally)
    return counts[NodeKind.CATEGORY], counts[NodeKind.FEED]
