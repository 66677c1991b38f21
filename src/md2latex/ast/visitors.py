#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/md2latex/ast/visitors.py
"""Depth-first traversal of the node tree.

The walk visits every node once on the way down (``entering=True``) and,
for container nodes, once more on the way back up (``entering=False``).
The visitor steers the traversal by returning a :class:`WalkStatus`:

- ``GO_TO_NEXT`` continues normally
- ``SKIP_CHILDREN`` (on enter) skips the node's children *and* its leaving visit
- ``TERMINATE`` stops the whole walk immediately

"""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING, Callable, Union

if TYPE_CHECKING:
    from md2latex.ast.nodes import Node


class WalkStatus(Enum):
    """Traversal signal returned by a visitor for each node and direction."""

    GO_TO_NEXT = "go_to_next"
    SKIP_CHILDREN = "skip_children"
    TERMINATE = "terminate"


class NodeVisitor:
    """Base class for walk visitors.

    Subclasses override :meth:`visit`. Plain callables with the same
    signature are accepted by :func:`walk` as well.
    """

    def visit(self, node: Node, entering: bool) -> WalkStatus:
        """Handle one node in one direction."""
        return WalkStatus.GO_TO_NEXT


VisitorLike = Union[NodeVisitor, Callable[["Node", bool], WalkStatus]]


def walk(node: Node, visitor: VisitorLike) -> WalkStatus:
    """Walk the subtree rooted at ``node``.

    Parameters
    ----------
    node : Node
        Root of the subtree
    visitor : NodeVisitor or callable
        Receives ``(node, entering)`` and returns a :class:`WalkStatus`

    Returns
    -------
    WalkStatus
        ``TERMINATE`` if the visitor stopped the walk, ``GO_TO_NEXT`` otherwise

    """
    visit = visitor.visit if isinstance(visitor, NodeVisitor) else visitor

    status = visit(node, True)
    if status is WalkStatus.TERMINATE:
        return status
    if status is WalkStatus.SKIP_CHILDREN:
        return WalkStatus.GO_TO_NEXT

    for child in node.children:
        if walk(child, visit) is WalkStatus.TERMINATE:
            return WalkStatus.TERMINATE

    if node.is_container:
        if visit(node, False) is WalkStatus.TERMINATE:
            return WalkStatus.TERMINATE
    return WalkStatus.GO_TO_NEXT


__all__ = ["WalkStatus", "NodeVisitor", "VisitorLike", "walk"]
