from __future__ import annotations
from enum import Enum
from typing import Callable, Optional, TypeVar

from .node_model import NodeModel

T_Node = TypeVar("T_Node", bound=NodeModel)


class Direction(Enum):
    FORWARD = "forward"
    BACKWARD = "backward"


def search(
    root: T_Node,
    predicate: Callable[[T_Node, int], bool],
    direction: Direction = Direction.FORWARD,
    depth_limit: Optional[int] = None,
) -> Optional[T_Node]:
    """Pre-order depth-first search for the first node matching a predicate

    Args:
        root: The node to start at. The root itself may match
        predicate: Called as predicate(node, depth). Returning True stops the
            search. Anything it raises propagates to the caller untouched
        direction: FORWARD visits children left-to-right, BACKWARD right-to-left
        depth_limit: Don't descend below this depth. None means unbounded,
            and 0 only ever evaluates the root

    Returns:
        The first matching node in traversal order, or None if nothing matched
    """
    if depth_limit is not None and depth_limit < 0:
        raise ValueError(f"depth_limit must be >= 0, got {depth_limit}")

    # The stack holds (node, depth). Children are pushed so the one that
    # should be visited first ends up on top
    stack: list[tuple[T_Node, int]] = [(root, 0)]
    while stack:
        node, depth = stack.pop()
        if predicate(node, depth):
            return node

        if depth_limit is not None and depth >= depth_limit:
            continue

        children = node.children
        if not children:
            continue

        nxt = depth + 1
        if direction is Direction.FORWARD:
            stack.extend((child, nxt) for child in reversed(children))
        else:
            stack.extend((child, nxt) for child in children)

    return None
