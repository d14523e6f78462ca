from __future__ import annotations
from typing import Optional, Protocol, Sequence, TYPE_CHECKING

if TYPE_CHECKING:
    from tree_sitter import Node


Span = tuple[int, int]


class NodeModel(Protocol):
    """The read-only view of a parse tree node that the tree debugger consumes

    A `tree_sitter.Node` satisfies this directly
    """

    @property
    def type(self) -> str: ...

    @property
    def start_byte(self) -> int: ...

    @property
    def end_byte(self) -> int: ...

    @property
    def children(self) -> Sequence[NodeModel]: ...


def node_span(node: NodeModel) -> Span:
    return (node.start_byte, node.end_byte)


class NodeSnapshot:
    """An immutable copy of a parse tree node and all of its descendants

    Use this when a tree has to outlive the parser that produced it,
    or to build trees by hand.
    """

    __slots__ = ("_type", "_start_byte", "_end_byte", "_children")

    def __init__(
        self,
        type: str,
        start_byte: int = 0,
        end_byte: int = 0,
        children: Optional[Sequence[NodeSnapshot]] = None,
    ):
        if end_byte < start_byte:
            raise ValueError(
                f"Node {type!r} ends ({end_byte}) before it starts ({start_byte})"
            )
        self._type: str = type
        self._start_byte: int = start_byte
        self._end_byte: int = end_byte
        self._children: tuple[NodeSnapshot, ...] = tuple(children or ())

    @property
    def type(self) -> str:
        return self._type

    @property
    def start_byte(self) -> int:
        return self._start_byte

    @property
    def end_byte(self) -> int:
        return self._end_byte

    @property
    def children(self) -> tuple[NodeSnapshot, ...]:
        return self._children

    @property
    def span(self) -> Span:
        return (self._start_byte, self._end_byte)

    def __eq__(self, other) -> bool:
        if not isinstance(other, NodeSnapshot):
            return NotImplemented
        return (
            self._type == other._type
            and self.span == other.span
            and self._children == other._children
        )

    def __hash__(self) -> int:
        return hash((self._type, self._start_byte, self._end_byte, self._children))

    def __repr__(self) -> str:
        return f"NodeSnapshot({self._type!r}, {self._start_byte}, {self._end_byte}, <{len(self._children)} children>)"

    @classmethod
    def from_ts_node(cls, node: Node) -> NodeSnapshot:
        """Copy a tree-sitter node and its whole subtree

        The copy is built bottom-up with an explicit stack so deep trees
        don't hit the recursion limit
        """
        # Each frame is (source node, its children, converted children so far)
        stack: list[tuple[Node, list[Node], list[NodeSnapshot]]] = [
            (node, list(node.children), [])
        ]
        result: Optional[NodeSnapshot] = None
        while stack:
            src, pending, done = stack[-1]
            if len(done) < len(pending):
                child = pending[len(done)]
                stack.append((child, list(child.children), []))
                continue

            stack.pop()
            snap = cls(src.type, src.start_byte, src.end_byte, done)
            if stack:
                stack[-1][2].append(snap)
            else:
                result = snap

        assert result is not None
        return result
