from __future__ import annotations
from typing import NamedTuple, Optional, Sequence

from .node_model import NodeModel, Span, node_span
from .tree_search import Direction, search

INDENT = "  "


class DisplayLine(NamedTuple):
    """One rendered row of the tree view"""

    indent_level: int
    label: str
    navigable_span: Optional[Span] = None

    @property
    def is_navigable(self) -> bool:
        return self.navigable_span is not None


def render(root: NodeModel, navigation_enabled: bool = False) -> list[DisplayLine]:
    """Flatten a parse tree into display lines in pre-order

    Every node becomes exactly one line. The indent level is the node depth,
    so parent/child structure can be read back from the indents alone.

    Args:
        root: The root node of the tree to render
        navigation_enabled: Attach each node's span to its line so the line
            can be used to jump back to the source

    Returns:
        The display lines, parents immediately followed by their subtrees
    """
    lines: list[DisplayLine] = []

    def collect(node: NodeModel, depth: int) -> bool:
        span = node_span(node) if navigation_enabled else None
        lines.append(DisplayLine(depth, node.type, span))
        return False

    search(root, collect, Direction.FORWARD)
    return lines


def format_line(line: DisplayLine) -> str:
    return f"{INDENT * line.indent_level}{line.label}:"


def format_lines(lines: Sequence[DisplayLine]) -> str:
    return "\n".join(format_line(line) for line in lines)


def line_for_offset(lines: Sequence[DisplayLine], offset: int) -> Optional[int]:
    """Find the deepest navigable line whose span contains the offset

    Zero-width spans only match an offset exactly at their start.
    Lines without a span are skipped, so with navigation disabled this
    always returns None.

    Returns:
        The index of the matching line, or None
    """
    best: Optional[int] = None
    best_depth = -1
    for idx, line in enumerate(lines):
        if line.navigable_span is None:
            continue
        start, end = line.navigable_span
        if start <= offset < end or start == end == offset:
            # Strictly deeper only, so the first line wins a tie
            if line.indent_level > best_depth:
                best = idx
                best_depth = line.indent_level
    return best
