from __future__ import annotations
from typing import Any, Callable, Sequence, TYPE_CHECKING

if TYPE_CHECKING:
    from .node_model import NodeModel, Span
    from .tree_renderer import DisplayLine

Unsubscribe = Callable[[], None]


class DebugHost:
    """The editor-side services a tree debugging session relies on

    Source and view handles are opaque to the session. They are only ever
    passed back into the host that produced them.
    """

    def get_tree(self, source: Any) -> NodeModel:
        """Return the root of the current parse tree for the source"""
        raise NotImplementedError("A DebugHost must implement get_tree")

    def on_commit(self, source: Any, callback: Callable[[], None]) -> Unsubscribe:
        """Call `callback` whenever the source reaches a commit point (eg. a save)

        Returns:
            A callable that removes the subscription
        """
        raise NotImplementedError("A DebugHost must implement on_commit")

    def on_destroy(self, source: Any, callback: Callable[[], None]) -> Unsubscribe:
        """Call `callback` once when the source goes away

        Returns:
            A callable that removes the subscription
        """
        raise NotImplementedError("A DebugHost must implement on_destroy")

    def create_view_surface(self, title: str) -> Any:
        raise NotImplementedError("A DebugHost must implement create_view_surface")

    def set_view_content(self, view: Any, lines: Sequence[DisplayLine]) -> None:
        raise NotImplementedError("A DebugHost must implement set_view_content")

    def destroy_view_surface(self, view: Any) -> None:
        raise NotImplementedError("A DebugHost must implement destroy_view_surface")

    def focus_and_select(self, source: Any, span: Span, highlight: bool) -> None:
        """Bring the source into view and select the span

        Args:
            source: The source handle
            span: The (start, end) offsets to select
            highlight: Also apply a persistent highlight to the span
        """
        raise NotImplementedError("A DebugHost must implement focus_and_select")

    def title_for(self, source: Any) -> str:
        return f"Syntax Tree: {source!r}"

    def is_source_valid(self, source: Any) -> bool:
        return True
