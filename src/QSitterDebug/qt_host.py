from __future__ import annotations
import logging
from functools import partial
from typing import Callable, Collection, Optional, Sequence, TYPE_CHECKING

from Qt import QtCompat
from Qt.QtGui import QTextCursor

from .constants import JUMP_SELECTION
from .debugger import TreeDebugger
from .errors import TreeDebugError
from .host import DebugHost, Unsubscribe
from .tree_view import TreeDebugView

if TYPE_CHECKING:
    from tree_sitter import Node
    from .editor_options import EditorOptions
    from .node_model import Span
    from .source_editor import SourceEditor
    from .tree_renderer import DisplayLine
    from .view_session import ViewSession

logger = logging.getLogger(__name__)


class QtDebugHost(DebugHost):
    """DebugHost over SourceEditor widgets, showing trees in TreeDebugView windows

    Spans coming from the tree are UTF-16LE byte offsets, and get converted to
    Qt character positions by the editor's document.
    """

    def __init__(self, view_parent=None):
        self.view_parent = view_parent

    def get_tree(self, source: SourceEditor) -> Node:
        root = source.tree_manager.root_node
        if root is None:
            raise RuntimeError(f"{source!r} has no parse tree")
        return root

    def on_commit(self, source: SourceEditor, callback: Callable[[], None]) -> Unsubscribe:
        doc = source.document()
        doc.committed.connect(callback)

        def unsubscribe():
            if QtCompat.isValid(doc):
                doc.committed.disconnect(callback)

        return unsubscribe

    def on_destroy(self, source: SourceEditor, callback: Callable[[], None]) -> Unsubscribe:
        fired = []

        # `destroyed` passes the dying object along, which the callback doesn't take
        def slot(*_args):
            fired.append(True)
            callback()

        source.destroyed.connect(slot)

        def unsubscribe():
            # A source that's mid-destruction drops its connections by itself
            if not fired and QtCompat.isValid(source):
                source.destroyed.disconnect(slot)

        return unsubscribe

    def create_view_surface(self, title: str) -> TreeDebugView:
        view = TreeDebugView(title, parent=self.view_parent)
        view.show()
        return view

    def set_view_content(self, view: TreeDebugView, lines: Sequence[DisplayLine]):
        view.set_lines(lines)

    def destroy_view_surface(self, view: TreeDebugView):
        if QtCompat.isValid(view):
            view.close()
            view.deleteLater()

    def focus_and_select(self, source: SourceEditor, span: Span, highlight: bool):
        doc = source.document()
        start = doc.byte_to_char(span[0])
        end = doc.byte_to_char(span[1])

        cursor = QTextCursor(doc)
        cursor.setPosition(start)
        cursor.setPosition(end, QTextCursor.MoveMode.KeepAnchor)
        source.setTextCursor(cursor)
        source.ensureCursorVisible()
        source.activateWindow()
        source.setFocus()

        if highlight:
            source.selection_manager.set_selections(
                JUMP_SELECTION, [source.selection_manager.make_selection(start, end)]
            )
        else:
            source.selection_manager.clear_selections(JUMP_SELECTION)

    def title_for(self, source: SourceEditor) -> str:
        name = source.objectName() or source.documentTitle() or "untitled"
        return f"Syntax Tree: {name}"

    def is_source_valid(self, source: SourceEditor) -> bool:
        return QtCompat.isValid(source)


class QtTreeDebugger(TreeDebugger):
    """A TreeDebugger that hooks its sessions up to the Qt widgets

    Clicking a line in a tree view jumps to the source. Changing `options`
    re-opens every session that follows them with the new values. Sessions
    enabled with their own options are re-opened with those.
    """

    def __init__(self, host: QtDebugHost, options: EditorOptions):
        super().__init__(host)
        self.options: EditorOptions = options
        self.options.optionsUpdated.connect(self.updateOptions)
        # ids of the sources whose session follows the shared options
        self._follows_shared: set[int] = set()

    def enable_debugging(self, source, options=None) -> ViewSession:
        shared = options is None or options is self.options
        session = super().enable_debugging(source, self.options if shared else options)
        if shared:
            self._follows_shared.add(id(source))
        session.view.lineActivated.connect(partial(self._on_line_activated, session))
        return session

    def _forget(self, session: ViewSession):
        super()._forget(session)
        if self.session_for(session.source) is None:
            self._follows_shared.discard(id(session.source))

    def toggle(self, source: SourceEditor) -> Optional[ViewSession]:
        """Turn the tree view for an editor on or off using the shared options"""
        return self.toggle_debugging(source, self.options)

    def _on_line_activated(self, session: ViewSession, index: int):
        try:
            self.navigate(session, index)
        except TreeDebugError as err:
            logger.warning("Can't jump to the source: %s", err)

    def reveal_cursor(self, session: ViewSession) -> Optional[int]:
        """Show the tree line of the node under the source editor's cursor"""
        if not session.is_active:
            return None
        source: SourceEditor = session.source
        offset = source.document().char_to_byte(source.textCursor().position())
        idx = self.reveal(session, offset)
        if idx is not None:
            session.view.show_line(idx)
        return idx

    def updateOptions(self, keys: Collection[str]):
        for session in self.active_sessions():
            source = session.source
            shared = id(source) in self._follows_shared
            self.disable_debugging(session)
            try:
                self.enable_debugging(source, None if shared else session.options)
            except (TreeDebugError, RuntimeError) as err:
                logger.warning("Can't reopen the tree view for %r: %s", source, err)
        logger.debug("Reopened tree views for changed options %s", list(keys))
