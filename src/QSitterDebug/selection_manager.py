from __future__ import annotations
from typing import TYPE_CHECKING
from Qt.QtGui import QColor, QTextCharFormat, QTextCursor
from Qt.QtWidgets import QTextEdit

if TYPE_CHECKING:
    from Qt.QtWidgets import QPlainTextEdit


class SelectionManager:
    """Manages extra selections contributed by different sources

    Each source owns its own list, so one can be replaced or cleared without
    touching the others.
    """

    def __init__(self, editor: QPlainTextEdit):
        self.editor = editor
        self._selections: dict[str, list[QTextEdit.ExtraSelection]] = {}
        self.highlight_color = QColor(255, 200, 60, 90)

    def make_selection(self, start: int, end: int) -> QTextEdit.ExtraSelection:
        """Build a highlight over the character range [start, end)"""
        cursor = QTextCursor(self.editor.document())
        cursor.setPosition(start)
        cursor.setPosition(end, QTextCursor.MoveMode.KeepAnchor)

        fmt = QTextCharFormat()
        fmt.setBackground(self.highlight_color)

        selection = QTextEdit.ExtraSelection()
        selection.cursor = cursor
        selection.format = fmt
        return selection

    def set_selections(self, source: str, selections: list[QTextEdit.ExtraSelection]):
        self._selections[source] = selections
        self._update_editor()

    def clear_selections(self, source: str):
        if source in self._selections:
            del self._selections[source]
            self._update_editor()

    def has_selections(self, source: str) -> bool:
        return bool(self._selections.get(source))

    def _update_editor(self):
        """Merge all selections and update the editor"""
        merged = []
        # Later sources paint on top
        for source in sorted(self._selections.keys()):
            merged.extend(self._selections[source])

        self.editor.setExtraSelections(merged)
