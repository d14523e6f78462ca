from __future__ import annotations
from typing import Optional, Sequence

from Qt import QtCore
from Qt.QtCore import Signal
from Qt.QtGui import QFont, QMouseEvent, QTextCharFormat, QTextCursor, QTextFormat
from Qt.QtWidgets import QPlainTextEdit, QTextEdit

from .tree_renderer import DisplayLine, format_lines


class TreeDebugView(QPlainTextEdit):
    """Read-only view surface that shows a rendered parse tree

    Emits `lineActivated` with the display line index when a navigable
    line is clicked.
    """

    lineActivated = Signal(int)

    def __init__(self, title: str = "", parent=None):
        super().__init__(parent=parent)
        self.setReadOnly(True)
        self.setLineWrapMode(QPlainTextEdit.LineWrapMode.NoWrap)
        self.setWindowTitle(title)
        font = QFont("Monospace")
        font.setStyleHint(QFont.StyleHint.TypeWriter)
        self.setFont(font)
        self.lines: list[DisplayLine] = []

    def set_lines(self, lines: Sequence[DisplayLine]):
        """Replace the whole contents of the view"""
        self.lines = list(lines)
        self.setPlainText(format_lines(self.lines))

        navigable = any(line.is_navigable for line in self.lines)
        shape = (
            QtCore.Qt.CursorShape.PointingHandCursor
            if navigable
            else QtCore.Qt.CursorShape.IBeamCursor
        )
        self.viewport().setCursor(shape)

    def line_at(self, pos: QtCore.QPoint) -> Optional[int]:
        block = self.cursorForPosition(pos).block()
        if not block.isValid():
            return None
        idx = block.blockNumber()
        if idx >= len(self.lines):
            return None
        return idx

    def show_line(self, index: int):
        """Move the cursor to a display line and mark it"""
        block = self.document().findBlockByNumber(index)
        if not block.isValid():
            return
        cursor = QTextCursor(block)
        self.setTextCursor(cursor)
        self.centerCursor()

        fmt = QTextCharFormat()
        fmt.setBackground(self.palette().highlight().color().lighter(160))
        fmt.setProperty(QTextFormat.Property.FullWidthSelection, True)

        selection = QTextEdit.ExtraSelection()
        selection.cursor = QTextCursor(block)
        selection.format = fmt
        self.setExtraSelections([selection])

    def mouseReleaseEvent(self, e: QMouseEvent):
        super().mouseReleaseEvent(e)
        if e.button() != QtCore.Qt.MouseButton.LeftButton:
            return
        if self.textCursor().hasSelection():
            return
        idx = self.line_at(e.pos())
        if idx is not None and self.lines[idx].is_navigable:
            self.lineActivated.emit(idx)
