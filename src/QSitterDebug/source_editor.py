from __future__ import annotations
import logging

from Qt import QtCore
from Qt.QtWidgets import QPlainTextEdit
from Qt.QtGui import QKeyEvent, QKeySequence

from tree_sitter import Language

from .line_tracker import TrackedDocument
from .tree_manager import TreeManager
from .selection_manager import SelectionManager
from .constants import JUMP_SELECTION

logger = logging.getLogger(__name__)


class SourceEditor(QPlainTextEdit):
    """The source side of a tree debugging session

    Pressing the save shortcut (or calling `commit`) reparses the document
    and emits `TrackedDocument.committed`, which is what tree views refresh on.
    """

    def __init__(self, language: Language, parent=None):
        super().__init__(parent=parent)
        self._doc: TrackedDocument = TrackedDocument()
        self.setDocument(self._doc)

        self.tree_manager: TreeManager = TreeManager(self, language)
        self.selection_manager: SelectionManager = SelectionManager(self)

    def document(self) -> TrackedDocument:
        doc = super().document()
        if not isinstance(doc, TrackedDocument):
            raise ValueError("The source editor only works with a TrackedDocument")
        return doc

    def setLanguage(self, lang: Language):
        self.tree_manager = TreeManager(self, lang)
        self.commit()

    def commit(self):
        """Reparse the document and announce the new tree"""
        self.tree_manager.fullUpdate()
        self._doc.commit()
        logger.debug("Committed %d lines", self._doc.blockCount())

    def keyPressEvent(self, e: QKeyEvent):
        if e.matches(QKeySequence.StandardKey.Save):
            self.commit()
            e.accept()
            return
        super().keyPressEvent(e)

    def mousePressEvent(self, e):
        # Any click dismisses a highlight left behind by a tree jump
        if e.button() == QtCore.Qt.MouseButton.LeftButton:
            self.selection_manager.clear_selections(JUMP_SELECTION)
        super().mousePressEvent(e)
