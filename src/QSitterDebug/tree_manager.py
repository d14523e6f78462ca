from __future__ import annotations
import logging
from tree_sitter import Language, Parser, Tree, Point, Node
from typing import Optional, TYPE_CHECKING
from .constants import ENC

if TYPE_CHECKING:
    from Qt.QtWidgets import QPlainTextEdit
    from Qt.QtGui import QTextBlock

logger = logging.getLogger(__name__)


class TreeManager:
    """Owns the tree-sitter parse tree of a source editor

    The tree is rebuilt from the editor's document whenever `fullUpdate` is
    called, which the editor does at every commit. Between commits the tree
    describes the last committed text.
    """

    def __init__(
        self,
        editor: QPlainTextEdit,
        language: Language,
    ):
        """Initialize the tree manager

        Args:
            editor: The editor whose document gets parsed
            language: The tree-sitter Language to use for parsing
        """
        self.editor = editor
        self.parser = Parser(language)
        self.tree: Optional[Tree] = None
        self._ts_prediction: dict[int, QTextBlock] = {}

    def treesitter_source_callback(self, _byte_offset: int, ts_point: Point) -> bytes:
        """Provide UTF-16LE source bytes to the tree-sitter parser one line at a time

        Args:
            byte_offset: The byte offset in UTF-16LE encoding where data is requested
            ts_point: The (row, column) where data is requested. The column is in bytes

        Returns:
            UTF-16LE encoded bytes from the requested position to the end of the line
        """
        # A new parse always starts at row 0, so drop any stale block references
        if ts_point.row == 0:
            self._ts_prediction = {}

        curblock: Optional[QTextBlock] = self._ts_prediction.get(ts_point.row)
        if curblock is None:
            curblock = self.editor.document().findBlockByNumber(ts_point.row)

        if not curblock.isValid():
            self._ts_prediction = {}
            return b""

        self._ts_prediction[ts_point.row] = curblock
        nxt = curblock.next()
        self._ts_prediction[ts_point.row + 1] = nxt
        suffix = "\n" if nxt.isValid() else ""
        linetext = curblock.text() + suffix
        return linetext.encode(ENC)[ts_point.column :]

    def fullUpdate(self) -> Tree:
        self.tree = self.parser.parse(self.treesitter_source_callback, encoding="utf16")
        logger.debug("Reparsed %s", self.editor.objectName() or "source")
        return self.tree

    @property
    def root_node(self) -> Optional[Node]:
        """Get the root node of the parse tree, parsing first if there's no tree yet"""
        if self.tree is None:
            self.fullUpdate()
        return self.tree.root_node if self.tree else None
