from Qt.QtWidgets import QPlainTextDocumentLayout
from Qt.QtCore import Signal
from Qt.QtGui import QTextDocument


class TrackedDocument(QTextDocument):
    """A QTextDocument that knows when its contents were committed
    Connect to the `committed` signal to hear about saves

    Positions handed to and from tree-sitter are UTF-16LE byte offsets, which are
    always twice Qt's character positions.
    """

    committed = Signal()

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.lay = QPlainTextDocumentLayout(self)
        self.setDocumentLayout(self.lay)

    def commit(self):
        """Mark the current contents as a stable checkpoint"""
        self.setModified(False)
        self.committed.emit()

    def byte_to_char(self, byteidx: int) -> int:
        """Convert a UTF-16LE byte offset from tree-sitter into a Qt character index

        Offsets past the end of the document are clamped to the last position
        """
        return max(0, min(byteidx // 2, self.characterCount() - 1))

    def char_to_byte(self, charidx: int) -> int:
        return charidx * 2
