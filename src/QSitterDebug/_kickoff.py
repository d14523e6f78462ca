import sys
import logging

# fmt: off
from QSitterDebug.source_editor import SourceEditor
from QSitterDebug.editor_options import EditorOptions
from QSitterDebug.qt_host import QtDebugHost, QtTreeDebugger
import tree_sitter_python as tspython
from tree_sitter import Language
from Qt.QtWidgets import QMainWindow, QApplication, QShortcut
from Qt.QtGui import QKeySequence
# fmt: on

logging.basicConfig(level=logging.DEBUG, format="%(name)s - %(levelname)s - %(message)s")

SAMPLE = """\
def foo(a, b):
    return a + b


print(foo(1, 2))
"""

app = QApplication(sys.argv)
win = QMainWindow()

options = EditorOptions(
    {
        "enable_navigation": True,
        "highlight_on_navigate": True,
    }
)

edit = SourceEditor(Language(tspython.language()), parent=win)
edit.setObjectName("sample.py")
edit.setPlainText(SAMPLE)
edit.commit()

debugger = QtTreeDebugger(QtDebugHost(), options)

# Ctrl+Shift+T toggles the tree view, Ctrl+Shift+R shows the node under the cursor
QShortcut(QKeySequence("Ctrl+Shift+T"), edit, activated=lambda: debugger.toggle(edit))


def reveal():
    session = debugger.session_for(edit)
    if session is not None:
        debugger.reveal_cursor(session)


QShortcut(QKeySequence("Ctrl+Shift+R"), edit, activated=reveal)

win.setCentralWidget(edit)
win.show()
debugger.toggle(edit)

app.exec_()
