import pytest
from QSitterDebug.host import DebugHost
from QSitterDebug.node_model import NodeSnapshot as N


class FakeSource:
    """A source side with a swappable tree"""

    def __init__(self, name: str, tree):
        self.name = name
        self.tree = tree
        self.alive = True

    def __repr__(self):
        return f"FakeSource({self.name!r})"


class FakeHost(DebugHost):
    """Records everything a session asks of the host"""

    def __init__(self):
        self.commit_callbacks = {}
        self.destroy_callbacks = {}
        self.views = {}
        self.destroyed_views = []
        self.jumps = []
        self._next_view = 0

    def get_tree(self, source):
        return source.tree

    def _subscribe(self, table, source, callback):
        table.setdefault(id(source), []).append(callback)

        def unsubscribe():
            table[id(source)].remove(callback)

        return unsubscribe

    def on_commit(self, source, callback):
        return self._subscribe(self.commit_callbacks, source, callback)

    def on_destroy(self, source, callback):
        return self._subscribe(self.destroy_callbacks, source, callback)

    def create_view_surface(self, title):
        self._next_view += 1
        view = f"view-{self._next_view}"
        self.views[view] = {"title": title, "lines": None}
        return view

    def set_view_content(self, view, lines):
        self.views[view]["lines"] = list(lines)

    def destroy_view_surface(self, view):
        del self.views[view]
        self.destroyed_views.append(view)

    def focus_and_select(self, source, span, highlight):
        self.jumps.append((source, span, highlight))

    def is_source_valid(self, source):
        return source.alive

    # Helpers that play the part of the editor
    def commit(self, source):
        for callback in list(self.commit_callbacks.get(id(source), [])):
            callback()

    def destroy(self, source):
        source.alive = False
        for callback in list(self.destroy_callbacks.get(id(source), [])):
            callback()

    def subscriber_count(self, source) -> int:
        return len(self.commit_callbacks.get(id(source), [])) + len(
            self.destroy_callbacks.get(id(source), [])
        )


def binary_tree():
    """Program[BinaryExpr[Num(0,1), Num(4,5)]]"""
    return N("Program", 0, 5, [N("BinaryExpr", 0, 5, [N("Num", 0, 1), N("Num", 4, 5)])])


@pytest.fixture
def host():
    return FakeHost()


@pytest.fixture
def source():
    return FakeSource("sample", binary_tree())
