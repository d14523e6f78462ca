from .errors import (
    LifecycleError,
    NavigationError,
    NavigationFailure,
    SourceUnavailableError,
    TreeDebugError,
)
from .node_model import NodeModel, NodeSnapshot, node_span
from .tree_search import Direction, search
from .tree_renderer import DisplayLine, format_line, format_lines, render
from .host import DebugHost
from .view_session import LifecycleState, SessionOptions, ViewSession
from .navigation import NavigationBridge
from .debugger import TreeDebugger

__all__ = [
    "DebugHost",
    "Direction",
    "DisplayLine",
    "LifecycleError",
    "LifecycleState",
    "NavigationBridge",
    "NavigationError",
    "NavigationFailure",
    "NodeModel",
    "NodeSnapshot",
    "SessionOptions",
    "SourceUnavailableError",
    "TreeDebugError",
    "TreeDebugger",
    "ViewSession",
    "format_line",
    "format_lines",
    "node_span",
    "render",
    "search",
]
