from __future__ import annotations
import logging
from enum import Enum
from typing import Any, Callable, Mapping, NamedTuple, Optional, TYPE_CHECKING

from .errors import LifecycleError
from .tree_renderer import DisplayLine, line_for_offset, render

if TYPE_CHECKING:
    from .host import DebugHost, Unsubscribe

logger = logging.getLogger(__name__)

DEFAULT_OPTIONS: dict[str, bool] = {
    "enable_navigation": False,
    "highlight_on_navigate": False,
}


class LifecycleState(Enum):
    INACTIVE = "inactive"
    ACTIVE = "active"


class SessionOptions(NamedTuple):
    enable_navigation: bool = False
    highlight_on_navigate: bool = False

    @classmethod
    def from_mapping(cls, opts: Optional[Mapping[str, Any]] = None) -> SessionOptions:
        """Snapshot the recognized options out of a dict-like object

        Anything that has `keys()` and `get()` works, including EditorOptions.
        Unrecognized keys are rejected.
        """
        if opts is None:
            return cls()
        if isinstance(opts, SessionOptions):
            return opts
        unknown = set(opts.keys()) - set(DEFAULT_OPTIONS)
        if unknown:
            raise ValueError(
                f"Unrecognized tree debug options: {', '.join(sorted(unknown))}"
            )
        enable_navigation = bool(
            opts.get("enable_navigation", DEFAULT_OPTIONS["enable_navigation"])
        )
        highlight = bool(
            opts.get("highlight_on_navigate", DEFAULT_OPTIONS["highlight_on_navigate"])
        )
        # Highlighting a jump target means nothing without jumps
        return cls(enable_navigation, highlight and enable_navigation)


class ViewSession:
    """Keeps one rendered tree view in sync with one source

    The view is a disposable projection of the source's parse tree. It is
    rebuilt from scratch on enable and at every commit of the source, and
    thrown away on disable or when the source is destroyed.

    Sessions are created and torn down by a TreeDebugger. The view handle is
    only valid while the session is ACTIVE.

    `on_teardown` is called with the session every time it goes from ACTIVE
    back to INACTIVE, whether it was disabled or its source was destroyed.
    """

    def __init__(
        self,
        host: DebugHost,
        source: Any,
        options: Optional[Mapping[str, Any]] = None,
        on_teardown: Optional[Callable[[ViewSession], None]] = None,
    ):
        self.host: DebugHost = host
        self.source: Any = source
        self.options: SessionOptions = SessionOptions.from_mapping(options)
        self.on_teardown = on_teardown
        self.state: LifecycleState = LifecycleState.INACTIVE
        self.view: Any = None
        self.lines: list[DisplayLine] = []
        self.source_destroyed: bool = False
        self._unsubscribes: list[Unsubscribe] = []

    @property
    def is_active(self) -> bool:
        return self.state is LifecycleState.ACTIVE

    def _require(self, state: LifecycleState, action: str):
        if self.state is not state:
            raise LifecycleError(
                f"Cannot {action} a tree view session that is {self.state.value}"
            )

    def _render(self) -> list[DisplayLine]:
        tree = self.host.get_tree(self.source)
        lines = render(tree, self.options.enable_navigation)
        logger.debug("Rendered %d tree lines for %r", len(lines), self.source)
        return lines

    def enable(self):
        """Create the view, render into it and start following the source"""
        self._require(LifecycleState.INACTIVE, "enable")
        if self.source_destroyed:
            raise LifecycleError("Cannot enable a tree view for a destroyed source")

        view = self.host.create_view_surface(self.host.title_for(self.source))
        unsubscribes: list[Unsubscribe] = []
        try:
            lines = self._render()
            self.host.set_view_content(view, lines)
            unsubscribes.append(
                self.host.on_commit(self.source, self.on_source_changed)
            )
            unsubscribes.append(
                self.host.on_destroy(self.source, self.on_source_destroyed)
            )
        except Exception:
            for unsub in reversed(unsubscribes):
                unsub()
            self.host.destroy_view_surface(view)
            raise

        self.view = view
        self.lines = lines
        self._unsubscribes = unsubscribes
        self.state = LifecycleState.ACTIVE
        logger.debug("Tree view session enabled for %r", self.source)

    def on_source_changed(self):
        """Re-render the whole tree after the source was committed"""
        self._require(LifecycleState.ACTIVE, "refresh")
        lines = self._render()
        self.host.set_view_content(self.view, lines)
        self.lines = lines

    def on_source_destroyed(self):
        self._require(LifecycleState.ACTIVE, "tear down")
        self.source_destroyed = True
        self._teardown()
        logger.debug("Source %r destroyed, tree view session closed", self.source)

    def disable(self):
        self._require(LifecycleState.ACTIVE, "disable")
        self._teardown()
        logger.debug("Tree view session disabled for %r", self.source)

    def _teardown(self):
        unsubscribes, self._unsubscribes = self._unsubscribes, []
        try:
            for unsub in unsubscribes:
                unsub()
        finally:
            # The view goes away even if the host failed to unsubscribe
            view, self.view = self.view, None
            self.lines = []
            self.state = LifecycleState.INACTIVE
            try:
                self.host.destroy_view_surface(view)
            finally:
                if self.on_teardown is not None:
                    self.on_teardown(self)

    def line_for_offset(self, offset: int) -> Optional[int]:
        """Get the index of the deepest rendered node containing a source offset"""
        if not self.is_active:
            return None
        return line_for_offset(self.lines, offset)
